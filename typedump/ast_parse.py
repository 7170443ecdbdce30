"""Reflect Python source modules into type records.

Top-level classes become class records and ``Enum`` subclasses become enum
records. Annotations are translated to the same fully-qualified type names the
record dumps use, so Python sources and reflected assemblies can be dumped in a
single run.
"""

from __future__ import annotations

import ast
from typing import Dict, List, Optional, Set

from .model import (
	ConstructorRecord,
	EnumMemberRecord,
	FieldRecord,
	MethodRecord,
	ParameterRecord,
	TypeKind,
	TypeRecord,
)

UNTYPED = "System.Object"
ENUM_BACKING_TYPE = "System.Int32"

ENUM_BASES = {"Enum", "IntEnum", "Flag", "IntFlag"}
FLAG_BASES = {"Flag", "IntFlag"}

PYTHON_TYPES: Dict[str, str] = {
	"int": "System.Int64",
	"float": "System.Double",
	"bool": "System.Boolean",
	"str": "System.String",
	"bytes": "System.Byte[]",
	"bytearray": "System.Byte[]",
	"object": "System.Object",
	"Any": "System.Object",
	"typing.Any": "System.Object",
	"type": "System.Type",
	"Type": "System.Type",
	"Exception": "System.Exception",
	"BaseException": "System.Exception",
	"Callable": "System.Delegate",
}

CTYPES_TYPES: Dict[str, str] = {
	"c_bool": "System.Boolean",
	"c_byte": "System.SByte",
	"c_int8": "System.SByte",
	"c_ubyte": "System.Byte",
	"c_uint8": "System.Byte",
	"c_short": "System.Int16",
	"c_int16": "System.Int16",
	"c_ushort": "System.UInt16",
	"c_uint16": "System.UInt16",
	"c_int": "System.Int32",
	"c_int32": "System.Int32",
	"c_uint": "System.UInt32",
	"c_uint32": "System.UInt32",
	"c_longlong": "System.Int64",
	"c_int64": "System.Int64",
	"c_ulonglong": "System.UInt64",
	"c_uint64": "System.UInt64",
	"c_ssize_t": "System.IntPtr",
	"c_size_t": "System.UIntPtr",
	"c_void_p": "System.IntPtr",
	"c_float": "System.Single",
	"c_double": "System.Double",
	"c_char_p": "System.String",
	"c_wchar_p": "System.String",
}

SEQUENCE_GENERICS = {
	"List",
	"list",
	"Sequence",
	"MutableSequence",
	"Iterable",
	"Tuple",
	"tuple",
	"Set",
	"set",
	"FrozenSet",
	"frozenset",
}
PASSTHROUGH_GENERICS = {"Optional", "ClassVar", "Final", "Annotated"}


def _get_decorator_names(node: ast.AST) -> List[str]:
	decorators: List[str] = []
	for deco in getattr(node, "decorator_list", []) or []:
		if isinstance(deco, ast.Call):
			deco = deco.func
		name = _dotted_name(deco)
		decorators.append(name if name is not None else ast.unparse(deco))
	return decorators


def _dotted_name(node: ast.AST) -> Optional[str]:
	# Collect dotted attribute like module.name
	parts: List[str] = []
	cursor = node
	while isinstance(cursor, ast.Attribute):
		parts.append(cursor.attr)
		cursor = cursor.value
	if not isinstance(cursor, ast.Name):
		return None
	parts.append(cursor.id)
	return ".".join(reversed(parts))


def _last_segment(name: str) -> str:
	return name.rsplit(".", 1)[-1]


def _qualify(module_name: str, name: str) -> str:
	return f"{module_name}.{name}" if module_name else name


def _is_none(node: ast.AST) -> bool:
	return isinstance(node, ast.Constant) and node.value is None


def _union_operands(node: ast.AST) -> List[ast.AST]:
	if isinstance(node, ast.BinOp) and isinstance(node.op, ast.BitOr):
		return _union_operands(node.left) + _union_operands(node.right)
	return [node]


class TypeNamer:
	"""Translates annotation expressions into type names."""

	def __init__(self, module_name: str, local_classes: Set[str]):
		self.module_name = module_name
		self.local_classes = local_classes

	def __call__(self, node: Optional[ast.AST]) -> str:
		if node is None:
			return UNTYPED
		if _is_none(node):
			return "System.Void"
		if isinstance(node, ast.Constant) and isinstance(node.value, str):
			try:
				parsed = ast.parse(node.value, mode="eval")
			except SyntaxError:
				return node.value
			return self(parsed.body)
		if isinstance(node, (ast.Name, ast.Attribute)):
			name = _dotted_name(node)
			if name is None:
				return ast.unparse(node)
			return self._named(name)
		if isinstance(node, ast.Subscript):
			return self._generic(node)
		if isinstance(node, ast.BinOp) and isinstance(node.op, ast.BitOr):
			return self._union(_union_operands(node))
		if isinstance(node, ast.Call):
			func = _dotted_name(node.func)
			if func is not None and _last_segment(func) == "POINTER" and len(node.args) == 1:
				return self(node.args[0]) + "*"
			return UNTYPED
		return ast.unparse(node)

	def _named(self, name: str) -> str:
		if name in PYTHON_TYPES:
			return PYTHON_TYPES[name]
		last = _last_segment(name)
		if last in CTYPES_TYPES and (name == last or name.startswith("ctypes.")):
			return CTYPES_TYPES[last]
		if name in self.local_classes:
			return _qualify(self.module_name, name)
		return name

	def _union(self, operands: List[ast.AST]) -> str:
		remaining = [o for o in operands if not _is_none(o)]
		if len(remaining) == 1:
			return self(remaining[0])
		return UNTYPED

	def _generic(self, node: ast.Subscript) -> str:
		base = _dotted_name(node.value)
		if base is None:
			return UNTYPED
		args = node.slice.elts if isinstance(node.slice, ast.Tuple) else [node.slice]
		last = _last_segment(base)
		if last in PASSTHROUGH_GENERICS:
			return self(args[0])
		if last == "Union":
			return self._union(args)
		if last in SEQUENCE_GENERICS:
			element_types = {
				self(a)
				for a in args
				if not (isinstance(a, ast.Constant) and a.value is Ellipsis)
			}
			element = element_types.pop() if len(element_types) == 1 else UNTYPED
			return element + "[]"
		return self._named(base)


def _int_value(node: ast.AST) -> Optional[int]:
	if isinstance(node, ast.Constant) and type(node.value) is int:
		return node.value
	if isinstance(node, ast.UnaryOp) and isinstance(node.op, ast.USub):
		inner = _int_value(node.operand)
		return -inner if inner is not None else None
	return None


def _is_auto(node: ast.AST) -> bool:
	if not isinstance(node, ast.Call):
		return False
	func = _dotted_name(node.func)
	return func is not None and _last_segment(func) == "auto"


def _enum_members(node: ast.ClassDef, is_flag: bool) -> List[EnumMemberRecord]:
	members: List[EnumMemberRecord] = []
	for stmt in node.body:
		if not isinstance(stmt, ast.Assign) or len(stmt.targets) != 1:
			continue
		target = stmt.targets[0]
		if not isinstance(target, ast.Name) or target.id.startswith("_"):
			continue
		if _is_auto(stmt.value):
			if not members:
				value = 1
			elif is_flag:
				value = 1 << max(m.value for m in members).bit_length()
			else:
				value = members[-1].value + 1
		else:
			value = _int_value(stmt.value)
			if value is None:
				continue
		members.append(EnumMemberRecord(name=target.id, value=value))
	return members


def _is_class_var(annotation: ast.AST) -> bool:
	base = annotation.value if isinstance(annotation, ast.Subscript) else annotation
	name = _dotted_name(base)
	return name is not None and _last_segment(name) == "ClassVar"


def _parameters(fn: ast.FunctionDef, namer: TypeNamer, skip_first: bool) -> List[ParameterRecord]:
	args = list(fn.args.posonlyargs) + list(fn.args.args)
	if skip_first and args:
		args = args[1:]
	args += list(fn.args.kwonlyargs)
	return [ParameterRecord(name=a.arg, type=namer(a.annotation)) for a in args]


def _is_property(decorators: List[str]) -> bool:
	return any(
		d == "property" or d.endswith((".setter", ".getter", ".deleter"))
		for d in decorators
	)


def _is_dataclass(node: ast.ClassDef) -> bool:
	return "dataclass" in {_last_segment(d) for d in _get_decorator_names(node)}


def _has_own_constructor(node: ast.ClassDef) -> bool:
	if _is_dataclass(node):
		return True
	return any(
		isinstance(sub, (ast.FunctionDef, ast.AsyncFunctionDef)) and sub.name == "__init__"
		for sub in node.body
	)


def _reflect_enum(node: ast.ClassDef, module_name: str) -> TypeRecord:
	bases = {_last_segment(n) for n in filter(None, (_dotted_name(b) for b in node.bases))}
	return TypeRecord(
		name=node.name,
		full_name=_qualify(module_name, node.name),
		namespace=module_name or None,
		kind=TypeKind.ENUM,
		members=_enum_members(node, is_flag=bool(bases & FLAG_BASES)),
		underlying_type=ENUM_BACKING_TYPE,
	)


def _reflect_class(node: ast.ClassDef, module_name: str, namer: TypeNamer) -> TypeRecord:
	full_name = _qualify(module_name, node.name)
	fields: List[FieldRecord] = []
	methods: List[MethodRecord] = []
	constructors: List[ConstructorRecord] = []

	for sub in node.body:
		if isinstance(sub, ast.AnnAssign) and isinstance(sub.target, ast.Name):
			if not _is_class_var(sub.annotation):
				fields.append(FieldRecord(name=sub.target.id, type=namer(sub.annotation)))
		elif isinstance(sub, (ast.FunctionDef, ast.AsyncFunctionDef)):
			decorators = _get_decorator_names(sub)
			if _is_property(decorators):
				continue
			is_static = "staticmethod" in decorators or "classmethod" in decorators
			parameters = _parameters(sub, namer, skip_first="staticmethod" not in decorators)
			if sub.name == "__init__":
				constructors.append(ConstructorRecord(parameters=parameters))
				continue
			methods.append(
				MethodRecord(
					name=sub.name,
					return_type=namer(sub.returns),
					parameters=parameters,
					is_static=is_static,
					is_assembly=sub.name.startswith("_"),
					declaring_type=full_name,
				)
			)

	if not constructors:
		params = [ParameterRecord(name=f.name, type=f.type) for f in fields] if _is_dataclass(node) else []
		constructors.append(ConstructorRecord(parameters=params))

	return TypeRecord(
		name=node.name,
		full_name=full_name,
		namespace=module_name or None,
		kind=TypeKind.CLASS,
		fields=fields,
		constructors=constructors,
		methods=methods,
	)


def _with_inherited(
	record: TypeRecord,
	bases: Dict[str, List[str]],
	by_name: Dict[str, TypeRecord],
	with_constructor: Set[str],
) -> TypeRecord:
	methods = list(record.methods)
	constructors = record.constructors
	inherits_constructor = record.name not in with_constructor
	seen_methods = {m.name for m in methods}
	visited = {record.name}
	pending = list(bases.get(record.name, []))
	while pending:
		base = pending.pop(0)
		if base in visited or base not in by_name:
			continue
		visited.add(base)
		if inherits_constructor and base in with_constructor:
			constructors = by_name[base].constructors
			inherits_constructor = False
		for method in by_name[base].methods:
			if method.declaring_type == by_name[base].full_name and method.name not in seen_methods:
				seen_methods.add(method.name)
				methods.append(method)
		pending.extend(bases.get(base, []))
	if len(methods) == len(record.methods) and constructors is record.constructors:
		return record
	return record.model_copy(update={"methods": methods, "constructors": constructors})


def reflect_python_module(module_name: str, path: str, text: str) -> List[TypeRecord]:
	tree = ast.parse(text, filename=path)
	class_nodes = [node for node in tree.body if isinstance(node, ast.ClassDef)]
	namer = TypeNamer(module_name, {node.name for node in class_nodes})

	records: List[TypeRecord] = []
	bases: Dict[str, List[str]] = {}
	with_constructor: Set[str] = set()
	for node in class_nodes:
		base_names = [_dotted_name(b) for b in node.bases]
		if any(_last_segment(b) in ENUM_BASES for b in base_names if b):
			records.append(_reflect_enum(node, module_name))
		else:
			bases[node.name] = [b for b in base_names if b]
			if _has_own_constructor(node):
				with_constructor.add(node.name)
			records.append(_reflect_class(node, module_name, namer))

	by_name = {r.name: r for r in records if r.kind == TypeKind.CLASS}
	return [
		_with_inherited(r, bases, by_name, with_constructor) if r.kind == TypeKind.CLASS else r
		for r in records
	]
