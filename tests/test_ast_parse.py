from textwrap import dedent

from typedump.ast_parse import reflect_python_module
from typedump.model import TypeKind


def _reflect(code):
	records = reflect_python_module("pkg.m", "m.py", dedent(code))
	return {r.name: r for r in records}


def test_parse_simple_module():
	records = _reflect(
		"""
		import os
		from enum import IntEnum, auto

		class Color(IntEnum):
			RED = 1
			GREEN = auto()
			BLUE = -4
			_ignore_ = []

		class A(Base):
			size: int
			color: "Color"

			def m(self, x: float, *, y: str = "") -> bool:
				return True

		def f(a, b=2):
			return a + b
		"""
	)
	assert list(records) == ["Color", "A"]

	color = records["Color"]
	assert color.kind == TypeKind.ENUM
	assert color.full_name == "pkg.m.Color"
	assert color.namespace == "pkg.m"
	assert color.underlying_type == "System.Int32"
	assert [(m.name, m.value) for m in color.members] == [("RED", 1), ("GREEN", 2), ("BLUE", -4)]

	a = records["A"]
	assert a.kind == TypeKind.CLASS
	assert [(f.name, f.type) for f in a.fields] == [("size", "System.Int64"), ("color", "pkg.m.Color")]
	method = a.methods[0]
	assert method.name == "m"
	assert method.return_type == "System.Boolean"
	assert [(p.name, p.type) for p in method.parameters] == [("x", "System.Double"), ("y", "System.String")]
	assert method.declaring_type == "pkg.m.A"
	assert [c.parameters for c in a.constructors] == [[]]


def test_flag_auto_values():
	records = _reflect(
		"""
		import enum

		class Perm(enum.IntFlag):
			READ = enum.auto()
			WRITE = enum.auto()
			EXEC = enum.auto()
		"""
	)
	assert [m.value for m in records["Perm"].members] == [1, 2, 4]


def test_type_mapping():
	records = _reflect(
		"""
		import ctypes
		from ctypes import POINTER, c_uint8
		from typing import Callable, List, Optional, Tuple

		class Node:
			children: List["Node"]
			parent: Optional[Node]
			data: POINTER(c_uint8)
			handle: ctypes.c_void_p
			raw: bytes
			pair: Tuple[int, str]
			many: tuple[int, ...]
			callback: Callable[[int], None]
			other: Vendor.Thing
			maybe: int | None
			untyped = 3

			def visit(self, fn) -> None:
				pass
		"""
	)
	node = records["Node"]
	assert {f.name: f.type for f in node.fields} == {
		"children": "pkg.m.Node[]",
		"parent": "pkg.m.Node",
		"data": "System.Byte*",
		"handle": "System.IntPtr",
		"raw": "System.Byte[]",
		"pair": "System.Object[]",
		"many": "System.Int64[]",
		"callback": "System.Delegate",
		"other": "Vendor.Thing",
		"maybe": "System.Int64",
	}
	visit = node.methods[0]
	assert visit.return_type == "System.Void"
	assert visit.parameters[0].type == "System.Object"


def test_constructors_and_static_methods():
	records = _reflect(
		"""
		from dataclasses import dataclass
		from typing import ClassVar

		@dataclass
		class Point:
			x: float
			y: float
			origin: ClassVar["Point"]

		class Factory:
			def __init__(self, name: str):
				self.name = name

			@staticmethod
			def build(kind: str) -> Point:
				pass

			@classmethod
			def default(cls) -> "Factory":
				pass

			@property
			def label(self) -> str:
				return self.name

			def _reset(self):
				pass
		"""
	)
	point = records["Point"]
	assert [f.name for f in point.fields] == ["x", "y"]
	assert [(p.name, p.type) for p in point.constructors[0].parameters] == [
		("x", "System.Double"),
		("y", "System.Double"),
	]

	factory = records["Factory"]
	assert [(p.name, p.type) for p in factory.constructors[0].parameters] == [("name", "System.String")]
	methods = {m.name: m for m in factory.methods}
	assert list(methods) == ["build", "default", "_reset"]
	assert methods["build"].is_static
	assert [p.name for p in methods["build"].parameters] == ["kind"]
	assert methods["default"].is_static
	assert methods["default"].parameters == []
	assert methods["default"].return_type == "pkg.m.Factory"
	assert methods["_reset"].is_assembly


def test_inherited_methods_are_listed_with_declaring_type():
	records = _reflect(
		"""
		class Base:
			def ping(self) -> None: ...
			def name(self) -> str: ...

		class Middle(Base):
			def name(self) -> str: ...

		class Leaf(Middle, External):
			def own(self) -> None: ...
		"""
	)
	leaf = records["Leaf"]
	assert [(m.name, m.declaring_type) for m in leaf.methods] == [
		("own", "pkg.m.Leaf"),
		("name", "pkg.m.Middle"),
		("ping", "pkg.m.Base"),
	]
	assert [m.name for m in records["Base"].methods] == ["ping", "name"]


def test_constructor_inherited_from_base():
	records = _reflect(
		"""
		from dataclasses import dataclass

		class Base:
			def __init__(self, name: str, size: int):
				self.name = name

		class Child(Base):
			def grow(self) -> None: ...

		class GrandChild(Child):
			pass

		class Own(Base):
			def __init__(self):
				pass

		@dataclass
		class Record:
			key: str

		class Keyed(Record):
			pass
		"""
	)
	expected = [("name", "System.String"), ("size", "System.Int64")]
	for name in ["Child", "GrandChild"]:
		ctor = records[name].constructors
		assert [[(p.name, p.type) for p in c.parameters] for c in ctor] == [expected]
	assert records["Own"].constructors[0].parameters == []
	assert [p.name for p in records["Keyed"].constructors[0].parameters] == ["key"]
