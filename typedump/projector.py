from __future__ import annotations

import logging
from typing import Iterable, List, Optional, Sequence, Tuple

from .known_types import INTEGRAL_TYPES, KnownTypeSet
from .model import (
	ClassDescriptor,
	Constructor,
	EnumDescriptor,
	EnumMember,
	FieldDescriptor,
	Method,
	Parameter,
	ParameterRecord,
	TypeKind,
	TypeRecord,
)

log = logging.getLogger(__name__)

DEFAULT_BACKING_TYPE = "System.Int32"


def coerce_integral(value: int, type_name: str) -> int:
	"""Cast ``value`` into the numeric domain of ``type_name``.

	This is a plain truncating cast: 300 as ``System.Byte`` is 44 and 200 as
	``System.SByte`` is -56. Unknown type names leave the value untouched.
	"""
	width = INTEGRAL_TYPES.get(type_name)
	if width is None:
		return value
	bits, signed = width
	value &= (1 << bits) - 1
	if signed and value >= 1 << (bits - 1):
		value -= 1 << bits
	return value


def split_namespace(namespace: Optional[str]) -> List[str]:
	if not namespace:
		return []
	return namespace.split(".")


def to_parameters(params: Sequence[ParameterRecord]) -> List[Parameter]:
	return [
		Parameter(name=p.name if p.name else f"param{i}", type=p.type)
		for i, p in enumerate(params)
	]


class SchemaProjector:
	"""Turns type records into descriptors, registering each produced name."""

	def __init__(self, known_types: KnownTypeSet, include_inherited_methods: bool = False):
		self.known_types = known_types
		self.include_inherited_methods = include_inherited_methods

	def project(
		self, records: Iterable[TypeRecord]
	) -> Tuple[List[ClassDescriptor], List[EnumDescriptor]]:
		classes: List[ClassDescriptor] = []
		enums: List[EnumDescriptor] = []
		for record in records:
			if record.kind == TypeKind.CLASS:
				classes.append(self.project_class(record))
			elif record.kind == TypeKind.ENUM:
				enums.append(self.project_enum(record))
			else:
				log.debug(f"Skipping {record.kind.value} {record.qualified_name}")
		return classes, enums

	def project_class(self, record: TypeRecord) -> ClassDescriptor:
		full_name = record.qualified_name
		self.known_types.add(full_name)
		log.debug(f"Dumping class {full_name}")

		methods = [
			m
			for m in record.methods
			if not m.is_assembly
			and (
				self.include_inherited_methods
				or m.declaring_type is None
				or m.declaring_type == full_name
			)
		]
		return ClassDescriptor(
			name=record.name,
			namespace=split_namespace(record.namespace),
			constructors=[
				Constructor(parameters=to_parameters(c.parameters))
				for c in record.constructors
			],
			fields=[FieldDescriptor(name=f.name, type=f.type) for f in record.fields],
			methods=[
				Method(
					name=m.name,
					return_type=m.return_type,
					parameters=to_parameters(m.parameters),
					is_static=m.is_static,
				)
				for m in methods
			],
		)

	def project_enum(self, record: TypeRecord) -> EnumDescriptor:
		full_name = record.qualified_name
		self.known_types.add(full_name)
		log.debug(f"Dumping enum {full_name}")

		backing_type = record.underlying_type or DEFAULT_BACKING_TYPE
		return EnumDescriptor(
			name=record.name,
			namespace=split_namespace(record.namespace),
			backing_type=backing_type,
			members=[
				EnumMember(name=m.name, value=coerce_integral(m.value, backing_type))
				for m in record.members
			],
		)
