from __future__ import annotations

from enum import Enum
from typing import List, Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator
from pydantic.alias_generators import to_camel

from .known_types import INTEGRAL_TYPES


class CamelModel(BaseModel):
	model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


class TypeKind(str, Enum):
	CLASS = "class"
	ENUM = "enum"
	STRUCT = "struct"
	INTERFACE = "interface"


# Input records, as supplied by a type record source.


class FieldRecord(CamelModel):
	model_config = ConfigDict(frozen=True)

	name: str
	type: str


class ParameterRecord(CamelModel):
	model_config = ConfigDict(frozen=True)

	name: Optional[str] = None
	type: str


class ConstructorRecord(CamelModel):
	model_config = ConfigDict(frozen=True)

	parameters: List[ParameterRecord] = []


class MethodRecord(CamelModel):
	model_config = ConfigDict(frozen=True)

	name: str
	return_type: str
	parameters: List[ParameterRecord] = []
	is_static: bool = False
	# Visible only inside the defining module.
	is_assembly: bool = False
	declaring_type: Optional[str] = None


class EnumMemberRecord(CamelModel):
	model_config = ConfigDict(frozen=True)

	name: str
	value: int


class TypeRecord(CamelModel):
	model_config = ConfigDict(frozen=True)

	name: str
	full_name: Optional[str] = None
	namespace: Optional[str] = None
	kind: TypeKind = TypeKind.CLASS
	fields: List[FieldRecord] = []
	constructors: List[ConstructorRecord] = []
	methods: List[MethodRecord] = []
	members: List[EnumMemberRecord] = []
	underlying_type: Optional[str] = None
	is_static: bool = False
	is_compiler_generated: bool = False

	@field_validator("underlying_type")
	@classmethod
	def check_underlying_type(cls, value: Optional[str]) -> Optional[str]:
		if value is not None and value not in INTEGRAL_TYPES:
			raise ValueError(f"{value!r} is not an integral type")
		return value

	@property
	def qualified_name(self) -> str:
		if self.full_name:
			return self.full_name
		if self.namespace:
			return f"{self.namespace}.{self.name}"
		return self.name


class ModuleRecords(CamelModel):
	module: str
	types: List[TypeRecord] = []


# Output descriptors. The resolver rewrites type names in place.


class Parameter(CamelModel):
	name: str
	type: str


class FieldDescriptor(CamelModel):
	name: str
	type: str


class Constructor(CamelModel):
	parameters: List[Parameter] = []


class Method(CamelModel):
	name: str
	return_type: str
	parameters: List[Parameter] = []
	is_static: bool = False


class ClassDescriptor(CamelModel):
	name: str
	internal_name: Optional[str] = None
	namespace: List[str] = []
	static_fields: Optional[List[FieldDescriptor]] = None
	fields: List[FieldDescriptor] = []
	constructors: List[Constructor] = []
	methods: List[Method] = []


class EnumMember(CamelModel):
	name: str
	value: int


class EnumDescriptor(CamelModel):
	name: str
	namespace: List[str] = []
	backing_type: str
	members: List[EnumMember] = []


class SchemaDocument(CamelModel):
	classes: List[ClassDescriptor] = []
	enums: List[EnumDescriptor] = []


class DumpOptions(CamelModel):
	blacklist: List[str] = []
	whitelist: List[str] = []
	include_inherited_methods: bool = False
	pretty: bool = Field(default=False, alias="outputPretty")
