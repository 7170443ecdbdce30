from __future__ import annotations

import logging
from typing import Iterable, List

from .known_types import DEFAULT_TYPE, KnownTypeSet
from .model import ClassDescriptor, Parameter

log = logging.getLogger(__name__)


class TypeResolver:
	"""Second pass: replace every reference the known set rejects with the default type."""

	def __init__(self, known_types: KnownTypeSet, default_type: str = DEFAULT_TYPE):
		self.known_types = known_types
		self.default_type = default_type

	def _resolve(self, type_name: str) -> str:
		if self.known_types.accepts(type_name):
			return type_name
		log.debug(f"Unknown type {type_name}, using {self.default_type}")
		return self.default_type

	def _resolve_parameters(self, parameters: List[Parameter]) -> None:
		for parameter in parameters:
			parameter.type = self._resolve(parameter.type)

	def resolve(self, classes: Iterable[ClassDescriptor]) -> None:
		for cls in classes:
			for field in cls.fields:
				field.type = self._resolve(field.type)
			for ctor in cls.constructors:
				self._resolve_parameters(ctor.parameters)
			for method in cls.methods:
				method.return_type = self._resolve(method.return_type)
				self._resolve_parameters(method.parameters)
