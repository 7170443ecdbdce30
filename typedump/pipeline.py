from __future__ import annotations

import logging
import os
from typing import Iterable, List, Optional, Sequence

from .filters import NameFilter
from .fs_scan import find_modules
from .known_types import KnownTypeSet
from .loader import load_module
from .model import DumpOptions, SchemaDocument, TypeRecord
from .projector import SchemaProjector
from .resolver import TypeResolver

log = logging.getLogger(__name__)


class SchemaBuilder:
	"""Runs projection and resolution over one set of modules.

	The builder owns the known type set. Every record is projected before any
	reference is resolved, so a type may be referenced ahead of its definition.
	"""

	def __init__(self, options: Optional[DumpOptions] = None):
		self.options = options or DumpOptions()
		self.known_types = KnownTypeSet()
		self.name_filter = NameFilter(self.options.blacklist, self.options.whitelist)

	def select(self, modules: Iterable[Sequence[TypeRecord]]) -> List[TypeRecord]:
		selected: List[TypeRecord] = []
		for records in modules:
			for record in records:
				if self.name_filter(record.qualified_name):
					selected.append(record)
				else:
					log.debug(f"Filtered out {record.qualified_name}")
		return selected

	def build(self, modules: Iterable[Sequence[TypeRecord]]) -> SchemaDocument:
		if self.known_types.frozen:
			raise RuntimeError("SchemaBuilder instances build a single document")
		records = self.select(modules)

		projector = SchemaProjector(self.known_types, self.options.include_inherited_methods)
		classes, enums = projector.project(records)

		self.known_types.freeze()
		TypeResolver(self.known_types).resolve(classes)

		log.info(f"Dumped {len(classes)} classes and {len(enums)} enums")
		return SchemaDocument(classes=classes, enums=enums)


def load_modules(paths: Iterable[str], root: Optional[str] = None) -> List[List[TypeRecord]]:
	return [load_module(path, root) for path in paths]


def dump(
	patterns: Iterable[str],
	root: Optional[str] = None,
	options: Optional[DumpOptions] = None,
) -> SchemaDocument:
	root = os.path.abspath(root or os.getcwd())
	paths = find_modules(patterns, root)
	if not paths:
		log.warning(f"No modules matched under {root}")
	return SchemaBuilder(options).build(load_modules(paths, root))
