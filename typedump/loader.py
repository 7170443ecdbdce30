from __future__ import annotations

import logging
import os
from typing import List, Optional

from pydantic import ValidationError

from .ast_parse import reflect_python_module
from .fs_scan import detect_format, to_module_name
from .model import ModuleRecords, TypeRecord

log = logging.getLogger(__name__)


def load_records_dump(text: str) -> ModuleRecords:
	return ModuleRecords.model_validate_json(text)


def _python_module_name(path: str, root: Optional[str]) -> str:
	if root is not None and os.path.commonpath([root, path]) == root:
		return to_module_name(root, path)
	stem = os.path.splitext(os.path.basename(path))[0]
	if stem == "__init__":
		stem = os.path.basename(os.path.dirname(path))
	return stem.replace("-", "_")


def load_module(path: str, root: Optional[str] = None) -> List[TypeRecord]:
	"""Load the type records of one module file.

	A module that cannot be read or parsed contributes no records; the failure
	is logged and the caller carries on with the remaining modules.
	"""
	fmt = detect_format(path)
	if fmt == "unknown":
		log.error(f"Skipping {path}: unrecognized module format")
		return []

	log.debug(f"Loading module {path}")
	try:
		with open(path, "r", encoding="utf-8") as fh:
			text = fh.read()
		if fmt == "records":
			records = load_records_dump(text).types
		else:
			records = reflect_python_module(_python_module_name(path, root), path, text)
	except (OSError, ValueError, SyntaxError, ValidationError) as e:
		log.error(f"Failed to load module {path}: {e}")
		return []

	return [r for r in records if not r.is_compiler_generated]
