from __future__ import annotations

import glob
import os
from typing import Dict, Iterable, List, Set

EXTENSION_FORMAT: Dict[str, str] = {
	".json": "records",
	".py": "python",
}


def detect_format(filename: str) -> str:
	_, ext = os.path.splitext(filename)
	return EXTENSION_FORMAT.get(ext.lower(), "unknown")


def to_module_name(root: str, file_path: str) -> str:
	rel_path = os.path.relpath(file_path, root)
	without_ext = os.path.splitext(rel_path)[0]
	parts = []
	for part in without_ext.split(os.sep):
		if part == "__init__":
			continue
		parts.append(part)
	return ".".join(parts).replace("-", "_")


def find_modules(patterns: Iterable[str], root: str) -> List[str]:
	"""Expand glob patterns relative to ``root`` into absolute file paths.

	Matches of one pattern are sorted; a file matched by several patterns is
	listed once, at its first position.
	"""
	root = os.path.abspath(root)
	seen: Set[str] = set()
	paths: List[str] = []
	for pattern in patterns:
		full_pattern = pattern if os.path.isabs(pattern) else os.path.join(root, pattern)
		for path in sorted(glob.glob(full_pattern, recursive=True)):
			path = os.path.abspath(path)
			if not os.path.isfile(path) or path in seen:
				continue
			seen.add(path)
			paths.append(path)
	return paths
