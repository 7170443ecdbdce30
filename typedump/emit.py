from __future__ import annotations

import sys
from typing import IO, Optional

from .model import SchemaDocument


def render_document(document: SchemaDocument, pretty: bool = False) -> str:
	return document.model_dump_json(by_alias=True, indent=2 if pretty else None)


def write_document(document: SchemaDocument, stream: IO[str], pretty: bool = False) -> None:
	stream.write(render_document(document, pretty))
	stream.flush()


def open_output(path: Optional[str]) -> IO[str]:
	if path is None:
		return sys.stdout
	return open(path, "w", encoding="utf-8")
