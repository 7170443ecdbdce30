from __future__ import annotations

import os
from typing import List

from fastapi import FastAPI, HTTPException
from pydantic import BaseModel

from typedump.model import DumpOptions, ModuleRecords, SchemaDocument
from typedump.pipeline import SchemaBuilder, dump


app = FastAPI(title="Type Schema Dumper")


class FilterRequest(BaseModel):
	blacklist: List[str] = []
	whitelist: List[str] = []
	include_inherited_methods: bool = False

	def options(self) -> DumpOptions:
		return DumpOptions(
			blacklist=self.blacklist,
			whitelist=self.whitelist,
			include_inherited_methods=self.include_inherited_methods,
		)


class DumpRequest(FilterRequest):
	root_path: str
	patterns: List[str] = ["**/*.json", "**/*.py"]


class SchemaRequest(FilterRequest):
	modules: List[ModuleRecords]


@app.post("/dump", response_model=SchemaDocument, response_model_by_alias=True)
def dump_modules(req: DumpRequest) -> SchemaDocument:
	root = os.path.abspath(req.root_path)
	if not os.path.isdir(root):
		raise HTTPException(status_code=400, detail=f"Invalid root_path: {root}")
	return dump(req.patterns, root=root, options=req.options())


@app.post("/schema", response_model=SchemaDocument, response_model_by_alias=True)
def build_schema(req: SchemaRequest) -> SchemaDocument:
	builder = SchemaBuilder(req.options())
	return builder.build(m.types for m in req.modules)
