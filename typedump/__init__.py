"""Dump classes and enums of program modules as a self-consistent JSON schema.

Modules:
- fs_scan.py: Glob-based module discovery and format detection.
- ast_parse.py: Reflection of Python sources into type records.
- loader.py: Loading type records from record dumps and Python sources.
- filters.py: Blacklist and whitelist name filtering.
- projector.py: Conversion of type records into class and enum descriptors.
- known_types.py: Built-in type names and the growing known type set.
- typeref.py: Pointer and array aware type references.
- resolver.py: Rewriting of unknown type references to the default type.
- pipeline.py: Two-phase orchestration owning the known type set.
- emit.py: JSON serialization of the final document.
- model.py: Data structures for records, descriptors and options.
"""

__all__ = [
	"fs_scan",
	"ast_parse",
	"loader",
	"filters",
	"projector",
	"known_types",
	"typeref",
	"resolver",
	"pipeline",
	"emit",
	"model",
]
