"""Tagged type references.

Type names travel through the records and descriptors as plain strings such as
``Acme.Widget``, ``Acme.Widget[]`` or ``System.Byte*``. Inside the resolver they
are parsed into ``Named``, ``Array`` or ``Pointer`` nodes so suffix handling
lives in one place.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import AbstractSet, Union

POINTER_SUFFIX = "*"
ARRAY_SUFFIX = "[]"


@dataclass(frozen=True)
class Named:
	name: str


@dataclass(frozen=True)
class Pointer:
	inner: "TypeRef"


@dataclass(frozen=True)
class Array:
	inner: "TypeRef"


TypeRef = Union[Named, Pointer, Array]


def parse_type_name(type_name: str) -> TypeRef:
	# Suffixes are peeled outermost first, then wrapped back around the name.
	wrappers = []
	while True:
		if type_name.endswith(POINTER_SUFFIX):
			wrappers.append(Pointer)
			type_name = type_name[: -len(POINTER_SUFFIX)]
		elif type_name.endswith(ARRAY_SUFFIX):
			wrappers.append(Array)
			type_name = type_name[: -len(ARRAY_SUFFIX)]
		else:
			break
	ref: TypeRef = Named(type_name)
	for wrap in reversed(wrappers):
		ref = wrap(ref)
	return ref


def render(ref: TypeRef) -> str:
	suffixes = []
	while not isinstance(ref, Named):
		suffixes.append(POINTER_SUFFIX if isinstance(ref, Pointer) else ARRAY_SUFFIX)
		ref = ref.inner
	return ref.name + "".join(reversed(suffixes))


def is_known(ref: TypeRef, known: AbstractSet[str]) -> bool:
	"""Check a reference against a set of type names.

	Pointers are always accepted. Arrays are accepted when their element type,
	rendered back to a string, is in ``known``; only one level is stripped, so
	``Foo[][]`` needs ``Foo[]`` itself to be known.
	"""
	if isinstance(ref, Pointer):
		return True
	if isinstance(ref, Array):
		return render(ref.inner) in known
	return ref.name in known
