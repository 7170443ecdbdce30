from __future__ import annotations

from typing import Dict, Iterable, Set, Tuple

from .typeref import is_known, parse_type_name

BUILTIN_TYPES = (
	"System.Void",
	"System.Byte",
	"System.SByte",
	"System.UInt16",
	"System.Int16",
	"System.UInt32",
	"System.Int32",
	"System.UInt64",
	"System.Int64",
	"System.UIntPtr",
	"System.IntPtr",
	"System.Single",
	"System.Double",
	"System.Boolean",
	"System.String",
	"System.Object",
	"System.Type",
	"System.Exception",
	"System.Delegate",
)

DEFAULT_TYPE = "System.Object"

# (bits, signed) for the integral types an enum can be backed by.
INTEGRAL_TYPES: Dict[str, Tuple[int, bool]] = {
	"System.Byte": (8, False),
	"System.SByte": (8, True),
	"System.UInt16": (16, False),
	"System.Int16": (16, True),
	"System.UInt32": (32, False),
	"System.Int32": (32, True),
	"System.UInt64": (64, False),
	"System.Int64": (64, True),
	"System.UIntPtr": (64, False),
	"System.IntPtr": (64, True),
}


class FrozenTypeSetError(RuntimeError):
	pass


class KnownTypeSet:
	"""Type names a consumer of the dumped schema can rely on.

	Seeded with the built-ins and the default type, then grown with every class
	and enum produced during projection. Once frozen for resolution, further
	registration raises ``FrozenTypeSetError``.
	"""

	def __init__(self, names: Iterable[str] = BUILTIN_TYPES):
		self._names: Set[str] = set(names)
		self._names.add(DEFAULT_TYPE)
		self.frozen = False

	def add(self, name: str) -> None:
		if self.frozen:
			raise FrozenTypeSetError(f"Cannot register {name!r} after resolution started")
		self._names.add(name)

	def freeze(self) -> None:
		self.frozen = True

	def accepts(self, type_name: str) -> bool:
		return is_known(parse_type_name(type_name), self._names)

	def __contains__(self, name: object) -> bool:
		return name in self._names
