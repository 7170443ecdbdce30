from __future__ import annotations

import logging
import re
from typing import Iterable, List, Pattern, Sequence

log = logging.getLogger(__name__)


def compile_patterns(patterns: Iterable[str]) -> List[Pattern[str]]:
	matchers: List[Pattern[str]] = []
	for pattern in patterns:
		try:
			matchers.append(re.compile(pattern))
		except re.error as e:
			log.warning(f"Ignoring invalid pattern {pattern!r}: {e}")
	return matchers


def is_kept(
	name: str,
	blacklist: Sequence[Pattern[str]],
	whitelist: Sequence[Pattern[str]],
) -> bool:
	"""Decide whether a fully-qualified type name survives filtering.

	Both lists apply independently: a name matching any blacklist entry is
	dropped, and when a whitelist is given a name matching none of it is
	dropped as well.
	"""
	if blacklist and any(m.search(name) for m in blacklist):
		return False
	if whitelist and not any(m.search(name) for m in whitelist):
		return False
	return True


class NameFilter:
	def __init__(self, blacklist: Iterable[str] = (), whitelist: Iterable[str] = ()):
		self.blacklist = compile_patterns(blacklist)
		self.whitelist = compile_patterns(whitelist)

	def __call__(self, name: str) -> bool:
		return is_kept(name, self.blacklist, self.whitelist)
