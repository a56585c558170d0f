# vim: set noexpandtab: -*- indent-tabs-mode: t -*-
"""
Per-item annotations steering code generation.

The extraction stage collects them from documentation comments
(`rename-all=ScreamingSnakeCase`, `field-names=[x, y]`, `prefix-with-name`).
A value is one of:
  - a list of strings (`[a, b]`),
  - a bool (`true` / `false`, or a bare key meaning `true`),
  - an atom (any other text).
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Callable, Dict, List, Optional, TypeVar, Union

AnnotationValue = Union[List[str], bool, str]

_T = TypeVar("_T")


@dataclass
class AnnotationSet:
	values: Dict[str, AnnotationValue] = field(default_factory=dict)

	def is_empty(self) -> bool:
		return not self.values

	def copy(self) -> "AnnotationSet":
		return AnnotationSet({k: list(v) if isinstance(v, list) else v for k, v in self.values.items()})

	def __contains__(self, key: str) -> bool:
		return key in self.values

	def get(self, key: str) -> Optional[AnnotationValue]:
		return self.values.get(key)

	def bool(self, key: str) -> Optional[bool]:
		value = self.values.get(key)
		return value if isinstance(value, bool) else None

	def atom(self, key: str) -> Optional[str]:
		value = self.values.get(key)
		if isinstance(value, str):
			return value
		return None

	def list(self, key: str) -> Optional[List[str]]:
		value = self.values.get(key)
		if isinstance(value, list):
			return list(value)
		return None

	def parse_atom(self, key: str, parse: Callable[[str], _T]) -> Optional[_T]:
		"""Parse an atom value with `parse`; a value `parse` rejects counts as absent."""
		value = self.atom(key)
		if value is None:
			return None
		try:
			return parse(value)
		except ValueError:
			return None


__all__ = ["AnnotationSet", "AnnotationValue"]
