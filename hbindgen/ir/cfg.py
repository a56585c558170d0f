# vim: set noexpandtab: -*- indent-tabs-mode: t -*-
"""
Conditional-compilation predicates attached to items.

Several items may share one Path when each is guarded by a different
condition (`#[cfg(feature = "x")] struct Bar { ... }` next to
`#[cfg(not(feature = "x"))] struct Bar { ... }`). The symbol tables only need
to know *whether* an item is conditional; the predicate tree itself travels
untouched to the emitter, which turns it into `#if` guards.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Tuple, Union


@dataclass(frozen=True)
class CfgBoolean:
	"""`unix`, `test`: a bare configuration flag."""

	name: str

	def __str__(self) -> str:
		return self.name


@dataclass(frozen=True)
class CfgNamed:
	"""`feature = "serde"`: a key/value configuration option."""

	key: str
	value: str

	def __str__(self) -> str:
		return f'{self.key} = "{self.value}"'


@dataclass(frozen=True)
class CfgAny:
	items: Tuple["Cfg", ...]

	def __str__(self) -> str:
		return f"any({', '.join(str(c) for c in self.items)})"


@dataclass(frozen=True)
class CfgAll:
	items: Tuple["Cfg", ...]

	def __str__(self) -> str:
		return f"all({', '.join(str(c) for c in self.items)})"


@dataclass(frozen=True)
class CfgNot:
	item: "Cfg"

	def __str__(self) -> str:
		return f"not({self.item})"


Cfg = Union[CfgBoolean, CfgNamed, CfgAny, CfgAll, CfgNot]


__all__ = ["Cfg", "CfgAll", "CfgAny", "CfgBoolean", "CfgNamed", "CfgNot"]
