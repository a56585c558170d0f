# vim: set noexpandtab: -*- indent-tabs-mode: t -*-
from __future__ import annotations

from dataclasses import dataclass
from typing import Iterator, Tuple

from hbindgen.config import Config
from hbindgen.diagnostics import Diagnostic
from hbindgen.ir.items import Constant, Function, ItemContainer, Static


@dataclass(frozen=True)
class Bindings:
	"""
	The emission-ready result of `Library.generate()`.

	`items` is in declaration order: every item appears after everything it
	contains by value. Constants, globals and functions are sorted by name.
	"""

	config: Config
	constants: Tuple[Constant, ...]
	globals: Tuple[Static, ...]
	items: Tuple[ItemContainer, ...]
	functions: Tuple[Function, ...]
	diagnostics: Tuple[Diagnostic, ...] = ()

	def item_names(self) -> list[str]:
		return [item.name for item in self.items]

	def warnings(self) -> Iterator[Diagnostic]:
		return (d for d in self.diagnostics if d.severity == "warning")


__all__ = ["Bindings"]
