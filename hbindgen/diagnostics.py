# vim: set noexpandtab: -*- indent-tabs-mode: t -*-
"""
Diagnostics collected while transforming a library.

A diagnostic is a message plus the pipeline stage (`phase`) that produced it
and the item it is about. Warnings never stop the pipeline; they are handed to
the caller with the final bindings.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Optional

from hbindgen.ir.path import Path


@dataclass(frozen=True)
class Diagnostic:
	message: str
	code: str | None = None
	phase: str | None = None
	severity: str = "warning"
	path: Optional[Path] = None
	notes: tuple[str, ...] = field(default=())

	def format_human(self) -> str:
		head = f"{self.severity}"
		if self.code:
			head += f"[{self.code}]"
		text = f"{head}: {self.message}"
		for note in self.notes:
			text += f"\n  note: {note}"
		return text


__all__ = ["Diagnostic"]
