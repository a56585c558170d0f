# vim: set noexpandtab: -*- indent-tabs-mode: t -*-
from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Tuple

from hbindgen.ir.path import Path

# Stable reason codes.
UNKNOWN_PATH = "unknown-path"
GENERIC_ARITY = "generic-arity"
GENERIC_RECURSION = "generic-recursion"
STAGE_ORDER = "stage-order"
INVALID_CONFIG = "invalid-config"


@dataclass(frozen=True)
class BindgenError(Exception):
	"""
	A fatal, structured pipeline failure.

	Raised when an input violates the contract with the extraction stage (for
	example a reference to a Path that no symbol table holds). Non-fatal
	conditions are reported as warning diagnostics instead.
	"""

	reason_code: str
	message: str
	paths: Tuple[Path, ...] = field(default=())
	stage: str | None = None

	def __str__(self) -> str:
		return self.format_human()

	def to_dict(self) -> dict[str, Any]:
		return {
			"reason_code": self.reason_code,
			"message": self.message,
			"paths": [p.name for p in self.paths],
			"stage": self.stage,
		}

	def format_human(self) -> str:
		parts: list[str] = [f"[{self.reason_code}] {self.message}"]
		if self.stage:
			parts.append(f"stage={self.stage}")
		if self.paths:
			parts.append(f"paths=({', '.join(p.name for p in self.paths)})")
		return " ".join(parts)


__all__ = ["BindgenError", "GENERIC_ARITY", "GENERIC_RECURSION", "INVALID_CONFIG", "STAGE_ORDER", "UNKNOWN_PATH"]
