# vim: set noexpandtab: -*- indent-tabs-mode: t -*-
from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True, order=True)
class Path:
	"""
	Identity of a declared entity.

	Paths are the primary key of every symbol table. They are compared and
	ordered by name so tables and bundles sort deterministically.
	"""

	name: str

	def __str__(self) -> str:
		return self.name


__all__ = ["Path"]
