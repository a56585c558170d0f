# vim: set noexpandtab: -*- indent-tabs-mode: t -*-
"""
Tag keywords for strict-C aggregate references.

Without a generated typedef, C requires `struct Foo`, `union Bar` or
`enum Baz` wherever an aggregate is named. The resolver registers every
aggregate's tag and stamps it onto each by-name reference; references to
typedefs and primitives keep no tag.
"""

from __future__ import annotations

from dataclasses import replace
from typing import Dict, Optional, Protocol

from hbindgen.ir.path import Path
from hbindgen.ir.ty import CType, PathType, Type, rewrite


class Taggable(Protocol):
	path: Path

	def ctype(self) -> Optional[CType]: ...


class CTypeResolver:
	def __init__(self) -> None:
		self._types: Dict[Path, CType] = {}

	def add(self, path: Path, ctype: CType) -> None:
		self._types[path] = ctype

	def populate(self, item: Taggable) -> None:
		"""Register `item` if it is an aggregate (anything with a tag)."""
		ctype = item.ctype()
		if ctype is not None:
			self.add(item.path, ctype)

	def lookup(self, path: Path) -> Optional[CType]:
		return self._types.get(path)

	def resolve_type(self, ty: Type) -> Type:
		def _resolve(node: Type) -> Type:
			if not isinstance(node, PathType):
				return node
			return PathType(replace(node.generic, ctype=self.lookup(node.path)))

		return rewrite(ty, _resolve)


__all__ = ["CTypeResolver", "Taggable"]
