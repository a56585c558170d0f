# vim: set noexpandtab: -*- indent-tabs-mode: t -*-
"""
Monomorphization of generic items for targets without generics.

Scanning starts from non-generic items. Every reference that binds generic
arguments (`Box<i32>`) to a generic template is an instantiation; each distinct
`GenericPath` is instantiated once, under a mangled path, and the new copy is
scanned in turn (a `Box<Vec<i32>>` field pulls in `Vec<i32>`).

Once the library has absorbed the copies and dropped the templates,
`mangle_type` rewrites every remaining generic reference to its copy.
"""

from __future__ import annotations

from typing import Callable, Dict, List, Optional

from hbindgen.errors import GENERIC_ARITY, GENERIC_RECURSION, BindgenError
from hbindgen.ir.items import Enum, Item, OpaqueItem, Struct, Typedef, Union
from hbindgen.ir.path import Path
from hbindgen.ir.ty import GenericPath, PathType, Type, map_children, walk
from hbindgen.mangle import instantiation_digest, mangle_path

ItemLookup = Callable[[Path], Optional[List[Item]]]

MAX_INSTANTIATION_DEPTH = 32

_TEMPLATE_KINDS = (Struct, Union, Enum, OpaqueItem, Typedef)


class Monomorphs:
	def __init__(self, lookup: ItemLookup) -> None:
		self._lookup = lookup
		self._replacements: Dict[GenericPath, Path] = {}
		self._claimed: Dict[Path, GenericPath] = {}
		# Template path -> instantiations of it currently being scanned.
		self._active: Dict[Path, int] = {}
		self.structs: List[Struct] = []
		self.unions: List[Union] = []
		self.enums: List[Enum] = []
		self.opaques: List[OpaqueItem] = []
		self.typedefs: List[Typedef] = []
		# Generic references with no template to instantiate, in discovery order.
		self.unresolved: List[GenericPath] = []

	def contains(self, generic: GenericPath) -> bool:
		return generic in self._replacements

	def mangled_path(self, generic: GenericPath) -> Optional[Path]:
		return self._replacements.get(generic)

	def add_item(self, item: Item) -> None:
		"""Record every instantiation reachable from a non-generic item."""
		if item.generic_params:
			return
		for ty in item.types():
			self.add_type(ty)

	def add_type(self, ty: Type) -> None:
		for node in walk(ty):
			if isinstance(node, PathType) and node.generic.generics:
				self._instantiate(node.generic)

	def mangle_type(self, ty: Type) -> Type:
		"""Rewrite generic references (outermost first) to their monomorphic paths."""
		if isinstance(ty, PathType) and ty.generic.generics:
			mangled = self._replacements.get(ty.generic)
			if mangled is not None:
				return PathType(GenericPath(path=mangled, ctype=ty.generic.ctype))
			if ty.generic not in self.unresolved:
				self.unresolved.append(ty.generic)
		return map_children(ty, self.mangle_type)

	def _instantiate(self, generic: GenericPath) -> None:
		if self.contains(generic):
			return
		templates = [
			item
			for item in self._lookup(generic.path) or []
			if item.generic_params and isinstance(item, _TEMPLATE_KINDS)
		]
		if not templates:
			return
		for template in templates:
			if len(template.generic_params) != len(generic.generics):
				raise BindgenError(
					GENERIC_ARITY,
					f"{generic} binds {len(generic.generics)} generic argument(s); "
					f"{template.name} declares {len(template.generic_params)}",
					paths=(generic.path,),
					stage="monomorphize",
				)
		# A template reached through its own copies this often keeps growing its
		# arguments (`Nested<T> { next: *mut Nested<*mut T> }`) and never closes.
		depth = self._active.get(generic.path, 0)
		if depth >= MAX_INSTANTIATION_DEPTH:
			raise BindgenError(
				GENERIC_RECURSION,
				f"{generic.path} is instantiated recursively with ever larger generic arguments "
				f"(nesting depth {depth})",
				paths=(generic.path,),
				stage="monomorphize",
			)
		path = self._mangle(generic)
		# Registered before the copies are scanned so self-references terminate.
		self._replacements[generic] = path
		self._active[generic.path] = depth + 1
		try:
			for template in templates:
				monomorph = template.instantiate(generic.generics, path)
				self._store(monomorph)
				self.add_item(monomorph)
		finally:
			self._active[generic.path] = depth

	def _mangle(self, generic: GenericPath) -> Path:
		path = mangle_path(generic.path, generic.generics)
		owner = self._claimed.get(path)
		if owner is not None and owner != generic:
			path = Path(f"{path.name}_{instantiation_digest(generic)}")
		self._claimed[path] = generic
		return path

	def _store(self, item: Item) -> None:
		if isinstance(item, Struct):
			self.structs.append(item)
		elif isinstance(item, Union):
			self.unions.append(item)
		elif isinstance(item, Enum):
			self.enums.append(item)
		elif isinstance(item, OpaqueItem):
			self.opaques.append(item)
		elif isinstance(item, Typedef):
			self.typedefs.append(item)
		else:
			raise TypeError(f"{type(item).__name__} cannot be instantiated")


__all__ = ["Monomorphs"]
