# vim: set noexpandtab: -*- indent-tabs-mode: t -*-
"""
Dependency discovery and declaration ordering.

Discovery walks from the roots (functions, globals, explicitly included items)
through every type reference. A path is marked before its own references are
walked, so self-referential and mutually referential items terminate, and its
items are appended only after everything they reference has been visited.

That order is usually already valid for a C header. It is not when a cycle is
closed by a by-value edge, e.g.::

	struct A { B *b; };   // reached first
	struct B { A a; };    // B needs the complete A

Discovery reaches A, marks it, walks into B through the pointer, finds A
already marked, and records B before A. `sort()` therefore re-linearises the
list so that every by-value dependency precedes its dependents while keeping
the discovered order wherever it is already valid.
"""

from __future__ import annotations

from typing import Callable, Dict, Iterable, List, Optional, Set, Tuple

from hbindgen.ir.items import Enum, Item, ItemContainer, OpaqueItem, item_dependency_edges
from hbindgen.ir.path import Path
from hbindgen.ir.ty import EdgeKind

ItemLookup = Callable[[Path], Optional[List[ItemContainer]]]


class Dependencies:
	def __init__(self, lookup: ItemLookup, *, tolerated: Iterable[Path] = ()) -> None:
		self._lookup = lookup
		# Paths that may be referenced without being declared (excluded items).
		self._tolerated = set(tolerated)
		self.items: Set[Path] = set()
		self.order: List[ItemContainer] = []
		self.unknown: List[Path] = []

	def add_root(self, root: Item) -> None:
		"""Discover everything a function or global references."""
		for path, _kind in item_dependency_edges(root):
			self._add_path(path)

	def add_include(self, path: Path) -> bool:
		"""
		Discover an explicitly requested item.

		Returns False when the path is unknown or was already discovered; an
		already-discovered item keeps its position.
		"""
		if path in self.items:
			return False
		items = self._lookup(path)
		if items is None:
			return False
		self._record(path, items)
		return True

	def sort(self) -> None:
		# Fieldless enums and opaque items depend on nothing: hoist them, by name.
		self.order.sort(key=_layer)
		self.order = _order_by_value(self.order)

	def _add_path(self, path: Path) -> None:
		if path in self.items:
			return
		items = self._lookup(path)
		if items is None:
			if path not in self._tolerated and path not in self.unknown:
				self.unknown.append(path)
			return
		self._record(path, items)

	def _record(self, path: Path, items: List[ItemContainer]) -> None:
		self.items.add(path)
		for item in items:
			for dep, _kind in item_dependency_edges(item):
				self._add_path(dep)
		self.order.extend(items)


def _layer(item: ItemContainer) -> Tuple[int, str]:
	if isinstance(item, Enum) and item.is_fieldless():
		return (0, item.name)
	if isinstance(item, OpaqueItem):
		return (1, item.name)
	return (2, "")


def _order_by_value(order: List[ItemContainer]) -> List[ItemContainer]:
	"""Stable topological order over by-value edges; cfg variants stay together."""
	groups: Dict[Path, List[ItemContainer]] = {}
	for item in order:
		groups.setdefault(item.path, []).append(item)

	done: Set[Path] = set()
	active: Set[Path] = set()
	result: List[ItemContainer] = []

	def visit(path: Path) -> None:
		if path in done or path in active:
			return
		active.add(path)
		for item in groups[path]:
			for dep, kind in item_dependency_edges(item):
				if kind is EdgeKind.VALUE and dep in groups:
					visit(dep)
		active.discard(path)
		done.add(path)
		result.extend(groups[path])

	for path in groups:
		visit(path)
	return result


__all__ = ["Dependencies"]
