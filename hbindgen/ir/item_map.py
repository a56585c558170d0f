# vim: set noexpandtab: -*- indent-tabs-mode: t -*-
"""
Path-indexed symbol table for one category of item.

Entries keep insertion order. A path maps to a single item, or to a list of
items when every one of them is guarded by a `cfg` (conditional variants of the
same declaration). A conditional and an unconditional item never share a path.

The index is keyed by each item's path *at insertion time*. Renaming items in
place leaves the index stale until `rebuild()` re-keys it.
"""

from __future__ import annotations

from typing import Callable, Dict, Generic, Iterable, Iterator, List, Optional, TypeVar

from hbindgen.ir.items import Item
from hbindgen.ir.path import Path
from hbindgen.logging import get_logger

T = TypeVar("T", bound=Item)

_log = get_logger("item_map")


class ItemMap(Generic[T]):
	def __init__(self, items: Iterable[T] = ()) -> None:
		self._data: Dict[Path, T | List[T]] = {}
		for item in items:
			self.try_insert(item)

	def try_insert(self, item: T) -> bool:
		"""
		Insert `item` unless its path is taken.

		A conditional item joins an existing list of conditional items under the
		same path; every other collision is refused and returns False.
		"""
		path = item.path
		is_cfg = item.cfg is not None
		existing = self._data.get(path)
		if existing is not None:
			if is_cfg and isinstance(existing, list):
				existing.append(item)
				return True
			return False
		self._data[path] = [item] if is_cfg else item
		return True

	def rebuild(self) -> None:
		"""Re-key every item under its current path."""
		items = self.to_list()
		self._data = {}
		for item in items:
			if not self.try_insert(item):
				_log.debug("dropping %s: path collides after rename", item.path)

	def get_items(self, path: Path) -> Optional[List[T]]:
		value = self._data.get(path)
		if value is None:
			return None
		if isinstance(value, list):
			return list(value)
		return [value]

	def filter(self, predicate: Callable[[T], bool]) -> None:
		"""Remove every item for which `predicate` is true."""
		kept: Dict[Path, T | List[T]] = {}
		for path, value in self._data.items():
			if isinstance(value, list):
				remaining = [item for item in value if not predicate(item)]
				if remaining:
					kept[path] = remaining
			elif not predicate(value):
				kept[path] = value
		self._data = kept

	def to_list(self) -> List[T]:
		return list(self)

	def __iter__(self) -> Iterator[T]:
		# Snapshot so callers may mutate items (or the map) while iterating.
		values = list(self._data.values())
		for value in values:
			if isinstance(value, list):
				yield from list(value)
			else:
				yield value

	def __contains__(self, path: object) -> bool:
		return path in self._data

	def __len__(self) -> int:
		return sum(len(v) if isinstance(v, list) else 1 for v in self._data.values())


__all__ = ["ItemMap"]
