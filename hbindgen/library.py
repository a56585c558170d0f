# vim: set noexpandtab: -*- indent-tabs-mode: t -*-
"""
The transformation pipeline from extracted IR to emission-ready bindings.

`Library` owns one symbol table per item kind plus the function list and runs
a fixed sequence of stages over them, each exactly once:

  exclude -> sort functions -> transfer annotations -> rename
  -> simplify optional references
  -> [monomorphize -> resolve tags]   (strict C only)
  -> order dependencies -> package

Later stages rely on earlier ones: dependency ordering indexes by final
(renamed) paths, and tag resolution must see monomorphic paths.
"""

from __future__ import annotations

from enum import Enum as _StageEnum
from itertools import chain
from typing import Dict, FrozenSet, Iterable, Iterator, List, Optional, Set, Tuple

from hbindgen.bindings import Bindings
from hbindgen.config import Config, Language
from hbindgen.ctype_resolver import CTypeResolver
from hbindgen.dependencies import Dependencies
from hbindgen.diagnostics import Diagnostic
from hbindgen.errors import STAGE_ORDER, UNKNOWN_PATH, BindgenError
from hbindgen.ir.annotation import AnnotationSet
from hbindgen.ir.item_map import ItemMap
from hbindgen.ir.items import (
	Constant,
	Enum,
	Function,
	Item,
	ItemContainer,
	OpaqueItem,
	Static,
	Struct,
	Typedef,
	Union,
)
from hbindgen.ir.path import Path
from hbindgen.ir.ty import root_path, simplify_optional
from hbindgen.logging import get_logger
from hbindgen.monomorph import Monomorphs

_log = get_logger("library")


class Stage(_StageEnum):
	RAW = "raw"
	FILTERED = "filtered"
	ANNOTATION_RESOLVED = "annotation-resolved"
	RENAMED = "renamed"
	SIMPLIFIED = "simplified"
	MONOMORPHIZED = "monomorphized"
	TYPE_RESOLVED = "type-resolved"
	DEPENDENCY_ORDERED = "dependency-ordered"
	PACKAGED = "packaged"


# Allowed transitions. Monomorphization and tag resolution are skipped when the
# target supports generics.
_NEXT: Dict[Stage, FrozenSet[Stage]] = {
	Stage.RAW: frozenset({Stage.FILTERED}),
	Stage.FILTERED: frozenset({Stage.ANNOTATION_RESOLVED}),
	Stage.ANNOTATION_RESOLVED: frozenset({Stage.RENAMED}),
	Stage.RENAMED: frozenset({Stage.SIMPLIFIED}),
	Stage.SIMPLIFIED: frozenset({Stage.MONOMORPHIZED, Stage.DEPENDENCY_ORDERED}),
	Stage.MONOMORPHIZED: frozenset({Stage.TYPE_RESOLVED}),
	Stage.TYPE_RESOLVED: frozenset({Stage.DEPENDENCY_ORDERED}),
	Stage.DEPENDENCY_ORDERED: frozenset({Stage.PACKAGED}),
	Stage.PACKAGED: frozenset(),
}


def _as_item_map(items: Iterable) -> ItemMap:
	if isinstance(items, ItemMap):
		return items
	return ItemMap(items)


def _by_name(item: Item) -> str:
	return item.name


class Library:
	def __init__(
		self,
		config: Config,
		*,
		constants: Iterable[Constant] = (),
		globals: Iterable[Static] = (),
		enums: Iterable[Enum] = (),
		structs: Iterable[Struct] = (),
		unions: Iterable[Union] = (),
		opaque_items: Iterable[OpaqueItem] = (),
		typedefs: Iterable[Typedef] = (),
		functions: Iterable[Function] = (),
	) -> None:
		"""Tables may be passed as `ItemMap`s or as plain iterables of items."""
		self.config = config
		self.constants: ItemMap[Constant] = _as_item_map(constants)
		self.globals: ItemMap[Static] = _as_item_map(globals)
		self.enums: ItemMap[Enum] = _as_item_map(enums)
		self.structs: ItemMap[Struct] = _as_item_map(structs)
		self.unions: ItemMap[Union] = _as_item_map(unions)
		self.opaque_items: ItemMap[OpaqueItem] = _as_item_map(opaque_items)
		self.typedefs: ItemMap[Typedef] = _as_item_map(typedefs)
		self.functions: List[Function] = list(functions)
		self.diagnostics: List[Diagnostic] = []
		self.stage = Stage.RAW

	def generate(self) -> Bindings:
		"""Run every stage and hand the result over; a library generates once."""
		self._remove_excluded()
		self._sort_functions()
		self._transfer_annotations()
		self._rename_items()
		self._simplify_option_to_ptr()

		if self.config.language is Language.C:
			self._instantiate_monomorphs()
			self._set_ctype()

		dependencies = self._build_dependencies()
		return self._package(dependencies)

	def get_items(self, path: Path) -> Optional[List[ItemContainer]]:
		"""Items under `path` from the first kind holding it (enum, struct, union, opaque, typedef)."""
		for table in self._type_tables():
			items = table.get_items(path)
			if items is not None:
				return items
		return None

	def _type_tables(self) -> Tuple[ItemMap, ...]:
		return (self.enums, self.structs, self.unions, self.opaque_items, self.typedefs)

	def _all_items(self) -> Iterator[Item]:
		return chain(
			self.constants,
			self.globals,
			self.enums,
			self.structs,
			self.unions,
			self.opaque_items,
			self.typedefs,
			self.functions,
		)

	def _enter(self, stage: Stage) -> None:
		if stage not in _NEXT[self.stage]:
			raise BindgenError(
				STAGE_ORDER,
				f"cannot enter stage {stage.value!r} from {self.stage.value!r}",
				stage=stage.value,
			)
		_log.debug("stage %s -> %s", self.stage.value, stage.value)
		self.stage = stage

	def _warn(self, message: str, *, code: str, path: Optional[Path] = None) -> None:
		self.diagnostics.append(
			Diagnostic(message=message, code=code, phase=self.stage.value, severity="warning", path=path)
		)
		_log.warning(message)

	def _remove_excluded(self) -> None:
		self._enter(Stage.FILTERED)
		exclude = set(self.config.export.exclude)
		if not exclude:
			return

		def excluded(item: Item) -> bool:
			return item.name in exclude

		self.functions = [f for f in self.functions if not excluded(f)]
		for table in (
			self.enums,
			self.structs,
			self.unions,
			self.opaque_items,
			self.typedefs,
			self.globals,
			self.constants,
		):
			table.filter(excluded)

	def _sort_functions(self) -> None:
		self.functions.sort(key=_by_name)

	def _transfer_annotations(self) -> None:
		self._enter(Stage.ANNOTATION_RESOLVED)

		# Staged first: typedefs are both the source and a possible target.
		pending: Dict[Path, AnnotationSet] = {}
		for typedef in self.typedefs:
			if typedef.annotations.is_empty():
				continue
			target = root_path(typedef.aliased)
			if target is None:
				continue
			if target in pending:
				self._warn(
					f"Multiple typedefs with annotations for {target}. Ignoring annotations from {typedef.path}.",
					code="duplicate-typedef-annotations",
					path=typedef.path,
				)
				continue
			pending[target] = typedef.annotations
			typedef.annotations = AnnotationSet()

		for target, annotations in pending.items():
			for table in self._type_tables():
				items = table.get_items(target)
				if items is None:
					continue
				for item in items:
					if item.annotations.is_empty():
						item.annotations = annotations.copy()
					else:
						self._warn(
							f"Can't transfer annotations from typedef to alias ({target}) "
							"that already has annotations.",
							code="annotation-conflict",
							path=target,
						)
				# The first kind holding the path ends the search.
				break

	def _rename_items(self) -> None:
		self._enter(Stage.RENAMED)
		for table in (
			self.globals,
			self.constants,
			self.structs,
			self.unions,
			self.enums,
			self.opaque_items,
			self.typedefs,
		):
			for item in table:
				item.rename_for_config(self.config)
			table.rebuild()
		for function in self.functions:
			function.rename_for_config(self.config)

	def _simplify_option_to_ptr(self) -> None:
		self._enter(Stage.SIMPLIFIED)
		for item in chain(self.structs, self.unions, self.enums, self.globals, self.typedefs, self.functions):
			item.map_types(simplify_optional)

	def _instantiate_monomorphs(self) -> None:
		self._enter(Stage.MONOMORPHIZED)
		monomorphs = Monomorphs(self.get_items)
		for item in self._all_items():
			monomorphs.add_item(item)

		for table, copies in (
			(self.structs, monomorphs.structs),
			(self.unions, monomorphs.unions),
			(self.enums, monomorphs.enums),
			(self.opaque_items, monomorphs.opaques),
			(self.typedefs, monomorphs.typedefs),
		):
			for copy in copies:
				if not table.try_insert(copy):
					_log.debug("monomorph %s already present", copy.path)

		# Templates with no concrete use never reach the output.
		for table in (self.opaque_items, self.structs, self.unions, self.enums, self.typedefs):
			table.filter(lambda item: bool(item.generic_params))

		for item in self._all_items():
			item.map_types(monomorphs.mangle_type)
		for generic in monomorphs.unresolved:
			self._warn(
				f"Cannot find a mangling for generic path {generic}. "
				"The generic item was not found or is not generic.",
				code="missing-mangling",
				path=generic.path,
			)

	def _set_ctype(self) -> None:
		self._enter(Stage.TYPE_RESOLVED)
		if self.config.style.generate_typedef():
			return

		resolver = CTypeResolver()
		for item in chain(self.structs, self.opaque_items, self.enums, self.unions):
			resolver.populate(item)
		for item in chain(
			self.enums,
			self.structs,
			self.unions,
			self.typedefs,
			self.globals,
			self.functions,
		):
			item.map_types(resolver.resolve_type)

	def _excluded_paths(self) -> Set[Path]:
		paths: Set[Path] = set()
		for name in self.config.export.exclude:
			paths.add(Path(name))
			paths.add(self.config.export.rename_path(Path(name)))
		return paths

	def _include_path(self, name: str) -> Path:
		# Includes may be spelled with either the source or the exported name.
		path = Path(name)
		if self.get_items(path) is not None:
			return path
		return self.config.export.rename_path(path)

	def _build_dependencies(self) -> Dependencies:
		self._enter(Stage.DEPENDENCY_ORDERED)
		dependencies = Dependencies(self.get_items, tolerated=self._excluded_paths())
		for function in self.functions:
			dependencies.add_root(function)
		for global_ in self.globals:
			dependencies.add_root(global_)
		for name in self.config.export.include:
			if not dependencies.add_include(self._include_path(name)):
				_log.debug("include %s: unknown or already discovered", name)

		if dependencies.unknown:
			names = ", ".join(p.name for p in dependencies.unknown)
			raise BindgenError(
				UNKNOWN_PATH,
				f"referenced type(s) not found in any symbol table: {names}",
				paths=tuple(dependencies.unknown),
				stage=self.stage.value,
			)
		dependencies.sort()
		return dependencies

	def _package(self, dependencies: Dependencies) -> Bindings:
		self._enter(Stage.PACKAGED)
		functions, self.functions = self.functions, []
		return Bindings(
			config=self.config,
			constants=tuple(sorted(self.constants, key=_by_name)),
			globals=tuple(sorted(self.globals, key=_by_name)),
			items=tuple(dependencies.order),
			functions=tuple(functions),
			diagnostics=tuple(self.diagnostics),
		)


__all__ = ["Library", "Stage"]
