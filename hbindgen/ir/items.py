# vim: set noexpandtab: -*- indent-tabs-mode: t -*-
"""
Declared entities of the binding IR.

Every entity kind exposes the same small capability set (the `Item` protocol):
a `path`, its `generic_params`, `annotations`, an optional `cfg` guard, its
type expressions (`types()` / `map_types()`), and `rename_for_config()`.
Pipeline stages are written against that protocol so one traversal covers
every kind.

Aggregates that may be generic (structs, unions, enums, opaque items,
typedefs) additionally provide `instantiate()`, which clones the definition
with its generic parameters substituted under a new (mangled) path.
"""

from __future__ import annotations

import typing
from dataclasses import dataclass, field
from typing import Callable, Iterator, List, Optional, Protocol, Sequence, Tuple

from hbindgen.config import Config, Language
from hbindgen.ir.annotation import AnnotationSet
from hbindgen.ir.cfg import Cfg
from hbindgen.ir.path import Path
from hbindgen.ir.ty import (
	CType,
	EdgeKind,
	GenericParams,
	Primitive,
	Type,
	dependency_edges,
	rename_type,
	substitute,
)
from hbindgen.rename import IdentifierType, RenameRule


class Item(Protocol):
	path: Path
	generic_params: GenericParams
	annotations: AnnotationSet
	cfg: Optional[Cfg]
	documentation: List[str]

	@property
	def name(self) -> str: ...

	def types(self) -> Iterator[Type]: ...

	def map_types(self, fn: Callable[[Type], Type]) -> None: ...

	def rename_for_config(self, config: Config) -> None: ...


def item_dependency_edges(item: Item) -> Iterator[Tuple[Path, EdgeKind]]:
	"""Edges from `item` to every entity its type expressions reference."""
	for ty in item.types():
		yield from dependency_edges(ty, item.generic_params)


@dataclass
class Field:
	name: str
	ty: Type
	documentation: List[str] = field(default_factory=list)


def _fields_types(fields: Sequence[Field]) -> Iterator[Type]:
	for f in fields:
		yield f.ty


def _map_fields(fields: Sequence[Field], fn: Callable[[Type], Type]) -> None:
	for f in fields:
		f.ty = fn(f.ty)


def _instantiate_fields(fields: Sequence[Field], mapping: dict[str, Type]) -> List[Field]:
	return [Field(name=f.name, ty=substitute(f.ty, mapping), documentation=list(f.documentation)) for f in fields]


def _rename_fields(
	fields: Sequence[Field],
	annotations: AnnotationSet,
	default_rule: Optional[RenameRule],
) -> None:
	# An explicit `field-names` list beats any casing rule.
	names = annotations.list("field-names")
	if names is not None:
		for f, name in zip(fields, names):
			f.name = name
		return
	rule = annotations.parse_atom("rename-all", RenameRule.parse)
	if rule is None:
		rule = default_rule
	if rule is None:
		return
	for f in fields:
		f.name = rule.apply_to_snake_case(f.name, IdentifierType.STRUCT_MEMBER)


def _generic_mapping(params: GenericParams, values: Sequence[Type]) -> dict[str, Type]:
	return dict(zip(params, values))


@dataclass
class Constant:
	path: Path
	ty: Type
	value: str
	annotations: AnnotationSet = field(default_factory=AnnotationSet)
	cfg: Optional[Cfg] = None
	documentation: List[str] = field(default_factory=list)
	generic_params: GenericParams = ()

	@property
	def name(self) -> str:
		return self.path.name

	def types(self) -> Iterator[Type]:
		yield self.ty

	def map_types(self, fn: Callable[[Type], Type]) -> None:
		self.ty = fn(self.ty)

	def rename_for_config(self, config: Config) -> None:
		self.path = config.export.rename_path(self.path)
		self.ty = rename_type(self.ty, config.export.rename_name)


@dataclass
class Static:
	"""A global variable."""

	path: Path
	ty: Type
	mutable: bool = False
	annotations: AnnotationSet = field(default_factory=AnnotationSet)
	cfg: Optional[Cfg] = None
	documentation: List[str] = field(default_factory=list)
	generic_params: GenericParams = ()

	@property
	def name(self) -> str:
		return self.path.name

	def types(self) -> Iterator[Type]:
		yield self.ty

	def map_types(self, fn: Callable[[Type], Type]) -> None:
		self.ty = fn(self.ty)

	def rename_for_config(self, config: Config) -> None:
		self.path = config.export.rename_path(self.path)
		self.ty = rename_type(self.ty, config.export.rename_name)


@dataclass
class Struct:
	path: Path
	fields: List[Field] = field(default_factory=list)
	generic_params: GenericParams = ()
	annotations: AnnotationSet = field(default_factory=AnnotationSet)
	cfg: Optional[Cfg] = None
	documentation: List[str] = field(default_factory=list)

	@property
	def name(self) -> str:
		return self.path.name

	def ctype(self) -> Optional[CType]:
		return CType.STRUCT

	def types(self) -> Iterator[Type]:
		return _fields_types(self.fields)

	def map_types(self, fn: Callable[[Type], Type]) -> None:
		_map_fields(self.fields, fn)

	def rename_for_config(self, config: Config) -> None:
		self.path = config.export.rename_path(self.path)
		self.map_types(lambda ty: rename_type(ty, config.export.rename_name, self.generic_params))
		_rename_fields(self.fields, self.annotations, config.structure.rename_fields)

	def instantiate(self, generic_values: Sequence[Type], path: Path) -> "Struct":
		mapping = _generic_mapping(self.generic_params, generic_values)
		return Struct(
			path=path,
			fields=_instantiate_fields(self.fields, mapping),
			annotations=self.annotations.copy(),
			cfg=self.cfg,
			documentation=list(self.documentation),
		)


@dataclass
class Union:
	path: Path
	fields: List[Field] = field(default_factory=list)
	generic_params: GenericParams = ()
	annotations: AnnotationSet = field(default_factory=AnnotationSet)
	cfg: Optional[Cfg] = None
	documentation: List[str] = field(default_factory=list)

	@property
	def name(self) -> str:
		return self.path.name

	def ctype(self) -> Optional[CType]:
		return CType.UNION

	def types(self) -> Iterator[Type]:
		return _fields_types(self.fields)

	def map_types(self, fn: Callable[[Type], Type]) -> None:
		_map_fields(self.fields, fn)

	def rename_for_config(self, config: Config) -> None:
		self.path = config.export.rename_path(self.path)
		self.map_types(lambda ty: rename_type(ty, config.export.rename_name, self.generic_params))
		_rename_fields(self.fields, self.annotations, config.union.rename_fields)

	def instantiate(self, generic_values: Sequence[Type], path: Path) -> "Union":
		mapping = _generic_mapping(self.generic_params, generic_values)
		return Union(
			path=path,
			fields=_instantiate_fields(self.fields, mapping),
			annotations=self.annotations.copy(),
			cfg=self.cfg,
			documentation=list(self.documentation),
		)


@dataclass
class EnumVariant:
	"""
	A variant; `fields` is None for a plain discriminant.

	`source_name` keeps the declared name once renaming has run, since exported
	variant names may embed the enum's own name.
	"""

	name: str
	discriminant: Optional[str] = None
	fields: Optional[List[Field]] = None
	documentation: List[str] = field(default_factory=list)
	source_name: Optional[str] = None


@dataclass
class Enum:
	path: Path
	variants: List[EnumVariant] = field(default_factory=list)
	generic_params: GenericParams = ()
	annotations: AnnotationSet = field(default_factory=AnnotationSet)
	cfg: Optional[Cfg] = None
	documentation: List[str] = field(default_factory=list)
	# Config the variant names were derived with; copies re-derive theirs from it.
	renamed_with: Optional[Config] = field(default=None, repr=False, compare=False)

	@property
	def name(self) -> str:
		return self.path.name

	def is_fieldless(self) -> bool:
		return all(not v.fields for v in self.variants)

	def ctype(self) -> Optional[CType]:
		# A data-carrying enum is emitted as a tagged struct.
		return CType.ENUM if self.is_fieldless() else CType.STRUCT

	def types(self) -> Iterator[Type]:
		for variant in self.variants:
			if variant.fields:
				yield from _fields_types(variant.fields)

	def map_types(self, fn: Callable[[Type], Type]) -> None:
		for variant in self.variants:
			if variant.fields:
				_map_fields(variant.fields, fn)

	def rename_for_config(self, config: Config) -> None:
		self.path = config.export.rename_path(self.path)
		self.map_types(lambda ty: rename_type(ty, config.export.rename_name, self.generic_params))
		for variant in self.variants:
			if variant.fields:
				_rename_fields(variant.fields, AnnotationSet(), config.structure.rename_fields)
		self._name_variants(config)

	def _name_variants(self, config: Config) -> None:
		self.renamed_with = config
		for variant in self.variants:
			if variant.source_name is None:
				variant.source_name = variant.name
			variant.name = variant.source_name

		if config.language is Language.C and (
			config.enumeration.prefix_with_name or self.annotations.bool("prefix-with-name")
		):
			for variant in self.variants:
				variant.name = f"{self.name}_{variant.name}"

		rule = self.annotations.parse_atom("rename-all", RenameRule.parse)
		if rule is None:
			rule = config.enumeration.rename_variants
		if rule is None:
			return
		for variant in self.variants:
			variant.name = rule.apply_to_pascal_case(variant.name, IdentifierType.ENUM_VARIANT, enum_name=self.name)

	def instantiate(self, generic_values: Sequence[Type], path: Path) -> "Enum":
		mapping = _generic_mapping(self.generic_params, generic_values)
		variants = [
			EnumVariant(
				name=v.source_name or v.name,
				discriminant=v.discriminant,
				fields=_instantiate_fields(v.fields, mapping) if v.fields is not None else None,
				documentation=list(v.documentation),
				source_name=v.source_name,
			)
			for v in self.variants
		]
		monomorph = Enum(
			path=path,
			variants=variants,
			annotations=self.annotations.copy(),
			cfg=self.cfg,
			documentation=list(self.documentation),
		)
		# Enumerators share one C namespace: names derived from the enum name must follow the copy's path.
		if self.renamed_with is not None:
			monomorph._name_variants(self.renamed_with)
		return monomorph


@dataclass
class OpaqueItem:
	"""A type whose representation is hidden; emitted as a forward declaration."""

	path: Path
	generic_params: GenericParams = ()
	annotations: AnnotationSet = field(default_factory=AnnotationSet)
	cfg: Optional[Cfg] = None
	documentation: List[str] = field(default_factory=list)

	@property
	def name(self) -> str:
		return self.path.name

	def ctype(self) -> Optional[CType]:
		return CType.STRUCT

	def types(self) -> Iterator[Type]:
		return iter(())

	def map_types(self, fn: Callable[[Type], Type]) -> None:
		return None

	def rename_for_config(self, config: Config) -> None:
		self.path = config.export.rename_path(self.path)

	def instantiate(self, generic_values: Sequence[Type], path: Path) -> "OpaqueItem":
		return OpaqueItem(
			path=path,
			annotations=self.annotations.copy(),
			cfg=self.cfg,
			documentation=list(self.documentation),
		)


@dataclass
class Typedef:
	path: Path
	aliased: Type
	generic_params: GenericParams = ()
	annotations: AnnotationSet = field(default_factory=AnnotationSet)
	cfg: Optional[Cfg] = None
	documentation: List[str] = field(default_factory=list)

	@property
	def name(self) -> str:
		return self.path.name

	def ctype(self) -> Optional[CType]:
		return None

	def types(self) -> Iterator[Type]:
		yield self.aliased

	def map_types(self, fn: Callable[[Type], Type]) -> None:
		self.aliased = fn(self.aliased)

	def rename_for_config(self, config: Config) -> None:
		self.path = config.export.rename_path(self.path)
		self.aliased = rename_type(self.aliased, config.export.rename_name, self.generic_params)

	def instantiate(self, generic_values: Sequence[Type], path: Path) -> "Typedef":
		mapping = _generic_mapping(self.generic_params, generic_values)
		return Typedef(
			path=path,
			aliased=substitute(self.aliased, mapping),
			annotations=self.annotations.copy(),
			cfg=self.cfg,
			documentation=list(self.documentation),
		)


@dataclass
class FunctionArgument:
	name: str
	ty: Type


@dataclass
class Function:
	path: Path
	args: List[FunctionArgument] = field(default_factory=list)
	ret: Type = field(default_factory=lambda: Primitive("void"))
	annotations: AnnotationSet = field(default_factory=AnnotationSet)
	cfg: Optional[Cfg] = None
	documentation: List[str] = field(default_factory=list)
	generic_params: GenericParams = ()

	@property
	def name(self) -> str:
		return self.path.name

	def types(self) -> Iterator[Type]:
		yield self.ret
		for arg in self.args:
			yield arg.ty

	def map_types(self, fn: Callable[[Type], Type]) -> None:
		self.ret = fn(self.ret)
		for arg in self.args:
			arg.ty = fn(arg.ty)

	def rename_for_config(self, config: Config) -> None:
		# Exported symbol names must match the host library: literal overrides only.
		self.path = Path(config.export.rename.get(self.name, self.name))
		self.map_types(lambda ty: rename_type(ty, config.export.rename_name))
		rule = config.function.rename_args
		if rule is None:
			return
		for arg in self.args:
			arg.name = rule.apply_to_snake_case(arg.name, IdentifierType.FUNCTION_ARG)


ItemContainer = typing.Union[Constant, Static, Enum, Struct, Union, OpaqueItem, Typedef]


__all__ = [
	"Constant",
	"Enum",
	"EnumVariant",
	"Field",
	"Function",
	"FunctionArgument",
	"Item",
	"ItemContainer",
	"OpaqueItem",
	"Static",
	"Struct",
	"Typedef",
	"Union",
	"item_dependency_edges",
]
