# vim: set noexpandtab: -*- indent-tabs-mode: t -*-
from __future__ import annotations

from hbindgen.ctype_resolver import CTypeResolver
from hbindgen.ir.items import Enum, EnumVariant, Field, OpaqueItem, Struct, Typedef, Union
from hbindgen.ir.parser import parse_type
from hbindgen.ir.path import Path
from hbindgen.ir.ty import CType, PathType, Ptr


def _resolver() -> CTypeResolver:
	resolver = CTypeResolver()
	for item in (
		Struct(Path("S")),
		Union(Path("U")),
		Enum(Path("Plain"), variants=[EnumVariant("A"), EnumVariant("B")]),
		Enum(Path("Tagged"), variants=[EnumVariant("A"), EnumVariant("B", fields=[Field("x", parse_type("i32"))])]),
		OpaqueItem(Path("Handle")),
		Typedef(Path("Alias"), aliased=parse_type("S")),
	):
		resolver.populate(item)
	return resolver


def test_registry_tags_by_kind() -> None:
	resolver = _resolver()
	assert resolver.lookup(Path("S")) is CType.STRUCT
	assert resolver.lookup(Path("U")) is CType.UNION
	assert resolver.lookup(Path("Plain")) is CType.ENUM
	assert resolver.lookup(Path("Tagged")) is CType.STRUCT
	assert resolver.lookup(Path("Handle")) is CType.STRUCT
	assert resolver.lookup(Path("Alias")) is None


def test_resolve_type_tags_nested_references() -> None:
	resolver = _resolver()
	ty = resolver.resolve_type(parse_type("*const U"))
	assert isinstance(ty, Ptr) and isinstance(ty.target, PathType)
	assert ty.target.generic.ctype is CType.UNION

	fn = resolver.resolve_type(parse_type("fn(Plain) -> *mut Handle"))
	assert fn.args[0].generic.ctype is CType.ENUM
	assert fn.ret.target.generic.ctype is CType.STRUCT


def test_typedefs_and_unknown_paths_stay_untagged() -> None:
	resolver = _resolver()
	for text in ("Alias", "Unknown"):
		ty = resolver.resolve_type(parse_type(text))
		assert isinstance(ty, PathType)
		assert ty.generic.ctype is None
