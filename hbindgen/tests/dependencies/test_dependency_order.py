# vim: set noexpandtab: -*- indent-tabs-mode: t -*-
"""Dependency discovery and by-value ordering."""

from __future__ import annotations

from hbindgen.dependencies import Dependencies
from hbindgen.ir.cfg import CfgBoolean, CfgNot
from hbindgen.ir.item_map import ItemMap
from hbindgen.ir.items import (
	Enum,
	EnumVariant,
	Field,
	Function,
	FunctionArgument,
	OpaqueItem,
	Struct,
	item_dependency_edges,
)
from hbindgen.ir.parser import parse_type
from hbindgen.ir.path import Path
from hbindgen.ir.ty import EdgeKind


def _struct(name: str, cfg=None, **fields: str) -> Struct:
	return Struct(path=Path(name), fields=[Field(n, parse_type(t)) for n, t in fields.items()], cfg=cfg)


def _fn(name: str, *args: str) -> Function:
	return Function(path=Path(name), args=[FunctionArgument(f"a{i}", parse_type(t)) for i, t in enumerate(args)])


def _ordered(roots, *items, tolerated=()) -> Dependencies:
	deps = Dependencies(ItemMap(items).get_items, tolerated=tolerated)
	for root in roots:
		deps.add_root(root)
	deps.sort()
	return deps


def _assert_by_value_order(order) -> None:
	position = {}
	for index, item in enumerate(order):
		position.setdefault(item.path, index)
	for index, item in enumerate(order):
		for dep, kind in item_dependency_edges(item):
			if kind is EdgeKind.VALUE and dep in position:
				assert position[dep] < index, f"{item.name} precedes its by-value dependency {dep}"


def test_mutual_pointers_each_appear_once() -> None:
	a = _struct("A", b="*mut B")
	b = _struct("B", a="*mut A")
	deps = _ordered([_fn("f", "*mut A")], a, b)
	assert sorted(item.name for item in deps.order) == ["A", "B"]
	assert deps.unknown == []


def test_by_value_cycle_closed_through_pointer_is_reordered() -> None:
	a = _struct("A", b="*mut B")
	b = _struct("B", a="A")
	deps = _ordered([_fn("f", "*mut A")], a, b)
	assert [item.name for item in deps.order] == ["A", "B"]
	_assert_by_value_order(deps.order)


def test_discovered_order_is_kept_when_valid() -> None:
	inner = _struct("Inner", x="i32")
	outer = _struct("Outer", inner="Inner", arr="[Inner; 2]")
	other = _struct("Other", p="*const Outer")
	deps = _ordered([_fn("f", "Outer"), _fn("g", "Other")], other, outer, inner)
	assert [item.name for item in deps.order] == ["Inner", "Outer", "Other"]


def test_fieldless_enums_then_opaque_items_lead() -> None:
	items = (
		_struct("S", z="Zeta", h="*mut Handle", a="Alpha", t="Tagged"),
		Enum(Path("Zeta"), variants=[EnumVariant("One")]),
		Enum(Path("Alpha"), variants=[EnumVariant("One")]),
		Enum(Path("Tagged"), variants=[EnumVariant("V", fields=[Field("x", parse_type("i32"))])]),
		OpaqueItem(Path("Handle")),
	)
	deps = _ordered([_fn("f", "S")], *items)
	assert [item.name for item in deps.order] == ["Alpha", "Zeta", "Handle", "Tagged", "S"]


def test_cfg_variants_stay_together() -> None:
	feature = CfgBoolean("unix")
	bar_unix = _struct("Bar", cfg=feature, x="Inner")
	bar_other = _struct("Bar", cfg=CfgNot(feature), y="i64")
	inner = _struct("Inner", v="u8")
	deps = _ordered([_fn("f", "Bar")], bar_unix, bar_other, inner)
	assert deps.order == [inner, bar_unix, bar_other]


def test_includes_add_undiscovered_items_only() -> None:
	a = _struct("A", x="i32")
	extra = _struct("Extra", a="A")
	deps = Dependencies(ItemMap([a, extra]).get_items)
	deps.add_root(_fn("f", "A"))
	assert deps.add_include(Path("A")) is False
	assert deps.add_include(Path("Extra")) is True
	assert deps.add_include(Path("Extra")) is False
	assert deps.add_include(Path("Nowhere")) is False
	assert [item.name for item in deps.order] == ["A", "Extra"]


def test_unknown_paths_are_collected_unless_tolerated() -> None:
	deps = _ordered(
		[_fn("f", "Missing", "*mut Excluded", "Missing")],
		tolerated=[Path("Excluded")],
	)
	assert deps.unknown == [Path("Missing")]
	assert deps.order == []
