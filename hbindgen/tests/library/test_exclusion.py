# vim: set noexpandtab: -*- indent-tabs-mode: t -*-
from __future__ import annotations

from hbindgen.config import Config, ExportConfig
from hbindgen.ir.items import Constant, Field, Function, FunctionArgument, OpaqueItem, Static, Struct, Typedef
from hbindgen.ir.parser import parse_type
from hbindgen.ir.path import Path
from hbindgen.ir.ty import walk
from hbindgen.library import Library, Stage


def _library(exclude: list[str]) -> Library:
	return Library(
		Config(export=ExportConfig(exclude=exclude, prefix="Ffi")),
		constants=[Constant(Path("HIDDEN_CONST"), parse_type("i32"), "1"), Constant(Path("SHOWN"), parse_type("i32"), "2")],
		globals=[Static(Path("hidden_global"), parse_type("*mut Hidden"))],
		structs=[Struct(Path("Hidden")), Struct(Path("Visible"), fields=[Field("h", parse_type("*mut Hidden"))])],
		opaque_items=[OpaqueItem(Path("HiddenHandle"))],
		typedefs=[Typedef(Path("HiddenAlias"), aliased=parse_type("i32"))],
		functions=[
			Function(Path("secret_fn")),
			Function(Path("open"), args=[FunctionArgument("v", parse_type("*mut Visible"))]),
		],
	)


def test_excluded_names_vanish_from_every_table() -> None:
	lib = _library(["Hidden", "HIDDEN_CONST", "hidden_global", "HiddenHandle", "HiddenAlias", "secret_fn", "NotThere"])
	bindings = lib.generate()

	assert bindings.item_names() == ["FfiVisible"]
	assert [c.name for c in bindings.constants] == ["FfiSHOWN"]
	assert bindings.globals == ()
	assert [f.name for f in bindings.functions] == ["open"]
	for table in (lib.structs, lib.opaque_items, lib.typedefs, lib.constants, lib.globals):
		assert all("idden" not in item.name for item in table)


def test_references_to_excluded_items_are_tolerated() -> None:
	bindings = _library(["Hidden"]).generate()
	visible = next(item for item in bindings.items if item.name == "FfiVisible")
	referenced = {node.path.name for node in walk(visible.fields[0].ty) if hasattr(node, "path")}
	assert referenced == {"FfiHidden"}


def test_exclusion_is_the_first_stage() -> None:
	lib = _library(["Hidden"])
	lib._remove_excluded()
	assert lib.stage is Stage.FILTERED
	assert lib.structs.get_items(Path("Hidden")) is None
