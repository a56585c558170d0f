# vim: set noexpandtab: -*- indent-tabs-mode: t -*-
"""Host-notation type expressions."""

from __future__ import annotations

import pytest

from hbindgen.ir import TypeParseError, parse_type
from hbindgen.ir.path import Path
from hbindgen.ir.ty import Array, FuncPtr, GenericPath, OptionalType, PathType, Primitive, Ptr, path_type, type_to_str


def test_primitive_and_named_types() -> None:
	assert parse_type("i32") == Primitive("i32")
	assert parse_type("c_int").c_name == "int"
	assert parse_type("Foo") == PathType(GenericPath(Path("Foo")))
	assert parse_type("ffi::Handle") == path_type("ffi::Handle")


def test_generic_arguments_nest() -> None:
	ty = parse_type("Pair<Box<i32>, u8>")
	assert ty == path_type("Pair", [path_type("Box", [Primitive("i32")]), Primitive("u8")])


def test_pointers_and_references() -> None:
	assert parse_type("*const Foo") == Ptr(path_type("Foo"), is_const=True)
	assert parse_type("*mut Foo") == Ptr(path_type("Foo"), is_const=False)
	assert parse_type("&Foo") == Ptr(path_type("Foo"), is_const=True, is_nullable=False, is_ref=True)
	assert parse_type("&mut Foo") == Ptr(path_type("Foo"), is_const=False, is_nullable=False, is_ref=True)


def test_arrays_accept_numeric_or_named_length() -> None:
	assert parse_type("[u8; 16]") == Array(Primitive("u8"), "16")
	assert parse_type("[Foo; LEN]") == Array(path_type("Foo"), "LEN")


def test_function_pointers() -> None:
	ty = parse_type("fn(i32, *mut c_void) -> bool")
	assert ty == FuncPtr(ret=Primitive("bool"), args=(Primitive("i32"), Ptr(Primitive("c_void"))))
	assert parse_type("fn()") == FuncPtr(ret=Primitive("void"), args=())


def test_option_becomes_optional_type() -> None:
	ty = parse_type("Option<&Node>")
	assert isinstance(ty, OptionalType)
	assert ty.inner == Ptr(path_type("Node"), is_const=True, is_nullable=False, is_ref=True)


def test_type_to_str_reads_back() -> None:
	for text in ("*const Box<i32>", "&mut [u8; 4]", "fn(i32) -> bool", "Option<fn() -> void>"):
		assert type_to_str(parse_type(text)) == text


def test_malformed_type_reports_column() -> None:
	with pytest.raises(TypeParseError, match="invalid type expression") as excinfo:
		parse_type("*Foo")
	assert excinfo.value.text == "*Foo"
	assert excinfo.value.column is not None


def test_reader_is_exported_by_the_package() -> None:
	import hbindgen
	from hbindgen.ir import parser

	assert hbindgen.parse_type is parser.parse_type
	assert hbindgen.TypeParseError is TypeParseError
