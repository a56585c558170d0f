# vim: set noexpandtab: -*- indent-tabs-mode: t -*-
from __future__ import annotations

from hbindgen.ir.parser import parse_type
from hbindgen.ir.path import Path
from hbindgen.ir.ty import PathType
from hbindgen.mangle import instantiation_digest, mangle_path


def _mangle(text: str) -> str:
	ty = parse_type(text)
	assert isinstance(ty, PathType)
	return mangle_path(ty.path, ty.generic.generics).name


def test_readable_manglings() -> None:
	assert _mangle("Box<i32>") == "Box_i32"
	assert _mangle("Pair<*const Foo, [u8; 4]>") == "Pair_ConstPtr_Foo_Array4_u8"
	assert _mangle("Box<Vec<u8>>") == "Box_Vec_u8"
	assert _mangle("Holder<&Foo, &mut Bar, *mut Baz>") == "Holder_Ref_Foo_RefMut_Bar_Ptr_Baz"
	assert _mangle("Callback<fn(i32) -> bool>") == "Callback_Fn_i32_Ret_bool"
	assert _mangle("Wrapper<Option<i32>>") == "Wrapper_Option_i32"


def test_module_separators_are_flattened() -> None:
	assert mangle_path(Path("ffi::Box"), [parse_type("ffi::Inner")]) == Path("ffi_Box_ffi_Inner")


def test_digest_is_stable_and_structural() -> None:
	a = parse_type("Pair<A_B, C>")
	b = parse_type("Pair<A, B_C>")
	assert isinstance(a, PathType) and isinstance(b, PathType)
	assert _mangle("Pair<A_B, C>") == _mangle("Pair<A, B_C>")
	assert instantiation_digest(a.generic) == instantiation_digest(parse_type("Pair<A_B, C>").generic)
	assert instantiation_digest(a.generic) != instantiation_digest(b.generic)
	assert len(instantiation_digest(a.generic)) == 8
