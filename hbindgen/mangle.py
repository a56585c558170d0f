# vim: set noexpandtab: -*- indent-tabs-mode: t -*-
"""
Names for monomorphic copies of generic items.

`Box<i32>` becomes `Box_i32`, `Pair<*const Foo, [u8; 4]>` becomes
`Pair_ConstPtr_Foo_Array4_u8`. The readable form can collide (`Pair<A_B, C>`
and `Pair<A, B_C>` both read `Pair_A_B_C`); `Monomorphs` detects that and
appends `instantiation_digest()` to the later one.
"""

from __future__ import annotations

import hashlib
from typing import Sequence

from hbindgen.ir.path import Path
from hbindgen.ir.ty import Array, FuncPtr, GenericPath, OptionalType, PathType, Primitive, Ptr, Type


def mangle_path(path: Path, generics: Sequence[Type]) -> Path:
	parts = [_mangle_name(path.name)]
	parts.extend(_mangle_arg(arg) for arg in generics)
	return Path("_".join(parts))


def instantiation_digest(generic: GenericPath) -> str:
	"""Short stable digest of an instantiation's full structure."""
	return hashlib.sha256(str(generic).encode("utf-8")).hexdigest()[:8]


def _mangle_name(name: str) -> str:
	return name.replace("::", "_")


def _mangle_arg(ty: Type) -> str:
	if isinstance(ty, Primitive):
		return ty.name.replace(" ", "_")
	if isinstance(ty, PathType):
		return mangle_path(ty.path, ty.generic.generics).name
	if isinstance(ty, Ptr):
		if ty.is_ref:
			prefix = "Ref" if ty.is_const else "RefMut"
		else:
			prefix = "ConstPtr" if ty.is_const else "Ptr"
		return f"{prefix}_{_mangle_arg(ty.target)}"
	if isinstance(ty, Array):
		return f"Array{ty.length}_{_mangle_arg(ty.elem)}"
	if isinstance(ty, FuncPtr):
		parts = ["Fn", *(_mangle_arg(a) for a in ty.args), "Ret", _mangle_arg(ty.ret)]
		return "_".join(parts)
	if isinstance(ty, OptionalType):
		return f"Option_{_mangle_arg(ty.inner)}"
	raise TypeError(f"cannot mangle {ty!r}")


__all__ = ["instantiation_digest", "mangle_path"]
