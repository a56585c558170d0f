# vim: set noexpandtab: -*- indent-tabs-mode: t -*-
"""
Type expressions of the binding IR.

A type expression is an immutable tree. Leaves are primitives or references to
declared entities by Path (possibly binding generic arguments); inner nodes
wrap another type in a pointer/reference, an array, a function pointer or an
optional.

Type expressions are the edges of the dependency graph. Every edge is either:
- a *by-value* edge (field of type `Foo`, array of `Foo`, typedef target),
  which requires the complete definition of `Foo` first, or
- an *indirection* edge (`*const Foo`, `&Foo`, `fn(Foo)`), which only
  requires `Foo` to be declared.

All transformations here return new trees; items own the trees and swap them in
place.
"""

from __future__ import annotations

from dataclasses import dataclass, field, replace
from enum import Enum, auto
from typing import Callable, Dict, Iterator, Mapping, Optional, Sequence, Tuple, Union

from hbindgen.ir.path import Path


class CType(Enum):
	"""Tag keyword a strict-C reference to an aggregate needs."""

	STRUCT = "struct"
	UNION = "union"
	ENUM = "enum"


class EdgeKind(Enum):
	VALUE = auto()
	INDIRECT = auto()


# Host-language primitive name -> C spelling.
PRIMITIVES: Dict[str, str] = {
	"void": "void",
	"bool": "bool",
	"char": "char",
	"int": "int",
	"short": "short",
	"long": "long",
	"float": "float",
	"double": "double",
	"size_t": "size_t",
	"ptrdiff_t": "ptrdiff_t",
	"c_void": "void",
	"c_char": "char",
	"c_schar": "signed char",
	"c_uchar": "unsigned char",
	"c_short": "short",
	"c_ushort": "unsigned short",
	"c_int": "int",
	"c_uint": "unsigned int",
	"c_long": "long",
	"c_ulong": "unsigned long",
	"c_longlong": "long long",
	"c_ulonglong": "unsigned long long",
	"c_float": "float",
	"c_double": "double",
	"i8": "int8_t",
	"i16": "int16_t",
	"i32": "int32_t",
	"i64": "int64_t",
	"u8": "uint8_t",
	"u16": "uint16_t",
	"u32": "uint32_t",
	"u64": "uint64_t",
	"isize": "intptr_t",
	"usize": "uintptr_t",
	"f32": "float",
	"f64": "double",
	"int8_t": "int8_t",
	"int16_t": "int16_t",
	"int32_t": "int32_t",
	"int64_t": "int64_t",
	"uint8_t": "uint8_t",
	"uint16_t": "uint16_t",
	"uint32_t": "uint32_t",
	"uint64_t": "uint64_t",
	"intptr_t": "intptr_t",
	"uintptr_t": "uintptr_t",
}


@dataclass(frozen=True)
class Primitive:
	name: str

	@property
	def c_name(self) -> str:
		return PRIMITIVES.get(self.name, self.name)

	def __str__(self) -> str:
		return type_to_str(self)


@dataclass(frozen=True)
class GenericPath:
	"""
	A by-name reference, `Name` or `Name<Args...>`.

	`ctype` is filled in by tag resolution and does not take part in identity:
	`struct Foo` and `Foo` name the same thing.
	"""

	path: Path
	generics: Tuple["Type", ...] = ()
	ctype: Optional[CType] = field(default=None, compare=False)

	@property
	def name(self) -> str:
		return self.path.name

	def __str__(self) -> str:
		if not self.generics:
			return self.path.name
		return f"{self.path.name}<{', '.join(type_to_str(g) for g in self.generics)}>"


@dataclass(frozen=True)
class PathType:
	generic: GenericPath

	@property
	def path(self) -> Path:
		return self.generic.path

	def __str__(self) -> str:
		return type_to_str(self)


@dataclass(frozen=True)
class Ptr:
	"""
	Pointer or reference to `target`.

	References are non-nullable pointers (`is_ref=True`, `is_nullable=False`).
	"""

	target: "Type"
	is_const: bool = False
	is_nullable: bool = True
	is_ref: bool = False

	def __str__(self) -> str:
		return type_to_str(self)


@dataclass(frozen=True)
class Array:
	elem: "Type"
	length: str

	def __str__(self) -> str:
		return type_to_str(self)


@dataclass(frozen=True)
class FuncPtr:
	ret: "Type"
	args: Tuple["Type", ...] = ()

	def __str__(self) -> str:
		return type_to_str(self)


@dataclass(frozen=True)
class OptionalType:
	inner: "Type"

	def __str__(self) -> str:
		return type_to_str(self)


Type = Union[Primitive, PathType, Ptr, Array, FuncPtr, OptionalType]

GenericParams = Tuple[str, ...]


def path_type(name: str | Path, generics: Sequence[Type] = ()) -> PathType:
	"""Build a by-name reference; `generics` binds generic arguments."""
	path = name if isinstance(name, Path) else Path(name)
	return PathType(GenericPath(path=path, generics=tuple(generics)))


def map_children(ty: Type, fn: Callable[[Type], Type]) -> Type:
	"""Rebuild `ty` one level deep with `fn` applied to each direct child."""
	if isinstance(ty, PathType):
		if not ty.generic.generics:
			return ty
		return PathType(replace(ty.generic, generics=tuple(fn(g) for g in ty.generic.generics)))
	if isinstance(ty, Ptr):
		return replace(ty, target=fn(ty.target))
	if isinstance(ty, Array):
		return replace(ty, elem=fn(ty.elem))
	if isinstance(ty, FuncPtr):
		return FuncPtr(ret=fn(ty.ret), args=tuple(fn(a) for a in ty.args))
	if isinstance(ty, OptionalType):
		return OptionalType(fn(ty.inner))
	return ty


def walk(ty: Type) -> Iterator[Type]:
	"""Yield every node of `ty`, parents before children."""
	yield ty
	if isinstance(ty, PathType):
		for arg in ty.generic.generics:
			yield from walk(arg)
	elif isinstance(ty, Ptr):
		yield from walk(ty.target)
	elif isinstance(ty, Array):
		yield from walk(ty.elem)
	elif isinstance(ty, FuncPtr):
		yield from walk(ty.ret)
		for arg in ty.args:
			yield from walk(arg)
	elif isinstance(ty, OptionalType):
		yield from walk(ty.inner)


def rewrite(ty: Type, fn: Callable[[Type], Type]) -> Type:
	"""Rebuild `ty` bottom-up, applying `fn` to every node after its children."""
	return fn(map_children(ty, lambda child: rewrite(child, fn)))


def is_generic_param(ty: Type, generic_params: GenericParams) -> bool:
	return isinstance(ty, PathType) and not ty.generic.generics and ty.path.name in generic_params


def root_path(ty: Type) -> Optional[Path]:
	"""
	Path of the entity a type ultimately names.

	Pointers, arrays and optionals are looked through; primitives and function
	pointers name no entity.
	"""
	if isinstance(ty, PathType):
		return ty.path
	if isinstance(ty, Ptr):
		return root_path(ty.target)
	if isinstance(ty, Array):
		return root_path(ty.elem)
	if isinstance(ty, OptionalType):
		return root_path(ty.inner)
	return None


def dependency_edges(
	ty: Type,
	generic_params: GenericParams = (),
	kind: EdgeKind = EdgeKind.VALUE,
) -> Iterator[Tuple[Path, EdgeKind]]:
	"""Yield `(path, edge kind)` for every entity `ty` references."""
	if isinstance(ty, PathType):
		if is_generic_param(ty, generic_params):
			return
		yield ty.path, kind
		for arg in ty.generic.generics:
			yield from dependency_edges(arg, generic_params, kind)
	elif isinstance(ty, Ptr):
		yield from dependency_edges(ty.target, generic_params, EdgeKind.INDIRECT)
	elif isinstance(ty, Array):
		yield from dependency_edges(ty.elem, generic_params, kind)
	elif isinstance(ty, FuncPtr):
		yield from dependency_edges(ty.ret, generic_params, EdgeKind.INDIRECT)
		for arg in ty.args:
			yield from dependency_edges(arg, generic_params, EdgeKind.INDIRECT)
	elif isinstance(ty, OptionalType):
		yield from dependency_edges(ty.inner, generic_params, kind)


def substitute(ty: Type, mapping: Mapping[str, Type]) -> Type:
	"""Replace generic parameter references by the types bound to them."""

	def _subst(node: Type) -> Type:
		if isinstance(node, PathType) and not node.generic.generics and node.path.name in mapping:
			return mapping[node.path.name]
		return node

	return rewrite(ty, _subst)


def simplify_optional(ty: Type) -> Type:
	"""Optional pointers/references become nullable pointers; optional fn pointers drop the wrapper."""

	def _simplify(node: Type) -> Type:
		if not isinstance(node, OptionalType):
			return node
		inner = node.inner
		if isinstance(inner, Ptr):
			return Ptr(target=inner.target, is_const=inner.is_const, is_nullable=True, is_ref=False)
		if isinstance(inner, FuncPtr):
			return inner
		return node

	return rewrite(ty, _simplify)


def rename_type(ty: Type, rename: Callable[[str], str], generic_params: GenericParams = ()) -> Type:
	"""Apply the export rename to every by-name reference except generic parameters."""

	def _rename(node: Type) -> Type:
		if not isinstance(node, PathType) or is_generic_param(node, generic_params):
			return node
		return PathType(replace(node.generic, path=Path(rename(node.path.name))))

	return rewrite(ty, _rename)


def type_to_str(ty: Type) -> str:
	"""Render a type in the host notation accepted by `hbindgen.ir.parser.parse_type`."""
	if isinstance(ty, Primitive):
		return ty.name
	if isinstance(ty, PathType):
		return str(ty.generic)
	if isinstance(ty, Ptr):
		if ty.is_ref:
			return f"&{type_to_str(ty.target)}" if ty.is_const else f"&mut {type_to_str(ty.target)}"
		return f"*{'const' if ty.is_const else 'mut'} {type_to_str(ty.target)}"
	if isinstance(ty, Array):
		return f"[{type_to_str(ty.elem)}; {ty.length}]"
	if isinstance(ty, FuncPtr):
		args = ", ".join(type_to_str(a) for a in ty.args)
		return f"fn({args}) -> {type_to_str(ty.ret)}"
	if isinstance(ty, OptionalType):
		return f"Option<{type_to_str(ty.inner)}>"
	raise TypeError(f"not a type expression: {ty!r}")


__all__ = [
	"Array",
	"CType",
	"EdgeKind",
	"FuncPtr",
	"GenericParams",
	"GenericPath",
	"OptionalType",
	"PRIMITIVES",
	"PathType",
	"Primitive",
	"Ptr",
	"Type",
	"dependency_edges",
	"is_generic_param",
	"map_children",
	"path_type",
	"rename_type",
	"rewrite",
	"root_path",
	"simplify_optional",
	"substitute",
	"type_to_str",
	"walk",
]
