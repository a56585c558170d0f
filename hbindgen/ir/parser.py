# vim: set noexpandtab: -*- indent-tabs-mode: t -*-
"""
Reader for type expressions written in host notation.

Extraction front-ends and tests describe types as text rather than building
trees by hand::

	parse_type("*const Box<i32>")
	parse_type("Option<&mut Node>")
	parse_type("[u8; 16]")
	parse_type("fn(i32, *mut c_void) -> bool")

Names listed in `PRIMITIVES` become `Primitive`s, `Option<T>` becomes an
`OptionalType`, and every other name becomes a by-name `PathType`.
"""

from __future__ import annotations

from pathlib import Path as FsPath
from typing import List

from lark import Lark, Token, Tree
from lark.exceptions import UnexpectedInput

from hbindgen.ir.ty import (
	PRIMITIVES,
	Array,
	FuncPtr,
	OptionalType,
	Primitive,
	Ptr,
	Type,
	path_type,
)

_GRAMMAR_PATH = FsPath(__file__).with_name("grammar.lark")
_GRAMMAR_SRC = _GRAMMAR_PATH.read_text()

_PARSER = Lark(
	_GRAMMAR_SRC,
	parser="lalr",
	start="start",
	maybe_placeholders=False,
)


class TypeParseError(ValueError):
	"""Malformed type notation; `column` is 1-based when known."""

	def __init__(self, message: str, *, text: str, column: int | None = None) -> None:
		super().__init__(message)
		self.text = text
		self.column = column


def parse_type(text: str) -> Type:
	try:
		tree = _PARSER.parse(text)
	except UnexpectedInput as exc:
		column = getattr(exc, "column", None)
		raise TypeParseError(f"invalid type expression {text!r} at column {column}", text=text, column=column) from exc
	return _build_type_expr(tree)


def _name(node: Tree) -> str:
	return node.data if isinstance(node.data, str) else node.data.value


def _subtrees(node: Tree) -> List[Tree]:
	return [child for child in node.children if isinstance(child, Tree)]


def _tokens(node: Tree, kind: str) -> List[Token]:
	return [child for child in node.children if isinstance(child, Token) and child.type == kind]


def _build_type_expr(tree: Tree) -> Type:
	kind = _name(tree)
	if kind == "ptr_type":
		is_const = bool(_tokens(tree, "CONST"))
		return Ptr(target=_build_type_expr(_subtrees(tree)[0]), is_const=is_const)
	if kind == "ref_type":
		is_mut = bool(_tokens(tree, "MUT"))
		return Ptr(target=_build_type_expr(_subtrees(tree)[0]), is_const=not is_mut, is_nullable=False, is_ref=True)
	if kind == "array_type":
		elem_node, len_node = _subtrees(tree)
		return Array(elem=_build_type_expr(elem_node), length=str(len_node.children[0]))
	if kind == "fn_type":
		args: List[Type] = []
		ret: Type = Primitive("void")
		for child in _subtrees(tree):
			if _name(child) == "fn_args":
				args = [_build_type_expr(arg) for arg in _subtrees(child)]
			elif _name(child) == "fn_ret":
				ret = _build_type_expr(_subtrees(child)[0])
		return FuncPtr(ret=ret, args=tuple(args))
	if kind == "base_type":
		name = str(tree.children[0])
		generics: List[Type] = []
		arg_nodes = _subtrees(tree)
		if arg_nodes:
			generics = [_build_type_expr(arg) for arg in _subtrees(arg_nodes[0])]
		if name == "Option" and len(generics) == 1:
			return OptionalType(generics[0])
		if name in PRIMITIVES and not generics:
			return Primitive(name)
		return path_type(name, generics)
	if kind == "start":
		return _build_type_expr(_subtrees(tree)[0])
	raise TypeError(f"unexpected type node {kind!r}")


__all__ = ["TypeParseError", "parse_type"]
