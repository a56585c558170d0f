# vim: set noexpandtab: -*- indent-tabs-mode: t -*-
"""
hbindgen.ir: the intermediate representation consumed by the pipeline.

Modules:
  - path: entity identity
  - ty: immutable type expressions and their rewrites
  - items: entity kinds (constants, statics, enums, structs, unions, opaque items, typedefs, functions)
  - item_map: path-indexed symbol tables
  - annotation / cfg: per-item metadata
  - parser: host-notation reader for type expressions
"""

from hbindgen.ir.parser import TypeParseError, parse_type

__all__ = ["TypeParseError", "parse_type"]
