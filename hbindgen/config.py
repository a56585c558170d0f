# vim: set noexpandtab: -*- indent-tabs-mode: t -*-
"""
Resolved configuration for the transformation pipeline.

The configuration normally comes from a TOML file shaped like::

	language = "C"
	style = "tag"

	[export]
	include = ["Handle"]
	exclude = ["Internal"]
	prefix = "Ffi"

	[export.rename]
	"Foo" = "Bar"

	[fn]
	rename_args = "GeckoCase"

	[struct]
	rename_fields = "CamelCase"

	[union]
	rename_fields = "CamelCase"

	[enum]
	rename_variants = "ScreamingSnakeCase"
	prefix_with_name = true
"""

from __future__ import annotations

import tomllib
from dataclasses import dataclass, field
from enum import Enum
from pathlib import Path as FsPath
from typing import Any, Dict, List, Mapping, Optional

from hbindgen.errors import INVALID_CONFIG, BindgenError
from hbindgen.ir.path import Path
from hbindgen.rename import RenameRule


class Language(Enum):
	C = "C"
	CXX = "C++"

	@classmethod
	def parse(cls, text: str) -> "Language":
		lowered = text.strip().lower()
		if lowered == "c":
			return cls.C
		if lowered in {"c++", "cxx", "cpp"}:
			return cls.CXX
		raise ValueError(f"unrecognized language: {text!r}")


class Style(Enum):
	"""How aggregates are declared in the emitted header."""

	BOTH = "both"  # typedef struct Foo { ... } Foo;
	TAG = "tag"  # struct Foo { ... };
	TYPE = "type"  # typedef struct { ... } Foo;

	def generate_typedef(self) -> bool:
		return self in (Style.BOTH, Style.TYPE)


@dataclass
class ExportConfig:
	include: List[str] = field(default_factory=list)
	exclude: List[str] = field(default_factory=list)
	rename: Dict[str, str] = field(default_factory=dict)
	prefix: Optional[str] = None

	def rename_name(self, name: str) -> str:
		"""Literal override first, then the prefix."""
		name = self.rename.get(name, name)
		if self.prefix:
			name = self.prefix + name
		return name

	def rename_path(self, path: Path) -> Path:
		return Path(self.rename_name(path.name))


@dataclass
class FunctionConfig:
	rename_args: Optional[RenameRule] = None


@dataclass
class StructConfig:
	rename_fields: Optional[RenameRule] = None


@dataclass
class UnionConfig:
	rename_fields: Optional[RenameRule] = None


@dataclass
class EnumConfig:
	rename_variants: Optional[RenameRule] = None
	prefix_with_name: bool = False


@dataclass
class Config:
	language: Language = Language.CXX
	style: Style = Style.BOTH
	export: ExportConfig = field(default_factory=ExportConfig)
	function: FunctionConfig = field(default_factory=FunctionConfig)
	structure: StructConfig = field(default_factory=StructConfig)
	union: UnionConfig = field(default_factory=UnionConfig)
	enumeration: EnumConfig = field(default_factory=EnumConfig)

	@classmethod
	def from_dict(cls, data: Mapping[str, Any]) -> "Config":
		"""Build a config from a TOML-shaped mapping; unknown keys are ignored."""
		if not isinstance(data, Mapping):
			raise BindgenError(INVALID_CONFIG, "configuration root must be a table")
		config = cls()
		if "language" in data:
			config.language = _parse_enum(Language.parse, data["language"], "language")
		if "style" in data:
			config.style = _parse_enum(lambda v: Style(v.strip().lower()), data["style"], "style")

		export = _as_table(data.get("export"), "export")
		config.export = ExportConfig(
			include=_as_str_list(export.get("include"), "export.include"),
			exclude=_as_str_list(export.get("exclude"), "export.exclude"),
			rename=_as_str_map(export.get("rename"), "export.rename"),
			prefix=_as_opt_str(export.get("prefix"), "export.prefix"),
		)

		fn = _as_table(data.get("fn"), "fn")
		config.function = FunctionConfig(rename_args=_as_rule(fn.get("rename_args"), "fn.rename_args"))

		struct = _as_table(data.get("struct"), "struct")
		config.structure = StructConfig(rename_fields=_as_rule(struct.get("rename_fields"), "struct.rename_fields"))

		union = _as_table(data.get("union"), "union")
		config.union = UnionConfig(rename_fields=_as_rule(union.get("rename_fields"), "union.rename_fields"))

		enum = _as_table(data.get("enum"), "enum")
		prefix_with_name = enum.get("prefix_with_name", False)
		if not isinstance(prefix_with_name, bool):
			raise BindgenError(INVALID_CONFIG, "enum.prefix_with_name must be a bool")
		config.enumeration = EnumConfig(
			rename_variants=_as_rule(enum.get("rename_variants"), "enum.rename_variants"),
			prefix_with_name=prefix_with_name,
		)
		return config


def load_config(config_path: FsPath) -> Config:
	"""Read a TOML configuration file from disk."""
	try:
		with config_path.open("rb") as fh:
			data = tomllib.load(fh)
	except tomllib.TOMLDecodeError as exc:
		raise BindgenError(INVALID_CONFIG, f"{config_path}: {exc}") from exc
	return Config.from_dict(data)


def _parse_enum(parse, value: Any, key: str):
	if not isinstance(value, str):
		raise BindgenError(INVALID_CONFIG, f"{key} must be a string")
	try:
		return parse(value)
	except ValueError as exc:
		raise BindgenError(INVALID_CONFIG, f"{key}: {exc}") from exc


def _as_table(value: Any, key: str) -> Mapping[str, Any]:
	if value is None:
		return {}
	if not isinstance(value, Mapping):
		raise BindgenError(INVALID_CONFIG, f"{key} must be a table")
	return value


def _as_str_list(value: Any, key: str) -> List[str]:
	if value is None:
		return []
	if not isinstance(value, list) or not all(isinstance(v, str) for v in value):
		raise BindgenError(INVALID_CONFIG, f"{key} must be a list of strings")
	return list(value)


def _as_str_map(value: Any, key: str) -> Dict[str, str]:
	table = _as_table(value, key)
	if not all(isinstance(v, str) for v in table.values()):
		raise BindgenError(INVALID_CONFIG, f"{key} values must be strings")
	return dict(table)


def _as_opt_str(value: Any, key: str) -> Optional[str]:
	if value is None:
		return None
	if not isinstance(value, str):
		raise BindgenError(INVALID_CONFIG, f"{key} must be a string")
	return value


def _as_rule(value: Any, key: str) -> Optional[RenameRule]:
	if value is None:
		return None
	return _parse_enum(RenameRule.parse, value, key)


__all__ = [
	"Config",
	"EnumConfig",
	"ExportConfig",
	"FunctionConfig",
	"Language",
	"StructConfig",
	"Style",
	"UnionConfig",
	"load_config",
]
