# vim: set noexpandtab: -*- indent-tabs-mode: t -*-
"""
Identifier casing rules.

A rule is applied either to snake_case input (struct fields, function
arguments) or to PascalCase input (enum variants). Rules are pure functions of
their input and context.
"""

from __future__ import annotations

from enum import Enum, auto
from typing import Optional


class IdentifierType(Enum):
	"""What kind of identifier is being renamed; GeckoCase prefixes depend on it."""

	STRUCT_MEMBER = auto()
	ENUM_VARIANT = auto()
	FUNCTION_ARG = auto()
	ENUM = auto()

	@property
	def gecko_prefix(self) -> str:
		return _GECKO_PREFIX[self.name]


_GECKO_PREFIX = {
	"STRUCT_MEMBER": "m",
	"ENUM_VARIANT": "",
	"FUNCTION_ARG": "a",
	"ENUM": "",
}


class RenameRule(Enum):
	NONE = "None"
	GECKO_CASE = "GeckoCase"
	LOWER_CASE = "LowerCase"
	UPPER_CASE = "UpperCase"
	PASCAL_CASE = "PascalCase"
	CAMEL_CASE = "CamelCase"
	SNAKE_CASE = "SnakeCase"
	SCREAMING_SNAKE_CASE = "ScreamingSnakeCase"
	QUALIFIED_SCREAMING_SNAKE_CASE = "QualifiedScreamingSnakeCase"

	@classmethod
	def parse(cls, text: str) -> "RenameRule":
		"""Accept both the rule name and its example spelling (`snake_case`, `mGeckoCase`...)."""
		try:
			return _RULE_ALIASES[text]
		except KeyError:
			raise ValueError(f"unrecognized rename rule: {text!r}") from None

	def apply_to_snake_case(
		self,
		text: str,
		context: IdentifierType,
		*,
		enum_name: Optional[str] = None,
	) -> str:
		if not text:
			return ""
		if self is RenameRule.NONE or self is RenameRule.SNAKE_CASE:
			return text
		if self is RenameRule.GECKO_CASE:
			return context.gecko_prefix + RenameRule.PASCAL_CASE.apply_to_snake_case(text, context)
		if self is RenameRule.LOWER_CASE:
			return text.lower()
		if self is RenameRule.UPPER_CASE or self is RenameRule.SCREAMING_SNAKE_CASE:
			return text.upper()
		if self is RenameRule.PASCAL_CASE:
			return _snake_to_pascal(text)
		if self is RenameRule.CAMEL_CASE:
			pascal = _snake_to_pascal(text)
			return pascal[:1].lower() + pascal[1:]
		return _qualifier(context, enum_name) + text.upper()

	def apply_to_pascal_case(
		self,
		text: str,
		context: IdentifierType,
		*,
		enum_name: Optional[str] = None,
	) -> str:
		if not text:
			return ""
		if self is RenameRule.NONE or self is RenameRule.PASCAL_CASE:
			return text
		if self is RenameRule.GECKO_CASE:
			return context.gecko_prefix + text
		if self is RenameRule.LOWER_CASE:
			return text.lower()
		if self is RenameRule.UPPER_CASE:
			return text.upper()
		if self is RenameRule.CAMEL_CASE:
			return text[:1].lower() + text[1:]
		if self is RenameRule.SNAKE_CASE:
			return _pascal_to_snake(text)
		if self is RenameRule.SCREAMING_SNAKE_CASE:
			return _pascal_to_snake(text).upper()
		return _qualifier(context, enum_name) + _pascal_to_snake(text).upper()


_RULE_ALIASES = {
	"None": RenameRule.NONE,
	"GeckoCase": RenameRule.GECKO_CASE,
	"mGeckoCase": RenameRule.GECKO_CASE,
	"LowerCase": RenameRule.LOWER_CASE,
	"lowercase": RenameRule.LOWER_CASE,
	"UpperCase": RenameRule.UPPER_CASE,
	"UPPERCASE": RenameRule.UPPER_CASE,
	"PascalCase": RenameRule.PASCAL_CASE,
	"CamelCase": RenameRule.CAMEL_CASE,
	"camelCase": RenameRule.CAMEL_CASE,
	"SnakeCase": RenameRule.SNAKE_CASE,
	"snake_case": RenameRule.SNAKE_CASE,
	"ScreamingSnakeCase": RenameRule.SCREAMING_SNAKE_CASE,
	"SCREAMING_SNAKE_CASE": RenameRule.SCREAMING_SNAKE_CASE,
	"QualifiedScreamingSnakeCase": RenameRule.QUALIFIED_SCREAMING_SNAKE_CASE,
	"QUALIFIED_SCREAMING_SNAKE_CASE": RenameRule.QUALIFIED_SCREAMING_SNAKE_CASE,
}


def _snake_to_pascal(text: str) -> str:
	out: list[str] = []
	upper_next = True
	for ch in text:
		if ch == "_":
			upper_next = True
		elif upper_next:
			out.append(ch.upper())
			upper_next = False
		else:
			out.append(ch)
	return "".join(out)


def _pascal_to_snake(text: str) -> str:
	out: list[str] = []
	for i, ch in enumerate(text):
		if ch.isupper() and i != 0:
			out.append("_")
		out.append(ch.lower())
	return "".join(out)


def _qualifier(context: IdentifierType, enum_name: Optional[str]) -> str:
	# Only enum variants are qualified, by their enum's name.
	if context is IdentifierType.ENUM_VARIANT and enum_name:
		return RenameRule.SCREAMING_SNAKE_CASE.apply_to_pascal_case(enum_name, IdentifierType.ENUM) + "_"
	return ""


__all__ = ["IdentifierType", "RenameRule"]
