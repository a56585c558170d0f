# vim: set noexpandtab: -*- indent-tabs-mode: t -*-
from __future__ import annotations

import pytest

from hbindgen.rename import IdentifierType, RenameRule

MEMBER = IdentifierType.STRUCT_MEMBER
VARIANT = IdentifierType.ENUM_VARIANT
ARG = IdentifierType.FUNCTION_ARG


@pytest.mark.parametrize(
	("rule", "expected"),
	[
		(RenameRule.NONE, "field_name"),
		(RenameRule.GECKO_CASE, "mFieldName"),
		(RenameRule.LOWER_CASE, "field_name"),
		(RenameRule.UPPER_CASE, "FIELD_NAME"),
		(RenameRule.PASCAL_CASE, "FieldName"),
		(RenameRule.CAMEL_CASE, "fieldName"),
		(RenameRule.SNAKE_CASE, "field_name"),
		(RenameRule.SCREAMING_SNAKE_CASE, "FIELD_NAME"),
		(RenameRule.QUALIFIED_SCREAMING_SNAKE_CASE, "FIELD_NAME"),
	],
)
def test_snake_case_input(rule: RenameRule, expected: str) -> None:
	assert rule.apply_to_snake_case("field_name", MEMBER) == expected


@pytest.mark.parametrize(
	("rule", "expected"),
	[
		(RenameRule.NONE, "FooBar"),
		(RenameRule.GECKO_CASE, "FooBar"),
		(RenameRule.LOWER_CASE, "foobar"),
		(RenameRule.UPPER_CASE, "FOOBAR"),
		(RenameRule.PASCAL_CASE, "FooBar"),
		(RenameRule.CAMEL_CASE, "fooBar"),
		(RenameRule.SNAKE_CASE, "foo_bar"),
		(RenameRule.SCREAMING_SNAKE_CASE, "FOO_BAR"),
		(RenameRule.QUALIFIED_SCREAMING_SNAKE_CASE, "MY_ENUM_FOO_BAR"),
	],
)
def test_pascal_case_input(rule: RenameRule, expected: str) -> None:
	assert rule.apply_to_pascal_case("FooBar", VARIANT, enum_name="MyEnum") == expected


def test_gecko_prefix_depends_on_identifier_kind() -> None:
	assert RenameRule.GECKO_CASE.apply_to_snake_case("value", ARG) == "aValue"
	assert RenameRule.GECKO_CASE.apply_to_snake_case("value", MEMBER) == "mValue"


def test_empty_identifier_stays_empty() -> None:
	assert RenameRule.GECKO_CASE.apply_to_snake_case("", MEMBER) == ""


def test_parse_accepts_names_and_example_spellings() -> None:
	assert RenameRule.parse("ScreamingSnakeCase") is RenameRule.SCREAMING_SNAKE_CASE
	assert RenameRule.parse("SCREAMING_SNAKE_CASE") is RenameRule.SCREAMING_SNAKE_CASE
	assert RenameRule.parse("mGeckoCase") is RenameRule.GECKO_CASE
	assert RenameRule.parse("camelCase") is RenameRule.CAMEL_CASE
	with pytest.raises(ValueError, match="unrecognized rename rule"):
		RenameRule.parse("kebab-case")
