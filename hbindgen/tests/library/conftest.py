# vim: set noexpandtab: -*- indent-tabs-mode: t -*-
import pytest

from hbindgen.config import Config, Language, Style


@pytest.fixture
def c_config() -> Config:
	"""Strict C with tag-only declarations: monomorphization and tag resolution both run."""
	return Config(language=Language.C, style=Style.TAG)
