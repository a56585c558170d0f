# vim: set noexpandtab: -*- indent-tabs-mode: t -*-
from __future__ import annotations

import logging

from hbindgen.diagnostics import Diagnostic
from hbindgen.errors import UNKNOWN_PATH, BindgenError
from hbindgen.ir.path import Path
from hbindgen.logging import configure_logging, get_logger


def test_error_renders_code_stage_and_paths() -> None:
	err = BindgenError(UNKNOWN_PATH, "missing", paths=(Path("A"), Path("B")), stage="dependency-ordered")
	assert str(err) == "[unknown-path] missing stage=dependency-ordered paths=(A, B)"
	assert err.to_dict() == {
		"reason_code": "unknown-path",
		"message": "missing",
		"paths": ["A", "B"],
		"stage": "dependency-ordered",
	}
	assert isinstance(err, Exception)


def test_diagnostic_format_includes_notes() -> None:
	diag = Diagnostic(message="something odd", code="odd", notes=("first", "second"))
	assert diag.format_human() == "warning[odd]: something odd\n  note: first\n  note: second"
	assert Diagnostic(message="plain", severity="error").format_human() == "error: plain"


def test_loggers_share_the_package_hierarchy() -> None:
	assert get_logger().name == "hbindgen"
	assert get_logger("library").name == "hbindgen.library"


def test_configure_logging_does_not_stack_handlers() -> None:
	logger = configure_logging(verbose=True)
	configure_logging(verbose=True)
	assert logger.level == logging.DEBUG
	assert len(logger.handlers) == 1
	configure_logging()
	assert logger.level == logging.INFO
	for handler in list(logger.handlers):
		logger.removeHandler(handler)
	logger.setLevel(logging.NOTSET)
