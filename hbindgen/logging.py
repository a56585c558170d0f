# vim: set noexpandtab: -*- indent-tabs-mode: t -*-
"""Logging helpers for the hbindgen package."""

from __future__ import annotations

import logging

_LOGGER_NAME = "hbindgen"


def get_logger(name: str | None = None) -> logging.Logger:
	"""Return a module-scoped logger under the hbindgen hierarchy."""
	full_name = f"{_LOGGER_NAME}.{name}" if name else _LOGGER_NAME
	return logging.getLogger(full_name)


def configure_logging(*, verbose: bool = False) -> logging.Logger:
	"""Attach a console handler to the hbindgen logger (DEBUG when verbose)."""
	level = logging.DEBUG if verbose else logging.INFO
	logger = logging.getLogger(_LOGGER_NAME)
	logger.setLevel(level)

	# Reset handlers so repeated configuration does not duplicate output.
	for handler in list(logger.handlers):
		logger.removeHandler(handler)

	handler = logging.StreamHandler()
	handler.setLevel(level)
	handler.setFormatter(logging.Formatter("[hbindgen] %(levelname)s %(message)s"))
	logger.addHandler(handler)
	return logger


__all__ = ["configure_logging", "get_logger"]
