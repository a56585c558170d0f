"""
hbindgen: reduce a host-language declaration IR to emission-ready C/C++ bindings.

Modules:
  - library: the `Library` transformation pipeline
  - bindings: the packaged result
  - config: resolved configuration (and TOML loading)
  - rename: identifier casing rules
  - monomorph / mangle: generic instantiation for strict C
  - ctype_resolver: struct/union/enum tags for strict C
  - dependencies: discovery and declaration ordering
  - errors / diagnostics / logging: ambient reporting
"""

from hbindgen.bindings import Bindings
from hbindgen.config import Config, Language, Style, load_config
from hbindgen.diagnostics import Diagnostic
from hbindgen.errors import BindgenError
from hbindgen.ir import TypeParseError, parse_type
from hbindgen.library import Library, Stage

__all__ = [
	"BindgenError",
	"Bindings",
	"Config",
	"Diagnostic",
	"Language",
	"Library",
	"Stage",
	"Style",
	"TypeParseError",
	"load_config",
	"parse_type",
]
