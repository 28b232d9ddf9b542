"""
rulelang - Error-tolerant parser for a production-rule language.

Parses rule files (packages, imports, globals, functions, templates, rules
and queries) into a position-annotated descriptor tree plus a list of
diagnostics.
"""

from __future__ import annotations

from ._version import get_version

# Re-export commonly used types for convenience
from .core import descr
from .core.config import ParserConfig, load_config
from .core.descr import PackageDescr, RuleDescr
from .core.errors import ConfigError, ParseError, RuleLangError
from .core.parser import parse_file, parse_files
from .core.parser_impl import Parser, ParseResult, parse_drl

__version__ = get_version()

__all__ = [
    "__version__",
    "descr",
    "PackageDescr",
    "RuleDescr",
    "Parser",
    "ParseResult",
    "parse_drl",
    "parse_file",
    "parse_files",
    "ParserConfig",
    "load_config",
    "RuleLangError",
    "ParseError",
    "ConfigError",
]
