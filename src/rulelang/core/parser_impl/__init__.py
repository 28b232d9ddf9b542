"""
Rule Language Parser Package.

This package provides a modular recursive-descent parser for rule files.
The parser is built using mixins to separate parsing logic by construct type.

The main exports are:
- Parser: The complete parser class
- ParseResult: Package descriptor plus diagnostics
- parse_drl: Convenience function to parse rule source text

Usage:
    from rulelang.core.parser_impl import parse_drl

    result = parse_drl(text, "rules.drl")
    if result.has_errors:
        for diagnostic in result.errors:
            print(diagnostic)
"""

import logging
from dataclasses import dataclass, field

from .. import descr
from ..config import ParserConfig
from ..diagnostics import ParseDiagnostic
from ..lexer import tokenize
from .base import BaseParser
from .chunks import ChunkScannerMixin
from .lhs import LHSParserMixin
from .package import PackageParserMixin
from .pattern import PatternParserMixin
from .rule import RuleParserMixin
from .sources import SourcesParserMixin
from .speculation import SpeculationMixin

logger = logging.getLogger(__name__)


class Parser(
    BaseParser,
    ChunkScannerMixin,
    SpeculationMixin,
    PackageParserMixin,
    RuleParserMixin,
    LHSParserMixin,
    PatternParserMixin,
    SourcesParserMixin,
):
    """
    Complete rule language parser.

    Each mixin provides parsing for a specific part of the grammar:

    - ChunkScannerMixin: Verbatim capture of (), {} and [] regions
    - SpeculationMixin: Silent trial parses with rewind
    - PackageParserMixin: Package, imports, globals, functions, templates
    - RuleParserMixin: Rules, queries, attributes and consequences
    - LHSParserMixin: Conditional elements (or/and/not/exists/eval/forall)
    - PatternParserMixin: Patterns, constraints and restrictions
    - SourcesParserMixin: from/accumulate/collect
    """


@dataclass
class ParseResult:
    """Outcome of parsing one source: a best-effort package and its diagnostics."""

    package: descr.PackageDescr
    errors: list[ParseDiagnostic] = field(default_factory=list)
    source_name: str = "<input>"

    @property
    def has_errors(self) -> bool:
        return bool(self.errors)


def parse_drl(
    text: str,
    source_name: str = "<input>",
    config: ParserConfig | None = None,
) -> ParseResult:
    """
    Parse rule source text.

    Never raises on malformed input; check ``ParseResult.has_errors``.

    Args:
        text: Rule source text
        source_name: Name used in diagnostics (usually the file path)
        config: Parser configuration

    Returns:
        ParseResult with the package descriptor and ordered diagnostics
    """
    config = config or ParserConfig()
    tokens = tokenize(text, source_name, hash_comments=config.hash_comments)

    parser = Parser(tokens, source_name, text, config)
    package = parser.parse_compilation_unit()

    logger.debug(
        f"{source_name}: {len(package.rules)} rule(s), {len(parser.errors)} error(s)"
    )
    return ParseResult(package=package, errors=parser.errors, source_name=source_name)


__all__ = [
    "Parser",
    "ParseResult",
    "parse_drl",
    "BaseParser",
    "ChunkScannerMixin",
    "SpeculationMixin",
    "PackageParserMixin",
    "RuleParserMixin",
    "LHSParserMixin",
    "PatternParserMixin",
    "SourcesParserMixin",
]
