"""Core rulelang functionality: lexer, token stream, descriptors, parser, diagnostics, config."""

from . import descr
from .config import ParserConfig, find_config, load_config
from .diagnostics import ErrorCollector, ParseDiagnostic
from .errors import (
    ConfigError,
    EarlyExitError,
    ErrorContext,
    FailedPredicateError,
    MismatchedSetError,
    MismatchedTokenError,
    NoViableAltError,
    ParseError,
    ParseErrorKind,
    RuleLangError,
)
from .lexer import Lexer, Token, TokenType, tokenize
from .parser import collect_rule_files, parse_file, parse_files
from .parser_impl import Parser, ParseResult, parse_drl
from .token_stream import TokenStream

__all__ = [
    "descr",
    "ParserConfig",
    "find_config",
    "load_config",
    "ErrorCollector",
    "ParseDiagnostic",
    "RuleLangError",
    "ConfigError",
    "ParseError",
    "ParseErrorKind",
    "MismatchedTokenError",
    "MismatchedSetError",
    "NoViableAltError",
    "EarlyExitError",
    "FailedPredicateError",
    "ErrorContext",
    "Lexer",
    "Token",
    "TokenType",
    "tokenize",
    "TokenStream",
    "Parser",
    "ParseResult",
    "parse_drl",
    "parse_file",
    "parse_files",
    "collect_rule_files",
]
