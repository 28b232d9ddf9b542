"""
Error types for rule language lexing and parsing.

Recognition errors are raised inside grammar productions and caught at the
nearest recovery boundary, where the error collector turns them into
diagnostics. They never escape the top-level parse entry point.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import TYPE_CHECKING, Optional

if TYPE_CHECKING:
    from .lexer import Token, TokenType


class ParseErrorKind(str, Enum):
    """Categories of parse diagnostics."""

    MISMATCHED_TOKEN = "MismatchedToken"
    NO_VIABLE_ALTERNATIVE = "NoViableAlternative"
    MISMATCHED_SET = "MismatchedSet"
    EARLY_EXIT = "EarlyExit"
    FAILED_PREDICATE = "FailedPredicate"
    GENERAL = "GeneralParseError"


class RuleLangError(Exception):
    """Base exception for all rule language errors."""

    def __init__(self, message: str, context: Optional["ErrorContext"] = None):
        self.message = message
        self.context = context
        super().__init__(self._format_message())

    def _format_message(self) -> str:
        """Format error message with context if available."""
        if self.context:
            return f"{self.context.format()}\n{self.message}"
        return self.message


class ConfigError(RuleLangError):
    """Raised when a configuration file cannot be read or validated."""

    pass


class ParseError(RuleLangError):
    """
    Raised when the token stream does not match the grammar.

    Subclasses identify which recognition check failed. ``token`` is the
    offending token, if any.
    """

    kind = ParseErrorKind.GENERAL

    def __init__(
        self,
        message: str,
        token: Token | None = None,
        context: ErrorContext | None = None,
    ):
        self.token = token
        super().__init__(message, context)


class MismatchedTokenError(ParseError):
    """A specific token type was required but another was found."""

    kind = ParseErrorKind.MISMATCHED_TOKEN

    def __init__(self, expected: TokenType, token: Token):
        from .lexer import describe_token_type

        self.expected = expected
        super().__init__(
            f"mismatched input '{_token_text(token)}' expecting {describe_token_type(expected)}",
            token,
        )


class MismatchedSetError(ParseError):
    """One of several token types was required but none matched."""

    kind = ParseErrorKind.MISMATCHED_SET

    def __init__(self, expected: frozenset[TokenType] | set[TokenType], token: Token):
        from .lexer import describe_token_type

        self.expected = frozenset(expected)
        names = ", ".join(sorted(describe_token_type(t) for t in self.expected))
        super().__init__(
            f"mismatched input '{_token_text(token)}' expecting one of {{{names}}}",
            token,
        )


class NoViableAltError(ParseError):
    """No grammar alternative can start with the current token."""

    kind = ParseErrorKind.NO_VIABLE_ALTERNATIVE

    def __init__(self, decision: str, token: Token):
        self.decision = decision
        super().__init__(
            f"no viable alternative at input '{_token_text(token)}' in {decision}",
            token,
        )


class EarlyExitError(ParseError):
    """A one-or-more repetition matched zero (or too few) times."""

    kind = ParseErrorKind.EARLY_EXIT

    def __init__(self, construct: str, token: Token):
        self.construct = construct
        super().__init__(
            f"required elements missing in {construct} at input '{_token_text(token)}'",
            token,
        )


class FailedPredicateError(ParseError):
    """A semantic check attached to a production did not hold."""

    kind = ParseErrorKind.FAILED_PREDICATE

    def __init__(self, predicate: str, token: Token):
        self.predicate = predicate
        super().__init__(f"failed predicate: {predicate}", token)


def _token_text(token: Token) -> str:
    from .lexer import TokenType

    if token.type == TokenType.EOF:
        return "<EOF>"
    return token.value


@dataclass
class ErrorContext:
    """
    Context information for an error, including source location.

    Attributes:
        source_name: Name of the source (usually a file path)
        line: Line number (1-indexed)
        column: Column number (0-indexed)
        snippet: Optional code snippet showing the error location
    """

    source_name: str
    line: int
    column: int
    snippet: str | None = None

    def format(self) -> str:
        """
        Format error context as a human-readable string.

        Returns:
            Formatted string like: "rules.drl:10:5"
        """
        location = f"{self.source_name}:{self.line}:{self.column}"
        if self.snippet:
            return f"{location}\n{self._format_snippet()}"
        return location

    def _format_snippet(self) -> str:
        """Format code snippet with line numbers and error marker."""
        if not self.snippet:
            return ""

        lines = self.snippet.split("\n")
        formatted = []

        # Snippet starts up to two lines before the error line
        start_line = max(1, self.line - 2)

        for i, line in enumerate(lines):
            line_num = start_line + i
            prefix = f"{line_num:4d} | "
            formatted.append(prefix + line)

            if line_num == self.line:
                formatted.append(" " * (len(prefix) + self.column) + "^^^")

        return "\n".join(formatted)


def make_parse_error(
    message: str,
    source_name: str,
    line: int,
    column: int,
    snippet: str | None = None,
) -> ParseError:
    """
    Helper to create a ParseError with context.

    Args:
        message: Error description
        source_name: Source file name
        line: Line number (1-indexed)
        column: Column number (0-indexed)
        snippet: Optional code snippet

    Returns:
        ParseError with context attached
    """
    context = ErrorContext(source_name=source_name, line=line, column=column, snippet=snippet)
    return ParseError(message, context=context)
