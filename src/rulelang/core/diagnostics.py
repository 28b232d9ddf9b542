"""
Parse diagnostics and the error collector.

The collector records errors without raising. After a recognition error it
enters error-recovery mode and drops further recognition errors until a
token is matched successfully again, so one bad construct yields one
diagnostic rather than a cascade.
"""

from __future__ import annotations

import logging

from pydantic import BaseModel, ConfigDict

from .errors import ErrorContext, ParseError, ParseErrorKind
from .lexer import Token, TokenType

logger = logging.getLogger(__name__)


class ParseDiagnostic(BaseModel):
    """
    A single recorded parse error.

    Attributes:
        kind: Which check failed
        source_name: Name of the parsed source
        line: Line number (1-indexed)
        column: Column number (0-indexed)
        offset: Character offset of the offending token
        token_text: Text of the offending token ("" at end of input)
        message: Human-readable description
        rule_name: Enclosing rule or query, if any
    """

    kind: ParseErrorKind
    source_name: str
    line: int
    column: int
    offset: int = -1
    token_text: str = ""
    message: str
    rule_name: str | None = None

    model_config = ConfigDict(frozen=True)

    def format(self) -> str:
        """Format as ``source:line:column: message``."""
        text = f"{self.source_name}:{self.line}:{self.column}: {self.message}"
        if self.rule_name:
            text += f" in rule '{self.rule_name}'"
        return text

    def to_context(self, source: str | None = None) -> ErrorContext:
        """
        Build an ErrorContext, with a snippet of up to three lines when the
        source text is given.
        """
        snippet = None
        if source is not None:
            lines = source.splitlines()
            first = max(1, self.line - 2)
            snippet = "\n".join(lines[first - 1 : self.line])
        return ErrorContext(self.source_name, self.line, self.column, snippet)

    def __str__(self) -> str:
        return self.format()


class ErrorCollector:
    """
    Accumulates parse diagnostics for one parse.

    Attributes:
        source_name: Name used in every diagnostic
        max_errors: Stop recording after this many diagnostics (None = no cap)
        errors: Recorded diagnostics in source order of detection
        in_error_recovery: True between an error and the next matched token
    """

    def __init__(self, source_name: str, max_errors: int | None = None):
        self.source_name = source_name
        self.max_errors = max_errors
        self.errors: list[ParseDiagnostic] = []
        self.in_error_recovery = False
        self.suppressed = 0

    @property
    def has_errors(self) -> bool:
        return bool(self.errors)

    def report(self, error: ParseError, rule_name: str | None = None) -> None:
        """Record a recognition error unless a previous one is still being recovered from."""
        if self.in_error_recovery:
            self.suppressed += 1
            logger.debug(f"Suppressed cascading error: {error.message}")
            return
        self.in_error_recovery = True
        self._add(error.kind, error.message, error.token, rule_name)

    def report_general(self, message: str, token: Token | None, rule_name: str | None = None) -> None:
        """Record a semantic error found during parsing. Not subject to suppression."""
        self._add(ParseErrorKind.GENERAL, message, token, rule_name)

    def token_matched(self) -> None:
        """A token matched the grammar, so normal reporting resumes."""
        self.in_error_recovery = False

    def _add(
        self,
        kind: ParseErrorKind,
        message: str,
        token: Token | None,
        rule_name: str | None,
    ) -> None:
        if self.max_errors is not None and len(self.errors) >= self.max_errors:
            self.suppressed += 1
            return

        if token is not None:
            line, column, offset = token.line, token.column, token.start
            token_text = "" if token.type == TokenType.EOF else token.value
        else:
            line, column, offset, token_text = 1, 0, -1, ""

        self.errors.append(
            ParseDiagnostic(
                kind=kind,
                source_name=self.source_name,
                line=line,
                column=column,
                offset=offset,
                token_text=token_text,
                message=message,
                rule_name=rule_name,
            )
        )
