"""
Base parser class for the rule language.

Provides token navigation, matching, error reporting and resynchronisation
used by all parser mixins.
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING, Protocol, TypeVar, runtime_checkable

from ..config import ParserConfig
from ..diagnostics import ErrorCollector, ParseDiagnostic
from ..errors import MismatchedTokenError, ParseError
from ..factory import DescrFactory
from ..lexer import KEYWORD_TYPES, Token, TokenType
from ..token_stream import TokenStream

if TYPE_CHECKING:
    from .. import descr

logger = logging.getLogger(__name__)

D = TypeVar("D", bound="descr.BaseDescr")


# Tokens that can begin a top-level statement
STATEMENT_START = frozenset(
    {
        TokenType.PACKAGE,
        TokenType.IMPORT,
        TokenType.GLOBAL,
        TokenType.FUNCTION,
        TokenType.TEMPLATE,
        TokenType.RULE,
        TokenType.QUERY,
    }
)

# Resynchronisation sets for each recovery boundary
RULE_FOLLOW = STATEMENT_START
LHS_FOLLOW = STATEMENT_START | {TokenType.THEN, TokenType.END}
PATTERN_FOLLOW = LHS_FOLLOW | {TokenType.RPAREN}

ATTRIBUTE_TYPES = frozenset(
    {
        TokenType.SALIENCE,
        TokenType.NO_LOOP,
        TokenType.AUTO_FOCUS,
        TokenType.AGENDA_GROUP,
        TokenType.ACTIVATION_GROUP,
        TokenType.RULEFLOW_GROUP,
        TokenType.DURATION,
        TokenType.DIALECT,
        TokenType.LOCK_ON_ACTIVE,
        TokenType.ENABLED,
        TokenType.DATE_EFFECTIVE,
        TokenType.DATE_EXPIRES,
    }
)


@runtime_checkable
class ParserProtocol(Protocol):
    """
    Protocol defining the interface available to parser mixins.

    This allows mypy to understand that mixins will have access to
    BaseParser methods when combined in the final Parser class.
    """

    stream: TokenStream
    factory: DescrFactory
    collector: ErrorCollector
    package: descr.PackageDescr
    backtracking: int

    def current_token(self) -> Token: ...
    def peek_token(self, offset: int = 1) -> Token: ...
    def advance(self) -> Token: ...
    def expect(self, token_type: TokenType) -> Token: ...
    def expect_identifier(self) -> Token: ...
    def match(self, *token_types: TokenType) -> bool: ...
    def optional(self, token_type: TokenType) -> Token | None: ...
    def is_identifier(self, token: Token | None = None) -> bool: ...
    def dotted_name(self) -> str: ...
    def type_name(self) -> str: ...
    def finish(self, node: D) -> D: ...
    def report_error(self, error: ParseError) -> None: ...
    def report_general(self, message: str, token: Token | None) -> None: ...
    def recover(self, follow: frozenset[TokenType]) -> None: ...

    # Methods from other mixins that may be called cross-mixin
    def speculate(self, production: object, description: str = "") -> bool: ...
    def paren_chunk(self) -> str: ...
    def curly_chunk(self) -> str: ...
    def square_chunk(self) -> str: ...
    def pattern_source(self) -> descr.PatternDescr: ...


class BaseParser:
    """
    Base parser class with token manipulation utilities.

    This class provides the foundation for recursive descent parsing:
    token navigation, matching, and turning recognition errors into
    diagnostics at recovery boundaries.
    """

    def __init__(
        self,
        tokens: list[Token],
        source_name: str = "<input>",
        source: str = "",
        config: ParserConfig | None = None,
    ):
        """
        Initialize parser.

        Args:
            tokens: Tokens from the lexer, trivia included
            source_name: Source name (for diagnostics)
            source: Original source text (for span extraction)
            config: Parser configuration
        """
        self.config = config or ParserConfig()
        self.source_name = source_name
        self.stream = TokenStream(tokens, source)
        self.factory = DescrFactory()
        self.collector = ErrorCollector(source_name, self.config.max_errors)
        self.package = self.factory.create_package()
        self.backtracking = 0
        self.current_rule_name: str | None = None
        self._last_error_index = -1

    @property
    def errors(self) -> list[ParseDiagnostic]:
        return self.collector.errors

    @property
    def has_errors(self) -> bool:
        return self.collector.has_errors

    @property
    def speculating(self) -> bool:
        """True while a speculative trial is running."""
        return self.backtracking > 0

    def current_token(self) -> Token:
        """Get current token."""
        return self.stream.lt(1)

    def peek_token(self, offset: int = 1) -> Token:
        """Peek ahead at token."""
        return self.stream.lt(1 + offset)

    def advance(self) -> Token:
        """Consume and return current token."""
        token = self.stream.consume()
        if not self.speculating:
            self.collector.token_matched()
        return token

    def match(self, *token_types: TokenType) -> bool:
        """Check if current token matches any of the given types."""
        return self.current_token().type in token_types

    def expect(self, token_type: TokenType) -> Token:
        """
        Expect a specific token type and consume it.

        Raises:
            MismatchedTokenError: If token doesn't match
        """
        token = self.current_token()
        if token.type != token_type:
            raise MismatchedTokenError(token_type, token)
        return self.advance()

    def optional(self, token_type: TokenType) -> Token | None:
        """Consume the current token if it has the given type."""
        if self.match(token_type):
            return self.advance()
        return None

    def is_identifier(self, token: Token | None = None) -> bool:
        """Identifiers include every keyword: keywords are not reserved."""
        token = token or self.current_token()
        return token.type == TokenType.ID or token.type in KEYWORD_TYPES

    def expect_identifier(self) -> Token:
        """
        Expect an identifier, accepting keywords as identifiers.

        Raises:
            MismatchedTokenError: If the current token cannot name anything
        """
        token = self.current_token()
        if not self.is_identifier(token):
            raise MismatchedTokenError(TokenType.ID, token)
        return self.advance()

    def dotted_name(self) -> str:
        """Parse dotted name (e.g., com.acme.Person)."""
        parts = [self.expect_identifier().value]
        while self.match(TokenType.DOT):
            self.advance()
            parts.append(self.expect_identifier().value)
        return ".".join(parts)

    def type_name(self) -> str:
        """
        Parse a type: dotted name, optional generic arguments, array suffixes.

        Examples:
            java.util.List
            Map<String, List<Integer>>
            String[][]
        """
        name = self.dotted_name()

        if self.match(TokenType.LESS):
            parts = [self.advance().value]
            depth = 1
            while depth:
                token = self.current_token()
                if token.type == TokenType.EOF:
                    raise MismatchedTokenError(TokenType.GREATER, token)
                if token.type == TokenType.LESS:
                    depth += 1
                elif token.type == TokenType.GREATER:
                    depth -= 1
                parts.append(self.advance().value)
            name += "".join(parts)

        while self.match(TokenType.LBRACKET):
            self.advance()
            self.expect(TokenType.RBRACKET)
            name += "[]"

        return name

    @staticmethod
    def string_value(token: Token) -> str:
        """Strip the surrounding quotes of a STRING token (escapes are kept)."""
        text = token.value
        if len(text) >= 2 and text[0] == text[-1] and text[0] in ('"', "'"):
            return text[1:-1]
        return text[1:]

    def finish(self, node: D) -> D:
        """Set a node's end offset to the end of the last consumed token."""
        previous = self.stream.previous_token()
        end = previous.stop if previous else node.start_offset
        node.end_offset = max(end, node.start_offset)
        return node

    # Error handling

    def report_error(self, error: ParseError) -> None:
        """Record a recognition error. Silent while speculating."""
        if self.speculating:
            return
        self.collector.report(error, self.current_rule_name)

    def report_general(self, message: str, token: Token | None) -> None:
        """Record a semantic error found during parsing. Silent while speculating."""
        if self.speculating:
            return
        self.collector.report_general(message, token, self.current_rule_name)

    def recover(self, follow: frozenset[TokenType]) -> None:
        """
        Resynchronise after an error.

        Discards tokens until one in ``follow`` (or EOF) is current. If the
        previous recovery happened at this same position, one token is
        consumed first so the enclosing loop always makes progress.
        """
        if self._last_error_index == self.stream.index:
            self.stream.consume()
        self._last_error_index = self.stream.index

        skipped = 0
        while (token := self.current_token()).type != TokenType.EOF and token.type not in follow:
            self.stream.consume()
            skipped += 1

        if skipped:
            token = self.current_token()
            logger.debug(
                f"{self.source_name}: resynchronised at {token.line}:{token.column} "
                f"after skipping {skipped} token(s)"
            )
