"""
Chunk scanning for embedded code.

Predicates, return-value expressions, eval bodies, accumulate code and
function bodies are not part of the rule grammar. They are captured verbatim
between balanced delimiters with trivia made visible, so the returned text
is exactly the source between and including the delimiters.
"""

from typing import TYPE_CHECKING, Any

from ..errors import MismatchedTokenError
from ..lexer import TokenType

_NO_STOP: frozenset[TokenType] = frozenset()

# A square chunk ends at an unbalanced ')' or '}' rather than swallowing it
_SQUARE_STOP = frozenset({TokenType.RPAREN, TokenType.RBRACE})


class ChunkScannerMixin:
    """
    Mixin providing balanced-delimiter raw text capture.

    Note: This mixin expects to be combined with BaseParser via multiple inheritance.
    """

    if TYPE_CHECKING:
        stream: Any
        expect: Any
        advance: Any
        current_token: Any

    def paren_chunk(self) -> str:
        """Capture ``( ... )`` including nested parentheses."""
        return self._chunk(TokenType.LPAREN, TokenType.RPAREN, _NO_STOP)

    def curly_chunk(self) -> str:
        """Capture ``{ ... }`` including nested braces."""
        return self._chunk(TokenType.LBRACE, TokenType.RBRACE, _NO_STOP)

    def square_chunk(self) -> str:
        """Capture ``[ ... ]`` including nested brackets."""
        return self._chunk(TokenType.LBRACKET, TokenType.RBRACKET, _SQUARE_STOP)

    def _chunk(
        self,
        open_type: TokenType,
        close_type: TokenType,
        stop: frozenset[TokenType],
    ) -> str:
        """
        Capture one balanced region.

        Nesting is handled by recursion on a nested opening delimiter. The
        trivia channel is made visible for the duration and restored on every
        exit path.

        Raises:
            MismatchedTokenError: At end of input or at a stop token before
                the closing delimiter
        """
        opening = self.expect(open_type)
        parts = [opening.value]

        self.stream.push_trivia_visible(True)
        try:
            while True:
                token = self.current_token()
                if token.type == open_type:
                    parts.append(self._chunk(open_type, close_type, stop))
                elif token.type == close_type:
                    parts.append(self.advance().value)
                    break
                elif token.type == TokenType.EOF or token.type in stop:
                    raise MismatchedTokenError(close_type, token)
                else:
                    parts.append(self.advance().value)
        finally:
            self.stream.pop_trivia()

        return "".join(parts)


def strip_delimiters(chunk: str) -> str:
    """Remove the outer delimiters from a captured chunk."""
    return chunk[1:-1]
