"""
Token stream with a switchable trivia channel.

The stream holds every token the lexer produced, trivia included. While
trivia is hidden, lookahead and consumption skip whitespace and comments;
the chunk scanner makes trivia visible so captured text stays byte-identical
to the source. Visibility changes follow a push/pop discipline.
"""

from .lexer import Token, TokenType


class TokenStream:
    """
    Cursor over a token list.

    Attributes:
        tokens: All tokens, ending with EOF
        source: Original source text (for span extraction)
        index: Raw index of the next unconsumed token
    """

    def __init__(self, tokens: list[Token], source: str = ""):
        if not tokens or tokens[-1].type != TokenType.EOF:
            end = len(source)
            line = tokens[-1].line if tokens else 1
            tokens = [*tokens, Token(TokenType.EOF, "", line, 0, end, end)]
        self.tokens = tokens
        self.source = source
        self.index = 0
        self._trivia_visible = False
        self._trivia_stack: list[bool] = []

    @property
    def trivia_visible(self) -> bool:
        return self._trivia_visible

    def push_trivia_visible(self, visible: bool = True) -> None:
        """Save the current trivia visibility and switch to ``visible``."""
        self._trivia_stack.append(self._trivia_visible)
        self._trivia_visible = visible

    def pop_trivia(self) -> None:
        """Restore the trivia visibility saved by the matching push."""
        self._trivia_visible = self._trivia_stack.pop()

    def reset_trivia(self) -> None:
        """Hide trivia and drop every saved visibility."""
        self._trivia_stack.clear()
        self._trivia_visible = False

    def _seek(self, i: int) -> int:
        last = len(self.tokens) - 1
        if not self._trivia_visible:
            while i < last and self.tokens[i].is_trivia:
                i += 1
        return min(i, last)

    def lt(self, k: int = 1) -> Token:
        """Return the k-th visible token ahead of the cursor (1-based)."""
        i = self._seek(self.index)
        for _ in range(k - 1):
            i = self._seek(i + 1)
        return self.tokens[i]

    def consume(self) -> Token:
        """Consume and return the next visible token. EOF is never consumed."""
        i = self._seek(self.index)
        token = self.tokens[i]
        if token.type != TokenType.EOF:
            self.index = i + 1
        return token

    def mark(self) -> int:
        return self.index

    def rewind(self, marker: int) -> None:
        self.index = marker

    def previous_token(self) -> Token | None:
        """Return the most recently consumed non-trivia token."""
        i = self.index - 1
        while i >= 0 and self.tokens[i].is_trivia:
            i -= 1
        return self.tokens[i] if i >= 0 else None

    def text(self, start: int, stop: int) -> str:
        """Source text between two character offsets."""
        return self.source[start:stop]

    def __len__(self) -> int:
        return len(self.tokens)
