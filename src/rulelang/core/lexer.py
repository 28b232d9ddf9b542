"""
Lexer/Tokenizer for the rule language.

Converts raw rule source into a stream of tokens with source location
tracking. Whitespace and comments are emitted as trivia tokens so that
concatenating every token's text reproduces the source exactly; the token
stream decides whether trivia is visible to the parser.
"""

from dataclasses import dataclass
from enum import Enum


class TokenType(Enum):
    """Token types in the rule language."""

    # Literals
    ID = "ID"
    STRING = "STRING"
    INT = "INT"
    FLOAT = "FLOAT"
    BOOL = "BOOL"
    NULL = "NULL"

    # Structural keywords
    PACKAGE = "package"
    IMPORT = "import"
    FUNCTION = "function"
    GLOBAL = "global"
    RULE = "rule"
    QUERY = "query"
    TEMPLATE = "template"
    WHEN = "when"
    THEN = "then"
    END = "end"
    FROM = "from"
    ACCUMULATE = "accumulate"
    COLLECT = "collect"
    INIT = "init"
    ACTION = "action"
    RESULT = "result"
    EXISTS = "exists"
    NOT = "not"
    EVAL = "eval"
    FORALL = "forall"
    AND = "and"
    OR = "or"

    # Attribute keywords
    SALIENCE = "salience"
    NO_LOOP = "no-loop"
    AUTO_FOCUS = "auto-focus"
    AGENDA_GROUP = "agenda-group"
    ACTIVATION_GROUP = "activation-group"
    RULEFLOW_GROUP = "ruleflow-group"
    DURATION = "duration"
    DIALECT = "dialect"
    LOCK_ON_ACTIVE = "lock-on-active"
    ENABLED = "enabled"
    DATE_EFFECTIVE = "date-effective"
    DATE_EXPIRES = "date-expires"
    ATTRIBUTES = "attributes"

    # Word operators
    CONTAINS = "contains"
    EXCLUDES = "excludes"
    MATCHES = "matches"
    SOUNDSLIKE = "soundslike"
    MEMBEROF = "memberOf"
    IN = "in"

    # Operators
    EQUAL = "EQUAL"
    NOT_EQUAL = "NOT_EQUAL"
    GREATER = "GREATER"
    GREATER_EQUAL = "GREATER_EQUAL"
    LESS = "LESS"
    LESS_EQUAL = "LESS_EQUAL"
    ARROW = "ARROW"
    DOUBLE_AMPER = "DOUBLE_AMPER"
    AMPER = "AMPER"
    DOUBLE_PIPE = "DOUBLE_PIPE"
    PIPE = "PIPE"

    # Punctuation
    LPAREN = "LPAREN"
    RPAREN = "RPAREN"
    LBRACE = "LBRACE"
    RBRACE = "RBRACE"
    LBRACKET = "LBRACKET"
    RBRACKET = "RBRACKET"
    COMMA = "COMMA"
    SEMICOLON = "SEMICOLON"
    COLON = "COLON"
    DOT = "DOT"

    # Trivia
    WS = "WS"
    SL_COMMENT = "SL_COMMENT"
    ML_COMMENT = "ML_COMMENT"

    # Anything else (only meaningful inside captured chunks)
    MISC = "MISC"

    EOF = "EOF"


# Keyword members are exactly those whose value is their lower-case source text
KEYWORDS = {t.value: t for t in TokenType if t.value[0].islower()}

KEYWORD_TYPES = frozenset(KEYWORDS.values())

# Keywords spelled with a hyphen, keyed by the word before the first hyphen
HYPHENATED_KEYWORDS = {
    "no": ("no-loop",),
    "auto": ("auto-focus",),
    "lock": ("lock-on-active",),
    "agenda": ("agenda-group",),
    "activation": ("activation-group",),
    "ruleflow": ("ruleflow-group",),
    "date": ("date-effective", "date-expires"),
}

TRIVIA_TYPES = frozenset({TokenType.WS, TokenType.SL_COMMENT, TokenType.ML_COMMENT})

LITERAL_TYPES = frozenset(
    {TokenType.STRING, TokenType.INT, TokenType.FLOAT, TokenType.BOOL, TokenType.NULL}
)

_PUNCTUATION = {
    "(": TokenType.LPAREN,
    ")": TokenType.RPAREN,
    "{": TokenType.LBRACE,
    "}": TokenType.RBRACE,
    "[": TokenType.LBRACKET,
    "]": TokenType.RBRACKET,
    ",": TokenType.COMMA,
    ";": TokenType.SEMICOLON,
    ":": TokenType.COLON,
    ".": TokenType.DOT,
}

# Two-character operators are tried before single-character ones
_OPERATORS = (
    ("==", TokenType.EQUAL),
    ("!=", TokenType.NOT_EQUAL),
    (">=", TokenType.GREATER_EQUAL),
    ("<=", TokenType.LESS_EQUAL),
    ("->", TokenType.ARROW),
    ("&&", TokenType.DOUBLE_AMPER),
    ("||", TokenType.DOUBLE_PIPE),
    (">", TokenType.GREATER),
    ("<", TokenType.LESS),
    ("&", TokenType.AMPER),
    ("|", TokenType.PIPE),
)

_DISPLAY_NAMES = {
    TokenType.ID: "identifier",
    TokenType.STRING: "string literal",
    TokenType.INT: "integer literal",
    TokenType.FLOAT: "float literal",
    TokenType.BOOL: "boolean literal",
    TokenType.NULL: "'null'",
    TokenType.EOF: "<EOF>",
    TokenType.WS: "whitespace",
    TokenType.SL_COMMENT: "comment",
    TokenType.ML_COMMENT: "comment",
    TokenType.MISC: "symbol",
}
_DISPLAY_NAMES.update({t: f"'{text}'" for text, t in _PUNCTUATION.items()})
_DISPLAY_NAMES.update({t: f"'{text}'" for text, t in _OPERATORS})


def describe_token_type(token_type: TokenType) -> str:
    """Human-readable name for a token type, as used in error messages."""
    if token_type in _DISPLAY_NAMES:
        return _DISPLAY_NAMES[token_type]
    return f"'{token_type.value}'"


def _is_digit(ch: str | None) -> bool:
    """ASCII digits only; str.isdigit() also accepts characters int() rejects."""
    return ch is not None and "0" <= ch <= "9"


@dataclass
class Token:
    """
    A single token in the rule source.

    Attributes:
        type: Type of token
        value: Source text of the token, exactly as written
        line: Line number (1-indexed)
        column: Column number (0-indexed)
        start: Offset of the first character
        stop: Offset one past the last character
    """

    type: TokenType
    value: str
    line: int
    column: int
    start: int
    stop: int

    @property
    def is_trivia(self) -> bool:
        return self.type in TRIVIA_TYPES

    def __repr__(self) -> str:
        return f"Token({self.type.name}, {self.value!r}, {self.line}:{self.column})"


class Lexer:
    """
    Lexer for the rule language.

    Never raises: characters outside the grammar become MISC tokens, and
    unterminated strings or block comments run to the end of input.
    """

    def __init__(self, text: str, source_name: str = "<input>", hash_comments: bool = True):
        """
        Initialize lexer.

        Args:
            text: Source text to tokenize
            source_name: Source name (for diagnostics)
            hash_comments: Treat '#' as a line comment introducer
        """
        self.text = text
        self.source_name = source_name
        self.hash_comments = hash_comments
        self.pos = 0
        self.line = 1
        self.column = 0
        self.tokens: list[Token] = []

    def current_char(self) -> str | None:
        """Get current character or None if at end."""
        if self.pos >= len(self.text):
            return None
        return self.text[self.pos]

    def peek_char(self, offset: int = 1) -> str | None:
        """Peek ahead at character."""
        pos = self.pos + offset
        if pos >= len(self.text):
            return None
        return self.text[pos]

    def advance(self) -> None:
        """Move to next character, updating line/column."""
        if self.pos < len(self.text):
            if self.text[self.pos] == "\n":
                self.line += 1
                self.column = 0
            else:
                self.column += 1
            self.pos += 1

    def _emit(self, token_type: TokenType, start: int, line: int, column: int) -> None:
        self.tokens.append(Token(token_type, self.text[start : self.pos], line, column, start, self.pos))

    def read_whitespace(self) -> None:
        while (ch := self.current_char()) is not None and ch in " \t\r\n\f":
            self.advance()

    def read_line_comment(self) -> None:
        while (ch := self.current_char()) is not None and ch != "\n":
            self.advance()

    def read_block_comment(self) -> None:
        self.advance()
        self.advance()
        while self.current_char() is not None:
            if self.current_char() == "*" and self.peek_char() == "/":
                self.advance()
                self.advance()
                return
            self.advance()

    def read_string(self) -> None:
        """Read a quoted string, keeping quotes and escapes in the token text."""
        quote = self.current_char()
        self.advance()
        while (ch := self.current_char()) is not None:
            if ch == "\\":
                self.advance()
                self.advance()
            elif ch == quote:
                self.advance()
                return
            else:
                self.advance()

    def read_number(self) -> TokenType:
        """Read an integer or decimal number, with optional leading minus."""
        if self.current_char() == "-":
            self.advance()
        while (ch := self.current_char()) is not None and _is_digit(ch):
            self.advance()
        if self.current_char() == "." and _is_digit(self.peek_char()):
            self.advance()
            while (ch := self.current_char()) is not None and _is_digit(ch):
                self.advance()
            return TokenType.FLOAT
        return TokenType.INT

    def read_identifier(self) -> str:
        """Read an identifier, keyword, or hyphenated attribute keyword."""
        start = self.pos
        while (ch := self.current_char()) is not None and (ch.isalnum() or ch in "_$"):
            self.advance()
        word = self.text[start : self.pos]

        for candidate in HYPHENATED_KEYWORDS.get(word, ()):
            end = start + len(candidate)
            following = self.text[end : end + 1]
            if self.text.startswith(candidate, start) and not (
                following.isalnum() or following in ("_", "$")
            ):
                while self.pos < end:
                    self.advance()
                return candidate

        return word

    def tokenize(self) -> list[Token]:
        """
        Tokenize the entire source text.

        Returns:
            List of tokens, including trivia, ending with EOF
        """
        while self.pos < len(self.text):
            ch = self.text[self.pos]
            start = self.pos
            token_line = self.line
            token_col = self.column

            if ch in " \t\r\n\f":
                self.read_whitespace()
                self._emit(TokenType.WS, start, token_line, token_col)

            elif ch == "/" and self.peek_char() == "/":
                self.read_line_comment()
                self._emit(TokenType.SL_COMMENT, start, token_line, token_col)

            elif ch == "#" and self.hash_comments:
                self.read_line_comment()
                self._emit(TokenType.SL_COMMENT, start, token_line, token_col)

            elif ch == "/" and self.peek_char() == "*":
                self.read_block_comment()
                self._emit(TokenType.ML_COMMENT, start, token_line, token_col)

            elif ch in ('"', "'"):
                self.read_string()
                self._emit(TokenType.STRING, start, token_line, token_col)

            elif _is_digit(ch) or (ch == "-" and _is_digit(self.peek_char())):
                token_type = self.read_number()
                self._emit(token_type, start, token_line, token_col)

            elif ch.isalpha() or ch in "_$":
                word = self.read_identifier()
                if word in ("true", "false"):
                    token_type = TokenType.BOOL
                elif word == "null":
                    token_type = TokenType.NULL
                else:
                    token_type = KEYWORDS.get(word, TokenType.ID)
                self._emit(token_type, start, token_line, token_col)

            elif ch in _PUNCTUATION:
                self.advance()
                self._emit(_PUNCTUATION[ch], start, token_line, token_col)

            else:
                for text, token_type in _OPERATORS:
                    if self.text.startswith(text, self.pos):
                        for _ in text:
                            self.advance()
                        break
                else:
                    token_type = TokenType.MISC
                    self.advance()
                self._emit(token_type, start, token_line, token_col)

        self.tokens.append(
            Token(TokenType.EOF, "", self.line, self.column, len(self.text), len(self.text))
        )
        return self.tokens


def tokenize(text: str, source_name: str = "<input>", hash_comments: bool = True) -> list[Token]:
    """
    Convenience function to tokenize rule source.

    Args:
        text: Source text
        source_name: Source name
        hash_comments: Treat '#' as a line comment introducer

    Returns:
        List of tokens
    """
    lexer = Lexer(text, source_name, hash_comments=hash_comments)
    return lexer.tokenize()
