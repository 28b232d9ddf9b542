"""Tests for the rule language lexer."""

from rulelang.core.lexer import TokenType, describe_token_type, tokenize


def _types(text: str, trivia: bool = False, hash_comments: bool = True) -> list[TokenType]:
    return [
        t.type for t in tokenize(text, hash_comments=hash_comments) if trivia or not t.is_trivia
    ]


class TestKeywords:
    """Tests for keyword recognition."""

    def test_structural_keywords(self):
        assert _types("rule when then end") == [
            TokenType.RULE,
            TokenType.WHEN,
            TokenType.THEN,
            TokenType.END,
            TokenType.EOF,
        ]

    def test_hyphenated_attribute_keywords(self):
        tokens = [t for t in tokenize("no-loop lock-on-active date-expires agenda-group")]
        visible = [t for t in tokens if not t.is_trivia]

        assert [t.type for t in visible] == [
            TokenType.NO_LOOP,
            TokenType.LOCK_ON_ACTIVE,
            TokenType.DATE_EXPIRES,
            TokenType.AGENDA_GROUP,
            TokenType.EOF,
        ]
        assert visible[0].value == "no-loop"

    def test_hyphen_without_keyword_is_not_joined(self):
        assert _types("no-body") == [TokenType.ID, TokenType.MISC, TokenType.ID, TokenType.EOF]

    def test_keyword_prefix_of_identifier(self):
        assert _types("rules") == [TokenType.ID, TokenType.EOF]
        assert _types("no-loops") == [TokenType.ID, TokenType.MISC, TokenType.ID, TokenType.EOF]

    def test_member_of_is_case_sensitive(self):
        assert _types("memberOf") == [TokenType.MEMBEROF, TokenType.EOF]
        assert _types("memberof") == [TokenType.ID, TokenType.EOF]

    def test_dollar_identifier(self):
        tokens = tokenize("$p")
        assert tokens[0].type == TokenType.ID
        assert tokens[0].value == "$p"


class TestLiterals:
    """Tests for literal tokens."""

    def test_literal_kinds(self):
        assert _types("\"a\" 1 -2 3.5 true null") == [
            TokenType.STRING,
            TokenType.INT,
            TokenType.INT,
            TokenType.FLOAT,
            TokenType.BOOL,
            TokenType.NULL,
            TokenType.EOF,
        ]

    def test_non_ascii_digits_are_not_numbers(self):
        tokens = tokenize("² -٣")

        assert tokens[0].type == TokenType.MISC
        assert TokenType.INT not in [t.type for t in tokens]

    def test_string_keeps_quotes_and_escapes(self):
        token = tokenize(r'"say \"hi\""')[0]
        assert token.type == TokenType.STRING
        assert token.value == r'"say \"hi\""'

    def test_single_quoted_string(self):
        token = tokenize("'x'")[0]
        assert token.type == TokenType.STRING
        assert token.value == "'x'"

    def test_unterminated_string_runs_to_end(self):
        tokens = tokenize('"abc')
        assert tokens[0].type == TokenType.STRING
        assert tokens[0].value == '"abc'
        assert tokens[1].type == TokenType.EOF


class TestOperatorsAndPunctuation:
    """Tests for operators, punctuation and unknown characters."""

    def test_operators(self):
        assert _types("== != >= <= -> && || > < & |") == [
            TokenType.EQUAL,
            TokenType.NOT_EQUAL,
            TokenType.GREATER_EQUAL,
            TokenType.LESS_EQUAL,
            TokenType.ARROW,
            TokenType.DOUBLE_AMPER,
            TokenType.DOUBLE_PIPE,
            TokenType.GREATER,
            TokenType.LESS,
            TokenType.AMPER,
            TokenType.PIPE,
            TokenType.EOF,
        ]

    def test_unknown_characters_become_misc(self):
        tokens = tokenize("@ *")
        assert tokens[0].type == TokenType.MISC
        assert tokens[0].value == "@"
        assert tokens[2].type == TokenType.MISC
        assert tokens[2].value == "*"

    def test_describe_token_type(self):
        assert describe_token_type(TokenType.RPAREN) == "')'"
        assert describe_token_type(TokenType.THEN) == "'then'"
        assert describe_token_type(TokenType.ID) == "identifier"


class TestTrivia:
    """Tests for whitespace and comment tokens."""

    def test_comment_kinds(self):
        assert _types("// c\n# h\n/* m */", trivia=True) == [
            TokenType.SL_COMMENT,
            TokenType.WS,
            TokenType.SL_COMMENT,
            TokenType.WS,
            TokenType.ML_COMMENT,
            TokenType.EOF,
        ]

    def test_hash_comments_can_be_disabled(self):
        assert _types("# x", hash_comments=False) == [TokenType.MISC, TokenType.ID, TokenType.EOF]

    def test_unterminated_block_comment(self):
        tokens = tokenize("/* open")
        assert tokens[0].type == TokenType.ML_COMMENT
        assert tokens[0].value == "/* open"


class TestPositions:
    """Tests for line, column and offsets."""

    def test_offsets_and_positions(self):
        text = 'rule "R"\n  when'
        tokens = [t for t in tokenize(text) if not t.is_trivia]

        rule, name, when, eof = tokens
        assert (rule.line, rule.column, rule.start, rule.stop) == (1, 0, 0, 4)
        assert (name.start, name.stop) == (5, 8)
        assert (when.line, when.column, when.start, when.stop) == (2, 2, 11, 15)
        assert (eof.start, eof.stop) == (len(text), len(text))

    def test_token_values_reproduce_source(self):
        text = 'package a.b;\n/* c */ rule "x" // t\nwhen\n\tP( a > -1 )\nthen end\n'
        assert "".join(t.value for t in tokenize(text)) == text

    def test_every_token_value_matches_its_offsets(self):
        text = "rule 'R' salience -5 when X(y == 1.25) then foo(); end"
        for token in tokenize(text):
            assert text[token.start : token.stop] == token.value
