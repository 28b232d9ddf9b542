"""Tests for verbatim chunk capture."""

import pytest

from rulelang.core.errors import MismatchedTokenError
from rulelang.core.parser_impl.chunks import strip_delimiters


class TestParenChunk:
    def test_nested_parentheses(self, make_parser):
        parser = make_parser("(a (b (c)) d) rest")

        assert parser.paren_chunk() == "(a (b (c)) d)"
        assert parser.current_token().value == "rest"

    def test_whitespace_and_comments_are_kept(self, make_parser):
        text = "(  x /* note */ +\n\t// tail\n  y )"
        parser = make_parser(text)

        assert parser.paren_chunk() == text

    def test_delimiters_inside_strings_are_ignored(self, make_parser):
        parser = make_parser("(a == ')' ) z")

        assert parser.paren_chunk() == "(a == ')' )"
        assert parser.current_token().value == "z"

    def test_leading_whitespace_is_not_captured(self, make_parser):
        parser = make_parser("   ( x )")
        assert parser.paren_chunk() == "( x )"

    def test_other_delimiters_are_plain_text(self, make_parser):
        parser = make_parser("(a ] { )")
        assert parser.paren_chunk() == "(a ] { )"

    def test_unbalanced_raises_and_restores_channel(self, make_parser):
        parser = make_parser("(a (b)")

        with pytest.raises(MismatchedTokenError):
            parser.paren_chunk()
        assert parser.stream.trivia_visible is False

    def test_channel_restored_after_success(self, make_parser):
        parser = make_parser("((x))")
        parser.paren_chunk()
        assert parser.stream.trivia_visible is False


class TestCurlyAndSquareChunks:
    def test_curly_chunk(self, make_parser):
        text = "{ if (x) { y(); } }"
        parser = make_parser(text)
        assert parser.curly_chunk() == text

    def test_square_chunk(self, make_parser):
        parser = make_parser("[ a[0] ]")
        assert parser.square_chunk() == "[ a[0] ]"

    def test_square_chunk_stops_at_unbalanced_paren(self, make_parser):
        parser = make_parser("[a ) ]")

        with pytest.raises(MismatchedTokenError):
            parser.square_chunk()


class TestByteIdentity:
    @pytest.mark.parametrize(
        "chunk",
        [
            "()",
            "( )",
            "(a(b(c(d(e)))))",
            "(\n  x > 1 && // why\n  y < /* two */ 2\n)",
            "(\"(\" + ')' + \"\\\")\")",
        ],
    )
    def test_capture_equals_source_slice(self, make_parser, chunk):
        text = f"  {chunk}  trailing"
        parser = make_parser(text)

        captured = parser.paren_chunk()
        start = text.index("(")
        assert captured == text[start : start + len(chunk)]


def test_strip_delimiters():
    assert strip_delimiters("( a )") == " a "
    assert strip_delimiters("{}") == ""
