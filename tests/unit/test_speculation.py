"""Tests for speculative lookahead."""

from rulelang.core.errors import ParseError


class TestSpeculate:
    """Trial parses report success, stay silent and always rewind."""

    def test_success_rewinds(self, make_parser):
        parser = make_parser("import function a.b.c;")

        assert parser.speculate(parser.parse_function_import) is True
        assert parser.stream.index == 0
        assert parser.backtracking == 0

    def test_success_does_not_mutate_package(self, make_parser):
        parser = make_parser("import function a.b.c;")
        parser.speculate(parser.parse_function_import)

        assert parser.package.function_imports == []

    def test_failure_rewinds_and_is_silent(self, make_parser):
        parser = make_parser("import a.b.c;")

        assert parser.speculate(parser.parse_function_import) is False
        assert parser.stream.index == 0
        assert parser.backtracking == 0
        assert parser.errors == []

    def test_recovery_boundaries_propagate_while_speculating(self, make_parser):
        parser = make_parser("rule R when Person( then end")

        assert parser.speculate(parser.parse_rule) is False
        assert parser.errors == []
        assert parser.package.rules == []

    def test_nested_speculation(self, make_parser):
        parser = make_parser("import a.b; import function c.d;")
        seen = []

        def outer():
            seen.append(parser.speculate(parser.parse_function_import))
            parser.parse_import()
            seen.append(parser.speculate(parser.parse_function_import))
            parser.parse_function_import()

        assert parser.speculate(outer) is True
        assert seen == [False, True]
        assert parser.stream.index == 0
        assert parser.package.imports == []
        assert parser.package.function_imports == []

    def test_any_parse_error_fails_the_trial(self, make_parser):
        parser = make_parser("x")

        def boom():
            raise ParseError("stop")

        assert parser.speculate(boom, "boom") is False

    def test_trivia_channel_restored_after_failed_chunk(self, make_parser):
        parser = make_parser("(a (b)")

        assert parser.speculate(parser.paren_chunk) is False
        assert parser.stream.trivia_visible is False
