"""Tests for conditional element parsing (the rule LHS)."""

from rulelang.core import descr
from rulelang.core.errors import ParseErrorKind


def _lhs(parse_ok, conditions: str) -> list:
    rule = parse_ok(f"rule R when {conditions} then end").rules[0]
    return rule.lhs.descrs


def _types(node) -> list[str]:
    return [d.object_type for d in node.descrs]


def _walk(node):
    yield node
    if isinstance(node, descr.ConditionalElementDescr):
        for child in node.descrs:
            yield from _walk(child)


class TestConnectives:
    """Tests for or/and precedence and lazy construction."""

    def test_or(self, parse_ok):
        (node,) = _lhs(parse_ok, "Person() or Car()")

        assert isinstance(node, descr.OrDescr)
        assert _types(node) == ["Person", "Car"]

    def test_symbolic_connectives(self, parse_ok):
        (node,) = _lhs(parse_ok, "A() || B() || C()")
        assert isinstance(node, descr.OrDescr)
        assert _types(node) == ["A", "B", "C"]

        (node,) = _lhs(parse_ok, "A() && B()")
        assert isinstance(node, descr.AndDescr)
        assert _types(node) == ["A", "B"]

    def test_and_binds_tighter_than_or(self, parse_ok):
        (node,) = _lhs(parse_ok, "A() or B() and C()")

        assert isinstance(node, descr.OrDescr)
        assert node.descrs[0].object_type == "A"
        assert isinstance(node.descrs[1], descr.AndDescr)
        assert _types(node.descrs[1]) == ["B", "C"]

    def test_and_first(self, parse_ok):
        (node,) = _lhs(parse_ok, "A() and B() or C()")

        assert isinstance(node, descr.OrDescr)
        assert isinstance(node.descrs[0], descr.AndDescr)
        assert node.descrs[1].object_type == "C"

    def test_parentheses_override_precedence(self, parse_ok):
        (node,) = _lhs(parse_ok, "(A() or B()) and C()")

        assert isinstance(node, descr.AndDescr)
        assert isinstance(node.descrs[0], descr.OrDescr)
        assert node.descrs[1].object_type == "C"

    def test_single_operand_is_not_wrapped(self, parse_ok):
        descrs = _lhs(parse_ok, "Person()")

        assert len(descrs) == 1
        assert isinstance(descrs[0], descr.PatternDescr)

    def test_no_single_child_combinators(self, parse_ok):
        text = "rule R when (A()) not (B()) exists ((C())) (or D()) A() or (B() and C()) then end"
        rule = parse_ok(text).rules[0]

        for node in _walk(rule.lhs):
            if node is rule.lhs:
                continue
            if isinstance(node, (descr.AndDescr, descr.OrDescr)):
                assert len(node.descrs) >= 2

    def test_implicit_and_at_top_level(self, parse_ok):
        descrs = _lhs(parse_ok, "A()\n B();\n C()")
        assert [d.object_type for d in descrs] == ["A", "B", "C"]

    def test_connective_offsets(self, parse_ok):
        text = "rule R when Person() or Car() then end"
        node = parse_ok(text).rules[0].lhs.descrs[0]

        assert node.span(text) == "Person() or Car()"
        assert node.column == text.index("Person")


class TestPrefixConnectives:
    def test_prefix_or(self, parse_ok):
        (node,) = _lhs(parse_ok, "(or A() B())")
        assert isinstance(node, descr.OrDescr)
        assert _types(node) == ["A", "B"]

    def test_prefix_and(self, parse_ok):
        (node,) = _lhs(parse_ok, "(and A() B() C())")
        assert isinstance(node, descr.AndDescr)
        assert _types(node) == ["A", "B", "C"]

    def test_prefix_single_operand(self, parse_ok):
        (node,) = _lhs(parse_ok, "(or A())")
        assert isinstance(node, descr.PatternDescr)

    def test_prefix_without_operands(self, parse):
        result = parse("rule R when (or ) then end")

        assert [e.kind for e in result.errors] == [ParseErrorKind.EARLY_EXIT]
        assert result.package.rules[0].lhs.descrs == []


class TestUnaryElements:
    def test_not(self, parse_ok):
        (node,) = _lhs(parse_ok, "not Person()")

        assert isinstance(node, descr.NotDescr)
        assert node.descrs[0].object_type == "Person"

    def test_not_group(self, parse_ok):
        (node,) = _lhs(parse_ok, "not (A() or B())")

        assert isinstance(node, descr.NotDescr)
        assert isinstance(node.descrs[0], descr.OrDescr)

    def test_exists(self, parse_ok):
        text = "rule R when exists Person(age > 1) then end"
        node = parse_ok(text).rules[0].lhs.descrs[0]

        assert isinstance(node, descr.ExistsDescr)
        assert node.descrs[0].object_type == "Person"
        assert node.span(text) == "exists Person(age > 1)"

    def test_eval(self, parse_ok):
        (node,) = _lhs(parse_ok, "eval( $a > 1 )")

        assert isinstance(node, descr.EvalDescr)
        assert node.content == " $a > 1 "

    def test_eval_trailing_semicolon(self, parse):
        result = parse("rule R when eval(x > 1;) then end")

        assert isinstance(result.package.rules[0].lhs.descrs[0], descr.EvalDescr)
        assert len(result.errors) == 1
        assert result.errors[0].kind == ParseErrorKind.GENERAL
        assert result.errors[0].message == "trailing semi-colon not allowed"

    def test_forall(self, parse_ok):
        (node,) = _lhs(parse_ok, 'forall( $b : Bus(), Bus(color == "red") )')

        assert isinstance(node, descr.ForallDescr)
        assert node.base_pattern.identifier == "$b"
        assert [p.object_type for p in node.remaining_patterns] == ["Bus"]

    def test_forall_without_commas(self, parse_ok):
        (node,) = _lhs(parse_ok, "forall( A() B() C() )")
        assert len(node.remaining_patterns) == 2

    def test_forall_needs_two_patterns(self, parse):
        result = parse("rule R when forall( Bus() ) then end\nrule S when then end")

        assert [e.kind for e in result.errors] == [ParseErrorKind.EARLY_EXIT]
        assert result.package.rule_names == ["R", "S"]

    def test_unexpected_token(self, parse):
        result = parse("rule R when == then end")

        error = result.errors[0]
        assert error.kind == ParseErrorKind.NO_VIABLE_ALTERNATIVE
        assert "conditional element" in error.message


class TestLHSRoot:
    def test_root_is_and(self, parse_ok):
        rule = parse_ok("rule R when Person() or Car() then end").rules[0]

        assert isinstance(rule.lhs, descr.AndDescr)
        assert isinstance(rule.lhs.descrs[0], descr.OrDescr)

    def test_root_span(self, parse_ok):
        text = "rule R when\n  A()\n  B(x == 1)\nthen end"
        lhs = parse_ok(text).rules[0].lhs

        assert lhs.span(text) == "A()\n  B(x == 1)"

    def test_empty_lhs(self, parse_ok):
        text = "rule R when then end"
        lhs = parse_ok(text).rules[0].lhs

        assert lhs.descrs == []
        assert lhs.start_offset == lhs.end_offset == text.index("when") + 4
