"""
Pattern, constraint and restriction parsing.

Examples:
    $p : Person(age > 18 && < 65, $n : name, name != "root")
    Cheese(type == Cheese.STILTON, price < ($max * 2))
    Order(status in ("NEW", "OPEN"), $d : discount -> ($d > 0))
"""

from typing import TYPE_CHECKING, Any

from .. import descr
from ..errors import MismatchedSetError, NoViableAltError, ParseError
from ..lexer import LITERAL_TYPES, Token, TokenType
from .base import PATTERN_FOLLOW
from .chunks import strip_delimiters

_SIMPLE_OPERATORS = frozenset(
    {
        TokenType.EQUAL,
        TokenType.NOT_EQUAL,
        TokenType.GREATER,
        TokenType.GREATER_EQUAL,
        TokenType.LESS,
        TokenType.LESS_EQUAL,
    }
)

# Keyword operators that may be negated with a leading 'not'
_NEGATABLE_OPERATORS = frozenset(
    {
        TokenType.CONTAINS,
        TokenType.EXCLUDES,
        TokenType.MATCHES,
        TokenType.SOUNDSLIKE,
        TokenType.MEMBEROF,
    }
)

OPERATOR_TYPES = _SIMPLE_OPERATORS | _NEGATABLE_OPERATORS | {TokenType.NOT, TokenType.IN}

_CONNECTIVES = {
    TokenType.AMPER: descr.Connective.AND,
    TokenType.DOUBLE_AMPER: descr.Connective.AND,
    TokenType.AND: descr.Connective.AND,
    TokenType.PIPE: descr.Connective.OR,
    TokenType.DOUBLE_PIPE: descr.Connective.OR,
    TokenType.OR: descr.Connective.OR,
}

_LITERAL_KINDS = {
    TokenType.STRING: descr.LiteralType.STRING,
    TokenType.INT: descr.LiteralType.NUMBER,
    TokenType.FLOAT: descr.LiteralType.NUMBER,
    TokenType.BOOL: descr.LiteralType.BOOLEAN,
    TokenType.NULL: descr.LiteralType.NULL,
}


class PatternParserMixin:
    """
    Mixin providing pattern and constraint parsing.

    Note: This mixin expects to be combined with BaseParser via multiple inheritance.
    """

    if TYPE_CHECKING:
        stream: Any
        factory: Any
        speculating: Any
        expect: Any
        advance: Any
        match: Any
        optional: Any
        current_token: Any
        peek_token: Any
        is_identifier: Any
        expect_identifier: Any
        dotted_name: Any
        string_value: Any
        finish: Any
        report_error: Any
        report_general: Any
        recover: Any
        speculate: Any
        paren_chunk: Any
        parse_from_source: Any

    def pattern_source(self) -> descr.PatternDescr:
        """
        Parse a pattern with an optional data source.

        Grammar:
            lhs_pattern (FROM from_source)?
        """
        pattern = self.lhs_pattern()
        if self.match(TokenType.FROM):
            pattern.source = self.parse_from_source()
            pattern.end_offset = max(pattern.end_offset, pattern.source.end_offset)
        return pattern

    def lhs_pattern(self) -> descr.PatternDescr:
        """
        Parse a fact pattern.

        Grammar:
            (identifier ':')? dotted_name '(' constraints? ')'

        The constraint list is a recovery boundary: on error the rest of the
        list is skipped up to ')' or the end of the rule's LHS.
        """
        start = self.current_token()
        identifier = None
        if self.is_identifier(start) and self.peek_token().type == TokenType.COLON:
            identifier = self.advance().value
            self.advance()

        object_type = self.dotted_name()
        pattern = self.factory.create_pattern(object_type, start)
        pattern.identifier = identifier

        pattern.left_paren = self.expect(TokenType.LPAREN).start
        try:
            self.parse_constraints(pattern)
            pattern.right_paren = self.expect(TokenType.RPAREN).start
        except ParseError as e:
            if self.speculating:
                raise
            self.report_error(e)
            self.recover(PATTERN_FOLLOW)
            if self.match(TokenType.RPAREN):
                pattern.right_paren = self.advance().start

        return self.finish(pattern)

    def parse_constraints(self, pattern: descr.PatternDescr) -> None:
        """constraint (',' constraint)*"""
        if self.match(TokenType.RPAREN):
            return
        self.parse_constraint(pattern)
        while self.match(TokenType.COMMA):
            self.advance()
            self.parse_constraint(pattern)

    def parse_constraint(self, pattern: descr.PatternDescr) -> None:
        """
        Parse one constraint and append what it produces to ``pattern``.

        Grammar:
            '(' code ')'                                  standalone predicate
            EVAL '(' code ')'                             inline eval predicate
            (identifier ':')? field '->' '(' code ')'    field predicate
            (identifier ':')? field restrictions?        field constraint
        """
        token = self.current_token()

        if token.type == TokenType.LPAREN:
            pattern.add_constraint(self._parse_predicate(token))
            return
        if token.type == TokenType.EVAL and self.peek_token().type == TokenType.LPAREN:
            self.advance()
            pattern.add_constraint(self._parse_predicate(token))
            return

        declaration = None
        if self.is_identifier(token) and self.peek_token().type == TokenType.COLON:
            declaration = self.advance().value
            self.advance()

        field_token = self.current_token()
        field_name = self.dotted_name()

        if declaration is not None:
            binding = self.factory.create_field_binding(field_name, declaration, token)
            pattern.add_constraint(self.finish(binding))

        if self.match(TokenType.ARROW):
            self.advance()
            pattern.add_constraint(
                self._parse_predicate(token, field_name=field_name, declaration=declaration)
            )
            return

        if not self.match(*OPERATOR_TYPES):
            if declaration is None:
                raise MismatchedSetError(OPERATOR_TYPES | {TokenType.ARROW}, self.current_token())
            return

        constraint = self.factory.create_field_constraint(field_name, field_token)
        self.parse_restrictions(constraint)
        pattern.add_constraint(self.finish(constraint))

    def _parse_predicate(
        self,
        token: Token,
        field_name: str | None = None,
        declaration: str | None = None,
    ) -> descr.PredicateDescr:
        content = strip_delimiters(self.paren_chunk())
        self._check_trailing_semicolon(content, token)
        predicate = self.factory.create_predicate(content, token, field_name, declaration)
        return self.finish(predicate)

    def _check_trailing_semicolon(self, content: str, token: Token) -> None:
        if content.rstrip().endswith(";"):
            self.report_general("trailing semi-colon not allowed", token)

    def parse_restrictions(self, constraint: descr.FieldConstraintDescr) -> None:
        """
        Parse a restriction list.

        Grammar:
            restriction (connective restriction)*
            connective := '&' | '&&' | 'and' | '|' | '||' | 'or'

        A connective only continues the list when a restriction follows it;
        otherwise it is left for the enclosing grammar.
        """
        for restriction in self.parse_restriction():
            constraint.add_restriction(restriction)

        while self.current_token().type in _CONNECTIVES:
            if not self.speculate(self._connective_restriction, "restriction connective"):
                break
            token = self.advance()
            constraint.add_restriction(
                self.factory.create_connective(_CONNECTIVES[token.type], token)
            )
            for restriction in self.parse_restriction():
                constraint.add_restriction(restriction)

    def _connective_restriction(self) -> None:
        self.advance()
        self.parse_restriction()

    def parse_restriction(self) -> list[descr.Restriction]:
        """
        Parse an operator and its value.

        Returns a list because ``in (a, b)`` expands to several restrictions
        joined by connectives.
        """
        token = self.current_token()

        if token.type in _SIMPLE_OPERATORS:
            self.advance()
            return [self.parse_restriction_value(token.value, token)]

        if token.type in _NEGATABLE_OPERATORS:
            self.advance()
            return [self.parse_restriction_value(token.value, token)]

        if token.type == TokenType.IN:
            self.advance()
            return self._parse_in_list("==", descr.Connective.OR)

        if token.type == TokenType.NOT:
            self.advance()
            operator = self.current_token()
            if operator.type == TokenType.IN:
                self.advance()
                return self._parse_in_list("!=", descr.Connective.AND)
            if operator.type in _NEGATABLE_OPERATORS:
                self.advance()
                return [self.parse_restriction_value(f"not {operator.value}", token)]
            raise MismatchedSetError(_NEGATABLE_OPERATORS | {TokenType.IN}, operator)

        raise MismatchedSetError(OPERATOR_TYPES, token)

    def _parse_in_list(
        self, evaluator: str, connective: descr.Connective
    ) -> list[descr.Restriction]:
        """
        Expand ``in (v1, v2, ...)`` into ``== v1 || == v2 ...``.

        Connectives are located at the separating commas.
        """
        self.expect(TokenType.LPAREN)
        restrictions: list[descr.Restriction] = [
            self.parse_restriction_value(evaluator, self.current_token())
        ]
        while self.match(TokenType.COMMA):
            comma = self.advance()
            restrictions.append(self.factory.create_connective(connective, comma))
            restrictions.append(self.parse_restriction_value(evaluator, self.current_token()))
        self.expect(TokenType.RPAREN)
        return restrictions

    def parse_restriction_value(self, evaluator: str, token: Token) -> descr.Restriction:
        """
        Parse the value side of a restriction.

        The alternative is picked on token shape alone:
            literal               -> LiteralRestrictionDescr
            '(' code ')'          -> ReturnValueRestrictionDescr
            identifier ('.' id)+  -> LiteralRestrictionDescr (enum constant)
            identifier            -> VariableRestrictionDescr

        Args:
            evaluator: Operator text, e.g. ``==`` or ``not memberOf``
            token: Token that locates the restriction
        """
        value = self.current_token()
        node: descr.Restriction

        if value.type in LITERAL_TYPES:
            self.advance()
            text = self.string_value(value) if value.type == TokenType.STRING else value.value
            node = self.factory.create_literal_restriction(
                evaluator, text, _LITERAL_KINDS[value.type], token
            )
        elif value.type == TokenType.LPAREN:
            content = strip_delimiters(self.paren_chunk())
            self._check_trailing_semicolon(content, value)
            node = self.factory.create_return_value_restriction(evaluator, content, token)
        elif self.is_identifier(value) and self.peek_token().type == TokenType.DOT:
            node = self.factory.create_literal_restriction(
                evaluator, self.dotted_name(), descr.LiteralType.ENUM, token
            )
        elif self.is_identifier(value):
            self.advance()
            node = self.factory.create_variable_restriction(evaluator, value.value, token)
        else:
            raise NoViableAltError("restriction value", value)

        return self.finish(node)
