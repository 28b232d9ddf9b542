"""
LHS conditional element parsing.

Precedence, loosest first:
    or  ('or' | '||')
    and ('and' | '&&')
    unary: exists, not, eval, forall, '(' group ')', pattern [from ...]

Combinators are built lazily: an OrDescr/AndDescr is only created once a
second operand is seen, so ``A`` stays a bare pattern and ``A or B`` yields
a two-child OrDescr.
"""

from typing import TYPE_CHECKING, Any

from .. import descr
from ..errors import EarlyExitError, NoViableAltError
from ..lexer import TokenType
from .chunks import strip_delimiters

_OR_TYPES = (TokenType.OR, TokenType.DOUBLE_PIPE)
_AND_TYPES = (TokenType.AND, TokenType.DOUBLE_AMPER)


class LHSParserMixin:
    """
    Mixin providing conditional element parsing.

    Note: This mixin expects to be combined with BaseParser via multiple inheritance.
    """

    if TYPE_CHECKING:
        stream: Any
        factory: Any
        expect: Any
        advance: Any
        match: Any
        optional: Any
        current_token: Any
        is_identifier: Any
        finish: Any
        report_general: Any
        paren_chunk: Any
        pattern_source: Any
        lhs_pattern: Any

    def parse_lhs_or(self) -> descr.ConditionalElement:
        """
        Parse OR expression.

        Grammar:
            lhs_and (('or' | '||') lhs_and)*
        """
        left = self.parse_lhs_and()
        node = None

        while self.match(*_OR_TYPES):
            self.advance()
            right = self.parse_lhs_and()
            if node is None:
                node = self.factory.create_or_from(left)
                node.add_descr(left)
            node.add_descr(right)

        if node is None:
            return left
        node.end_offset = node.descrs[-1].end_offset
        return node

    def parse_lhs_and(self) -> descr.ConditionalElement:
        """
        Parse AND expression.

        Grammar:
            lhs_unary (('and' | '&&') lhs_unary)*
        """
        left = self.parse_lhs_unary()
        node = None

        while self.match(*_AND_TYPES):
            self.advance()
            right = self.parse_lhs_unary()
            if node is None:
                node = self.factory.create_and_from(left)
                node.add_descr(left)
            node.add_descr(right)

        if node is None:
            return left
        node.end_offset = node.descrs[-1].end_offset
        return node

    def parse_lhs_unary(self) -> descr.ConditionalElement:
        """
        Parse a single conditional element, optionally followed by ';'.

        Grammar:
            ( lhs_exists | lhs_not | lhs_eval | lhs_forall
            | '(' lhs_or ')' | '(' ('or' | 'and') lhs_unary+ ')'
            | pattern_source ) ';'?
        """
        token = self.current_token()

        if token.type == TokenType.EXISTS:
            node = self.parse_lhs_exists()
        elif token.type == TokenType.NOT:
            node = self.parse_lhs_not()
        elif token.type == TokenType.EVAL:
            node = self.parse_lhs_eval()
        elif token.type == TokenType.FORALL:
            node = self.parse_lhs_forall()
        elif token.type == TokenType.LPAREN:
            node = self.parse_lhs_group()
        elif self.is_identifier(token):
            node = self.pattern_source()
        else:
            raise NoViableAltError("conditional element", token)

        self.optional(TokenType.SEMICOLON)
        return node

    def _parse_operand(self) -> descr.ConditionalElement:
        """Operand of exists/not: a parenthesised element or a bare pattern."""
        if self.match(TokenType.LPAREN):
            return self.parse_lhs_group()
        return self.pattern_source()

    def parse_lhs_exists(self) -> descr.ExistsDescr:
        token = self.expect(TokenType.EXISTS)
        node = self.factory.create_exists(token)
        node.add_descr(self._parse_operand())
        return self.finish(node)

    def parse_lhs_not(self) -> descr.NotDescr:
        token = self.expect(TokenType.NOT)
        node = self.factory.create_not(token)
        node.add_descr(self._parse_operand())
        return self.finish(node)

    def parse_lhs_eval(self) -> descr.EvalDescr:
        """
        Parse eval element.

        Grammar:
            EVAL '(' code ')'
        """
        token = self.expect(TokenType.EVAL)
        content = strip_delimiters(self.paren_chunk())
        if content.rstrip().endswith(";"):
            self.report_general("trailing semi-colon not allowed", token)
        return self.finish(self.factory.create_eval(content, token))

    def parse_lhs_forall(self) -> descr.ForallDescr:
        """
        Parse forall element.

        Grammar:
            FORALL '(' lhs_pattern (','? lhs_pattern)+ ')'
        """
        token = self.expect(TokenType.FORALL)
        node = self.factory.create_forall(token)
        self.expect(TokenType.LPAREN)

        node.add_descr(self.lhs_pattern())
        while not self.match(TokenType.RPAREN, TokenType.EOF):
            self.optional(TokenType.COMMA)
            node.add_descr(self.lhs_pattern())

        if len(node.descrs) < 2:
            raise EarlyExitError("forall", self.current_token())

        self.expect(TokenType.RPAREN)
        return self.finish(node)

    def parse_lhs_group(self) -> descr.ConditionalElement:
        """
        Parse a parenthesised group.

        Grammar:
            '(' lhs_or ')'
            '(' ('or' | 'and') lhs_unary+ ')'

        The group itself adds no node; the prefix forms follow the same
        lazy policy as infix connectives.
        """
        self.expect(TokenType.LPAREN)

        if not self.match(TokenType.OR, TokenType.AND):
            node = self.parse_lhs_or()
            self.expect(TokenType.RPAREN)
            return node

        connective = self.advance()
        operands = []
        while not self.match(TokenType.RPAREN, TokenType.EOF):
            operands.append(self.parse_lhs_unary())
        if not operands:
            raise EarlyExitError(f"prefix '{connective.value}'", self.current_token())
        self.expect(TokenType.RPAREN)

        if len(operands) == 1:
            return operands[0]

        if connective.type == TokenType.OR:
            wrapper = self.factory.create_or_from(operands[0])
        else:
            wrapper = self.factory.create_and_from(operands[0])
        for operand in operands:
            wrapper.add_descr(operand)
        wrapper.end_offset = operands[-1].end_offset
        return wrapper
