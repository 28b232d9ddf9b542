"""
Data source parsing for ``from`` clauses.

Grammar:
    FROM ( accumulate_statement | collect_statement | from_source )

``accumulate`` and ``collect`` are not reserved, so ``from accumulate.items``
is a legal generic source. Each special form is tried speculatively first and
the generic source is the fallback.
"""

from typing import TYPE_CHECKING, Any

from .. import descr
from ..lexer import TokenType
from .chunks import strip_delimiters


class SourcesParserMixin:
    """
    Mixin providing from/accumulate/collect parsing.

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
        expect_identifier: Any
        finish: Any
        speculate: Any
        paren_chunk: Any
        square_chunk: Any
        pattern_source: Any

    def parse_from_source(
        self,
    ) -> descr.FromDescr | descr.AccumulateDescr | descr.CollectDescr:
        self.expect(TokenType.FROM)

        if self.match(TokenType.ACCUMULATE) and self.speculate(
            self.parse_accumulate, "accumulate"
        ):
            return self.parse_accumulate()
        if self.match(TokenType.COLLECT) and self.speculate(self.parse_collect, "collect"):
            return self.parse_collect()
        return self.parse_from()

    def parse_accumulate(self) -> descr.AccumulateDescr:
        """
        Parse accumulate statement.

        Grammar:
            ACCUMULATE '(' pattern_source ','? INIT '(' code ')' ','?
                ACTION '(' code ')' ','? RESULT '(' code ')' ')'
        """
        token = self.expect(TokenType.ACCUMULATE)
        node = self.factory.create_accumulate(token)
        self.expect(TokenType.LPAREN)

        node.input_pattern = self.pattern_source()
        self.optional(TokenType.COMMA)

        self.expect(TokenType.INIT)
        node.init_code = strip_delimiters(self.paren_chunk())
        self.optional(TokenType.COMMA)

        self.expect(TokenType.ACTION)
        node.action_code = strip_delimiters(self.paren_chunk())
        self.optional(TokenType.COMMA)

        self.expect(TokenType.RESULT)
        node.result_code = strip_delimiters(self.paren_chunk())

        self.expect(TokenType.RPAREN)
        return self.finish(node)

    def parse_collect(self) -> descr.CollectDescr:
        """
        Parse collect statement.

        Grammar:
            COLLECT '(' pattern_source ')'
        """
        token = self.expect(TokenType.COLLECT)
        node = self.factory.create_collect(token)
        self.expect(TokenType.LPAREN)
        node.input_pattern = self.pattern_source()
        self.expect(TokenType.RPAREN)
        return self.finish(node)

    def parse_from(self) -> descr.FromDescr:
        """
        Parse a generic source expression.

        Grammar:
            identifier ('(' args ')')? ( '.' identifier ('(' args ')')? | '[' arg ']' )*

        Examples:
            $order.items
            lookup("key").values
            $matrix.rows[0].cells
        """
        head = self.current_token()
        accessor = self.factory.create_accessor(self.expect_identifier().value, head)
        if self.match(TokenType.LPAREN):
            accessor.arguments = strip_delimiters(self.paren_chunk())

        while self.match(TokenType.DOT, TokenType.LBRACKET):
            if self.match(TokenType.LBRACKET):
                # Indexing applies to the previous field unless it is already indexed
                bracket = self.current_token()
                argument = strip_delimiters(self.square_chunk())
                previous = accessor.invokers[-1] if accessor.invokers else None
                if isinstance(previous, descr.FieldAccessDescr) and previous.argument is None:
                    invoker = previous
                    invoker.argument = argument
                else:
                    invoker = self.factory.create_field_access("", bracket)
                    invoker.argument = argument
                    accessor.add_invoker(invoker)
                self.finish(invoker)
                continue

            self.advance()
            member = self.current_token()
            name = self.expect_identifier().value
            if self.match(TokenType.LPAREN):
                method = self.factory.create_method_access(name, member)
                method.arguments = strip_delimiters(self.paren_chunk())
                accessor.add_invoker(self.finish(method))
            else:
                accessor.add_invoker(self.finish(self.factory.create_field_access(name, member)))

        self.finish(accessor)
        node = self.factory.create_from(accessor, head)
        self.finish(node)
        node.expression = self.stream.text(node.start_offset, node.end_offset)
        return node
