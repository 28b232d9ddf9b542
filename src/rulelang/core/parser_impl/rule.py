"""
Rule and query parsing.

Handles rule headers, attributes, the LHS block wrapper and the raw
consequence. The LHS itself is parsed by LHSParserMixin.
"""

import logging
from typing import TYPE_CHECKING, Any

from .. import descr
from ..errors import MismatchedSetError, MismatchedTokenError, ParseError
from ..lexer import Token, TokenType
from .base import ATTRIBUTE_TYPES, LHS_FOLLOW, RULE_FOLLOW

logger = logging.getLogger(__name__)

_INT_ATTRIBUTES = frozenset({TokenType.SALIENCE, TokenType.DURATION})
_BOOL_ATTRIBUTES = frozenset(
    {TokenType.NO_LOOP, TokenType.AUTO_FOCUS, TokenType.LOCK_ON_ACTIVE, TokenType.ENABLED}
)


class RuleParserMixin:
    """
    Mixin providing rule and query parsing.

    Note: This mixin expects to be combined with BaseParser via multiple inheritance.
    """

    if TYPE_CHECKING:
        stream: Any
        factory: Any
        package: Any
        speculating: Any
        current_rule_name: Any
        expect: Any
        advance: Any
        match: Any
        optional: Any
        current_token: Any
        peek_token: Any
        is_identifier: Any
        expect_identifier: Any
        type_name: Any
        string_value: Any
        finish: Any
        report_error: Any
        recover: Any
        parse_lhs_or: Any

    def parse_rule_name(self) -> str:
        """Rule, query and template names are a string or an identifier."""
        token = self.current_token()
        if token.type == TokenType.STRING:
            self.advance()
            return self.string_value(token)
        if self.is_identifier(token):
            self.advance()
            return token.value
        raise MismatchedSetError({TokenType.STRING, TokenType.ID}, token)

    def parse_rule(self) -> descr.RuleDescr:
        """
        Parse rule.

        Grammar:
            RULE name attributes? (WHEN ':'? lhs*)? THEN consequence END

        Package-level attributes are copied in first, so attributes written
        on the rule replace them.
        """
        token = self.expect(TokenType.RULE)
        name = self.parse_rule_name()

        rule = self.factory.create_rule(name, token)
        for attribute in self.package.attributes.values():
            rule.add_attribute(attribute.model_copy())

        self.current_rule_name = name
        try:
            self.parse_rule_attributes(rule)
            if self.match(TokenType.WHEN):
                when = self.advance()
                self.optional(TokenType.COLON)
                rule.lhs = self.parse_lhs_block(when)
            self.parse_consequence(rule)
        except ParseError as e:
            if self.speculating:
                raise
            self.report_error(e)
            self.recover(RULE_FOLLOW)
        finally:
            self.finish(rule)
            self.current_rule_name = None

        if not self.speculating:
            self.package.add_rule(rule)
            logger.debug(f"Parsed rule '{name}' at line {rule.line}")
        return rule

    def parse_query(self) -> descr.QueryDescr:
        """
        Parse query.

        Grammar:
            QUERY name ('(' parameters ')')? lhs* END
        """
        token = self.expect(TokenType.QUERY)
        name = self.parse_rule_name()
        query = self.factory.create_query(name, token)

        self.current_rule_name = name
        try:
            if self.match(TokenType.LPAREN):
                for type_name, parameter in self.parse_parameter_list():
                    query.parameter_types.append(type_name)
                    query.parameters.append(parameter)
            query.lhs = self.parse_lhs_block(self.stream.previous_token())
            self.expect(TokenType.END)
            self.optional(TokenType.SEMICOLON)
        except ParseError as e:
            if self.speculating:
                raise
            self.report_error(e)
            self.recover(RULE_FOLLOW)
        finally:
            self.finish(query)
            self.current_rule_name = None

        if not self.speculating:
            self.package.add_rule(query)
        return query

    def parse_parameter_list(self) -> list[tuple[str | None, str]]:
        """
        Parse a parenthesised parameter list with optional types.

        Grammar:
            '(' (param (',' param)*)? ')'
            param := type? identifier ('[' ']')*
        """
        self.expect(TokenType.LPAREN)
        parameters = []
        if not self.match(TokenType.RPAREN):
            parameters.append(self._parse_parameter())
            while self.match(TokenType.COMMA):
                self.advance()
                parameters.append(self._parse_parameter())
        self.expect(TokenType.RPAREN)
        return parameters

    def _is_untyped_parameter(self) -> bool:
        """True for ``name`` or ``name[]`` with no type in front."""
        if not self.is_identifier():
            return False
        offset = 1
        while (
            self.peek_token(offset).type == TokenType.LBRACKET
            and self.peek_token(offset + 1).type == TokenType.RBRACKET
        ):
            offset += 2
        return self.peek_token(offset).type in (TokenType.COMMA, TokenType.RPAREN)

    def _parse_parameter(self) -> tuple[str | None, str]:
        type_name = None
        if not self._is_untyped_parameter():
            type_name = self.type_name()
        name = self.expect_identifier().value

        while self.match(TokenType.LBRACKET):
            self.advance()
            self.expect(TokenType.RBRACKET)
            type_name = f"{type_name or 'Object'}[]"

        return type_name, name

    def parse_rule_attributes(self, rule: descr.RuleDescr) -> None:
        """
        Parse a rule's attribute list.

        Grammar:
            (ATTRIBUTES ':')? attribute (','? attribute)*
        """
        if self.match(TokenType.ATTRIBUTES):
            self.advance()
            self.expect(TokenType.COLON)

        while self.match(*ATTRIBUTE_TYPES):
            rule.add_attribute(self.parse_rule_attribute())
            self.optional(TokenType.COMMA)

    def parse_rule_attribute(self) -> descr.AttributeDescr:
        """
        Parse one attribute.

        Examples:
            salience -10
            no-loop
            lock-on-active false
            agenda-group "billing"
        """
        token = self.advance()
        value: descr.AttributeValue

        if token.type in _INT_ATTRIBUTES:
            value = int(self.expect(TokenType.INT).value)
        elif token.type in _BOOL_ATTRIBUTES:
            value = True
            if self.match(TokenType.BOOL):
                value = self.advance().value == "true"
        elif token.type in ATTRIBUTE_TYPES:
            value = self.string_value(self.expect(TokenType.STRING))
        else:
            raise MismatchedSetError(ATTRIBUTE_TYPES, token)

        return self.finish(self.factory.create_attribute(token.value, value, token))

    def parse_lhs_block(self, anchor: Token | None) -> descr.AndDescr:
        """
        Parse the conditional elements of a rule or query, implicitly AND-ed.

        Each top-level element is a recovery boundary: a broken element is
        reported and skipped, and parsing resumes at the rule's ``then``/``end``.

        Args:
            anchor: Last token before the block; locates an empty block
        """
        lhs = self.factory.create_and()

        while not self.match(TokenType.EOF, *LHS_FOLLOW):
            try:
                element = self.parse_lhs_or()
                lhs.add_descr(element)
            except ParseError as e:
                if self.speculating:
                    raise
                self.report_error(e)
                self.recover(LHS_FOLLOW)

        if lhs.descrs:
            self.factory.locate_like(lhs, lhs.descrs[0])
            lhs.end_offset = lhs.descrs[-1].end_offset
        elif anchor is not None:
            lhs.line = anchor.line
            lhs.column = anchor.column
            lhs.start_offset = lhs.end_offset = anchor.stop
        return lhs

    def parse_consequence(self, rule: descr.RuleDescr) -> None:
        """
        Capture the consequence verbatim up to the next ``end`` keyword.

        Blanks after ``then`` and the first line break are dropped. There is
        no nesting: any ``end`` token inside the action code terminates the
        consequence.
        """
        then = self.expect(TokenType.THEN)

        parts = []
        self.stream.push_trivia_visible(True)
        try:
            while not self.match(TokenType.END, TokenType.EOF):
                parts.append(self.advance().value)
        finally:
            self.stream.pop_trivia()
        text = "".join(parts)

        skip = 0
        while skip < len(text) and text[skip] in " \t":
            skip += 1
        if text.startswith("\r", skip):
            skip += 1
        if text.startswith("\n", skip):
            skip += 1

        rule.consequence = text[skip:]
        rule.consequence_start_offset = then.stop + skip
        rule.consequence_end_offset = then.stop + len(text)
        if "\n" in text[:skip]:
            rule.consequence_line = then.line + 1
            rule.consequence_column = 0
        else:
            rule.consequence_line = then.line
            rule.consequence_column = then.column + len(then.value) + skip

        end = self.current_token()
        if end.type != TokenType.END:
            raise MismatchedTokenError(TokenType.END, end)
        self.advance()
        self.optional(TokenType.SEMICOLON)
