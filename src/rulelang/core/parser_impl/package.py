"""
Compilation unit parsing.

Handles the package declaration, package-level attribute defaults and the
top-level statements: imports, function imports, globals, functions and
fact templates. Rules and queries are dispatched to RuleParserMixin.
"""

import logging
from typing import TYPE_CHECKING, Any

from .. import descr
from ..errors import EarlyExitError, FailedPredicateError, NoViableAltError, ParseError
from ..lexer import TokenType
from .base import ATTRIBUTE_TYPES, STATEMENT_START
from .chunks import strip_delimiters

logger = logging.getLogger(__name__)


class PackageParserMixin:
    """
    Mixin providing compilation unit and declaration parsing.

    Note: This mixin expects to be combined with BaseParser via multiple inheritance.
    """

    if TYPE_CHECKING:
        stream: Any
        factory: Any
        package: Any
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
        type_name: Any
        finish: Any
        report_error: Any
        report_general: Any
        source_name: Any
        backtracking: Any
        current_rule_name: Any
        recover: Any
        speculate: Any
        curly_chunk: Any
        parse_rule: Any
        parse_query: Any
        parse_rule_attribute: Any
        parse_parameter_list: Any
        parse_rule_name: Any

    def parse_compilation_unit(self) -> descr.PackageDescr:
        """
        Parse an entire rule file.

        Grammar:
            package_statement? attribute* statement+

        Never raises on malformed input: errors are recorded and the parser
        resynchronises at the next statement.

        Returns:
            The package descriptor, possibly partially populated
        """
        first = self.current_token()
        self.factory.locate(self.package, first)

        if self.match(TokenType.PACKAGE):
            try:
                self.parse_package_statement()
            except ParseError as e:
                self.report_error(e)
                self.recover(STATEMENT_START | ATTRIBUTE_TYPES)

        while self.match(*ATTRIBUTE_TYPES):
            try:
                attribute = self.parse_rule_attribute()
                self.package.attributes[attribute.name] = attribute
                self.optional(TokenType.COMMA)
            except ParseError as e:
                self.report_error(e)
                self.recover(STATEMENT_START | ATTRIBUTE_TYPES)

        statements = 0
        while not self.match(TokenType.EOF):
            statements += 1
            try:
                self.parse_statement()
            except ParseError as e:
                self.report_error(e)
                self.recover(STATEMENT_START)
            except RecursionError:
                # Unwinding may have skipped cleanup in finally blocks
                self.stream.reset_trivia()
                self.backtracking = 0
                token = self.current_token()
                logger.warning(
                    f"{self.source_name}:{token.line}:{token.column}: nesting too deep, "
                    "skipping statement"
                )
                self.report_general("nesting too deep", token)
                self.current_rule_name = None
                self.recover(STATEMENT_START)

        if statements == 0:
            self.report_error(EarlyExitError("compilation unit", self.current_token()))

        self.finish(self.package)
        return self.package

    def parse_statement(self) -> None:
        """Dispatch one top-level statement on its leading keyword."""
        token = self.current_token()

        if token.type == TokenType.IMPORT:
            # 'import function x.y' and 'import function.x.y' share a prefix
            if self.speculate(self.parse_function_import, "function import"):
                self.parse_function_import()
            else:
                self.parse_import()
        elif token.type == TokenType.GLOBAL:
            self.parse_global()
        elif token.type == TokenType.FUNCTION:
            self.parse_function()
        elif token.type == TokenType.TEMPLATE:
            self.parse_template()
        elif token.type == TokenType.RULE:
            self.parse_rule()
        elif token.type == TokenType.QUERY:
            self.parse_query()
        elif token.type == TokenType.PACKAGE:
            self.parse_package_statement(duplicate=True)
        else:
            raise NoViableAltError("statement", token)

    def parse_package_statement(self, duplicate: bool = False) -> None:
        """
        Parse package declaration.

        Grammar:
            PACKAGE dotted_name ';'?

        The name can be set once, by a declaration that precedes every other
        statement. A later declaration is reported and ignored.
        """
        token = self.expect(TokenType.PACKAGE)
        name = self.dotted_name()
        self.optional(TokenType.SEMICOLON)

        if duplicate:
            self.report_error(
                FailedPredicateError(
                    "package name can only be declared once, before any other statement",
                    token,
                )
            )
            return

        self.package.name = name

    def parse_import_name(self) -> str:
        """Parse an import target: dotted name with optional trailing ``.*``."""
        parts = [self.expect_identifier().value]
        while self.match(TokenType.DOT):
            self.advance()
            token = self.current_token()
            if token.type == TokenType.MISC and token.value == "*":
                self.advance()
                parts.append("*")
                break
            parts.append(self.expect_identifier().value)
        return ".".join(parts)

    def parse_import(self) -> descr.ImportDescr:
        """
        Parse import statement.

        Grammar:
            IMPORT import_name ';'?
        """
        token = self.expect(TokenType.IMPORT)
        target = self.parse_import_name()
        self.optional(TokenType.SEMICOLON)

        node = self.finish(self.factory.create_import(target, token))
        if not self.speculating:
            self.package.imports.append(node)
        return node

    def parse_function_import(self) -> descr.FunctionImportDescr:
        """
        Parse function import statement.

        Grammar:
            IMPORT FUNCTION import_name ';'?
        """
        token = self.expect(TokenType.IMPORT)
        self.expect(TokenType.FUNCTION)
        target = self.parse_import_name()
        self.optional(TokenType.SEMICOLON)

        node = self.finish(self.factory.create_function_import(target, token))
        if not self.speculating:
            self.package.function_imports.append(node)
        return node

    def parse_global(self) -> descr.GlobalDescr:
        """
        Parse global declaration.

        Grammar:
            GLOBAL type identifier ';'?
        """
        token = self.expect(TokenType.GLOBAL)
        type_name = self.type_name()
        identifier = self.expect_identifier().value
        self.optional(TokenType.SEMICOLON)

        node = self.finish(self.factory.create_global(type_name, identifier, token))
        if not self.speculating:
            self.package.globals.append(node)
        return node

    def parse_function(self) -> descr.FunctionDescr:
        """
        Parse function declaration.

        Grammar:
            FUNCTION type? identifier '(' parameters? ')' '{' ... '}'

        Examples:
            function String hello(String name) { return "Hello " + name; }
            function log(msg) { System.out.println(msg); }
        """
        token = self.expect(TokenType.FUNCTION)

        return_type = None
        if not (self.is_identifier() and self.peek_token().type == TokenType.LPAREN):
            return_type = self.type_name()
        name = self.expect_identifier().value

        function = self.factory.create_function(name, return_type, token)
        for type_name, parameter in self.parse_parameter_list():
            function.add_parameter(type_name, parameter)

        function.body = strip_delimiters(self.curly_chunk())

        dialect = self.package.attributes.get("dialect")
        if dialect is not None:
            function.dialect = str(dialect.value)

        self.finish(function)
        if not self.speculating:
            self.package.functions.append(function)
        return function

    def parse_template(self) -> descr.FactTemplateDescr:
        """
        Parse fact template.

        Grammar:
            TEMPLATE name ';'? (type identifier ';'?)+ END ';'?
        """
        token = self.expect(TokenType.TEMPLATE)
        name = self.parse_rule_name()
        template = self.factory.create_template(name, token)
        self.optional(TokenType.SEMICOLON)

        while not self.match(TokenType.END) and self.is_identifier():
            slot = self.current_token()
            class_type = self.type_name()
            field_name = self.expect_identifier().value
            self.optional(TokenType.SEMICOLON)
            template.add_field(
                self.finish(self.factory.create_template_field(class_type, field_name, slot))
            )

        if not template.fields:
            raise EarlyExitError("template", self.current_token())

        self.expect(TokenType.END)
        self.optional(TokenType.SEMICOLON)

        self.finish(template)
        if not self.speculating:
            self.package.templates.append(template)
        return template
