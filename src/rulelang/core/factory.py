"""
Descriptor factory.

All AST nodes are created here so grammar code only decides *what* to build.
Each ``create_*`` method stamps the node's starting location from the token
that opens the construct; the parser fills in end offsets once the
construct's production completes.
"""

from __future__ import annotations

from typing import TypeVar

from . import descr
from .lexer import Token

D = TypeVar("D", bound=descr.BaseDescr)


class DescrFactory:
    """Creates descriptors with default fields and starting locations."""

    @staticmethod
    def locate(node: D, token: Token) -> D:
        """Stamp line, column and start offset from ``token``."""
        node.line = token.line
        node.column = token.column
        node.start_offset = token.start
        return node

    @staticmethod
    def locate_like(node: D, other: descr.BaseDescr) -> D:
        """Copy the starting location of an existing node."""
        node.line = other.line
        node.column = other.column
        node.start_offset = other.start_offset
        return node

    # Package level

    def create_package(self, name: str = "") -> descr.PackageDescr:
        return descr.PackageDescr(name=name)

    def create_import(self, target: str, token: Token) -> descr.ImportDescr:
        return self.locate(descr.ImportDescr(target=target), token)

    def create_function_import(self, target: str, token: Token) -> descr.FunctionImportDescr:
        return self.locate(descr.FunctionImportDescr(target=target), token)

    def create_global(self, type_name: str, identifier: str, token: Token) -> descr.GlobalDescr:
        return self.locate(descr.GlobalDescr(type=type_name, identifier=identifier), token)

    def create_function(
        self, name: str, return_type: str | None, token: Token
    ) -> descr.FunctionDescr:
        return self.locate(descr.FunctionDescr(name=name, return_type=return_type), token)

    def create_template(self, name: str, token: Token) -> descr.FactTemplateDescr:
        return self.locate(descr.FactTemplateDescr(name=name), token)

    def create_template_field(
        self, class_type: str, name: str, token: Token
    ) -> descr.FieldTemplateDescr:
        return self.locate(descr.FieldTemplateDescr(name=name, class_type=class_type), token)

    # Rules

    def create_rule(self, name: str, token: Token) -> descr.RuleDescr:
        return self.locate(descr.RuleDescr(name=name, consequence=""), token)

    def create_query(self, name: str, token: Token) -> descr.QueryDescr:
        return self.locate(descr.QueryDescr(name=name), token)

    def create_attribute(
        self, name: str, value: descr.AttributeValue, token: Token
    ) -> descr.AttributeDescr:
        return self.locate(descr.AttributeDescr(name=name, value=value), token)

    # Conditional elements

    def create_and(self) -> descr.AndDescr:
        return descr.AndDescr()

    def create_and_from(self, first: descr.BaseDescr) -> descr.AndDescr:
        """AND node whose location starts at its first operand."""
        return self.locate_like(descr.AndDescr(), first)

    def create_or_from(self, first: descr.BaseDescr) -> descr.OrDescr:
        """OR node whose location starts at its first operand."""
        return self.locate_like(descr.OrDescr(), first)

    def create_not(self, token: Token) -> descr.NotDescr:
        return self.locate(descr.NotDescr(), token)

    def create_exists(self, token: Token) -> descr.ExistsDescr:
        return self.locate(descr.ExistsDescr(), token)

    def create_forall(self, token: Token) -> descr.ForallDescr:
        return self.locate(descr.ForallDescr(), token)

    def create_eval(self, content: str, token: Token) -> descr.EvalDescr:
        return self.locate(descr.EvalDescr(content=content), token)

    # Patterns and constraints

    def create_pattern(self, object_type: str, token: Token) -> descr.PatternDescr:
        return self.locate(descr.PatternDescr(object_type=object_type), token)

    def create_field_constraint(self, field_name: str, token: Token) -> descr.FieldConstraintDescr:
        return self.locate(descr.FieldConstraintDescr(field_name=field_name), token)

    def create_field_binding(
        self, field_name: str, identifier: str, token: Token
    ) -> descr.FieldBindingDescr:
        return self.locate(
            descr.FieldBindingDescr(field_name=field_name, identifier=identifier), token
        )

    def create_predicate(
        self,
        content: str,
        token: Token,
        field_name: str | None = None,
        declaration: str | None = None,
    ) -> descr.PredicateDescr:
        return self.locate(
            descr.PredicateDescr(content=content, field_name=field_name, declaration=declaration),
            token,
        )

    def create_literal_restriction(
        self, evaluator: str, text: str, literal_type: descr.LiteralType, token: Token
    ) -> descr.LiteralRestrictionDescr:
        return self.locate(
            descr.LiteralRestrictionDescr(
                evaluator=evaluator,
                text=text,
                literal_type=literal_type,
                is_enum=literal_type == descr.LiteralType.ENUM,
            ),
            token,
        )

    def create_variable_restriction(
        self, evaluator: str, identifier: str, token: Token
    ) -> descr.VariableRestrictionDescr:
        return self.locate(
            descr.VariableRestrictionDescr(evaluator=evaluator, identifier=identifier), token
        )

    def create_return_value_restriction(
        self, evaluator: str, content: str, token: Token
    ) -> descr.ReturnValueRestrictionDescr:
        return self.locate(
            descr.ReturnValueRestrictionDescr(evaluator=evaluator, content=content), token
        )

    def create_connective(
        self, connective: descr.Connective, token: Token
    ) -> descr.RestrictionConnectiveDescr:
        node = self.locate(descr.RestrictionConnectiveDescr(connective=connective), token)
        node.end_offset = token.stop
        return node

    # Data sources

    def create_accessor(self, variable_name: str, token: Token) -> descr.AccessorDescr:
        return self.locate(descr.AccessorDescr(variable_name=variable_name), token)

    def create_field_access(self, field: str, token: Token) -> descr.FieldAccessDescr:
        return self.locate(descr.FieldAccessDescr(field=field), token)

    def create_method_access(self, method: str, token: Token) -> descr.MethodAccessDescr:
        return self.locate(descr.MethodAccessDescr(method=method), token)

    def create_from(self, accessor: descr.AccessorDescr, token: Token) -> descr.FromDescr:
        return self.locate(descr.FromDescr(data_source=accessor), token)

    def create_accumulate(self, token: Token) -> descr.AccumulateDescr:
        return self.locate(descr.AccumulateDescr(), token)

    def create_collect(self, token: Token) -> descr.CollectDescr:
        return self.locate(descr.CollectDescr(), token)
