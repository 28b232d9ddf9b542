"""
Field-level constraint descriptors.

A pattern's constraint list holds field constraints (a field plus a list of
restrictions), field bindings and predicates.
"""

from __future__ import annotations

from enum import Enum

from pydantic import Field

from .base import BaseDescr


class LiteralType(str, Enum):
    """Kinds of literal restriction values."""

    STRING = "string"
    NUMBER = "number"
    BOOLEAN = "boolean"
    NULL = "null"
    ENUM = "enum"


class Connective(str, Enum):
    """Connectives between restrictions of the same field."""

    AND = "&&"
    OR = "||"


class LiteralRestrictionDescr(BaseDescr):
    """
    Restriction against a literal value or a dotted enum constant.

    Examples:
        age > 18
        name == "john"
        type == Cheese.STILTON   (is_enum=True)
    """

    evaluator: str
    text: str
    literal_type: LiteralType = LiteralType.STRING
    is_enum: bool = False


class VariableRestrictionDescr(BaseDescr):
    """Restriction against a previously bound variable: ``price < $max``."""

    evaluator: str
    identifier: str


class ReturnValueRestrictionDescr(BaseDescr):
    """Restriction against a parenthesised expression: ``age == ($a + 1)``."""

    evaluator: str
    content: str


class RestrictionConnectiveDescr(BaseDescr):
    """AND/OR marker between two restrictions in the same list."""

    connective: Connective


Restriction = (
    LiteralRestrictionDescr
    | VariableRestrictionDescr
    | ReturnValueRestrictionDescr
    | RestrictionConnectiveDescr
)


class FieldConstraintDescr(BaseDescr):
    """A field name with its ordered restrictions and connectives."""

    field_name: str
    restrictions: list[Restriction] = Field(default_factory=list)

    def add_restriction(self, restriction: Restriction) -> None:
        self.restrictions.append(restriction)

    @property
    def has_connectives(self) -> bool:
        return any(isinstance(r, RestrictionConnectiveDescr) for r in self.restrictions)


class FieldBindingDescr(BaseDescr):
    """Binds ``identifier`` to the value of ``field_name``: ``$n : name``."""

    field_name: str
    identifier: str


class PredicateDescr(BaseDescr):
    """
    Opaque boolean code attached to a pattern.

    ``field_name`` and ``declaration`` are set for the ``$d : field -> (code)``
    form; a standalone ``(code)`` leaves them empty.
    """

    content: str
    field_name: str | None = None
    declaration: str | None = None


Constraint = FieldConstraintDescr | FieldBindingDescr | PredicateDescr
