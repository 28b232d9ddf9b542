"""
Pattern descriptors and the data sources a pattern can be matched against.

Examples:
    $p : Person(age > 18)
    Item() from $order.items
    $total : Number() from accumulate(Sale($v : value), init(...), action(...), result(...))
    $list : ArrayList() from collect(Alarm())
"""

from __future__ import annotations

from pydantic import Field

from .base import UNSET, BaseDescr
from .restrictions import Constraint


class FieldAccessDescr(BaseDescr):
    """``.field`` or ``.field[argument]`` in an access chain."""

    field: str
    argument: str | None = None


class MethodAccessDescr(BaseDescr):
    """``.method(arguments)`` in an access chain."""

    method: str
    arguments: str = ""


class AccessorDescr(BaseDescr):
    """
    ``ident(args)?`` followed by a chain of field and method accesses.

    ``arguments`` is set when the head is itself a call, e.g. ``lookup("x")``.
    """

    variable_name: str
    arguments: str | None = None
    invokers: list[FieldAccessDescr | MethodAccessDescr] = Field(default_factory=list)

    def add_invoker(self, invoker: FieldAccessDescr | MethodAccessDescr) -> None:
        self.invokers.append(invoker)


class FromDescr(BaseDescr):
    """Generic ``from`` source."""

    data_source: AccessorDescr
    expression: str = ""


class AccumulateDescr(BaseDescr):
    """``from accumulate( pattern, init(...), action(...), result(...) )``."""

    input_pattern: PatternDescr | None = None
    init_code: str = ""
    action_code: str = ""
    result_code: str = ""


class CollectDescr(BaseDescr):
    """``from collect( pattern )``."""

    input_pattern: PatternDescr | None = None


class PatternDescr(BaseDescr):
    """
    A fact pattern.

    ``left_paren``/``right_paren`` are the character offsets of the
    constraint list delimiters. ``end_offset`` covers the data source when
    one is attached, so it can lie past ``right_paren``.
    """

    object_type: str
    identifier: str | None = None
    constraints: list[Constraint] = Field(default_factory=list)
    source: FromDescr | AccumulateDescr | CollectDescr | None = None
    left_paren: int = UNSET
    right_paren: int = UNSET

    def add_constraint(self, constraint: Constraint) -> None:
        self.constraints.append(constraint)

    @property
    def is_bound(self) -> bool:
        return self.identifier is not None


AccumulateDescr.model_rebuild()
CollectDescr.model_rebuild()
