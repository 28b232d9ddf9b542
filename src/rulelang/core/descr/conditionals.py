"""
Conditional element descriptors: the boolean tree of a rule's LHS.

Combinators are built lazily by the parser, so an OrDescr or AndDescr always
holds at least two operands unless it is a rule's root AndDescr.
"""

from __future__ import annotations

from pydantic import Field

from .base import BaseDescr
from .patterns import PatternDescr


class ConditionalElementDescr(BaseDescr):
    """Common behaviour for nodes that hold child conditional elements."""

    descrs: list[ConditionalElement] = Field(default_factory=list)

    def add_descr(self, descr: ConditionalElement) -> None:
        self.descrs.append(descr)


class AndDescr(ConditionalElementDescr):
    pass


class OrDescr(ConditionalElementDescr):
    pass


class NotDescr(ConditionalElementDescr):
    pass


class ExistsDescr(ConditionalElementDescr):
    pass


class ForallDescr(ConditionalElementDescr):
    """``forall( base, p1, p2, ... )``: one base pattern and one or more others."""

    @property
    def base_pattern(self) -> PatternDescr | None:
        if self.descrs and isinstance(self.descrs[0], PatternDescr):
            return self.descrs[0]
        return None

    @property
    def remaining_patterns(self) -> list[PatternDescr]:
        return [d for d in self.descrs[1:] if isinstance(d, PatternDescr)]


class EvalDescr(BaseDescr):
    """``eval( code )`` with the outer parentheses stripped from ``content``."""

    content: str


ConditionalElement = (
    AndDescr | OrDescr | NotDescr | ExistsDescr | ForallDescr | EvalDescr | PatternDescr
)

for _model in (ConditionalElementDescr, AndDescr, OrDescr, NotDescr, ExistsDescr, ForallDescr):
    _model.model_rebuild()
