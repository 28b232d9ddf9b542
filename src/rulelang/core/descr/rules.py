"""
Rule and query descriptors.

A query is a rule without a consequence; both live in the package's rule list.
"""

from __future__ import annotations

from pydantic import Field

from .base import UNSET, BaseDescr
from .conditionals import AndDescr

AttributeValue = bool | int | str


class AttributeDescr(BaseDescr):
    """
    A rule attribute such as ``salience 10`` or ``no-loop``.

    Value types by attribute:
        salience, duration: int
        no-loop, auto-focus, lock-on-active, enabled: bool (true when bare)
        date-effective, date-expires, agenda-group, activation-group,
        ruleflow-group, dialect: str
    """

    name: str
    value: AttributeValue


class RuleDescr(BaseDescr):
    """
    A rule: name, attributes, optional LHS and the raw consequence.

    ``consequence`` is the text between ``then`` and ``end`` (leading blanks
    and the first line break dropped). Its location is tracked separately
    from the rule's own.
    """

    name: str
    attributes: dict[str, AttributeDescr] = Field(default_factory=dict)
    lhs: AndDescr | None = None
    consequence: str | None = None
    consequence_start_offset: int = UNSET
    consequence_end_offset: int = UNSET
    consequence_line: int = UNSET
    consequence_column: int = UNSET

    def add_attribute(self, attribute: AttributeDescr) -> None:
        """Add or replace an attribute; the last one written wins."""
        self.attributes[attribute.name] = attribute

    def get_attribute(self, name: str) -> AttributeValue | None:
        attribute = self.attributes.get(name)
        return attribute.value if attribute else None

    @property
    def is_query(self) -> bool:
        return False


class QueryDescr(RuleDescr):
    """``query name(params) lhs end``. Never has a consequence."""

    parameters: list[str] = Field(default_factory=list)
    parameter_types: list[str | None] = Field(default_factory=list)

    @property
    def is_query(self) -> bool:
        return True
