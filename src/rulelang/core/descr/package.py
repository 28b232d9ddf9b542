"""Root descriptor for one parsed rule file."""

from __future__ import annotations

from pydantic import Field

from .base import BaseDescr
from .declarations import (
    FactTemplateDescr,
    FunctionDescr,
    FunctionImportDescr,
    GlobalDescr,
    ImportDescr,
)
from .rules import AttributeDescr, QueryDescr, RuleDescr


class PackageDescr(BaseDescr):
    """
    Everything declared in one compilation unit, in source order per kind.

    ``attributes`` are package-level defaults copied into each following
    rule; a rule that repeats an attribute overrides the default.
    """

    name: str = ""
    imports: list[ImportDescr] = Field(default_factory=list)
    function_imports: list[FunctionImportDescr] = Field(default_factory=list)
    globals: list[GlobalDescr] = Field(default_factory=list)
    functions: list[FunctionDescr] = Field(default_factory=list)
    templates: list[FactTemplateDescr] = Field(default_factory=list)
    rules: list[QueryDescr | RuleDescr] = Field(default_factory=list)
    attributes: dict[str, AttributeDescr] = Field(default_factory=dict)

    def add_rule(self, rule: RuleDescr) -> None:
        self.rules.append(rule)

    def get_rule(self, name: str) -> RuleDescr | None:
        """Get a rule or query by name."""
        for rule in self.rules:
            if rule.name == name:
                return rule
        return None

    @property
    def rule_names(self) -> list[str]:
        return [rule.name for rule in self.rules]

    @property
    def queries(self) -> list[QueryDescr]:
        return [rule for rule in self.rules if isinstance(rule, QueryDescr)]
