"""Package-level declarations: imports, globals, functions and fact templates."""

from __future__ import annotations

from pydantic import Field

from .base import BaseDescr


class ImportDescr(BaseDescr):
    """``import com.acme.Person;`` or ``import com.acme.*;``."""

    target: str


class FunctionImportDescr(BaseDescr):
    """``import function com.acme.Util.format;``."""

    target: str


class GlobalDescr(BaseDescr):
    """``global java.util.List results;``."""

    type: str
    identifier: str


class FunctionDescr(BaseDescr):
    """A function declared in the rule file. ``body`` excludes the braces."""

    name: str
    return_type: str | None = None
    parameter_types: list[str | None] = Field(default_factory=list)
    parameter_names: list[str] = Field(default_factory=list)
    body: str = ""
    dialect: str | None = None

    def add_parameter(self, type_name: str | None, name: str) -> None:
        self.parameter_types.append(type_name)
        self.parameter_names.append(name)


class FieldTemplateDescr(BaseDescr):
    """A slot of a fact template: ``String name;``."""

    name: str
    class_type: str


class FactTemplateDescr(BaseDescr):
    """``template Cheese String name; int price; end``."""

    name: str
    fields: list[FieldTemplateDescr] = Field(default_factory=list)

    def add_field(self, field: FieldTemplateDescr) -> None:
        self.fields.append(field)
