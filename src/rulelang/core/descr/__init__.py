"""
Rule language AST descriptors.

Every node derives from BaseDescr and carries source offsets, line and
column. Types are organized into submodules and re-exported here.
"""

from .base import UNSET, BaseDescr
from .conditionals import (
    AndDescr,
    ConditionalElement,
    ConditionalElementDescr,
    EvalDescr,
    ExistsDescr,
    ForallDescr,
    NotDescr,
    OrDescr,
)
from .declarations import (
    FactTemplateDescr,
    FieldTemplateDescr,
    FunctionDescr,
    FunctionImportDescr,
    GlobalDescr,
    ImportDescr,
)
from .package import PackageDescr
from .patterns import (
    AccessorDescr,
    AccumulateDescr,
    CollectDescr,
    FieldAccessDescr,
    FromDescr,
    MethodAccessDescr,
    PatternDescr,
)
from .restrictions import (
    Connective,
    Constraint,
    FieldBindingDescr,
    FieldConstraintDescr,
    LiteralRestrictionDescr,
    LiteralType,
    PredicateDescr,
    Restriction,
    RestrictionConnectiveDescr,
    ReturnValueRestrictionDescr,
    VariableRestrictionDescr,
)
from .rules import AttributeDescr, AttributeValue, QueryDescr, RuleDescr

__all__ = [
    "UNSET",
    "BaseDescr",
    # Package and declarations
    "PackageDescr",
    "ImportDescr",
    "FunctionImportDescr",
    "GlobalDescr",
    "FunctionDescr",
    "FactTemplateDescr",
    "FieldTemplateDescr",
    # Rules
    "RuleDescr",
    "QueryDescr",
    "AttributeDescr",
    "AttributeValue",
    # Conditional elements
    "ConditionalElement",
    "ConditionalElementDescr",
    "AndDescr",
    "OrDescr",
    "NotDescr",
    "ExistsDescr",
    "ForallDescr",
    "EvalDescr",
    # Patterns and sources
    "PatternDescr",
    "FromDescr",
    "AccessorDescr",
    "FieldAccessDescr",
    "MethodAccessDescr",
    "AccumulateDescr",
    "CollectDescr",
    # Constraints
    "Constraint",
    "FieldConstraintDescr",
    "FieldBindingDescr",
    "PredicateDescr",
    "Restriction",
    "LiteralRestrictionDescr",
    "LiteralType",
    "VariableRestrictionDescr",
    "ReturnValueRestrictionDescr",
    "RestrictionConnectiveDescr",
    "Connective",
]
