"""Abstract views layered over the concrete hierarchy.

Example usage:
    from svast.abstract import abstract_of

    view = abstract_of(IntegerType(kind=IntegerAtomType(keyword="int")))
    view.minimum_value()  # -2147483648

Views depend on concrete nodes, never the reverse. Values that need
elaboration come back as `Indeterminate` rather than raising.
"""

from svast.abstract.data_types import (
    AbstractType,
    ChandleType,
    EnumeratedType,
    EnumMember,
    EventType,
    IntegralType,
    RealType,
    StringType,
    TypedefType,
    VoidType,
)
from svast.abstract.evaluate import (
    MAX_WIDTH,
    Constant,
    Indeterminate,
    evaluate_constant,
    evaluate_range,
    module_parameters,
    number_value,
    parameter_values,
)
from svast.abstract.view import AbstractView, abstract_of, concrete_of, covers

__all__ = [
    "MAX_WIDTH",
    "AbstractType",
    "AbstractView",
    "ChandleType",
    "Constant",
    "EnumMember",
    "EnumeratedType",
    "EventType",
    "Indeterminate",
    "IntegralType",
    "RealType",
    "StringType",
    "TypedefType",
    "VoidType",
    "abstract_of",
    "concrete_of",
    "covers",
    "evaluate_constant",
    "evaluate_range",
    "module_parameters",
    "number_value",
    "parameter_values",
]
