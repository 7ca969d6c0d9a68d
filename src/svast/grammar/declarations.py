"""A.2.1 Declaration types, A.2.3 Declaration lists, A.2.4 Declaration assignments,
A.6.1 Continuous assignment statements.
"""

from __future__ import annotations

from svast.grammar.data_types import (
    DataType,
    DataTypeOrImplicit,
    ImplicitDataType,
    NetType,
    UnpackedDimension,
)
from svast.grammar.expressions import ConstantRange, Expression
from svast.grammar.identifiers import (
    NetIdentifier,
    ParameterIdentifier,
    TypeIdentifier,
    VariableIdentifier,
)
from svast.nodes import Node


def _non_empty(items: tuple[Node, ...], what: str) -> str | None:
    if not items:
        return f"{what} needs at least one assignment"
    return None


class ParamAssignment(Node):
    """param_assignment ::= parameter_identifier { unpacked_dimension }
    [ = constant_param_expression ]
    """

    identifier: ParameterIdentifier
    unpacked_dimensions: tuple[UnpackedDimension, ...] = ()
    value: Expression | None = None


class ParameterDeclaration(Node):
    """parameter_declaration ::= parameter data_type_or_implicit
    list_of_param_assignments
    """

    data_type: DataTypeOrImplicit
    assignments: tuple[ParamAssignment, ...]

    def grammar_error(self) -> str | None:
        return _non_empty(self.assignments, "parameter declaration")


class LocalParameterDeclaration(Node):
    """local_parameter_declaration ::= localparam data_type_or_implicit
    list_of_param_assignments
    """

    data_type: DataTypeOrImplicit
    assignments: tuple[ParamAssignment, ...]

    def grammar_error(self) -> str | None:
        return _non_empty(self.assignments, "localparam declaration")


class TypeDeclaration(Node):
    """type_declaration ::= typedef data_type type_identifier
    { variable_dimension } ;
    """

    data_type: DataType
    identifier: TypeIdentifier
    unpacked_dimensions: tuple[UnpackedDimension, ...] = ()


class VariableDeclAssignment(Node):
    """variable_decl_assignment ::= variable_identifier { variable_dimension }
    [ = expression ]
    """

    identifier: VariableIdentifier
    unpacked_dimensions: tuple[UnpackedDimension, ...] = ()
    value: Expression | None = None


class DataDeclaration(Node):
    """data_declaration ::= data_type_or_implicit list_of_variable_decl_assignments ;

    The const, var and lifetime prefixes are not represented.
    """

    data_type: DataTypeOrImplicit
    assignments: tuple[VariableDeclAssignment, ...]

    def grammar_error(self) -> str | None:
        return _non_empty(self.assignments, "data declaration")


class NetDeclAssignment(Node):
    """net_decl_assignment ::= net_identifier { unpacked_dimension }
    [ = expression ]
    """

    identifier: NetIdentifier
    unpacked_dimensions: tuple[UnpackedDimension, ...] = ()
    value: Expression | None = None


class NetDeclaration(Node):
    """net_declaration ::= net_type data_type_or_implicit
    list_of_net_decl_assignments ;
    """

    net_type: NetType
    data_type: DataType | ImplicitDataType
    assignments: tuple[NetDeclAssignment, ...]

    def grammar_error(self) -> str | None:
        return _non_empty(self.assignments, "net declaration")


class NetLvalue(Node):
    """net_lvalue ::= ps_or_hierarchical_net_identifier constant_select"""

    identifier: NetIdentifier
    select: ConstantRange | Expression | None = None


class NetAssignment(Node):
    """net_assignment ::= net_lvalue = expression"""

    lvalue: NetLvalue
    expression: Expression


class ContinuousAssign(Node):
    """continuous_assign ::= assign list_of_net_assignments ;"""

    assignments: tuple[NetAssignment, ...]

    def grammar_error(self) -> str | None:
        return _non_empty(self.assignments, "continuous assign")
