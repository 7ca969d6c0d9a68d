"""A.1.3 Module parameters and ports, A.2.1.2 Port declarations."""

from __future__ import annotations

from typing import Literal

from svast.grammar.data_types import DataTypeOrImplicit, NetType, UnpackedDimension
from svast.grammar.declarations import LocalParameterDeclaration, ParameterDeclaration
from svast.grammar.expressions import ConstantRange, Expression
from svast.grammar.identifiers import PortIdentifier
from svast.nodes import Node


class ParameterPortList(Node):
    """parameter_port_list ::= # ( parameter_port_declaration
    { , parameter_port_declaration } ) | # ( )
    """

    declarations: tuple[ParameterDeclaration | LocalParameterDeclaration, ...]


class PortDirection(Node):
    keyword: Literal["input", "output", "inout", "ref"]


class PortReference(Node):
    """port_reference ::= port_identifier constant_select"""

    identifier: PortIdentifier
    select: ConstantRange | Expression | None = None


class Port(Node):
    """port ::= [ port_expression ] | . port_identifier ( [ port_expression ] )

    `identifier` is set for the explicitly named form. Port expressions are
    limited to a single port reference.
    """

    identifier: PortIdentifier | None = None
    reference: PortReference | None = None


class ListOfPorts(Node):
    """list_of_ports ::= ( port { , port } )"""

    ports: tuple[Port, ...]

    def grammar_error(self) -> str | None:
        if not self.ports:
            return "list of ports needs at least one port"
        return None


PortList = ListOfPorts


class AnsiPortDeclaration(Node):
    """ansi_port_declaration ::= [ net_port_header | variable_port_header ]
    port_identifier { unpacked_dimension } [ = constant_expression ]
    """

    direction: PortDirection | None
    net_type: NetType | None
    data_type: DataTypeOrImplicit | None
    identifier: PortIdentifier
    unpacked_dimensions: tuple[UnpackedDimension, ...] = ()
    default: Expression | None = None


class ListOfPortDeclarations(Node):
    """list_of_port_declarations ::= ( [ ansi_port_declaration
    { , ansi_port_declaration } ] )
    """

    declarations: tuple[AnsiPortDeclaration, ...]


class _DirectionalDeclaration(Node, abstract=True):
    net_type: NetType | None
    data_type: DataTypeOrImplicit
    identifiers: tuple[PortIdentifier, ...]

    def grammar_error(self) -> str | None:
        if not self.identifiers:
            return f"{self.tag} needs at least one port identifier"
        return None


class InputDeclaration(_DirectionalDeclaration):
    """input_declaration ::= input net_port_type list_of_port_identifiers"""


class OutputDeclaration(_DirectionalDeclaration):
    """output_declaration ::= output net_port_type list_of_port_identifiers"""


class InoutDeclaration(_DirectionalDeclaration):
    """inout_declaration ::= inout net_port_type list_of_port_identifiers"""


type PortDeclaration = InputDeclaration | OutputDeclaration | InoutDeclaration
