"""A.1.2 SystemVerilog source text."""

from __future__ import annotations

from typing import Literal

from svast.grammar.declarations import (
    ContinuousAssign,
    DataDeclaration,
    LocalParameterDeclaration,
    NetDeclaration,
    ParameterDeclaration,
    TypeDeclaration,
)
from svast.grammar.identifiers import ModuleIdentifier, PackageIdentifier
from svast.grammar.ports import (
    InoutDeclaration,
    InputDeclaration,
    ListOfPortDeclarations,
    ListOfPorts,
    OutputDeclaration,
    ParameterPortList,
)
from svast.nodes import Node


class ModuleKeyword(Node):
    keyword: Literal["module", "macromodule"]


class Lifetime(Node):
    keyword: Literal["static", "automatic"]


class ModuleAnsiHeader(Node):
    """module_ansi_header ::= module_keyword [ lifetime ] module_identifier
    [ parameter_port_list ] [ list_of_port_declarations ] ;
    """

    keyword: ModuleKeyword
    lifetime: Lifetime | None
    identifier: ModuleIdentifier
    parameters: ParameterPortList | None = None
    ports: ListOfPortDeclarations | None = None


class ModuleNonansiHeader(Node):
    """module_nonansi_header ::= module_keyword [ lifetime ] module_identifier
    [ parameter_port_list ] list_of_ports ;
    """

    keyword: ModuleKeyword
    lifetime: Lifetime | None
    identifier: ModuleIdentifier
    parameters: ParameterPortList | None
    ports: ListOfPorts


type PackageItem = (
    ParameterDeclaration
    | LocalParameterDeclaration
    | TypeDeclaration
    | DataDeclaration
    | NetDeclaration
)

type NonPortModuleItem = PackageItem | ContinuousAssign

type ModuleItem = (
    InputDeclaration | OutputDeclaration | InoutDeclaration | NonPortModuleItem
)


def _end_label_error(
    identifier: ModuleIdentifier | PackageIdentifier,
    end_label: ModuleIdentifier | PackageIdentifier | None,
) -> str | None:
    if end_label is None:
        return None
    if end_label.identifier.name != identifier.identifier.name:
        return (
            f"end label '{end_label.identifier.text}' does not match "
            f"'{identifier.identifier.text}'"
        )
    return None


class ModuleDeclarationAnsi(Node):
    """module_declaration ::= module_ansi_header [ timeunits_declaration ]
    { non_port_module_item } endmodule [ : module_identifier ]
    """

    header: ModuleAnsiHeader
    items: tuple[NonPortModuleItem, ...] = ()
    end_label: ModuleIdentifier | None = None

    def grammar_error(self) -> str | None:
        return _end_label_error(self.header.identifier, self.end_label)


class ModuleDeclarationNonansi(Node):
    """module_declaration ::= module_nonansi_header [ timeunits_declaration ]
    { module_item } endmodule [ : module_identifier ]
    """

    header: ModuleNonansiHeader
    items: tuple[ModuleItem, ...] = ()
    end_label: ModuleIdentifier | None = None

    def grammar_error(self) -> str | None:
        return _end_label_error(self.header.identifier, self.end_label)


class PackageDeclaration(Node):
    """package_declaration ::= package [ lifetime ] package_identifier ;
    { package_item } endpackage [ : package_identifier ]
    """

    lifetime: Lifetime | None
    identifier: PackageIdentifier
    items: tuple[PackageItem, ...] = ()
    end_label: PackageIdentifier | None = None

    def grammar_error(self) -> str | None:
        return _end_label_error(self.identifier, self.end_label)


type ModuleDeclaration = ModuleDeclarationAnsi | ModuleDeclarationNonansi
type Description = ModuleDeclaration | PackageDeclaration


class SourceText(Node):
    """source_text ::= [ timeunits_declaration ] { description }"""

    descriptions: tuple[Description, ...] = ()
