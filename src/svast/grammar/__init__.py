"""Concrete node classes, one per IEEE 1800-2017 Annex A production."""

from svast.grammar.data_types import (
    DataType,
    DataTypeKeyword,
    DataTypeNamed,
    DataTypeOrImplicit,
    EnumNameDeclaration,
    EnumType,
    ImplicitDataType,
    IntegerAtomType,
    IntegerType,
    IntegerVectorType,
    NetType,
    NonIntegerType,
    PackedDimension,
    Signing,
    UnpackedDimension,
)
from svast.grammar.declarations import (
    ContinuousAssign,
    DataDeclaration,
    LocalParameterDeclaration,
    NetAssignment,
    NetDeclaration,
    NetDeclAssignment,
    NetLvalue,
    ParamAssignment,
    ParameterDeclaration,
    TypeDeclaration,
    VariableDeclAssignment,
)
from svast.grammar.expressions import (
    BinaryExpression,
    BinaryOperator,
    Concatenation,
    ConditionalExpression,
    ConstantRange,
    Expression,
    Primary,
    UnaryExpression,
    UnaryOperator,
)
from svast.grammar.identifiers import (
    KEYWORDS,
    EnumIdentifier,
    EscapedIdentifier,
    HierarchicalIdentifier,
    Identifier,
    ModuleIdentifier,
    NetIdentifier,
    PackageIdentifier,
    ParameterIdentifier,
    PortIdentifier,
    PsParameterIdentifier,
    SimpleIdentifier,
    TypeIdentifier,
    VariableIdentifier,
    identifier,
)
from svast.grammar.numbers import (
    BinaryNumber,
    DecimalNumber,
    HexNumber,
    IntegralNumber,
    Number,
    OctalNumber,
    RealNumber,
    UnbasedUnsizedLiteral,
)
from svast.grammar.ports import (
    AnsiPortDeclaration,
    InoutDeclaration,
    InputDeclaration,
    ListOfPortDeclarations,
    ListOfPorts,
    OutputDeclaration,
    ParameterPortList,
    Port,
    PortDeclaration,
    PortDirection,
    PortList,
    PortReference,
)
from svast.grammar.source_text import (
    Description,
    Lifetime,
    ModuleAnsiHeader,
    ModuleDeclaration,
    ModuleDeclarationAnsi,
    ModuleDeclarationNonansi,
    ModuleItem,
    ModuleKeyword,
    ModuleNonansiHeader,
    NonPortModuleItem,
    PackageDeclaration,
    PackageItem,
    SourceText,
)

__all__ = [
    "KEYWORDS",
    "AnsiPortDeclaration",
    "BinaryExpression",
    "BinaryNumber",
    "BinaryOperator",
    "Concatenation",
    "ConditionalExpression",
    "ConstantRange",
    "ContinuousAssign",
    "DataDeclaration",
    "DataType",
    "DataTypeKeyword",
    "DataTypeNamed",
    "DataTypeOrImplicit",
    "DecimalNumber",
    "Description",
    "EnumIdentifier",
    "EnumNameDeclaration",
    "EnumType",
    "EscapedIdentifier",
    "Expression",
    "HexNumber",
    "HierarchicalIdentifier",
    "Identifier",
    "ImplicitDataType",
    "InoutDeclaration",
    "InputDeclaration",
    "IntegerAtomType",
    "IntegerType",
    "IntegerVectorType",
    "IntegralNumber",
    "Lifetime",
    "ListOfPortDeclarations",
    "ListOfPorts",
    "LocalParameterDeclaration",
    "ModuleAnsiHeader",
    "ModuleDeclaration",
    "ModuleDeclarationAnsi",
    "ModuleDeclarationNonansi",
    "ModuleIdentifier",
    "ModuleItem",
    "ModuleKeyword",
    "ModuleNonansiHeader",
    "NetAssignment",
    "NetDeclAssignment",
    "NetDeclaration",
    "NetIdentifier",
    "NetLvalue",
    "NetType",
    "NonIntegerType",
    "NonPortModuleItem",
    "Number",
    "OctalNumber",
    "OutputDeclaration",
    "PackageDeclaration",
    "PackageIdentifier",
    "PackageItem",
    "PackedDimension",
    "ParamAssignment",
    "ParameterDeclaration",
    "ParameterIdentifier",
    "ParameterPortList",
    "Port",
    "PortDeclaration",
    "PortDirection",
    "PortIdentifier",
    "PortList",
    "PortReference",
    "Primary",
    "PsParameterIdentifier",
    "RealNumber",
    "Signing",
    "SimpleIdentifier",
    "SourceText",
    "TypeDeclaration",
    "TypeIdentifier",
    "UnaryExpression",
    "UnaryOperator",
    "UnbasedUnsizedLiteral",
    "UnpackedDimension",
    "VariableDeclAssignment",
    "VariableIdentifier",
    "identifier",
]
