"""Shared concrete trees for the test suite."""

from __future__ import annotations

import pytest

from svast.grammar import (
    AnsiPortDeclaration,
    BinaryExpression,
    BinaryNumber,
    Concatenation,
    ConditionalExpression,
    ConstantRange,
    ContinuousAssign,
    DataDeclaration,
    DataTypeKeyword,
    DataTypeNamed,
    DecimalNumber,
    EnumIdentifier,
    EnumNameDeclaration,
    EnumType,
    EscapedIdentifier,
    HexNumber,
    HierarchicalIdentifier,
    ImplicitDataType,
    InoutDeclaration,
    InputDeclaration,
    IntegerAtomType,
    IntegerType,
    IntegerVectorType,
    Lifetime,
    ListOfPortDeclarations,
    ListOfPorts,
    LocalParameterDeclaration,
    ModuleAnsiHeader,
    ModuleDeclarationAnsi,
    ModuleDeclarationNonansi,
    ModuleIdentifier,
    ModuleKeyword,
    ModuleNonansiHeader,
    NetAssignment,
    NetDeclaration,
    NetDeclAssignment,
    NetIdentifier,
    NetLvalue,
    NetType,
    NonIntegerType,
    OctalNumber,
    OutputDeclaration,
    PackageDeclaration,
    PackageIdentifier,
    PackedDimension,
    ParamAssignment,
    ParameterDeclaration,
    ParameterIdentifier,
    ParameterPortList,
    Port,
    PortDirection,
    PortIdentifier,
    PortReference,
    PsParameterIdentifier,
    RealNumber,
    Signing,
    SimpleIdentifier,
    SourceText,
    TypeDeclaration,
    TypeIdentifier,
    UnaryExpression,
    UnbasedUnsizedLiteral,
    UnpackedDimension,
    VariableDeclAssignment,
    VariableIdentifier,
)


def param_ref(name: str) -> PsParameterIdentifier:
    return PsParameterIdentifier(
        package=None,
        identifier=ParameterIdentifier(SimpleIdentifier(name)),
    )


def logic_vector(msb, lsb) -> IntegerType:
    return IntegerType(
        kind=IntegerVectorType(keyword="logic"),
        packed_dimensions=(PackedDimension(ConstantRange(msb=msb, lsb=lsb)),),
    )


@pytest.fixture
def signed_int() -> IntegerType:
    """`int signed`"""
    return IntegerType(
        kind=IntegerAtomType(keyword="int"),
        signing=Signing(keyword="signed"),
    )


@pytest.fixture
def counter() -> ModuleDeclarationAnsi:
    """
    module counter #(parameter int WIDTH = 8) (
        input logic clk,
        output logic [WIDTH-1:0] count
    );
        localparam int LAST = WIDTH * 2;
        assign count = clk;
    endmodule : counter
    """
    width_minus_one = BinaryExpression(
        left=param_ref("WIDTH"),
        operator="-",
        right=DecimalNumber("1"),
    )
    header = ModuleAnsiHeader(
        keyword=ModuleKeyword(keyword="module"),
        lifetime=None,
        identifier=ModuleIdentifier(SimpleIdentifier("counter")),
        parameters=ParameterPortList(
            declarations=(
                ParameterDeclaration(
                    data_type=IntegerType(kind=IntegerAtomType(keyword="int")),
                    assignments=(
                        ParamAssignment(
                            identifier=ParameterIdentifier(SimpleIdentifier("WIDTH")),
                            value=DecimalNumber("8"),
                        ),
                    ),
                ),
            ),
        ),
        ports=ListOfPortDeclarations(
            declarations=(
                AnsiPortDeclaration(
                    direction=PortDirection(keyword="input"),
                    net_type=None,
                    data_type=IntegerType(kind=IntegerVectorType(keyword="logic")),
                    identifier=PortIdentifier(SimpleIdentifier("clk")),
                ),
                AnsiPortDeclaration(
                    direction=PortDirection(keyword="output"),
                    net_type=None,
                    data_type=logic_vector(width_minus_one, DecimalNumber("0")),
                    identifier=PortIdentifier(SimpleIdentifier("count")),
                ),
            ),
        ),
    )
    items = (
        LocalParameterDeclaration(
            data_type=IntegerType(kind=IntegerAtomType(keyword="int")),
            assignments=(
                ParamAssignment(
                    identifier=ParameterIdentifier(SimpleIdentifier("LAST")),
                    value=BinaryExpression(
                        left=param_ref("WIDTH"),
                        operator="*",
                        right=DecimalNumber("2"),
                    ),
                ),
            ),
        ),
        ContinuousAssign(
            assignments=(
                NetAssignment(
                    lvalue=NetLvalue(identifier=NetIdentifier(SimpleIdentifier("count"))),
                    expression=HierarchicalIdentifier(path=(SimpleIdentifier("clk"),)),
                ),
            ),
        ),
    )
    return ModuleDeclarationAnsi(
        header=header,
        items=items,
        end_label=ModuleIdentifier(SimpleIdentifier("counter")),
    )


@pytest.fixture
def legacy() -> ModuleDeclarationNonansi:
    """module legacy (a, b); endmodule"""
    return ModuleDeclarationNonansi(
        header=ModuleNonansiHeader(
            keyword=ModuleKeyword(keyword="module"),
            lifetime=None,
            identifier=ModuleIdentifier(SimpleIdentifier("legacy")),
            parameters=None,
            ports=ListOfPorts(
                ports=(
                    Port(reference=PortReference(PortIdentifier(SimpleIdentifier("a")))),
                    Port(reference=PortReference(PortIdentifier(SimpleIdentifier("b")))),
                ),
            ),
        ),
    )


@pytest.fixture
def source_text(counter, legacy) -> SourceText:
    return SourceText(descriptions=(counter, legacy))


@pytest.fixture
def every_production() -> SourceText:
    r"""A tree holding at least one node of every registered production.

    package automatic defs;
        parameter signed [3:0] DEPTH = 'o7;
        localparam real SCALE = 1.5;
        typedef enum bit [1:0] {IDLE, \run! = 2'b01} state_t;
        typedef string name_t [4];
    endpackage : defs

    macromodule static legacy (.a(a_int[3:0]), b, c);
        input wire [4'hF:0] a;
        output logic b;
        inout tri c;
        wand n [0:3] = {'1, 8'd1};
        defs::state_t state = -'0;
        assign n[0] = !top.\sig+ ? defs::DEPTH + 1 : 0;
    endmodule : legacy

    module top #(parameter int unsigned N = 2) (
        input wire logic [] d [2],
        ref r = 0
    );
        event e;
    endmodule
    """
    package = PackageDeclaration(
        lifetime=Lifetime(keyword="automatic"),
        identifier=PackageIdentifier(SimpleIdentifier("defs")),
        items=(
            ParameterDeclaration(
                data_type=ImplicitDataType(
                    signing=Signing(keyword="signed"),
                    packed_dimensions=(
                        PackedDimension(
                            ConstantRange(msb=DecimalNumber("3"), lsb=DecimalNumber("0")),
                        ),
                    ),
                ),
                assignments=(
                    ParamAssignment(
                        identifier=ParameterIdentifier(SimpleIdentifier("DEPTH")),
                        value=OctalNumber("'o7"),
                    ),
                ),
            ),
            LocalParameterDeclaration(
                data_type=NonIntegerType(keyword="real"),
                assignments=(
                    ParamAssignment(
                        identifier=ParameterIdentifier(SimpleIdentifier("SCALE")),
                        value=RealNumber("1.5"),
                    ),
                ),
            ),
            TypeDeclaration(
                data_type=EnumType(
                    base=IntegerType(
                        kind=IntegerVectorType(keyword="bit"),
                        packed_dimensions=(
                            PackedDimension(
                                ConstantRange(msb=DecimalNumber("1"), lsb=DecimalNumber("0")),
                            ),
                        ),
                    ),
                    members=(
                        EnumNameDeclaration(EnumIdentifier(SimpleIdentifier("IDLE"))),
                        EnumNameDeclaration(
                            EnumIdentifier(EscapedIdentifier(r"\run!")),
                            value=BinaryNumber("2'b01"),
                        ),
                    ),
                ),
                identifier=TypeIdentifier(SimpleIdentifier("state_t")),
            ),
            TypeDeclaration(
                data_type=DataTypeKeyword(keyword="string"),
                identifier=TypeIdentifier(SimpleIdentifier("name_t")),
                unpacked_dimensions=(UnpackedDimension(size=DecimalNumber("4")),),
            ),
        ),
        end_label=PackageIdentifier(SimpleIdentifier("defs")),
    )

    nonansi = ModuleDeclarationNonansi(
        header=ModuleNonansiHeader(
            keyword=ModuleKeyword(keyword="macromodule"),
            lifetime=Lifetime(keyword="static"),
            identifier=ModuleIdentifier(SimpleIdentifier("legacy")),
            parameters=None,
            ports=ListOfPorts(
                ports=(
                    Port(
                        identifier=PortIdentifier(SimpleIdentifier("a")),
                        reference=PortReference(
                            PortIdentifier(SimpleIdentifier("a_int")),
                            select=ConstantRange(msb=DecimalNumber("3"), lsb=DecimalNumber("0")),
                        ),
                    ),
                    Port(reference=PortReference(PortIdentifier(SimpleIdentifier("b")))),
                    Port(reference=PortReference(PortIdentifier(SimpleIdentifier("c")))),
                ),
            ),
        ),
        items=(
            InputDeclaration(
                net_type=NetType(keyword="wire"),
                data_type=ImplicitDataType(
                    packed_dimensions=(
                        PackedDimension(
                            ConstantRange(msb=HexNumber("4'hF"), lsb=DecimalNumber("0")),
                        ),
                    ),
                ),
                identifiers=(PortIdentifier(SimpleIdentifier("a")),),
            ),
            OutputDeclaration(
                net_type=None,
                data_type=IntegerType(kind=IntegerVectorType(keyword="logic")),
                identifiers=(PortIdentifier(SimpleIdentifier("b")),),
            ),
            InoutDeclaration(
                net_type=NetType(keyword="tri"),
                data_type=ImplicitDataType(),
                identifiers=(PortIdentifier(SimpleIdentifier("c")),),
            ),
            NetDeclaration(
                net_type=NetType(keyword="wand"),
                data_type=ImplicitDataType(),
                assignments=(
                    NetDeclAssignment(
                        identifier=NetIdentifier(SimpleIdentifier("n")),
                        unpacked_dimensions=(
                            UnpackedDimension(
                                size=ConstantRange(msb=DecimalNumber("0"), lsb=DecimalNumber("3")),
                            ),
                        ),
                        value=Concatenation(
                            expressions=(UnbasedUnsizedLiteral("'1"), DecimalNumber("8'd1")),
                        ),
                    ),
                ),
            ),
            DataDeclaration(
                data_type=DataTypeNamed(
                    package=PackageIdentifier(SimpleIdentifier("defs")),
                    identifier=TypeIdentifier(SimpleIdentifier("state_t")),
                ),
                assignments=(
                    VariableDeclAssignment(
                        identifier=VariableIdentifier(SimpleIdentifier("state")),
                        value=UnaryExpression(
                            operator="-",
                            operand=UnbasedUnsizedLiteral("'0"),
                        ),
                    ),
                ),
            ),
            ContinuousAssign(
                assignments=(
                    NetAssignment(
                        lvalue=NetLvalue(
                            identifier=NetIdentifier(SimpleIdentifier("n")),
                            select=DecimalNumber("0"),
                        ),
                        expression=ConditionalExpression(
                            predicate=UnaryExpression(
                                operator="!",
                                operand=HierarchicalIdentifier(
                                    path=(SimpleIdentifier("top"), EscapedIdentifier(r"\sig+")),
                                ),
                            ),
                            if_true=BinaryExpression(
                                left=PsParameterIdentifier(
                                    package=PackageIdentifier(SimpleIdentifier("defs")),
                                    identifier=ParameterIdentifier(SimpleIdentifier("DEPTH")),
                                ),
                                operator="+",
                                right=DecimalNumber("1"),
                            ),
                            if_false=DecimalNumber("0"),
                        ),
                    ),
                ),
            ),
        ),
        end_label=ModuleIdentifier(SimpleIdentifier("legacy")),
    )

    ansi = ModuleDeclarationAnsi(
        header=ModuleAnsiHeader(
            keyword=ModuleKeyword(keyword="module"),
            lifetime=None,
            identifier=ModuleIdentifier(SimpleIdentifier("top")),
            parameters=ParameterPortList(
                declarations=(
                    ParameterDeclaration(
                        data_type=IntegerType(
                            kind=IntegerAtomType(keyword="int"),
                            signing=Signing(keyword="unsigned"),
                        ),
                        assignments=(
                            ParamAssignment(
                                identifier=ParameterIdentifier(SimpleIdentifier("N")),
                                value=DecimalNumber("2"),
                            ),
                        ),
                    ),
                ),
            ),
            ports=ListOfPortDeclarations(
                declarations=(
                    AnsiPortDeclaration(
                        direction=PortDirection(keyword="input"),
                        net_type=NetType(keyword="wire"),
                        data_type=IntegerType(
                            kind=IntegerVectorType(keyword="logic"),
                            packed_dimensions=(PackedDimension(),),
                        ),
                        identifier=PortIdentifier(SimpleIdentifier("d")),
                        unpacked_dimensions=(UnpackedDimension(size=DecimalNumber("2")),),
                    ),
                    AnsiPortDeclaration(
                        direction=PortDirection(keyword="ref"),
                        net_type=None,
                        data_type=None,
                        identifier=PortIdentifier(SimpleIdentifier("r")),
                        default=DecimalNumber("0"),
                    ),
                ),
            ),
        ),
        items=(
            DataDeclaration(
                data_type=DataTypeKeyword(keyword="event"),
                assignments=(
                    VariableDeclAssignment(
                        identifier=VariableIdentifier(SimpleIdentifier("e")),
                    ),
                ),
            ),
        ),
    )

    return SourceText(descriptions=(package, nonansi, ansi))
