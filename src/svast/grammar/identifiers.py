"""A.9.3 Identifiers."""

from __future__ import annotations

import re

from svast.nodes import Node, Token

# Annex B reserved keywords (1800-2017). These never lex as simple identifiers.
KEYWORDS = frozenset(
    """
    accept_on alias always always_comb always_ff always_latch and assert assign
    assume automatic before begin bind bins binsof bit break buf bufif0 bufif1
    byte case casex casez cell chandle checker class clocking cmos config const
    constraint context continue cover covergroup coverpoint cross deassign
    default defparam design disable dist do edge else end endcase endchecker
    endclass endclocking endconfig endfunction endgenerate endgroup endinterface
    endmodule endpackage endprimitive endprogram endproperty endspecify
    endsequence endtable endtask enum event eventually expect export extends
    extern final first_match for force foreach forever fork forkjoin function
    generate genvar global highz0 highz1 if iff ifnone ignore_bins
    illegal_bins implements implies import incdir include initial inout input
    inside instance int integer interconnect interface intersect join join_any
    join_none large let liblist library local localparam logic longint
    macromodule matches medium modport module nand negedge nettype new nexttime
    nmos nor noshowcancelled not notif0 notif1 null or output package packed
    parameter pmos posedge primitive priority program property protected pull0
    pull1 pulldown pullup pulsestyle_ondetect pulsestyle_onevent pure rand
    randc randcase randsequence rcmos real realtime ref reg reject_on release
    repeat restrict return rnmos rpmos rtran rtranif0 rtranif1 s_always
    s_eventually s_nexttime s_until s_until_with scalared sequence shortint
    shortreal showcancelled signed small soft solve specify specparam static
    string strong strong0 strong1 struct super supply0 supply1 sync_accept_on
    sync_reject_on table tagged task this throughout time timeprecision
    timeunit tran tranif0 tranif1 tri tri0 tri1 triand trior trireg type
    typedef union unique unique0 unsigned until until_with untyped use uwire
    var vectored virtual void wait wait_order wand weak weak0 weak1 while
    wildcard wire with within wor xnor xor
    """.split(),
)


class SimpleIdentifier(Token):
    """simple_identifier ::= [ a-zA-Z_ ] { [ a-zA-Z0-9_$ ] }"""

    pattern = re.compile(r"[a-zA-Z_][a-zA-Z0-9_$]*")

    @classmethod
    def is_valid_text(cls, text: str) -> bool:
        return super().is_valid_text(text) and text not in KEYWORDS

    @property
    def name(self) -> str:
        return self.text


class EscapedIdentifier(Token):
    r"""escaped_identifier ::= \ {any_printable_ASCII_character_except_white_space}"""

    pattern = re.compile(r"\\[!-~]+")

    @property
    def name(self) -> str:
        """The identifier without its leading backslash.

        `\\cpu3` and `cpu3` name the same object (1800-2017 5.6.1).
        """
        return self.text[1:]


type Identifier = SimpleIdentifier | EscapedIdentifier


def identifier(text: str) -> Identifier:
    """Build the identifier token matching the spelling of text."""
    if text.startswith("\\"):
        return EscapedIdentifier(text)
    return SimpleIdentifier(text)


class ModuleIdentifier(Node):
    identifier: Identifier


class PackageIdentifier(Node):
    identifier: Identifier


class PortIdentifier(Node):
    identifier: Identifier


class ParameterIdentifier(Node):
    identifier: Identifier


class TypeIdentifier(Node):
    identifier: Identifier


class EnumIdentifier(Node):
    identifier: Identifier


class NetIdentifier(Node):
    identifier: Identifier


class VariableIdentifier(Node):
    identifier: Identifier


class HierarchicalIdentifier(Node):
    """hierarchical_identifier ::= { identifier . } identifier

    The leading `$root.` form is not represented.
    """

    path: tuple[Identifier, ...]

    def grammar_error(self) -> str | None:
        if not self.path:
            return "hierarchical identifier needs at least one identifier"
        return None

    def __str__(self) -> str:
        return ".".join(part.text for part in self.path)


class PsParameterIdentifier(Node):
    """ps_parameter_identifier ::= [ package_scope ] parameter_identifier"""

    package: PackageIdentifier | None
    identifier: ParameterIdentifier

    def __str__(self) -> str:
        name = self.identifier.identifier.name
        if self.package is None:
            return name
        return f"{self.package.identifier.name}::{name}"
