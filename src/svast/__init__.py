"""svast - SystemVerilog concrete and abstract syntax trees for Python 3.12+."""

from svast import grammar
from svast.abstract import (
    AbstractView,
    Indeterminate,
    abstract_of,
    concrete_of,
    covers,
)
from svast.codecs import (
    from_builtins,
    to_builtins,
)
from svast.errors import (
    DecodeError,
    DecodeErrorKind,
    PassFailure,
)
from svast.formats.json import (
    SerializedDocument,
    decode,
    encode,
    from_json,
    to_json,
)
from svast.nodes import (
    Node,
    Token,
)
from svast.passes import (
    ExternalPass,
    InternalPass,
    Pass,
    Pipeline,
    PipelineFailure,
    PipelineResult,
    SubprocessPass,
)
from svast.rewrite import (
    Rewriter,
    rename_identifier,
    replace_node,
    transform,
)
from svast.schema import (
    FieldSchema,
    NodeSchema,
    all_schemas,
    extract_type,
    node_schema,
    schema_to_builtins,
)

__all__ = [
    # Abstract views
    "AbstractView",
    # Errors
    "DecodeError",
    "DecodeErrorKind",
    # Passes
    "ExternalPass",
    # Schema extraction
    "FieldSchema",
    "Indeterminate",
    "InternalPass",
    # Core types
    "Node",
    "NodeSchema",
    "Pass",
    "PassFailure",
    "Pipeline",
    "PipelineFailure",
    "PipelineResult",
    # Rewriting
    "Rewriter",
    # Serialization
    "SerializedDocument",
    "SubprocessPass",
    "Token",
    "abstract_of",
    "all_schemas",
    "concrete_of",
    "covers",
    "decode",
    "encode",
    "extract_type",
    "from_builtins",
    "from_json",
    "grammar",
    "node_schema",
    "rename_identifier",
    "replace_node",
    "schema_to_builtins",
    "to_builtins",
    "to_json",
    "transform",
]
