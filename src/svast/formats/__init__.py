"""Document formats.

Each format module provides to_<format> and from_<format> functions
that work with the core to_builtins/from_builtins conversion.
"""

from svast.formats.json import (
    SerializedDocument,
    decode,
    encode,
    from_json,
    to_json,
)

__all__ = ["SerializedDocument", "decode", "encode", "from_json", "to_json"]
