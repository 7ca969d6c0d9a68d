"""Error types raised by the codec and by passes."""

from __future__ import annotations

from enum import Enum


class DecodeErrorKind(Enum):
    """Why a document was rejected."""

    MALFORMED_DOCUMENT = "malformed_document"
    EXPECTED_OBJECT = "expected_object"
    MISSING_TAG = "missing_tag"
    UNKNOWN_TAG = "unknown_tag"
    UNEXPECTED_VARIANT = "unexpected_variant"
    MISSING_FIELD = "missing_field"
    UNKNOWN_FIELD = "unknown_field"
    EXPECTED_SEQUENCE = "expected_sequence"
    UNEXPECTED_NULL = "unexpected_null"
    INVALID_LITERAL = "invalid_literal"
    GRAMMAR = "grammar"


class DecodeError(ValueError):
    """A serialized document does not describe a grammar-valid tree.

    `location` is a JSON pointer to the offending value, e.g.
    `/descriptions/0/header/ports/ports`. The empty string is the root.
    """

    def __init__(self, kind: DecodeErrorKind, location: str, message: str) -> None:
        super().__init__(f"{location or '/'}: {message}")
        self.kind = kind
        self.location = location
        self.message = message


class PassFailure(Exception):  # noqa: N818
    """A pass declined to produce a tree."""

    def __init__(self, message: str) -> None:
        super().__init__(message)
        self.message = message
