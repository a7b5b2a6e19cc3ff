"""Semi-structured document values.

A Document is any value from the JSON value space: ``None``, ``bool``,
``int``/``float``, ``str``, a sequence of Documents, or a string-keyed
mapping of Documents.  Feed items are Documents that carry an identity
field.  Values are classified into the closed ``DocumentKind`` set so the
diff engine can dispatch on kind instead of probing types ad hoc.
"""

from __future__ import annotations

from collections.abc import Mapping, Sequence
from enum import StrEnum
from typing import Any, TypeAlias

from feedwatch.errors import DocumentTypeError

Document: TypeAlias = Any
Item: TypeAlias = Mapping[str, Any]


class DocumentKind(StrEnum):
    """Closed set of document node kinds."""

    NULL = "null"
    BOOLEAN = "boolean"
    NUMBER = "number"
    STRING = "string"
    SEQUENCE = "sequence"
    MAPPING = "mapping"


def kind_of(value: Document) -> DocumentKind:
    """Classify *value* into its DocumentKind.

    ``bool`` is checked before numbers because it subclasses ``int``.
    Strings are checked before sequences for the same reason.

    Raises:
        DocumentTypeError: if *value* is not a JSON-shaped value.
    """
    if value is None:
        return DocumentKind.NULL
    if isinstance(value, bool):
        return DocumentKind.BOOLEAN
    if isinstance(value, (int, float)):
        return DocumentKind.NUMBER
    if isinstance(value, str):
        return DocumentKind.STRING
    if isinstance(value, Mapping):
        return DocumentKind.MAPPING
    if isinstance(value, Sequence) and not isinstance(value, (bytes, bytearray)):
        return DocumentKind.SEQUENCE
    raise DocumentTypeError(f"Unsupported document value of type {type(value).__name__}")


def is_mapping(value: Document) -> bool:
    return kind_of(value) is DocumentKind.MAPPING


def is_composite(value: Document) -> bool:
    """Return True for mapping and sequence nodes."""
    return kind_of(value) in (DocumentKind.MAPPING, DocumentKind.SEQUENCE)


def documents_equal(left: Document, right: Document) -> bool:
    """Deep, value-based equality.

    Mappings compare by key/value pairs regardless of key order; sequences
    compare element-wise in order.  Booleans never equal numbers, while
    ``1`` and ``1.0`` are the same Number.
    """
    left_kind = kind_of(left)
    if left_kind is not kind_of(right):
        return False

    match left_kind:
        case DocumentKind.MAPPING:
            if len(left) != len(right):
                return False
            for key, value in left.items():
                if key not in right:
                    return False
                if not documents_equal(value, right[key]):
                    return False
            return True
        case DocumentKind.SEQUENCE:
            if len(left) != len(right):
                return False
            return all(documents_equal(a, b) for a, b in zip(left, right, strict=True))
        case DocumentKind.NULL:
            return True
        case _:
            return bool(left == right)


def get_path(document: Document, path: str, default: Document = None) -> Document:
    """Follow a dot-delimited *path* through nested mappings.

    Returns *default* as soon as a segment is missing or the current node is
    not a mapping.
    """
    current = document
    for segment in path.split("."):
        if not isinstance(current, Mapping) or segment not in current:
            return default
        current = current[segment]
    return current
