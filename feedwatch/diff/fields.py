"""Recursive structural diff between two documents.

The walk is directional: only keys of ``current`` are visited.  A key that
exists in ``previous`` but was dropped from a nested mapping of ``current``
produces no record.  Sequences are compared as opaque values and reported
as a single MODIFIED record at their own path.
"""

from __future__ import annotations

from collections.abc import Mapping

from feedwatch.models.document import Document, DocumentKind, documents_equal, kind_of
from feedwatch.models.snapshots import DiffKind, FieldDiff


def diff_fields(previous: Document, current: Document) -> list[FieldDiff]:
    """Return the field differences from *previous* to *current*.

    A non-mapping *current* yields no diffs.  A non-mapping *previous* is
    treated as empty, so every key of *current* is reported as added.
    Neither argument is mutated.
    """
    if kind_of(current) is not DocumentKind.MAPPING:
        return []
    differences: list[FieldDiff] = []
    _walk(previous, current, "", differences)
    return differences


def _walk(
    previous: Document,
    current: Mapping[str, Document],
    prefix: str,
    out: list[FieldDiff],
) -> None:
    previous_is_mapping = kind_of(previous) is DocumentKind.MAPPING

    for key, new_value in current.items():
        path = f"{prefix}.{key}" if prefix else str(key)

        if not previous_is_mapping or key not in previous:
            out.append(FieldDiff(path=path, kind=DiffKind.ADDED, new_value=new_value))
            continue

        old_value = previous[key]
        match (kind_of(old_value), kind_of(new_value)):
            case (DocumentKind.MAPPING, DocumentKind.MAPPING):
                _walk(old_value, new_value, path, out)
            case _ if not documents_equal(old_value, new_value):
                out.append(
                    FieldDiff(
                        path=path,
                        kind=DiffKind.MODIFIED,
                        old_value=old_value,
                        new_value=new_value,
                    )
                )
            case _:
                pass
