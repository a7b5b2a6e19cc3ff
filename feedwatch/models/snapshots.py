"""Snapshot and comparison data structures."""

from __future__ import annotations

from collections.abc import Hashable
from dataclasses import dataclass, field
from datetime import datetime
from enum import StrEnum

from feedwatch.models.document import Document, Item


@dataclass(frozen=True)
class Snapshot:
    """One timestamped capture of the feed's item collection.

    Created exactly once by the acquirer and never mutated afterwards.
    ``items`` is None when the feed payload was malformed; consumers treat
    that as an empty capture.
    """

    iteration: int
    timestamp: datetime
    items: tuple[Item, ...] | None = ()

    @property
    def item_list(self) -> tuple[Item, ...]:
        return self.items or ()

    @property
    def item_count(self) -> int:
        return len(self.item_list)

    @property
    def malformed(self) -> bool:
        return self.items is None


class DiffKind(StrEnum):
    """Kind of a single field difference."""

    ADDED = "added"
    MODIFIED = "modified"


@dataclass(frozen=True)
class FieldDiff:
    """A path-addressed difference between two documents.

    ``old_value`` is only meaningful for MODIFIED records.
    """

    path: str
    kind: DiffKind
    new_value: Document
    old_value: Document = None


@dataclass(frozen=True)
class ItemSummary:
    """Short description of a new or removed item.

    ``posted_at`` is copied from the item as-is (ISO string, epoch number, ...).
    """

    id: Hashable
    text: str | None = None
    posted_at: Document = None


@dataclass(frozen=True)
class ModifiedItem:
    """An item present in both snapshots whose content changed.

    ``diffs`` may be empty: whole-item equality can fail on a nested key
    removal that the field diff does not report.
    """

    id: Hashable
    diffs: tuple[FieldDiff, ...] = ()


@dataclass(frozen=True)
class ItemCountDelta:
    """Item totals of the two snapshots being compared."""

    previous: int
    current: int

    @property
    def difference(self) -> int:
        return self.current - self.previous


@dataclass(frozen=True)
class CollectionDiff:
    """Identity-keyed differences between two item collections."""

    new_items: tuple[ItemSummary, ...] = ()
    removed_items: tuple[ItemSummary, ...] = ()
    modified_items: tuple[ModifiedItem, ...] = ()


@dataclass(frozen=True)
class Comparison:
    """All differences between two temporally adjacent snapshots.

    Derived purely from the two snapshots and recomputable at any time.
    """

    iteration: int
    from_timestamp: datetime
    to_timestamp: datetime
    total_items: ItemCountDelta
    new_items: tuple[ItemSummary, ...] = field(default_factory=tuple)
    removed_items: tuple[ItemSummary, ...] = field(default_factory=tuple)
    modified_items: tuple[ModifiedItem, ...] = field(default_factory=tuple)
