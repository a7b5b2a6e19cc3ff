"""Identity-keyed comparison of item collections across snapshots."""

from __future__ import annotations

from collections.abc import Hashable, Sequence
from dataclasses import dataclass

import structlog

from feedwatch.diff.fields import diff_fields
from feedwatch.models.document import Item, documents_equal, get_path
from feedwatch.models.snapshots import (
    CollectionDiff,
    Comparison,
    ItemCountDelta,
    ItemSummary,
    ModifiedItem,
    Snapshot,
)

_log = structlog.get_logger(component="diff.collections")


@dataclass(frozen=True)
class ItemKeys:
    """Where identity and summary fields live inside an item.

    ``id_field`` may be a dotted path (``post.id``) for feeds that nest the
    entity under an envelope.
    """

    id_field: str = "id"
    text_field: str = "text"
    posted_at_field: str = "posted_at"
    text_length: int = 100

    def identity(self, item: Item) -> Hashable:
        return get_path(item, self.id_field)

    def summarize(self, item: Item) -> ItemSummary:
        """Build the short form used for new and removed items."""
        text = get_path(item, self.text_field)
        return ItemSummary(
            id=self.identity(item),
            text=None if text is None else f"{str(text)[: self.text_length]}...",
            posted_at=get_path(item, self.posted_at_field),
        )


DEFAULT_KEYS = ItemKeys()


def diff_collections(
    previous: Sequence[Item],
    current: Sequence[Item],
    keys: ItemKeys = DEFAULT_KEYS,
) -> CollectionDiff:
    """Partition ids into new, removed and modified.

    New and modified entries follow the order of *current*; removed entries
    follow the order of *previous*.  A common item that is not deep-equal is
    reported as modified even when ``diff_fields`` finds nothing to record.
    Items whose identity is not hashable (a list or mapping id) are skipped
    with a warning.
    """
    keyed_previous = _keyed(previous, keys)
    keyed_current = _keyed(current, keys)
    previous_by_id = dict(keyed_previous)
    current_ids = {item_id for item_id, _ in keyed_current}

    new_items: list[ItemSummary] = []
    modified_items: list[ModifiedItem] = []
    for item_id, item in keyed_current:
        if item_id not in previous_by_id:
            new_items.append(keys.summarize(item))
            continue
        previous_item = previous_by_id[item_id]
        if not documents_equal(previous_item, item):
            modified_items.append(
                ModifiedItem(id=item_id, diffs=tuple(diff_fields(previous_item, item)))
            )

    removed_items = [keys.summarize(item) for item_id, item in keyed_previous if item_id not in current_ids]

    return CollectionDiff(
        new_items=tuple(new_items),
        removed_items=tuple(removed_items),
        modified_items=tuple(modified_items),
    )


def compare_snapshots(
    previous: Snapshot,
    current: Snapshot,
    keys: ItemKeys = DEFAULT_KEYS,
) -> Comparison:
    """Build the Comparison for two adjacent snapshots.

    Malformed snapshots contribute an empty item list.
    """
    changes = diff_collections(previous.item_list, current.item_list, keys)
    return Comparison(
        iteration=current.iteration,
        from_timestamp=previous.timestamp,
        to_timestamp=current.timestamp,
        total_items=ItemCountDelta(previous=previous.item_count, current=current.item_count),
        new_items=changes.new_items,
        removed_items=changes.removed_items,
        modified_items=changes.modified_items,
    )


def _keyed(items: Sequence[Item], keys: ItemKeys) -> list[tuple[Hashable, Item]]:
    keyed: list[tuple[Hashable, Item]] = []
    for position, item in enumerate(items):
        item_id = keys.identity(item)
        try:
            hash(item_id)
        except TypeError:
            _log.warning(
                "malformed_item_identity",
                position=position,
                id_field=keys.id_field,
                id_type=type(item_id).__name__,
            )
            continue
        keyed.append((item_id, item))
    return keyed
