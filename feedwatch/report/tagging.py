"""Tagged-item predicates used for ``taggedCount`` in iteration records."""

from __future__ import annotations

from collections.abc import Callable, Mapping, Sequence

from feedwatch.models.document import Item, get_path

TagPredicate = Callable[[Item], bool]


def attachment_kind_tagger(kind: str, attachments_path: str = "attachments") -> TagPredicate:
    """Tag items carrying at least one attachment of the given *kind*.

    ``attachments_path`` is a dotted path to the attachment list, e.g.
    ``post.attachments`` for feeds that wrap each entity in an envelope.
    """

    def _predicate(item: Item) -> bool:
        attachments = get_path(item, attachments_path)
        if isinstance(attachments, (str, bytes)) or not isinstance(attachments, Sequence):
            return False
        return any(
            isinstance(attachment, Mapping) and attachment.get("kind") == kind
            for attachment in attachments
        )

    return _predicate


def count_tagged(items: Sequence[Item], tagger: TagPredicate | None) -> int:
    if tagger is None:
        return 0
    return sum(1 for item in items if tagger(item))
