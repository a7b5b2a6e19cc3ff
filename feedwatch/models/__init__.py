"""Core data structures for feedwatch."""

from feedwatch.models.config import FeedWatchConfig
from feedwatch.models.document import (
    Document,
    DocumentKind,
    Item,
    documents_equal,
    is_composite,
    is_mapping,
    kind_of,
)
from feedwatch.models.report import (
    IterationRecord,
    Report,
    ReportStatistics,
    RunState,
    RunSummary,
)
from feedwatch.models.snapshots import (
    CollectionDiff,
    Comparison,
    DiffKind,
    FieldDiff,
    ItemCountDelta,
    ItemSummary,
    ModifiedItem,
    Snapshot,
)

__all__ = [
    "CollectionDiff",
    "Comparison",
    "DiffKind",
    "Document",
    "DocumentKind",
    "FeedWatchConfig",
    "FieldDiff",
    "Item",
    "ItemCountDelta",
    "ItemSummary",
    "IterationRecord",
    "ModifiedItem",
    "Report",
    "ReportStatistics",
    "RunState",
    "RunSummary",
    "Snapshot",
    "documents_equal",
    "is_composite",
    "is_mapping",
    "kind_of",
]
