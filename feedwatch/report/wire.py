"""Serialisation of a Report to its JSON wire document.

Field names and nesting are a contract with downstream consumers (chart
renderers, table printers) and do not follow the dataclass field names.
"""

from __future__ import annotations

from datetime import datetime

from feedwatch.models.document import Document, DocumentKind, kind_of
from feedwatch.models.report import Report
from feedwatch.models.snapshots import Comparison, DiffKind, FieldDiff, ItemSummary, Snapshot


def report_to_dict(report: Report) -> dict[str, object]:
    """Return *report* as a JSON-serialisable dict."""
    summary = report.summary
    statistics = report.statistics
    return {
        "summary": {
            "totalIterations": summary.total_iterations,
            "totalDuration": summary.total_duration,
            "averageInterval": summary.average_interval,
            "startTime": _iso(summary.start_time),
            "endTime": _iso(summary.end_time),
        },
        "iterations": [
            {
                "iteration": record.iteration,
                "timestamp": _iso(record.timestamp),
                "itemCount": record.item_count,
                "taggedCount": record.tagged_count,
            }
            for record in report.iterations
        ],
        "comparisons": [comparison_to_dict(c) for c in report.comparisons],
        "statistics": {
            "totalNewItems": statistics.total_new,
            "totalRemovedItems": statistics.total_removed,
            "totalModifiedItems": statistics.total_modified,
            "averageItemsPerIteration": statistics.avg_items_per_iteration,
            "minItems": statistics.min_items,
            "maxItems": statistics.max_items,
        },
    }


def snapshot_to_dict(snapshot: Snapshot) -> dict[str, object]:
    """Return one captured snapshot as a JSON-serialisable dict.

    ``items`` is null for a malformed capture.
    """
    return {
        "iteration": snapshot.iteration,
        "timestamp": _iso(snapshot.timestamp),
        "itemCount": snapshot.item_count,
        "items": None if snapshot.items is None else [_plain(item) for item in snapshot.items],
    }


def comparison_to_dict(comparison: Comparison) -> dict[str, object]:
    totals = comparison.total_items
    return {
        "iteration": comparison.iteration,
        "timestamp": _iso(comparison.to_timestamp),
        "previousTimestamp": _iso(comparison.from_timestamp),
        "changes": {
            "totalItems": {
                "previous": totals.previous,
                "current": totals.current,
                "difference": totals.difference,
            },
            "newItems": [_summary_to_dict(s) for s in comparison.new_items],
            "removedItems": [_summary_to_dict(s) for s in comparison.removed_items],
            "modifiedItems": [
                {"id": modified.id, "changes": [_field_diff_to_dict(d) for d in modified.diffs]}
                for modified in comparison.modified_items
            ],
        },
    }


def _summary_to_dict(summary: ItemSummary) -> dict[str, object]:
    return {"id": summary.id, "text": summary.text, "posted_at": _plain(summary.posted_at)}


def _field_diff_to_dict(diff: FieldDiff) -> dict[str, object]:
    # Added fields carry no oldValue key at all
    payload: dict[str, object] = {"path": diff.path, "type": diff.kind.value}
    if diff.kind is DiffKind.MODIFIED:
        payload["oldValue"] = _plain(diff.old_value)
    payload["newValue"] = _plain(diff.new_value)
    return payload


def _plain(value: Document) -> object:
    """Copy a document into plain dict/list containers."""
    match kind_of(value):
        case DocumentKind.MAPPING:
            return {str(k): _plain(v) for k, v in value.items()}
        case DocumentKind.SEQUENCE:
            return [_plain(v) for v in value]
        case _:
            return value


def _iso(value: datetime | None) -> str | None:
    return value.isoformat() if value is not None else None


