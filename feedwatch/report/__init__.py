"""Report package for feedwatch.

Submodules:
    aggregator  -- build_report: per-iteration, per-transition and aggregate statistics.
    tagging     -- Pluggable tagged-item predicates.
    wire        -- Report and snapshot serialisation to JSON wire documents.
"""

from feedwatch.report.aggregator import build_report
from feedwatch.report.tagging import TagPredicate, attachment_kind_tagger, count_tagged
from feedwatch.report.wire import comparison_to_dict, report_to_dict, snapshot_to_dict

__all__ = [
    "TagPredicate",
    "attachment_kind_tagger",
    "build_report",
    "comparison_to_dict",
    "count_tagged",
    "report_to_dict",
    "snapshot_to_dict",
]
