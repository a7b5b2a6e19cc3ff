"""feedwatch: periodic feed snapshots, structural diffs and change reports."""

__version__ = "0.1.0"
