"""Exception hierarchy for feedwatch."""

from __future__ import annotations


class FeedWatchError(Exception):
    """Base class for all feedwatch errors."""


class FetchError(FeedWatchError):
    """Raised by a feed source when a snapshot cannot be obtained.

    Retry and back-off are the source's responsibility; by the time this
    reaches the acquirer the failure is final.
    """


class RunFailedError(FetchError):
    """Raised by the acquirer when a fetch aborts the run.

    Subclasses FetchError so callers that only care about the feed failure
    can keep catching FetchError.
    """

    def __init__(self, iteration: int, cause: Exception) -> None:
        super().__init__(f"Fetch failed at iteration {iteration}: {cause}")
        self.iteration = iteration
        self.cause = cause


class DocumentTypeError(FeedWatchError, TypeError):
    """Raised when a value outside the JSON value space reaches the diff engine."""
