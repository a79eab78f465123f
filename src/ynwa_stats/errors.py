"""Exception hierarchy shared by the feed, merge and cache layers."""

from __future__ import annotations


class StatsError(Exception):
    """Base class for errors raised by ynwa_stats."""


class ConfigurationError(StatsError):
    """Raised when the service cannot run because its configuration is unusable.

    This is the only failure that is surfaced to users as a terminal error; the
    message should tell them how to fix it.
    """

    def __init__(self, message: str, *, remedy: str | None = None):
        super().__init__(message)
        self.message = message
        self.remedy = remedy


class MalformedEntryError(StatsError, ValueError):
    """Raised when a single feed entry lacks the fields needed to build a record."""
