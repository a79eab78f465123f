"""API-Football feed access and raw entry parsing."""

from .client import CompetitionFeeds, FeedClient, FeedKind, FeedSource
from .entries import FeedEntry

__all__ = [
    "CompetitionFeeds",
    "FeedClient",
    "FeedEntry",
    "FeedKind",
    "FeedSource",
]
