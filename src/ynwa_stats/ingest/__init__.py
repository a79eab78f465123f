"""Merging of scorer and assist feeds into canonical player records."""

from .merge import (
    MergeReport,
    apply_assist_overlay,
    build_scorer_record,
    merge_competition_feeds,
    merge_feeds,
)

__all__ = [
    "MergeReport",
    "apply_assist_overlay",
    "build_scorer_record",
    "merge_competition_feeds",
    "merge_feeds",
]
