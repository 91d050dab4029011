from __future__ import annotations

import dataclasses
import logging
from typing import Iterable

from .intervals import NormalizedInterval

logger = logging.getLogger(__name__)


@dataclasses.dataclass(frozen=True)
class TrackAssignment:
    interval: NormalizedInterval
    track_index: int


def packing_order(intervals: Iterable[NormalizedInterval]) -> list[NormalizedInterval]:
    return sorted(
        intervals,
        key=lambda item: (item.start_month, -item.end_month, item.source_index),
    )


def pack_tracks(intervals: Iterable[NormalizedInterval]) -> list[TrackAssignment]:
    track_ends: list[int] = []
    assignments: list[TrackAssignment] = []
    for interval in packing_order(intervals):
        track_index = -1
        for idx, track_end in enumerate(track_ends):
            if track_end <= interval.start_month:
                track_index = idx
                track_ends[idx] = interval.end_month
                break
        if track_index == -1:
            track_index = len(track_ends)
            track_ends.append(interval.end_month)
        assignments.append(TrackAssignment(interval, track_index))
    logger.debug("packed %d intervals into %d tracks", len(assignments), len(track_ends))
    return assignments


def track_count(assignments: Iterable[TrackAssignment]) -> int:
    return max((assignment.track_index + 1 for assignment in assignments), default=0)


def is_point(interval: NormalizedInterval) -> bool:
    return interval.end_month == interval.start_month


def intervals_overlap(left: NormalizedInterval, right: NormalizedInterval) -> bool:
    """A point overlaps the intervals covering its month; two points never do."""
    if is_point(left):
        left, right = right, left
    if is_point(left):
        return False
    if is_point(right):
        return left.start_month <= right.start_month < left.end_month
    return left.start_month < right.end_month and right.start_month < left.end_month
