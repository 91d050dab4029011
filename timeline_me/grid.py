from __future__ import annotations

import dataclasses
import logging
from typing import Any, Iterable

from .dates import DateToken, format_label
from .intervals import (
    IntervalModel,
    NormalizedInterval,
    OpenEnd,
    TimelineEvent,
    build_intervals,
)
from .packer import TrackAssignment, pack_tracks, track_count

logger = logging.getLogger(__name__)

DATE_SEPARATOR = " – "
PRESENT_LABEL = "Present"
DEFAULT_PADDING = 6


@dataclasses.dataclass(frozen=True)
class GridPlacement:
    column_start: int
    column_span: int
    track_index: int
    total_tracks: int
    date_label: str
    label: str
    category: str = ""
    description: str = ""
    source_index: int = 0

    def to_dict(self) -> dict[str, Any]:
        return dataclasses.asdict(self)


@dataclasses.dataclass(frozen=True)
class YearTick:
    year: int
    column: int


@dataclasses.dataclass(frozen=True)
class TimelineLayout:
    placements: list[GridPlacement]
    min_month: int
    max_month: int
    total_tracks: int
    dropped: list[int] = dataclasses.field(default_factory=list)

    @property
    def total_months(self) -> int:
        return self.max_month - self.min_month

    @property
    def is_empty(self) -> bool:
        return not self.placements


def format_date_label(
    start: DateToken,
    end: DateToken | None,
    separator: str = DATE_SEPARATOR,
    present: str = PRESENT_LABEL,
) -> str:
    end_text = format_label(end) if end else present
    return f"{format_label(start)}{separator}{end_text}"


def project(
    interval: NormalizedInterval,
    assignment: TrackAssignment,
    min_month: int,
    total_tracks: int = 1,
    separator: str = DATE_SEPARATOR,
    present: str = PRESENT_LABEL,
) -> GridPlacement:
    return GridPlacement(
        column_start=interval.start_month - min_month + 1,
        column_span=max(interval.end_month - interval.start_month, 1),
        track_index=assignment.track_index,
        total_tracks=max(total_tracks, assignment.track_index + 1),
        date_label=format_date_label(interval.start, interval.end, separator, present),
        label=interval.label,
        category=interval.category,
        description=interval.description,
        source_index=interval.source_index,
    )


def project_all(
    model: IntervalModel,
    assignments: Iterable[TrackAssignment],
    min_month: int | None = None,
    separator: str = DATE_SEPARATOR,
    present: str = PRESENT_LABEL,
) -> list[GridPlacement]:
    assignments = list(assignments)
    total = track_count(assignments)
    origin = model.min_month if min_month is None else min_month
    placements = [
        project(assignment.interval, assignment, origin, total, separator, present)
        for assignment in assignments
    ]
    return sorted(placements, key=lambda placement: placement.source_index)


def layout(
    events: Iterable[TimelineEvent],
    now: DateToken,
    padding: int = DEFAULT_PADDING,
    open_end: OpenEnd = OpenEnd.NOW,
    separator: str = DATE_SEPARATOR,
    present: str = PRESENT_LABEL,
) -> TimelineLayout:
    events = list(events)
    model = build_intervals(events, now, open_end)
    if model.is_empty:
        logger.info("no placeable events out of %d", len(events))
        return TimelineLayout([], 0, 0, 0, model.dropped)
    assignments = pack_tracks(model.intervals)
    min_month = model.min_month - padding
    max_month = model.max_month + padding
    placements = project_all(model, assignments, min_month, separator, present)
    return TimelineLayout(
        placements=placements,
        min_month=min_month,
        max_month=max_month,
        total_tracks=track_count(assignments),
        dropped=model.dropped,
    )


def year_ticks(result: TimelineLayout) -> list[YearTick]:
    if result.is_empty:
        return []
    ticks = []
    first_year = -(-result.min_month // 12)
    for year in range(first_year, result.max_month // 12 + 1):
        ticks.append(YearTick(year=year, column=year * 12 - result.min_month + 1))
    return ticks


def to_pixels(placement: GridPlacement, pixels_per_month: float) -> tuple[float, float]:
    offset = (placement.column_start - 1) * pixels_per_month
    size = max(placement.column_span * pixels_per_month, pixels_per_month)
    return offset, size
