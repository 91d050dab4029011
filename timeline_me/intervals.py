from __future__ import annotations

import dataclasses
import enum
import logging
from typing import Any, Iterable, Mapping

from .dates import DateToken, parse_date
from .errors import InvalidDateFormat

logger = logging.getLogger(__name__)


class OpenEnd(str, enum.Enum):
    NOW = "now"
    POINT = "point"


@dataclasses.dataclass(frozen=True)
class TimelineEvent:
    start: str
    end: str | None
    label: str
    category: str
    description: str = ""

    @classmethod
    def from_dict(cls, record: Mapping[str, Any]) -> TimelineEvent:
        end = record.get("end")
        return cls(
            start=str(record.get("start") or "").strip(),
            end=(str(end).strip() or None) if end else None,
            label=str(record.get("label") or "").strip(),
            category=str(record.get("category") or "").strip(),
            description=str(record.get("description") or "").strip(),
        )

    def to_dict(self) -> dict[str, Any]:
        record: dict[str, Any] = {
            "start": self.start,
            "end": self.end,
            "label": self.label,
            "category": self.category,
        }
        if self.description:
            record["description"] = self.description
        return record


@dataclasses.dataclass(frozen=True)
class NormalizedInterval:
    start_month: int
    end_month: int
    label: str
    category: str
    description: str
    source_index: int
    start: DateToken
    end: DateToken | None

    @property
    def is_open(self) -> bool:
        return self.end is None


@dataclasses.dataclass(frozen=True)
class IntervalModel:
    intervals: list[NormalizedInterval]
    min_month: int
    max_month: int
    dropped: list[int] = dataclasses.field(default_factory=list)

    @property
    def is_empty(self) -> bool:
        return not self.intervals


def events_from_dicts(records: Iterable[Any]) -> list[TimelineEvent]:
    events = []
    for index, record in enumerate(records):
        if not isinstance(record, Mapping):
            logger.warning(
                "skipping event %d: expected an object, got %s", index, type(record).__name__
            )
            continue
        event = TimelineEvent.from_dict(record)
        if not event.start:
            logger.warning("skipping event %d (%r): missing start date", index, event.label)
            continue
        events.append(event)
    return events


def resolve_end_month(
    start: DateToken, end: DateToken | None, now: DateToken, open_end: OpenEnd = OpenEnd.NOW
) -> int:
    if end is None:
        if open_end is OpenEnd.POINT:
            if start.has_explicit_month:
                return start.absolute_month
            return start.absolute_month + 12
        return max(now.absolute_month, start.absolute_month)
    if end.has_explicit_month:
        return max(end.absolute_month, start.absolute_month)
    full_years = end.year - start.year
    if full_years <= 0:
        return (start.year + 1) * 12
    return (end.year + 1) * 12


def normalize_event(
    event: TimelineEvent,
    index: int,
    now: DateToken,
    open_end: OpenEnd = OpenEnd.NOW,
) -> NormalizedInterval:
    start = parse_date(event.start)
    end = parse_date(event.end) if event.end else None
    return NormalizedInterval(
        start_month=start.absolute_month,
        end_month=resolve_end_month(start, end, now, open_end),
        label=event.label,
        category=event.category,
        description=event.description,
        source_index=index,
        start=start,
        end=end,
    )


def build_intervals(
    events: Iterable[TimelineEvent],
    now: DateToken,
    open_end: OpenEnd = OpenEnd.NOW,
) -> IntervalModel:
    intervals: list[NormalizedInterval] = []
    dropped: list[int] = []
    for index, event in enumerate(events):
        try:
            intervals.append(normalize_event(event, index, now, open_end))
        except InvalidDateFormat as exc:
            logger.warning("dropping event %d (%r): %s", index, event.label, exc)
            dropped.append(index)
    if not intervals:
        return IntervalModel([], 0, 0, dropped)
    return IntervalModel(
        intervals=intervals,
        min_month=min(interval.start_month for interval in intervals),
        max_month=max(interval.end_month for interval in intervals),
        dropped=dropped,
    )
