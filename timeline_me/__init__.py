from __future__ import annotations

from .dates import DateToken, current_month, format_label, month_of, parse_date
from .errors import (
    ImportExtractionEmpty,
    InvalidDateFormat,
    NoPlaceableEvents,
    TimelineError,
)
from .grid import (
    GridPlacement,
    TimelineLayout,
    YearTick,
    format_date_label,
    layout,
    project,
    to_pixels,
    year_ticks,
)
from .importer import DateRangeMatch, ResumeImporter, import_from_lines, match_date_range
from .intervals import (
    IntervalModel,
    NormalizedInterval,
    OpenEnd,
    TimelineEvent,
    build_intervals,
    events_from_dicts,
)
from .locales import Locale, LocaleTable, load_locales
from .packer import TrackAssignment, pack_tracks, track_count
from .pdf import import_pdf

__version__ = "0.1.0"

__all__ = [
    "DateRangeMatch",
    "DateToken",
    "GridPlacement",
    "ImportExtractionEmpty",
    "IntervalModel",
    "InvalidDateFormat",
    "Locale",
    "LocaleTable",
    "NoPlaceableEvents",
    "NormalizedInterval",
    "OpenEnd",
    "ResumeImporter",
    "TimelineError",
    "TimelineEvent",
    "TimelineLayout",
    "TrackAssignment",
    "YearTick",
    "build_intervals",
    "current_month",
    "events_from_dicts",
    "format_date_label",
    "format_label",
    "import_from_lines",
    "import_pdf",
    "layout",
    "load_locales",
    "match_date_range",
    "month_of",
    "pack_tracks",
    "parse_date",
    "project",
    "to_pixels",
    "track_count",
    "year_ticks",
]
