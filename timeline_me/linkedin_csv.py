from __future__ import annotations

import csv
import io
import logging
import re
from pathlib import Path
from typing import Iterator

from .importer import EDUCATION_CATEGORY, WORK_CATEGORY, build_label
from .intervals import TimelineEvent
from .locales import LocaleTable

logger = logging.getLogger(__name__)

POSITION_COLUMNS = {
    "company": "Company Name",
    "title": "Title",
    "description": "Description",
    "start": "Started On",
    "end": "Finished On",
}
EDUCATION_COLUMNS = {
    "school": "School Name",
    "degree": "Degree Name",
    "notes": "Notes",
    "start": "Start Date",
    "end": "End Date",
}


def normalize_name(value: str | None) -> str:
    return (value or "").strip()


def read_rows(text: str, columns: dict[str, str]) -> Iterator[dict[str, str]]:
    reader = csv.DictReader(io.StringIO(text.lstrip("\ufeff")))
    headers = reader.fieldnames or []
    mapping = {}
    for key, wanted in columns.items():
        mapping[key] = next((header for header in headers if wanted in header), None)
    for row in reader:
        yield {
            key: normalize_name(row.get(header)) if header else ""
            for key, header in mapping.items()
        }


def parse_linkedin_date(value: str | None, locales: LocaleTable | None = None) -> str | None:
    raw = normalize_name(value)
    if not raw:
        return None
    locales = locales or LocaleTable()
    if locales.is_present(raw):
        return None
    if re.fullmatch(r"\d{4}", raw):
        return raw
    parts = raw.split()
    if len(parts) == 2 and re.fullmatch(r"\d{4}", parts[1]):
        month = locales.month_number(parts[0])
        if month:
            return f"{month:02d}/{parts[1]}"
    match = re.fullmatch(r"(\d{4})-(\d{1,2})(?:-\d{1,2})?", raw)
    if match:
        return f"{int(match.group(2)):02d}/{match.group(1)}"
    logger.debug("keeping unrecognised LinkedIn date %r as is", raw)
    return raw


def parse_positions_csv(text: str, locales: LocaleTable | None = None) -> list[TimelineEvent]:
    events = []
    for row in read_rows(text, POSITION_COLUMNS):
        start = parse_linkedin_date(row["start"], locales)
        if not start:
            logger.debug("skipping position without start date: %r", row["title"])
            continue
        events.append(
            TimelineEvent(
                start=start,
                end=parse_linkedin_date(row["end"], locales),
                label=build_label(row["title"], row["company"]),
                category=WORK_CATEGORY,
                description=row["description"],
            )
        )
    return events


def parse_education_csv(text: str, locales: LocaleTable | None = None) -> list[TimelineEvent]:
    events = []
    for row in read_rows(text, EDUCATION_COLUMNS):
        start = parse_linkedin_date(row["start"], locales)
        if not start:
            logger.debug("skipping education without start date: %r", row["school"])
            continue
        events.append(
            TimelineEvent(
                start=start,
                end=parse_linkedin_date(row["end"], locales),
                label=build_label(row["degree"], row["school"]),
                category=EDUCATION_CATEGORY,
                description=row["notes"],
            )
        )
    return events


def load_positions_csv(path: Path, locales: LocaleTable | None = None) -> list[TimelineEvent]:
    return parse_positions_csv(path.read_text(encoding="utf-8-sig"), locales)


def load_education_csv(path: Path, locales: LocaleTable | None = None) -> list[TimelineEvent]:
    return parse_education_csv(path.read_text(encoding="utf-8-sig"), locales)
