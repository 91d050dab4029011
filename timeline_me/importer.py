from __future__ import annotations

import dataclasses
import enum
import logging
import re
from functools import lru_cache
from typing import Iterable

from .errors import InvalidDateFormat
from .intervals import TimelineEvent
from .locales import EDUCATION, EXPERIENCE, STOP, LocaleTable

logger = logging.getLogger(__name__)

WORK_CATEGORY = "Work"
EDUCATION_CATEGORY = "Education"

DASHES = "-–—"
BULLET_RE = re.compile(r"^[·•\-–]\s*")
PAGE_RE = re.compile(r"^page\s+\d+\s+(?:of|/|di)\s*\d+$", re.I)
YEAR_RE = re.compile(r"\b\d{4}\b")
DURATION_RE = re.compile(
    r"^\(?(?:(?:\d+|un|uno|una|a|an|one)\s+"
    r"(?:anni|anno|mesi|mese|years?|yrs?|months?|mos?)\b[\s,]*(?:and\s+|e\s+)?)+\)?$",
    re.I,
)
LOCATION_RE = re.compile(r"^[^\W\d_][^\W\d_\s,'.-]*(?:[\s,'.-]+[^\W\d_]+)*$")
EDU_INLINE_RE = re.compile(
    r"^(?P<degree>.+?)\s*·\s*\((?P<range>[^()]*\d{4}[^()]*)\)\s*$"
)
ROLE_RE = re.compile(
    r"\b(?:developer|engineer|manager|director|lead|architect|consultant|analyst"
    r"|designer|owner|founder|cto\b|ceo\b|vp\b|head\b|principal|intern|specialist"
    r"|scientist|researcher|assistant|coordinator|officer|administrator|teacher"
    r"|sviluppatore|ingegnere|responsabile|tirocinante|stagista|ricercatore"
    r"|consulente|progettista|tecnico)",
    re.I,
)
ORGANIZATION_RE = re.compile(
    r"\b(?:inc|llc|ltd|gmbh|corp|corporation|company|s\.?p\.?a|s\.?r\.?l|s\.a"
    r"|group|oy|ag)\b\.?",
    re.I,
)
DEGREE_RE = re.compile(
    r"\b(?:bachelor|master|doctor|degree|diploma|laurea|dottorato|certificate"
    r"|(?:phd|ph\.d|bsc|msc|mba|ba|ma|bs|ms)\b)",
    re.I,
)
SCHOOL_RE = re.compile(
    r"\b(?:university|universit[aà]|politecnico|polytechnic|college|school|institute"
    r"|istituto|liceo|academy|accademia|scuola)",
    re.I,
)


class Section(str, enum.Enum):
    NONE = "none"
    EXPERIENCE = "experience"
    EDUCATION = "education"


SECTION_STATES = {
    EXPERIENCE: Section.EXPERIENCE,
    EDUCATION: Section.EDUCATION,
    STOP: Section.NONE,
}


@dataclasses.dataclass(frozen=True)
class DateRangeMatch:
    start: str
    end: str


@dataclasses.dataclass(frozen=True)
class Heading:
    title: str = ""
    organization: str = ""
    continues: bool = False
    grouped: bool = False
    title_index: int = -1
    organization_index: int = -1


def is_page_header(text: str) -> bool:
    return bool(PAGE_RE.match(text.strip()))


def is_duration_line(text: str) -> bool:
    if YEAR_RE.search(text):
        return False
    return bool(DURATION_RE.match(text.strip()))


def looks_like_heading(text: str) -> bool:
    if len(text) > 60:
        return False
    if any(char.isdigit() for char in text):
        return False
    words = text.strip().split()
    return 1 <= len(words) <= 5


def looks_like_entry_heading(text: str) -> bool:
    if BULLET_RE.match(text) or len(text) > 80 or len(text.split()) > 8:
        return False
    return not text.endswith(".") or bool(ORGANIZATION_RE.search(text))


def looks_like_location(text: str) -> bool:
    return "," in text and len(text) < 60 and bool(LOCATION_RE.match(text))


def title_score(text: str) -> int:
    return int(bool(ROLE_RE.search(text))) - int(bool(ORGANIZATION_RE.search(text)))


def degree_score(text: str) -> int:
    return int(bool(DEGREE_RE.search(text))) - int(bool(SCHOOL_RE.search(text)))


def strip_bullet(text: str) -> str:
    return BULLET_RE.sub("", text).strip()


def build_label(title: str, organization: str) -> str:
    if title and organization:
        return f"{title} at {organization}"
    return title or organization


class ResumeImporter:
    def __init__(self, locales: LocaleTable | None = None) -> None:
        self.locales = locales or LocaleTable()
        months = self.locales.month_pattern()
        present = self.locales.present_pattern()
        self.date_range_re = re.compile(
            rf"^(?P<month>{months})\.?\s+(?P<year>\d{{4}})\s*[{DASHES}]\s*"
            rf"(?P<end>(?:{present})\b|(?:{months})\.?\s+\d{{4}}|[^\W\d_]+\.?\s+\d{{4}})",
            re.I,
        )
        self.year_range_re = re.compile(
            rf"^[·\s(]*(?P<start>\d{{4}})\s*[{DASHES}]\s*"
            rf"(?P<end>\d{{4}}|(?:{present})\b)[)\s]*$",
            re.I,
        )

    def match_date_range(self, line: str) -> DateRangeMatch | None:
        match = self.date_range_re.match(line.strip())
        if not match:
            return None
        start = f"{match.group('month')} {match.group('year')}"
        return DateRangeMatch(start=start, end=match.group("end"))

    def match_year_range(self, line: str) -> DateRangeMatch | None:
        match = self.year_range_re.match(line.strip())
        if not match:
            return None
        return DateRangeMatch(start=match.group("start"), end=match.group("end"))

    def match_education_range(self, line: str) -> tuple[DateRangeMatch | None, str]:
        cleaned = re.sub(r"[)\s]+$", "", re.sub(r"^[·\s(]+", "", line.strip()))
        match = self.match_date_range(cleaned) or self.match_year_range(line)
        if match:
            return match, ""
        inline = EDU_INLINE_RE.match(line.strip())
        if inline:
            span = inline.group("range")
            match = self.match_date_range(span) or self.match_year_range(span)
            if match:
                return match, inline.group("degree").strip()
        return None, ""

    def to_date_string(self, text: str) -> str | None:
        value = text.strip().strip("()·").strip()
        if self.locales.is_present(value):
            return None
        parts = value.split()
        if len(parts) == 1 and re.fullmatch(r"\d{4}", parts[0]):
            return parts[0]
        if len(parts) == 2 and re.fullmatch(r"\d{4}", parts[1]):
            month = self.locales.month_number(parts[0])
            if month:
                return f"{month:02d}/{parts[1]}"
            logger.debug("unknown month %r, keeping year only", parts[0])
            return parts[1]
        raise InvalidDateFormat(text, "expected '<Month> <Year>', '<Year>' or a present word")

    def section_of(self, text: str) -> Section | None:
        if not looks_like_heading(text):
            return None
        kind = self.locales.section_for(text)
        if kind is None:
            return None
        return SECTION_STATES[kind]

    def is_boundary(self, text: str) -> bool:
        if self.section_of(text) is not None:
            return True
        if self.match_date_range(text):
            return True
        match, _ = self.match_education_range(text)
        return match is not None

    def previous_content(self, texts: list[str], cursor: int) -> int:
        while cursor >= 0 and (not texts[cursor] or is_duration_line(texts[cursor])):
            cursor -= 1
        if cursor >= 0 and self.section_of(texts[cursor]) is not None:
            return -1
        return cursor

    def backtrack(self, texts: list[str], index: int) -> Heading:
        cursor = self.previous_content(texts, index - 1)
        if cursor < 0:
            return Heading()
        nearer = texts[cursor]
        if self.is_boundary(nearer):
            return Heading()
        farther_cursor = self.previous_content(texts, cursor - 1)
        if farther_cursor < 0:
            return Heading(nearer, title_index=cursor)
        farther = texts[farther_cursor]
        if self.is_boundary(farther) or not looks_like_entry_heading(farther):
            return Heading(nearer, continues=True, title_index=cursor)
        grouped = any(is_duration_line(texts[i]) for i in range(farther_cursor + 1, cursor))
        return Heading(nearer, farther, False, grouped, cursor, farther_cursor)

    def opens_organization(self, heading: Heading, in_group: bool) -> bool:
        """Inside a multi-role group only a new group header or a company name leaves it."""
        if not in_group:
            return True
        return heading.grouped or bool(ORGANIZATION_RE.search(heading.organization))

    def heading_start(
        self, texts: list[str], boundary: int, floor: int, in_group: bool = False
    ) -> int:
        if boundary >= len(texts) or self.section_of(texts[boundary]) is not None:
            return boundary
        heading = self.backtrack(texts, boundary)
        if not heading.title or heading.title_index <= floor:
            return boundary
        if (
            heading.organization
            and heading.organization_index > floor
            and self.opens_organization(heading, in_group)
        ):
            return heading.organization_index
        return heading.title_index

    def collect_description(
        self, texts: list[str], index: int, skip_location: bool, in_group: bool = False
    ) -> str:
        end = index + 1
        while end < len(texts) and not self.is_boundary(texts[end]):
            end += 1
        end = self.heading_start(texts, end, index, in_group)
        collected = []
        for cursor in range(index + 1, end):
            text = texts[cursor]
            if skip_location and cursor == index + 1 and looks_like_location(text):
                continue
            if is_duration_line(text):
                continue
            clean = strip_bullet(text)
            if clean:
                collected.append(clean)
        return "\n".join(collected)

    def read_experience(
        self, texts: list[str], index: int, last_organization: str, in_group: bool = False
    ) -> tuple[TimelineEvent | None, str, bool]:
        match = self.match_date_range(texts[index])
        if not match:
            return None, last_organization, in_group
        start, end = self.resolve_dates(match, texts[index])
        if start is None:
            return None, last_organization, in_group
        heading = self.backtrack(texts, index)
        title, organization = heading.title, heading.organization
        grouped = in_group
        if heading.continues or (organization and not self.opens_organization(heading, in_group)):
            organization = last_organization
        else:
            grouped = heading.grouped
            if title_score(organization) > title_score(title):
                title, organization = organization, title
        if not title:
            logger.debug("no title before %r, skipping", texts[index])
            return None, last_organization, in_group
        event = TimelineEvent(
            start=start,
            end=end,
            label=build_label(title, organization),
            category=WORK_CATEGORY,
            description=self.collect_description(texts, index, True, grouped),
        )
        return event, organization or last_organization, grouped

    def read_education(self, texts: list[str], index: int) -> TimelineEvent | None:
        match, inline_degree = self.match_education_range(texts[index])
        if not match:
            return None
        start, end = self.resolve_dates(match, texts[index])
        if start is None:
            return None
        if inline_degree:
            cursor = self.previous_content(texts, index - 1)
            degree = inline_degree
            school = texts[cursor] if cursor >= 0 and not self.is_boundary(texts[cursor]) else ""
        else:
            heading = self.backtrack(texts, index)
            degree, school = heading.title, heading.organization
            if degree_score(school) > degree_score(degree):
                degree, school = school, degree
        if not degree:
            logger.debug("no degree before %r, skipping", texts[index])
            return None
        return TimelineEvent(
            start=start,
            end=end,
            label=build_label(degree, school),
            category=EDUCATION_CATEGORY,
            description=self.collect_description(texts, index, skip_location=False),
        )

    def resolve_dates(self, match: DateRangeMatch, line: str) -> tuple[str | None, str | None]:
        try:
            start = self.to_date_string(match.start)
            end = self.to_date_string(match.end)
        except InvalidDateFormat as exc:
            logger.debug("skipping %r: %s", line, exc)
            return None, None
        if start is None:
            logger.debug("skipping %r: start date is open", line)
        return start, end

    def import_lines(self, lines: Iterable[str]) -> list[TimelineEvent]:
        texts = ["" if is_page_header(line) else line.strip() for line in lines]
        section = Section.NONE
        last_organization = ""
        in_group = False
        events: list[TimelineEvent] = []
        for index, text in enumerate(texts):
            if not text:
                continue
            state = self.section_of(text)
            if state is not None:
                section = state
                last_organization, in_group = "", False
                continue
            event = None
            if section is Section.EXPERIENCE:
                event, last_organization, in_group = self.read_experience(
                    texts, index, last_organization, in_group
                )
            elif section is Section.EDUCATION:
                event = self.read_education(texts, index)
            if event:
                events.append(event)
        logger.info("imported %d events from %d lines", len(events), len(texts))
        return events


@lru_cache(maxsize=1)
def default_importer() -> ResumeImporter:
    return ResumeImporter()


def match_date_range(line: str) -> DateRangeMatch | None:
    return default_importer().match_date_range(line)


def import_from_lines(
    lines: Iterable[str], locales: LocaleTable | None = None
) -> list[TimelineEvent]:
    importer = ResumeImporter(locales) if locales else default_importer()
    return importer.import_lines(lines)
