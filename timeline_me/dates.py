from __future__ import annotations

import dataclasses
import re
from datetime import date

from .errors import InvalidDateFormat

YEAR_RE = re.compile(r"^(?P<year>\d{4})$")
SLASH_RE = re.compile(r"^(?P<month>\d{1,2})/(?P<year>\d{4})$")
DASH_RE = re.compile(r"^(?P<year>\d{4})-(?P<month>\d{1,2})$")


@dataclasses.dataclass(frozen=True)
class DateToken:
    absolute_month: int
    has_explicit_month: bool = False

    @property
    def year(self) -> int:
        return self.absolute_month // 12

    @property
    def month(self) -> int:
        return self.absolute_month % 12 + 1


def month_of(year: int, month: int = 1, explicit: bool = True) -> DateToken:
    if not 1 <= month <= 12:
        raise InvalidDateFormat(f"{month:02d}/{year}", "month must be between 1 and 12")
    return DateToken(year * 12 + month - 1, explicit)


def current_month(today: date | None = None) -> DateToken:
    today = today or date.today()
    return month_of(today.year, today.month)


def parse_date(text: str | None) -> DateToken:
    value = (text or "").strip()
    if not value:
        raise InvalidDateFormat(text or "", "empty date")
    match = YEAR_RE.match(value)
    if match:
        return DateToken(int(match.group("year")) * 12, False)
    match = SLASH_RE.match(value) or DASH_RE.match(value)
    if not match:
        raise InvalidDateFormat(value, "expected YYYY, MM/YYYY or YYYY-MM")
    month = int(match.group("month"))
    if not 1 <= month <= 12:
        raise InvalidDateFormat(value, "month must be between 1 and 12")
    return month_of(int(match.group("year")), month)


def format_label(token: DateToken) -> str:
    if token.has_explicit_month:
        return f"{token.month:02d}/{token.year}"
    return str(token.year)
