from __future__ import annotations

import dataclasses
import json
import logging
import re
import unicodedata
from pathlib import Path
from typing import Any, Iterable, Mapping

from unidecode import unidecode

logger = logging.getLogger(__name__)

EXPERIENCE = "experience"
EDUCATION = "education"
STOP = "stop"

SECTION_KINDS = (EXPERIENCE, EDUCATION, STOP)


@dataclasses.dataclass(frozen=True)
class Locale:
    name: str
    months: dict[str, int]
    present_words: tuple[str, ...] = ()
    section_aliases: dict[str, tuple[str, ...]] = dataclasses.field(default_factory=dict)


ENGLISH = Locale(
    name="en",
    months={
        "jan": 1,
        "january": 1,
        "feb": 2,
        "february": 2,
        "mar": 3,
        "march": 3,
        "apr": 4,
        "april": 4,
        "may": 5,
        "jun": 6,
        "june": 6,
        "jul": 7,
        "july": 7,
        "aug": 8,
        "august": 8,
        "sep": 9,
        "sept": 9,
        "september": 9,
        "oct": 10,
        "october": 10,
        "nov": 11,
        "november": 11,
        "dec": 12,
        "december": 12,
    },
    present_words=("present", "current", "now"),
    section_aliases={
        EXPERIENCE: ("experience", "work experience", "professional experience"),
        EDUCATION: ("education",),
        STOP: (
            "skills",
            "top skills",
            "languages",
            "certifications",
            "licenses & certifications",
            "honors-awards",
            "honors awards",
            "publications",
            "summary",
            "contact",
        ),
    },
)

ITALIAN = Locale(
    name="it",
    months={
        "gen": 1,
        "gennaio": 1,
        "feb": 2,
        "febbr": 2,
        "febbraio": 2,
        "mar": 3,
        "marzo": 3,
        "apr": 4,
        "aprile": 4,
        "mag": 5,
        "maggio": 5,
        "giu": 6,
        "giugno": 6,
        "lug": 7,
        "luglio": 7,
        "ago": 8,
        "agosto": 8,
        "set": 9,
        "settembre": 9,
        "ott": 10,
        "ottobre": 10,
        "nov": 11,
        "novembre": 11,
        "dic": 12,
        "dicembre": 12,
    },
    present_words=("presente", "oggi", "attuale"),
    section_aliases={
        EXPERIENCE: ("esperienza", "esperienze", "esperienza lavorativa"),
        EDUCATION: ("formazione", "istruzione"),
        STOP: (
            "competenze",
            "competenze principali",
            "lingue",
            "certificazioni",
            "riepilogo",
            "contatti",
            "pubblicazioni",
        ),
    },
)

DEFAULT_LOCALES = (ENGLISH, ITALIAN)


def normalize_heading(text: str) -> str:
    text = unidecode(unicodedata.normalize("NFKC", text))
    text = re.sub(r"[^\w\s&-]+", " ", text.lower())
    return " ".join(text.split())


class LocaleTable:
    def __init__(self, locales: Iterable[Locale] = DEFAULT_LOCALES) -> None:
        self.locales = tuple(locales)
        self.months: dict[str, int] = {}
        self.present_words: set[str] = set()
        self.spellings: dict[str, set[str]] = {"months": set(), "present": set()}
        self.headings: dict[str, str] = {}
        for locale in self.locales:
            for name, number in locale.months.items():
                self.months[normalize_heading(name)] = number
                self.spellings["months"].update((name.lower(), normalize_heading(name)))
            for word in locale.present_words:
                self.present_words.add(normalize_heading(word))
                self.spellings["present"].update((word.lower(), normalize_heading(word)))
            for kind, aliases in locale.section_aliases.items():
                for alias in aliases:
                    self.headings[normalize_heading(alias)] = kind

    def month_number(self, name: str) -> int:
        return self.months.get(normalize_heading(name).rstrip("."), 0)

    def is_present(self, text: str) -> bool:
        return normalize_heading(text) in self.present_words

    def section_for(self, text: str) -> str | None:
        return self.headings.get(normalize_heading(text))

    def month_pattern(self) -> str:
        names = sorted(self.spellings["months"], key=lambda name: (-len(name), name))
        return "|".join(re.escape(name) for name in names)

    def present_pattern(self) -> str:
        words = sorted(self.spellings["present"], key=lambda word: (-len(word), word))
        return "|".join(re.escape(word) for word in words)


def locale_from_dict(name: str, data: Mapping[str, Any]) -> Locale:
    months = {}
    for key, value in (data.get("months") or {}).items():
        number = int(value)
        if not 1 <= number <= 12:
            raise ValueError(f"locale {name!r}: month {key!r} maps to {number}")
        months[str(key).lower()] = number
    sections = {}
    for kind, aliases in (data.get("sections") or {}).items():
        if kind not in SECTION_KINDS:
            raise ValueError(f"locale {name!r}: unknown section kind {kind!r}")
        sections[kind] = tuple(str(alias) for alias in aliases)
    return Locale(
        name=name,
        months=months,
        present_words=tuple(str(word) for word in data.get("present") or ()),
        section_aliases=sections,
    )


def load_json(path: Path) -> Any:
    return json.loads(path.read_text(encoding="utf-8"))


def load_locales(path: Path | None) -> LocaleTable:
    if path is None:
        return LocaleTable()
    data = load_json(path)
    if not isinstance(data, dict):
        raise ValueError(f"{path}: expected an object keyed by locale name")
    extra = [locale_from_dict(name, value) for name, value in data.items()]
    logger.info("loaded %d extra locale(s) from %s", len(extra), path)
    return LocaleTable((*DEFAULT_LOCALES, *extra))
