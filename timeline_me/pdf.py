from __future__ import annotations

import dataclasses
import logging
from pathlib import Path

import pdfplumber
from pdfplumber.utils.exceptions import PdfminerException

from .importer import import_from_lines
from .intervals import TimelineEvent
from .locales import LocaleTable

logger = logging.getLogger(__name__)

LINE_TOLERANCE = 2.5
MIN_COLUMN_GAP = 80.0
MIN_LINES_FOR_COLUMNS = 40


@dataclasses.dataclass(frozen=True)
class Line:
    text: str
    top: float
    x0: float
    x1: float
    page: int


def extract_lines(path: str | Path) -> list[Line]:
    lines: list[Line] = []
    try:
        with pdfplumber.open(path) as pdf:
            for page_index, page in enumerate(pdf.pages):
                lines.extend(page_lines(page, page_index))
    except PdfminerException as exc:
        raise ValueError(f"{path}: not a readable PDF ({exc})") from exc
    logger.debug("extracted %d lines from %s", len(lines), path)
    return lines


def page_lines(page, page_index: int) -> list[Line]:
    words = page.extract_words(use_text_flow=True, keep_blank_chars=False)
    if not words:
        return []
    words = sorted(words, key=lambda w: (w["top"], w["x0"]))
    gap_threshold = max(30.0, page.width * 0.08)
    lines: list[Line] = []
    current_words: list[dict] = []
    current_top: float | None = None
    for word in words:
        if current_top is not None and abs(word["top"] - current_top) > LINE_TOLERANCE:
            lines.extend(split_line_words(current_words, page_index, gap_threshold))
            current_words = []
        if not current_words:
            current_top = word["top"]
        current_words.append(word)
    if current_words:
        lines.extend(split_line_words(current_words, page_index, gap_threshold))
    return lines


def split_line_words(words: list[dict], page_index: int, gap_threshold: float) -> list[Line]:
    words = sorted(words, key=lambda w: w["x0"])
    segments: list[list[dict]] = []
    current: list[dict] = []
    last_x1: float | None = None
    for word in words:
        if last_x1 is not None and word["x0"] - last_x1 > gap_threshold:
            segments.append(current)
            current = []
        current.append(word)
        last_x1 = word["x1"]
    if current:
        segments.append(current)
    return [words_to_line(segment, page_index) for segment in segments]


def words_to_line(words: list[dict], page_index: int) -> Line:
    return Line(
        text=" ".join(word["text"] for word in words).strip(),
        top=min(word["top"] for word in words),
        x0=min(word["x0"] for word in words),
        x1=max(word["x1"] for word in words),
        page=page_index,
    )


def detect_column_split(lines: list[Line]) -> float | None:
    if len(lines) < MIN_LINES_FOR_COLUMNS:
        return None
    x0s = sorted(line.x0 for line in lines)
    gaps = [(x0s[i + 1] - x0s[i], i) for i in range(len(x0s) - 1)]
    gap, idx = max(gaps, default=(0.0, 0))
    if gap < MIN_COLUMN_GAP:
        return None
    return (x0s[idx] + x0s[idx + 1]) / 2


def reading_order(lines: list[Line]) -> list[str]:
    split = detect_column_split(lines)
    if split is None:
        ordered = sorted(lines, key=lambda line: (line.page, line.top, line.x0))
    else:
        logger.debug("two-column layout detected, split at x=%.1f", split)
        ordered = sorted(
            lines, key=lambda line: (line.x0 > split, line.page, line.top, line.x0)
        )
    return [line.text for line in ordered if line.text]


def extract_text_lines(path: str | Path) -> list[str]:
    return reading_order(extract_lines(path))


def import_pdf(path: str | Path, locales: LocaleTable | None = None) -> list[TimelineEvent]:
    return import_from_lines(extract_text_lines(path), locales)
