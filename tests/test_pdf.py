from __future__ import annotations

import contextlib

import pytest

from timeline_me import pdf
from timeline_me.pdf import Line, detect_column_split, reading_order, split_line_words


def word(text, x0, top=100.0):
    return {"text": text, "x0": x0, "x1": x0 + 8 * len(text), "top": top}


def test_split_line_words_on_wide_gaps():
    words = [word("Senior", 10), word("Engineer", 70), word("Skills", 400)]
    lines = split_line_words(words, 0, gap_threshold=30)
    assert [line.text for line in lines] == ["Senior Engineer", "Skills"]
    assert lines[1].x0 == 400


def test_single_column_reads_top_to_bottom():
    lines = [
        Line("second", top=20, x0=50, x1=90, page=0),
        Line("third", top=5, x0=50, x1=90, page=1),
        Line("first", top=10, x0=50, x1=90, page=0),
    ]
    assert detect_column_split(lines) is None
    assert reading_order(lines) == ["first", "second", "third"]


def test_sidebar_is_read_before_main_column():
    sidebar = [Line(f"side {i}", top=10.0 * i, x0=20, x1=120, page=0) for i in range(20)]
    main = [Line(f"main {i}", top=10.0 * i + 5, x0=220, x1=500, page=0) for i in range(25)]
    lines = main + sidebar

    split = detect_column_split(lines)
    assert split is not None and 20 < split < 220

    ordered = reading_order(lines)
    assert ordered[:20] == [line.text for line in sidebar]
    assert ordered[20:] == [line.text for line in main]


class FakePage:
    width = 600

    def __init__(self, words):
        self.words = words

    def extract_words(self, **kwargs):
        return self.words


class FakePDF:
    def __init__(self, pages):
        self.pages = pages


def test_import_pdf(monkeypatch):
    pages = [
        FakePage(
            [
                word("Experience", 20, top=10),
                word("Senior", 20, top=30),
                word("Engineer", 80, top=30.5),
                word("Acme", 20, top=50),
                word("Corp", 65, top=50),
                word("Jan", 20, top=70),
                word("2020", 50, top=70),
                word("-", 90, top=70),
                word("Present", 100, top=70),
            ]
        ),
        FakePage(
            [
                word("Page", 20, top=800),
                word("1", 60, top=800),
                word("of", 72, top=800),
                word("1", 92, top=800),
            ]
        ),
    ]

    @contextlib.contextmanager
    def fake_open(path):
        yield FakePDF(pages)

    monkeypatch.setattr(pdf.pdfplumber, "open", fake_open)
    [event] = pdf.import_pdf("profile.pdf")
    assert event.label == "Senior Engineer at Acme Corp"
    assert event.start == "01/2020"
    assert event.end is None
    assert event.description == ""


def test_extract_lines_reports_unreadable_files(tmp_path):
    fake = tmp_path / "profile.pdf"
    fake.write_text("not a pdf", encoding="utf-8")
    with pytest.raises(ValueError, match="not a readable PDF"):
        pdf.extract_lines(fake)
