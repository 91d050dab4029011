from __future__ import annotations

import json

import pytest

from timeline_me.locales import (
    EDUCATION,
    EXPERIENCE,
    STOP,
    LocaleTable,
    load_locales,
    locale_from_dict,
    normalize_heading,
)


def test_normalize_heading():
    assert normalize_heading("  Esperienza  Lavorativa ") == "esperienza lavorativa"
    assert normalize_heading("Expérience") == "experience"
    assert normalize_heading("Licenses & Certifications:") == "licenses & certifications"


def test_default_table():
    table = LocaleTable()
    assert table.section_for("EXPERIENCE") == EXPERIENCE
    assert table.section_for("Formazione") == EDUCATION
    assert table.section_for("Top Skills") == STOP
    assert table.section_for("Hobbies") is None
    assert table.month_number("Sept.") == 9
    assert table.month_number("Dicembre") == 12
    assert table.month_number("Smarch") == 0
    assert table.is_present("Presente")
    assert not table.is_present("2020")


def test_month_pattern_prefers_longer_names():
    names = LocaleTable().month_pattern().split("|")
    assert names.index("aprile") < names.index("apr")
    assert names.index("september") < names.index("sep")


def test_load_locales(tmp_path):
    path = tmp_path / "locales.json"
    path.write_text(
        json.dumps(
            {
                "de": {
                    "months": {"januar": 1, "märz": 3},
                    "present": ["heute"],
                    "sections": {"experience": ["Berufserfahrung"], "stop": ["Kenntnisse"]},
                }
            }
        ),
        encoding="utf-8",
    )
    table = load_locales(path)
    assert table.month_number("März") == 3
    assert table.month_number("Jan") == 1
    assert table.is_present("heute")
    assert table.section_for("Berufserfahrung") == EXPERIENCE
    assert table.section_for("Kenntnisse") == STOP


def test_load_locales_defaults():
    assert load_locales(None).month_number("maggio") == 5


@pytest.mark.parametrize(
    "data",
    [
        {"months": {"smarch": 13}},
        {"sections": {"hobbies": ["Hobbies"]}},
    ],
)
def test_locale_from_dict_rejects_bad_tables(data):
    with pytest.raises(ValueError):
        locale_from_dict("bad", data)


def test_load_locales_rejects_lists(tmp_path):
    path = tmp_path / "locales.json"
    path.write_text("[]", encoding="utf-8")
    with pytest.raises(ValueError):
        load_locales(path)
