from __future__ import annotations

import pytest

from timeline_me.intervals import TimelineEvent
from timeline_me.linkedin_csv import (
    load_positions_csv,
    parse_education_csv,
    parse_linkedin_date,
    parse_positions_csv,
)

POSITIONS = "\ufeff" + """Company Name,Title,Description,Location,Started On,Finished On
Acme Corp,Senior Engineer,"Built things.",Milan,Jan 2020,
Beta Srl,Developer,,Rome,Mar 2017,Dec 2019
No Date Inc,Ghost,,,,
"""

EDUCATION = """School Name,Start Date,End Date,Notes,Degree Name,Activities
Politecnico di Milano,2010,2015,Thesis on graphs,Laurea,
Online Course,,,,,
"""


@pytest.mark.parametrize(
    "value, expected",
    [
        ("Jan 2020", "01/2020"),
        ("settembre 2018", "09/2018"),
        ("2015", "2015"),
        ("2021-03-01", "03/2021"),
        ("Present", None),
        ("", None),
        (None, None),
        ("sometime", "sometime"),
    ],
)
def test_parse_linkedin_date(value, expected):
    assert parse_linkedin_date(value) == expected


def test_positions():
    assert parse_positions_csv(POSITIONS) == [
        TimelineEvent("01/2020", None, "Senior Engineer at Acme Corp", "Work", "Built things."),
        TimelineEvent("03/2017", "12/2019", "Developer at Beta Srl", "Work"),
    ]


def test_education():
    assert parse_education_csv(EDUCATION) == [
        TimelineEvent(
            "2010", "2015", "Laurea at Politecnico di Milano", "Education", "Thesis on graphs"
        ),
    ]


def test_missing_columns_leave_fields_empty():
    [event] = parse_positions_csv("Company Name,Started On\nAcme,2019\n")
    assert event == TimelineEvent("2019", None, "Acme", "Work")


def test_load_positions_csv(tmp_path):
    path = tmp_path / "Positions.csv"
    path.write_text(POSITIONS, encoding="utf-8")
    assert len(load_positions_csv(path)) == 2
