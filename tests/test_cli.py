from __future__ import annotations

import json

import pytest

from timeline_me import cli
from timeline_me.intervals import TimelineEvent


def write_events(path, events):
    path.write_text(json.dumps(events), encoding="utf-8")
    return path


def test_layout_demo_to_stdout(capsys):
    assert cli.main(["layout", "--demo", "-o", "-", "--now", "07/2024"]) == 0
    result = json.loads(capsys.readouterr().out)
    assert len(result["placements"]) == 6
    assert result["totalTracks"] >= 2
    assert result["placements"][3]["dateLabel"] == "03/2021 – Present"
    assert result["yearTicks"][0] == {"year": 2016, "column": 11}
    assert result["dropped"] == []


def test_layout_file(tmp_path):
    events = write_events(
        tmp_path / "events.json",
        [{"start": "01/2020", "end": "06/2020", "label": "Job", "category": "Work"}],
    )
    output = tmp_path / "layout.json"
    argv = ["layout", str(events), "-o", str(output), "--now", "07/2024", "--padding", "0"]
    assert cli.main(argv) == 0
    [placement] = json.loads(output.read_text(encoding="utf-8"))["placements"]
    assert placement["columnStart"] == 1
    assert placement["columnSpan"] == 5
    assert placement["trackIndex"] == 0
    assert placement["totalTracks"] == 1


def test_layout_accepts_wrapped_events(tmp_path):
    events = tmp_path / "events.json"
    events.write_text(
        json.dumps({"events": [{"start": "2020", "label": "Open", "category": "Work"}]}),
        encoding="utf-8",
    )
    output = tmp_path / "layout.json"
    assert cli.main(["layout", str(events), "-o", str(output), "--now", "07/2024"]) == 0
    [placement] = json.loads(output.read_text(encoding="utf-8"))["placements"]
    assert placement["dateLabel"] == "2020 – Present"


def test_layout_without_placeable_events(tmp_path, caplog):
    events = write_events(
        tmp_path / "events.json",
        [{"start": "13/2020", "end": None, "label": "Bad", "category": "Work"}],
    )
    output = tmp_path / "layout.json"
    assert cli.main(["layout", str(events), "-o", str(output), "--now", "07/2024"]) == 0
    result = json.loads(output.read_text(encoding="utf-8"))
    assert result["placements"] == []
    assert result["dropped"] == [0]
    assert "could be placed" in caplog.text


def test_layout_needs_input():
    assert cli.main(["layout"]) == 2


def test_layout_rejects_broken_json(tmp_path):
    events = tmp_path / "events.json"
    events.write_text("{not json", encoding="utf-8")
    assert cli.main(["layout", str(events), "-o", str(tmp_path / "out.json")]) == 1


def test_now_needs_a_month():
    with pytest.raises(SystemExit):
        cli.main(["layout", "--demo", "--now", "2024"])


def test_import_merges_csv(tmp_path, monkeypatch):
    found = [TimelineEvent("01/2020", None, "Senior Engineer at Acme Corp", "Work")]
    monkeypatch.setattr(cli, "import_pdf", lambda path, locales: list(found))
    positions = tmp_path / "Positions.csv"
    positions.write_text(
        "Company Name,Title,Started On,Finished On\n"
        "Acme Corp,Senior Engineer,Jan 2020,\n"
        "Beta Srl,Developer,Mar 2017,Dec 2019\n",
        encoding="utf-8",
    )
    output = tmp_path / "events.json"
    code = cli.main(
        ["import", "profile.pdf", "-o", str(output), "--positions-csv", str(positions)]
    )
    assert code == 0
    events = json.loads(output.read_text(encoding="utf-8"))
    assert [event["label"] for event in events] == [
        "Senior Engineer at Acme Corp",
        "Developer at Beta Srl",
    ]


def test_import_with_nothing_found(tmp_path, monkeypatch, caplog):
    monkeypatch.setattr(cli, "import_pdf", lambda path, locales: [])
    output = tmp_path / "events.json"
    assert cli.main(["import", "profile.pdf", "-o", str(output)]) == 0
    assert json.loads(output.read_text(encoding="utf-8")) == []
    assert "add the events manually" in caplog.text


def test_import_needs_a_source():
    assert cli.main(["import"]) == 2


def test_import_missing_csv(tmp_path):
    missing = tmp_path / "missing.csv"
    assert cli.main(["import", "--positions-csv", str(missing), "-o", "-"]) == 1


def test_import_rejects_a_file_that_is_not_a_pdf(tmp_path, caplog):
    fake = tmp_path / "profile.pdf"
    fake.write_text("not a pdf", encoding="utf-8")
    output = tmp_path / "events.json"
    assert cli.main(["import", str(fake), "-o", str(output)]) == 1
    assert not output.exists()
    assert "not a readable PDF" in caplog.text
