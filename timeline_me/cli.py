from __future__ import annotations

import argparse
import json
import logging
import sys
from pathlib import Path
from typing import Any, Iterable

from .dates import DateToken, current_month, parse_date
from .demo import DEMO_EVENTS
from .errors import ImportExtractionEmpty, InvalidDateFormat, NoPlaceableEvents
from .grid import DEFAULT_PADDING, GridPlacement, TimelineLayout, layout, year_ticks
from .intervals import OpenEnd, TimelineEvent, events_from_dicts
from .linkedin_csv import load_education_csv, load_positions_csv
from .locales import LocaleTable, load_json, load_locales
from .pdf import import_pdf

logger = logging.getLogger(__name__)

STDOUT = Path("-")


def parse_now(value: str) -> DateToken:
    try:
        token = parse_date(value)
    except InvalidDateFormat as exc:
        raise argparse.ArgumentTypeError(str(exc)) from exc
    if not token.has_explicit_month:
        raise argparse.ArgumentTypeError(f"--now needs a month, e.g. 07/{token.year}")
    return token


def build_arg_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="timeline-me",
        description="Lay out date-ranged events on a month grid and import them from LinkedIn.",
    )
    parser.add_argument(
        "-v", "--verbose", action="store_true", help="Log debugging details to stderr."
    )
    commands = parser.add_subparsers(dest="command", required=True)

    importer = commands.add_parser(
        "import", help="Extract timeline events from a LinkedIn profile PDF."
    )
    importer.add_argument("pdf", type=Path, nargs="?", help="Path to LinkedIn PDF")
    importer.add_argument(
        "-o",
        "--output",
        type=Path,
        default=Path("events.json"),
        help="Output JSON file path ('-' for stdout)",
    )
    importer.add_argument(
        "--positions-csv",
        type=Path,
        default=None,
        help="Optional LinkedIn Positions.csv to merge into the events.",
    )
    importer.add_argument(
        "--education-csv",
        type=Path,
        default=None,
        help="Optional LinkedIn Education.csv to merge into the events.",
    )
    importer.add_argument(
        "--locales",
        type=Path,
        default=None,
        help="Optional JSON file with extra month names and section headers.",
    )

    layouter = commands.add_parser("layout", help="Compute grid placements for events.")
    layouter.add_argument("events", type=Path, nargs="?", help="Path to events JSON")
    layouter.add_argument(
        "--demo", action="store_true", help="Lay out the bundled demo timeline instead."
    )
    layouter.add_argument(
        "-o",
        "--output",
        type=Path,
        default=Path("layout.json"),
        help="Output JSON file path ('-' for stdout)",
    )
    layouter.add_argument(
        "--now",
        type=parse_now,
        default=None,
        help="Month used for ongoing events, MM/YYYY (defaults to the current month).",
    )
    layouter.add_argument(
        "--padding",
        type=int,
        default=DEFAULT_PADDING,
        help="Months of empty space before the first and after the last event.",
    )
    layouter.add_argument(
        "--open-end",
        choices=[policy.value for policy in OpenEnd],
        default=OpenEnd.NOW.value,
        help="Ongoing events run until --now, or are drawn as a single point.",
    )
    return parser


def write_json(path: Path, payload: Any) -> None:
    text = json.dumps(payload, indent=2, ensure_ascii=False)
    if path == STDOUT:
        sys.stdout.write(text + "\n")
        return
    path.write_text(text, encoding="utf-8")
    logger.info("wrote %s", path)


def merge_events(events: list[TimelineEvent], extra: Iterable[TimelineEvent]) -> bool:
    existing = {(event.label.lower(), event.start) for event in events}
    updated = False
    for event in extra:
        key = (event.label.lower(), event.start)
        if key in existing:
            continue
        events.append(event)
        existing.add(key)
        updated = True
    return updated


def run_import(args: argparse.Namespace) -> int:
    locales: LocaleTable = load_locales(args.locales)
    events: list[TimelineEvent] = []
    sources = []
    if args.pdf:
        events.extend(import_pdf(args.pdf, locales))
        sources.append(str(args.pdf))
    if args.positions_csv:
        if merge_events(events, load_positions_csv(args.positions_csv, locales)):
            logger.info("merged positions from %s", args.positions_csv)
        sources.append(str(args.positions_csv))
    if args.education_csv:
        if merge_events(events, load_education_csv(args.education_csv, locales)):
            logger.info("merged education from %s", args.education_csv)
        sources.append(str(args.education_csv))
    if not sources:
        logger.error("nothing to import: pass a PDF or a LinkedIn CSV export")
        return 2
    write_json(args.output, [event.to_dict() for event in events])
    if not events:
        raise ImportExtractionEmpty(", ".join(sources))
    return 0


def placement_to_json(placement: GridPlacement) -> dict[str, Any]:
    return {
        "label": placement.label,
        "category": placement.category,
        "description": placement.description,
        "dateLabel": placement.date_label,
        "columnStart": placement.column_start,
        "columnSpan": placement.column_span,
        "trackIndex": placement.track_index,
        "totalTracks": placement.total_tracks,
        "sourceIndex": placement.source_index,
    }


def layout_to_json(result: TimelineLayout) -> dict[str, Any]:
    return {
        "minMonth": result.min_month,
        "maxMonth": result.max_month,
        "totalMonths": result.total_months,
        "totalTracks": result.total_tracks,
        "placements": [placement_to_json(placement) for placement in result.placements],
        "yearTicks": [{"year": tick.year, "column": tick.column} for tick in year_ticks(result)],
        "dropped": list(result.dropped),
    }


def load_events(path: Path) -> list[TimelineEvent]:
    data = load_json(path)
    if isinstance(data, dict):
        data = data.get("events", [])
    if not isinstance(data, list):
        raise ValueError(f"{path}: expected a list of events")
    return events_from_dicts(data)


def run_layout(args: argparse.Namespace) -> int:
    if args.demo:
        events = list(DEMO_EVENTS)
    elif args.events:
        events = load_events(args.events)
    else:
        logger.error("pass an events JSON file or --demo")
        return 2
    now = args.now or current_month()
    result = layout(events, now, padding=args.padding, open_end=OpenEnd(args.open_end))
    write_json(args.output, layout_to_json(result))
    if result.is_empty:
        raise NoPlaceableEvents(len(events))
    return 0


def main(argv: list[str] | None = None) -> int:
    parser = build_arg_parser()
    args = parser.parse_args(argv)
    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.INFO,
        format="%(levelname)s %(name)s: %(message)s",
    )
    handlers = {"import": run_import, "layout": run_layout}
    try:
        return handlers[args.command](args)
    except (ImportExtractionEmpty, NoPlaceableEvents) as exc:
        logger.warning("%s", exc)
        return 0
    except (OSError, ValueError) as exc:
        logger.error("%s", exc)
        return 1


if __name__ == "__main__":
    raise SystemExit(main())
