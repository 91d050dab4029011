from __future__ import annotations


class TimelineError(Exception):
    pass


class InvalidDateFormat(TimelineError, ValueError):
    def __init__(self, text: str, reason: str = "") -> None:
        self.text = text
        self.reason = reason
        message = f"invalid date {text!r}"
        if reason:
            message = f"{message}: {reason}"
        super().__init__(message)


class NoPlaceableEvents(TimelineError):
    def __init__(self, total: int = 0) -> None:
        self.total = total
        super().__init__(
            f"none of the {total} events could be placed on the timeline"
            if total
            else "there are no events to place on the timeline"
        )


class ImportExtractionEmpty(TimelineError):
    def __init__(self, source: str = "") -> None:
        self.source = source
        where = f" in {source}" if source else ""
        super().__init__(
            f"no experience or education dates were found{where}; "
            "add the events manually"
        )
