"""Exceptions raised while loading and cleaning trip routes."""


class TripCleanError(Exception):
    """Base class for every error raised by tripclean."""


class SourceUnavailableError(TripCleanError):
    """The raw record source could not be opened or read."""

    def __init__(self, source, reason: str):
        self.source = source
        self.reason = reason
        super().__init__(f"Cannot read route source {source}: {reason}")


class MalformedRecordError(TripCleanError, ValueError):
    """A line did not parse into latitude, longitude and timestamp."""

    def __init__(self, line_number: int, line: str, reason: str):
        self.line_number = line_number
        self.line = line
        self.reason = reason
        super().__init__(f"Malformed record on line {line_number} ({reason}): {line!r}")
