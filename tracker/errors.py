"""Error types for the plant tracker core."""

from __future__ import annotations


class TrackerError(ValueError):
    """Base class for recoverable tracker errors."""


class EmptyNameError(TrackerError):
    """A plant name was blank after trimming."""


class DuplicateError(TrackerError):
    """A plant with the same (case-insensitive, trimmed) name already exists."""

    def __init__(self, name: str, existing: str | None = None) -> None:
        self.name = name
        self.existing = existing or name
        super().__init__(f"Plant already exists: {self.existing!r}")


class ParseSkip(TrackerError):
    """An import row could not be parsed and was skipped."""

    def __init__(self, line_no: int, line: str, reason: str) -> None:
        self.line_no = line_no
        self.line = line
        self.reason = reason
        super().__init__(f"line {line_no}: {reason}: {line!r}")


class CorruptPersistedData(TrackerError):
    """Persisted state could not be decoded."""

    def __init__(self, key: str, reason: str) -> None:
        self.key = key
        self.reason = reason
        super().__init__(f"Corrupt persisted data under {key!r}: {reason}")
