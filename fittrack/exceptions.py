"""Error types raised by the FitTrack engine and data layer."""
from __future__ import annotations


class FitTrackError(Exception):
    """Base class for errors that abort a single aggregation or ingestion call."""


class InvalidTimestampError(FitTrackError, ValueError):
    """A timestamp was NaN, infinite, or could not be parsed."""

    def __init__(self, value: object, reason: str = "unparseable timestamp") -> None:
        self.value = value
        super().__init__(f"{reason}: {value!r}")


class RowValidationError(FitTrackError, ValueError):
    """A raw data-store row could not be normalized into the data model."""

    def __init__(self, kind: str, row_id: object, detail: str) -> None:
        self.kind = kind
        self.row_id = row_id
        super().__init__(f"invalid {kind} row {row_id!r}: {detail}")
