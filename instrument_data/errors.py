"""
Exceptions raised by the instrument repository and the rolling set resolver.

Lookups that find nothing return None; everything below is a real failure.
"""
from typing import Optional


class InstrumentDataError(Exception):
    """Base class for all instrument data errors"""


class ServerError(InstrumentDataError):
    """The backing store failed (connectivity, malformed query, constraint violation)."""

    def __init__(self, message: str, cause: Optional[BaseException] = None):
        super().__init__(message)
        self.cause = cause

    @classmethod
    def from_error(cls, error: BaseException) -> "ServerError":
        return cls(f"{type(error).__name__}: {error}", cause=error)


class MultipleRowsError(InstrumentDataError):
    """A lookup expected to be unique matched more than one row."""

    def __init__(self, lookup: str, count: int):
        super().__init__(f"Expected at most one instrument for {lookup}, found {count}")
        self.lookup = lookup
        self.count = count


class InstrumentNotFoundError(InstrumentDataError):
    """An update targeted an instrument id that does not exist."""

    def __init__(self, instrument_id: int):
        super().__init__(f"Instrument {instrument_id} not found")
        self.instrument_id = instrument_id


class CriteriaError(InstrumentDataError, ValueError):
    """A filter criterion names a field that is not filterable."""


class MonthUniverseError(InstrumentDataError, ValueError):
    """Unsupported month universe match mode."""
