"""
Instrument metadata for rolling data products, with data block, download job
and ingestion job status overlays.
"""
from instrument_data.errors import (
    CriteriaError,
    InstrumentDataError,
    InstrumentNotFoundError,
    MonthUniverseError,
    MultipleRowsError,
    ServerError,
)
from instrument_data.models.instrument import (
    Instrument,
    InstrumentWithOverlay,
    InstrumentWithProductInfo,
)
from instrument_data.models.month_universe import MonthUniverse
from instrument_data.repositories.criteria import InstrumentCriteria
from instrument_data.repositories.instrument_repository import InstrumentRepository
from instrument_data.services.rolling_resolver import RollingSetResolver, select_rolling

__version__ = "1.0.0"

__all__ = [
    "CriteriaError",
    "Instrument",
    "InstrumentCriteria",
    "InstrumentDataError",
    "InstrumentNotFoundError",
    "InstrumentRepository",
    "InstrumentWithOverlay",
    "InstrumentWithProductInfo",
    "MonthUniverse",
    "MonthUniverseError",
    "MultipleRowsError",
    "RollingSetResolver",
    "ServerError",
    "select_rolling",
]
