"""
Instrument models - data instruments of a rolling data product, plus the
read-only projections returned by the listing queries.
"""
from datetime import date
from typing import Optional
from pydantic import BaseModel, field_validator


class Instrument(BaseModel):
    """Data instrument (one contract, or the continuous/virtual series of a product)"""
    id: Optional[int] = None
    data_product_id: int
    data_block_id: Optional[int] = None
    symbol: str
    name: str = ""
    expiration_date: Optional[date] = None
    month: str = ""  # contract month code, e.g. 'F23'; empty for continuous/virtual
    continuous: bool = False
    virtual_instrument: bool = False

    class Config:
        from_attributes = True  # For Pydantic v2 ORM mode

    @field_validator("month", mode="before")
    @classmethod
    def _null_month(cls, value):
        return value or ""

    def to_dict(self):
        """Convert to dictionary for database insertion"""
        return {
            "data_product_id": self.data_product_id,
            "data_block_id": self.data_block_id,
            "symbol": self.symbol,
            "name": self.name,
            "expiration_date": self.expiration_date,
            "month": self.month,
            "continuous": self.continuous,
            "virtual_instrument": self.virtual_instrument
        }


class InstrumentWithOverlay(Instrument):
    """
    Instrument widened with the status of its data block, download job and
    ingestion job. Every overlay field is None when the record is missing.
    """
    # Data block
    db_status: Optional[str] = None
    db_data_from: Optional[date] = None
    db_data_to: Optional[date] = None
    db_progress: Optional[float] = None
    db_global: Optional[bool] = None

    # Download job
    dj_status: Optional[str] = None
    dj_priority: Optional[int] = None
    dj_load_from: Optional[date] = None
    dj_load_to: Optional[date] = None
    dj_curr_day: Optional[int] = None
    dj_tot_days: Optional[int] = None
    dj_error: Optional[str] = None

    # Ingestion job
    ij_status: Optional[str] = None
    ij_filename: Optional[str] = None
    ij_records: Optional[int] = None
    ij_bytes: Optional[int] = None
    ij_timezone: Optional[str] = None
    ij_parser: Optional[str] = None
    ij_error: Optional[str] = None

    @property
    def has_data_block(self) -> bool:
        return self.db_status is not None

    @property
    def has_download_job(self) -> bool:
        return self.dj_status is not None

    @property
    def has_ingestion_job(self) -> bool:
        return self.ij_status is not None


class InstrumentWithProductInfo(Instrument):
    """Instrument plus the identifying fields of its data product"""
    product_symbol: Optional[str] = None
    system_code: Optional[str] = None
    connection_code: Optional[str] = None
