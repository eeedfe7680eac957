"""
Rolling set resolver.
Selects the individual contracts of a product that belong to its month universe.
"""
from __future__ import annotations

from typing import List, Optional, Sequence, TypeVar, Union

from instrument_data.config import Config
from instrument_data.models.instrument import Instrument, InstrumentWithOverlay
from instrument_data.models.month_universe import MonthUniverse
from instrument_data.repositories.instrument_repository import InstrumentRepository
from instrument_data.utils.logger import get_logger

T = TypeVar("T", bound=Instrument)


def select_rolling(instruments: Sequence[T], universe: MonthUniverse) -> List[T]:
    """
    Keep the instruments that are part of the rolling set, preserving order.

    The month code is the authoritative signal: an instrument with no month is
    never a contract, even when its continuous flag was left unset.
    """
    return [
        instrument
        for instrument in instruments
        if instrument.month and not instrument.continuous and instrument.month in universe
    ]


class RollingSetResolver:
    """Resolves the rolling set of a data product for a month universe."""

    def __init__(self, config: Config, instrument_repo: Optional[InstrumentRepository] = None):
        self.config = config
        self.logger = get_logger(__name__)
        self.instrument_repo = instrument_repo or InstrumentRepository(config)

    def parse_universe(self, months: Union[str, MonthUniverse, None]) -> MonthUniverse:
        if isinstance(months, MonthUniverse):
            return months
        return MonthUniverse.parse(months, match=self.config.rolling.month_match)

    async def resolve(
        self,
        conn,
        product_id: int,
        months: Union[str, MonthUniverse, None],
        with_overlay: bool = False
    ) -> List[Union[Instrument, InstrumentWithOverlay]]:
        """
        Resolve the rolling set of a product.

        Args:
            conn: Connection (usually inside the caller's transaction)
            product_id: Data product ID
            months: Month universe, e.g. 'F23G23H23' or 'H,M,U,Z'
            with_overlay: Include data block / download / ingestion status

        Returns:
            Contracts ordered by expiration date, nearest first
        """
        universe = self.parse_universe(months)
        if not universe:
            self.logger.debug("Empty month universe for product %s", product_id)
            return []

        instruments = await self.instrument_repo.list_individual_by_product(
            conn,
            product_id,
            with_overlay=with_overlay
        )
        rolling = select_rolling(instruments, universe)

        self.logger.debug(
            "Product %s: %s of %s non-continuous instruments in month universe %r",
            product_id,
            len(rolling),
            len(instruments),
            universe.text,
        )
        return rolling

    async def resolve_with_overlay(self, conn, product_id: int, months) -> List[InstrumentWithOverlay]:
        return await self.resolve(conn, product_id, months, with_overlay=True)

    async def resolve_fast(self, conn, product_id: int, months) -> List[Instrument]:
        """Rolling set as bare instruments, skipping the status joins."""
        return await self.resolve(conn, product_id, months, with_overlay=False)
