"""
Instrument repository - database operations for the data_instrument table.
"""
from typing import Any, List, Mapping, Optional, Union

from instrument_data.errors import InstrumentNotFoundError
from instrument_data.models.instrument import (
    Instrument,
    InstrumentWithOverlay,
    InstrumentWithProductInfo,
)
from instrument_data.repositories.base_repository import BaseRepository
from instrument_data.repositories.criteria import InstrumentCriteria

INSTRUMENT_COLUMNS = """
    di.id, di.data_product_id, di.data_block_id, di.symbol, di.name,
    di.expiration_date, di.month, di.continuous, di.virtual_instrument
"""

OVERLAY_COLUMNS = """
    db.status AS db_status, db.data_from AS db_data_from, db.data_to AS db_data_to,
    db.progress AS db_progress, db."global" AS db_global,
    dj.status AS dj_status, dj.priority AS dj_priority, dj.load_from AS dj_load_from,
    dj.load_to AS dj_load_to, dj.curr_day AS dj_curr_day, dj.tot_days AS dj_tot_days,
    dj.error AS dj_error,
    ij.status AS ij_status, ij.filename AS ij_filename, ij.records AS ij_records,
    ij.bytes AS ij_bytes, ij.timezone AS ij_timezone, ij.parser AS ij_parser,
    ij.error AS ij_error
"""

# Each subordinate record is optional, hence LEFT JOINs
OVERLAY_JOINS = """
    LEFT JOIN data_block db ON db.id = di.data_block_id
    LEFT JOIN download_job dj ON dj.data_instrument_id = di.id
    LEFT JOIN ingestion_job ij ON ij.data_instrument_id = di.id
"""

PRODUCT_COLUMNS = """
    dp.symbol AS product_symbol, dp.system_code, dp.connection_code
"""


class InstrumentRepository(BaseRepository):
    """Repository for data instrument database operations"""

    async def get_by_id(self, conn, instrument_id: int) -> Optional[Instrument]:
        """
        Get an instrument by id.

        Returns:
            Instrument or None if not found
        """
        query = f"""
            SELECT {INSTRUMENT_COLUMNS}
            FROM data_instrument di
            WHERE di.id = $1
        """
        row = await self.fetch_unique(conn, f"id={instrument_id}", query, instrument_id)

        if row:
            return Instrument(**dict(row))
        return None

    async def get_by_symbol(self, conn, product_id: int, symbol: str) -> Optional[Instrument]:
        """
        Get an instrument by its symbol within a product.

        Args:
            conn: Connection
            product_id: Data product ID
            symbol: Exchange symbol

        Returns:
            Instrument or None if not found
        """
        query = f"""
            SELECT {INSTRUMENT_COLUMNS}
            FROM data_instrument di
            WHERE di.data_product_id = $1 AND di.symbol = $2
        """
        row = await self.fetch_unique(
            conn,
            f"product={product_id} symbol={symbol}",
            query,
            product_id,
            symbol
        )

        if row:
            return Instrument(**dict(row))
        return None

    async def get_virtual_by_product_id(self, conn, product_id: int) -> Optional[Instrument]:
        """Get the virtual (placeholder) instrument of a product, or None."""
        query = f"""
            SELECT {INSTRUMENT_COLUMNS}
            FROM data_instrument di
            WHERE di.data_product_id = $1 AND di.virtual_instrument = TRUE
        """
        row = await self.fetch_unique(conn, f"virtual instrument of product={product_id}", query, product_id)

        if row:
            return Instrument(**dict(row))
        return None

    async def list_by_product_full(
        self,
        conn,
        product_id: int,
        stored_only: bool = False
    ) -> List[InstrumentWithOverlay]:
        """
        List all instruments of a product with their status overlay.

        Args:
            conn: Connection
            product_id: Data product ID
            stored_only: Keep only instruments with a data block, plus the virtual instrument

        Returns:
            Instruments ordered by expiration date
        """
        conditions = ["di.data_product_id = $1"]
        if stored_only:
            conditions.append("(db.status IS NOT NULL OR di.virtual_instrument = TRUE)")

        query = f"""
            SELECT {INSTRUMENT_COLUMNS}, {OVERLAY_COLUMNS}
            FROM data_instrument di
            {OVERLAY_JOINS}
            WHERE {' AND '.join(conditions)}
            ORDER BY di.expiration_date, di.id
        """
        rows = await self.fetch(conn, query, product_id)
        return [InstrumentWithOverlay(**dict(row)) for row in rows]

    async def list_individual_by_product(
        self,
        conn,
        product_id: int,
        with_overlay: bool = False
    ) -> List[Union[Instrument, InstrumentWithOverlay]]:
        """
        List the non-continuous instruments of a product.

        Without the overlay no join is made at all.

        Returns:
            Instruments ordered by expiration date (nearest first)
        """
        if with_overlay:
            query = f"""
                SELECT {INSTRUMENT_COLUMNS}, {OVERLAY_COLUMNS}
                FROM data_instrument di
                {OVERLAY_JOINS}
                WHERE di.data_product_id = $1 AND di.continuous = FALSE
                ORDER BY di.expiration_date, di.id
            """
            model = InstrumentWithOverlay
        else:
            query = f"""
                SELECT {INSTRUMENT_COLUMNS}
                FROM data_instrument di
                WHERE di.data_product_id = $1 AND di.continuous = FALSE
                ORDER BY di.expiration_date, di.id
            """
            model = Instrument

        rows = await self.fetch(conn, query, product_id)
        return [model(**dict(row)) for row in rows]

    async def list_by_filter(
        self,
        conn,
        criteria: Union[InstrumentCriteria, Mapping[str, Any]]
    ) -> List[InstrumentWithProductInfo]:
        """
        List instruments matching the criteria, with product info.

        Args:
            conn: Connection
            criteria: Equality constraints; 'username' applies to the owning product

        Returns:
            Instruments ordered by name
        """
        if not isinstance(criteria, InstrumentCriteria):
            criteria = InstrumentCriteria.from_mapping(criteria)

        where, params = criteria.to_where()
        query = f"""
            SELECT {INSTRUMENT_COLUMNS}, {PRODUCT_COLUMNS}
            FROM data_instrument di
            JOIN data_product dp ON dp.id = di.data_product_id
            WHERE {where}
            ORDER BY di.name, di.id
        """
        rows = await self.fetch(conn, query, *params)
        return [InstrumentWithProductInfo(**dict(row)) for row in rows]

    async def create(self, conn, instrument: Instrument) -> Instrument:
        """
        Insert a new instrument.

        Args:
            conn: Connection
            instrument: Instrument to create (id is ignored)

        Returns:
            Instrument with id populated
        """
        query = f"""
            INSERT INTO data_instrument AS di (
                data_product_id, data_block_id, symbol, name,
                expiration_date, month, continuous, virtual_instrument
            )
            VALUES ($1, $2, $3, $4, $5, $6, $7, $8)
            RETURNING {INSTRUMENT_COLUMNS}
        """
        values = instrument.to_dict()
        row = await self.fetchrow(conn, query, *values.values())

        created = Instrument(**dict(row))
        self.logger.info(
            "Created instrument %s (%s) for product %s",
            created.id,
            created.symbol,
            created.data_product_id
        )
        return created

    async def update(self, conn, instrument: Instrument) -> Instrument:
        """
        Replace every column of an existing instrument (last write wins).

        Raises:
            InstrumentNotFoundError: no instrument has this id
        """
        if instrument.id is None:
            raise ValueError("Cannot update an instrument without an id")

        query = f"""
            UPDATE data_instrument AS di
            SET
                data_product_id = $2,
                data_block_id = $3,
                symbol = $4,
                name = $5,
                expiration_date = $6,
                month = $7,
                continuous = $8,
                virtual_instrument = $9
            WHERE di.id = $1
            RETURNING {INSTRUMENT_COLUMNS}
        """
        values = instrument.to_dict()
        row = await self.fetchrow(conn, query, instrument.id, *values.values())

        if row is None:
            raise InstrumentNotFoundError(instrument.id)
        return Instrument(**dict(row))
