"""
Typed equality criteria for filtered instrument listings.
"""
from __future__ import annotations

from typing import Any, Dict, Iterable, List, Mapping, Optional, Tuple

from instrument_data.errors import CriteriaError

# Filterable fields and the qualified column each one constrains.
# Ownership lives on the product, so 'username' never touches data_instrument.
INSTRUMENT_FIELDS: Dict[str, str] = {
    "id": "di.id",
    "data_product_id": "di.data_product_id",
    "data_block_id": "di.data_block_id",
    "symbol": "di.symbol",
    "name": "di.name",
    "month": "di.month",
    "continuous": "di.continuous",
    "virtual_instrument": "di.virtual_instrument",
    "expiration_date": "di.expiration_date",
}

PRODUCT_FIELDS: Dict[str, str] = {
    "username": "dp.username",
    "system_code": "dp.system_code",
    "connection_code": "dp.connection_code",
    "product_symbol": "dp.symbol",
}

FILTERABLE_FIELDS: Dict[str, str] = {**INSTRUMENT_FIELDS, **PRODUCT_FIELDS}


class InstrumentCriteria:
    """Immutable set of field == value constraints, restricted to FILTERABLE_FIELDS."""

    def __init__(self, constraints: Iterable[Tuple[str, Any]] = ()):
        checked = []
        for name, value in constraints:
            if name not in FILTERABLE_FIELDS:
                raise CriteriaError(f"Field '{name}' cannot be used to filter instruments")
            checked.append((name, value))
        self._constraints: Tuple[Tuple[str, Any], ...] = tuple(checked)

    @classmethod
    def from_mapping(cls, mapping: Optional[Mapping[str, Any]]) -> InstrumentCriteria:
        """Build criteria from an open field -> value map."""
        return cls((mapping or {}).items())

    def where(self, name: str, value: Any) -> InstrumentCriteria:
        """Return a copy with one more constraint; a repeated field replaces the old value."""
        kept = [(n, v) for n, v in self._constraints if n != name]
        return InstrumentCriteria(kept + [(name, value)])

    def for_product(self, product_id: int) -> InstrumentCriteria:
        return self.where("data_product_id", product_id)

    def owned_by(self, username: str) -> InstrumentCriteria:
        return self.where("username", username)

    @property
    def fields(self) -> List[str]:
        return [name for name, _ in self._constraints]

    def columns(self) -> List[Tuple[str, Any]]:
        """Constraints with field names translated to qualified columns."""
        return [(FILTERABLE_FIELDS[name], value) for name, value in self._constraints]

    def to_where(self, start: int = 1) -> Tuple[str, List[Any]]:
        """
        Render a parameterized WHERE clause.

        Args:
            start: Number of the first positional parameter ($n)

        Returns:
            (clause, params); an empty criteria set renders 'TRUE'
        """
        conditions = []
        params: List[Any] = []
        for column, value in self.columns():
            if value is None:
                conditions.append(f"{column} IS NULL")
                continue
            params.append(value)
            conditions.append(f"{column} = ${start + len(params) - 1}")

        if not conditions:
            return "TRUE", params
        return " AND ".join(conditions), params

    def __len__(self) -> int:
        return len(self._constraints)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, InstrumentCriteria):
            return NotImplemented
        return self._constraints == other._constraints

    def __repr__(self) -> str:
        return f"InstrumentCriteria({dict(self._constraints)!r})"
