"""
Shared pytest fixtures for instrument_data tests.
"""
from datetime import date
from typing import Any, Dict, List

import pytest

from instrument_data.config import Config, DatabaseConfig, RollingConfig
from instrument_data.repositories.instrument_repository import InstrumentRepository
from instrument_data.services.rolling_resolver import RollingSetResolver

from fakes import instrument_row


@pytest.fixture
def config() -> Config:
    return Config(
        database=DatabaseConfig(host="localhost", port=5432, database="instrument_data_test"),
    )


@pytest.fixture
def substring_config() -> Config:
    return Config(
        database=DatabaseConfig(host="localhost", port=5432, database="instrument_data_test"),
        rolling=RollingConfig(month_match="substring"),
    )


@pytest.fixture
def repo(config) -> InstrumentRepository:
    return InstrumentRepository(config)


@pytest.fixture
def resolver(config, repo) -> RollingSetResolver:
    return RollingSetResolver(config, repo)


@pytest.fixture
def product_10_rows() -> List[Dict[str, Any]]:
    """Product 10: two contracts and the continuous series."""
    return [
        instrument_row(id=1, symbol="ESF23", month="F23", expiration_date=date(2023, 1, 20)),
        instrument_row(id=2, symbol="ESG23", month="G23", expiration_date=date(2023, 2, 17)),
        instrument_row(id=3, symbol="ES", month="", continuous=True, expiration_date=None),
    ]
