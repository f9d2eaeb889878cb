import logging

import pytest

import py_unitconv
from py_unitconv.config import UnitConfig, default_config
from py_unitconv.converter import Converter
from py_unitconv.logger import logger
from py_unitconv.settings import reset_settings

logger.setLevel(logging.DEBUG)


@pytest.fixture(scope="session")
def packaged_config() -> UnitConfig:
    return default_config()


@pytest.fixture(scope="session")
def converter(packaged_config) -> Converter:
    return Converter.from_config(packaged_config)


@pytest.fixture
def toy_config() -> UnitConfig:
    """Two small kinds: a length chain and a mass star with a formula edge."""
    return UnitConfig(
        units={
            'length': {'km': ['kilometer'], 'm': ['meter', 'meters'], 'cm': [], 'mm': []},
            'mass': {'kg': 'kilogram', 'g': ['gram', 'grams'], 'mg': [], 'x': []},
        },
        conversions={
            'length': {'km_to_m': 1000, 'm_to_cm': 100, 'cm_to_mm': 10},
            'mass': {'kg_to_g': 1000, 'g_to_mg': 1000, 'g_to_x': {'scale': 2, 'offset': 1}},
        },
    )


@pytest.fixture
def default_api():
    """Module-level functions backed by the packaged configuration, restored afterwards."""
    py_unitconv.basicConfig()
    yield py_unitconv
    py_unitconv.basicConfig()
    reset_settings()
