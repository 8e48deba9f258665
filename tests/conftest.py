"""
Pytest configuration and fixtures for hvac_engine testing.

This file sets up common fixtures, test configuration, and hooks for pytest.
"""

import logging
import tempfile
from pathlib import Path

import pytest

from hvac_engine.core.stream import HumidAirFlow, HumidAirState
from hvac_engine.processes.coolant import CoolantData


def pytest_configure(config):
    """Configure pytest settings."""
    config.addinivalue_line(
        "markers", "slow: marks tests as slow (deselect with '-m \"not slow\"')"
    )


@pytest.fixture
def temp_dir():
    """Provide a temporary directory for tests."""
    temp_path = Path(tempfile.mkdtemp())
    yield temp_path


@pytest.fixture(autouse=True)
def quiet_engine_logs(caplog):
    """Keep engine debug output out of test reports unless a test asks for it."""
    caplog.set_level(logging.INFO, logger="hvac_engine")
    yield


@pytest.fixture
def summer_inlet():
    """Hot humid air at 100 kPa: 34 degC, 40 % RH, 1 kg/s dry air."""
    state = HumidAirState.from_relative_humidity(34.0, 40.0, 100_000.0)
    return HumidAirFlow.from_dry_air_mass_flow(state, 1.0)


@pytest.fixture
def winter_inlet():
    """Cold air at 100 kPa: 10 degC, 60 % RH, 10 000 kg/h moist air."""
    state = HumidAirState.from_relative_humidity(10.0, 60.0, 100_000.0)
    return HumidAirFlow(state, 10_000.0 / 3600.0)


@pytest.fixture
def chilled_water():
    """Coolant 9/14 degC; mean coil wall temperature 11.5 degC."""
    return CoolantData(9.0, 14.0)


@pytest.fixture
def outdoor_flow():
    """Outdoor air of the summer air handling unit example."""
    return HumidAirFlow.of_values(35.0, 55.0, 1000.0)


@pytest.fixture
def exhaust_flow():
    """Room exhaust air returned to the mixing box."""
    return HumidAirFlow.of_values(25.0, 70.0, 1000.0)
