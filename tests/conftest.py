"""Pytest configuration and fixtures for crisislab tests."""

import os

import pytest

from crisislab import logging
from crisislab.simulation import Simulation
from crisislab.state import SimulationState, create_initial_state


@pytest.fixture
def initial_state() -> SimulationState:
    return create_initial_state()


@pytest.fixture
def tiny_sim() -> Simulation:
    """A deterministic driver for fast integration tests."""
    return Simulation.init(seed=123, n_periods=10)


@pytest.fixture(autouse=True)
def mute_crisislab_logs(caplog):
    # - CI coverage run: DEBUG to execute all logging for accurate coverage
    # - Everything else: ERROR for faster tests
    if os.environ.get("COVERAGE_RUN") == "true":
        level = logging.DEBUG
    else:
        level = logging.ERROR

    caplog.set_level(level, logger="crisislab")
    logging.getLogger("crisislab").setLevel(level)
