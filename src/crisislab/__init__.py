"""
Currency Crisis Lab - didactic exchange-rate regime simulator
=============================================================

Currency Crisis Lab models a small open economy whose currency is under
capital-flow pressure. Policy levers (interest rate, reserves, foreign
debt, capital controls, peg or float) shape a per-tick pressure scalar,
which moves the exchange rate, drains reserves and erodes investor
confidence, possibly tipping the country into a crisis and back out.

Quick Start
-----------
Drive the pure engine directly:

>>> import crisislab as cl
>>> state = cl.create_initial_state()
>>> rng = cl.make_rng(42)
>>> state = cl.step(state, rng.random)
>>> state.time
1

Or let the driver hold the state:

>>> sim = cl.Simulation.init(seed=42)
>>> sim.apply(cl.policy.apply_shock, "panic")
>>> results = sim.run(n_periods=52, collect=True)
>>> results.crisis_onset

Custom configuration via YAML file:

>>> sim = cl.Simulation.init(config="my_config.yml", seed=42)

Key Concepts
------------
**Immutable state**
  `SimulationState` is frozen; every tick and every manual edit returns
  a new value.

**Injected randomness**
  `step` takes a zero-argument uniform [0, 1) callable (or a NumPy
  Generator), so runs are reproducible.

**Bounded log**
  The market log keeps the 12 most recent narrations.

Public API
----------
create_initial_state, step, with_status, append_log, clamp
    Engine contract.
SimulationState, LogEntry
    State record.
RESERVES_RANGE, DEBT_RANGE, MAX_LOGS, PEG, FLOAT
    Constants.
Config
    Model coefficients (defaults in ``defaults.yml``).
Simulation, SimulationResults
    Driver and per-run time series.
policy
    Manual levers and shocks.
logging
    Custom logging with DEEP_DEBUG level.

Notes
-----
- Time scale: 1 tick ≈ 1 week
- Configuration precedence: defaults.yml → user config → kwargs
"""

from __future__ import annotations

__version__: str = "0.1.0"

# ============================================================================
# Standard library imports
# ============================================================================
from typing import TypeAlias

import numpy as np

# Type alias for RNG
Rng: TypeAlias = np.random.Generator

# ============================================================================
# User-facing utilities
# ============================================================================
from . import logging  # noqa: E402


def make_rng(seed: int | None = None) -> Rng:
    """Create a new random number generator.

    Pass ``rng.random`` (or the generator itself) to `step`.

    Parameters
    ----------
    seed : int | None
        Seed for reproducibility. If `None`, uses a random seed.

    Returns
    -------
    Rng
        A NumPy random number generator (np.random.Generator).
    """
    return np.random.default_rng(seed)


# ============================================================================
# Engine contract
# ============================================================================
from .state import (  # noqa: E402
    DEBT_RANGE,
    FLOAT,
    MAX_LOGS,
    PEG,
    RESERVES_RANGE,
    LogEntry,
    SimulationState,
    append_log,
    clamp,
    create_initial_state,
    with_status,
)
from .config import Config  # noqa: E402
from .engine import step  # noqa: E402
from . import policy  # noqa: E402

# ============================================================================
# Driver (imports after dependencies)
# ============================================================================
from .results import SimulationResults  # noqa: E402
from .simulation import Simulation  # noqa: E402

__all__ = [
    "__version__",
    # Engine contract
    "SimulationState",
    "LogEntry",
    "create_initial_state",
    "step",
    "with_status",
    "append_log",
    "clamp",
    "RESERVES_RANGE",
    "DEBT_RANGE",
    "MAX_LOGS",
    "PEG",
    "FLOAT",
    # Configuration & driver
    "Config",
    "Simulation",
    "SimulationResults",
    # Utilities
    "Rng",
    "make_rng",
    "policy",
    "logging",
]
