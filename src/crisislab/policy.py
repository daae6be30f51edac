# src/crisislab/policy.py
"""
Manual policy levers and exogenous shocks.

Every helper returns a new state through `with_status`, so each edit is
narrated in the market log exactly like an engine tick. None of them
advances time or runs the pressure model.

Examples
--------
>>> from crisislab import create_initial_state, policy
>>> s = policy.raise_interest_rate(create_initial_state())
>>> s.interest_rate, s.status
(5.5, '政策金利を引き上げました。')
>>> s = policy.apply_shock(s, "panic")
>>> s.investor_confidence
62.0
"""

from __future__ import annotations

from typing import Literal

from crisislab import narration
from crisislab.logging import getLogger
from crisislab.state import (
    CONFIDENCE_RANGE,
    DEBT_RANGE,
    FLOAT,
    GLOBAL_RATE_RANGE,
    INTEREST_RATE_RANGE,
    PEG,
    RESERVES_RANGE,
    SimulationState,
    clamp,
    create_initial_state,
    with_status,
)

__all__ = [
    "RATE_STEP",
    "SHOCKS",
    "nudge_interest_rate",
    "raise_interest_rate",
    "lower_interest_rate",
    "apply_shock",
    "toggle_regime",
    "toggle_capital_controls",
    "set_reserves",
    "set_foreign_debt",
    "accumulate_reserves",
    "refinance_debt",
    "observe_market",
    "reset",
]

log = getLogger(__name__)

RATE_STEP = 0.5

# shock magnitudes
GLOBAL_RATE_HIKE = 1.8
PANIC_CONFIDENCE_HIT = 18.0
RESERVES_SHOCK = 50.0

# canned adjustments
RESERVES_TOP_UP = 60.0
DEBT_REFINANCE = 35.0

ShockKind = Literal["global_rate", "panic", "reserves"]
SHOCKS: tuple[ShockKind, ...] = ("global_rate", "panic", "reserves")


def nudge_interest_rate(state: SimulationState, delta: float) -> SimulationState:
    """Move the policy rate by *delta* points, clamped to [0, 25]."""
    status = narration.RATE_RAISED if delta > 0 else narration.RATE_LOWERED
    rate = clamp(state.interest_rate + delta, *INTEREST_RATE_RANGE)
    return with_status(state, {"interest_rate": rate}, status)


def raise_interest_rate(state: SimulationState) -> SimulationState:
    return nudge_interest_rate(state, RATE_STEP)


def lower_interest_rate(state: SimulationState) -> SimulationState:
    return nudge_interest_rate(state, -RATE_STEP)


def apply_shock(state: SimulationState, kind: ShockKind) -> SimulationState:
    """
    Hit the economy with one of the canned shocks.

    - ``"global_rate"``: foreign rate +1.8 points (flight to safety)
    - ``"panic"``: investor confidence −18
    - ``"reserves"``: reserves −50 (import-cost shock)

    Raises
    ------
    ValueError
        If *kind* is not one of ``SHOCKS``.
    """
    if kind == "global_rate":
        rate = clamp(state.global_interest_rate + GLOBAL_RATE_HIKE, *GLOBAL_RATE_RANGE)
        updates: dict[str, float] = {"global_interest_rate": rate}
        status = narration.SHOCK_GLOBAL_RATE
    elif kind == "panic":
        confidence = clamp(
            state.investor_confidence - PANIC_CONFIDENCE_HIT, *CONFIDENCE_RANGE
        )
        updates = {"investor_confidence": confidence}
        status = narration.SHOCK_PANIC
    elif kind == "reserves":
        reserves = clamp(state.reserves - RESERVES_SHOCK, *RESERVES_RANGE)
        updates = {"reserves": reserves}
        status = narration.SHOCK_RESERVES
    else:
        raise ValueError(f"Unknown shock '{kind}'. Available shocks: {list(SHOCKS)}")

    log.info(f"Shock applied: {kind} → {updates}")
    return with_status(state, updates, status)


def toggle_regime(state: SimulationState) -> SimulationState:
    """Switch peg ↔ float; the new regime also becomes the preferred one."""
    if state.regime == PEG:
        regime, status = FLOAT, narration.REGIME_TO_FLOAT
    else:
        regime, status = PEG, narration.REGIME_TO_PEG
    return with_status(state, {"regime": regime, "preferred_regime": regime}, status)


def toggle_capital_controls(state: SimulationState) -> SimulationState:
    status = narration.CONTROLS_OFF if state.capital_controls else narration.CONTROLS_ON
    return with_status(
        state, {"capital_controls": not state.capital_controls}, status
    )


def set_reserves(
    state: SimulationState,
    value: float,
    reason: str | None = None,
) -> SimulationState:
    """Set reserves directly (clamped to ``RESERVES_RANGE``)."""
    reserves = clamp(value, *RESERVES_RANGE)
    status = reason or narration.reserves_adjusted(reserves, state.reserves)
    return with_status(state, {"reserves": reserves}, status)


def set_foreign_debt(
    state: SimulationState,
    value: float,
    reason: str | None = None,
) -> SimulationState:
    """Set foreign-currency debt directly (clamped to ``DEBT_RANGE``)."""
    debt = clamp(value, *DEBT_RANGE)
    status = reason or narration.debt_adjusted(debt, state.foreign_debt_usd)
    return with_status(state, {"foreign_debt_usd": debt}, status)


def accumulate_reserves(state: SimulationState) -> SimulationState:
    return set_reserves(
        state, state.reserves + RESERVES_TOP_UP, narration.RESERVES_ACCUMULATED
    )


def refinance_debt(state: SimulationState) -> SimulationState:
    return set_foreign_debt(
        state, state.foreign_debt_usd - DEBT_REFINANCE, narration.DEBT_REFINANCED
    )


def observe_market(state: SimulationState) -> SimulationState:
    """Log a wait-and-see note without touching any indicator."""
    return with_status(state, {}, narration.MARKET_WATCH)


def reset() -> SimulationState:
    """Discard the current session and start over."""
    return create_initial_state()
