# src/crisislab/systems/regimes.py
"""
Regime-dependent exchange-rate mechanics.

Under a peg the central bank spends reserves to hold the rate near its
anchor; under a float the rate itself absorbs the pressure.
"""

from __future__ import annotations

from crisislab.config import Config
from crisislab.logging import getLogger
from crisislab.state import CONFIDENCE_RANGE, RESERVES_RANGE, clamp
from crisislab.typing import UniformRng

log = getLogger(__name__)


def defend_peg(
    reserves: float,
    pressure: float,
    *,
    rng: UniformRng,
    cfg: Config,
) -> tuple[float, float]:
    """
    Spend reserves against positive pressure and re-anchor the rate.

    Rule
    ----
      cost = max(0, P·k_def)
      R   ← clamp(R − cost·a, R_min, R_max)
      E   ← E₀ + clamp(P·k_drift, drift_min, drift_max) + U(−n, n)

    Negative pressure never replenishes reserves. The anchor itself shifts
    with pressure, so the defense is imperfect.

    Returns
    -------
    (reserves, exchange_rate)
    """
    defense_cost = max(0.0, pressure * cfg.peg_defense_multiplier)
    reserves = clamp(
        reserves - defense_cost * cfg.reserve_absorption, *RESERVES_RANGE
    )

    peg_drift = cfg.reference_rate + clamp(
        pressure * cfg.peg_drift_sensitivity, cfg.peg_drift_min, cfg.peg_drift_max
    )
    exchange_rate = peg_drift + (rng() * (2 * cfg.peg_noise) - cfg.peg_noise)

    log.debug(
        f"  Peg defense: cost={defense_cost:.3f}  |  reserves → {reserves:.2f}  |  "
        f"rate → {exchange_rate:.3f}"
    )
    return reserves, exchange_rate


def adjust_float(
    exchange_rate: float,
    confidence: float,
    pressure: float,
    *,
    rng: UniformRng,
    cfg: Config,
) -> tuple[float, float]:
    """
    Let the floating rate absorb the pressure.

    Rule
    ----
      move = clamp(P·k_float, move_min, move_max)
      E    ← clamp(E + move + U(−n, n), E_min, E_max)
      if |move| > v  → C ← clamp(C − penalty, 0, 100)

    Returns
    -------
    (exchange_rate, confidence)
    """
    move = clamp(
        pressure * cfg.float_sensitivity, cfg.float_move_min, cfg.float_move_max
    )
    exchange_rate = clamp(
        exchange_rate + move + (rng() * (2 * cfg.float_noise) - cfg.float_noise),
        cfg.float_rate_min,
        cfg.float_rate_max,
    )

    if abs(move) > cfg.volatility_threshold:
        confidence = clamp(
            confidence - cfg.volatility_confidence_penalty, *CONFIDENCE_RANGE
        )
        log.debug(f"  Large float move ({move:+.2f}) erodes confidence → {confidence:.2f}")

    log.debug(f"  Float: move={move:+.3f}  |  rate → {exchange_rate:.3f}")
    return exchange_rate, confidence
