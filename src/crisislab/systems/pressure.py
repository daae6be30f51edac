# src/crisislab/systems/pressure.py
"""
Capital-flow pressure and the confidence feedback it drives.

Positive pressure means outflows that push the currency weaker.
"""

from __future__ import annotations

import logging

from crisislab import narration
from crisislab.config import Config
from crisislab.logging import getLogger
from crisislab.state import CONFIDENCE_RANGE, SimulationState, clamp

log = getLogger(__name__)


def compute_pressure(state: SimulationState, cfg: Config) -> tuple[float, str | None]:
    """
    Net depreciation force acting on the currency for one tick.

    Rule
    ----
      P  = −(i − i*)·k_r
      P += clamp((C₀ − C) / s_c, d_min, d_max)
      L  = D · (E / E₀) / D₀ ;  if L > 1 → P += (L − 1)·w_d
      P *= m_ctrl  if controls  else  m_free

    i: domestic rate, i*: global rate, C: confidence, D: foreign debt,
    E: exchange rate, L: debt load

    Returns
    -------
    (pressure, narration)
        *narration* is the capital-controls note when controls are on,
        otherwise ``None``.
    """
    pressure = 0.0

    rate_differential = state.interest_rate - state.global_interest_rate
    pressure -= rate_differential * cfg.rate_sensitivity

    confidence_drag = clamp(
        (cfg.confidence_anchor - state.investor_confidence) / cfg.confidence_scale,
        cfg.confidence_drag_min,
        cfg.confidence_drag_max,
    )
    pressure += confidence_drag

    debt_load = (
        state.foreign_debt_usd * (state.exchange_rate / cfg.reference_rate)
    ) / cfg.debt_scale
    if debt_load > 1:
        pressure += (debt_load - 1) * cfg.debt_pressure_weight

    if log.isEnabledFor(logging.DEBUG):
        log.debug(
            f"  Pressure terms: rate diff={rate_differential:+.2f}  |  "
            f"confidence drag={confidence_drag:+.3f}  |  debt load={debt_load:.3f}"
        )

    note: str | None = None
    if state.capital_controls:
        pressure *= cfg.controls_damping
        note = narration.CONTROLS_DAMPEN
    else:
        pressure *= cfg.free_flow_amplification

    log.debug(f"  Net pressure: {pressure:+.4f}")
    return pressure, note


def update_confidence(confidence: float, pressure: float, cfg: Config) -> float:
    """
    Feed pressure back into investor confidence.

    The per-tick change is capped asymmetrically: confidence can fall by
    up to ``confidence_feedback_max`` but only rise by
    ``-confidence_feedback_min``.
    """
    confidence -= clamp(
        pressure / cfg.confidence_feedback_scale,
        cfg.confidence_feedback_min,
        cfg.confidence_feedback_max,
    )
    return clamp(confidence, *CONFIDENCE_RANGE)
