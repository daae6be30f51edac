# src/crisislab/engine.py
"""
Transition engine: one tick of the exchange-rate model.

`step` is a pure function of its inputs. It holds no state, performs no
I/O besides logging, and draws exactly one number from the injected
random source per tick.
"""

from __future__ import annotations

from dataclasses import replace

from numpy.random import Generator, default_rng

from crisislab import narration
from crisislab.config import Config
from crisislab.logging import DEEP_DEBUG, getLogger
from crisislab.state import FLOAT, PEG, SimulationState, append_log
from crisislab.systems import (
    adjust_float,
    can_recover,
    compute_pressure,
    confidence_collapsed,
    defend_peg,
    reserves_depleted,
    update_confidence,
)
from crisislab.typing import UniformRng

__all__ = ["step"]

log = getLogger(__name__)

_DEFAULT_RNG = default_rng()


def _as_uniform(rng: UniformRng | Generator | None) -> UniformRng:
    if rng is None:
        return _DEFAULT_RNG.random
    if isinstance(rng, Generator):
        return rng.random
    if not callable(rng):
        raise TypeError(
            f"rng must be a zero-argument callable or numpy Generator, "
            f"got {type(rng).__name__}"
        )
    return rng


def step(
    state: SimulationState,
    rng: UniformRng | Generator | None = None,
    *,
    config: Config | None = None,
) -> SimulationState:
    """
    Advance *state* by one tick and return the new state.

    Order of operations
    -------------------
    1. time + 1
    2. pressure from rate differential, confidence and debt load
       (capital controls dampen it, free flows amplify it)
    3. confidence feedback
    4. crisis recovery (active crisis, both buffers above threshold)
    5. regime mechanics: peg defense (may collapse into a reserves crisis)
       or float adjustment
    6. confidence-crisis check
    7. narrate and append to the bounded log

    Narration priority, lowest first: capital-controls note, recovery,
    reserves crisis, confidence crisis. Without any of them the tick is
    narrated as a cautious market.

    Parameters
    ----------
    state : SimulationState
        Current state; not modified.
    rng : callable or numpy.random.Generator, optional
        Uniform [0, 1) source. ``None`` uses a module-level generator.
    config : Config, optional
        Model coefficients. ``None`` uses the package defaults.

    Raises
    ------
    TypeError
        If *state* is not a SimulationState or *rng* is not callable.
    """
    if not isinstance(state, SimulationState):
        raise TypeError(f"state must be SimulationState, got {type(state).__name__}")
    draw = _as_uniform(rng)
    cfg = config if config is not None else Config.default()

    time = state.time + 1
    log.debug(f"--- Tick {time} ({state.regime}) ---")

    pressure, status = compute_pressure(state, cfg)
    confidence = update_confidence(state.investor_confidence, pressure, cfg)

    reserves = state.reserves
    exchange_rate = state.exchange_rate
    regime = state.regime
    crisis = state.crisis

    if can_recover(crisis, reserves, confidence, cfg):
        log.info(
            f"  Tick {time}: crisis '{crisis}' cleared, "
            f"regime restored to {state.preferred_regime}"
        )
        crisis = None
        regime = state.preferred_regime
        status = narration.CRISIS_RECOVERY

    if regime == PEG:
        reserves, exchange_rate = defend_peg(reserves, pressure, rng=draw, cfg=cfg)
        if reserves_depleted(reserves, crisis, cfg):
            crisis = narration.RESERVES_CRISIS
            regime = FLOAT
            status = narration.RESERVES_CRISIS_ENTRY
            log.info(
                f"  Tick {time}: reserves depleted ({reserves:.1f}), "
                f"peg abandoned for a float"
            )
    else:
        exchange_rate, confidence = adjust_float(
            exchange_rate, confidence, pressure, rng=draw, cfg=cfg
        )

    if confidence_collapsed(confidence, crisis, cfg):
        crisis = narration.CONFIDENCE_CRISIS
        status = narration.CONFIDENCE_CRISIS_ENTRY
        log.info(f"  Tick {time}: confidence collapsed ({confidence:.1f})")

    status = status or narration.MARKET_CAUTIOUS

    nxt = replace(
        state,
        time=time,
        exchange_rate=exchange_rate,
        reserves=reserves,
        investor_confidence=confidence,
        regime=regime,
        crisis=crisis,
        status=status,
        logs=append_log(state.logs, status, state.log_counter),
        log_counter=state.log_counter + 1,
    )
    if log.isEnabledFor(DEEP_DEBUG):
        log.deep(f"  State after tick {time}: {nxt.to_dict()}")
    return nxt
