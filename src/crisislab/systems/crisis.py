# src/crisislab/systems/crisis.py
"""
Threshold-triggered crisis entry and recovery.

Each entry check is guarded by "no crisis already active", so a stored
label is only ever replaced after a recovery has cleared it.
"""

from __future__ import annotations

from crisislab.config import Config
from crisislab.logging import getLogger

log = getLogger(__name__)


def reserves_depleted(reserves: float, crisis: str | None, cfg: Config) -> bool:
    """True when a peg's reserves fall below the crisis threshold."""
    return reserves < cfg.reserves_crisis_threshold and not crisis


def confidence_collapsed(confidence: float, crisis: str | None, cfg: Config) -> bool:
    """True when investor confidence falls below the crisis threshold."""
    return confidence < cfg.confidence_crisis_threshold and not crisis


def can_recover(
    crisis: str | None,
    reserves: float,
    confidence: float,
    cfg: Config,
) -> bool:
    """
    True when an active crisis may clear.

    Both buffers must be strictly above their recovery thresholds, which
    the config validator keeps above the crisis triggers: a crisis can
    never clear while the resource that triggered it is still depleted.
    """
    if not crisis:
        return False
    ok = reserves > cfg.recovery_reserves and confidence > cfg.recovery_confidence
    if not ok:
        log.debug(
            f"  Crisis '{crisis}' persists: reserves={reserves:.2f} "
            f"(need > {cfg.recovery_reserves:g}), confidence={confidence:.2f} "
            f"(need > {cfg.recovery_confidence:g})"
        )
    return ok
