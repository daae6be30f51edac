"""Building blocks of one engine tick (pressure, regimes, crisis)."""

from crisislab.systems.crisis import can_recover, confidence_collapsed, reserves_depleted
from crisislab.systems.pressure import compute_pressure, update_confidence
from crisislab.systems.regimes import adjust_float, defend_peg

__all__ = [
    "compute_pressure",
    "update_confidence",
    "defend_peg",
    "adjust_float",
    "reserves_depleted",
    "confidence_collapsed",
    "can_recover",
]
