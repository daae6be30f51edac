"""
Configuration dataclass for model coefficients.

This module defines the Config dataclass, which groups every coefficient
and threshold of the transition engine in one immutable object. Config
instances are created by `Config.default()` (package defaults) or
`Config.from_mapping()` after merging defaults, user config and kwargs.

Design Notes
------------
- Immutable (frozen=True) so one instance can be shared by every tick
- Memory-efficient (slots=True)
- All parameters listed explicitly; the values live in defaults.yml
- Validation happens in ConfigValidator, not here

See Also
--------
ConfigValidator : Centralized validation for configuration parameters
crisislab.simulation.Simulation.init : Creates Config from merged parameters
"""

from __future__ import annotations

from dataclasses import dataclass, fields
from functools import lru_cache
from importlib import resources
from typing import Any, Mapping

import yaml


@dataclass(slots=True, frozen=True)
class Config:
    """
    Immutable coefficients of the exchange-rate pressure model.

    Parameters
    ----------
    rate_sensitivity : float
        Pressure removed per point of (domestic - global) rate differential.
    confidence_anchor : float
        Confidence level at which confidence adds no pressure.
    confidence_scale : float
        Divisor turning the confidence gap into pressure (positive).
    confidence_drag_min, confidence_drag_max : float
        Bounds of the confidence-drag term.
    reference_rate : float
        Peg anchor and exchange-rate normalisation of the debt load.
    debt_scale : float
        Debt (billions, at the reference rate) that makes debt load = 1.
    debt_pressure_weight : float
        Pressure per unit of debt load above 1.
    controls_damping : float
        Pressure multiplier while capital controls are active.
    free_flow_amplification : float
        Pressure multiplier without capital controls.
    confidence_feedback_scale : float
        Divisor turning pressure into a confidence change (positive).
    confidence_feedback_min, confidence_feedback_max : float
        Bounds of the per-tick confidence change.
    peg_defense_multiplier : float
        Defense cost per unit of positive pressure under a peg.
    reserve_absorption : float
        Share of the defense cost paid out of reserves.
    peg_drift_sensitivity : float
        Anchor drift per unit of pressure under a peg.
    peg_drift_min, peg_drift_max : float
        Bounds of the anchor drift.
    peg_noise : float
        Half-width of the uniform noise added to the pegged rate.
    float_sensitivity : float
        Rate move per unit of pressure under a float.
    float_move_min, float_move_max : float
        Bounds of the per-tick float move (before noise).
    float_noise : float
        Half-width of the uniform noise added to the floating rate.
    float_rate_min, float_rate_max : float
        Hard bounds of the floating rate.
    volatility_threshold : float
        Absolute float move above which confidence erodes further.
    volatility_confidence_penalty : float
        Confidence lost on such a large move.
    reserves_crisis_threshold : float
        Reserves below which a peg collapses into a reserves crisis.
    confidence_crisis_threshold : float
        Confidence below which a confidence crisis starts.
    recovery_reserves : float
        Reserves that must be exceeded before a crisis can clear.
    recovery_confidence : float
        Confidence that must be exceeded before a crisis can clear.

    Examples
    --------
    >>> from crisislab.config import Config
    >>> cfg = Config.default()
    >>> cfg.rate_sensitivity
    3.5
    >>> cfg = Config.from_mapping({"controls_damping": 0.4})
    >>> cfg.controls_damping
    0.4
    """

    # Pressure model
    rate_sensitivity: float
    confidence_anchor: float
    confidence_scale: float
    confidence_drag_min: float
    confidence_drag_max: float
    reference_rate: float
    debt_scale: float
    debt_pressure_weight: float
    controls_damping: float
    free_flow_amplification: float

    # Confidence feedback
    confidence_feedback_scale: float
    confidence_feedback_min: float
    confidence_feedback_max: float

    # Peg
    peg_defense_multiplier: float
    reserve_absorption: float
    peg_drift_sensitivity: float
    peg_drift_min: float
    peg_drift_max: float
    peg_noise: float

    # Float
    float_sensitivity: float
    float_move_min: float
    float_move_max: float
    float_noise: float
    float_rate_min: float
    float_rate_max: float
    volatility_threshold: float
    volatility_confidence_penalty: float

    # Crisis & recovery
    reserves_crisis_threshold: float
    confidence_crisis_threshold: float
    recovery_reserves: float
    recovery_confidence: float

    @classmethod
    def field_names(cls) -> tuple[str, ...]:
        return tuple(f.name for f in fields(cls))

    @classmethod
    def default(cls) -> Config:
        """Config built from the package ``defaults.yml``."""
        return _default_config()

    @classmethod
    def from_mapping(cls, cfg: Mapping[str, Any]) -> Config:
        """
        Build a Config from *cfg* layered over the package defaults.

        Keys that are not model coefficients (``seed``, ``n_periods``,
        ``logging``...) are accepted and ignored here.

        Raises
        ------
        ValueError
            If the merged configuration fails validation.
        """
        from crisislab.config.validator import ConfigValidator

        merged = package_defaults()
        merged.update(cfg)
        ConfigValidator.validate_config(merged)
        return cls(**{name: float(merged[name]) for name in cls.field_names()})


def package_defaults() -> dict[str, Any]:
    """Load crisislab/defaults.yml"""
    txt = resources.files("crisislab").joinpath("defaults.yml").read_text(
        encoding="utf-8"
    )
    return yaml.safe_load(txt) or {}


@lru_cache(maxsize=1)
def _default_config() -> Config:
    data = package_defaults()
    return Config(**{name: float(data[name]) for name in Config.field_names()})
