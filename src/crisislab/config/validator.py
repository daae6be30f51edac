"""Centralized configuration validation for Currency Crisis Lab."""

from __future__ import annotations

import warnings
from typing import Any

from numpy.random import Generator

from crisislab.state import (
    CONFIDENCE_RANGE,
    DEBT_RANGE,
    GLOBAL_RATE_RANGE,
    INTEREST_RATE_RANGE,
    REGIMES,
    RESERVES_RANGE,
)


class ConfigValidator:
    """
    Centralized validation for simulation configuration.

    All validation happens once, at Simulation.init() or
    Config.from_mapping(), to ensure:
    - Type correctness
    - Valid parameter ranges
    - Relationship constraints between parameters
    - Clear error messages with actionable feedback
    """

    # Valid log levels for logging configuration
    VALID_LOG_LEVELS = {"DEEP_DEBUG", "DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"}

    # Driver-level keys that are not model coefficients
    DRIVER_KEYS = {"n_periods", "seed", "tick_interval", "initial_state", "logging"}

    # Fields of SimulationState that may be overridden at start-up
    INITIAL_STATE_RANGES: dict[str, tuple[float | None, float | None]] = {
        "exchange_rate": (0.0, None),
        "reserves": tuple(RESERVES_RANGE),  # type: ignore[dict-item]
        "foreign_debt_usd": tuple(DEBT_RANGE),  # type: ignore[dict-item]
        "investor_confidence": tuple(CONFIDENCE_RANGE),  # type: ignore[dict-item]
        "interest_rate": tuple(INTEREST_RATE_RANGE),  # type: ignore[dict-item]
        "global_interest_rate": tuple(GLOBAL_RATE_RANGE),  # type: ignore[dict-item]
    }
    INITIAL_STATE_FLAGS = {"capital_controls"}
    INITIAL_STATE_REGIMES = {"regime", "preferred_regime"}

    # (min, max) per coefficient; None means unbounded
    RANGES: dict[str, tuple[float | None, float | None]] = {
        # Pressure model
        "rate_sensitivity": (0.0, None),
        "confidence_anchor": tuple(CONFIDENCE_RANGE),  # type: ignore[dict-item]
        "confidence_scale": (0.0, None),
        "reference_rate": (0.0, None),
        "debt_scale": (0.0, None),
        "debt_pressure_weight": (0.0, None),
        "controls_damping": (0.0, None),
        "free_flow_amplification": (0.0, None),
        # Confidence feedback
        "confidence_feedback_scale": (0.0, None),
        # Peg
        "peg_defense_multiplier": (0.0, None),
        "reserve_absorption": (0.0, 1.0),
        "peg_drift_sensitivity": (0.0, None),
        "peg_noise": (0.0, None),
        # Float
        "float_sensitivity": (0.0, None),
        "float_noise": (0.0, None),
        "float_rate_min": (0.0, None),
        "volatility_threshold": (0.0, None),
        "volatility_confidence_penalty": (0.0, None),
        # Crisis & recovery
        "reserves_crisis_threshold": tuple(RESERVES_RANGE),  # type: ignore[dict-item]
        "confidence_crisis_threshold": tuple(CONFIDENCE_RANGE),  # type: ignore[dict-item]
        "recovery_reserves": tuple(RESERVES_RANGE),  # type: ignore[dict-item]
        "recovery_confidence": tuple(CONFIDENCE_RANGE),  # type: ignore[dict-item]
        # Driver
        "n_periods": (1, None),
        "tick_interval": (0.0, None),
    }

    # Divisors must be strictly positive
    STRICTLY_POSITIVE = {
        "confidence_scale",
        "reference_rate",
        "debt_scale",
        "confidence_feedback_scale",
    }

    # (lower, upper) coefficient pairs
    BOUND_PAIRS = [
        ("confidence_drag_min", "confidence_drag_max"),
        ("confidence_feedback_min", "confidence_feedback_max"),
        ("peg_drift_min", "peg_drift_max"),
        ("float_move_min", "float_move_max"),
        ("float_rate_min", "float_rate_max"),
    ]

    @staticmethod
    def validate_config(cfg: dict[str, Any]) -> None:
        """
        Validate all configuration parameters.

        Parameters
        ----------
        cfg : dict
            Configuration dictionary to validate.

        Raises
        ------
        ValueError
            If any validation check fails.
        """
        ConfigValidator._validate_keys(cfg)

        # Type checking
        ConfigValidator._validate_types(cfg)

        # Range validation
        ConfigValidator._validate_ranges(cfg)

        # Relationship constraints
        ConfigValidator._validate_relationships(cfg)

        if cfg.get("initial_state") is not None:
            ConfigValidator._validate_initial_state(cfg["initial_state"])

        # Logging configuration
        if "logging" in cfg:
            ConfigValidator._validate_logging(cfg["logging"])

    @staticmethod
    def _coefficient_names() -> tuple[str, ...]:
        from crisislab.config.schema import Config

        return Config.field_names()

    @staticmethod
    def _validate_keys(cfg: dict[str, Any]) -> None:
        """Reject keys that are neither coefficients nor driver settings."""
        known = set(ConfigValidator._coefficient_names()) | ConfigValidator.DRIVER_KEYS
        unknown = sorted(str(k) for k in cfg if k not in known)
        if unknown:
            raise ValueError(
                f"Unknown config parameter(s): {unknown}. "
                f"See crisislab/defaults.yml for the accepted keys."
            )

    @staticmethod
    def _validate_types(cfg: dict[str, Any]) -> None:
        """
        Ensure correct types for configuration parameters.

        Raises
        ------
        ValueError
            If any parameter has incorrect type.
        """
        # Float parameters (accept int or float, never bool)
        for key in (*ConfigValidator._coefficient_names(), "tick_interval"):
            if key not in cfg:
                continue
            val = cfg[key]
            if isinstance(val, bool) or not isinstance(val, (int, float)):
                raise ValueError(
                    f"Config parameter '{key}' must be float, got {type(val).__name__}"
                )

        if "n_periods" in cfg:
            val = cfg["n_periods"]
            if isinstance(val, bool) or not isinstance(val, int):
                raise ValueError(
                    f"Config parameter 'n_periods' must be int, got {type(val).__name__}"
                )

        # seed: int, None, or a ready-made Generator
        if "seed" in cfg:
            val = cfg["seed"]
            if val is not None and not isinstance(val, Generator) and (
                isinstance(val, bool) or not isinstance(val, int)
            ):
                raise ValueError(
                    f"Config parameter 'seed' must be int or None, "
                    f"got {type(val).__name__}"
                )

        if "initial_state" in cfg:
            val = cfg["initial_state"]
            if val is not None and not isinstance(val, dict):
                raise ValueError(
                    f"Config parameter 'initial_state' must be dict or None, "
                    f"got {type(val).__name__}"
                )

    @staticmethod
    def _validate_ranges(cfg: dict[str, Any]) -> None:
        """
        Ensure parameters are in valid ranges.

        Raises
        ------
        ValueError
            If any parameter is out of valid range.
        """
        for key, (min_val, max_val) in ConfigValidator.RANGES.items():
            if key not in cfg:
                continue

            val = cfg[key]

            if min_val is not None and val < min_val:
                raise ValueError(
                    f"Config parameter '{key}' must be >= {min_val}, got {val}"
                )

            if max_val is not None and val > max_val:
                raise ValueError(
                    f"Config parameter '{key}' must be <= {max_val}, got {val}"
                )

        for key in ConfigValidator.STRICTLY_POSITIVE:
            if key in cfg and cfg[key] <= 0:
                raise ValueError(
                    f"Config parameter '{key}' must be > 0, got {cfg[key]}"
                )

    @staticmethod
    def _validate_relationships(cfg: dict[str, Any]) -> None:
        """
        Validate cross-parameter constraints.

        Raises
        ------
        ValueError
            If a lower bound exceeds its upper bound, or a crisis could
            clear while its trigger is still below threshold.
        """
        for lo_key, hi_key in ConfigValidator.BOUND_PAIRS:
            if lo_key in cfg and hi_key in cfg and cfg[lo_key] > cfg[hi_key]:
                raise ValueError(
                    f"Config parameter '{lo_key}' ({cfg[lo_key]}) must be "
                    f"<= '{hi_key}' ({cfg[hi_key]})"
                )

        # Recovery must sit strictly above the crisis trigger
        for recovery_key, trigger_key in (
            ("recovery_reserves", "reserves_crisis_threshold"),
            ("recovery_confidence", "confidence_crisis_threshold"),
        ):
            if recovery_key in cfg and trigger_key in cfg:
                if cfg[recovery_key] <= cfg[trigger_key]:
                    raise ValueError(
                        f"Config parameter '{recovery_key}' ({cfg[recovery_key]}) "
                        f"must be > '{trigger_key}' ({cfg[trigger_key]})"
                    )

        # Warn if capital controls would not dampen anything
        damping = cfg.get("controls_damping")
        amplification = cfg.get("free_flow_amplification")
        if damping is not None and amplification is not None:
            if damping >= amplification:
                warnings.warn(
                    f"controls_damping ({damping}) >= free_flow_amplification "
                    f"({amplification}). Capital controls will not reduce "
                    "pressure relative to free flows.",
                    UserWarning,
                    stacklevel=3,
                )

    @staticmethod
    def _validate_initial_state(initial: dict[str, Any]) -> None:
        """
        Validate start-up overrides of the initial state.

        Raises
        ------
        ValueError
            If a key is not overridable or a value is out of range.
        """
        for key, val in initial.items():
            if key in ConfigValidator.INITIAL_STATE_FLAGS:
                if not isinstance(val, bool):
                    raise ValueError(
                        f"initial_state '{key}' must be bool, got {type(val).__name__}"
                    )
            elif key in ConfigValidator.INITIAL_STATE_REGIMES:
                if val not in REGIMES:
                    raise ValueError(
                        f"initial_state '{key}' must be one of {list(REGIMES)}, "
                        f"got {val!r}"
                    )
            elif key in ConfigValidator.INITIAL_STATE_RANGES:
                if isinstance(val, bool) or not isinstance(val, (int, float)):
                    raise ValueError(
                        f"initial_state '{key}' must be float, got {type(val).__name__}"
                    )
                min_val, max_val = ConfigValidator.INITIAL_STATE_RANGES[key]
                if min_val is not None and val < min_val:
                    raise ValueError(
                        f"initial_state '{key}' must be >= {min_val}, got {val}"
                    )
                if max_val is not None and val > max_val:
                    raise ValueError(
                        f"initial_state '{key}' must be <= {max_val}, got {val}"
                    )
            else:
                raise ValueError(f"initial_state key '{key}' cannot be overridden")

    @staticmethod
    def _validate_logging(log_config: dict[str, Any]) -> None:
        """
        Validate logging configuration.

        Parameters
        ----------
        log_config : dict
            Logging configuration dictionary with keys:
            - default_level: str (e.g., 'INFO', 'DEBUG')
            - modules: dict[str, str] (per-module overrides)

        Raises
        ------
        ValueError
            If logging configuration is invalid.
        """
        if not isinstance(log_config, dict):
            raise ValueError(
                f"Logging config must be dict, got {type(log_config).__name__}"
            )

        if "default_level" in log_config:
            level = log_config["default_level"]
            if not isinstance(level, str):
                raise ValueError(
                    f"Logging default_level must be str, got {type(level).__name__}"
                )

            if level.upper() not in ConfigValidator.VALID_LOG_LEVELS:
                raise ValueError(
                    f"Invalid log level '{level}'. "
                    f"Must be one of {ConfigValidator.VALID_LOG_LEVELS}"
                )

        if "modules" in log_config:
            modules = log_config["modules"]
            if not isinstance(modules, dict):
                raise ValueError(
                    f"Logging modules must be dict, got {type(modules).__name__}"
                )

            for module_name, level in modules.items():
                if not isinstance(module_name, str):
                    raise ValueError(
                        f"Module name must be str, got {type(module_name).__name__}"
                    )

                if not isinstance(level, str):
                    raise ValueError(
                        f"Log level for module '{module_name}' must be str, "
                        f"got {type(level).__name__}"
                    )

                if level.upper() not in ConfigValidator.VALID_LOG_LEVELS:
                    raise ValueError(
                        f"Invalid log level '{level}' for module '{module_name}'. "
                        f"Must be one of {ConfigValidator.VALID_LOG_LEVELS}"
                    )
