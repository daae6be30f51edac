# src/crisislab/simulation.py
from __future__ import annotations

import threading
import time
from dataclasses import dataclass, field, replace
from pathlib import Path
from typing import Any, Callable, Dict, Mapping

# noinspection PyPackageRequirements
import yaml

# noinspection PyPackageRequirements
from numpy.random import Generator, default_rng

from crisislab import engine
from crisislab.config import Config, ConfigValidator, package_defaults
from crisislab.logging import getLogger, level_from_name
from crisislab.results import SimulationResults, _DataCollector
from crisislab.state import SimulationState, create_initial_state

__all__ = ["Simulation"]

log = getLogger(__name__)


# helpers
# ---------------------------------------------------------------------------
def _read_yaml(obj: str | Path | Mapping[str, Any] | None) -> Dict[str, Any]:
    """Return a plain dict – {} if *obj* is None."""
    if obj is None:
        return {}
    if isinstance(obj, Mapping):
        return dict(obj)
    p = Path(obj)
    with p.open("rt", encoding="utf-8") as fh:
        data = yaml.safe_load(fh) or {}
    if not isinstance(data, Mapping):
        raise TypeError(f"config root must be mapping, got {type(data)!r}")
    return dict(data)


def _build_initial_state(overrides: Mapping[str, Any] | None) -> SimulationState:
    """Initial state with validated start-up overrides applied."""
    state = create_initial_state()
    if not overrides:
        return state
    updates = dict(overrides)
    # a user-chosen starting regime is also the preferred one
    if "regime" in updates and "preferred_regime" not in updates:
        updates["preferred_regime"] = updates["regime"]
    return replace(state, **updates)


# Simulation
# ---------------------------------------------------------------------
@dataclass(slots=True)
class Simulation:
    """
    Driver that holds the current state and feeds it through the engine.

    Ticks (`step`, `run`, `play`) and manual edits (`apply`) are all
    funnelled through one lock, so no update is ever applied to a stale
    snapshot.
    """

    # core state
    state: SimulationState
    rng: Generator

    # configuration
    config: Config
    initial_overrides: Dict[str, Any]

    # run control
    n_periods: int
    tick_interval: float
    auto_play: bool = False

    _lock: threading.RLock = field(  # type: ignore[valid-type]
        default_factory=threading.RLock, repr=False
    )

    # Constructor
    # ---------------------------------------------------------------------
    @classmethod
    def init(
        cls,
        config: str | Path | Mapping[str, Any] | None = None,
        **overrides: Any,  # anything here wins last
    ) -> "Simulation":
        """
        Build a Simulation.

        Order of precedence (later overrides earlier):

            1. package defaults  (crisislab/defaults.yml)
            2. *config*  (Path / str / Mapping / None)
            3. explicit keyword arguments (**overrides)

        Raises
        ------
        ValueError
            If the merged configuration is invalid.
        TypeError
            If a YAML config file does not contain a mapping.
        """
        # 1 + 2 + 3 → one merged dict
        cfg_dict: Dict[str, Any] = package_defaults()
        cfg_dict.update(_read_yaml(config))
        cfg_dict.update(overrides)

        ConfigValidator.validate_config(cfg_dict)

        # Random-seed handling
        seed_val = cfg_dict.pop("seed", None)
        rng: Generator = (
            seed_val if isinstance(seed_val, Generator) else default_rng(seed_val)
        )

        if cfg_dict.get("logging"):
            cls._configure_logging(cfg_dict["logging"])

        initial_overrides = dict(cfg_dict.get("initial_state") or {})
        cfg = Config(**{name: float(cfg_dict[name]) for name in Config.field_names()})

        log.debug(f"Simulation initialised (seed={seed_val!r}, overrides={overrides})")
        return cls(
            state=_build_initial_state(initial_overrides),
            rng=rng,
            config=cfg,
            initial_overrides=initial_overrides,
            n_periods=int(cfg_dict["n_periods"]),
            tick_interval=float(cfg_dict["tick_interval"]),
        )

    @staticmethod
    def _configure_logging(log_config: Dict[str, Any]) -> None:
        """
        Configure logging levels for crisislab loggers.

        Parameters
        ----------
        log_config : dict
            Logging configuration with keys:
            - default_level: str (e.g., 'INFO', 'DEBUG')
            - modules: dict[str, str] (per-module overrides, relative to
              the ``crisislab`` package, e.g. ``"systems.regimes"``)
        """
        default_level = log_config.get("default_level", "INFO")
        getLogger("crisislab").setLevel(level_from_name(default_level))

        for module_name, level in (log_config.get("modules") or {}).items():
            getLogger(f"crisislab.{module_name}").setLevel(level_from_name(level))

    # properties
    # ---------------------------------------------------------------------
    @property
    def t(self) -> int:
        """Ticks elapsed in the current session."""
        return self.state.time

    @property
    def in_crisis(self) -> bool:
        return self.state.in_crisis

    # public API
    # ---------------------------------------------------------------------
    def step(self) -> SimulationState:
        """Advance exactly one tick and return the new state."""
        with self._lock:
            self.state = engine.step(self.state, self.rng.random, config=self.config)
            return self.state

    def apply(
        self,
        action: Callable[..., SimulationState],
        *args: Any,
        **kwargs: Any,
    ) -> SimulationState:
        """
        Apply a manual edit (any `crisislab.policy` helper) to the held state.

        Examples
        --------
        >>> from crisislab import policy
        >>> sim = Simulation.init(seed=1)
        >>> sim.apply(policy.apply_shock, "panic").investor_confidence
        62.0
        """
        with self._lock:
            nxt = action(self.state, *args, **kwargs)
            if not isinstance(nxt, SimulationState):
                raise TypeError(
                    f"action must return SimulationState, got {type(nxt).__name__}"
                )
            self.state = nxt
            return nxt

    def reset(self) -> SimulationState:
        """Start a fresh session (same start-up overrides), auto-play off."""
        with self._lock:
            self.auto_play = False
            self.state = _build_initial_state(self.initial_overrides)
            return self.state

    def run(
        self,
        n_periods: int | None = None,
        *,
        stop_on_crisis: bool = False,
        collect: bool = False,
    ) -> SimulationResults | None:
        """
        Advance the simulation *n_periods* ticks
        (defaults to the ``n_periods`` passed at construction).

        Parameters
        ----------
        stop_on_crisis : bool
            Stop after the first tick that ends with an active crisis.
        collect : bool
            Record every tick and return a SimulationResults.
        """
        n = n_periods if n_periods is not None else self.n_periods
        collector = _DataCollector() if collect else None

        for _ in range(int(n)):
            state = self.step()
            if collector is not None:
                collector.capture(state)
            if stop_on_crisis and state.in_crisis:
                log.info(f"Run stopped at tick {state.time}: crisis '{state.crisis}'")
                break

        if collector is not None:
            return collector.finalize(self.state)
        return None

    def play(
        self,
        max_ticks: int | None = None,
        *,
        sleep: Callable[[float], Any] = time.sleep,
    ) -> int:
        """
        Auto-play: one tick every ``tick_interval`` seconds.

        Stops automatically the tick a crisis becomes active, after
        *max_ticks* ticks, or when `stop` is called (e.g. from another
        thread). Does not start at all while a crisis is already active.
        Returns the number of ticks played.
        """
        with self._lock:
            if self.state.in_crisis:
                return 0
            self.auto_play = True
        played = 0
        try:
            while self.auto_play and (max_ticks is None or played < max_ticks):
                sleep(self.tick_interval)
                if not self.auto_play:
                    break
                state = self.step()
                played += 1
                if state.in_crisis:
                    log.info(
                        f"Auto-play stopped at tick {state.time}: crisis '{state.crisis}'"
                    )
                    break
        finally:
            self.auto_play = False
        return played

    def stop(self) -> None:
        """Stop auto-play after the current tick."""
        self.auto_play = False
