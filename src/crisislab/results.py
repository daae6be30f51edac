"""
Simulation results container for Currency Crisis Lab.

This module provides the SimulationResults class that holds the per-tick
indicator series of one `Simulation.run(collect=True)` call and offers
summary statistics and export to a pandas DataFrame.

Note: pandas is an optional dependency. It is only required for
`to_dataframe`. Install with: pip install currency-crisis-lab[pandas]
"""

from __future__ import annotations

from collections import defaultdict
from dataclasses import dataclass, field
from typing import TYPE_CHECKING, Any

import numpy as np

from crisislab.state import SimulationState
from crisislab.typing import Bool1D, Float1D, Int1D

if TYPE_CHECKING:  # pragma: no cover
    from pandas import DataFrame


def _import_pandas() -> Any:
    """
    Lazily import pandas with helpful error message if not installed.

    Raises
    ------
    ImportError
        If pandas is not installed.
    """
    try:
        import pandas as pd

        return pd
    except ImportError:  # pragma: no cover
        raise ImportError(
            "pandas is required for DataFrame export. "
            "Install it with: pip install pandas"
        ) from None


class _DataCollector:
    """
    Internal helper that snapshots indicators after every tick.

    Used by Simulation.run() when ``collect=True``.
    """

    INDICATORS = (
        "exchange_rate",
        "reserves",
        "foreign_debt_usd",
        "investor_confidence",
        "interest_rate",
        "global_interest_rate",
    )

    def __init__(self) -> None:
        self.series: dict[str, list[float]] = defaultdict(list)
        self.time: list[int] = []
        self.in_crisis: list[bool] = []
        self.regime: list[str] = []
        self.status: list[str] = []

    def capture(self, state: SimulationState) -> None:
        self.time.append(state.time)
        for name in self.INDICATORS:
            self.series[name].append(float(getattr(state, name)))
        self.in_crisis.append(state.in_crisis)
        self.regime.append(state.regime)
        self.status.append(state.status)

    def finalize(self, final_state: SimulationState) -> SimulationResults:
        return SimulationResults(
            time=np.asarray(self.time, dtype=np.int64),
            series={
                name: np.asarray(self.series[name], dtype=np.float64)
                for name in self.INDICATORS
            },
            in_crisis=np.asarray(self.in_crisis, dtype=np.bool_),
            regime=list(self.regime),
            status=list(self.status),
            final_state=final_state,
        )


@dataclass(slots=True)
class SimulationResults:
    """
    Per-tick indicator series of one run.

    Attributes
    ----------
    time : Int1D
        Tick number of each snapshot.
    series : dict[str, Float1D]
        Indicator name → values, one per tick.
    in_crisis : Bool1D
        Whether a crisis was active after each tick.
    regime : list[str]
        Regime after each tick.
    status : list[str]
        Narration of each tick.
    final_state : SimulationState
        State after the last tick.

    Examples
    --------
    >>> import crisislab as cl
    >>> sim = cl.Simulation.init(seed=42)
    >>> results = sim.run(n_periods=20, collect=True)
    >>> results.get_array("exchange_rate").shape
    (20,)
    >>> results.crisis_onset is None or results.crisis_onset <= 20
    True
    """

    time: Int1D
    series: dict[str, Float1D] = field(default_factory=dict)
    in_crisis: Bool1D = field(default_factory=lambda: np.empty(0, np.bool_))
    regime: list[str] = field(default_factory=list)
    status: list[str] = field(default_factory=list)
    final_state: SimulationState | None = None

    def __len__(self) -> int:
        return int(self.time.size)

    def get_array(self, name: str) -> Float1D:
        """
        Return the series for indicator *name*.

        Raises
        ------
        KeyError
            If *name* is not a collected indicator.
        """
        try:
            return self.series[name]
        except KeyError:
            raise KeyError(
                f"Indicator '{name}' not collected. "
                f"Available: {sorted(self.series)}"
            ) from None

    @property
    def crisis_onset(self) -> int | None:
        """First tick at which a crisis was active, or None."""
        hits = np.flatnonzero(self.in_crisis)
        if hits.size == 0:
            return None
        return int(self.time[hits[0]])

    def summary(self) -> dict[str, dict[str, float]]:
        """Min / max / final value of every indicator."""
        out: dict[str, dict[str, float]] = {}
        for name, values in self.series.items():
            if values.size == 0:
                continue
            out[name] = {
                "min": float(values.min()),
                "max": float(values.max()),
                "final": float(values[-1]),
            }
        return out

    def to_dataframe(self) -> DataFrame:
        """
        Export the run as a DataFrame indexed by tick.

        Columns: every indicator, ``in_crisis``, ``regime`` and ``status``.
        """
        pd = _import_pandas()
        data: dict[str, Any] = {name: values for name, values in self.series.items()}
        data["in_crisis"] = self.in_crisis
        data["regime"] = self.regime
        data["status"] = self.status
        return pd.DataFrame(data, index=pd.Index(self.time, name="time"))

    def __repr__(self) -> str:
        onset = self.crisis_onset
        return (
            f"SimulationResults(n_ticks={len(self)}, "
            f"crisis_onset={onset if onset is not None else 'none'})"
        )
