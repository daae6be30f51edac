# src/crisislab/state.py
"""
Simulation state record and the helpers that build new states from old ones.

A `SimulationState` is never mutated: every tick and every manual edit
returns a fresh value, so any driver can keep earlier snapshots around
safely.
"""

from __future__ import annotations

from collections import deque
from dataclasses import asdict, dataclass, replace
from typing import Any, Mapping, NamedTuple

from crisislab.narration import WELCOME
from crisislab.typing import Regime

__all__ = [
    "PEG",
    "FLOAT",
    "MAX_LOGS",
    "Range",
    "RESERVES_RANGE",
    "DEBT_RANGE",
    "INTEREST_RATE_RANGE",
    "GLOBAL_RATE_RANGE",
    "CONFIDENCE_RANGE",
    "LogEntry",
    "SimulationState",
    "clamp",
    "append_log",
    "with_status",
    "create_initial_state",
]

PEG: Regime = "peg"
FLOAT: Regime = "float"
REGIMES: tuple[Regime, ...] = (PEG, FLOAT)

MAX_LOGS = 12


class Range(NamedTuple):
    """Closed numeric interval ``[min, max]``."""

    min: float
    max: float


RESERVES_RANGE = Range(0.0, 800.0)
DEBT_RANGE = Range(50.0, 700.0)
INTEREST_RATE_RANGE = Range(0.0, 25.0)
GLOBAL_RATE_RANGE = Range(0.0, 15.0)
CONFIDENCE_RANGE = Range(0.0, 100.0)


def clamp(value: float, lo: float, hi: float) -> float:
    """Restrict *value* to ``[lo, hi]``."""
    return min(hi, max(lo, value))


@dataclass(slots=True, frozen=True)
class LogEntry:
    """One line of the market log."""

    id: int
    message: str


@dataclass(slots=True, frozen=True)
class SimulationState:
    """
    Immutable snapshot of the economy plus simulation bookkeeping.

    Attributes
    ----------
    time : int
        Ticks elapsed (+1 per engine step).
    exchange_rate : float
        Domestic-currency price of one unit of foreign currency.
    reserves : float
        Foreign-currency reserves, billions, within ``RESERVES_RANGE``.
    foreign_debt_usd : float
        Foreign-currency debt, billions. Clamped to ``DEBT_RANGE`` by the
        manual setter only.
    investor_confidence : float
        Sentiment index within ``CONFIDENCE_RANGE``.
    interest_rate : float
        Domestic policy rate (%).
    global_interest_rate : float
        Reference foreign policy rate (%).
    capital_controls : bool
        Whether outflows are administratively dampened.
    regime : {"peg", "float"}
        Current exchange-rate regime.
    preferred_regime : {"peg", "float"}
        Regime last chosen by the user; restored when a crisis clears.
    status : str
        Narration of the last transition, always ``logs[-1].message``.
    logs : tuple of LogEntry
        Bounded market log (at most ``MAX_LOGS`` entries, oldest first).
    log_counter : int
        Id assigned to the next log entry.
    crisis : str or None
        Active crisis label.
    """

    time: int
    exchange_rate: float
    reserves: float
    foreign_debt_usd: float
    investor_confidence: float
    interest_rate: float
    global_interest_rate: float
    capital_controls: bool
    regime: Regime
    preferred_regime: Regime
    status: str
    logs: tuple[LogEntry, ...]
    log_counter: int
    crisis: str | None = None

    @property
    def in_crisis(self) -> bool:
        return self.crisis is not None

    def to_dict(self) -> dict[str, Any]:
        """Plain-dict view (logs as a list of ``{"id", "message"}`` dicts)."""
        data = asdict(self)
        data["logs"] = [{"id": e.id, "message": e.message} for e in self.logs]
        return data


def append_log(
    logs: tuple[LogEntry, ...],
    message: str,
    id: int,
    *,
    capacity: int = MAX_LOGS,
) -> tuple[LogEntry, ...]:
    """
    Return *logs* with ``LogEntry(id, message)`` appended.

    The log is a fixed-capacity queue: once *capacity* is exceeded the
    oldest entries are dropped. The input tuple is left untouched.
    """
    buf: deque[LogEntry] = deque(logs, maxlen=capacity)
    buf.append(LogEntry(id=id, message=message))
    return tuple(buf)


def with_status(
    state: SimulationState,
    updates: Mapping[str, Any],
    status: str,
) -> SimulationState:
    """
    Merge *updates* into *state* and narrate the change.

    The new log entry takes the current ``log_counter`` as its id and the
    counter is advanced by one. This is the one sanctioned way for callers
    to apply manual edits so that the log stays consistent with engine
    ticks. Bookkeeping keys in *updates* (``status``, ``logs``,
    ``log_counter``) are overridden, so a full snapshot may be passed.

    Raises
    ------
    TypeError
        If *updates* names a field that ``SimulationState`` does not have.
    """
    entry_id = state.log_counter
    merged = {
        **updates,
        "status": status,
        "log_counter": entry_id + 1,
        "logs": append_log(state.logs, status, entry_id),
    }
    return replace(state, **merged)


def create_initial_state() -> SimulationState:
    """Canonical starting state of a session."""
    return SimulationState(
        time=0,
        exchange_rate=100.0,
        reserves=500.0,
        foreign_debt_usd=200.0,
        investor_confidence=80.0,
        interest_rate=5.0,
        global_interest_rate=4.0,
        capital_controls=False,
        regime=PEG,
        preferred_regime=PEG,
        status=WELCOME,
        logs=(LogEntry(id=0, message=WELCOME),),
        log_counter=1,
        crisis=None,
    )
