"""Tests for the state record and its constructors."""

from __future__ import annotations

import dataclasses

import pytest

from crisislab import narration
from crisislab.state import (
    DEBT_RANGE,
    MAX_LOGS,
    RESERVES_RANGE,
    LogEntry,
    append_log,
    clamp,
    create_initial_state,
    with_status,
)
from tests.helpers.invariants import assert_state_invariants


class TestClamp:
    @pytest.mark.parametrize(
        "value, expected",
        [(-5.0, 0.0), (0.0, 0.0), (3.3, 3.3), (10.0, 10.0), (12.0, 10.0)],
        ids=["below", "at_min", "inside", "at_max", "above"],
    )
    def test_clamp(self, value, expected):
        assert clamp(value, 0.0, 10.0) == expected

    def test_negative_interval(self):
        assert clamp(-20.0, -12.0, 18.0) == -12.0


class TestRanges:
    def test_named_ranges(self):
        assert tuple(RESERVES_RANGE) == (0.0, 800.0)
        assert tuple(DEBT_RANGE) == (50.0, 700.0)
        assert RESERVES_RANGE.max == 800.0
        assert DEBT_RANGE.min == 50.0


class TestInitialState:
    def test_canonical_values(self, initial_state):
        s = initial_state
        assert s.time == 0
        assert s.exchange_rate == 100
        assert s.reserves == 500
        assert s.foreign_debt_usd == 200
        assert s.investor_confidence == 80
        assert s.interest_rate == 5
        assert s.global_interest_rate == 4
        assert s.capital_controls is False
        assert s.regime == "peg"
        assert s.preferred_regime == "peg"
        assert s.crisis is None
        assert s.log_counter == 1

    def test_seed_log_entry(self, initial_state):
        assert initial_state.logs == (LogEntry(0, narration.WELCOME),)
        assert initial_state.status == narration.WELCOME

    def test_satisfies_invariants(self, initial_state):
        assert_state_invariants(initial_state)

    def test_fresh_value_each_call(self):
        assert create_initial_state() == create_initial_state()
        assert create_initial_state() is not create_initial_state()

    def test_state_is_frozen(self, initial_state):
        with pytest.raises(dataclasses.FrozenInstanceError):
            initial_state.reserves = 1.0  # type: ignore[misc]

    def test_to_dict(self, initial_state):
        d = initial_state.to_dict()
        assert d["reserves"] == 500
        assert d["logs"] == [{"id": 0, "message": narration.WELCOME}]
        assert d["crisis"] is None


class TestAppendLog:
    def test_appends_entry(self):
        logs = (LogEntry(0, "a"),)
        out = append_log(logs, "b", 1)
        assert out == (LogEntry(0, "a"), LogEntry(1, "b"))

    def test_does_not_mutate_input(self):
        logs = (LogEntry(0, "a"),)
        append_log(logs, "b", 1)
        assert logs == (LogEntry(0, "a"),)

    def test_drops_oldest_beyond_capacity(self):
        logs = tuple(LogEntry(i, f"m{i}") for i in range(MAX_LOGS))
        out = append_log(logs, "new", MAX_LOGS)
        assert len(out) == MAX_LOGS
        assert out[0].id == 1
        assert out[-1] == LogEntry(MAX_LOGS, "new")

    def test_custom_capacity(self):
        logs = (LogEntry(0, "a"), LogEntry(1, "b"))
        out = append_log(logs, "c", 2, capacity=2)
        assert [e.id for e in out] == [1, 2]

    def test_many_appends_stay_bounded(self):
        logs: tuple[LogEntry, ...] = ()
        for i in range(100):
            logs = append_log(logs, str(i), i)
            assert len(logs) <= MAX_LOGS
        assert [e.id for e in logs] == list(range(100 - MAX_LOGS, 100))


class TestWithStatus:
    def test_merges_updates_and_narrates(self, initial_state):
        nxt = with_status(initial_state, {"reserves": 420.0}, "edited")
        assert nxt.reserves == 420.0
        assert nxt.status == "edited"
        assert nxt.logs[-1] == LogEntry(1, "edited")
        assert nxt.log_counter == 2
        assert_state_invariants(nxt)

    def test_does_not_advance_time(self, initial_state):
        assert with_status(initial_state, {}, "x").time == initial_state.time

    def test_input_untouched(self, initial_state):
        with_status(initial_state, {"reserves": 1.0}, "x")
        assert initial_state.reserves == 500
        assert len(initial_state.logs) == 1

    def test_bookkeeping_keys_in_updates_overridden(self, initial_state):
        updates = {
            "reserves": 450.0,
            "status": "old",
            "log_counter": 99,
            "logs": (),
        }
        nxt = with_status(initial_state, updates, "new")

        assert nxt.reserves == 450.0
        assert nxt.status == "new"
        assert nxt.log_counter == 2
        assert nxt.logs[-1] == LogEntry(1, "new")
        assert_state_invariants(nxt)

    def test_full_snapshot_as_updates(self, initial_state):
        snapshot = dataclasses.asdict(initial_state)
        snapshot["logs"] = initial_state.logs
        snapshot["reserves"] = 450.0
        nxt = with_status(initial_state, snapshot, "shock")

        assert nxt.reserves == 450.0
        assert nxt.logs[-1] == LogEntry(initial_state.log_counter, "shock")
        assert_state_invariants(nxt)

    def test_unknown_field_rejected(self, initial_state):
        with pytest.raises(TypeError):
            with_status(initial_state, {"not_a_field": 1}, "x")

    def test_log_stays_bounded(self, initial_state):
        s = initial_state
        for i in range(30):
            s = with_status(s, {}, f"edit {i}")
        assert len(s.logs) == MAX_LOGS
        assert s.logs[-1].id == 30
        assert s.log_counter == 31
        assert_state_invariants(s)
