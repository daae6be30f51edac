"""Tests for manual policy levers and shocks."""

from __future__ import annotations

import pytest

from crisislab import narration, policy
from crisislab.state import FLOAT, PEG, create_initial_state
from tests.helpers.factories import mock_state
from tests.helpers.invariants import assert_state_invariants


def _assert_manual_edit(before, after):
    """Manual edits never tick, and always narrate exactly once."""
    assert after.time == before.time
    assert after.log_counter == before.log_counter + 1
    assert after.logs[-1].id == before.log_counter
    assert_state_invariants(after)


class TestInterestRate:
    def test_raise(self, initial_state):
        s = policy.raise_interest_rate(initial_state)
        assert s.interest_rate == 5.5
        assert s.status == narration.RATE_RAISED
        _assert_manual_edit(initial_state, s)

    def test_lower(self, initial_state):
        s = policy.lower_interest_rate(initial_state)
        assert s.interest_rate == 4.5
        assert s.status == narration.RATE_LOWERED

    @pytest.mark.parametrize(
        "start, delta, expected",
        [(25.0, 0.5, 25.0), (0.0, -0.5, 0.0), (24.8, 0.5, 25.0)],
    )
    def test_clamped(self, start, delta, expected):
        s = policy.nudge_interest_rate(mock_state(interest_rate=start), delta)
        assert s.interest_rate == expected


class TestShocks:
    def test_global_rate_hike(self, initial_state):
        s = policy.apply_shock(initial_state, "global_rate")
        assert s.global_interest_rate == pytest.approx(5.8)
        assert s.status == narration.SHOCK_GLOBAL_RATE
        _assert_manual_edit(initial_state, s)

    def test_global_rate_capped(self):
        s = policy.apply_shock(mock_state(global_interest_rate=14.0), "global_rate")
        assert s.global_interest_rate == 15.0

    def test_panic(self, initial_state):
        s = policy.apply_shock(initial_state, "panic")
        assert s.investor_confidence == 62.0
        assert s.status == narration.SHOCK_PANIC

    def test_panic_floor(self):
        s = policy.apply_shock(mock_state(investor_confidence=10.0), "panic")
        assert s.investor_confidence == 0.0

    def test_reserves_shock(self, initial_state):
        s = policy.apply_shock(initial_state, "reserves")
        assert s.reserves == 450.0
        assert s.status == narration.SHOCK_RESERVES

    def test_reserves_shock_floor(self):
        s = policy.apply_shock(mock_state(reserves=20.0), "reserves")
        assert s.reserves == 0.0

    def test_unknown_shock(self, initial_state):
        with pytest.raises(ValueError, match="Unknown shock"):
            policy.apply_shock(initial_state, "meteor")  # type: ignore[arg-type]

    def test_shock_does_not_trigger_crisis(self):
        """Crisis logic only runs inside the engine."""
        s = policy.apply_shock(mock_state(reserves=60.0), "reserves")
        assert s.reserves == 10.0
        assert s.crisis is None


class TestToggles:
    def test_regime_round_trip(self, initial_state):
        floated = policy.toggle_regime(initial_state)
        assert floated.regime == FLOAT
        assert floated.preferred_regime == FLOAT
        assert floated.status == narration.REGIME_TO_FLOAT

        pegged = policy.toggle_regime(floated)
        assert pegged.regime == PEG
        assert pegged.preferred_regime == PEG
        assert pegged.status == narration.REGIME_TO_PEG
        _assert_manual_edit(floated, pegged)

    def test_capital_controls(self, initial_state):
        on = policy.toggle_capital_controls(initial_state)
        assert on.capital_controls is True
        assert on.status == narration.CONTROLS_ON

        off = policy.toggle_capital_controls(on)
        assert off.capital_controls is False
        assert off.status == narration.CONTROLS_OFF


class TestDirectSet:
    def test_reserves_increase(self, initial_state):
        s = policy.set_reserves(initial_state, 525.0)
        assert s.reserves == 525.0
        assert s.status == "外貨準備を積み増しました（525 億$）。"

    def test_reserves_decrease_clamped(self, initial_state):
        s = policy.set_reserves(initial_state, -40.0)
        assert s.reserves == 0.0
        assert s.status == "外貨準備を取り崩しました（0 億$）。"

    def test_reserves_upper_bound(self, initial_state):
        assert policy.set_reserves(initial_state, 5000.0).reserves == 800.0

    def test_reserves_override_message(self, initial_state):
        s = policy.set_reserves(initial_state, 510.0, "custom")
        assert s.status == "custom"

    def test_debt_increase(self, initial_state):
        s = policy.set_foreign_debt(initial_state, 1234.5)
        assert s.foreign_debt_usd == 700.0
        assert s.status == "外貨建て債務が積み上がっています（700 億$）。"

    def test_debt_decrease_clamped(self, initial_state):
        s = policy.set_foreign_debt(initial_state, 10.0)
        assert s.foreign_debt_usd == 50.0
        assert s.status == "外貨建て債務が圧縮しました（50 億$）。"

    def test_accumulate_reserves(self, initial_state):
        s = policy.accumulate_reserves(initial_state)
        assert s.reserves == 560.0
        assert s.status == narration.RESERVES_ACCUMULATED

    def test_refinance_debt(self, initial_state):
        s = policy.refinance_debt(initial_state)
        assert s.foreign_debt_usd == 165.0
        assert s.status == narration.DEBT_REFINANCED


class TestMisc:
    def test_observe_market(self, initial_state):
        s = policy.observe_market(initial_state)
        assert s.status == narration.MARKET_WATCH
        assert s.reserves == initial_state.reserves
        _assert_manual_edit(initial_state, s)

    def test_reset(self):
        s = policy.apply_shock(create_initial_state(), "panic")
        assert policy.reset() == create_initial_state()
        assert s != policy.reset()


@pytest.mark.parametrize(
    "value, text",
    [(500.0, "500"), (1234.0, "1,234"), (93.84, "93.8"), (0.04, "0"), (12.25, "12.2")],
)
def test_format_number(value, text):
    assert narration.format_number(value) == text
