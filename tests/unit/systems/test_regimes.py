# tests/unit/systems/test_regimes.py
"""
Regime-mechanics unit tests (peg defense, float adjustment).
"""

from __future__ import annotations

import pytest
from hypothesis import given
from hypothesis import strategies as st

from crisislab.config import Config
from crisislab.systems.regimes import adjust_float, defend_peg
from tests.helpers.fixed_rng import FixedRNG
from tests.helpers.factories import mock_config

CFG = Config.default()


class TestDefendPeg:
    def test_positive_pressure_costs_reserves(self) -> None:
        reserves, rate = defend_peg(500.0, 10.0, rng=FixedRNG(0.5), cfg=CFG)
        # cost = 10 * 2.2 = 22, 65 % paid from reserves
        assert reserves == pytest.approx(500.0 - 22.0 * 0.65)
        # drift = 10 * 0.9, noise = 0.5 * 2 - 1 = 0
        assert rate == pytest.approx(109.0)

    def test_negative_pressure_never_replenishes(self) -> None:
        reserves, rate = defend_peg(500.0, -5.0, rng=FixedRNG(0.5), cfg=CFG)
        assert reserves == 500.0
        assert rate == pytest.approx(95.5)

    def test_drift_band(self) -> None:
        _, high = defend_peg(500.0, 100.0, rng=FixedRNG(0.0), cfg=CFG)
        _, low = defend_peg(500.0, -100.0, rng=FixedRNG(0.0), cfg=CFG)
        assert high == pytest.approx(100.0 + 18.0 - 1.0)
        assert low == pytest.approx(100.0 - 12.0 - 1.0)

    def test_reserves_floor_at_zero(self) -> None:
        reserves, _ = defend_peg(10.0, 100.0, rng=FixedRNG(0.5), cfg=CFG)
        assert reserves == 0.0

    def test_one_draw(self) -> None:
        rng = FixedRNG([0.3, 0.7])
        defend_peg(500.0, 1.0, rng=rng, cfg=CFG)
        assert rng.calls == 1

    def test_noise_width_from_config(self) -> None:
        _, rate = defend_peg(
            500.0, 0.0, rng=FixedRNG(0.0), cfg=mock_config(peg_noise=3.0)
        )
        assert rate == pytest.approx(97.0)

    @given(
        pressure=st.floats(min_value=-1e3, max_value=1e3),
        u=st.floats(min_value=0.0, max_value=0.999999),
    )
    def test_rate_stays_in_band(self, pressure: float, u: float) -> None:
        _, rate = defend_peg(500.0, pressure, rng=FixedRNG(u), cfg=CFG)
        assert 87.0 <= rate < 119.0


class TestAdjustFloat:
    def test_small_move_keeps_confidence(self) -> None:
        rate, confidence = adjust_float(100.0, 50.0, 2.0, rng=FixedRNG(0.5), cfg=CFG)
        assert rate == pytest.approx(102.2)
        assert confidence == 50.0

    def test_large_move_erodes_confidence(self) -> None:
        rate, confidence = adjust_float(100.0, 50.0, 10.0, rng=FixedRNG(0.5), cfg=CFG)
        assert rate == pytest.approx(111.0)
        assert confidence == pytest.approx(48.5)

    def test_large_appreciation_also_erodes_confidence(self) -> None:
        _, confidence = adjust_float(100.0, 50.0, -10.0, rng=FixedRNG(0.5), cfg=CFG)
        assert confidence == pytest.approx(48.5)

    def test_move_capped(self) -> None:
        rate, _ = adjust_float(100.0, 50.0, 1e6, rng=FixedRNG(0.5), cfg=CFG)
        assert rate == pytest.approx(120.0)
        rate, _ = adjust_float(100.0, 50.0, -1e6, rng=FixedRNG(0.5), cfg=CFG)
        assert rate == pytest.approx(82.0)

    def test_rate_hard_bounds(self) -> None:
        rate, _ = adjust_float(395.0, 50.0, 100.0, rng=FixedRNG(0.9), cfg=CFG)
        assert rate == 400.0
        rate, _ = adjust_float(45.0, 50.0, -100.0, rng=FixedRNG(0.1), cfg=CFG)
        assert rate == 40.0

    def test_confidence_penalty_floor(self) -> None:
        _, confidence = adjust_float(100.0, 1.0, 50.0, rng=FixedRNG(0.5), cfg=CFG)
        assert confidence == 0.0
