"""Command‑line runner for Currency Crisis Lab."""

from __future__ import annotations

import argparse
import logging
from typing import Any, Sequence

from crisislab import policy
from crisislab.narration import format_number
from crisislab.simulation import Simulation


def _cli(argv: Sequence[str] | None = None) -> argparse.Namespace:
    p = argparse.ArgumentParser(description="Run a headless currency-crisis session.")
    p.add_argument("--steps", type=int, default=None, help="Ticks to simulate")
    p.add_argument("--seed", type=int, default=None, help="RNG seed")
    p.add_argument("--config", type=str, default=None, help="YAML config file")
    p.add_argument(
        "--regime", choices=("peg", "float"), default=None, help="Starting regime"
    )
    p.add_argument(
        "--controls", action="store_true", help="Start with capital controls on"
    )
    p.add_argument("--rate", type=float, default=None, help="Starting policy rate (%%)")
    p.add_argument(
        "--stop-on-crisis", action="store_true", help="Stop at the first crisis"
    )
    p.add_argument(
        "--log-level",
        default="INFO",
        choices=("DEEP_DEBUG", "DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"),
        help="Log level for crisislab loggers",
    )
    return p.parse_args(argv)


def main(argv: Sequence[str] | None = None) -> int:
    args = _cli(argv)

    # handlers and format come from crisislab.logging
    log = logging.getLogger(__name__)

    overrides: dict[str, Any] = {"logging": {"default_level": args.log_level}}
    if args.seed is not None:
        overrides["seed"] = args.seed
    if args.steps is not None:
        overrides["n_periods"] = args.steps
    initial: dict[str, Any] = {}
    if args.regime is not None:
        initial["regime"] = args.regime
    if args.rate is not None:
        initial["interest_rate"] = args.rate
    if initial:
        overrides["initial_state"] = initial

    sim = Simulation.init(config=args.config, **overrides)
    if args.controls:
        sim.apply(policy.toggle_capital_controls)

    for _ in range(sim.n_periods):
        s = sim.step()
        log.info(
            "t=%3d  %-5s  rate=%7s  reserves=%6s  confidence=%5s  %s",
            s.time,
            s.regime,
            format_number(s.exchange_rate),
            format_number(s.reserves),
            format_number(s.investor_confidence),
            s.status,
        )
        if args.stop_on_crisis and s.in_crisis:
            break

    final = sim.state
    log.info(
        "Finished after %d ticks. Crisis: %s. Regime: %s.",
        final.time,
        final.crisis or "none",
        final.regime,
    )
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
