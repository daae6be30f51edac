"""Pytest configuration for the Hypothesis suites.

Every test collected here checks engine invariants over generated states
and is marked ``invariants`` so ``nox -s tests_quick`` can skip it.
"""

from pathlib import Path

import pytest

HERE = Path(__file__).parent


def pytest_collection_modifyitems(items: list[pytest.Item]) -> None:
    for item in items:
        if HERE in Path(str(item.fspath)).parents:
            item.add_marker(pytest.mark.invariants)
