# tests/__init__.py

from tests.helpers.factories import mock_config, mock_state
from tests.helpers.invariants import assert_state_invariants

__all__ = [
    "mock_state",
    "mock_config",
    "assert_state_invariants",
]
