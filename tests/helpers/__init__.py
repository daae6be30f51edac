# tests/helpers/__init__.py

from tests.helpers.fixed_rng import FixedRNG, park_miller
