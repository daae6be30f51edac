"""
Type aliases for Currency Crisis Lab.

Provides the scalar/callable aliases used by the engine (Regime,
UniformRng) and the array aliases used by the results container
(Float1D, Bool1D).

Examples
--------
>>> from crisislab.typing import UniformRng
>>> import numpy as np
>>> rng: UniformRng = np.random.default_rng(42).random
>>> 0.0 <= rng() < 1.0
True
"""

from collections.abc import Callable
from typing import Literal, TypeAlias

import numpy as np
from numpy.typing import NDArray

# === Engine aliases ===

Regime: TypeAlias = Literal["peg", "float"]
"""Exchange-rate regime label."""

UniformRng: TypeAlias = Callable[[], float]
"""Zero-argument callable returning a uniform float in [0, 1)."""

# === Array aliases (time series) ===

Float1D: TypeAlias = NDArray[np.float64]
Int1D: TypeAlias = NDArray[np.int64]
Bool1D: TypeAlias = NDArray[np.bool_]

__all__ = [
    "Regime",
    "UniformRng",
    "Float1D",
    "Int1D",
    "Bool1D",
]
