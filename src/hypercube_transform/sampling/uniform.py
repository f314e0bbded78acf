"""Plain Monte Carlo sampling from i.i.d. uniform hypercube points."""

from typing import Any, Optional

import numpy as np

from .base import SamplingStrategy


class UniformSampler(SamplingStrategy):
    """Independent uniform points pushed through the transform.

    With i.i.d. uniform coordinates the forward transform yields exact
    draws from the wrapped distribution.
    """

    def __init__(self, transform: Any, seed: Optional[int] = None):
        super().__init__(transform)
        self.seed = seed
        self._rng = np.random.default_rng(seed)

    def unit_points(self, n_samples: int) -> np.ndarray:
        return self._rng.random((n_samples, self.dimension))

    def method_name(self) -> str:
        return "uniform"
