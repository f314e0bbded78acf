"""Quasi-random hypercube samplers (Sobol and Latin hypercube)."""

from typing import Any, Optional

import numpy as np
from scipy.stats import qmc

from ..constants import DEFAULT_SOBOL_SCRAMBLE
from .base import SamplingStrategy


class SobolSampler(SamplingStrategy):
    """Sobol sequence quasi-random sampling.

    Generates low-discrepancy Sobol sequences that provide better
    space-filling properties than random sampling, especially useful
    for sensitivity analysis and efficient prior exploration.
    """

    def __init__(self, transform: Any, scramble: bool = DEFAULT_SOBOL_SCRAMBLE, seed: Optional[int] = None):
        """Initialize Sobol sampler.

        Args:
            transform: The transform (or distribution) to sample through
            scramble: Whether to scramble the sequence (adds randomization)
            seed: Random seed for scrambling
        """
        super().__init__(transform)
        self.scramble = scramble
        self.seed = seed

    def unit_points(self, n_samples: int) -> np.ndarray:
        """Generate Sobol points in [0,1]^d.

        Unscrambled Sobol sequences start at the origin, where most quantile
        functions diverge; the first point is therefore skipped when
        scrambling is off.
        """
        sampler = qmc.Sobol(d=self.dimension, scramble=self.scramble, seed=self.seed)
        if not self.scramble:
            sampler.fast_forward(1)
        return sampler.random(n_samples)

    def method_name(self) -> str:
        """Return the name of this sampling method."""
        return "sobol"

    def estimate_convergence(self, n_samples: int, variation: float = 1.0) -> float:
        """Koksma-Hlawka bound on the error of a Sobol average.

        For a function f of the transformed value, the mean of f over
        ``sample(n_samples)`` differs from its expectation under the
        distribution by at most V(f o forward) * D*, with D* of order
        (log N)^d / N. Here d is the transform's hypercube dimension, so
        a K-category simplex counts K - 1 and composites sum their parts.

        V is the Hardy-Krause variation of f composed with the forward
        map. It is infinite when f grows along an unbounded support (the
        quantile diverges at the cube faces), in which case the bound says
        nothing.

        Args:
            n_samples: Number of samples
            variation: Variation of f o forward; 1.0 gives the bare
                discrepancy rate

        Returns:
            Estimated error bound
        """
        if variation < 0:
            raise ValueError(f"Variation must be non-negative, got {variation}")
        if n_samples <= 1:
            return float(variation)
        return variation * (np.log(n_samples) ** self.dimension) / n_samples


class LatinHypercubeSampler(SamplingStrategy):
    """Latin hypercube sampling.

    Each axis is split into ``n_samples`` equal strata and every stratum
    receives exactly one point.
    """

    def __init__(self, transform: Any, seed: Optional[int] = None):
        super().__init__(transform)
        self.seed = seed

    def unit_points(self, n_samples: int) -> np.ndarray:
        sampler = qmc.LatinHypercube(d=self.dimension, seed=self.seed)
        return sampler.random(n_samples)

    def method_name(self) -> str:
        return "latin_hypercube"
