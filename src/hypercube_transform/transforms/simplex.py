"""Stick-breaking transform for Dirichlet distributions.

A Dirichlet draw over K categories lives on the simplex, so only K-1 of
its coordinates are free. The forward map breaks a unit stick: component
i takes a Beta(alpha_i, alpha_{i+1} + ... + alpha_K) distributed fraction
of the mass left by components 1..i-1, and the last component takes
whatever remains. With i.i.d. uniform coordinates this reproduces the
Dirichlet distribution exactly.
"""

import logging
from dataclasses import dataclass, field
from typing import Any, Dict, Tuple

import numpy as np
from scipy import stats

from ..constants import SIMPLEX_SUM_TOL
from ..errors import DegenerateSimplexInput, DimensionMismatch
from .base import HypercubeTransform

logger = logging.getLogger(__name__)


@dataclass(frozen=True, eq=False)
class SimplexTransform(HypercubeTransform):
    """Transform over a Dirichlet distribution (dimension K - 1).

    Attributes:
        dist: Frozen ``scipy.stats.dirichlet`` distribution
        alpha: Concentration parameters, length K
    """
    dist: Any
    alpha: np.ndarray = field(init=False)
    _tail: np.ndarray = field(init=False, repr=False)

    def __post_init__(self):
        """Read concentrations and precompute the Beta tail sums."""
        alpha = np.asarray(self.dist.alpha)
        if alpha.ndim != 1 or alpha.size < 2:
            raise ValueError(
                f"Simplex transform needs a 1-D concentration vector with at least "
                f"2 entries, got shape {alpha.shape}"
            )
        # _tail[i] = alpha[i+1] + ... + alpha[K-1]
        tail = np.cumsum(alpha[::-1])[::-1][1:]
        object.__setattr__(self, "alpha", alpha)
        object.__setattr__(self, "_tail", tail)

    @property
    def dimension(self) -> int:
        return self.alpha.size - 1

    def _conditional(self, i: int):
        """Beta distribution of the fraction of remaining mass taken by component i."""
        return stats.beta(self.alpha[i], self._tail[i])

    def _step_forward(self, coords: np.ndarray, index: int) -> Tuple[Any, int]:
        k = self.alpha.size
        dtype = np.result_type(coords.dtype, self.alpha.dtype)
        out = np.zeros(k, dtype=dtype)

        for i in range(k - 1):
            # Remaining mass from the entries already written, not from coords
            remaining = max(1 - out[:i].sum(), 0)
            phi = self._conditional(i).ppf(coords[index + i])
            out[i] = remaining * phi

        out[k - 1] = max(1 - out[: k - 1].sum(), 0)
        return out, index + k - 1

    def _step_inverse(self, value: Any, out: np.ndarray, index: int) -> int:
        k = self.alpha.size
        y = np.ravel(np.asarray(value))
        if y.size != k:
            raise DimensionMismatch(f"Expected simplex value of length {k}, got {y.size}")
        total = float(y.sum())
        if abs(total - 1.0) > SIMPLEX_SUM_TOL:
            logger.warning(f"Simplex value sums to {total}, not 1; its last component is ignored")

        ysum = 0.0
        for i in range(k - 1):
            remaining = 1 - ysum
            if remaining <= 0:
                raise DegenerateSimplexInput(
                    f"Simplex value exhausts its mass before component {i} "
                    f"(prefix sum {ysum}); the inverse is undefined"
                )
            out[index + i] = self._conditional(i).cdf(y[i] / remaining)
            ysum += y[i]
        return index + k - 1

    def to_dict(self) -> Dict[str, Any]:
        return {
            "kind": "simplex",
            "dimension": self.dimension,
            "distribution": "dirichlet",
            "alpha": self.alpha.tolist(),
        }

    def __repr__(self) -> str:
        return f"SimplexTransform(alpha={self.alpha.tolist()})"
