"""Scalar leaf transform.

The leaf is where values are produced: a registered rule if one exists
for the distribution's type, otherwise the distribution's own quantile
(``ppf``) forward and ``cdf`` inverse.
"""

from dataclasses import dataclass
from typing import Any, Dict, Tuple

import numpy as np

from ..capabilities import Capability, cdf_capability, quantile_capability
from ..distributions import describe_distribution, distribution_name
from ..errors import DimensionMismatch, UnsupportedDistribution
from ..registry import get_rule
from .base import HypercubeTransform


@dataclass(frozen=True)
class ScalarTransform(HypercubeTransform):
    """Transform over a single univariate distribution (dimension 1).

    Attributes:
        dist: The wrapped distribution

    Example:
        >>> t = ScalarTransform(stats.norm(0, 1))
        >>> t.forward([0.5])
        0.0
    """
    dist: Any

    @property
    def dimension(self) -> int:
        return 1

    def quantile(self, p: float) -> Any:
        """Value at probability level ``p`` (registered rule first, then ``ppf``).

        Raises:
            UnsupportedDistribution: If neither a rule nor ``ppf`` is available
        """
        rule = get_rule(self.dist)
        if rule is not None:
            return rule.forward(self.dist, p)
        if quantile_capability(type(self.dist)) is Capability.NO_QUANTILE:
            raise UnsupportedDistribution(self.dist, "quantile")
        return float(self.dist.ppf(p))

    def cdf(self, x: Any) -> float:
        """Probability level of ``x``; inverse of :meth:`quantile`.

        Raises:
            UnsupportedDistribution: If neither an inverse rule nor ``cdf`` is available
        """
        rule = get_rule(self.dist)
        if rule is not None and rule.inverse is not None:
            return float(rule.inverse(self.dist, x))
        if cdf_capability(type(self.dist)) is Capability.NO_CDF:
            raise UnsupportedDistribution(self.dist, "cdf")
        return float(self.dist.cdf(x))

    def _step_forward(self, coords: np.ndarray, index: int) -> Tuple[Any, int]:
        return self.quantile(coords[index]), index + 1

    def _step_inverse(self, value: Any, out: np.ndarray, index: int) -> int:
        if isinstance(value, (list, tuple, np.ndarray)):
            if np.size(value) != 1:
                raise DimensionMismatch(
                    f"Scalar distribution {describe_distribution(self.dist)} "
                    f"expects a single value, got {np.size(value)}"
                )
            value = np.ravel(value)[0]
        out[index] = self.cdf(value)
        return index + 1

    def to_dict(self) -> Dict[str, Any]:
        return {
            "kind": "scalar",
            "dimension": 1,
            "distribution": distribution_name(self.dist),
        }

    def __repr__(self) -> str:
        return f"ScalarTransform({describe_distribution(self.dist)})"
