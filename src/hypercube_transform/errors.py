"""Error taxonomy for hypercube transforms.

All errors derive from HypercubeTransformError so callers can catch every
package failure with one clause. Each concrete error also derives from the
builtin exception it refines (ValueError or TypeError), so code written
against plain Python exceptions keeps working.
"""

from typing import Any


class HypercubeTransformError(Exception):
    """Base class for all hypercube transform errors."""


class DimensionMismatch(HypercubeTransformError, ValueError):
    """Input length does not match the transform's dimension.

    Raised before any quantile or CDF evaluation takes place.
    """


class CoordinateOutOfRange(HypercubeTransformError, ValueError):
    """A hypercube coordinate lies outside [0, 1] or is NaN."""


class UnsupportedDistribution(HypercubeTransformError, TypeError):
    """Distribution has no quantile/CDF capability and no registered rule.

    Attributes:
        distribution: The offending distribution instance
        capability: Name of the missing capability ("quantile", "cdf" or "shape")
    """

    def __init__(self, distribution: Any, capability: str = "quantile"):
        from .distributions import describe_distribution

        self.distribution = distribution
        self.capability = capability
        type_name = type(distribution).__name__
        super().__init__(
            f"Distribution {describe_distribution(distribution)} has no {capability} capability; "
            f"register a custom rule with register_transform({type_name}, ...) "
            f"or choose a different distribution"
        )


class DegenerateSimplexInput(HypercubeTransformError, ValueError):
    """Simplex value exhausts its mass before the final component.

    The inverse stick-breaking step divides by the remaining mass, which
    is zero (or negative through round-off) for such points.
    """
