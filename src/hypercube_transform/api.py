"""Public API for hypercube-transform.

This module provides the complete public API: transform construction,
forward and inverse transforms, the custom rule registry, the error
taxonomy and the hypercube samplers.
"""

from typing import Any

import numpy as np

from .distributions import Product
from .errors import (
    HypercubeTransformError,
    DimensionMismatch,
    CoordinateOutOfRange,
    UnsupportedDistribution,
    DegenerateSimplexInput,
)
from .capabilities import Capability, quantile_capability, cdf_capability
from .registry import (
    TransformRule,
    register_transform,
    unregister_transform,
    get_rule,
)
from .rules import register_builtin_rules
from .transforms import (
    HypercubeTransform,
    ScalarTransform,
    ProductTransform,
    ArrayTransform,
    TupleTransform,
    NamedTransform,
    SimplexTransform,
    ascube,
)
from .sampling import (
    SamplingStrategy,
    GridSampler,
    SobolSampler,
    LatinHypercubeSampler,
    UniformSampler,
)

register_builtin_rules()


def dimension(transform: Any) -> int:
    """Number of hypercube coordinates of ``transform``.

    Distributions are accepted too and converted with ``ascube``.
    """
    return ascube(transform).dimension


def forward_transform(transform: Any, coords) -> Any:
    """Map hypercube coordinates into distribution space.

    Args:
        transform: A HypercubeTransform, or anything ``ascube`` accepts
        coords: Coordinates in [0, 1], length ``dimension(transform)``

    Returns:
        Value in the distribution's support

    Raises:
        DimensionMismatch: If the coordinate count is wrong
        CoordinateOutOfRange: If a coordinate is outside [0, 1]
        UnsupportedDistribution: If a leaf has no quantile and no rule

    Example:
        >>> forward_transform(ascube((stats.norm(), stats.uniform())), [0.5, 0.25])
        (0.0, 0.25)
    """
    return ascube(transform).forward(coords)


def inverse_transform(transform: Any, value) -> np.ndarray:
    """Map a distribution-space value back onto the unit hypercube.

    Left inverse of ``forward_transform`` up to floating point error.

    Raises:
        DimensionMismatch: If ``value`` does not match the transform's structure
        UnsupportedDistribution: If a leaf has no CDF and no rule
        DegenerateSimplexInput: If a simplex value exhausts its mass early
    """
    return ascube(transform).inverse(value)


# Version
try:
    from importlib.metadata import version
    __version__ = version("hypercube-transform")
except Exception:
    __version__ = "0.1.0"

# Public API Export List
__all__ = [
    # Construction and transforms
    "ascube",
    "dimension",
    "forward_transform",
    "inverse_transform",
    "HypercubeTransform",
    "ScalarTransform",
    "ProductTransform",
    "ArrayTransform",
    "TupleTransform",
    "NamedTransform",
    "SimplexTransform",
    "Product",
    # Extension point
    "TransformRule",
    "register_transform",
    "unregister_transform",
    "get_rule",
    "Capability",
    "quantile_capability",
    "cdf_capability",
    # Errors
    "HypercubeTransformError",
    "DimensionMismatch",
    "CoordinateOutOfRange",
    "UnsupportedDistribution",
    "DegenerateSimplexInput",
    # Sampling
    "SamplingStrategy",
    "GridSampler",
    "SobolSampler",
    "LatinHypercubeSampler",
    "UniformSampler",
    # Version
    "__version__",
]
