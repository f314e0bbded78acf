"""Construction of hypercube transforms from distributions.

``ascube`` inspects only static type and shape information; it never
evaluates a probability. Capability failures (no quantile, no rule)
surface lazily when the transform is first used.
"""

import logging
from typing import Any, Mapping

import numpy as np

from ..distributions import (
    Product,
    is_multivariate,
    is_simplex,
    is_univariate,
    support_shape,
)
from ..errors import UnsupportedDistribution
from .base import HypercubeTransform
from .product import ArrayTransform, NamedTransform, ProductTransform, TupleTransform
from .scalar import ScalarTransform
from .simplex import SimplexTransform

logger = logging.getLogger(__name__)


def ascube(obj: Any) -> HypercubeTransform:
    """Build the transform between the unit hypercube and ``obj``'s support.

    Args:
        obj: A frozen scipy distribution, a Product, a numpy object array of
            distributions, a tuple/list or mapping of any of these, or an
            existing transform (returned unchanged)

    Returns:
        The matching HypercubeTransform

    Example:
        >>> ascube(stats.norm())
        >>> ascube(stats.dirichlet([1.0, 2.0, 3.0])).dimension
        2
        >>> ascube({"alpha": stats.uniform(), "beta": stats.norm()}).dimension
        2
    """
    if isinstance(obj, HypercubeTransform):
        return obj

    if isinstance(obj, Product):
        transform = ProductTransform(obj, tuple(ascube(m) for m in obj.marginals()))
    elif isinstance(obj, np.ndarray):
        if obj.dtype != object:
            raise TypeError(
                f"Numeric arrays are not distributions; got array of dtype {obj.dtype}"
            )
        return ascube(Product(obj))
    elif is_simplex(obj):
        transform = SimplexTransform(obj)
    elif is_univariate(obj):
        transform = ScalarTransform(obj)
    elif is_multivariate(obj):
        try:
            dims = support_shape(obj)
        except ValueError as e:
            raise UnsupportedDistribution(obj, "shape") from e
        transform = ArrayTransform(obj, dims)
    elif isinstance(obj, Mapping):
        transform = NamedTransform(
            tuple(obj.keys()), tuple(ascube(v) for v in obj.values())
        )
    elif isinstance(obj, (tuple, list)):
        transform = TupleTransform(tuple(ascube(v) for v in obj))
    else:
        transform = ScalarTransform(obj)

    logger.debug(f"Built {type(transform).__name__} with dimension {transform.dimension}")
    return transform
