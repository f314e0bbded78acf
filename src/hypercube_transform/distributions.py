"""Distribution containers and shape helpers.

Quantile and CDF functions come from scipy.stats. This module only adds
what scipy lacks for hypercube transforms: a Product container of
independent marginals, and helpers that read static shape information
from frozen scipy distributions.
"""

from dataclasses import dataclass
from typing import Any, Optional, Sequence, Tuple
import math

import numpy as np
from scipy import stats
from scipy.stats._multivariate import (  # pylint: disable=protected-access
    dirichlet_frozen,
    invwishart_frozen,
    multi_rv_frozen,
    ortho_group_frozen,
    random_correlation_frozen,
    special_ortho_group_frozen,
    unitary_group_frozen,
    wishart_frozen,
)

# Families whose scalar `dim` is the side length of a square matrix draw
_SQUARE_MATRIX_TYPES = (
    wishart_frozen,
    invwishart_frozen,
    special_ortho_group_frozen,
    ortho_group_frozen,
    unitary_group_frozen,
    random_correlation_frozen,
)


@dataclass(frozen=True)
class Product:
    """Product of independent marginal distributions.

    Marginals are stored flat in row-major (C) order; ``shape`` describes
    how the flat sequence is laid out. A numpy object array of
    distributions keeps its own shape.

    Attributes:
        components: Marginal distributions (or anything ``ascube`` accepts)
        shape: Layout of the marginals; defaults to ``(len(components),)``

    Example:
        >>> prior = Product([stats.norm(), stats.uniform(), stats.gamma(2.0)])
        >>> grid = Product(np.array([[stats.norm()] * 3] * 2, dtype=object))
        >>> grid.shape
        (2, 3)
    """
    components: Sequence[Any]
    shape: Optional[Tuple[int, ...]] = None

    def __post_init__(self):
        """Flatten components and validate the shape."""
        if isinstance(self.components, np.ndarray):
            inferred = self.components.shape
            flat = tuple(self.components.ravel(order="C"))
        else:
            flat = tuple(self.components)
            inferred = (len(flat),)

        if not flat:
            raise ValueError("Product requires at least one marginal distribution")

        shape = inferred if self.shape is None else tuple(int(n) for n in self.shape)
        if math.prod(shape) != len(flat):
            raise ValueError(
                f"Product shape {shape} holds {math.prod(shape)} elements, "
                f"got {len(flat)} marginals"
            )

        object.__setattr__(self, "components", flat)
        object.__setattr__(self, "shape", shape)

    def marginals(self) -> Tuple[Any, ...]:
        """Marginal distributions in storage order."""
        return self.components

    @property
    def size(self) -> int:
        """Number of marginals."""
        return len(self.components)

    def __len__(self) -> int:
        return len(self.components)

    def __repr__(self) -> str:
        names = [describe_distribution(c) for c in self.components[:3]]
        if len(self.components) > 3:
            names.append("...")
        return f"Product(shape={self.shape}, [{', '.join(names)}])"


def is_univariate(dist: Any) -> bool:
    """True for frozen scipy univariate distributions."""
    return isinstance(getattr(dist, "dist", None), (stats.rv_continuous, stats.rv_discrete))


def is_simplex(dist: Any) -> bool:
    """True for frozen scipy Dirichlet distributions."""
    return isinstance(dist, dirichlet_frozen)


def is_multivariate(dist: Any) -> bool:
    """True for frozen scipy multivariate and matrix-variate distributions."""
    return isinstance(dist, multi_rv_frozen)


def support_shape(dist: Any) -> Tuple[int, ...]:
    """Shape of a single draw from ``dist``, read from static metadata.

    Never evaluates the distribution.

    Raises:
        ValueError: If no shape information can be found
    """
    if isinstance(dist, Product):
        return dist.shape

    # Matrix-variate distributions (matrix_normal) carry a dims tuple
    dims = getattr(dist, "dims", None)
    if dims is not None:
        return tuple(int(n) for n in dims)

    dim = getattr(dist, "dim", None)
    if dim is not None:
        if isinstance(dist, _SQUARE_MATRIX_TYPES):
            return (int(dim), int(dim))
        return (int(dim),)

    for attr in ("alpha", "mean", "p"):
        value = getattr(dist, attr, None)
        if value is not None and not callable(value):
            return tuple(np.shape(value))

    raise ValueError(f"Cannot determine support shape of {describe_distribution(dist)}")


def describe_distribution(dist: Any) -> str:
    """Short human-readable name for a distribution."""
    if is_univariate(dist):
        args = [f"{a:g}" if isinstance(a, (int, float)) else repr(a) for a in dist.args]
        args += [
            f"{k}={v:g}" if isinstance(v, (int, float)) else f"{k}={v!r}"
            for k, v in dist.kwds.items()
        ]
        return f"{dist.dist.name}({', '.join(args)})"
    if isinstance(dist, multi_rv_frozen):
        name = type(dist).__name__
        return name[: -len("_frozen")] if name.endswith("_frozen") else name
    return repr(dist)


def distribution_name(dist: Any) -> str:
    """Family name used in serialized summaries."""
    if is_univariate(dist):
        return dist.dist.name
    if isinstance(dist, multi_rv_frozen):
        return describe_distribution(dist)
    return type(dist).__name__
