"""Built-in transform rules for joint distributions.

A multivariate normal has no per-element quantile, but it is an affine
image of independent standard normals: x = mean + L z with L the Cholesky
factor of the covariance. Pushing each coordinate through the standard
normal quantile gives z, and the inverse solves L z = x - mean.
"""

import weakref

import numpy as np
from scipy import linalg, stats
from scipy.stats._multivariate import (  # pylint: disable=protected-access
    multivariate_normal_frozen,
)

from .registry import register_transform


# Lower Cholesky factor per frozen distribution, dropped with the distribution
_CHOLESKY_CACHE = weakref.WeakKeyDictionary()


def _cholesky(dist) -> np.ndarray:
    factor = _CHOLESKY_CACHE.get(dist)
    if factor is None:
        factor = linalg.cholesky(np.atleast_2d(dist.cov), lower=True)
        _CHOLESKY_CACHE[dist] = factor
    return factor


def mvnormal_forward(dist, u: np.ndarray) -> np.ndarray:
    """Hypercube slice -> correlated normal draw."""
    z = stats.norm.ppf(u)
    return dist.mean + _cholesky(dist) @ z


def mvnormal_inverse(dist, x: np.ndarray) -> np.ndarray:
    """Correlated normal draw -> hypercube slice."""
    z = linalg.solve_triangular(_cholesky(dist), np.ravel(x) - dist.mean, lower=True)
    return stats.norm.cdf(z)


def register_builtin_rules() -> None:
    """Install the rules shipped with the package."""
    register_transform(multivariate_normal_frozen, mvnormal_forward, inverse=mvnormal_inverse)
