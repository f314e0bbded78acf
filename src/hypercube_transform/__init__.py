"""hypercube-transform: map the unit hypercube onto distribution supports.

This package builds bijections between [0,1]^n and the support of a
distribution, or of a composite of distributions, using inverse-CDF
methods from scipy.stats. Composite structures (products, tuples, named
records, Dirichlet simplices) are walked recursively down to per-scalar
quantile and CDF calls.
"""

# Export the public API
from .api import *  # noqa: F403, F401
from .api import __all__, __version__  # noqa: F401
