"""Package-level defaults for hypercube-transform.

This module centralizes constants used throughout the package
to ensure consistency and prevent duplication.
"""

# Grid points per hypercube axis when GridSampler is not told otherwise
DEFAULT_GRID_POINTS: int = 3

# Scrambled Sobol sequences by default (adds randomization, keeps low discrepancy)
DEFAULT_SOBOL_SCRAMBLE: bool = True

# Tolerance when checking that a simplex value sums to one
SIMPLEX_SUM_TOL: float = 1e-9
