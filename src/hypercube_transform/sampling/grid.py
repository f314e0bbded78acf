"""Grid sampling strategy over the unit hypercube."""

from typing import Any, Optional
import itertools

import numpy as np

from ..constants import DEFAULT_GRID_POINTS
from .base import SamplingStrategy


class GridSampler(SamplingStrategy):
    """Regular grid over the unit hypercube.

    Grid points sit at cell midpoints ``(k + 0.5) / n`` rather than on the
    cube's faces, where quantiles of unbounded distributions are infinite.
    """

    def __init__(self, transform: Any, n_points_per_param: Optional[int] = None):
        """Initialize grid sampler.

        Args:
            transform: The transform (or distribution) to sample through
            n_points_per_param: Grid points per hypercube axis.
                               If None, uses DEFAULT_GRID_POINTS.
        """
        super().__init__(transform)
        if n_points_per_param is None:
            n_points_per_param = DEFAULT_GRID_POINTS
        if n_points_per_param < 1:
            raise ValueError(f"n_points_per_param must be >= 1, got {n_points_per_param}")
        self.n_points_per_param = n_points_per_param

    def _axis(self) -> np.ndarray:
        n = self.n_points_per_param
        return (np.arange(n) + 0.5) / n

    def unit_points(self, n_samples: Optional[int] = None) -> np.ndarray:
        """Grid points in [0,1]^d.

        Args:
            n_samples: If given and smaller than the full grid, take evenly
                spaced points from it

        Returns:
            Array of shape (n_points, dimension)
        """
        axis = self._axis()
        points = np.array(list(itertools.product(axis, repeat=self.dimension)))

        if n_samples is not None and n_samples < len(points):
            indices = np.linspace(0, len(points) - 1, n_samples, dtype=int)
            points = points[indices]

        return points

    def sample(self, n_samples: Optional[int] = None):
        """Generate values on the grid (all grid points when ``n_samples`` is None)."""
        return super().sample(n_samples)

    def method_name(self) -> str:
        """Return the name of this sampling method."""
        return "grid"

    def grid_size(self) -> int:
        """Total number of points in the full grid."""
        return self.n_points_per_param ** self.dimension
