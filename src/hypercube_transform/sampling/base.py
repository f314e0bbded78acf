"""Base class for hypercube sampling strategies."""

import logging
from abc import ABC, abstractmethod
from typing import Any, List

import numpy as np

from ..transforms import HypercubeTransform, ascube

logger = logging.getLogger(__name__)


class SamplingStrategy(ABC):
    """Base class for sampling through a hypercube transform.

    Strategies generate points in the unit hypercube; the transform maps
    each point into the distribution's support. Subclasses only decide
    where the hypercube points go.
    """

    def __init__(self, transform: Any):
        """Initialize sampling strategy.

        Args:
            transform: A HypercubeTransform, or anything ``ascube`` accepts
        """
        self.transform: HypercubeTransform = ascube(transform)
        self._validate_transform()

    def _validate_transform(self) -> None:
        """Validate that the transform has something to sample."""
        if self.transform.dimension == 0:
            raise ValueError("Transform must have at least one hypercube dimension")

    @property
    def dimension(self) -> int:
        """Dimension of the hypercube being sampled."""
        return self.transform.dimension

    @abstractmethod
    def unit_points(self, n_samples: int) -> np.ndarray:
        """Generate points in the unit hypercube.

        Args:
            n_samples: Number of points to generate

        Returns:
            Array of shape (n_samples, dimension) with entries in [0, 1]
        """
        pass

    def sample(self, n_samples: int) -> List[Any]:
        """Generate values in the distribution's support.

        Args:
            n_samples: Number of values to generate

        Returns:
            List of forward-transformed values
        """
        points = self.unit_points(n_samples)
        logger.debug(
            f"{self.method_name()} sampler mapping {len(points)} points "
            f"through dimension {self.dimension}"
        )
        return [self.transform.forward(point) for point in points]

    @abstractmethod
    def method_name(self) -> str:
        """Return the name of this sampling method."""
        pass
