"""Base class for hypercube transforms.

A hypercube transform maps points of the unit hypercube [0,1]^n onto the
support of a distribution (forward) and back (inverse). Composite
transforms walk their children in a fixed order; the position in the
coordinate vector is threaded through the recursion as an explicit index,
each step returning the index just past the coordinates it consumed.
"""

from abc import ABC, abstractmethod
from typing import Any, Dict, Tuple

import numpy as np

from ..errors import CoordinateOutOfRange, DimensionMismatch


class HypercubeTransform(ABC):
    """Common interface of all hypercube transforms.

    Subclasses are frozen dataclasses: they hold the wrapped distribution
    and precomputed shape metadata, nothing else.
    """

    @property
    @abstractmethod
    def dimension(self) -> int:
        """Number of hypercube coordinates consumed by ``forward``."""
        ...

    @abstractmethod
    def _step_forward(self, coords: np.ndarray, index: int) -> Tuple[Any, int]:
        """Transform starting at ``coords[index]``.

        Returns:
            Tuple of (value, index past the consumed coordinates)
        """
        ...

    @abstractmethod
    def _step_inverse(self, value: Any, out: np.ndarray, index: int) -> int:
        """Write the coordinates of ``value`` into ``out`` from ``index`` on.

        Returns:
            Index past the written coordinates
        """
        ...

    @abstractmethod
    def to_dict(self) -> Dict[str, Any]:
        """JSON-serializable summary of the transform."""
        ...

    def forward(self, coords) -> Any:
        """Map hypercube coordinates to distribution space.

        Args:
            coords: Sequence of length ``dimension`` with entries in [0, 1]

        Returns:
            Value in the distribution's support

        Raises:
            DimensionMismatch: If ``len(coords) != dimension``
            CoordinateOutOfRange: If a coordinate is outside [0, 1] or NaN
            UnsupportedDistribution: If a leaf cannot be inverted
        """
        arr = as_coordinates(coords, self.dimension)
        value, end = self._step_forward(arr, 0)
        assert end == self.dimension, f"Consumed {end} of {self.dimension} coordinates"
        return value

    def inverse(self, value) -> np.ndarray:
        """Map a distribution-space value back onto the hypercube.

        Args:
            value: Value in the distribution's support, structured like the
                output of ``forward``

        Returns:
            1-D float array of length ``dimension``

        Raises:
            DimensionMismatch: If ``value`` does not match the structure
            UnsupportedDistribution: If a leaf has no CDF and no rule
            DegenerateSimplexInput: If a simplex value exhausts its mass early
        """
        dtype = value.dtype if isinstance(value, np.ndarray) and value.dtype.kind == "f" else np.float64
        out = np.empty(self.dimension, dtype=dtype)
        end = self._step_inverse(value, out, 0)
        assert end == self.dimension, f"Wrote {end} of {self.dimension} coordinates"
        return out


def as_coordinates(coords, dimension: int) -> np.ndarray:
    """Validate and convert a hypercube coordinate vector.

    Integer input is promoted to float64; floating dtypes are preserved.
    A bare scalar is accepted for one-dimensional transforms.

    Raises:
        DimensionMismatch: If the vector is not 1-D of length ``dimension``
        CoordinateOutOfRange: If any entry is outside [0, 1] or NaN
    """
    arr = np.atleast_1d(np.asarray(coords))
    if arr.ndim != 1:
        raise DimensionMismatch(
            f"Expected a 1-D coordinate vector of length {dimension}, got shape {arr.shape}"
        )
    if arr.size != dimension:
        raise DimensionMismatch(
            f"Expected coordinate vector of length {dimension}, got {arr.size}"
        )
    if arr.dtype.kind != "f":
        arr = arr.astype(np.float64)

    inside = (arr >= 0.0) & (arr <= 1.0)
    if not np.all(inside):
        bad = int(np.argmin(inside))
        raise CoordinateOutOfRange(
            f"Hypercube coordinates must lie in [0, 1], got {arr[bad]} at position {bad}"
        )
    return arr
