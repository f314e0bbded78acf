"""Composite transforms over independent components.

Composites own one child transform per component, built once at
construction. Children consume consecutive ranges of the coordinate
vector in declaration order; for products that order is the row-major
(C) storage order of the marginals, so coordinate ``i`` always belongs
to ``product.marginals()[i]`` when every marginal is scalar.
"""

from dataclasses import dataclass, field
from typing import Any, Dict, Mapping, Tuple
import math

import numpy as np

from ..distributions import Product, describe_distribution, distribution_name
from ..errors import DimensionMismatch, UnsupportedDistribution
from ..registry import get_rule
from .base import HypercubeTransform
from .scalar import ScalarTransform


def _total_dimension(children: Tuple[HypercubeTransform, ...]) -> int:
    return sum(child.dimension for child in children)


def _as_items(value: Any, kind: str) -> list:
    """Components of a composite value, rejecting scalars and strings."""
    message = f"Expected a sequence for {kind} value, got {type(value).__name__}"
    if isinstance(value, (str, bytes, Mapping)):
        raise DimensionMismatch(message)
    try:
        return list(value)
    except TypeError:
        raise DimensionMismatch(message) from None


@dataclass(frozen=True)
class ProductTransform(HypercubeTransform):
    """Transform over a Product of independent marginals.

    When every marginal is scalar the forward value is a float array of
    ``dist.shape``; otherwise it is a list holding each child's value, and
    the product must be one-dimensional.

    Attributes:
        dist: The Product distribution
        children: One transform per marginal, in storage order
    """
    dist: Product
    children: Tuple[HypercubeTransform, ...]
    _dimension: int = field(init=False, repr=False)
    _all_scalar: bool = field(init=False, repr=False)

    def __post_init__(self):
        """Validate children and precompute dimension."""
        object.__setattr__(self, "children", tuple(self.children))
        if len(self.children) != self.dist.size:
            raise ValueError(
                f"Product has {self.dist.size} marginals but {len(self.children)} child transforms"
            )

        all_scalar = all(isinstance(child, ScalarTransform) for child in self.children)
        if not all_scalar and len(self.dist.shape) != 1:
            raise ValueError(
                f"Products of structured marginals must be one-dimensional, got shape {self.dist.shape}"
            )

        object.__setattr__(self, "_dimension", _total_dimension(self.children))
        object.__setattr__(self, "_all_scalar", all_scalar)

    @property
    def dimension(self) -> int:
        return self._dimension

    @property
    def dims(self) -> Tuple[int, ...]:
        """Shape of the product's support."""
        return self.dist.shape

    def _step_forward(self, coords: np.ndarray, index: int) -> Tuple[Any, int]:
        if self._all_scalar:
            out = np.empty(len(self.children), dtype=coords.dtype)
            for i, child in enumerate(self.children):
                out[i], index = child._step_forward(coords, index)
            return out.reshape(self.dims), index

        values = []
        for child in self.children:
            value, index = child._step_forward(coords, index)
            values.append(value)
        return values, index

    def _step_inverse(self, value: Any, out: np.ndarray, index: int) -> int:
        if self._all_scalar:
            items = np.ravel(np.asarray(value), order="C")
        else:
            items = _as_items(value, "product")

        if len(items) != len(self.children):
            raise DimensionMismatch(
                f"Expected product value with {len(self.children)} elements, got {len(items)}"
            )

        for child, item in zip(self.children, items):
            index = child._step_inverse(item, out, index)
        return index

    def to_dict(self) -> Dict[str, Any]:
        return {
            "kind": "product",
            "dimension": self.dimension,
            "dims": list(self.dims),
            "children": [child.to_dict() for child in self.children],
        }


@dataclass(frozen=True, eq=False)
class ArrayTransform(HypercubeTransform):
    """Transform over a multivariate or matrix-variate distribution.

    Joint distributions have no per-element quantile, so both directions
    go through a rule registered for the distribution's type. Without one
    the call fails with UnsupportedDistribution.

    Attributes:
        dist: The wrapped distribution
        dims: Support shape captured at construction
    """
    dist: Any
    dims: Tuple[int, ...]

    def __post_init__(self):
        """Freeze dims as a tuple of ints."""
        object.__setattr__(self, "dims", tuple(int(n) for n in self.dims))

    @property
    def dimension(self) -> int:
        return math.prod(self.dims)

    def _step_forward(self, coords: np.ndarray, index: int) -> Tuple[Any, int]:
        rule = get_rule(self.dist)
        if rule is None:
            raise UnsupportedDistribution(self.dist, "quantile")
        stop = index + self.dimension
        value = np.reshape(rule.forward(self.dist, coords[index:stop]), self.dims)
        return value, stop

    def _step_inverse(self, value: Any, out: np.ndarray, index: int) -> int:
        rule = get_rule(self.dist)
        if rule is None or rule.inverse is None:
            raise UnsupportedDistribution(self.dist, "cdf")
        value = np.asarray(value)
        if value.size != self.dimension:
            raise DimensionMismatch(
                f"Expected value with {self.dimension} elements for "
                f"{describe_distribution(self.dist)}, got {value.size}"
            )
        stop = index + self.dimension
        out[index:stop] = np.ravel(rule.inverse(self.dist, value.reshape(self.dims)))
        return stop

    def to_dict(self) -> Dict[str, Any]:
        return {
            "kind": "array",
            "dimension": self.dimension,
            "dims": list(self.dims),
            "distribution": distribution_name(self.dist),
        }


@dataclass(frozen=True)
class TupleTransform(HypercubeTransform):
    """Transform over an ordered tuple of transforms.

    Forward values are tuples with one entry per child.

    Example:
        >>> t = ascube((stats.norm(), stats.uniform(2, 3)))
        >>> t.forward([0.5, 0.5])
        (0.0, 3.5)
    """
    children: Tuple[HypercubeTransform, ...]
    _dimension: int = field(init=False, repr=False)

    def __post_init__(self):
        object.__setattr__(self, "children", tuple(self.children))
        object.__setattr__(self, "_dimension", _total_dimension(self.children))

    @property
    def dimension(self) -> int:
        return self._dimension

    def _step_forward(self, coords: np.ndarray, index: int) -> Tuple[Any, int]:
        values = []
        for child in self.children:
            value, index = child._step_forward(coords, index)
            values.append(value)
        return tuple(values), index

    def _step_inverse(self, value: Any, out: np.ndarray, index: int) -> int:
        items = _as_items(value, "tuple")
        if len(items) != len(self.children):
            raise DimensionMismatch(
                f"Expected tuple of {len(self.children)} values, got {len(items)}"
            )
        for child, item in zip(self.children, items):
            index = child._step_inverse(item, out, index)
        return index

    def to_dict(self) -> Dict[str, Any]:
        return {
            "kind": "tuple",
            "dimension": self.dimension,
            "children": [child.to_dict() for child in self.children],
        }


@dataclass(frozen=True)
class NamedTransform(HypercubeTransform):
    """Transform over a named record of transforms.

    Children are walked in declared key order; forward values are dicts.

    Attributes:
        names: Record keys in declared order
        children: One transform per key
    """
    names: Tuple[str, ...]
    children: Tuple[HypercubeTransform, ...]
    _dimension: int = field(init=False, repr=False)

    def __post_init__(self):
        """Validate names and precompute dimension."""
        object.__setattr__(self, "names", tuple(self.names))
        object.__setattr__(self, "children", tuple(self.children))

        if len(self.names) != len(self.children):
            raise ValueError(
                f"Got {len(self.names)} names for {len(self.children)} child transforms"
            )
        if len(set(self.names)) != len(self.names):
            duplicates = [n for n in self.names if self.names.count(n) > 1]
            raise ValueError(f"Duplicate component names: {set(duplicates)}")

        object.__setattr__(self, "_dimension", _total_dimension(self.children))

    @property
    def dimension(self) -> int:
        return self._dimension

    def __getitem__(self, name: str) -> HypercubeTransform:
        """Child transform for ``name``."""
        try:
            return self.children[self.names.index(name)]
        except ValueError:
            raise KeyError(f"Unknown component: {name}. Available: {list(self.names)}") from None

    def _step_forward(self, coords: np.ndarray, index: int) -> Tuple[Any, int]:
        values = {}
        for name, child in zip(self.names, self.children):
            values[name], index = child._step_forward(coords, index)
        return values, index

    def _step_inverse(self, value: Mapping[str, Any], out: np.ndarray, index: int) -> int:
        if not isinstance(value, Mapping):
            raise DimensionMismatch(
                f"Expected a mapping with components {list(self.names)}, got {type(value).__name__}"
            )
        provided = set(value.keys())
        expected = set(self.names)
        if provided != expected:
            raise DimensionMismatch(
                f"Expected components {sorted(expected)}, got {sorted(provided)}"
            )
        for name, child in zip(self.names, self.children):
            index = child._step_inverse(value[name], out, index)
        return index

    def to_dict(self) -> Dict[str, Any]:
        return {
            "kind": "named",
            "dimension": self.dimension,
            "children": {name: child.to_dict() for name, child in zip(self.names, self.children)},
        }
