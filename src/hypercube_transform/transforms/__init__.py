"""Hypercube transforms: scalar leaves, composites, and the ascube factory."""

from .base import HypercubeTransform, as_coordinates
from .scalar import ScalarTransform
from .product import ArrayTransform, NamedTransform, ProductTransform, TupleTransform
from .simplex import SimplexTransform
from .factory import ascube

__all__ = [
    "HypercubeTransform",
    "as_coordinates",
    "ScalarTransform",
    "ProductTransform",
    "ArrayTransform",
    "TupleTransform",
    "NamedTransform",
    "SimplexTransform",
    "ascube",
]
