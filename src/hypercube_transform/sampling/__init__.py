"""Sampling strategies that push hypercube points through a transform.

This module provides quasi-random, random and grid designs over the unit
hypercube, mapped into distribution space by a hypercube transform.
"""

from .base import SamplingStrategy
from .grid import GridSampler
from .sobol import LatinHypercubeSampler, SobolSampler
from .uniform import UniformSampler

__all__ = [
    "SamplingStrategy",
    "GridSampler",
    "SobolSampler",
    "LatinHypercubeSampler",
    "UniformSampler",
]
