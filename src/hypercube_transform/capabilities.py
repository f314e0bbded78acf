"""Capability lookup for distribution types.

Whether a distribution can be inverted analytically is a property of its
type, not of a particular instance. The lookup is therefore resolved once
per type and cached, returning a tag that the scalar transform branches on
instead of probing the object on every call.
"""

import functools
import logging
from enum import Enum

logger = logging.getLogger(__name__)


class Capability(Enum):
    """Tag describing which inverse-CDF machinery a type exposes."""

    HAS_QUANTILE = "has_quantile"
    NO_QUANTILE = "no_quantile"
    HAS_CDF = "has_cdf"
    NO_CDF = "no_cdf"


@functools.lru_cache(maxsize=None)
def quantile_capability(dist_type: type) -> Capability:
    """Resolve whether instances of ``dist_type`` expose ``ppf``."""
    has = callable(getattr(dist_type, "ppf", None))
    logger.debug(f"Resolved quantile capability for {dist_type.__name__}: {has}")
    return Capability.HAS_QUANTILE if has else Capability.NO_QUANTILE


@functools.lru_cache(maxsize=None)
def cdf_capability(dist_type: type) -> Capability:
    """Resolve whether instances of ``dist_type`` expose ``cdf``."""
    has = callable(getattr(dist_type, "cdf", None))
    logger.debug(f"Resolved cdf capability for {dist_type.__name__}: {has}")
    return Capability.HAS_CDF if has else Capability.NO_CDF
