"""Registry of custom transform rules per distribution type.

Distributions without a quantile function (or whose quantile should be
overridden) can still be used by registering a rule for their type. The
registry is open: callers extend it without touching the dispatch code.

Lookup walks the MRO of the scipy generator class first (so a rule
registered for ``scipy.stats.norm`` applies to every frozen normal), then
the MRO of the distribution's own class.
"""

import logging
from dataclasses import dataclass
from typing import Any, Callable, Dict, Iterator, Optional

from scipy import stats

logger = logging.getLogger(__name__)

ForwardRule = Callable[[Any, Any], Any]
InverseRule = Callable[[Any, Any], Any]


@dataclass(frozen=True)
class TransformRule:
    """Custom hypercube mapping for one distribution type.

    Attributes:
        forward: ``(distribution, u) -> value``. ``u`` is a float for scalar
            distributions and a 1-D coordinate slice for array-variate ones.
        inverse: Optional ``(distribution, value) -> u``. Without it the
            inverse direction falls back to the distribution's ``cdf``.
    """
    forward: ForwardRule
    inverse: Optional[InverseRule] = None

    def __post_init__(self):
        """Validate rule callables."""
        if not callable(self.forward):
            raise TypeError(f"Forward rule must be callable, got {type(self.forward).__name__}")
        if self.inverse is not None and not callable(self.inverse):
            raise TypeError(f"Inverse rule must be callable, got {type(self.inverse).__name__}")


_RULES: Dict[type, TransformRule] = {}


def _rule_key(dist_type: Any) -> type:
    """Normalize a registration key to a class."""
    if isinstance(dist_type, type):
        return dist_type
    # scipy generator instances such as scipy.stats.norm
    if isinstance(dist_type, (stats.rv_continuous, stats.rv_discrete)):
        return type(dist_type)
    raise TypeError(
        f"Rules are registered per type or scipy distribution generator, "
        f"got {type(dist_type).__name__}"
    )


def register_transform(
    dist_type: Any,
    forward: Optional[ForwardRule] = None,
    *,
    inverse: Optional[InverseRule] = None,
):
    """Register a custom forward (and optionally inverse) rule.

    Can be called directly or used as a decorator on the forward rule.

    Args:
        dist_type: Distribution class, or a scipy generator like ``stats.norm``
        forward: ``(distribution, u) -> value``
        inverse: ``(distribution, value) -> u``

    Returns:
        The registered TransformRule, or a decorator when ``forward`` is None

    Example:
        >>> @register_transform(MyDist, inverse=my_cdf)
        ... def my_quantile(dist, u):
        ...     return dist.lo + u * (dist.hi - dist.lo)
    """
    key = _rule_key(dist_type)

    if forward is None:
        def decorator(func: ForwardRule) -> ForwardRule:
            register_transform(key, func, inverse=inverse)
            return func
        return decorator

    rule = TransformRule(forward=forward, inverse=inverse)
    if key in _RULES:
        logger.debug(f"Replacing transform rule for {key.__name__}")
    _RULES[key] = rule
    logger.debug(f"Registered transform rule for {key.__name__}")
    return rule


def unregister_transform(dist_type: Any) -> None:
    """Remove the rule registered for ``dist_type``.

    Raises:
        KeyError: If no rule is registered for the type
    """
    key = _rule_key(dist_type)
    if key not in _RULES:
        raise KeyError(f"No transform rule registered for {key.__name__}")
    del _RULES[key]
    logger.debug(f"Unregistered transform rule for {key.__name__}")


def _candidate_types(dist: Any) -> Iterator[type]:
    generator = getattr(dist, "dist", None)
    if isinstance(generator, (stats.rv_continuous, stats.rv_discrete)):
        yield from type(generator).__mro__
    yield from type(dist).__mro__


def get_rule(dist: Any) -> Optional[TransformRule]:
    """Find the rule applying to ``dist``, or None."""
    for cls in _candidate_types(dist):
        if cls is object:
            continue
        rule = _RULES.get(cls)
        if rule is not None:
            return rule
    return None