"""ufunc-override — argument-driven override resolution for numeric operations.

Public API
----------
The stable public surface is everything exported from this module.
Anything inside submodules not re-exported here is considered private
and may change without notice.

Example
-------
::

    import ufunc_override as uo

    @uo.operation(nin=2)
    def add(x, y, out=None):
        return x + y

    class Interval(uo.SupportsOverride):
        def __init__(self, lo, hi):
            self.lo, self.hi = lo, hi

        def __ufunc_override__(self, operation, method, position, inputs, kwargs):
            if operation is not add or method != "__call__":
                return uo.DECLINED
            a, b = (v if isinstance(v, Interval) else Interval(v, v) for v in inputs)
            return Interval(a.lo + b.lo, a.hi + b.hi)

    add(1, 2)                   # 3, default implementation
    add(Interval(0, 1), 2)      # Interval(2, 3), via the override

    # Lower level: ask the engine directly
    has_override, result = uo.resolve(add, "__call__", (Interval(0, 1), 2))

    uo.__version__
    '0.1.0'
"""
from __future__ import annotations

from collections.abc import Mapping, Sequence
from typing import TYPE_CHECKING, Any

from ufunc_override.core.errors import (
    ConfigurationError,
    HandlerError,
    OverrideError,
    ResolutionExhausted,
)
from ufunc_override.core.models import Resolution
from ufunc_override.core.outcome import DECLINED, Accepted, Declined, Failed
from ufunc_override.core.protocol import SupportsOverride
from ufunc_override.operation import Operation, operation

__version__: str = "0.1.0"

if TYPE_CHECKING:
    from ufunc_override.config import ResolverConfig


def resolve(
    operation: Any,
    method: str,
    args: Sequence[Any],
    kwargs: Mapping[str, Any] | None = None,
    nin: int | None = None,
    config: "ResolverConfig | None" = None,
) -> Resolution:
    """Give the arguments of a call a chance to override it.

    Parameters
    ----------
    operation:
        The operation descriptor; passed through to handlers unchanged.
    method:
        The operation method being called, e.g. ``"__call__"``.
    args:
        Positional arguments as a tuple or list: inputs, then outputs.
    kwargs:
        Keyword arguments, or ``None``.  Never modified.
    nin:
        Number of inputs.  Defaults to ``operation.nin`` or ``len(args)``.
    config:
        Resolver settings.  Defaults to ``ResolverConfig()``.

    Returns
    -------
    Resolution
        ``(has_override, result)``.

    Raises
    ------
    ufunc_override.ConfigurationError
        If the arguments are malformed.
    ufunc_override.ResolutionExhausted
        If every override-capable argument declined.
    ufunc_override.HandlerError
        If a selected argument's handler cannot be retrieved.
    """
    from ufunc_override.core.resolver import resolve as _resolve

    return _resolve(operation, method, args, kwargs, nin, config)


def load_config(path: str) -> "ResolverConfig":
    """Load a ``ResolverConfig`` from a YAML file."""
    from ufunc_override.config import load_config as _load_config

    return _load_config(path)


__all__ = [
    "__version__",
    "resolve",
    "load_config",
    "operation",
    "Operation",
    "Resolution",
    "SupportsOverride",
    "DECLINED",
    "Accepted",
    "Declined",
    "Failed",
    "OverrideError",
    "ConfigurationError",
    "ResolutionExhausted",
    "HandlerError",
]
