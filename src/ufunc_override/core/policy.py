"""Type predicates used by the scanner and the selector.

``TypePolicy`` bundles the questions the engine needs answered about
argument values.  Exact-type equality and strict subtyping are kept as
separate predicates: two candidates of the same runtime type never
outrank each other.
"""
from __future__ import annotations

from collections.abc import Callable
from dataclasses import dataclass, field
from typing import Any

from ufunc_override.config import DEFAULT_SCALAR_TYPES, ResolverConfig
from ufunc_override.core.protocol import HOOK_NAME, SupportsOverride, hook_in_mro


@dataclass(frozen=True)
class TypePolicy:
    """Classifies argument values for override resolution.

    Parameters
    ----------
    base_types:
        Exact instances of these types are plain.
    scalar_types:
        Instances of these types (including subclasses) are plain.
    """

    base_types: tuple[type, ...] = field(default=())
    scalar_types: tuple[type, ...] = field(default=DEFAULT_SCALAR_TYPES)

    @classmethod
    def from_config(cls, config: ResolverConfig) -> "TypePolicy":
        return cls(base_types=config.base_types, scalar_types=config.scalar_types)

    @staticmethod
    def runtime_type(value: Any) -> type:
        return type(value)

    @staticmethod
    def is_strict_subtype(a: type, b: type) -> bool:
        """Return True if ``a`` is a subclass of ``b`` and not ``b`` itself."""
        return a is not b and issubclass(a, b)

    def is_plain(self, value: Any) -> bool:
        """Return True if ``value`` can never carry an override."""
        if type(value) in self.base_types:
            return True
        return isinstance(value, self.scalar_types)

    @staticmethod
    def is_capable(value: Any) -> bool:
        """Return True if ``value`` takes part in override resolution.

        The hook is looked up on every call, so attaching or removing
        ``__ufunc_override__`` after a class was first seen takes effect.
        Classes with no hook anywhere still count when registered with
        ``SupportsOverride.register``.
        """
        state = hook_in_mro(type(value))
        if state is not None:
            return state
        return isinstance(value, SupportsOverride)

    @staticmethod
    def handler_for(value: Any) -> Callable[..., Any]:
        """Return the bound override handler of ``value``.

        Raises
        ------
        AttributeError
            If the handler is missing, or is not callable.
        """
        handler = getattr(value, HOOK_NAME)
        if not callable(handler):
            raise AttributeError(
                f"{type(value).__qualname__}.{HOOK_NAME} is not callable"
            )
        return handler
