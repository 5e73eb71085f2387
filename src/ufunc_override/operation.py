"""Overridable operations.

An ``Operation`` wraps a plain Python function (the default kernel) and
gives every call a chance to be overridden by its arguments before the
kernel runs.

Usage
-----
::

    from ufunc_override import operation

    @operation(nin=2)
    def add(x, y, out=None):
        return x + y

    add(1, 2)                # 3, no override-capable arguments
    add(1, tracked_value)    # tracked_value.__ufunc_override__ decides

Methods
-------
``__call__``
    Element-wise call with ``nin`` inputs and optional outputs.
``reduce`` / ``accumulate``
    Fold a binary operation over one iterable.
``outer``
    Apply a binary operation to every pair from two iterables.
"""
from __future__ import annotations

import functools
import itertools
from collections.abc import Callable, Iterable
from typing import Any

from ufunc_override.core.errors import ConfigurationError
from ufunc_override.core.normalizer import normalize_call
from ufunc_override.core.resolver import Resolver

_NO_INITIAL = object()


class Operation:
    """A named operation whose calls can be overridden by their arguments.

    Parameters
    ----------
    name:
        Display name, used in error messages.
    nin:
        Number of input arguments.
    nout:
        Number of output arguments.
    func:
        Default implementation, called as ``func(*inputs, **kwargs)`` when
        no argument overrides the call.  Positional outputs arrive as
        ``out=``.
    resolver:
        The ``Resolver`` to use.  Defaults to ``Resolver()``.
    """

    def __init__(
        self,
        name: str,
        nin: int,
        nout: int,
        func: Callable[..., Any],
        *,
        resolver: Resolver | None = None,
    ) -> None:
        if nin < 1 or nout < 0:
            raise ConfigurationError(
                f"operation {name!r} needs nin >= 1 and nout >= 0, got {nin} and {nout}"
            )
        self.name = name
        self.nin = nin
        self.nout = nout
        self.func = func
        self._resolver = resolver if resolver is not None else Resolver()
        functools.update_wrapper(self, func, assigned=("__doc__", "__module__"))

    @property
    def nargs(self) -> int:
        return self.nin + self.nout

    def __repr__(self) -> str:
        return f"<Operation {self.name!r} nin={self.nin} nout={self.nout}>"

    def __call__(self, *args: Any, **kwargs: Any) -> Any:
        if not self.nin <= len(args) <= self.nargs:
            raise TypeError(
                f"{self.name}() takes from {self.nin} to {self.nargs} positional "
                f"arguments but {len(args)} were given"
            )
        has_override, result = self._resolver.resolve(self, "__call__", args, kwargs, self.nin)
        if has_override:
            return result
        call = normalize_call(args, kwargs, self.nin)
        return self.func(*call.inputs, **call.kwargs)

    def _require_binary(self, method: str) -> None:
        if self.nin != 2:
            raise ConfigurationError(
                f"{self.name}.{method} is only supported for binary operations"
            )

    def reduce(self, array: Iterable[Any], **kwargs: Any) -> Any:
        """Fold the operation over ``array``; accepts ``initial=``."""
        has_override, result = self._resolver.resolve(self, "reduce", (array,), kwargs, 1)
        if has_override:
            return result
        self._require_binary("reduce")
        initial = kwargs.pop("initial", _NO_INITIAL)
        _reject_extra(self.name, "reduce", kwargs)
        items = list(array)
        if initial is _NO_INITIAL:
            if not items:
                raise ConfigurationError(
                    f"{self.name}.reduce of an empty sequence needs an initial value"
                )
            return functools.reduce(self.func, items)
        return functools.reduce(self.func, items, initial)

    def accumulate(self, array: Iterable[Any], **kwargs: Any) -> list[Any]:
        """Return the running fold of ``array``; accepts ``initial=``."""
        has_override, result = self._resolver.resolve(self, "accumulate", (array,), kwargs, 1)
        if has_override:
            return result
        self._require_binary("accumulate")
        initial = kwargs.pop("initial", None)
        _reject_extra(self.name, "accumulate", kwargs)
        return list(itertools.accumulate(array, self.func, initial=initial))

    def outer(self, a: Iterable[Any], b: Iterable[Any], **kwargs: Any) -> Any:
        """Apply the operation to every pair ``(x, y)`` with ``x`` in ``a``, ``y`` in ``b``."""
        has_override, result = self._resolver.resolve(self, "outer", (a, b), kwargs, 2)
        if has_override:
            return result
        self._require_binary("outer")
        _reject_extra(self.name, "outer", kwargs)
        right = list(b)
        return [[self.func(x, y) for y in right] for x in a]


def _reject_extra(name: str, method: str, kwargs: dict[str, Any]) -> None:
    if kwargs:
        raise TypeError(
            f"{name}.{method}() got unexpected keyword argument(s): "
            f"{', '.join(sorted(kwargs))}"
        )


def operation(
    nin: int,
    nout: int = 1,
    name: str | None = None,
    resolver: Resolver | None = None,
) -> Callable[[Callable[..., Any]], Operation]:
    """Return a decorator that turns a function into an ``Operation``.

    Example
    -------
    ::

        @operation(nin=1)
        def negative(x, out=None):
            return -x
    """

    def decorator(func: Callable[..., Any]) -> Operation:
        return Operation(name or func.__name__, nin, nout, func, resolver=resolver)

    return decorator
