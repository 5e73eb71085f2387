"""Error types raised by the override-resolution engine.

Three kinds of failure can end a resolution:

* ``ConfigurationError`` — the call itself is malformed (not an ordered
  sequence, too many arguments, bad ``nin``).  Raised before any handler
  runs.
* ``ResolutionExhausted`` — every override-capable argument declined.
* ``HandlerError`` — the winning argument's handler could not be looked up.

Exceptions raised *inside* a handler are not represented here: they
propagate to the caller unchanged.
"""
from __future__ import annotations

from collections.abc import Sequence


class OverrideError(Exception):
    """Base class for all errors raised by ``ufunc_override`` itself."""


class ConfigurationError(OverrideError, ValueError):
    """Raised when a call or a configuration cannot be used for resolution.

    Subclasses ``ValueError`` so callers that already guard argument
    parsing with ``except ValueError`` keep working.
    """


class ResolutionExhausted(OverrideError, TypeError):
    """Raised when every override-capable argument declined the operation.

    Parameters
    ----------
    operation_name:
        Display name of the operation being resolved.
    method:
        The operation method, e.g. ``"__call__"`` or ``"reduce"``.
    tried_types:
        Runtime types of the candidates whose handlers declined, in the
        order they were tried.
    """

    def __init__(
        self,
        operation_name: str,
        method: str,
        tried_types: Sequence[type],
    ) -> None:
        self.operation_name = operation_name
        self.method = method
        self.tried_types: tuple[type, ...] = tuple(tried_types)
        names = ", ".join(t.__qualname__ for t in self.tried_types)
        super().__init__(
            f"operation {operation_name}.{method} is not supported for these "
            f"argument types: all overrides declined ({names})"
        )


class HandlerError(OverrideError, AttributeError):
    """Raised when the selected argument's override handler is unavailable.

    The lookup failure is attached as ``__cause__``.

    Parameters
    ----------
    position:
        Original position of the argument in the call.
    value_type:
        Runtime type of the argument.
    """

    def __init__(self, position: int, value_type: type) -> None:
        self.position = position
        self.value_type = value_type
        super().__init__(
            f"argument {position} of type {value_type.__qualname__!r} is "
            "override-capable but its handler could not be retrieved"
        )
