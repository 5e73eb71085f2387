"""Tagged outcome of a single handler invocation.

Every call into an override handler produces exactly one of:

* ``Accepted(value)`` — the handler produced the operation's result.
* ``Declined`` — the handler does not handle this call; try the next one.
* ``Failed(error)`` — the handler raised.

Handlers themselves usually just ``return`` a value or ``DECLINED``;
``classify`` turns that raw return value into an ``Outcome``.
"""
from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Union


@dataclass(frozen=True, slots=True)
class Accepted:
    """A handler accepted the call and produced ``value``."""

    value: Any


@dataclass(frozen=True, slots=True)
class Declined:
    """A handler declined the call.

    All instances compare equal; use the module-level ``DECLINED``.
    """

    def __repr__(self) -> str:
        return "DECLINED"


@dataclass(frozen=True, slots=True)
class Failed:
    """A handler raised ``error``."""

    error: Exception


Outcome = Union[Accepted, Declined, Failed]

DECLINED = Declined()


def classify(returned: Any, accept_not_implemented: bool = True) -> Outcome:
    """Turn a handler's raw return value into an ``Outcome``.

    Parameters
    ----------
    returned:
        Whatever the handler returned.
    accept_not_implemented:
        When ``True``, Python's ``NotImplemented`` also counts as a decline,
        following the binary-operator convention.

    Returns
    -------
    Outcome
        ``Declined`` for a decline, the handler's own ``Accepted`` unchanged,
        ``Accepted(returned)`` for anything else.
    """
    if isinstance(returned, (Declined, Accepted)):
        return returned
    if accept_not_implemented and returned is NotImplemented:
        return DECLINED
    return Accepted(returned)
