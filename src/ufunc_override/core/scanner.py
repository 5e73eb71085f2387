"""Candidate scanner: find the override-capable arguments of a call."""
from __future__ import annotations

from collections.abc import Sequence
from typing import Any

from ufunc_override.core.errors import ConfigurationError
from ufunc_override.core.models import Candidate, CandidateSet
from ufunc_override.core.policy import TypePolicy


def check_arguments(args: Any, max_arity: int) -> Sequence[Any]:
    """Validate that ``args`` is an ordered argument sequence within bounds.

    Raises
    ------
    ConfigurationError
        If ``args`` is not a tuple or list, or holds more than
        ``max_arity`` items.
    """
    if not isinstance(args, (tuple, list)):
        raise ConfigurationError(
            "positional arguments must be a tuple or list, "
            f"got {type(args).__name__}"
        )
    if len(args) > max_arity:
        raise ConfigurationError(
            f"too many arguments for override resolution: {len(args)} > {max_arity}"
        )
    return args


def scan_candidates(
    args: Sequence[Any],
    *,
    max_arity: int,
    policy: TypePolicy,
) -> CandidateSet:
    """Return the override-capable arguments of ``args`` in call order.

    Plain values (exact base-type instances and scalars) are skipped even
    when they implement the override interface.
    """
    check_arguments(args, max_arity)
    return tuple(
        Candidate(value, position)
        for position, value in enumerate(args)
        if not policy.is_plain(value) and policy.is_capable(value)
    )
