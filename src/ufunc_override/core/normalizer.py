"""Argument normalizer: canonical ``(inputs, kwargs)`` form of a call.

Positional arguments past ``nin`` are outputs and move into the
``"out"`` keyword: a single trailing output is stored as-is, several are
stored as a tuple in call order, replacing any ``out`` keyword.  The
caller's keyword mapping is copied, never mutated.
"""
from __future__ import annotations

from collections.abc import Mapping, Sequence
from typing import Any

from ufunc_override.core.errors import ConfigurationError
from ufunc_override.core.models import NormalizedCall


def normalize_call(
    args: Sequence[Any],
    kwargs: Mapping[str, Any] | None,
    nin: int,
) -> NormalizedCall:
    """Build the ``NormalizedCall`` shared by every handler invocation.

    Parameters
    ----------
    args:
        All positional arguments, inputs first, then outputs.
    kwargs:
        The caller's keyword arguments, or ``None``.
    nin:
        Number of leading positional arguments that are inputs.

    Raises
    ------
    ConfigurationError
        If ``nin`` is out of range.
    """
    if isinstance(nin, bool) or not isinstance(nin, int) or not 0 <= nin <= len(args):
        raise ConfigurationError(
            f"number of inputs must be between 0 and {len(args)}, got {nin!r}"
        )

    normal_kwargs: dict[str, Any] = dict(kwargs) if kwargs is not None else {}
    outputs = tuple(args[nin:])
    if outputs:
        # Positional outputs replace any ``out`` keyword.
        normal_kwargs["out"] = outputs[0] if len(outputs) == 1 else outputs

    return NormalizedCall(inputs=tuple(args[:nin]), kwargs=normal_kwargs)
