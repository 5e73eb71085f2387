"""Value types shared by the resolution components.

Every object here lives for a single resolution call only.  Nothing is
cached or shared between calls.
"""
from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass, field
from types import MappingProxyType
from typing import Any, NamedTuple


@dataclass(frozen=True, slots=True)
class Candidate:
    """An override-capable positional argument.

    Parameters
    ----------
    value:
        The argument itself.
    position:
        0-based index of the argument in the original call.
    """

    value: Any
    position: int

    @property
    def value_type(self) -> type:
        return type(self.value)

    def __repr__(self) -> str:
        return f"Candidate({self.position}: {type(self.value).__qualname__})"


CandidateSet = tuple[Candidate, ...]


@dataclass(frozen=True)
class NormalizedCall:
    """Canonical form of a call, shared by every handler invocation.

    Parameters
    ----------
    inputs:
        The first ``nin`` positional arguments.
    kwargs:
        A private copy of the caller's keyword arguments, with positional
        outputs folded into ``"out"``.  Never the caller's own mapping.
    """

    inputs: tuple[Any, ...]
    kwargs: dict[str, Any] = field(default_factory=dict)

    @property
    def kwargs_view(self) -> Mapping[str, Any]:
        """Return a read-only view of ``kwargs`` for handing to handlers."""
        return MappingProxyType(self.kwargs)


class Resolution(NamedTuple):
    """Result of ``resolve``.

    Unpacks as ``(has_override, result)``.  When ``has_override`` is
    ``False`` no argument was override-capable and ``result`` is ``None``;
    the caller should fall back to its default implementation.
    """

    has_override: bool
    result: Any = None

    @classmethod
    def none(cls) -> "Resolution":
        """Return the "no override" resolution."""
        return cls(False, None)
