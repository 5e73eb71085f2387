"""Priority selector: which candidate gets the next chance to override.

Subclasses go before their superclasses; otherwise candidates go in call
order.  Each round is a single left-to-right pass:

1. Take the first untried candidate ``X``.
2. If any untried candidate to the right of ``X`` has a runtime type that
   is a *strict* subtype of ``X``'s runtime type, skip ``X`` for this
   round and repeat with the next untried candidate.
3. The first candidate not skipped wins and is consumed for good.

Candidates already passed over in a round are not revisited in that
round, so with three or more related types the order is that of the
pass, not of a global most-specific-first sort.
"""
from __future__ import annotations

import logging

from ufunc_override.core.models import Candidate, CandidateSet
from ufunc_override.core.policy import TypePolicy

logger = logging.getLogger(__name__)


class PrioritySelector:
    """Hands out the candidates of one resolution in priority order.

    A selector owns its consumed-index set and must not be shared between
    resolutions.

    Parameters
    ----------
    candidates:
        Override-capable arguments in call order.
    policy:
        Supplies the runtime-type and strict-subtype predicates.
    """

    def __init__(self, candidates: CandidateSet, policy: TypePolicy) -> None:
        self._candidates = candidates
        self._policy = policy
        self._consumed: set[int] = set()

    @property
    def remaining(self) -> int:
        """Number of candidates not yet selected."""
        return len(self._candidates) - len(self._consumed)

    def _outranked(self, index: int) -> bool:
        """Return True if an untried candidate right of ``index`` is a strict subtype."""
        policy = self._policy
        own_type = policy.runtime_type(self._candidates[index].value)
        for other in range(index + 1, len(self._candidates)):
            if other in self._consumed:
                continue
            other_type = policy.runtime_type(self._candidates[other].value)
            if policy.is_strict_subtype(other_type, own_type):
                return True
        return False

    def select_next(self) -> Candidate | None:
        """Select and consume the next candidate, or return ``None`` when exhausted."""
        for index, candidate in enumerate(self._candidates):
            if index in self._consumed:
                continue
            if self._outranked(index):
                continue
            self._consumed.add(index)
            logger.debug(
                "Selected argument %d (%s) for override",
                candidate.position,
                type(candidate.value).__qualname__,
            )
            return candidate
        return None

    def priority_order(self) -> list[Candidate]:
        """Consume all remaining candidates and return them in selection order.

        This is the order handlers would be tried in if every one declined.
        """
        order: list[Candidate] = []
        while (candidate := self.select_next()) is not None:
            order.append(candidate)
        return order
