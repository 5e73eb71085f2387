"""Override resolution: the select → invoke → continue loop.

Usage
-----
::

    from ufunc_override.core.resolver import Resolver

    resolver = Resolver()
    has_override, result = resolver.resolve(add, "__call__", (x, y), {}, nin=2)
    if not has_override:
        result = default_add(x, y)

A ``Resolver`` holds only immutable configuration; all per-call state is
built inside ``resolve``, so one instance can serve nested and concurrent
resolutions.
"""
from __future__ import annotations

import logging
from collections.abc import Mapping, Sequence
from typing import Any

from ufunc_override.config import ResolverConfig
from ufunc_override.core.errors import HandlerError, ResolutionExhausted
from ufunc_override.core.models import Candidate, NormalizedCall, Resolution
from ufunc_override.core.normalizer import normalize_call
from ufunc_override.core.outcome import Accepted, Failed, Outcome, classify
from ufunc_override.core.policy import TypePolicy
from ufunc_override.core.scanner import scan_candidates
from ufunc_override.core.selector import PrioritySelector

logger = logging.getLogger(__name__)


def operation_name(operation: Any) -> str:
    """Return a display name for an operation descriptor."""
    for attr in ("name", "__name__"):
        name = getattr(operation, attr, None)
        if isinstance(name, str):
            return name
    return repr(operation)


class Resolver:
    """Resolves calls to overridable operations.

    Parameters
    ----------
    config:
        Arity bound, plain types and decline convention.  Defaults to
        ``ResolverConfig()``.
    policy:
        Type predicates.  Defaults to a ``TypePolicy`` built from ``config``.
    """

    def __init__(
        self,
        config: ResolverConfig | None = None,
        policy: TypePolicy | None = None,
    ) -> None:
        self._config = config if config is not None else ResolverConfig()
        self._policy = policy if policy is not None else TypePolicy.from_config(self._config)

    @property
    def config(self) -> ResolverConfig:
        return self._config

    @property
    def policy(self) -> TypePolicy:
        return self._policy

    def resolve(
        self,
        operation: Any,
        method: str,
        args: Sequence[Any],
        kwargs: Mapping[str, Any] | None = None,
        nin: int | None = None,
    ) -> Resolution:
        """Dispatch a call to the highest-priority accepting override.

        Parameters
        ----------
        operation:
            The operation descriptor, passed through to handlers.
        method:
            Name of the operation method being called.
        args:
            Positional arguments: ``nin`` inputs followed by outputs.
        kwargs:
            Keyword arguments; never modified.
        nin:
            Number of inputs.  Defaults to ``operation.nin`` when present,
            else ``len(args)``.

        Returns
        -------
        Resolution
            ``(False, None)`` if no argument is override-capable, otherwise
            ``(True, result)`` from the first handler that accepted.

        Raises
        ------
        ConfigurationError
            If ``args`` is malformed or too long, or ``nin`` is invalid.
        ResolutionExhausted
            If every override-capable argument declined.
        HandlerError
            If a selected argument's handler cannot be retrieved.
        """
        candidates = scan_candidates(
            args, max_arity=self._config.max_arity, policy=self._policy
        )
        if not candidates:
            return Resolution.none()

        if nin is None:
            nin = getattr(operation, "nin", len(args))
        call = normalize_call(args, kwargs, nin)
        name = operation_name(operation)
        logger.debug(
            "Resolving %s.%s with %d override candidate(s)", name, method, len(candidates)
        )

        selector = PrioritySelector(candidates, self._policy)
        declined: list[type] = []
        while (candidate := selector.select_next()) is not None:
            outcome = self._invoke(candidate, operation, method, call)
            if isinstance(outcome, Accepted):
                logger.debug(
                    "%s.%s accepted by argument %d", name, method, candidate.position
                )
                return Resolution(True, outcome.value)
            if isinstance(outcome, Failed):
                raise outcome.error
            declined.append(candidate.value_type)
            logger.debug(
                "%s.%s declined by argument %d (%s)",
                name,
                method,
                candidate.position,
                candidate.value_type.__qualname__,
            )

        raise ResolutionExhausted(name, method, declined)

    def _invoke(
        self,
        candidate: Candidate,
        operation: Any,
        method: str,
        call: NormalizedCall,
    ) -> Outcome:
        try:
            handler = self._policy.handler_for(candidate.value)
        except AttributeError as exc:
            raise HandlerError(candidate.position, candidate.value_type) from exc

        try:
            returned = handler(
                operation, method, candidate.position, call.inputs, call.kwargs_view
            )
        except Exception as exc:  # noqa: BLE001
            return Failed(exc)
        return classify(returned, self._config.accept_not_implemented)


def resolve(
    operation: Any,
    method: str,
    args: Sequence[Any],
    kwargs: Mapping[str, Any] | None = None,
    nin: int | None = None,
    config: ResolverConfig | None = None,
) -> Resolution:
    """Convenience function: resolve with a ``Resolver`` built from ``config``."""
    return Resolver(config).resolve(operation, method, args, kwargs, nin)
