"""Dispatch scenarios: explain override priority without writing classes.

A scenario describes a class hierarchy and the positional arguments of a
call.  ``Scenario.priority_order`` reports the order in which the
arguments' handlers would be tried if every one of them declined.

YAML layout
-----------
::

    types:
      Base: []
      Left: [Base]
      Right: [Base]
      Leaf: [Left]
    args: [Base, 2.5, Right, Leaf]
    nin: 3
    config:
      max_arity: 8

Every type in ``types`` is override-capable.  Entries of ``args`` that
name a type become instances of it; anything else is used as a literal.
"""
from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any

import yaml

from ufunc_override.config import ResolverConfig
from ufunc_override.core.errors import ConfigurationError
from ufunc_override.core.models import Candidate
from ufunc_override.core.outcome import DECLINED
from ufunc_override.core.policy import TypePolicy
from ufunc_override.core.protocol import SupportsOverride
from ufunc_override.core.scanner import scan_candidates
from ufunc_override.core.selector import PrioritySelector


def _decline(self: Any, operation: Any, method: str, position: int, inputs: Any, kwargs: Any) -> Any:
    return DECLINED


def build_types(hierarchy: Mapping[str, Any]) -> dict[str, type]:
    """Create the override-capable classes described by ``hierarchy``.

    Bases must be declared before the types that derive from them.

    Raises
    ------
    ConfigurationError
        On unknown bases or an inconsistent MRO.
    """
    if not isinstance(hierarchy, Mapping):
        raise ConfigurationError("'types' must map type names to lists of base names")
    built: dict[str, type] = {}
    for name, bases in hierarchy.items():
        if not isinstance(name, str) or not name.isidentifier():
            raise ConfigurationError(f"invalid type name {name!r}")
        if bases is None:
            bases = []
        if not isinstance(bases, list):
            raise ConfigurationError(f"bases of {name!r} must be a list")
        missing = [b for b in bases if b not in built]
        if missing:
            raise ConfigurationError(
                f"type {name!r} derives from undeclared type(s): {', '.join(map(str, missing))}"
            )
        parents = tuple(built[b] for b in bases) or (SupportsOverride,)
        try:
            built[name] = type(name, parents, {"__ufunc_override__": _decline})
        except TypeError as exc:
            raise ConfigurationError(f"cannot build type {name!r}: {exc}") from exc
    return built


@dataclass
class Scenario:
    """A class hierarchy plus one call's positional arguments.

    Parameters
    ----------
    types:
        Built classes keyed by name.
    args:
        Positional arguments of the call.
    nin:
        Number of inputs; defaults to all arguments.
    config:
        Resolver settings used for scanning.
    """

    types: dict[str, type]
    args: tuple[Any, ...]
    nin: int | None = None
    config: ResolverConfig = field(default_factory=ResolverConfig)

    @classmethod
    def from_mapping(cls, data: Mapping[str, Any]) -> "Scenario":
        if not isinstance(data, Mapping):
            raise ConfigurationError("scenario must be a mapping")
        types = build_types(data.get("types") or {})
        raw_args = data.get("args")
        if not isinstance(raw_args, list):
            raise ConfigurationError("scenario needs an 'args' list")
        args = tuple(
            types[item]() if isinstance(item, str) and item in types else item
            for item in raw_args
        )
        nin = data.get("nin")
        if nin is not None and (isinstance(nin, bool) or not isinstance(nin, int)):
            raise ConfigurationError(f"'nin' must be an integer, got {nin!r}")
        config = ResolverConfig.from_mapping(data.get("config") or {})
        return cls(types=types, args=args, nin=nin, config=config)

    @classmethod
    def load(cls, path: str | Path) -> "Scenario":
        path = Path(path)
        try:
            data = yaml.safe_load(path.read_text(encoding="utf-8"))
        except OSError as exc:
            raise ConfigurationError(f"cannot read scenario {path}: {exc}") from exc
        except yaml.YAMLError as exc:
            raise ConfigurationError(f"invalid YAML in {path}: {exc}") from exc
        return cls.from_mapping(data or {})

    def candidates(self) -> tuple[Candidate, ...]:
        policy = TypePolicy.from_config(self.config)
        return scan_candidates(self.args, max_arity=self.config.max_arity, policy=policy)

    def priority_order(self) -> list[Candidate]:
        """Return the candidates in the order their handlers would be tried."""
        policy = TypePolicy.from_config(self.config)
        return PrioritySelector(self.candidates(), policy).priority_order()

    def role_of(self, position: int) -> str:
        nin = len(self.args) if self.nin is None else self.nin
        return "input" if position < nin else "output"
