"""Resolver configuration.

A ``ResolverConfig`` controls which values are treated as plain (never
override-capable) and how many positional arguments a single call may
carry.  Configurations are immutable and can be loaded from YAML.

Usage
-----
::

    from ufunc_override.config import ResolverConfig, load_config

    config = ResolverConfig(max_arity=8, base_types=(MyArray,))
    config = load_config("override.yaml")

YAML layout
-----------
::

    ufunc_override:
      max_arity: 16
      base_types: [mypkg.arrays.Array]
      scalar_types: [int, float, complex, bool, str, bytes, decimal.Decimal]
      accept_not_implemented: true

The ``ufunc_override:`` wrapper is optional.  Types are named by dotted
import path; builtins may use their bare name.
"""
from __future__ import annotations

import builtins
import importlib
import logging
from collections.abc import Mapping
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any

import yaml

from ufunc_override.core.errors import ConfigurationError

logger = logging.getLogger(__name__)

DEFAULT_MAX_ARITY: int = 32
DEFAULT_SCALAR_TYPES: tuple[type, ...] = (bool, int, float, complex, str, bytes)

_SECTION = "ufunc_override"
_KNOWN_KEYS = frozenset(
    {"max_arity", "base_types", "scalar_types", "accept_not_implemented"}
)


@dataclass(frozen=True)
class ResolverConfig:
    """Immutable settings for a ``Resolver``.

    Parameters
    ----------
    max_arity:
        Upper bound on the number of positional arguments in one call.
    base_types:
        Exact instances of these types never take part in resolution
        (subclass instances still may).
    scalar_types:
        Instances of these types, including subclasses, never take part.
    accept_not_implemented:
        Treat a handler returning ``NotImplemented`` as a decline.
    """

    max_arity: int = DEFAULT_MAX_ARITY
    base_types: tuple[type, ...] = field(default=())
    scalar_types: tuple[type, ...] = field(default=DEFAULT_SCALAR_TYPES)
    accept_not_implemented: bool = True

    def __post_init__(self) -> None:
        if isinstance(self.max_arity, bool) or not isinstance(self.max_arity, int):
            raise ConfigurationError(
                f"max_arity must be an integer, got {self.max_arity!r}"
            )
        if self.max_arity < 1:
            raise ConfigurationError(
                f"max_arity must be at least 1, got {self.max_arity}"
            )
        for attr in ("base_types", "scalar_types"):
            types = tuple(getattr(self, attr))
            for item in types:
                if not isinstance(item, type):
                    raise ConfigurationError(
                        f"{attr} must contain only types, got {item!r}"
                    )
            object.__setattr__(self, attr, types)

    @classmethod
    def from_mapping(cls, data: Mapping[str, Any]) -> "ResolverConfig":
        """Build a config from a plain mapping, e.g. parsed YAML.

        Parameters
        ----------
        data:
            Keys are a subset of the dataclass fields.  Type lists hold
            dotted import paths.

        Raises
        ------
        ConfigurationError
            On unknown keys, wrong value types or unimportable type names.
        """
        if not isinstance(data, Mapping):
            raise ConfigurationError(
                f"configuration must be a mapping, got {type(data).__name__}"
            )
        unknown = sorted(set(data) - _KNOWN_KEYS)
        if unknown:
            raise ConfigurationError(
                f"unknown configuration key(s): {', '.join(map(str, unknown))}"
            )

        kwargs: dict[str, Any] = {}
        if "max_arity" in data:
            kwargs["max_arity"] = data["max_arity"]
        for key in ("base_types", "scalar_types"):
            if key in data:
                names = data[key]
                if names is None:
                    names = []
                if not isinstance(names, list):
                    raise ConfigurationError(f"{key} must be a list of type names")
                kwargs[key] = tuple(resolve_type_name(name) for name in names)
        if "accept_not_implemented" in data:
            flag = data["accept_not_implemented"]
            if not isinstance(flag, bool):
                raise ConfigurationError("accept_not_implemented must be true or false")
            kwargs["accept_not_implemented"] = flag
        return cls(**kwargs)

    def to_dict(self) -> dict[str, Any]:
        """Return a YAML-friendly representation of this config."""
        return {
            "max_arity": self.max_arity,
            "base_types": [type_name(t) for t in self.base_types],
            "scalar_types": [type_name(t) for t in self.scalar_types],
            "accept_not_implemented": self.accept_not_implemented,
        }

    def to_yaml(self) -> str:
        return yaml.dump({_SECTION: self.to_dict()}, default_flow_style=False, sort_keys=False)


def type_name(tp: type) -> str:
    """Return the name ``resolve_type_name`` would map back to ``tp``."""
    if tp.__module__ == "builtins":
        return tp.__qualname__
    return f"{tp.__module__}.{tp.__qualname__}"


def resolve_type_name(name: object) -> type:
    """Import and return the type named by ``name``.

    Raises
    ------
    ConfigurationError
        If ``name`` is not a string or does not name an importable type.
    """
    if not isinstance(name, str) or not name:
        raise ConfigurationError(f"type names must be non-empty strings, got {name!r}")

    obj: object = None
    parts = name.split(".")
    if not all(parts):
        raise ConfigurationError(f"cannot resolve {name!r} to a type: empty name segment")
    if len(parts) == 1:
        obj = getattr(builtins, name, None)
    else:
        # Longest importable module prefix wins; the rest are attributes.
        for split in range(len(parts) - 1, 0, -1):
            try:
                obj = importlib.import_module(".".join(parts[:split]))
            except ImportError:
                continue
            for attr in parts[split:]:
                obj = getattr(obj, attr, None)
            break

    if not isinstance(obj, type):
        raise ConfigurationError(f"cannot resolve {name!r} to a type")
    return obj


def load_config(path: str | Path) -> ResolverConfig:
    """Read a ``ResolverConfig`` from a YAML file.

    An empty file yields the default configuration.

    Raises
    ------
    ConfigurationError
        If the file cannot be read, is not valid YAML, or holds an
        invalid configuration.
    """
    path = Path(path)
    try:
        text = path.read_text(encoding="utf-8")
    except OSError as exc:
        raise ConfigurationError(f"cannot read configuration {path}: {exc}") from exc
    try:
        data = yaml.safe_load(text)
    except yaml.YAMLError as exc:
        raise ConfigurationError(f"invalid YAML in {path}: {exc}") from exc

    if data is None:
        data = {}
    if isinstance(data, Mapping) and _SECTION in data:
        data = data[_SECTION] or {}
    config = ResolverConfig.from_mapping(data)
    logger.debug("Loaded resolver configuration from %s: %r", path, config)
    return config
