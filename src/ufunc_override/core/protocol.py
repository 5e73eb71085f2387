"""The override capability interface.

A value takes part in override resolution when it is an instance of
``SupportsOverride``.  That is the case when its class

* subclasses ``SupportsOverride`` explicitly,
* is registered with ``SupportsOverride.register(cls)``, or
* defines ``__ufunc_override__`` anywhere in its MRO.

Setting ``__ufunc_override__ = None`` in a subclass opts that subclass out
again, mirroring how ``__hash__ = None`` works for ``collections.abc.Hashable``.

Example
-------
::

    from ufunc_override import DECLINED, SupportsOverride

    class Tagged(SupportsOverride):
        def __ufunc_override__(self, operation, method, position, inputs, kwargs):
            if method != "__call__":
                return DECLINED
            return ("tagged", operation.name, inputs)
"""
from __future__ import annotations

from abc import ABC, abstractmethod
from collections.abc import Mapping
from typing import Any

HOOK_NAME = "__ufunc_override__"


class SupportsOverride(ABC):
    """Abstract interface for values that customise numeric operations."""

    __slots__ = ()

    @abstractmethod
    def __ufunc_override__(
        self,
        operation: Any,
        method: str,
        position: int,
        inputs: tuple[Any, ...],
        kwargs: Mapping[str, Any],
    ) -> Any:
        """Handle ``operation`` or decline it.

        Parameters
        ----------
        operation:
            The operation descriptor being dispatched.
        method:
            Which method of the operation was called (``"__call__"``,
            ``"reduce"``, ...).
        position:
            Index of ``self`` in the original positional arguments.
        inputs:
            The first ``nin`` positional arguments.
        kwargs:
            Read-only keyword arguments, with any positional outputs
            folded into ``"out"``.

        Returns
        -------
        Any
            The result of the operation, an ``Accepted`` wrapper, or
            ``DECLINED`` to let the next candidate try.
        """

    @classmethod
    def __subclasshook__(cls, subclass: type) -> Any:
        if cls is SupportsOverride and hook_in_mro(subclass):
            return True
        return NotImplemented


def hook_in_mro(cls: type) -> bool | None:
    """Look up ``__ufunc_override__`` along the MRO of ``cls`` without caching.

    Returns ``True`` if the nearest definition is a real handler, ``False``
    if it is ``None`` (opted out), and ``None`` if no class defines it.
    """
    for klass in cls.__mro__:
        if HOOK_NAME in klass.__dict__:
            return klass.__dict__[HOOK_NAME] is not None
    return None
