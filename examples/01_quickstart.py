#!/usr/bin/env python3
"""Example: Quickstart — ufunc-override

Minimal working example: define an overridable operation, give a user
type an override for it, and watch subclass-before-superclass priority
decide which override runs.

Usage:
    python examples/01_quickstart.py

Requirements:
    pip install ufunc-override
"""
from __future__ import annotations

import ufunc_override as uo


@uo.operation(nin=2)
def add(x, y, out=None):
    return x + y


class Quantity(uo.SupportsOverride):
    def __init__(self, value: float, unit: str) -> None:
        self.value = value
        self.unit = unit

    def __repr__(self) -> str:
        return f"{type(self).__name__}({self.value} {self.unit})"

    def __ufunc_override__(self, operation, method, position, inputs, kwargs):
        if method != "__call__":
            return uo.DECLINED
        units = {v.unit for v in inputs if isinstance(v, Quantity)}
        if len(units) != 1:
            return uo.DECLINED
        values = [v.value if isinstance(v, Quantity) else v for v in inputs]
        return type(self)(operation.func(*values), units.pop())


class Length(Quantity):
    """More specific than Quantity: gets the first chance to handle a call."""


def main() -> None:
    print(f"ufunc-override version: {uo.__version__}")

    # Step 1: No override-capable arguments, the default kernel runs
    print(f"add(1, 2) = {add(1, 2)}")

    # Step 2: One override-capable argument takes over
    print(f"add(Quantity(1, 'kg'), 2) = {add(Quantity(1, 'kg'), 2)}")

    # Step 3: The subclass wins even though it comes second
    print(f"add(Quantity(1, 'm'), Length(2, 'm')) = {add(Quantity(1, 'm'), Length(2, 'm'))}")

    # Step 4: Everyone declines, the operation is unsupported
    try:
        add(Quantity(1, "m"), Quantity(2, "s"))
    except uo.ResolutionExhausted as exc:
        print(f"Unsupported: {exc}")

    # Step 5: Ask the engine directly
    has_override, result = uo.resolve(add, "__call__", (3, 4))
    print(f"resolve(add, (3, 4)) -> has_override={has_override}, result={result}")


if __name__ == "__main__":
    main()
