"""Benchmark: override resolution latency (p50/p95/mean).

Measures per-call latency of ``resolve`` for a call with no
override-capable arguments and for a call where a subclass must be
selected ahead of its base class after one decline.
"""
from __future__ import annotations

import json
import sys
import time
from pathlib import Path

sys.path.insert(0, str(Path(__file__).parent.parent / "src"))

import ufunc_override
from ufunc_override import DECLINED, SupportsOverride

_WARMUP: int = 100
_ITERATIONS: int = 5_000


class _Base(SupportsOverride):
    def __ufunc_override__(self, operation, method, position, inputs, kwargs):
        return "base"


class _Sub(_Base):
    def __ufunc_override__(self, operation, method, position, inputs, kwargs):
        return DECLINED


@ufunc_override.operation(nin=2)
def _add(x, y, out=None):
    return x + y


_PLAIN_ARGS = (1.0, 2.0)
_OVERRIDE_ARGS = (_Base(), 1.0, _Sub(), None)


def _measure(name: str, args: tuple[object, ...]) -> dict[str, object]:
    for _ in range(_WARMUP):
        ufunc_override.resolve(_add, "__call__", args)

    latencies_ms: list[float] = []
    for _ in range(_ITERATIONS):
        t0 = time.perf_counter()
        ufunc_override.resolve(_add, "__call__", args)
        latencies_ms.append((time.perf_counter() - t0) * 1000)

    sorted_lats = sorted(latencies_ms)
    n = len(sorted_lats)
    total = sum(latencies_ms) / 1000

    result: dict[str, object] = {
        "operation": name,
        "iterations": _ITERATIONS,
        "total_seconds": round(total, 4),
        "ops_per_second": round(_ITERATIONS / total, 1),
        "avg_latency_ms": round(sum(latencies_ms) / n, 4),
        "p50_ms": round(sorted_lats[int(n * 0.50)], 4),
        "p95_ms": round(sorted_lats[min(int(n * 0.95), n - 1)], 4),
    }
    print(
        f"[bench_latency] {result['operation']}: "
        f"p50={result['p50_ms']:.4f}ms  p95={result['p95_ms']:.4f}ms  "
        f"mean={result['avg_latency_ms']:.4f}ms"
    )
    return result


def bench_no_override_latency() -> dict[str, object]:
    """Benchmark ``resolve`` when no argument is override-capable.

    Returns
    -------
    dict with keys: operation, iterations, total_seconds, ops_per_second,
    avg_latency_ms, p50_ms, p95_ms.
    """
    return _measure("resolve_no_override", _PLAIN_ARGS)


def bench_override_latency() -> dict[str, object]:
    """Benchmark ``resolve`` with a declining subclass and an accepting base."""
    return _measure("resolve_subclass_decline_then_base", _OVERRIDE_ARGS)


if __name__ == "__main__":
    results = [bench_no_override_latency(), bench_override_latency()]
    results_dir = Path(__file__).parent / "results"
    results_dir.mkdir(exist_ok=True)
    output_path = results_dir / "latency_baseline.json"
    with open(output_path, "w", encoding="utf-8") as fh:
        json.dump(results, fh, indent=2)
    print(f"Results saved to {output_path}")
