"""Metrics instrumentation for the inventory cache."""

from __future__ import annotations

from prometheus_client import Counter

remote_fallbacks_total = Counter(
    "lojinha_remote_fallbacks_total",
    "Remote failures answered from local state",
    ["operation"],
)
inventory_mutations_total = Counter(
    "lojinha_inventory_mutations_total",
    "Inventory mutations applied to the snapshot",
    ["operation", "mode"],
)


def inc_fallback(operation: str) -> None:
    remote_fallbacks_total.labels(operation=operation).inc()


def inc_mutation(operation: str, mode: str) -> None:
    inventory_mutations_total.labels(operation=operation, mode=mode).inc()
