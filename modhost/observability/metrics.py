"""Prometheus counters for registry activity."""

from __future__ import annotations

from prometheus_client import Counter

module_registrations_total = Counter(
    "modhost_module_registrations_total",
    "Modules registered, by category",
    ["category"],
)
module_load_failures_total = Counter(
    "modhost_module_load_failures_total",
    "Module references the loader failed to resolve",
)
lifecycle_calls_total = Counter(
    "modhost_lifecycle_calls_total",
    "Lifecycle hook invocations, by hook",
    ["hook"],
)
lifecycle_failures_total = Counter(
    "modhost_lifecycle_failures_total",
    "Lifecycle hooks that raised, by hook",
    ["hook"],
)
