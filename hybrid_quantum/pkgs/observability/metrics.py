"""Per-component seeding and run metrics."""

import hashlib
import time
from contextlib import contextmanager
from typing import Any, Dict, Iterator, List

import numpy as np
import torch


class SeedManager:
    """Derives a reproducible generator for each engine component from one global seed."""

    def __init__(self, global_seed: int = 0):
        self.global_seed = global_seed
        self.component_seeds: Dict[str, int] = {}
        np.random.seed(global_seed)
        torch.manual_seed(global_seed)

    def get_component_seed(self, component: str) -> int:
        if component not in self.component_seeds:
            digest = hashlib.md5(f"{self.global_seed}_{component}".encode()).hexdigest()
            self.component_seeds[component] = int(digest[:8], 16) % (2**31)
        return self.component_seeds[component]

    def generator(self, component: str) -> np.random.Generator:
        return np.random.default_rng(self.get_component_seed(component))

    def generators(self, *components: str) -> Dict[str, np.random.Generator]:
        """One independent generator per named component."""
        return {name: self.generator(name) for name in components}


class MetricsCollector:
    """Gauges, counters, wall-clock timers and per-run value series."""

    def __init__(self):
        self.metrics: Dict[str, Any] = {}
        self.counters: Dict[str, int] = {}
        self.timers: Dict[str, float] = {}
        self.series: Dict[str, List[float]] = {}

    def set_metric(self, name: str, value: Any):
        self.metrics[name] = value

    def increment_counter(self, name: str, delta: int = 1):
        self.counters[name] = self.counters.get(name, 0) + delta

    def observe(self, name: str, value: float):
        """Append a value to a named series (fidelity per measurement, loss per epoch)."""
        self.series.setdefault(name, []).append(float(value))

    @contextmanager
    def timed(self, name: str) -> Iterator[None]:
        start = time.perf_counter()
        try:
            yield
        finally:
            self.timers[name] = time.perf_counter() - start

    def get_all_metrics(self) -> Dict[str, Any]:
        return {
            "metrics": dict(self.metrics),
            "counters": dict(self.counters),
            "timers": dict(self.timers),
            "series": {name: list(values) for name, values in self.series.items()},
        }

    def reset(self):
        self.metrics.clear()
        self.counters.clear()
        self.timers.clear()
        self.series.clear()

    def summary_stats(self) -> Dict[str, Any]:
        """Totals plus the mean and last value of every series."""
        stats: Dict[str, Any] = {
            "total_metrics": len(self.metrics),
            "counter_sum": sum(self.counters.values()),
            "timer_total": sum(self.timers.values()),
        }
        for name, values in self.series.items():
            stats[f"{name}_mean"] = float(np.mean(values))
            stats[f"{name}_last"] = values[-1]
        return stats
