from __future__ import annotations

import math
import random
from typing import Protocol

from pydantic import BaseModel


class SyntheticRanges(BaseModel):
    """Bounds for the fabricated dashboard figures."""

    network_in: tuple[float, float] = (100.0, 600.0)
    network_out: tuple[float, float] = (50.0, 300.0)
    connections: tuple[float, float] = (10.0, 40.0)
    cache_hit: tuple[float, float] = (80.0, 95.0)
    cpu_jitter: tuple[float, float] = (0.0, 10.0)
    uptime_base: float = 99.95
    uptime_jitter: float = 0.05


class SyntheticMetricSource(Protocol):
    """Figures the dashboard displays that are not measured from the host.

    Swap the implementation to feed real numbers without touching the
    aggregator.
    """

    def network(self) -> tuple[int, int]: ...

    def active_connections(self) -> int: ...

    def cache_hit_ratio(self) -> float: ...

    def cpu_jitter(self) -> float: ...

    def variation_factor(self, now_ms: float) -> float: ...

    def uptime_percentage(self) -> float: ...


class RandomSyntheticMetrics:
    """Independently randomized values within ``SyntheticRanges`` on every call."""

    def __init__(
        self,
        ranges: SyntheticRanges | None = None,
        rng: random.Random | None = None,
    ) -> None:
        self.ranges = ranges or SyntheticRanges()
        self._rng = rng or random.Random()

    def _draw(self, bounds: tuple[float, float]) -> float:
        low, high = bounds
        return self._rng.random() * (high - low) + low

    def network(self) -> tuple[int, int]:
        return round(self._draw(self.ranges.network_in)), round(self._draw(self.ranges.network_out))

    def active_connections(self) -> int:
        return round(self._draw(self.ranges.connections))

    def cache_hit_ratio(self) -> float:
        return round(self._draw(self.ranges.cache_hit), 2)

    def cpu_jitter(self) -> float:
        return self._draw(self.ranges.cpu_jitter)

    def variation_factor(self, now_ms: float) -> float:
        # slow oscillation in [0.4, 1.0]
        return math.sin(now_ms / 10000) * 0.3 + 0.7

    def uptime_percentage(self) -> float:
        return round(self.ranges.uptime_base + self._rng.random() * self.ranges.uptime_jitter, 2)
