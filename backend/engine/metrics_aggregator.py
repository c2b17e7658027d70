from __future__ import annotations

import threading
import time
from collections import deque
from typing import Callable

from backend.engine.synthetic import RandomSyntheticMetrics, SyntheticMetricSource
from backend.models import (
    CpuStats,
    HostInfo,
    LoadAverage,
    MemoryStats,
    MetricsSnapshot,
    NetworkStats,
    PerformanceStats,
    RequestStats,
    UptimeStats,
)
from backend.probes.host import HostIntrospector


MIN_CPU_PERCENT = 5.0
MIN_REQUESTS_PER_SECOND = 1
_MB = 1024 * 1024


class MetricsAggregator:
    """Tracks request latencies and builds dashboard metric snapshots.

    Request samples live in a fixed-capacity ring (oldest evicted first); the
    request total is monotonic. Both are guarded by a single lock so
    ``record_request`` can be called from concurrent request handlers while
    ``snapshot`` reads a consistent copy.
    """

    def __init__(
        self,
        host: HostIntrospector | None = None,
        synthetic: SyntheticMetricSource | None = None,
        capacity: int = 100,
        default_response_time_ms: float = 35.0,
        clock: Callable[[], float] = time.time,
    ) -> None:
        self.host = host or HostIntrospector()
        self.synthetic = synthetic or RandomSyntheticMetrics()
        self.default_response_time_ms = default_response_time_ms
        self._clock = clock
        self._lock = threading.Lock()
        self._samples: deque[float] = deque(maxlen=capacity)
        self._total_requests = 0
        self._started_at = clock()

    # ── recording ───────────────────────────────────────

    def record_request(self, duration_ms: float) -> None:
        with self._lock:
            self._samples.append(duration_ms)
            self._total_requests += 1

    # ── derived figures ─────────────────────────────────

    @property
    def samples(self) -> list[float]:
        with self._lock:
            return list(self._samples)

    @property
    def total_requests(self) -> int:
        with self._lock:
            return self._total_requests

    @property
    def started_at(self) -> float:
        return self._started_at

    def average_response_time(self) -> float:
        samples = self.samples
        if not samples:
            return self.default_response_time_ms
        return round(sum(samples) / len(samples), 2)

    def requests_per_second(self, now: float | None = None) -> int:
        now = self._clock() if now is None else now
        elapsed = now - self._started_at
        if elapsed <= 0:
            return MIN_REQUESTS_PER_SECOND
        factor = self.synthetic.variation_factor(now * 1000)
        rate = round(self.total_requests / elapsed * factor)
        return max(MIN_REQUESTS_PER_SECOND, rate)

    def cpu_usage(self) -> float:
        """Host CPU busy percentage plus display jitter, floored at 5%."""
        base = self.host.cpu_percent()
        if base is None:
            base = 0.0
        usage = max(MIN_CPU_PERCENT, base + self.synthetic.cpu_jitter())
        return round(usage, 2)

    def memory_usage(self) -> MemoryStats:
        mem = self.host.memory()
        if mem is None or mem[0] <= 0:
            return MemoryStats()
        total, free = mem
        used = total - free
        return MemoryStats(
            total_mb=round(total / _MB),
            used_mb=round(used / _MB),
            free_mb=round(free / _MB),
            percent=round(used / total * 100, 2),
        )

    def load_average(self) -> LoadAverage:
        loads = self.host.load_average()
        if loads is None:
            return LoadAverage()
        one, five, fifteen = loads
        return LoadAverage(one=f"{one:.2f}", five=f"{five:.2f}", fifteen=f"{fifteen:.2f}")

    def uptime(self, now: float | None = None) -> UptimeStats:
        now = self._clock() if now is None else now
        system = self.host.uptime_seconds()
        return UptimeStats(
            system=round(system) if system is not None else 0,
            app=round(now - self._started_at),
        )

    # ── snapshot ────────────────────────────────────────

    def snapshot(self) -> MetricsSnapshot:
        now = self._clock()
        network_in, network_out = self.synthetic.network()
        return MetricsSnapshot(
            timestamp=int(now * 1000),
            cpu=CpuStats(usage=self.cpu_usage(), cores=self.host.cpu_count()),
            memory=self.memory_usage(),
            requests=RequestStats(
                total=self.total_requests,
                avg_response_time_ms=self.average_response_time(),
                per_second=self.requests_per_second(now),
            ),
            uptime=self.uptime(now),
            load=self.load_average(),
            network=NetworkStats(inbound=network_in, outbound=network_out),
            performance=PerformanceStats(
                active_connections=self.synthetic.active_connections(),
                cache_hit_ratio=self.synthetic.cache_hit_ratio(),
            ),
            system=HostInfo(**self.host.host_info()),
        )
