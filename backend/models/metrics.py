from __future__ import annotations

import time

from pydantic import BaseModel, ConfigDict, Field


class _WireModel(BaseModel):
    """Snake-case fields in Python, dashboard wire names on output."""

    model_config = ConfigDict(populate_by_name=True)


class CpuStats(_WireModel):
    usage: float = 0.0
    cores: int = 0


class MemoryStats(_WireModel):
    total_mb: int = Field(0, alias="total")
    used_mb: int = Field(0, alias="used")
    free_mb: int = Field(0, alias="free")
    percent: float = 0.0


class RequestStats(_WireModel):
    total: int = 0
    avg_response_time_ms: float = Field(0.0, alias="avgResponseTime")
    per_second: int = Field(1, alias="perSecond")


class UptimeStats(_WireModel):
    system: int = 0
    app: int = 0


class LoadAverage(_WireModel):
    one: str = Field("0.00", alias="1min")
    five: str = Field("0.00", alias="5min")
    fifteen: str = Field("0.00", alias="15min")


class NetworkStats(_WireModel):
    inbound: int = Field(0, alias="in")
    outbound: int = Field(0, alias="out")


class PerformanceStats(_WireModel):
    active_connections: int = Field(0, alias="activeConnections")
    cache_hit_ratio: float = Field(0.0, alias="cacheHitRatio")


class HostInfo(_WireModel):
    platform: str = ""
    arch: str = ""
    hostname: str = ""
    python_version: str = Field("", alias="pythonVersion")


class MetricsSnapshot(_WireModel):
    """Point-in-time read of host and request metrics, recomputed per query."""

    timestamp: int = Field(default_factory=lambda: int(time.time() * 1000))
    cpu: CpuStats = Field(default_factory=CpuStats)
    memory: MemoryStats = Field(default_factory=MemoryStats)
    requests: RequestStats = Field(default_factory=RequestStats)
    uptime: UptimeStats = Field(default_factory=UptimeStats)
    load: LoadAverage = Field(default_factory=LoadAverage)
    network: NetworkStats = Field(default_factory=NetworkStats)
    performance: PerformanceStats = Field(default_factory=PerformanceStats)
    system: HostInfo = Field(default_factory=HostInfo)
