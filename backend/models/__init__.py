from .metrics import (
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
from .update import (
    BootcStatus,
    ReleaseInfo,
    UpdateStatusReport,
    UpdateStatusSnapshot,
    UptimeEvent,
    VersionTransition,
)

__all__ = [
    "BootcStatus",
    "CpuStats",
    "HostInfo",
    "LoadAverage",
    "MemoryStats",
    "MetricsSnapshot",
    "NetworkStats",
    "PerformanceStats",
    "ReleaseInfo",
    "RequestStats",
    "UpdateStatusReport",
    "UpdateStatusSnapshot",
    "UptimeEvent",
    "UptimeStats",
    "VersionTransition",
]
