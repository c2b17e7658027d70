from __future__ import annotations

import logging
import platform
import socket
import sys
import time

import psutil

logger = logging.getLogger(__name__)

_HOST_ERRORS = (psutil.Error, OSError, AttributeError, NotImplementedError)


class HostIntrospector:
    """Reads host-level counters through psutil.

    Every accessor returns ``None`` (or an empty default) when the host does
    not expose the figure, leaving the substitution policy to the caller.
    """

    def __init__(self) -> None:
        # First call returns 0.0; prime it so the next read covers a real interval
        self.cpu_percent()

    def cpu_percent(self) -> float | None:
        """Busy percentage across all cores since the previous call."""
        try:
            return psutil.cpu_percent(interval=None)
        except _HOST_ERRORS:
            logger.debug("CPU percent unavailable", exc_info=True)
            return None

    def cpu_count(self) -> int:
        try:
            return psutil.cpu_count() or 0
        except _HOST_ERRORS:
            return 0

    def memory(self) -> tuple[int, int] | None:
        """Return ``(total, free)`` bytes."""
        try:
            vm = psutil.virtual_memory()
        except _HOST_ERRORS:
            logger.debug("Virtual memory unavailable", exc_info=True)
            return None
        return vm.total, vm.available

    def load_average(self) -> tuple[float, float, float] | None:
        try:
            return psutil.getloadavg()
        except _HOST_ERRORS:
            logger.debug("Load average unavailable", exc_info=True)
            return None

    def uptime_seconds(self) -> float | None:
        try:
            return time.time() - psutil.boot_time()
        except _HOST_ERRORS:
            logger.debug("Boot time unavailable", exc_info=True)
            return None

    @staticmethod
    def host_info() -> dict[str, str]:
        return {
            "platform": sys.platform,
            "arch": platform.machine(),
            "hostname": socket.gethostname(),
            "python_version": platform.python_version(),
        }
