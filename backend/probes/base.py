from __future__ import annotations

import asyncio
import logging
from abc import ABC, abstractmethod
from typing import Generic, TypeVar

from backend.errors import ProbeUnavailableError

logger = logging.getLogger(__name__)

T = TypeVar("T")


class BaseProbe(ABC, Generic[T]):
    """Abstract base for external host probes.

    Subclasses implement ``fetch()``. ``read()`` bounds it with a timeout and
    substitutes ``fallback()`` when the probe is unavailable, so callers never
    block on a hung host command or see its failure.
    """

    name: str = "base"
    timeout: float = 5.0  # seconds

    def __init__(self, timeout: float | None = None) -> None:
        if timeout is not None:
            self.timeout = timeout

    @abstractmethod
    async def fetch(self) -> T:
        """Query the host and return the probe result."""
        ...

    @abstractmethod
    def fallback(self) -> T:
        """Result used when ``fetch()`` fails or times out."""
        ...

    async def read(self) -> T:
        try:
            return await asyncio.wait_for(self.fetch(), timeout=self.timeout)
        except asyncio.TimeoutError:
            logger.warning("Probe [%s] timed out after %.1fs", self.name, self.timeout)
        except (ProbeUnavailableError, OSError, ValueError) as exc:
            logger.warning("Probe [%s] unavailable: %s", self.name, exc)
        return self.fallback()
