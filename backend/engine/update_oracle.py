from __future__ import annotations

import logging
import time
from typing import Callable

from backend.engine.release_feed import SimulatedReleaseFeed
from backend.errors import UpdateStatusError
from backend.models import (
    BootcStatus,
    ReleaseInfo,
    UpdateStatusReport,
    UptimeEvent,
    VersionTransition,
)
from backend.probes.base import BaseProbe

logger = logging.getLogger(__name__)


class UpdateOracle:
    """Decides whether the dashboard shows an update as available or in progress.

    Three inputs feed the verdict: the current version (re-read from the
    version source on every query, last-known value kept when unreadable), the
    pending-update probe, and the simulated release feed. The release lookup is
    cached for ``cache_ttl_seconds``.

    States:
        up to date          latest == current, nothing staged
        update available    latest != current, nothing staged
        update in progress  an image is staged (regardless of versions)
    """

    def __init__(
        self,
        version_source: BaseProbe[str | None],
        status_probe: BaseProbe[BootcStatus],
        feed: SimulatedReleaseFeed | None = None,
        cache_ttl_seconds: float = 30.0,
        initial_version: str = "v2.1.0",
        clock: Callable[[], float] = time.monotonic,
        wall_clock: Callable[[], float] = time.time,
    ) -> None:
        self.version_source = version_source
        self.status_probe = status_probe
        self.feed = feed or SimulatedReleaseFeed()
        self.cache_ttl_seconds = cache_ttl_seconds
        self._clock = clock
        self._wall_clock = wall_clock
        self._current_version = initial_version
        self._started_at = clock()
        self._cached_release: ReleaseInfo | None = None
        self._last_checked_at: float | None = None
        self.last_transition: VersionTransition | None = None
        self.uptime_history: list[UptimeEvent] = []

    # ── version tracking ────────────────────────────────

    @property
    def current_version(self) -> str:
        return self._current_version

    def uptime_seconds(self) -> float:
        return self._clock() - self._started_at

    async def initialize(self) -> None:
        """Load the persisted version at startup without recording a transition."""
        version = await self.version_source.read()
        if version:
            self._current_version = version
        logger.info("Update oracle starting at version %s", self._current_version)

    async def refresh_current_version(self) -> str:
        version = await self.version_source.read()
        if version is None:
            logger.debug("Version source unreadable, keeping %s", self._current_version)
        elif version != self._current_version:
            self.record_version_transition(version)
        return self._current_version

    def record_version_transition(self, new_version: str) -> VersionTransition:
        now_ms = int(self._wall_clock() * 1000)
        transition = VersionTransition(
            from_version=self._current_version,
            to_version=new_version,
            timestamp=now_ms,
            downtime_seconds=0,
        )
        self.last_transition = transition
        self.uptime_history.append(UptimeEvent(timestamp=now_ms))
        logger.info("Version changed %s -> %s", self._current_version, new_version)
        self._current_version = new_version
        # The cached release was computed against the previous version
        self._cached_release = None
        self._last_checked_at = None
        return transition

    # ── release feed ────────────────────────────────────

    def latest_release(self) -> ReleaseInfo:
        """Return the cached release, recomputing it once the TTL has passed."""
        now = self._clock()
        expired = (
            self._cached_release is None
            or self._last_checked_at is None
            or now - self._last_checked_at > self.cache_ttl_seconds
        )
        if expired:
            self._cached_release = self.feed.latest_release(
                self._current_version, now - self._started_at
            )
            self._last_checked_at = now
        release = self._cached_release
        if not isinstance(release, ReleaseInfo) or not release.tag_name:
            raise UpdateStatusError(f"malformed cached release: {release!r}")
        return release

    # ── status ──────────────────────────────────────────

    async def bootc_status(self) -> BootcStatus:
        status = await self.status_probe.read()
        if status.current_image is None:
            status = status.model_copy(update={"current_image": self._current_version})
        return status

    async def check_status(self) -> UpdateStatusReport:
        current = await self.refresh_current_version()
        bootc = await self.bootc_status()
        release = self.latest_release()

        pending = bootc.update_pending
        return UpdateStatusReport(
            current_version=current,
            latest_version=release.tag_name,
            update_available=release.tag_name != current and not pending,
            update_in_progress=pending,
            update_completed=False,
            pending_image=bootc.staged_image,
            bootc_status=bootc,
            github_release=release,
        )
