from __future__ import annotations

from datetime import datetime, timezone

from pydantic import BaseModel, Field


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


class ReleaseInfo(BaseModel):
    """Simulated release feed entry (shaped like a GitHub release)."""

    tag_name: str
    published_at: datetime = Field(default_factory=_utcnow)
    html_url: str = ""


class BootcStatus(BaseModel):
    """Result of the pending-update probe."""

    current_image: str | None = None
    staged_image: str | None = None
    update_pending: bool = False


class UpdateStatusSnapshot(BaseModel):
    current_version: str
    latest_version: str
    update_available: bool = False
    update_in_progress: bool = False
    update_completed: bool = False
    pending_image: str | None = None


class UpdateStatusReport(UpdateStatusSnapshot):
    """Verdict plus the raw probe and release payloads it was derived from."""

    bootc_status: BootcStatus
    github_release: ReleaseInfo


class VersionTransition(BaseModel):
    from_version: str = Field(alias="from")
    to_version: str = Field(alias="to")
    timestamp: int  # epoch ms
    downtime_seconds: int = 0

    model_config = {"populate_by_name": True}


class UptimeEvent(BaseModel):
    timestamp: int  # epoch ms
    event: str = "version_update"
    uptime_maintained: bool = True
