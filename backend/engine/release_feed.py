from __future__ import annotations

import logging
from pathlib import Path

import yaml

from backend.models import ReleaseInfo

logger = logging.getLogger(__name__)

DEFAULT_PROGRESSION: dict[str, str] = {
    "v2.1.0": "v2.2.0",
    "v2.2.0": "v2.3.0",
}


def load_progression(path: str | Path | None) -> dict[str, str]:
    """Load the ``version -> next version`` table from YAML.

    Falls back to ``DEFAULT_PROGRESSION`` when the file is missing or invalid.
    """
    if path is None or not Path(path).exists():
        return dict(DEFAULT_PROGRESSION)
    try:
        raw = yaml.safe_load(Path(path).read_text())
    except (OSError, yaml.YAMLError):
        logger.warning("Cannot read release progression %s, using defaults", path)
        return dict(DEFAULT_PROGRESSION)

    entries = raw.get("progression", raw) if isinstance(raw, dict) else None
    if not isinstance(entries, dict):
        logger.warning("Release progression %s is not a mapping, using defaults", path)
        return dict(DEFAULT_PROGRESSION)

    progression: dict[str, str] = {}
    for current, nxt in entries.items():
        if not isinstance(nxt, str) or not nxt:
            logger.warning("Skipping invalid progression entry: %s", current)
            continue
        progression[str(current)] = nxt
    return progression


class SimulatedReleaseFeed:
    """Stands in for a release API: newer releases appear after a fixed uptime."""

    def __init__(
        self,
        progression: dict[str, str] | None = None,
        release_delay_seconds: float = 60.0,
        url_template: str = "https://github.com/jfiorinanl/demo-image-mode/releases/tag/{version}",
    ) -> None:
        self.progression = dict(DEFAULT_PROGRESSION) if progression is None else progression
        self.release_delay_seconds = release_delay_seconds
        self.url_template = url_template

    def latest_version(self, current_version: str, uptime_seconds: float) -> str:
        if uptime_seconds < self.release_delay_seconds:
            return current_version
        return self.progression.get(current_version, current_version)

    def latest_release(self, current_version: str, uptime_seconds: float) -> ReleaseInfo:
        version = self.latest_version(current_version, uptime_seconds)
        return ReleaseInfo(
            tag_name=version,
            html_url=self.url_template.format(version=version),
        )
