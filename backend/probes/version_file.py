from __future__ import annotations

import asyncio
import json
import logging
from pathlib import Path

from backend.errors import ProbeUnavailableError
from backend.probes.base import BaseProbe

logger = logging.getLogger(__name__)


class VersionFileSource(BaseProbe[str | None]):
    """Reads the persisted current version from a ``{"version": ...}`` document.

    Returns ``None`` when the file is absent or unusable so the caller can keep
    its last-known version.
    """

    name = "version_file"

    def __init__(self, path: str | Path, timeout: float | None = None) -> None:
        super().__init__(timeout=timeout)
        self.path = Path(path)

    async def fetch(self) -> str | None:
        return await asyncio.to_thread(self._read)

    def fallback(self) -> str | None:
        return None

    def _read(self) -> str | None:
        if not self.path.exists():
            return None
        doc = json.loads(self.path.read_text())
        if not isinstance(doc, dict):
            raise ProbeUnavailableError(f"{self.path} is not a JSON object")
        version = doc.get("version")
        return version if isinstance(version, str) and version else None
