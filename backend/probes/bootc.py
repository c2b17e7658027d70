from __future__ import annotations

import asyncio
import contextlib
import json
import logging
from typing import Any, Sequence

from backend.errors import ProbeUnavailableError
from backend.models import BootcStatus
from backend.probes.base import BaseProbe

logger = logging.getLogger(__name__)


class BootcProbe(BaseProbe[BootcStatus]):
    """Runs ``bootc status --json`` and reports whether an image is staged.

    Hosts without bootc (or where it fails) get a fallback status with no
    pending update. ``current_image`` is left as ``None`` when the host does
    not report one; the update oracle fills in its own current version.
    """

    name = "bootc"

    def __init__(
        self,
        command: Sequence[str] = ("bootc", "status", "--json"),
        timeout: float | None = None,
    ) -> None:
        super().__init__(timeout=timeout)
        self.command = list(command)

    async def fetch(self) -> BootcStatus:
        try:
            proc = await asyncio.create_subprocess_exec(
                *self.command,
                stdout=asyncio.subprocess.PIPE,
                stderr=asyncio.subprocess.DEVNULL,
            )
        except FileNotFoundError as exc:
            raise ProbeUnavailableError(f"{self.command[0]} not installed") from exc

        try:
            stdout, _ = await proc.communicate()
        except asyncio.CancelledError:
            with contextlib.suppress(ProcessLookupError):
                proc.kill()
            raise

        if proc.returncode != 0:
            raise ProbeUnavailableError(
                f"{' '.join(self.command)} exited with {proc.returncode}"
            )
        return self.parse(stdout.decode(errors="replace"))

    def fallback(self) -> BootcStatus:
        return BootcStatus(current_image=None, staged_image=None, update_pending=False)

    @classmethod
    def parse(cls, raw: str) -> BootcStatus:
        """Map bootc's status document onto a ``BootcStatus``."""
        raw = raw.strip()
        if not raw:
            raise ProbeUnavailableError("empty bootc status output")
        doc = json.loads(raw)
        if not isinstance(doc, dict):
            raise ProbeUnavailableError("bootc status is not a JSON object")

        spec = doc.get("spec")
        status = doc.get("status")
        if not isinstance(spec, dict):
            spec = {}
        staged = status.get("staged") if isinstance(status, dict) else None
        return BootcStatus(
            current_image=cls._image_ref(spec.get("image")),
            staged_image=cls._image_ref(staged.get("image")) if isinstance(staged, dict) else None,
            update_pending=bool(staged),
        )

    @staticmethod
    def _image_ref(value: Any) -> str | None:
        # bootc nests references as {"image": "...", "transport": "..."}
        if isinstance(value, dict):
            value = value.get("image")
        if isinstance(value, dict):
            value = value.get("image")
        return value if isinstance(value, str) and value else None
