from __future__ import annotations

import asyncio
import json
import logging
from pathlib import Path
from typing import Any

logger = logging.getLogger(__name__)


def default_demo_config() -> dict[str, Any]:
    """Minimal dashboard layout used until a config document is written."""
    return {
        "show_metrics": False,
        "banner": {"show": False},
        "theme": "minimal",
        "panels": [],
    }


async def load_demo_config(path: str | Path) -> dict[str, Any]:
    """Return the stored demo config, or the default when it cannot be read."""
    try:
        raw = await asyncio.to_thread(Path(path).read_text)
        doc = json.loads(raw)
    except (OSError, ValueError):
        logger.debug("Demo config %s unavailable, using default", path)
        return default_demo_config()
    if not isinstance(doc, dict):
        return default_demo_config()
    return doc


async def save_demo_config(path: str | Path, config: Any) -> None:
    """Write the demo config document. Raises ``OSError`` on write failure."""
    text = json.dumps(config, indent=2)
    await asyncio.to_thread(Path(path).write_text, text)
    logger.info("Demo config written to %s", path)
