from __future__ import annotations

import logging
import time
from datetime import datetime, timezone
from typing import Any

from fastapi import APIRouter, Body, Request
from fastapi.responses import JSONResponse

from backend.config import settings
from backend.engine import MetricsAggregator, UpdateOracle
from backend.storage import demo_config

logger = logging.getLogger(__name__)

router = APIRouter()


def _aggregator(request: Request) -> MetricsAggregator:
    return request.app.state.aggregator


def _oracle(request: Request) -> UpdateOracle:
    return request.app.state.oracle


# ── metrics ───────────────────────────────────────────


@router.get("/api/metrics")
async def get_metrics(request: Request) -> dict:
    aggregator = _aggregator(request)
    oracle = _oracle(request)

    snapshot = aggregator.snapshot()
    data = snapshot.model_dump(mode="json", by_alias=True)
    last = oracle.last_transition
    data["version"] = {
        "current": oracle.current_version,
        "uptime": snapshot.uptime.app,
    }
    data["uptime_tracking"] = {
        "server_start": int(aggregator.started_at * 1000),
        "current_uptime_seconds": int(time.time() - aggregator.started_at),
        "uptime_percentage": aggregator.synthetic.uptime_percentage(),
        "last_update": last.model_dump(mode="json", by_alias=True) if last else None,
        "zero_downtime": True,
        "history": [event.model_dump(mode="json") for event in oracle.uptime_history],
    }
    return data


# ── update status ─────────────────────────────────────


@router.get("/api/update-status")
async def get_update_status(request: Request) -> Any:
    oracle = _oracle(request)
    try:
        report = await oracle.check_status()
    except Exception as exc:
        logger.exception("Error checking update status")
        current = oracle.current_version
        return JSONResponse(
            status_code=500,
            content={
                "error": str(exc),
                "current_version": current,
                "latest_version": current,
                "update_available": False,
                "update_in_progress": False,
            },
        )
    return report.model_dump(mode="json")


@router.get("/api/bootc-status")
async def get_bootc_status(request: Request) -> Any:
    try:
        status = await _oracle(request).bootc_status()
    except Exception as exc:
        logger.exception("Error getting bootc status")
        return JSONResponse(status_code=500, content={"error": str(exc)})
    return status.model_dump(mode="json")


# ── demo config ───────────────────────────────────────


@router.get("/api/demo-config")
async def get_demo_config() -> Any:
    return await demo_config.load_demo_config(settings.demo_config_file)


@router.post("/api/demo-config")
async def post_demo_config(config: Any = Body(...)) -> Any:
    try:
        await demo_config.save_demo_config(settings.demo_config_file, config)
    except (OSError, TypeError, ValueError) as exc:
        logger.error("Cannot write demo config: %s", exc)
        return JSONResponse(status_code=500, content={"error": str(exc)})
    return {"success": True}


# ── health ────────────────────────────────────────────


@router.get("/health")
async def health(request: Request) -> dict:
    oracle = _oracle(request)
    return {
        "status": "healthy",
        "version": oracle.current_version,
        "uptime": oracle.uptime_seconds(),
        "timestamp": datetime.now(timezone.utc).isoformat(),
    }
