from __future__ import annotations

import logging
import time
from contextlib import asynccontextmanager
from pathlib import Path

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.staticfiles import StaticFiles

from backend.api.routes import router
from backend.config import settings
from backend.engine import (
    MetricsAggregator,
    RandomSyntheticMetrics,
    SimulatedReleaseFeed,
    SyntheticRanges,
    UpdateOracle,
    load_progression,
)
from backend.probes import BootcProbe, HostIntrospector, VersionFileSource

logger = logging.getLogger(__name__)


def build_aggregator() -> MetricsAggregator:
    ranges = SyntheticRanges(
        network_in=settings.network_in_range,
        network_out=settings.network_out_range,
        connections=settings.connections_range,
        cache_hit=settings.cache_hit_range,
    )
    return MetricsAggregator(
        host=HostIntrospector(),
        synthetic=RandomSyntheticMetrics(ranges),
        capacity=settings.response_time_capacity,
        default_response_time_ms=settings.default_response_time_ms,
    )


def build_oracle() -> UpdateOracle:
    feed = SimulatedReleaseFeed(
        progression=load_progression(settings.release_progression_file),
        release_delay_seconds=settings.release_delay_seconds,
        url_template=settings.release_url_template,
    )
    return UpdateOracle(
        version_source=VersionFileSource(settings.version_file, timeout=settings.probe_timeout),
        status_probe=BootcProbe(settings.bootc_command, timeout=settings.probe_timeout),
        feed=feed,
        cache_ttl_seconds=settings.update_cache_ttl_seconds,
        initial_version=settings.app_version,
    )


@asynccontextmanager
async def lifespan(app: FastAPI):
    # ── startup ───────────────────────────────────────
    aggregator = build_aggregator()
    oracle = build_oracle()
    await oracle.initialize()

    # Store on app.state for route access
    app.state.aggregator = aggregator
    app.state.oracle = oracle

    logger.info("Metrics server started at version %s", oracle.current_version)

    yield

    # ── shutdown ──────────────────────────────────────
    logger.info("Metrics server shut down")


app = FastAPI(title=settings.app_name, lifespan=lifespan)

app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


@app.middleware("http")
async def record_request_timing(request: Request, call_next):
    """Feed every request's latency into the metrics aggregator."""
    start = time.perf_counter()
    response = await call_next(request)
    aggregator: MetricsAggregator | None = getattr(request.app.state, "aggregator", None)
    if aggregator is not None:
        aggregator.record_request((time.perf_counter() - start) * 1000)
    return response


app.include_router(router)

# Serve the dashboard files when present. API routes are registered first,
# so /api/* and /health still win over the static mount.
_STATIC_DIR = Path(settings.static_dir)
if _STATIC_DIR.is_dir():
    app.mount("/", StaticFiles(directory=str(_STATIC_DIR), html=True), name="static")
