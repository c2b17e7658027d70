"""
Uvicorn entry point for the demo metrics server.

Usage:
    python -m backend.run [--host HOST] [--port PORT] [--reload]
"""

from __future__ import annotations

import argparse
import logging

import uvicorn

from backend.config import settings


def main() -> None:
    """Run the metrics server."""
    parser = argparse.ArgumentParser(description="Run the image-mode demo metrics server")
    parser.add_argument("--host", default=settings.host, help="Host to bind to")
    parser.add_argument("--port", type=int, default=settings.port, help="Port to bind to")
    parser.add_argument("--reload", action="store_true", help="Enable auto-reload")
    parser.add_argument("--log-level", default=settings.log_level, help="Logging level")
    args = parser.parse_args()

    logging.basicConfig(
        level=args.log_level.upper(),
        format="%(asctime)s [%(name)s] %(levelname)s %(message)s",
    )
    logger = logging.getLogger("backend")
    logger.info("Metrics endpoint: http://%s:%d/api/metrics", args.host, args.port)

    uvicorn.run(
        "backend.main:app",
        host=args.host,
        port=args.port,
        reload=args.reload,
        log_level=args.log_level.lower(),
    )


if __name__ == "__main__":
    main()
