from __future__ import annotations

from pathlib import Path

from pydantic_settings import BaseSettings

BASE_DIR = Path(__file__).resolve().parent
RULES_DIR = BASE_DIR / "rules"


class Settings(BaseSettings):
    # --- app ---
    app_name: str = "Image Mode Demo Dashboard"
    app_version: str = "v2.1.0"  # last-known version until the version file is read
    log_level: str = "INFO"

    # --- files ---
    version_file: str = str(BASE_DIR.parent / "web" / "version.json")
    demo_config_file: str = str(BASE_DIR.parent / "web" / "demo-config.json")
    static_dir: str = str(BASE_DIR.parent / "web")

    # --- update simulation ---
    release_progression_file: str = str(RULES_DIR / "release_progression.yaml")
    release_url_template: str = (
        "https://github.com/jfiorinanl/demo-image-mode/releases/tag/{version}"
    )
    release_delay_seconds: float = 60.0  # uptime before a newer release shows up
    update_cache_ttl_seconds: float = 30.0

    # --- probes ---
    bootc_command: list[str] = ["bootc", "status", "--json"]
    probe_timeout: float = 5.0  # seconds

    # --- metrics ---
    response_time_capacity: int = 100
    default_response_time_ms: float = 35.0
    network_in_range: tuple[float, float] = (100.0, 600.0)
    network_out_range: tuple[float, float] = (50.0, 300.0)
    connections_range: tuple[float, float] = (10.0, 40.0)
    cache_hit_range: tuple[float, float] = (80.0, 95.0)

    # --- server ---
    host: str = "0.0.0.0"
    port: int = 3001
    cors_origins: list[str] = ["*"]

    model_config = {"env_file": ".env", "env_prefix": "DEMO_"}


settings = Settings()
