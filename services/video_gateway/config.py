from __future__ import annotations

import os
from dataclasses import dataclass, field
from pathlib import Path

from dotenv import load_dotenv

from services.video_gateway.domain.stream import DEFAULT_WINDOW_SIZE


def _load_repo_env() -> None:
    """Load the nearest .env starting from this file upward."""
    current = Path(__file__).resolve()
    for candidate in [current.parent, *current.parents]:
        env_file = candidate / ".env"
        if env_file.exists():
            load_dotenv(env_file)
            return


_load_repo_env()


def _require_env(name: str) -> str:
    value = os.getenv(name)
    if value is None or value == "":
        raise ValueError(f"Environment variable {name} is required")
    return value


def _env_int(name: str, default: int) -> int:
    raw = os.getenv(name)
    if raw is None or raw == "":
        return default
    try:
        return int(raw)
    except ValueError as exc:
        raise ValueError(f"Environment variable {name} must be an integer") from exc


def _env_list(name: str, default: str) -> tuple[str, ...]:
    raw = os.getenv(name, default)
    return tuple(item.strip() for item in raw.split(",") if item.strip())


@dataclass(frozen=True)
class GatewayConfig:
    storage_bucket: str
    storage_region: str
    storage_access_key: str
    storage_secret_key: str
    database_url: str
    storage_endpoint_url: str | None = None
    stream_window_bytes: int = DEFAULT_WINDOW_SIZE
    stream_chunk_bytes: int = 1024 * 1024
    video_id_length: int = 16
    cors_origins: tuple[str, ...] = field(default_factory=lambda: ("*",))
    redis_host: str | None = None
    redis_port: int = 6379
    redis_db: int = 0
    redis_channel: str = "video_uploaded"
    log_level: str = "INFO"
    host: str = "0.0.0.0"
    port: int = 10000

    @property
    def sqlalchemy_dsn(self) -> str:
        dsn = self.database_url
        if dsn.startswith("postgresql://"):
            return dsn.replace("postgresql://", "postgresql+psycopg://", 1)
        if dsn.startswith("postgres://"):
            return dsn.replace("postgres://", "postgresql+psycopg://", 1)
        return dsn


def load_config() -> GatewayConfig:
    return GatewayConfig(
        storage_bucket=_require_env("GATEWAY_STORAGE_BUCKET"),
        storage_region=_require_env("GATEWAY_STORAGE_REGION"),
        storage_access_key=_require_env("GATEWAY_STORAGE_ACCESS_KEY"),
        storage_secret_key=_require_env("GATEWAY_STORAGE_SECRET_KEY"),
        database_url=_require_env("GATEWAY_DATABASE_URL"),
        storage_endpoint_url=os.getenv("GATEWAY_STORAGE_ENDPOINT_URL") or None,
        stream_window_bytes=_env_int(
            "GATEWAY_STREAM_WINDOW_BYTES", DEFAULT_WINDOW_SIZE
        ),
        stream_chunk_bytes=_env_int("GATEWAY_STREAM_CHUNK_BYTES", 1024 * 1024),
        video_id_length=_env_int("GATEWAY_VIDEO_ID_LENGTH", 16),
        cors_origins=_env_list("GATEWAY_CORS_ORIGINS", "*"),
        redis_host=os.getenv("GATEWAY_REDIS_HOST") or None,
        redis_port=_env_int("GATEWAY_REDIS_PORT", 6379),
        redis_db=_env_int("GATEWAY_REDIS_DB", 0),
        redis_channel=os.getenv("GATEWAY_REDIS_CHANNEL", "video_uploaded"),
        log_level=os.getenv("GATEWAY_LOG_LEVEL", "INFO"),
        host=os.getenv("GATEWAY_HOST", "0.0.0.0"),
        port=_env_int("GATEWAY_PORT", 10000),
    )
