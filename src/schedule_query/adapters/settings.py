from __future__ import annotations

import logging
import os
from dataclasses import dataclass

DEFAULT_LOG_FORMAT = "%(asctime)s | %(levelname)s | %(name)s | %(message)s"


def _env_bool(name: str, default: bool = False) -> bool:
    raw = os.getenv(name)
    if raw is None:
        return default
    return raw.strip().lower() in {"1", "true", "yes", "y", "on"}


@dataclass(frozen=True, slots=True)
class RuntimeConfig:
    gtfs_path: str
    reveal_errors: bool
    log_level: str
    log_format: str

    @staticmethod
    def from_env() -> "RuntimeConfig":
        gtfs_path = (os.getenv("GTFS_PATH") or "").strip() or "data/gtfs"

        return RuntimeConfig(
            gtfs_path=gtfs_path,
            reveal_errors=_env_bool("SCHEDULE_REVEAL_ERRORS", False),
            log_level=os.getenv("LOG_LEVEL", "INFO").strip().upper(),
            log_format=os.getenv("LOG_FORMAT", DEFAULT_LOG_FORMAT),
        )


def configure_logging(cfg: RuntimeConfig | None = None) -> None:
    """Install one stream handler on the root logger.

    Does nothing if the root logger already has handlers (uvicorn, pytest).
    """

    cfg = cfg or RuntimeConfig.from_env()
    root = logging.getLogger()
    if root.handlers:
        return

    level = getattr(logging, cfg.log_level, logging.INFO)
    handler = logging.StreamHandler()
    handler.setFormatter(logging.Formatter(cfg.log_format))
    root.addHandler(handler)
    root.setLevel(level)
