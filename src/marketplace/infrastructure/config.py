"""Runtime settings read from the environment."""

from __future__ import annotations

import os
from dataclasses import dataclass
from pathlib import Path

DEFAULT_DATA_DIR = Path("data")
DEFAULT_PAGE_SIZE = 20

_ENV_LOG_LEVELS = {
    "production": "INFO",
    "staging": "INFO",
    "development": "DEBUG",
    "test": "WARNING",
}


@dataclass(frozen=True)
class Settings:
    data_dir: Path = DEFAULT_DATA_DIR
    environment: str = "development"
    log_level: str = "DEBUG"
    page_size: int = DEFAULT_PAGE_SIZE

    @property
    def is_production(self) -> bool:
        return self.environment in ("production", "staging")

    @staticmethod
    def from_env(environ: dict[str, str] | None = None) -> Settings:
        env = os.environ if environ is None else environ

        environment = (env.get("ENVIRONMENT") or "development").lower()
        log_level = env.get("LOG_LEVEL") or _ENV_LOG_LEVELS.get(environment, "INFO")

        raw_page_size = env.get("MARKETPLACE_PAGE_SIZE")
        try:
            page_size = int(raw_page_size) if raw_page_size else DEFAULT_PAGE_SIZE
        except ValueError as exc:
            raise ValueError(
                f"MARKETPLACE_PAGE_SIZE must be an integer, got {raw_page_size!r}"
            ) from exc
        if page_size < 1:
            raise ValueError("MARKETPLACE_PAGE_SIZE must be at least 1")

        return Settings(
            data_dir=Path(env.get("MARKETPLACE_DATA_DIR") or DEFAULT_DATA_DIR),
            environment=environment,
            log_level=log_level.upper(),
            page_size=page_size,
        )
