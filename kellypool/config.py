"""
Runtime configuration from environment variables.

    KELLYPOOL_ENV            development | production
    KELLYPOOL_LOG_LEVEL      logging level name (INFO)
    KELLYPOOL_SEED           optional int, seeds every new table's shuffle
    KELLYPOOL_SESSION_TTL    seconds before an idle table is cleaned up
    ALLOWED_ORIGINS          comma separated CORS origins
"""

from __future__ import annotations
from dataclasses import dataclass, field
import logging
import os


def _optional_int(value: str | None) -> int | None:
    if value is None or value.strip() == "":
        return None
    return int(value)


@dataclass
class Settings:
    env: str = "development"
    log_level: str = "INFO"
    seed: int | None = None
    session_ttl: int = 3600
    allowed_origins: list[str] = field(default_factory=lambda: ["*"])

    @classmethod
    def from_env(cls) -> Settings:
        return cls(
            env=os.getenv("KELLYPOOL_ENV", "development"),
            log_level=os.getenv("KELLYPOOL_LOG_LEVEL", "INFO").upper(),
            seed=_optional_int(os.getenv("KELLYPOOL_SEED")),
            session_ttl=int(os.getenv("KELLYPOOL_SESSION_TTL", "3600")),
            allowed_origins=os.getenv("ALLOWED_ORIGINS", "*").split(","),
        )


def configure_logging(level: str = "INFO") -> None:
    """Set up root logging once for the CLI and the API server."""
    logging.basicConfig(
        level=getattr(logging, level.upper(), logging.INFO),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )
