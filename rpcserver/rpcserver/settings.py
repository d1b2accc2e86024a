"""Server settings from the environment.

A ``.env`` file in the working directory is loaded first; real
environment variables win over it.
"""

from __future__ import annotations

import os
from dataclasses import dataclass
from pathlib import Path

from dotenv import load_dotenv

# Defaults
DEFAULT_HOST = "127.0.0.1"
DEFAULT_PORT = 8100
DEFAULT_LOG_LEVEL = "INFO"

_TRUTHY = {"1", "true", "yes", "on"}


def _env_bool(name: str, default: bool) -> bool:
    raw = os.getenv(name)
    if raw is None:
        return default
    return raw.strip().lower() in _TRUTHY


@dataclass(slots=True)
class Settings:
    host: str = DEFAULT_HOST
    port: int = DEFAULT_PORT
    log_level: str = DEFAULT_LOG_LEVEL
    strict_notifications: bool = True
    max_workers: int = 1

    @classmethod
    def from_env(cls, env_file: str | os.PathLike | None = None) -> "Settings":
        load_dotenv(env_file or os.path.join(Path.cwd(), ".env"))
        return cls(
            host=os.getenv("RPC_HOST", DEFAULT_HOST),
            port=int(os.getenv("RPC_PORT", DEFAULT_PORT)),
            log_level=os.getenv("LOG_LEVEL", DEFAULT_LOG_LEVEL),
            strict_notifications=_env_bool("RPC_STRICT_NOTIFICATIONS", True),
            max_workers=int(os.getenv("RPC_MAX_WORKERS", 1)),
        )
