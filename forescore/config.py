"""
Application configuration.

Values come from environment variables, optionally seeded from a ``.env``
file at the repository root. Money defaults are in minor units (cents).

Usage:
    from forescore.config import config
    print(config.DEFAULT_POINT_VALUE)
"""

from __future__ import annotations

import os
from dataclasses import dataclass
from pathlib import Path

from dotenv import load_dotenv

env_path = Path(__file__).resolve().parent.parent / ".env"
if env_path.exists():
    load_dotenv(env_path)


def get_env(key: str, default: str = "") -> str:
    return os.environ.get(key, default)


def get_env_int(key: str, default: int = 0) -> int:
    try:
        return int(os.environ.get(key, str(default)))
    except ValueError:
        return default


@dataclass(frozen=True)
class AppConfig:
    LOG_LEVEL: str = "INFO"
    ENVIRONMENT: str = "development"

    DEFAULT_POINT_VALUE: int = 100
    DEFAULT_SEGMENT_POT: int = 1000
    DEFAULT_CARD_VALUE: int = 200

    @classmethod
    def from_env(cls) -> "AppConfig":
        return cls(
            LOG_LEVEL=get_env("LOG_LEVEL", "INFO"),
            ENVIRONMENT=get_env("ENVIRONMENT", "development"),
            DEFAULT_POINT_VALUE=get_env_int("DEFAULT_POINT_VALUE", 100),
            DEFAULT_SEGMENT_POT=get_env_int("DEFAULT_SEGMENT_POT", 1000),
            DEFAULT_CARD_VALUE=get_env_int("DEFAULT_CARD_VALUE", 200),
        )


config = AppConfig.from_env()


def reload_config() -> AppConfig:
    """Re-read the environment (used by tests)."""
    global config
    config = AppConfig.from_env()
    return config
