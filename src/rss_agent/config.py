"""Configuration management."""

import os
from dataclasses import dataclass, field
from pathlib import Path
from typing import Optional

import yaml

from rss_agent import __version__

MIN_CONCURRENCY = 1
MAX_CONCURRENCY = 10


@dataclass
class HttpConfig:
    """HTTP client settings."""
    timeout: float = 30.0
    user_agent: str = f"RSS Agent v{__version__}"
    max_redirects: int = 5


@dataclass
class CacheSettings:
    """Feed cache settings."""
    enabled: bool = True
    cache_dir: Optional[Path] = None
    expiration_seconds: int = 180


@dataclass
class BatchConfig:
    """Batch analysis settings."""
    concurrency: int = 3
    preview_items: int = 5


@dataclass
class Settings:
    """Application settings."""

    env: str = "dev"
    log_level: str = "WARNING"

    http: HttpConfig = field(default_factory=HttpConfig)
    cache: CacheSettings = field(default_factory=CacheSettings)
    batch: BatchConfig = field(default_factory=BatchConfig)


def clamp_concurrency(value: int) -> int:
    """Clamp a requested concurrency to the supported range."""
    return max(MIN_CONCURRENCY, min(MAX_CONCURRENCY, value))


def load_config(config_path: Path = Path("rss_agent.yaml")) -> dict:
    """Load configuration from YAML file."""
    if not config_path.exists():
        return {}

    with open(config_path, "r", encoding="utf-8") as f:
        return yaml.safe_load(f) or {}


def get_settings(config_path: Path = Path("rss_agent.yaml")) -> Settings:
    """Get application settings from YAML config and environment."""
    config = load_config(config_path)

    settings = Settings(
        env=config.get("env", "dev"),
        log_level=config.get("log_level", "WARNING"),
    )

    if "http" in config:
        for key, value in config["http"].items():
            setattr(settings.http, key, value)

    if "cache" in config:
        for key, value in config["cache"].items():
            if key == "cache_dir" and value is not None:
                value = Path(value)
            setattr(settings.cache, key, value)

    if "batch" in config:
        for key, value in config["batch"].items():
            setattr(settings.batch, key, value)

    # Environment overrides
    settings.env = os.getenv("RSS_AGENT_ENV", settings.env)
    settings.log_level = os.getenv("RSS_AGENT_LOG_LEVEL", settings.log_level)

    cache_dir = os.getenv("RSS_AGENT_CACHE_DIR")
    if cache_dir:
        settings.cache.cache_dir = Path(cache_dir)

    user_agent = os.getenv("RSS_AGENT_USER_AGENT")
    if user_agent:
        settings.http.user_agent = user_agent

    settings.batch.concurrency = clamp_concurrency(settings.batch.concurrency)

    return settings
