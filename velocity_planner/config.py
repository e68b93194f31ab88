"""
Configuration for Velocity Planner

Settings come from config/config.yaml when present, overridden by
environment variables.
"""

import logging
import os
from typing import Optional

import yaml

LOG_FORMAT = "%(asctime)s | %(levelname)-8s | %(name)s | %(message)s"
LOG_DATE_FORMAT = "%Y-%m-%d %H:%M:%S"


class Config:
    """Load configuration from config.yaml and environment."""

    def __init__(self, config_path: str = "config/config.yaml"):
        self.config = {}

        if os.path.exists(config_path):
            with open(config_path) as f:
                self.config = yaml.safe_load(f) or {}

        self._load_env()

    def _load_env(self):
        """Load configuration from environment variables."""
        env_mapping = {
            "VELOCITY_LOG_LEVEL": ("logging", "level"),
            "VELOCITY_API_HOST": ("api", "host"),
            "VELOCITY_API_PORT": ("api", "port"),
            "VELOCITY_CORS_ORIGINS": ("api", "cors_origins"),
        }

        for env_var, (section, key) in env_mapping.items():
            value = os.getenv(env_var)
            if value:
                if not self.config.get(section):
                    self.config[section] = {}
                self.config[section][key] = value

    def get(self, section: str, key: str, default=None):
        """Get configuration value."""
        return (self.config.get(section) or {}).get(key, default)

    @property
    def log_level(self) -> str:
        return str(self.get("logging", "level", "INFO")).upper()

    @property
    def api_host(self) -> str:
        return self.get("api", "host", "0.0.0.0")

    @property
    def api_port(self) -> int:
        return int(self.get("api", "port", 8000))

    @property
    def cors_origins(self) -> list[str]:
        origins = self.get("api", "cors_origins", ["*"])
        if isinstance(origins, str):
            origins = [o.strip() for o in origins.split(",") if o.strip()]
        return origins

    @property
    def thresholds(self) -> dict:
        """Capacity percentage bands for display."""
        defaults = {"high": 80, "medium": 50}
        return {**defaults, **(self.config.get("thresholds") or {})}


def setup_logging(level: Optional[str] = None) -> logging.Logger:
    """Configure the package logger with a single console handler."""
    logger = logging.getLogger("velocity_planner")
    logger.setLevel((level or "INFO").upper())

    # Avoid duplicate handlers if called multiple times
    if not logger.handlers:
        handler = logging.StreamHandler()
        handler.setFormatter(logging.Formatter(fmt=LOG_FORMAT, datefmt=LOG_DATE_FORMAT))
        logger.addHandler(handler)

    return logger
