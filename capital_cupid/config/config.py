"""Configuration management for the matching core."""

import logging
import sys
from typing import Optional

from pydantic import ValidationError, field_validator
from pydantic_settings import BaseSettings

ENV_PREFIX = "CAPITAL_CUPID_"

LOG_FORMAT = "%(asctime)s [%(levelname)s] %(name)s: %(message)s"


class Config(BaseSettings):
    """Application configuration from environment variables."""

    storage_dir: str = ".capital_cupid"
    catalog_path: Optional[str] = None
    weights_path: Optional[str] = None
    api_base_url: Optional[str] = None  # unset: drafts stay on this device
    dedup_decisions: bool = False
    log_level: str = "INFO"

    model_config = {"env_file": ".env", "env_prefix": ENV_PREFIX, "case_sensitive": False, "extra": "ignore"}

    @field_validator("log_level")
    @classmethod
    def known_level(cls, v: str) -> str:
        level = v.upper()
        if not isinstance(logging.getLevelName(level), int):
            raise ValueError(f"Unknown log level: {v}")
        return level


def validate_config() -> Config:
    """Load and validate configuration from environment.

    Raises ValueError with a descriptive message listing ALL invalid
    variables (not just the first one).
    """
    try:
        return Config()
    except ValidationError as exc:
        names = ", ".join(
            sorted({f"{ENV_PREFIX}{str(err['loc'][0]).upper()}" for err in exc.errors() if err["loc"]})
        )
        raise ValueError(
            f"Invalid environment variable(s): {names}. "
            "Please fix them in your .env file or environment."
        ) from exc


def load_config() -> Config:
    """Load configuration from environment (startup entry point)."""
    return validate_config()


def configure_logging(config: Config) -> None:
    logging.basicConfig(
        level=config.log_level,
        format=LOG_FORMAT,
        handlers=[logging.StreamHandler(sys.stdout)],
    )
    logging.getLogger().setLevel(config.log_level)
