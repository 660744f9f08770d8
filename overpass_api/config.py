"""
Configuration settings for the Overpass client
"""

import os
from dataclasses import dataclass, field
from pathlib import Path
from typing import Optional

from dotenv import load_dotenv
from loguru import logger


DEFAULT_ENDPOINT = "https://overpass-api.de/api/interpreter"

LOG_LEVELS = ("TRACE", "DEBUG", "INFO", "SUCCESS", "WARNING", "ERROR", "CRITICAL")


@dataclass
class APIConfig:
    """Overpass endpoint and request settings"""
    # Public instances: overpass-api.de (main), lz4.overpass-api.de, z.overpass-api.de
    overpass_url: str = DEFAULT_ENDPOINT
    overpass_timeout: int = 180  # seconds, matches the server-side default

    # User agent for API requests
    user_agent: str = "overpass-api-python/0.1"


@dataclass
class ClientConfig:
    """Top-level configuration"""
    api: APIConfig = field(default_factory=APIConfig)
    log_level: str = "INFO"


def load_config(env_file: Optional[Path] = None) -> ClientConfig:
    """
    Build configuration from defaults, an optional .env file and the environment

    Recognised variables: OVERPASS_URL, OVERPASS_TIMEOUT, OVERPASS_USER_AGENT,
    OVERPASS_LOG_LEVEL. Values already set in the environment win over the
    .env file.
    """
    if env_file is not None:
        if load_dotenv(env_file, override=False):
            logger.debug(f"Loaded .env file from {env_file}")
    else:
        load_dotenv(override=False)

    config = ClientConfig()
    config.api.overpass_url = os.getenv("OVERPASS_URL", config.api.overpass_url)
    config.api.user_agent = os.getenv("OVERPASS_USER_AGENT", config.api.user_agent)
    config.log_level = os.getenv("OVERPASS_LOG_LEVEL", config.log_level).upper()

    timeout = os.getenv("OVERPASS_TIMEOUT")
    if timeout:
        try:
            config.api.overpass_timeout = int(timeout)
        except ValueError:
            raise ValueError(f"OVERPASS_TIMEOUT must be an integer, got {timeout!r}") from None

    return config


# Global config instance, created on first use
_config: Optional[ClientConfig] = None


def get_config() -> ClientConfig:
    """Get global configuration"""
    global _config
    if _config is None:
        _config = load_config()
    return _config


def set_config(config: Optional[ClientConfig]) -> None:
    """Replace the global configuration; None resets it to be reloaded"""
    global _config
    _config = config


def validate_config(config: ClientConfig) -> None:
    """
    Validate that all required configuration values are set.
    Raises ValueError if any required value is missing or invalid.
    """
    errors = []

    if not config.api.overpass_url:
        errors.append("api.overpass_url is required but not set")
    elif not config.api.overpass_url.startswith(("http://", "https://")):
        errors.append(f"api.overpass_url must be an http(s) URL, got: {config.api.overpass_url}")

    if config.api.overpass_timeout <= 0:
        errors.append(f"api.overpass_timeout must be positive, got: {config.api.overpass_timeout}")

    if not config.api.user_agent:
        errors.append("api.user_agent is required but not set")

    if config.log_level not in LOG_LEVELS:
        errors.append(f"log_level must be one of {', '.join(LOG_LEVELS)}, got: {config.log_level}")

    if errors:
        error_msg = "Configuration validation failed:\n" + "\n".join(f"  - {e}" for e in errors)
        raise ValueError(error_msg)
