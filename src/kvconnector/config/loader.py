"""
kvconnector - Configuration Loader

Loads and validates configuration from environment variables and .env files.
Provides a singleton configuration instance for the runtime.
"""

import logging
import os
from pathlib import Path

from dotenv import load_dotenv
from pydantic import ValidationError

from ..errors import ConfigurationError
from .schemas import ConnectorConfig

logger = logging.getLogger(__name__)

_config_instance: ConnectorConfig | None = None


def load_config(
    env_file: str | None = None,
    reload: bool = False,
) -> ConnectorConfig:
    """
    Load configuration from environment variables and .env file.

    Args:
        env_file: Path to .env file (default: .env in current directory)
        reload: Force reload even if config already loaded

    Returns:
        Validated ConnectorConfig instance

    Raises:
        ConfigurationError: If configuration is invalid
    """
    global _config_instance

    if _config_instance is not None and not reload:
        return _config_instance

    if env_file:
        env_path = Path(env_file)
    else:
        env_path = Path.cwd() / ".env"

    if env_path.exists():
        logger.info(f"Loading environment from {env_path}")
        try:
            load_dotenv(env_path, override=True)
        except Exception as e:
            raise ConfigurationError(
                f"Failed to load environment file: {e}",
                details={"path": str(env_path), "error": str(e)},
            ) from e
    else:
        logger.debug("No .env file found, using environment variables only")

    try:
        config_dict = {
            "environment": os.getenv("ENVIRONMENT", "development"),
            "log_level": os.getenv("LOG_LEVEL", "INFO").upper(),
            "cache": {
                "backend": os.getenv("CACHE_BACKEND", "redis").lower(),
                "address": os.getenv("CACHE_ADDRESS") or os.getenv("REDIS_URL") or "localhost:6379",
                "namespace": os.getenv("CACHE_NAMESPACE", ""),
                "socket_timeout": float(os.getenv("REDIS_SOCKET_TIMEOUT", "5")),
                "max_connections": int(os.getenv("REDIS_MAX_CONNECTIONS", "10")),
            },
        }
    except ValueError as e:
        raise ConfigurationError(
            f"Invalid numeric value in environment: {e}",
            details={"error": str(e)},
        ) from e

    try:
        _config_instance = ConnectorConfig(**config_dict)  # type: ignore[arg-type]
    except ValidationError as e:
        raise ConfigurationError(
            "Configuration validation failed. Check your environment variables.",
            details={"validation_errors": e.errors()},
        ) from e

    logger.info(
        f"Configuration loaded (environment: {_config_instance.environment})",
        extra={"environment": _config_instance.environment, "cache_backend": _config_instance.cache.backend},
    )
    return _config_instance


def get_config() -> ConnectorConfig:
    """
    Get the current configuration instance, loading it on first access.

    Returns:
        Current ConnectorConfig instance
    """
    if _config_instance is None:
        return load_config()

    return _config_instance


def reload_config(env_file: str | None = None) -> ConnectorConfig:
    """Force reload configuration."""
    return load_config(env_file=env_file, reload=True)
