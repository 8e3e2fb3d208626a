"""
kvconnector - Configuration Schemas

Typed configuration models using Pydantic for validation and type safety.
All configuration comes from environment variables (see loader.py).
"""

from enum import Enum

from pydantic import BaseModel, ConfigDict, Field, field_validator


class Environment(str, Enum):
    """Runtime environment."""

    DEVELOPMENT = "development"
    STAGING = "staging"
    PRODUCTION = "production"
    TEST = "test"


class CacheBackend(str, Enum):
    """Supported cache backends."""

    REDIS = "redis"
    MEMORY = "memory"


class LogLevel(str, Enum):
    """Log levels."""

    DEBUG = "DEBUG"
    INFO = "INFO"
    WARNING = "WARNING"
    ERROR = "ERROR"
    CRITICAL = "CRITICAL"


class CacheConfig(BaseModel):
    """Cache client configuration."""

    backend: CacheBackend = Field(default=CacheBackend.REDIS, description="Cache backend to use")
    address: str = Field(
        default="localhost:6379",
        description="Store address: host:port or a redis:// / rediss:// / unix:// URL",
    )
    namespace: str = Field(default="", description="Key prefix (empty = keys stored verbatim)")

    # Redis-specific settings (only used when backend=redis)
    socket_timeout: float = Field(default=5.0, gt=0, description="Socket timeout in seconds")
    max_connections: int = Field(default=10, ge=1, description="Connection pool size")

    @field_validator("address")
    @classmethod
    def validate_address(cls, v: str) -> str:
        """Reject blank addresses; everything else is left to the transport."""
        v = v.strip()
        if not v:
            raise ValueError("address must not be empty")
        return v

    @field_validator("namespace")
    @classmethod
    def strip_namespace(cls, v: str) -> str:
        return v.strip()


class ConnectorConfig(BaseModel):
    """Root configuration for kvconnector."""

    environment: Environment = Field(default=Environment.DEVELOPMENT, description="Runtime environment")
    log_level: LogLevel = Field(default=LogLevel.INFO, description="Logging level")

    cache: CacheConfig = Field(default_factory=CacheConfig)

    model_config = ConfigDict(use_enum_values=True, validate_assignment=True)
