"""
Cache configuration using Pydantic.

``CacheConfig`` validates the options a single cache is built with.
``CacheSettings`` loads process-wide defaults from environment variables
(prefix ``BOUNDCACHE_``) and a .env file.
"""

from __future__ import annotations

from pathlib import Path
from typing import Any

import yaml
from pydantic import BaseModel, ConfigDict, Field, ValidationError, model_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from boundcache.domain.enums import EvictionPolicy, StoreBacking
from boundcache.shared.domain.exceptions import ConfigurationError


class CacheSettings(BaseSettings):
    """Process-wide defaults loaded from environment."""

    model_config = SettingsConfigDict(
        env_prefix="BOUNDCACHE_",
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    # Application
    app_env: str = Field(default="development", description="Environment (development/production)")
    log_level: str = Field(default="INFO", description="Logging level")

    # Cache defaults
    default_capacity: int = Field(default=1000, description="Default maximum entry count")
    default_evict_count: int = Field(default=1, description="Default eviction batch size")
    default_policy: EvictionPolicy = Field(default=EvictionPolicy.LRU, description="Default eviction policy")
    default_backing: StoreBacking = Field(default=StoreBacking.FLAT, description="Default store backing")
    debug_logging: bool = Field(default=False, description="Trace every cache operation")

    @property
    def is_development(self) -> bool:
        """Check if running in development mode."""
        return self.app_env.lower() == "development"

    @property
    def is_production(self) -> bool:
        """Check if running in production mode."""
        return self.app_env.lower() == "production"


class CacheConfig(BaseModel):
    """
    Construction options for one cache instance.

    Invariant: ``0 < evict_count <= capacity``. Checked once, here.
    """

    model_config = ConfigDict(frozen=True, extra="forbid")

    capacity: int = Field(gt=0, description="Maximum live entry count")
    evict_count: int = Field(default=1, gt=0, description="Entries removed per eviction batch")
    debug_logging: bool = Field(default=False, description="Trace operations to the diagnostic sink")
    policy: EvictionPolicy = Field(default=EvictionPolicy.LRU, description="Eviction discipline")
    backing: StoreBacking = Field(default=StoreBacking.FLAT, description="Entry store backing")

    @model_validator(mode="after")
    def _validate_evict_count(self) -> "CacheConfig":
        """Fail fast: an eviction batch cannot exceed the capacity."""
        if self.evict_count > self.capacity:
            raise ValueError(
                f"evict_count ({self.evict_count}) must be less than or equal to capacity ({self.capacity})"
            )
        return self

    @classmethod
    def build(cls, **options: Any) -> "CacheConfig":
        """
        Validate *options* into a config.

        Raises:
            ConfigurationError: If any option is invalid
        """
        try:
            return cls(**options)
        except ValidationError as e:
            messages = "; ".join(_format_error(err) for err in e.errors())
            raise ConfigurationError(f"Invalid cache configuration: {messages}", context=options) from e

    @classmethod
    def from_settings(cls, settings: CacheSettings | None = None, **overrides: Any) -> "CacheConfig":
        """Build a config from environment defaults, applying *overrides*."""
        settings = settings or CacheSettings()
        options: dict[str, Any] = {
            "capacity": settings.default_capacity,
            "evict_count": settings.default_evict_count,
            "policy": settings.default_policy,
            "backing": settings.default_backing,
            "debug_logging": settings.debug_logging,
        }
        options.update(overrides)
        return cls.build(**options)

    @classmethod
    def from_yaml(cls, path: str | Path) -> "CacheConfig":
        """
        Load a config from a YAML file.

        The options may sit at the top level or under a ``cache:`` key.

        Raises:
            ConfigurationError: If the file is unreadable, malformed or invalid
        """
        path = Path(path)
        try:
            with open(path, encoding="utf-8") as f:
                data = yaml.safe_load(f) or {}
        except (OSError, yaml.YAMLError) as e:
            raise ConfigurationError(f"Cannot load cache configuration from {path}: {e}", context={"path": str(path)}) from e

        if not isinstance(data, dict):
            raise ConfigurationError(f"Cache configuration in {path} must be a mapping", context={"path": str(path)})

        section = data.get("cache", data)
        if not isinstance(section, dict):
            raise ConfigurationError(f"'cache' section in {path} must be a mapping", context={"path": str(path)})
        return cls.build(**section)


def _format_error(err: dict[str, Any]) -> str:
    location = ".".join(str(part) for part in err.get("loc", ()))
    message = err.get("msg", "invalid value")
    return f"{location}: {message}" if location else message


# Global settings instance
settings = CacheSettings()
