# src/clusterward/core/config.py
"""
Configuration schema and loading for clusterward controllers.

Uses Pydantic for validation and Dynaconf for multi-source loading.
Settings are frozen (immutable) after construction.
"""

import os
import re
from pathlib import Path
from typing import Any, Literal

from pydantic import BaseModel, Field, model_validator


class LoggingSettings(BaseModel):
    """Logging output configuration."""

    model_config = {"frozen": True}

    json_output: bool = Field(default=False, description="Emit JSON lines instead of console output")
    level: Literal["DEBUG", "INFO", "WARNING", "ERROR"] = Field(default="INFO", description="Root log level")


class RetrySettings(BaseModel):
    """Backoff applied by the caller when a pass FAILs."""

    model_config = {"frozen": True}

    max_attempts: int = Field(default=5, gt=0, description="Maximum passes before giving up")
    initial_delay_seconds: float = Field(default=1.0, gt=0, description="Initial backoff delay")
    max_delay_seconds: float = Field(default=60.0, gt=0, description="Maximum backoff delay")
    exponential_base: float = Field(default=2.0, gt=1.0, description="Exponential backoff base")

    @model_validator(mode="after")
    def validate_delay_bounds(self) -> "RetrySettings":
        """The cap cannot be below the initial delay."""
        if self.max_delay_seconds < self.initial_delay_seconds:
            raise ValueError(
                f"max_delay_seconds ({self.max_delay_seconds}) must be >= initial_delay_seconds ({self.initial_delay_seconds})"
            )
        return self


class RequeueSettings(BaseModel):
    """Requeue behavior for non-failing, non-complete passes."""

    model_config = {"frozen": True}

    pause_backoff_seconds: float = Field(
        default=5.0,
        gt=0,
        description="Default backoff applied to PAUSE_AND_RETRY results",
    )


class ClusterwardSettings(BaseModel):
    """Top-level clusterward configuration.

    All settings are validated and frozen after construction; every section
    has defaults, so an empty file is a valid configuration.
    """

    model_config = {"frozen": True}

    logging: LoggingSettings = Field(default_factory=LoggingSettings)
    retry: RetrySettings = Field(default_factory=RetrySettings)
    requeue: RequeueSettings = Field(default_factory=RequeueSettings)


# ${NAME} or ${NAME:-fallback}
_ENV_REF = re.compile(r"\$\{([A-Z_][A-Z0-9_]*)(?::-([^}]*))?\}")


def _substitute_env(match: re.Match[str]) -> str:
    name, fallback = match.group(1), match.group(2)
    value = os.environ.get(name, fallback)
    # Unresolved references stay as written so validation reports them
    return match.group(0) if value is None else value


def _expand_env_vars(value: Any) -> Any:
    """Expand ${NAME} and ${NAME:-fallback} in every string of a nested config value.

    Dicts and lists are rebuilt, never mutated; other values are returned as-is.
    """
    if isinstance(value, str):
        return _ENV_REF.sub(_substitute_env, value)
    if isinstance(value, dict):
        return {k: _expand_env_vars(v) for k, v in value.items()}
    if isinstance(value, list):
        return [_expand_env_vars(v) for v in value]
    return value


# Loader options Dynaconf echoes back in as_dict()
_DYNACONF_KEYS = frozenset({"LOAD_DOTENV", "ENVIRONMENTS", "SETTINGS_FILES"})


def _lower_keys(value: Any) -> Any:
    """Dynaconf upper-cases top-level keys and env-provided nested keys."""
    if isinstance(value, dict):
        return {str(k).lower(): _lower_keys(v) for k, v in value.items()}
    return value


def load_settings(config_path: Path) -> ClusterwardSettings:
    """Load settings from YAML file with environment variable overrides.

    Uses Dynaconf for multi-source loading with precedence:
    1. Environment variables (CLUSTERWARD_*) - highest priority
    2. Config file
    3. Defaults from Pydantic schema - lowest priority

    Environment variable format: CLUSTERWARD_RETRY__MAX_ATTEMPTS for nested keys.

    Args:
        config_path: Path to YAML configuration file

    Returns:
        Validated ClusterwardSettings instance

    Raises:
        ValidationError: If configuration fails Pydantic validation
        FileNotFoundError: If config file doesn't exist
    """
    from dynaconf import Dynaconf

    # Dynaconf silently accepts missing files
    if not config_path.exists():
        raise FileNotFoundError(f"Config file not found: {config_path}")

    dynaconf_settings = Dynaconf(
        envvar_prefix="CLUSTERWARD",
        settings_files=[str(config_path)],
        environments=False,
        load_dotenv=False,
        merge_enabled=True,
    )

    loaded = {k: v for k, v in dynaconf_settings.as_dict().items() if k not in _DYNACONF_KEYS}
    return ClusterwardSettings(**_expand_env_vars(_lower_keys(loaded)))


def init_settings(config_path: Path) -> ClusterwardSettings:
    """Load settings and apply their logging section.

    Process entry points call this once before building reconcilers.

    Raises:
        ValidationError: If configuration fails Pydantic validation
        FileNotFoundError: If config file doesn't exist
    """
    from clusterward.core.logging import configure_logging

    settings = load_settings(config_path)
    configure_logging(settings.logging)
    return settings
