# src/clusterward/core/__init__.py
"""Core infrastructure: Canonical hashing, Configuration, Logging."""

from clusterward.core.canonical import (
    CANONICAL_VERSION,
    canonical_json,
    stable_hash,
)
from clusterward.core.config import (
    ClusterwardSettings,
    LoggingSettings,
    RequeueSettings,
    RetrySettings,
    init_settings,
    load_settings,
)
from clusterward.core.logging import configure_logging

__all__ = [
    "CANONICAL_VERSION",
    "ClusterwardSettings",
    "LoggingSettings",
    "RequeueSettings",
    "RetrySettings",
    "canonical_json",
    "configure_logging",
    "init_settings",
    "load_settings",
    "stable_hash",
]
