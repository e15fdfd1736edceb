# src/clusterward/core/canonical.py
"""
Deterministic hashing of parsed configuration.

The config hash is stamped on generated config maps as a label, so one
parsed document MUST always hash the same way, whatever the key order or
formatting of the TOML it came from.

Steps:
1. Reduce TOML scalars (dates, times, decimals) to JSON primitives
2. Serialize with RFC 8785 (JSON Canonicalization Scheme) via the rfc8785 package
3. SHA-256 the canonical bytes

Non-finite numbers are REJECTED: TOML accepts nan and inf, JSON does not,
and silently mapping them to null would make distinct configs collide.
"""

from __future__ import annotations

import hashlib
import math
from datetime import UTC, date, datetime, time
from decimal import Decimal
from typing import Any

import rfc8785

# Identifies the hashing scheme; bump if the normalization rules change
CANONICAL_VERSION = "sha256-rfc8785-v1"


def _normalize_value(obj: Any) -> Any:
    """Map one scalar onto a JSON primitive.

    Raises:
        ValueError: For NaN or infinite floats and decimals
    """
    if isinstance(obj, float) and not math.isfinite(obj):
        raise ValueError(f"Cannot canonicalize non-finite float: {obj}")
    if isinstance(obj, Decimal):
        if not obj.is_finite():
            raise ValueError(f"Cannot canonicalize non-finite Decimal: {obj}")
        return str(obj)
    # datetime is a date subclass, so it is checked first
    if isinstance(obj, datetime):
        # Local date-times (no offset) hash as written
        return obj.isoformat() if obj.tzinfo is None else obj.astimezone(UTC).isoformat()
    if isinstance(obj, date | time):
        return obj.isoformat()
    return obj


def _normalize(data: Any) -> Any:
    if isinstance(data, dict):
        return {key: _normalize(item) for key, item in data.items()}
    if isinstance(data, list | tuple):
        return [_normalize(item) for item in data]
    return _normalize_value(data)


def canonical_json(obj: Any) -> str:
    """Serialize obj as RFC 8785 canonical JSON.

    Raises:
        ValueError: If obj contains a non-finite number
        TypeError: If obj contains a value JSON cannot represent
    """
    canonical: bytes = rfc8785.dumps(_normalize(obj))
    return canonical.decode("utf-8")


def stable_hash(obj: Any, version: str = CANONICAL_VERSION) -> str:
    """SHA-256 hex digest of the canonical JSON of obj.

    Args:
        obj: Parsed configuration (or any JSON-like structure)
        version: Hashing scheme; only CANONICAL_VERSION exists

    Raises:
        ValueError: For an unknown version or a non-finite number
    """
    if version != CANONICAL_VERSION:
        raise ValueError(f"Unsupported hash version: {version!r}")
    return hashlib.sha256(canonical_json(obj).encode("utf-8")).hexdigest()
