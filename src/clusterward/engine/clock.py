# src/clusterward/engine/clock.py
"""Clock abstraction for testable condition timestamps.

Condition lastTransitionTime values are wall-clock timestamps. Status
tasks read "now" through a Clock so tests can assert exact timestamps
and prove that an unchanged condition keeps its old one.

Production code uses SystemClock (the default).
Tests inject MockClock to control time advancement.
"""

from __future__ import annotations

from datetime import UTC, datetime, timedelta
from typing import Protocol


class Clock(Protocol):
    """Abstract wall clock.

    Implementations:
    - SystemClock: Uses datetime.now(UTC) (production)
    - MockClock: Returns controllable times (testing)
    """

    def now(self) -> datetime:
        """Return the current time as an aware UTC datetime.

        Truncated to whole seconds, the precision platform timestamps
        are persisted with.
        """
        ...


class SystemClock:
    """Production clock using the system wall clock."""

    def now(self) -> datetime:
        """Return current UTC time truncated to seconds."""
        return datetime.now(UTC).replace(microsecond=0)


class MockClock:
    """Controllable clock for deterministic testing.

    Example:
        clock = MockClock()
        task = task_status(client, clock=clock)

        run_task(call, state, task)        # conditions stamped at clock.now()
        clock.advance(60)
        run_task(call, state, task)        # unchanged conditions keep the old stamp
    """

    DEFAULT_START = datetime(2025, 1, 1, tzinfo=UTC)

    def __init__(self, start: datetime | None = None) -> None:
        """Initialize mock clock at a given time.

        Args:
            start: Initial time (default 2025-01-01T00:00:00Z). Must be timezone-aware.
        """
        start = start or self.DEFAULT_START
        if start.tzinfo is None:
            raise ValueError("MockClock start time must be timezone-aware")
        self._current = start.astimezone(UTC).replace(microsecond=0)

    def now(self) -> datetime:
        return self._current

    def advance(self, seconds: float) -> None:
        """Advance mock time by specified seconds.

        Raises:
            ValueError: If seconds is negative.
        """
        if seconds < 0:
            raise ValueError(f"Cannot advance time by negative amount: {seconds}")
        self._current = (self._current + timedelta(seconds=seconds)).replace(microsecond=0)

    def set(self, value: datetime) -> None:
        """Set mock time to an absolute value (may go backwards)."""
        if value.tzinfo is None:
            raise ValueError("MockClock time must be timezone-aware")
        self._current = value.astimezone(UTC).replace(microsecond=0)


# Default clock for production use
DEFAULT_CLOCK: Clock = SystemClock()
