"""Ambient call context: cancellation and deadline for one reconciliation pass.

Not to be confused with the per-pass *state* object tasks mutate. The call
context carries no data; it only tells in-flight I/O whether to give up.
"""

from __future__ import annotations

import threading
import time
from collections.abc import Callable

from clusterward.contracts.errors import CallCancelledError


class CallContext:
    """Cancellation token passed to every task and every client call.

    Cancellation may come from another thread (e.g. worker shutdown), so the
    flag is a threading.Event. The deadline is measured on a monotonic clock.

    Example:
        call = CallContext(timeout=30.0)
        result, stop = runner.run(call, state)
    """

    def __init__(
        self,
        *,
        timeout: float | None = None,
        monotonic: Callable[[], float] = time.monotonic,
    ) -> None:
        """Initialize call context.

        Args:
            timeout: Seconds until the context expires (None = no deadline).
            monotonic: Time source, injectable for tests.
        """
        if timeout is not None and timeout <= 0:
            raise ValueError(f"timeout must be positive, got {timeout}")
        self._monotonic = monotonic
        self._cancelled = threading.Event()
        self._deadline = None if timeout is None else monotonic() + timeout

    @classmethod
    def background(cls) -> CallContext:
        """Context that is never cancelled unless cancel() is called."""
        return cls()

    @property
    def deadline(self) -> float | None:
        return self._deadline

    def cancel(self) -> None:
        self._cancelled.set()

    @property
    def cancelled(self) -> bool:
        """True once cancel() was called or the deadline has passed."""
        if self._cancelled.is_set():
            return True
        return self._deadline is not None and self._monotonic() >= self._deadline

    def raise_if_done(self) -> None:
        """Raise CallCancelledError if the context is cancelled or expired."""
        if self._cancelled.is_set():
            raise CallCancelledError("call context cancelled")
        if self._deadline is not None and self._monotonic() >= self._deadline:
            raise CallCancelledError("call context deadline exceeded")
