# src/clusterward/engine/retry.py
"""Backoff driver for failed reconciliation passes.

A FAIL result is surfaced to the caller, which re-runs the whole pass
(never a single task) with exponential backoff plus jitter. The driver
stops as soon as a pass produces a decision without an error, or when
max_attempts is exhausted, and returns the last decision either way.

Built on tenacity so the backoff curve matches the rest of the stack.
"""

from __future__ import annotations

import time
from collections.abc import Callable
from dataclasses import dataclass
from typing import TYPE_CHECKING

import structlog
from tenacity import (
    RetryCallState,
    Retrying,
    retry_if_result,
    stop_after_attempt,
    wait_exponential_jitter,
)

from clusterward.engine.requeue import RequeueDecision

if TYPE_CHECKING:
    from clusterward.core.config import RetrySettings

slog = structlog.get_logger(__name__)


@dataclass(frozen=True)
class RetryConfig:
    """Configuration for pass-level backoff.

    max_attempts is the TOTAL number of passes, not the number of retries.
    So max_attempts=3 means: pass, retry, retry (3 total).
    """

    max_attempts: int = 5
    base_delay: float = 1.0  # seconds
    max_delay: float = 60.0  # seconds
    jitter: float = 1.0  # seconds
    exponential_base: float = 2.0  # backoff multiplier

    def __post_init__(self) -> None:
        if self.max_attempts < 1:
            raise ValueError("max_attempts must be >= 1")
        if self.base_delay < 0 or self.max_delay < 0 or self.jitter < 0:
            raise ValueError("delays must be non-negative")
        if self.max_delay < self.base_delay:
            raise ValueError("max_delay must be >= base_delay")

    @classmethod
    def no_retry(cls) -> RetryConfig:
        """Factory for a single pass without backoff."""
        return cls(max_attempts=1)

    @classmethod
    def from_settings(cls, settings: RetrySettings) -> RetryConfig:
        """Factory from RetrySettings config model.

        Args:
            settings: Validated Pydantic settings model

        Returns:
            RetryConfig with mapped values
        """
        return cls(
            max_attempts=settings.max_attempts,
            base_delay=settings.initial_delay_seconds,
            max_delay=settings.max_delay_seconds,
            jitter=1.0,  # Fixed jitter, not exposed in settings
            exponential_base=settings.exponential_base,
        )


def _is_failure(decision: RequeueDecision) -> bool:
    return decision.is_failure


def _last_decision(retry_state: RetryCallState) -> RequeueDecision:
    # Exhausted: hand back the final failing decision instead of raising RetryError
    assert retry_state.outcome is not None
    decision: RequeueDecision = retry_state.outcome.result()
    return decision


def run_with_backoff(
    operation: Callable[[], RequeueDecision],
    config: RetryConfig,
    *,
    on_retry: Callable[[int, RequeueDecision], None] | None = None,
    sleep: Callable[[float], None] = time.sleep,
) -> RequeueDecision:
    """Re-run a pass while it fails.

    Exceptions raised by operation are not retried; a pass converts task
    errors into FAIL before they reach here, so anything escaping is a bug.

    Args:
        operation: Runs one pass and returns its requeue decision
        config: Backoff configuration
        on_retry: Optional callback (attempt number, failing decision)
            invoked before sleeping
        sleep: Sleep function (tests pass a recorder)

    Returns:
        The first non-failing decision, or the last failing one
    """

    def before_sleep(retry_state: RetryCallState) -> None:
        assert retry_state.outcome is not None
        decision: RequeueDecision = retry_state.outcome.result()
        slog.warning(
            "pass_failed_backing_off",
            attempt=retry_state.attempt_number,
            error=str(decision.error),
            next_delay=retry_state.next_action.sleep if retry_state.next_action else None,
        )
        if on_retry is not None:
            on_retry(retry_state.attempt_number, decision)

    retrying = Retrying(
        stop=stop_after_attempt(config.max_attempts),
        wait=wait_exponential_jitter(
            initial=config.base_delay,
            max=config.max_delay,
            exp_base=config.exponential_base,
            jitter=config.jitter,
        ),
        retry=retry_if_result(_is_failure),
        retry_error_callback=_last_decision,
        before_sleep=before_sleep,
        sleep=sleep,
        reraise=True,
    )
    decision: RequeueDecision = retrying(operation)
    return decision
