# tests/unit/engine/test_retry.py
"""Tests for the pass-level backoff driver."""

from __future__ import annotations

import pytest

from clusterward.core.config import RetrySettings
from clusterward.engine import RequeueDecision, RetryConfig, run_with_backoff


def _failing() -> RequeueDecision:
    return RequeueDecision(error=RuntimeError("backend down"))


class TestRetryConfig:
    def test_defaults(self) -> None:
        config = RetryConfig()
        assert config.max_attempts == 5
        assert config.base_delay == 1.0
        assert config.max_delay == 60.0

    def test_max_attempts_must_be_positive(self) -> None:
        with pytest.raises(ValueError, match="max_attempts must be >= 1"):
            RetryConfig(max_attempts=0)

    def test_max_delay_below_base_rejected(self) -> None:
        with pytest.raises(ValueError, match="max_delay"):
            RetryConfig(base_delay=10.0, max_delay=1.0)

    def test_no_retry(self) -> None:
        assert RetryConfig.no_retry().max_attempts == 1

    def test_from_settings(self) -> None:
        settings = RetrySettings(max_attempts=7, initial_delay_seconds=0.5, max_delay_seconds=30.0, exponential_base=3.0)
        config = RetryConfig.from_settings(settings)
        assert config.max_attempts == 7
        assert config.base_delay == 0.5
        assert config.max_delay == 30.0
        assert config.exponential_base == 3.0


class TestRunWithBackoff:
    def test_success_first_pass_never_sleeps(self) -> None:
        sleeps: list[float] = []
        decision = run_with_backoff(RequeueDecision, RetryConfig(), sleep=sleeps.append)

        assert decision == RequeueDecision()
        assert sleeps == []

    def test_retries_until_pass_succeeds(self) -> None:
        outcomes = [_failing(), _failing(), RequeueDecision(requeue=True)]
        sleeps: list[float] = []
        retries: list[int] = []

        decision = run_with_backoff(
            lambda: outcomes.pop(0),
            RetryConfig(max_attempts=5, base_delay=1.0, max_delay=10.0, jitter=0.0),
            on_retry=lambda attempt, d: retries.append(attempt),
            sleep=sleeps.append,
        )

        assert decision == RequeueDecision(requeue=True)
        assert retries == [1, 2]
        assert sleeps == [1.0, 2.0]

    def test_exhaustion_returns_last_failing_decision(self) -> None:
        calls: list[int] = []

        def op() -> RequeueDecision:
            calls.append(1)
            return _failing()

        decision = run_with_backoff(op, RetryConfig(max_attempts=3, jitter=0.0), sleep=lambda s: None)

        assert decision.is_failure
        assert len(calls) == 3

    def test_delay_is_capped(self) -> None:
        sleeps: list[float] = []
        run_with_backoff(
            _failing,
            RetryConfig(max_attempts=6, base_delay=1.0, max_delay=4.0, jitter=0.0),
            sleep=sleeps.append,
        )

        assert sleeps == [1.0, 2.0, 4.0, 4.0, 4.0]

    def test_exceptions_are_not_retried(self) -> None:
        calls: list[int] = []

        def op() -> RequeueDecision:
            calls.append(1)
            raise RuntimeError("bug")

        with pytest.raises(RuntimeError, match="bug"):
            run_with_backoff(op, RetryConfig(max_attempts=3), sleep=lambda s: None)
        assert len(calls) == 1
