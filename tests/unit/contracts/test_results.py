# tests/unit/contracts/test_results.py
"""Tests for TaskResult construction invariants and factories."""

import pytest

from clusterward.contracts.enums import TaskStatus
from clusterward.contracts.results import TaskResult


class TestTaskResultFactories:
    """Factories produce the documented status codes."""

    def test_complete_allows_empty_message(self) -> None:
        result = TaskResult.complete()
        assert result.status is TaskStatus.COMPLETE
        assert result.message == ""
        assert result.is_complete

    def test_wait(self) -> None:
        result = TaskResult.wait("pod is not ready")
        assert result.status is TaskStatus.WAIT
        assert result.message == "pod is not ready"
        assert not result.is_complete

    def test_retry(self) -> None:
        assert TaskResult.retry("again").status is TaskStatus.RETRY

    def test_retry_after_carries_delay(self) -> None:
        result = TaskResult.retry_after(5.0, "later")
        assert result.status is TaskStatus.RETRY_AFTER
        assert result.requeue_after == 5.0

    def test_fail_carries_error(self) -> None:
        err = RuntimeError("boom")
        result = TaskResult.fail("cannot update", error=err)
        assert result.status is TaskStatus.FAIL
        assert result.error is err

    def test_fail_without_error(self) -> None:
        result = TaskResult.fail("config is invalid")
        assert result.error is None

    def test_pause_and_retry(self) -> None:
        assert TaskResult.pause_and_retry("moot").status is TaskStatus.PAUSE_AND_RETRY


class TestTaskResultInvariants:
    """Malformed results are rejected at construction."""

    @pytest.mark.parametrize(
        "status",
        [TaskStatus.WAIT, TaskStatus.RETRY, TaskStatus.FAIL, TaskStatus.PAUSE_AND_RETRY],
    )
    def test_non_complete_requires_message(self, status: TaskStatus) -> None:
        with pytest.raises(ValueError, match="MUST provide a message"):
            TaskResult(status)

    def test_error_only_on_fail(self) -> None:
        with pytest.raises(ValueError, match="Only FAIL"):
            TaskResult(TaskStatus.WAIT, "x", error=RuntimeError("e"))

    @pytest.mark.parametrize("delay", [None, 0.0, -1.0])
    def test_retry_after_requires_positive_delay(self, delay: float | None) -> None:
        with pytest.raises(ValueError, match="positive delay"):
            TaskResult(TaskStatus.RETRY_AFTER, "x", requeue_after=delay)

    def test_delay_only_on_retry_after(self) -> None:
        with pytest.raises(ValueError, match="Only RETRY_AFTER"):
            TaskResult(TaskStatus.RETRY, "x", requeue_after=1.0)

    def test_results_are_frozen(self) -> None:
        result = TaskResult.complete()
        with pytest.raises(AttributeError):
            result.message = "changed"  # type: ignore[misc]

    def test_error_ignored_in_equality(self) -> None:
        assert TaskResult.fail("x", error=RuntimeError("a")) == TaskResult.fail("x", error=ValueError("b"))


class TestTaskStatus:
    def test_only_complete_continues(self) -> None:
        stopping = {s for s in TaskStatus if s.stops_pipeline}
        assert stopping == set(TaskStatus) - {TaskStatus.COMPLETE}
