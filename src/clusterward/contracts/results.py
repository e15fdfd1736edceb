"""Task outcomes.

These types answer: "What did a pipeline step recommend?"

IMPORTANT:
- TaskResult is immutable; use the factory methods to create instances
- Every non-COMPLETE result MUST carry a message (observability)
- Only FAIL may wrap an underlying error
- Only RETRY_AFTER carries a requeue delay
"""

from __future__ import annotations

from dataclasses import dataclass, field

from clusterward.contracts.enums import TaskStatus


@dataclass(frozen=True)
class TaskResult:
    """Result of running one task.

    A task's status is only a local recommendation. The runner aggregates
    results: the first non-COMPLETE result wins and stops the pass.

    Fields:
        status: The status code
        message: Diagnostic text, never semantically load-bearing
        error: Underlying cause (FAIL only, optional even then)
        requeue_after: Delay in seconds (RETRY_AFTER only)
    """

    status: TaskStatus
    message: str = ""
    error: BaseException | None = field(default=None, compare=False)
    requeue_after: float | None = None

    def __post_init__(self) -> None:
        """Validate invariants - a malformed result is a task bug."""
        if self.status is not TaskStatus.COMPLETE and not self.message:
            raise ValueError(
                f"TaskResult with status={self.status.value!r} MUST provide a message. "
                "Silent non-complete results cannot be diagnosed."
            )
        if self.error is not None and self.status is not TaskStatus.FAIL:
            raise ValueError(f"Only FAIL results may carry an error, got status={self.status.value!r}")
        if self.status is TaskStatus.RETRY_AFTER:
            if self.requeue_after is None or self.requeue_after <= 0:
                raise ValueError(f"RETRY_AFTER requires a positive delay, got {self.requeue_after!r}")
        elif self.requeue_after is not None:
            raise ValueError(f"Only RETRY_AFTER results carry a delay, got status={self.status.value!r}")

    @classmethod
    def complete(cls, message: str = "") -> TaskResult:
        """Create a COMPLETE result; the runner continues with the next task."""
        return cls(status=TaskStatus.COMPLETE, message=message)

    @classmethod
    def wait(cls, message: str) -> TaskResult:
        """Create a WAIT result; a future watch event resolves the condition."""
        return cls(status=TaskStatus.WAIT, message=message)

    @classmethod
    def retry(cls, message: str) -> TaskResult:
        """Create a RETRY result; the pipeline should be re-run promptly."""
        return cls(status=TaskStatus.RETRY, message=message)

    @classmethod
    def retry_after(cls, delay: float, message: str) -> TaskResult:
        """Create a RETRY_AFTER result.

        Args:
            delay: Seconds to wait before re-running the pipeline (must be > 0).
            message: Why the pipeline has to be re-run.
        """
        return cls(status=TaskStatus.RETRY_AFTER, message=message, requeue_after=delay)

    @classmethod
    def fail(cls, message: str, error: BaseException | None = None) -> TaskResult:
        """Create a FAIL result.

        Args:
            message: What went wrong.
            error: Optional underlying cause, kept for the caller's error report.

        Example:
            try:
                client.update_status(call, obj)
            except ClientError as e:
                return TaskResult.fail(f"cannot update status of {obj.meta.name}", error=e)
        """
        return cls(status=TaskStatus.FAIL, message=message, error=error)

    @classmethod
    def pause_and_retry(cls, message: str) -> TaskResult:
        """Create a PAUSE_AND_RETRY result; requeue after the default backoff."""
        return cls(status=TaskStatus.PAUSE_AND_RETRY, message=message)

    @property
    def is_complete(self) -> bool:
        return self.status is TaskStatus.COMPLETE

    def __str__(self) -> str:
        text = self.status.value
        if self.requeue_after is not None:
            text = f"{text}({self.requeue_after}s)"
        if self.message:
            text = f"{text}: {self.message}"
        if self.error is not None:
            text = f"{text}: {self.error}"
        return text
