# src/clusterward/engine/requeue.py
"""Map an aggregate TaskResult onto the reconcile loop's requeue decision.

| Status        | requeue | requeue_after        | error                  |
|---------------|---------|----------------------|------------------------|
| COMPLETE      | no      | -                    | -                      |
| WAIT          | no      | -                    | -                      |
| RETRY         | yes     | -                    | -                      |
| RETRY_AFTER   | yes     | result.requeue_after | -                      |
| FAIL          | no      | -                    | result.error or wrap   |
| PAUSE_AND_RETRY | yes   | pause backoff        | -                      |

WAIT deliberately does not requeue: the loop relies on a future watch event.
"""

from __future__ import annotations

from dataclasses import dataclass

from clusterward.contracts.enums import TaskStatus
from clusterward.contracts.errors import TaskFailedError
from clusterward.contracts.results import TaskResult


@dataclass(frozen=True, slots=True)
class RequeueDecision:
    """What the surrounding work-queue should do after one pass."""

    requeue: bool = False
    requeue_after: float | None = None
    error: BaseException | None = None

    def __post_init__(self) -> None:
        if self.requeue_after is not None:
            if not self.requeue:
                raise ValueError("requeue_after requires requeue=True")
            if self.requeue_after <= 0:
                raise ValueError(f"requeue_after must be positive, got {self.requeue_after}")
        if self.error is not None and self.requeue:
            raise ValueError("A failed decision is requeued by the caller's backoff, not by requeue")

    @property
    def is_failure(self) -> bool:
        return self.error is not None

    @classmethod
    def done(cls) -> RequeueDecision:
        return cls()

    @classmethod
    def from_result(cls, result: TaskResult, *, pause_backoff: float) -> RequeueDecision:
        """Translate a pass result.

        Args:
            result: Aggregate result of one runner pass
            pause_backoff: Delay in seconds applied to PAUSE_AND_RETRY

        Returns:
            The requeue decision for the work-queue
        """
        match result.status:
            case TaskStatus.COMPLETE | TaskStatus.WAIT:
                return cls()
            case TaskStatus.RETRY:
                return cls(requeue=True)
            case TaskStatus.RETRY_AFTER:
                return cls(requeue=True, requeue_after=result.requeue_after)
            case TaskStatus.PAUSE_AND_RETRY:
                return cls(requeue=True, requeue_after=pause_backoff)
            case TaskStatus.FAIL:
                return cls(error=result.error or TaskFailedError(result.message))
        raise AssertionError(f"Unhandled task status: {result.status!r}")
