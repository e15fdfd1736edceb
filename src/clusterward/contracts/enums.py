"""All status codes, phases, and kinds used across subsystem boundaries.

CRITICAL: TaskStatus is the only control-flow signal a task may return.
"Not ready yet" is a status, never an exception.
"""

from enum import StrEnum


class TaskStatus(StrEnum):
    """Outcome of one pipeline step.

    Only COMPLETE lets the runner continue; every other status stops the
    pass and becomes the aggregate result.

    Values:
        COMPLETE: Step finished normally, continue with the next step
        WAIT: Expected not-yet-ready condition, resolved by a future watch event
        RETRY: Re-run the pipeline promptly
        RETRY_AFTER: Re-run the pipeline after an explicit delay
        FAIL: Unexpected error, surfaced to the caller (exponential backoff)
        PAUSE_AND_RETRY: Pass is moot for now, requeue after the default backoff
    """

    COMPLETE = "complete"
    WAIT = "wait"
    RETRY = "retry"
    RETRY_AFTER = "retry_after"
    FAIL = "fail"
    PAUSE_AND_RETRY = "pause_and_retry"

    @property
    def stops_pipeline(self) -> bool:
        """True for every status except COMPLETE."""
        return self is not TaskStatus.COMPLETE


class ConditionStatus(StrEnum):
    """Platform-standard tri-state condition value.

    Persisted as-is in condition entries.
    """

    TRUE = "True"
    FALSE = "False"
    UNKNOWN = "Unknown"

    @classmethod
    def from_bool(cls, value: bool) -> "ConditionStatus":
        return cls.TRUE if value else cls.FALSE


class PodPhase(StrEnum):
    """Lifecycle phase reported by a pod."""

    PENDING = "Pending"
    RUNNING = "Running"
    SUCCEEDED = "Succeeded"
    FAILED = "Failed"
    UNKNOWN = "Unknown"


class StoreState(StrEnum):
    """Serving state of a storage node as reported by the placement coordinator.

    Persisted in the storage node status (status.state).
    """

    PREPARING = "Preparing"
    SERVING = "Serving"
    REMOVING = "Removing"
    REMOVED = "Removed"


class Component(StrEnum):
    """Cluster component kinds managed by a controller.

    Used as the component label value and inside pod names.
    """

    PD = "pd"
    TIKV = "tikv"
