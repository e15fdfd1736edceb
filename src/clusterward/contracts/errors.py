"""Error contracts.

Client errors describe why an interaction with the orchestration platform
failed. Tasks catch them at the task boundary and turn them into FAIL
results; they never propagate through the runner.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from clusterward.contracts.objects import ObjectKey


class ClientError(Exception):
    """Transport or backend failure talking to the orchestration platform."""


class ObjectNotFoundError(ClientError):
    """Raised when a fetched object does not exist.

    Fetch tasks treat this as "absent", not as a failure.
    """

    def __init__(self, kind: str, key: ObjectKey) -> None:
        self.kind = kind
        self.key = key
        super().__init__(f"{kind} {key} not found")


class ConflictError(ClientError):
    """Raised when a conditional write loses the optimistic-concurrency race.

    Recovered by re-running the whole pass with freshly fetched data,
    never by merging and retrying inside a task.
    """

    def __init__(self, kind: str, key: ObjectKey, expected: int, actual: int) -> None:
        self.kind = kind
        self.key = key
        self.expected = expected
        self.actual = actual
        super().__init__(
            f"conflict writing {kind} {key}: object has been modified "
            f"(resource version {expected} is stale, current is {actual})"
        )


class CallCancelledError(ClientError):
    """Raised by client calls once the ambient call context is cancelled or expired."""


class InvalidConfigError(ValueError):
    """Raised when embedded desired-state configuration cannot be accepted.

    This is an operator-visible condition: retrying does not help until the
    desired-state input is corrected.
    """


class TaskFailedError(Exception):
    """Stand-in error for a FAIL result that carries no underlying cause."""

    def __init__(self, message: str) -> None:
        self.message = message
        super().__init__(message)
