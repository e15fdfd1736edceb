# src/clusterward/engine/reporter.py
"""Task reporters: observe every task result of a pass.

The runner hands each (task name, result) pair to a reporter as soon as the
task returns. Reporters never influence control flow.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Protocol

import structlog

from clusterward.contracts.results import TaskResult

slog = structlog.get_logger(__name__)


class TaskReporter(Protocol):
    """Receives task results in execution order."""

    def report(self, name: str, result: TaskResult, depth: int) -> None:
        """Record one task result.

        Args:
            name: Task name
            result: What the task returned
            depth: Nesting level (0 = top-level task of the runner)
        """
        ...


class NullReporter:
    """Reporter that discards everything."""

    def report(self, name: str, result: TaskResult, depth: int) -> None:
        return None


NULL_REPORTER = NullReporter()


class LogReporter:
    """Emits one structured log event per task.

    COMPLETE results are logged at DEBUG, everything else at INFO so
    the reason a pass stopped is visible at the default level.
    """

    def __init__(self, **bindings: object) -> None:
        self._log = slog.bind(**bindings)

    def report(self, name: str, result: TaskResult, depth: int) -> None:
        fields = {
            "task": name,
            "status": result.status.value,
            "message": result.message,
            "depth": depth,
        }
        if result.requeue_after is not None:
            fields["requeue_after"] = result.requeue_after
        if result.error is not None:
            fields["error"] = str(result.error)
        if result.is_complete:
            self._log.debug("task_finished", **fields)
        else:
            self._log.info("task_finished", **fields)


@dataclass
class RecordingReporter:
    """Keeps every report in memory, in execution order.

    Used to summarize a pass and to assert call order in tests.
    """

    records: list[tuple[str, TaskResult, int]] = field(default_factory=list)

    def report(self, name: str, result: TaskResult, depth: int) -> None:
        self.records.append((name, result, depth))

    @property
    def names(self) -> list[str]:
        return [name for name, _, _ in self.records]

    def summary(self) -> str:
        """Render one line per task, indented by nesting depth."""
        return "\n".join(f"{'  ' * depth}{name}: {result}" for name, result, depth in self.records)
