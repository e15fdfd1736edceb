# src/clusterward/engine/runner.py
"""TaskRunner and combinators: sequencing, short-circuit, aggregation.

Algorithm (shared by TaskRunner, Block and IfBreak):
- Tasks run strictly in declared order against one shared state object.
- COMPLETE continues with the next task.
- Any other status stops immediately and becomes the aggregate result;
  later tasks never run. Ordering in the task list is business logic
  ("check paused" must precede "apply changes").
- A task may additionally request a structural stop (IfBreak does);
  the runner then returns right away with that task's result.
- An exhausted list of COMPLETE tasks aggregates to COMPLETE.

No exception crosses a task boundary: anything a task raises is turned
into a FAIL result carrying the exception.
"""

from __future__ import annotations

import logging
from collections.abc import Sequence
from typing import Generic, TypeVar

import structlog

from clusterward.contracts.call import CallContext
from clusterward.contracts.errors import CallCancelledError
from clusterward.contracts.results import TaskResult
from clusterward.engine.reporter import NULL_REPORTER, LogReporter, TaskReporter
from clusterward.engine.task import Predicate, Task

S = TypeVar("S")

logger = logging.getLogger(__name__)
slog = structlog.get_logger(__name__)


class _NestedReporter:
    """Forwards reports one nesting level deeper."""

    def __init__(self, parent: TaskReporter) -> None:
        self._parent = parent

    def report(self, name: str, result: TaskResult, depth: int) -> None:
        self._parent.report(name, result, depth + 1)


def _execute(call: CallContext, state: S, t: Task[S], reporter: TaskReporter) -> tuple[TaskResult, bool]:
    """Execute one task, converting escaped exceptions into FAIL."""
    try:
        call.raise_if_done()
        result, stop = t.execute(call, state, reporter)
    except CallCancelledError as e:
        result, stop = TaskResult.fail(f"pass cancelled before task {t.name} finished", error=e), False
    except Exception as e:
        logger.exception("Task %s raised unexpectedly", t.name)
        result, stop = TaskResult.fail(f"task {t.name} raised {type(e).__name__}: {e}", error=e), False
    reporter.report(t.name, result, 0)
    return result, stop


def run_tasks(
    call: CallContext,
    state: S,
    tasks: Sequence[Task[S]],
    reporter: TaskReporter = NULL_REPORTER,
) -> tuple[TaskResult, bool]:
    """Run tasks in order with short-circuit aggregation.

    Returns:
        (aggregate result, stop) - the first non-COMPLETE result (or the
        result of the task that requested a stop), else COMPLETE.
    """
    for t in tasks:
        result, stop = _execute(call, state, t, reporter)
        if stop or result.status.stops_pipeline:
            return result, stop
    return TaskResult.complete(), False


def run_task(
    call: CallContext,
    state: S,
    t: Task[S],
    reporter: TaskReporter = NULL_REPORTER,
) -> tuple[TaskResult, bool]:
    """Run a single task with the same guarantees as a runner."""
    return _execute(call, state, t, reporter)


class Block(Task[S]):
    """Treat an ordered list of tasks as one task.

    The block's result is the aggregate of its tasks (same algorithm as the
    runner). Nested tasks see and mutate the same state as the outer
    pipeline; there is no scoping barrier.

    Example:
        Block("ContextInfo", task_context_pd(c), task_context_cluster(c), task_context_pod(c))
    """

    def __init__(self, name: str, *tasks: Task[S]) -> None:
        super().__init__(name)
        self.tasks: tuple[Task[S], ...] = tasks

    def execute(self, call: CallContext, state: S, reporter: TaskReporter) -> tuple[TaskResult, bool]:
        return run_tasks(call, state, self.tasks, _NestedReporter(reporter))


class IfBreak(Task[S]):
    """Run nested tasks and stop the outer pipeline if a predicate holds.

    - Predicate false: COMPLETE immediately, nested tasks never run, the
      outer pipeline falls through.
    - Predicate true: nested tasks run as one unit; their aggregate becomes
      this task's result, and the outer pipeline stops whatever that
      status is.

    Without nested tasks this is a plain conditional early return
    ("instance has been deleted, nothing to do").
    """

    def __init__(self, cond: Predicate[S], *tasks: Task[S]) -> None:
        super().__init__(f"IfBreak({cond.name})")
        self.cond = cond
        self.tasks: tuple[Task[S], ...] = tasks

    def execute(self, call: CallContext, state: S, reporter: TaskReporter) -> tuple[TaskResult, bool]:
        if not self.cond(state):
            return TaskResult.complete(f"{self.cond.name} is false"), False
        if not self.tasks:
            return TaskResult.complete(f"{self.cond.name} is true, stop"), True
        result, _ = run_tasks(call, state, self.tasks, _NestedReporter(reporter))
        return result, True


class TaskRunner(Generic[S]):
    """Executes a fixed, ordered task list against one state per run().

    The runner holds no per-pass data, so one runner can serve every pass
    of a controller; each pass supplies its own fresh state.

    Example:
        runner = TaskRunner(
            task_context_pd(client),
            IfBreak(cond_instance_has_been_deleted),
            task_status(client),
        )
        result, stop = runner.run(call, PDState(key))
    """

    def __init__(self, *tasks: Task[S], reporter: TaskReporter | None = None) -> None:
        if not tasks:
            raise ValueError("TaskRunner requires at least one task")
        self.tasks: tuple[Task[S], ...] = tasks
        self._reporter = reporter

    def run(self, call: CallContext, state: S, reporter: TaskReporter | None = None) -> tuple[TaskResult, bool]:
        """Run the pipeline once.

        Args:
            call: Ambient call context (cancellation/deadline)
            state: Fresh per-pass state
            reporter: Overrides the runner's reporter for this pass

        Returns:
            (aggregate result, stop)
        """
        active = reporter or self._reporter or LogReporter()
        result, stop = run_tasks(call, state, self.tasks, active)
        slog.debug(
            "pipeline_finished",
            status=result.status.value,
            message=result.message,
            stop=stop,
        )
        return result, stop
