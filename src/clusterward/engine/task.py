# src/clusterward/engine/task.py
"""Tasks and predicates: the building blocks of a controller pipeline.

A Task is a named, side-effecting unit of work. It receives the ambient
call context and the per-pass state object, performs one coherent action
(fetch, compute, apply), and returns a TaskResult.

The state object is owned by exactly one pass. Tasks mutate it in place so
later tasks can read what earlier tasks fetched or computed; it is never
shared across passes.

Most tasks are plain functions turned into Tasks with the ``task`` decorator,
built inside a factory that closes over their collaborators:

    def task_context_pod(client: ObjectClient) -> Task[InstanceState]:
        @task("ContextPod")
        def run(call: CallContext, state: InstanceState) -> TaskResult:
            ...
        return run
"""

from __future__ import annotations

from collections.abc import Callable
from typing import TYPE_CHECKING, Generic, TypeVar

from clusterward.contracts.call import CallContext
from clusterward.contracts.results import TaskResult

if TYPE_CHECKING:
    from clusterward.engine.reporter import TaskReporter

S = TypeVar("S")

TaskFunc = Callable[[CallContext, S], TaskResult]


class Task(Generic[S]):
    """Named unit of work run against one pass's state.

    Subclasses implement run(). Combinators override execute() instead,
    because they may ask the enclosing runner to stop even when their own
    result is COMPLETE.

    A task is invoked at most once per pass. Re-entrancy across retries is
    handled by re-running the whole pipeline with fresh state.
    """

    def __init__(self, name: str) -> None:
        if not name:
            raise ValueError("Task name must not be empty")
        self.name = name

    def run(self, call: CallContext, state: S) -> TaskResult:
        raise NotImplementedError(f"{type(self).__name__} must implement run()")

    def execute(self, call: CallContext, state: S, reporter: TaskReporter) -> tuple[TaskResult, bool]:
        """Run the task and report whether the enclosing runner must stop.

        Returns:
            (result, stop) - stop is only ever True for structural early
            returns requested by a combinator.
        """
        return self.run(call, state), False

    def __repr__(self) -> str:
        return f"{type(self).__name__}({self.name!r})"


class FuncTask(Task[S]):
    """Task backed by a plain function."""

    def __init__(self, name: str, fn: TaskFunc[S]) -> None:
        super().__init__(name)
        self._fn = fn

    def run(self, call: CallContext, state: S) -> TaskResult:
        return self._fn(call, state)


def task(name: str) -> Callable[[TaskFunc[S]], Task[S]]:
    """Decorator turning ``fn(call, state) -> TaskResult`` into a named Task."""

    def decorator(fn: TaskFunc[S]) -> Task[S]:
        return FuncTask(name, fn)

    return decorator


class Predicate(Generic[S]):
    """Named boolean test over the pass state, used to gate sub-pipelines."""

    def __init__(self, name: str, fn: Callable[[S], bool]) -> None:
        self.name = name
        self._fn = fn

    def __call__(self, state: S) -> bool:
        return self._fn(state)

    def __repr__(self) -> str:
        return f"Predicate({self.name!r})"


def predicate(name: str) -> Callable[[Callable[[S], bool]], Predicate[S]]:
    """Decorator turning ``fn(state) -> bool`` into a named Predicate."""

    def decorator(fn: Callable[[S], bool]) -> Predicate[S]:
        return Predicate(name, fn)

    return decorator
