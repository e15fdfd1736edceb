# src/clusterward/engine/__init__.py
"""Reconciliation task engine.

This module provides the pipeline runtime every component controller is
built from:
- Task / task() / Predicate: named units of work and named state tests
- TaskRunner: ordered execution with short-circuit aggregation
- Block / IfBreak: composition and conditional early return
- RequeueDecision: maps an aggregate result onto the work-queue
- run_with_backoff: re-runs failed passes with exponential backoff

Example:
    from clusterward.engine import IfBreak, TaskRunner

    runner = TaskRunner(
        task_context_pd(client),
        IfBreak(cond_instance_has_been_deleted),
        task_status(client),
    )
    result, stop = runner.run(call, PDState(key))
"""

from clusterward.engine.clock import DEFAULT_CLOCK, Clock, MockClock, SystemClock
from clusterward.engine.reporter import (
    NULL_REPORTER,
    LogReporter,
    NullReporter,
    RecordingReporter,
    TaskReporter,
)
from clusterward.engine.requeue import RequeueDecision
from clusterward.engine.retry import RetryConfig, run_with_backoff
from clusterward.engine.runner import Block, IfBreak, TaskRunner, run_task, run_tasks
from clusterward.engine.task import FuncTask, Predicate, Task, TaskFunc, predicate, task

__all__ = [
    "DEFAULT_CLOCK",
    "NULL_REPORTER",
    "Block",
    "Clock",
    "FuncTask",
    "IfBreak",
    "LogReporter",
    "MockClock",
    "NullReporter",
    "Predicate",
    "RecordingReporter",
    "RequeueDecision",
    "RetryConfig",
    "SystemClock",
    "Task",
    "TaskFunc",
    "TaskReporter",
    "TaskRunner",
    "predicate",
    "run_task",
    "run_tasks",
    "run_with_backoff",
    "task",
]
