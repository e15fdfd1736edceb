# src/clusterward/controllers/reconciler.py
"""Reconciler: one controller's entry point for the surrounding work-queue.

Each call to reconcile() is one pass: a fresh state built from the key, the
runner executed once, and the aggregate result mapped onto a requeue
decision. The work-queue guarantees passes for the same key never overlap.
"""

from __future__ import annotations

import time
from collections.abc import Callable
from typing import Generic, TypeVar

import structlog

from clusterward.contracts.call import CallContext
from clusterward.contracts.objects import ObjectKey
from clusterward.core.config import ClusterwardSettings
from clusterward.engine.reporter import LogReporter
from clusterward.engine.requeue import RequeueDecision
from clusterward.engine.retry import RetryConfig, run_with_backoff
from clusterward.engine.runner import TaskRunner

S = TypeVar("S")

slog = structlog.get_logger(__name__)


class Reconciler(Generic[S]):
    """Drives a TaskRunner for one component.

    Example:
        settings = init_settings(Path("clusterward.yaml"))
        reconciler = Reconciler(pd.new_runner(client, members), pd.new_state, settings)
        decision = reconciler.reconcile(CallContext(timeout=30), ObjectKey("db", "basic-x8k2"))
    """

    def __init__(
        self,
        runner: TaskRunner[S],
        new_state: Callable[[ObjectKey], S],
        settings: ClusterwardSettings | None = None,
        *,
        sleep: Callable[[float], None] = time.sleep,
    ) -> None:
        self._runner = runner
        self._new_state = new_state
        self._settings = settings or ClusterwardSettings()
        self._sleep = sleep

    def reconcile(self, call: CallContext, key: ObjectKey) -> RequeueDecision:
        """Run one pass for key and decide how to requeue it."""
        state = self._new_state(key)
        result, stop = self._runner.run(call, state, LogReporter(instance=str(key)))
        decision = RequeueDecision.from_result(result, pause_backoff=self._settings.requeue.pause_backoff_seconds)
        log = slog.bind(
            instance=str(key),
            status=result.status.value,
            message=result.message,
            stop=stop,
            requeue=decision.requeue,
            requeue_after=decision.requeue_after,
        )
        if decision.is_failure:
            log.warning("reconcile_failed", error=str(decision.error))
        else:
            log.info("reconcile_finished")
        return decision

    def reconcile_until_settled(
        self,
        call: CallContext,
        key: ObjectKey,
        *,
        on_retry: Callable[[int, RequeueDecision], None] | None = None,
    ) -> RequeueDecision:
        """Re-run failing passes with exponential backoff.

        Returns:
            The first non-failing decision, or the last failing one once
            retry.max_attempts passes have failed.
        """
        return run_with_backoff(
            lambda: self.reconcile(call, key),
            RetryConfig.from_settings(self._settings.retry),
            on_retry=on_retry,
            sleep=self._sleep,
        )
