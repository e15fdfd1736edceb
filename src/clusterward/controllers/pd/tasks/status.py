# src/clusterward/controllers/pd/tasks/status.py
"""PD status derivation.

Conditions, in this order: Initialized, Health, Suspended.

Result once the status is persisted:
- pod terminating: RETRY (transient, re-check soon)
- not healthy or not initialized: WAIT
- otherwise: COMPLETE
"""

from __future__ import annotations

from copy import deepcopy

from clusterward.contracts.call import CallContext
from clusterward.contracts.client import ObjectClient
from clusterward.contracts.enums import ConditionStatus
from clusterward.contracts.errors import ClientError
from clusterward.contracts.objects import Condition
from clusterward.contracts.results import TaskResult
from clusterward.controllers.common.status import (
    COND_HEALTH,
    COND_SUSPENDED,
    apply_common_status,
    compute_health,
    health_condition,
    suspended_condition,
)
from clusterward.controllers.pd.state import PDState
from clusterward.engine.clock import DEFAULT_CLOCK, Clock
from clusterward.engine.task import Task, task

COND_INITIALIZED = "Initialized"

CONDITION_ORDER = (COND_INITIALIZED, COND_HEALTH, COND_SUSPENDED)


def initialized_condition(initialized: bool, generation: int) -> Condition:
    if initialized:
        return Condition(COND_INITIALIZED, ConditionStatus.TRUE, generation, "Initialized", "instance is initialized")
    return Condition(
        COND_INITIALIZED,
        ConditionStatus.FALSE,
        generation,
        "Uninitialized",
        "instance has not been initialized yet",
    )


def task_status(client: ObjectClient, clock: Clock = DEFAULT_CLOCK) -> Task[PDState]:
    @task("Status")
    def run(call: CallContext, state: PDState) -> TaskResult:
        pd = state.require_instance()
        before = deepcopy(pd.status)
        generation = pd.meta.generation

        healthy = compute_health(state.pod, state.pod_is_terminating, state.member_healthy)
        suspending = state.cluster is not None and state.cluster.suspend_compute
        conditions = [
            initialized_condition(state.initialized, generation),
            health_condition(healthy, generation),
            suspended_condition(suspending, state.pod, generation),
        ]

        if state.member is not None:
            pd.status.id = state.member.id
            pd.status.is_leader = state.member.is_leader

        apply_common_status(
            pd.status,
            generation=generation,
            update_revision=pd.revision,
            pod=state.pod,
            pod_is_terminating=state.pod_is_terminating,
            conditions=conditions,
            order=CONDITION_ORDER,
            now=clock.now(),
        )

        if pd.status != before:
            try:
                client.update_status(call, pd)
            except ClientError as e:
                return TaskResult.fail(f"cannot update status: {e}", error=e)

        if state.pod_is_terminating:
            return TaskResult.retry("pod may be terminating, requeue to retry")
        if not healthy or not state.initialized:
            return TaskResult.wait("pd may not be initialized or healthy, wait for next event")
        return TaskResult.complete("status is synced")

    return run
