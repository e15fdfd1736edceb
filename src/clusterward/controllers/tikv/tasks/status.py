# src/clusterward/controllers/tikv/tasks/status.py
"""TiKV status derivation.

Conditions, in this order: Health, Suspended, LeadersEvicted.

Health requires, on top of a running and Ready pod, that the placement
coordinator answered and reports the store as Serving.

LeadersEvicted, first match wins:
1. coordinator unavailable: False/NotEvicted (cannot prove eviction)
2. store no longer exists: True/StoreIsRemoved (vacuously evicted)
3. eviction requested and no leader left: True/Evicted
4. otherwise: False/NotEvicted

Result once the status is persisted:
- pod terminating: RETRY
- not healthy: WAIT
- leader eviction in effect: WAIT
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
from clusterward.controllers.tikv.state import TiKVState
from clusterward.engine.clock import DEFAULT_CLOCK, Clock
from clusterward.engine.task import Task, task

COND_LEADERS_EVICTED = "LeadersEvicted"

CONDITION_ORDER = (COND_HEALTH, COND_SUSPENDED, COND_LEADERS_EVICTED)


def leaders_evicted_condition(state: TiKVState, generation: int) -> Condition:
    if not state.pd_available:
        return Condition(
            COND_LEADERS_EVICTED, ConditionStatus.FALSE, generation, "NotEvicted", "leaders are not all evicted"
        )
    if state.store is None:
        return Condition(
            COND_LEADERS_EVICTED, ConditionStatus.TRUE, generation, "StoreIsRemoved", "store does not exist"
        )
    if state.store.leaders_evicted:
        return Condition(COND_LEADERS_EVICTED, ConditionStatus.TRUE, generation, "Evicted", "all leaders are evicted")
    return Condition(
        COND_LEADERS_EVICTED, ConditionStatus.FALSE, generation, "NotEvicted", "leaders are not all evicted"
    )


def task_status(client: ObjectClient, clock: Clock = DEFAULT_CLOCK) -> Task[TiKVState]:
    @task("Status")
    def run(call: CallContext, state: TiKVState) -> TaskResult:
        tikv = state.require_instance()
        before = deepcopy(tikv.status)
        generation = tikv.meta.generation

        healthy = compute_health(state.pod, state.pod_is_terminating, state.store_serving)
        suspending = state.cluster is not None and state.cluster.suspend_compute
        conditions = [
            health_condition(healthy, generation),
            suspended_condition(suspending, state.pod, generation),
            leaders_evicted_condition(state, generation),
        ]

        # Keep the last known identity while the store cannot be observed;
        # a store the coordinator no longer knows has no state but keeps its id
        if state.store is not None:
            tikv.status.id = state.store.id
            tikv.status.state = state.store.state
        elif state.pd_available:
            tikv.status.state = None

        apply_common_status(
            tikv.status,
            generation=generation,
            update_revision=tikv.revision,
            pod=state.pod,
            pod_is_terminating=state.pod_is_terminating,
            conditions=conditions,
            order=CONDITION_ORDER,
            now=clock.now(),
        )

        if tikv.status != before:
            try:
                client.update_status(call, tikv)
            except ClientError as e:
                return TaskResult.fail(f"cannot update status: {e}", error=e)

        if state.pod_is_terminating:
            return TaskResult.retry("pod may be terminating, requeue to retry")
        if not healthy:
            return TaskResult.wait("tikv may not be healthy, wait for next event")
        if state.leader_evicting:
            return TaskResult.wait("tikv may be evicting leaders, wait for next event")
        return TaskResult.complete("status is synced")

    return run
