# src/clusterward/controllers/tikv/builder.py
"""TiKV reconciliation pipeline."""

from __future__ import annotations

from clusterward.contracts.client import ObjectClient
from clusterward.contracts.objects import ObjectKey, TiKV
from clusterward.controllers.common import (
    cond_cluster_is_paused,
    cond_cluster_is_suspending,
    cond_instance_has_been_deleted,
    cond_instance_is_deleting,
    task_context_cluster,
    task_context_instance,
    task_context_pod,
    task_context_siblings,
    task_finalizer_add,
    task_finalizer_del,
    task_suspend_pod,
)
from clusterward.controllers.tikv.state import StoreSource, TiKVState
from clusterward.controllers.tikv.tasks import task_config_map, task_context_store, task_pvc, task_status
from clusterward.engine.clock import DEFAULT_CLOCK, Clock
from clusterward.engine.reporter import TaskReporter
from clusterward.engine.runner import Block, IfBreak, TaskRunner


def new_state(key: ObjectKey) -> TiKVState:
    return TiKVState(key)


def new_runner(
    client: ObjectClient,
    stores: StoreSource,
    *,
    clock: Clock = DEFAULT_CLOCK,
    reporter: TaskReporter | None = None,
) -> TaskRunner[TiKVState]:
    """Build the TiKV pipeline; one runner serves every pass."""
    return TaskRunner(
        # get tikv
        task_context_instance(client, TiKV),
        # if it's gone just return
        IfBreak(cond_instance_has_been_deleted),
        # get cluster
        task_context_cluster(client),
        # if it's paused just return
        IfBreak(cond_cluster_is_paused),
        Block(
            "ContextObjects",
            task_context_siblings(client, TiKV),
            task_context_pod(client),
        ),
        IfBreak(cond_instance_is_deleting, task_finalizer_del(client)),
        task_finalizer_add(client),
        task_context_store(stores),
        task_config_map(client),
        task_pvc(client),
        IfBreak(
            cond_cluster_is_suspending,
            task_suspend_pod(client),
            task_status(client, clock),
        ),
        task_status(client, clock),
        reporter=reporter,
    )
