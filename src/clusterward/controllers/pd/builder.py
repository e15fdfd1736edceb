# src/clusterward/controllers/pd/builder.py
"""PD reconciliation pipeline.

Order is business logic: gates (deleted, paused, deleting, suspending)
must run before anything that writes.
"""

from __future__ import annotations

from clusterward.contracts.client import ObjectClient
from clusterward.contracts.objects import PD, ObjectKey
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
from clusterward.controllers.pd.state import MemberSource, PDState
from clusterward.controllers.pd.tasks import task_context_member, task_status
from clusterward.engine.clock import DEFAULT_CLOCK, Clock
from clusterward.engine.reporter import TaskReporter
from clusterward.engine.runner import IfBreak, TaskRunner


def new_state(key: ObjectKey) -> PDState:
    return PDState(key)


def new_runner(
    client: ObjectClient,
    members: MemberSource,
    *,
    clock: Clock = DEFAULT_CLOCK,
    reporter: TaskReporter | None = None,
) -> TaskRunner[PDState]:
    """Build the PD pipeline; one runner serves every pass."""
    return TaskRunner(
        # get pd
        task_context_instance(client, PD),
        # if it's gone just return
        IfBreak(cond_instance_has_been_deleted),
        # get cluster
        task_context_cluster(client),
        # if it's paused just return
        IfBreak(cond_cluster_is_paused),
        # get the other pds and the pod
        task_context_siblings(client, PD),
        task_context_pod(client),
        IfBreak(cond_instance_is_deleting, task_finalizer_del(client)),
        task_finalizer_add(client),
        task_context_member(members),
        IfBreak(
            cond_cluster_is_suspending,
            task_suspend_pod(client),
            task_status(client, clock),
        ),
        task_status(client, clock),
        reporter=reporter,
    )
