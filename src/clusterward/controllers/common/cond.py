# src/clusterward/controllers/common/cond.py
"""Named predicates gating IfBreak sub-pipelines."""

from __future__ import annotations

from typing import Any

from clusterward.controllers.common.state import InstanceState
from clusterward.engine.task import predicate


@predicate("InstanceHasBeenDeleted")
def cond_instance_has_been_deleted(state: InstanceState[Any]) -> bool:
    return state.instance is None


@predicate("InstanceIsDeleting")
def cond_instance_is_deleting(state: InstanceState[Any]) -> bool:
    return state.require_instance().meta.is_deleting


@predicate("ClusterIsPaused")
def cond_cluster_is_paused(state: InstanceState[Any]) -> bool:
    return state.require_cluster().paused


@predicate("ClusterIsSuspending")
def cond_cluster_is_suspending(state: InstanceState[Any]) -> bool:
    return state.require_cluster().suspend_compute
