# src/clusterward/controllers/common/__init__.py
"""Building blocks shared by every component controller."""

from clusterward.controllers.common.cond import (
    cond_cluster_is_paused,
    cond_cluster_is_suspending,
    cond_instance_has_been_deleted,
    cond_instance_is_deleting,
)
from clusterward.controllers.common.state import InstanceObject, InstanceState
from clusterward.controllers.common.status import (
    COND_HEALTH,
    COND_SUSPENDED,
    apply_common_status,
    compute_health,
    find_condition,
    health_condition,
    merge_conditions,
    next_current_revision,
    suspended_condition,
)
from clusterward.controllers.common.tasks import (
    task_context_cluster,
    task_context_instance,
    task_context_pod,
    task_context_siblings,
    task_finalizer_add,
    task_finalizer_del,
    task_suspend_pod,
)

__all__ = [
    "COND_HEALTH",
    "COND_SUSPENDED",
    "InstanceObject",
    "InstanceState",
    "apply_common_status",
    "compute_health",
    "cond_cluster_is_paused",
    "cond_cluster_is_suspending",
    "cond_instance_has_been_deleted",
    "cond_instance_is_deleting",
    "find_condition",
    "health_condition",
    "merge_conditions",
    "next_current_revision",
    "suspended_condition",
    "task_context_cluster",
    "task_context_instance",
    "task_context_pod",
    "task_context_siblings",
    "task_finalizer_add",
    "task_finalizer_del",
    "task_suspend_pod",
]
