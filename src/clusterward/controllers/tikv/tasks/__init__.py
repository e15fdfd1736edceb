"""TiKV-specific tasks."""

from clusterward.controllers.tikv.tasks.config_map import (
    MANAGED_KEYS,
    config_hash,
    new_config_map,
    parse_config,
    task_config_map,
)
from clusterward.controllers.tikv.tasks.context import task_context_store
from clusterward.controllers.tikv.tasks.pvc import new_pvcs, pvc_name, task_pvc
from clusterward.controllers.tikv.tasks.status import (
    COND_LEADERS_EVICTED,
    CONDITION_ORDER,
    leaders_evicted_condition,
    task_status,
)

__all__ = [
    "COND_LEADERS_EVICTED",
    "CONDITION_ORDER",
    "MANAGED_KEYS",
    "config_hash",
    "leaders_evicted_condition",
    "new_config_map",
    "new_pvcs",
    "parse_config",
    "pvc_name",
    "task_config_map",
    "task_context_store",
    "task_pvc",
    "task_status",
]
