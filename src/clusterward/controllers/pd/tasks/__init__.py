"""PD-specific tasks."""

from clusterward.controllers.pd.tasks.context import task_context_member
from clusterward.controllers.pd.tasks.status import (
    COND_INITIALIZED,
    CONDITION_ORDER,
    initialized_condition,
    task_status,
)

__all__ = [
    "COND_INITIALIZED",
    "CONDITION_ORDER",
    "initialized_condition",
    "task_context_member",
    "task_status",
]
