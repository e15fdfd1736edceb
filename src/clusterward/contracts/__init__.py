"""Shared contracts for cross-boundary data types.

This package is a LEAF MODULE with no outbound dependencies to core/engine.
Settings classes are NOT re-exported here - import them from
clusterward.core.config.

Import patterns:
    from clusterward.contracts import TaskResult, TaskStatus, PD, ObjectKey
    from clusterward.core.config import ClusterwardSettings
"""

from clusterward.contracts.call import CallContext
from clusterward.contracts.client import ObjectClient
from clusterward.contracts.enums import (
    Component,
    ConditionStatus,
    PodPhase,
    StoreState,
    TaskStatus,
)
from clusterward.contracts.errors import (
    CallCancelledError,
    ClientError,
    ConflictError,
    InvalidConfigError,
    ObjectNotFoundError,
    TaskFailedError,
)
from clusterward.contracts.objects import (
    PD,
    Cluster,
    Condition,
    ConfigMap,
    InstanceStatus,
    ObjectKey,
    ObjectMeta,
    PDStatus,
    PersistentVolumeClaim,
    Pod,
    PodCondition,
    TiKV,
    TiKVStatus,
    Volume,
    pod_name_for,
)
from clusterward.contracts.results import TaskResult

__all__ = [
    "PD",
    "CallCancelledError",
    "CallContext",
    "ClientError",
    "Cluster",
    "Component",
    "Condition",
    "ConditionStatus",
    "ConfigMap",
    "ConflictError",
    "InstanceStatus",
    "InvalidConfigError",
    "ObjectClient",
    "ObjectKey",
    "ObjectMeta",
    "ObjectNotFoundError",
    "PDStatus",
    "PersistentVolumeClaim",
    "Pod",
    "PodCondition",
    "PodPhase",
    "StoreState",
    "TaskFailedError",
    "TaskResult",
    "TaskStatus",
    "TiKV",
    "TiKVStatus",
    "Volume",
    "pod_name_for",
]
