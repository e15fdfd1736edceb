"""Platform object model.

These types answer: "What does the orchestration platform store?"

Objects are plain mutable dataclasses. A fetched object is the caller's own
copy: mutating it changes nothing until it is written back through the
object client, which checks ``meta.resource_version`` for optimistic
concurrency.

Naming: an instance called ``<group>-<id>`` owns the pod
``<group>-<component>-<id>``.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime
from typing import ClassVar

from clusterward.contracts.enums import Component, ConditionStatus, PodPhase, StoreState
from clusterward.contracts.labels import LABEL_KEY_INSTANCE_REVISION_HASH

POD_CONDITION_READY = "Ready"


@dataclass(frozen=True)
class ObjectKey:
    """Namespaced name identifying one object of a given kind."""

    namespace: str
    name: str

    def __str__(self) -> str:
        if not self.namespace:
            return self.name
        return f"{self.namespace}/{self.name}"


@dataclass
class ObjectMeta:
    """Metadata shared by every platform object.

    Fields:
        generation: Bumped by the platform on every desired-state change
        resource_version: Optimistic-concurrency token, bumped on every write
        deletion_timestamp: Set once deletion was requested (the deletion marker)
    """

    name: str
    namespace: str = ""
    generation: int = 0
    resource_version: int = 0
    labels: dict[str, str] = field(default_factory=dict)
    finalizers: list[str] = field(default_factory=list)
    deletion_timestamp: datetime | None = None

    @property
    def key(self) -> ObjectKey:
        return ObjectKey(self.namespace, self.name)

    @property
    def is_deleting(self) -> bool:
        return self.deletion_timestamp is not None


@dataclass
class Condition:
    """A typed, timestamped status fact attached to an instance."""

    type: str
    status: ConditionStatus
    observed_generation: int
    reason: str
    message: str
    last_transition_time: datetime | None = None


@dataclass
class PodCondition:
    """Condition reported by a pod (only the fields the core reads)."""

    type: str
    status: ConditionStatus


@dataclass
class Pod:
    """Workload pod backing one instance."""

    KIND: ClassVar[str] = "Pod"

    meta: ObjectMeta
    phase: PodPhase = PodPhase.PENDING
    conditions: list[PodCondition] = field(default_factory=list)

    @property
    def is_running(self) -> bool:
        return self.phase is PodPhase.RUNNING

    @property
    def is_ready(self) -> bool:
        """True if the pod reports the Ready condition as True."""
        return any(c.type == POD_CONDITION_READY and c.status is ConditionStatus.TRUE for c in self.conditions)

    @property
    def revision(self) -> str:
        """Revision hash of the template this pod was created from ("" if unlabelled)."""
        return self.meta.labels.get(LABEL_KEY_INSTANCE_REVISION_HASH, "")


@dataclass
class Cluster:
    """Cluster-wide desired state shared by all component instances."""

    KIND: ClassVar[str] = "Cluster"

    meta: ObjectMeta
    paused: bool = False
    suspend_compute: bool = False
    # Observed client address of the placement coordinator
    pd_address: str = ""


@dataclass
class Volume:
    """Declared persistent volume of a storage instance."""

    name: str
    storage: str
    storage_class_name: str | None = None


@dataclass
class InstanceStatus:
    """Status fields every component instance carries."""

    observed_generation: int = 0
    id: str = ""
    current_revision: str = ""
    update_revision: str = ""
    conditions: list[Condition] = field(default_factory=list)


@dataclass
class PDStatus(InstanceStatus):
    is_leader: bool = False


@dataclass
class TiKVStatus(InstanceStatus):
    state: StoreState | None = None


def pod_name_for(instance_name: str, component: Component) -> str:
    """Return the pod name owned by an instance.

    Example:
        pod_name_for("basic-x8k2", Component.TIKV) == "basic-tikv-x8k2"
    """
    group, sep, instance_id = instance_name.rpartition("-")
    if not sep:
        return f"{instance_name}-{component.value}"
    return f"{group}-{component.value}-{instance_id}"


@dataclass
class PD:
    """Placement-coordinator instance (primary object)."""

    KIND: ClassVar[str] = "PD"
    COMPONENT: ClassVar[Component] = Component.PD

    meta: ObjectMeta
    cluster_name: str = ""
    status: PDStatus = field(default_factory=PDStatus)

    @property
    def pod_name(self) -> str:
        return pod_name_for(self.meta.name, self.COMPONENT)

    @property
    def revision(self) -> str:
        return self.meta.labels.get(LABEL_KEY_INSTANCE_REVISION_HASH, "")


@dataclass
class TiKV:
    """Storage-node instance (primary object)."""

    KIND: ClassVar[str] = "TiKV"
    COMPONENT: ClassVar[Component] = Component.TIKV

    meta: ObjectMeta
    cluster_name: str = ""
    config: str = ""
    volumes: list[Volume] = field(default_factory=list)
    status: TiKVStatus = field(default_factory=TiKVStatus)

    @property
    def pod_name(self) -> str:
        return pod_name_for(self.meta.name, self.COMPONENT)

    @property
    def revision(self) -> str:
        return self.meta.labels.get(LABEL_KEY_INSTANCE_REVISION_HASH, "")


@dataclass
class ConfigMap:
    KIND: ClassVar[str] = "ConfigMap"

    meta: ObjectMeta
    data: dict[str, str] = field(default_factory=dict)


@dataclass
class PersistentVolumeClaim:
    KIND: ClassVar[str] = "PersistentVolumeClaim"

    meta: ObjectMeta
    storage: str = ""
    storage_class_name: str | None = None
