# src/clusterward/controllers/common/state.py
"""Per-pass state shared by every component controller.

Each reconciliation pass builds a fresh state from the instance key; tasks
fill it in incrementally. ``None`` means "not fetched yet, or fetched and
not found" and is always distinguishable from a zero value.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, ClassVar, Generic, Protocol, TypeVar

from clusterward.contracts.enums import Component
from clusterward.contracts.objects import Cluster, InstanceStatus, ObjectKey, ObjectMeta, Pod


class InstanceObject(Protocol):
    """Capabilities the shared tasks need from a component's primary object."""

    KIND: ClassVar[str]
    COMPONENT: ClassVar[Component]

    meta: ObjectMeta
    cluster_name: str
    status: Any

    @property
    def pod_name(self) -> str: ...

    @property
    def revision(self) -> str: ...


I = TypeVar("I", bound=InstanceObject)


@dataclass
class InstanceState(Generic[I]):
    """Observations accumulated during one pass over one instance.

    Fields:
        key: Namespaced name of the instance being reconciled
        instance: The primary object (None once it has been deleted)
        cluster: Owning cluster
        siblings: All instances of the same component in the cluster, by name
        pod: Workload pod (None if absent)
        pod_is_terminating: Pod carries a deletion marker
    """

    key: ObjectKey
    instance: I | None = None
    cluster: Cluster | None = None
    siblings: list[I] = field(default_factory=list)
    pod: Pod | None = None
    pod_is_terminating: bool = False

    def require_instance(self) -> I:
        """Return the primary object, which later tasks may rely on."""
        if self.instance is None:
            raise LookupError(f"instance {self.key} has not been fetched")
        return self.instance

    def require_cluster(self) -> Cluster:
        if self.cluster is None:
            raise LookupError(f"cluster of instance {self.key} has not been fetched")
        return self.cluster

    @property
    def status(self) -> InstanceStatus:
        status: InstanceStatus = self.require_instance().status
        return status
