# src/clusterward/testing/__init__.py
"""Test infrastructure for clusterward controllers.

Factories for constructing platform objects with sensible defaults.
When an object's constructor changes, update the factory here.
Tests that use factories need ZERO changes.

This package also contains:
- fake_client: in-memory ObjectClient plus fake member/store sources

Usage:
    from clusterward.testing import FakeClient, make_cluster, make_pd, make_pod
"""

from __future__ import annotations

from datetime import datetime

from clusterward.contracts.enums import ConditionStatus, PodPhase
from clusterward.contracts.labels import (
    LABEL_KEY_CLUSTER,
    LABEL_KEY_COMPONENT,
    LABEL_KEY_INSTANCE_REVISION_HASH,
    LABEL_KEY_MANAGED_BY,
    LABEL_VAL_MANAGED_BY_OPERATOR,
)
from clusterward.contracts.objects import (
    PD,
    POD_CONDITION_READY,
    Cluster,
    ObjectMeta,
    Pod,
    PodCondition,
    TiKV,
    Volume,
)
from clusterward.testing.fake_client import FakeClient, FakeMemberSource, FakeStoreSource

DEFAULT_NAMESPACE = "default"
DEFAULT_CLUSTER = "cluster"

__all__ = [
    "DEFAULT_CLUSTER",
    "DEFAULT_NAMESPACE",
    "FakeClient",
    "FakeMemberSource",
    "FakeStoreSource",
    "make_cluster",
    "make_pd",
    "make_pod",
    "make_tikv",
]


def _instance_labels(component: str, cluster: str, revision: str | None) -> dict[str, str]:
    labels = {
        LABEL_KEY_MANAGED_BY: LABEL_VAL_MANAGED_BY_OPERATOR,
        LABEL_KEY_COMPONENT: component,
        LABEL_KEY_CLUSTER: cluster,
    }
    if revision is not None:
        labels[LABEL_KEY_INSTANCE_REVISION_HASH] = revision
    return labels


def make_cluster(
    name: str = DEFAULT_CLUSTER,
    *,
    namespace: str = DEFAULT_NAMESPACE,
    paused: bool = False,
    suspend_compute: bool = False,
    pd_address: str = "http://cluster-pd:2379",
) -> Cluster:
    return Cluster(
        meta=ObjectMeta(name=name, namespace=namespace),
        paused=paused,
        suspend_compute=suspend_compute,
        pd_address=pd_address,
    )


def make_pd(
    name: str = "aaa-xxx",
    *,
    namespace: str = DEFAULT_NAMESPACE,
    cluster: str = DEFAULT_CLUSTER,
    generation: int = 1,
    revision: str | None = None,
    finalizers: list[str] | None = None,
    deletion_timestamp: datetime | None = None,
) -> PD:
    return PD(
        meta=ObjectMeta(
            name=name,
            namespace=namespace,
            generation=generation,
            labels=_instance_labels(PD.COMPONENT.value, cluster, revision),
            finalizers=list(finalizers or []),
            deletion_timestamp=deletion_timestamp,
        ),
        cluster_name=cluster,
    )


def make_tikv(
    name: str = "aaa-xxx",
    *,
    namespace: str = DEFAULT_NAMESPACE,
    cluster: str = DEFAULT_CLUSTER,
    generation: int = 1,
    revision: str | None = None,
    config: str = "",
    volumes: list[Volume] | None = None,
    finalizers: list[str] | None = None,
    deletion_timestamp: datetime | None = None,
) -> TiKV:
    return TiKV(
        meta=ObjectMeta(
            name=name,
            namespace=namespace,
            generation=generation,
            labels=_instance_labels(TiKV.COMPONENT.value, cluster, revision),
            finalizers=list(finalizers or []),
            deletion_timestamp=deletion_timestamp,
        ),
        cluster_name=cluster,
        config=config,
        volumes=list(volumes or []),
    )


def make_pod(
    name: str = "aaa-pd-xxx",
    *,
    namespace: str = DEFAULT_NAMESPACE,
    revision: str | None = None,
    running: bool = True,
    ready: bool = True,
    deletion_timestamp: datetime | None = None,
) -> Pod:
    """Pod factory; by default Running and Ready."""
    labels = {} if revision is None else {LABEL_KEY_INSTANCE_REVISION_HASH: revision}
    return Pod(
        meta=ObjectMeta(name=name, namespace=namespace, labels=labels, deletion_timestamp=deletion_timestamp),
        phase=PodPhase.RUNNING if running else PodPhase.PENDING,
        conditions=[PodCondition(POD_CONDITION_READY, ConditionStatus.from_bool(ready))],
    )
