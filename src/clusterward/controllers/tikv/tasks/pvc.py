# src/clusterward/controllers/tikv/tasks/pvc.py
"""Create the persistent volume claims a TiKV pod mounts.

One claim per declared volume, named ``<volume>-<pod>``. Claims are applied
unconditionally; an existing claim is merged, never recreated.
"""

from __future__ import annotations

from clusterward.contracts.call import CallContext
from clusterward.contracts.client import ObjectClient
from clusterward.contracts.errors import ClientError
from clusterward.contracts.labels import LABEL_KEY_INSTANCE
from clusterward.contracts.objects import ObjectMeta, PersistentVolumeClaim, TiKV
from clusterward.contracts.results import TaskResult
from clusterward.controllers.tikv.state import TiKVState
from clusterward.engine.task import Task, task


def pvc_name(pod_name: str, volume_name: str) -> str:
    return f"{volume_name}-{pod_name}"


def new_pvcs(tikv: TiKV) -> list[PersistentVolumeClaim]:
    """One claim per declared volume, in declaration order."""
    labels = dict(tikv.meta.labels)
    labels[LABEL_KEY_INSTANCE] = tikv.meta.name
    return [
        PersistentVolumeClaim(
            meta=ObjectMeta(
                name=pvc_name(tikv.pod_name, vol.name),
                namespace=tikv.meta.namespace,
                labels=dict(labels),
            ),
            storage=vol.storage,
            storage_class_name=vol.storage_class_name,
        )
        for vol in tikv.volumes
    ]


def task_pvc(client: ObjectClient) -> Task[TiKVState]:
    @task("PVC")
    def run(call: CallContext, state: TiKVState) -> TaskResult:
        for pvc in new_pvcs(state.require_instance()):
            try:
                client.apply(call, pvc)
            except ClientError as e:
                return TaskResult.fail(f"failed to sync pvcs: {e}", error=e)
        return TaskResult.complete("pvcs are synced")

    return run
