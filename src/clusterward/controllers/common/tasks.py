# src/clusterward/controllers/common/tasks.py
"""Tasks shared by every component pipeline.

Context tasks fetch observations into the state. Fetching something that
does not exist is not a failure: the field simply stays None. Transport
errors are FAIL with the underlying cause.
"""

from __future__ import annotations

import logging
from typing import Any

import structlog

from clusterward.contracts.call import CallContext
from clusterward.contracts.client import ObjectClient
from clusterward.contracts.errors import ClientError, ObjectNotFoundError
from clusterward.contracts.labels import (
    FINALIZER,
    LABEL_KEY_CLUSTER,
    LABEL_KEY_COMPONENT,
    LABEL_KEY_MANAGED_BY,
    LABEL_VAL_MANAGED_BY_OPERATOR,
)
from clusterward.contracts.objects import Cluster, ObjectKey, Pod
from clusterward.contracts.results import TaskResult
from clusterward.controllers.common.state import InstanceObject, InstanceState
from clusterward.engine.task import Task, task

logger = logging.getLogger(__name__)
slog = structlog.get_logger(__name__)


def task_context_instance(client: ObjectClient, kind: type[InstanceObject]) -> Task[InstanceState[Any]]:
    """Fetch the primary object; a missing one leaves state.instance None."""

    @task(f"Context{kind.KIND}")
    def run(call: CallContext, state: InstanceState[Any]) -> TaskResult:
        try:
            state.instance = client.get(call, kind, state.key)
        except ObjectNotFoundError:
            state.instance = None
            return TaskResult.complete(f"{kind.KIND} {state.key} does not exist")
        except ClientError as e:
            return TaskResult.fail(f"cannot get {kind.KIND} {state.key}: {e}", error=e)
        return TaskResult.complete(f"{kind.KIND} is set")

    return run


def task_context_cluster(client: ObjectClient) -> Task[InstanceState[Any]]:
    """Fetch the owning cluster; a missing cluster is a failure."""

    @task("ContextCluster")
    def run(call: CallContext, state: InstanceState[Any]) -> TaskResult:
        instance = state.require_instance()
        key = ObjectKey(instance.meta.namespace, instance.cluster_name)
        try:
            state.cluster = client.get(call, Cluster, key)
        except ClientError as e:
            return TaskResult.fail(f"cannot find cluster {key}: {e}", error=e)
        return TaskResult.complete("cluster is set")

    return run


def task_context_siblings(client: ObjectClient, kind: type[InstanceObject]) -> Task[InstanceState[Any]]:
    """List every instance of the same component in the same cluster."""

    @task(f"Context{kind.KIND}Slice")
    def run(call: CallContext, state: InstanceState[Any]) -> TaskResult:
        instance = state.require_instance()
        selector = {
            LABEL_KEY_MANAGED_BY: LABEL_VAL_MANAGED_BY_OPERATOR,
            LABEL_KEY_COMPONENT: kind.COMPONENT.value,
            LABEL_KEY_CLUSTER: instance.cluster_name,
        }
        try:
            siblings = client.list(call, kind, instance.meta.namespace, selector)
        except ClientError as e:
            return TaskResult.fail(f"cannot list {kind.KIND} instances: {e}", error=e)
        state.siblings = sorted(siblings, key=lambda obj: obj.meta.name)
        return TaskResult.complete(f"{kind.KIND} slice is set")

    return run


def task_context_pod(client: ObjectClient) -> Task[InstanceState[Any]]:
    """Fetch the instance's pod and derive pod_is_terminating from its deletion marker."""

    @task("ContextPod")
    def run(call: CallContext, state: InstanceState[Any]) -> TaskResult:
        instance = state.require_instance()
        key = ObjectKey(instance.meta.namespace, instance.pod_name)
        try:
            pod = client.get(call, Pod, key)
        except ObjectNotFoundError:
            state.pod = None
            state.pod_is_terminating = False
            return TaskResult.complete("pod does not exist")
        except ClientError as e:
            return TaskResult.fail(f"cannot get pod {key}: {e}", error=e)
        state.pod = pod
        state.pod_is_terminating = pod.meta.is_deleting
        return TaskResult.complete("pod is set")

    return run


def task_finalizer_add(client: ObjectClient) -> Task[InstanceState[Any]]:
    """Ensure the instance carries the operator finalizer (idempotent)."""

    @task("FinalizerAdd")
    def run(call: CallContext, state: InstanceState[Any]) -> TaskResult:
        instance = state.require_instance()
        if FINALIZER in instance.meta.finalizers:
            return TaskResult.complete("finalizer is already added")
        instance.meta.finalizers.append(FINALIZER)
        try:
            client.update(call, instance)
        except ClientError as e:
            return TaskResult.fail(f"cannot add finalizer: {e}", error=e)
        return TaskResult.complete("finalizer is added")

    return run


def task_finalizer_del(client: ObjectClient) -> Task[InstanceState[Any]]:
    """Tear down a deleting instance: delete its pod, then drop the finalizer.

    The finalizer is only removed once the pod is gone; until then the
    pass asks to be re-run.
    """

    @task("FinalizerDel")
    def run(call: CallContext, state: InstanceState[Any]) -> TaskResult:
        instance = state.require_instance()
        if state.pod is not None:
            if not state.pod_is_terminating:
                try:
                    client.delete(call, state.pod)
                except ObjectNotFoundError:
                    pass
                except ClientError as e:
                    return TaskResult.fail(f"cannot delete pod {state.pod.meta.key}: {e}", error=e)
                state.pod_is_terminating = True
            return TaskResult.retry("wait for pod to be deleted before removing the finalizer")

        if FINALIZER not in instance.meta.finalizers:
            return TaskResult.complete("finalizer has been removed")
        instance.meta.finalizers = [f for f in instance.meta.finalizers if f != FINALIZER]
        try:
            client.update(call, instance)
        except ObjectNotFoundError:
            return TaskResult.complete("instance is already gone")
        except ClientError as e:
            return TaskResult.fail(f"cannot remove finalizer: {e}", error=e)
        slog.info("finalizer_removed", kind=instance.KIND, instance=str(state.key))
        return TaskResult.complete("finalizer is removed")

    return run


def task_suspend_pod(client: ObjectClient) -> Task[InstanceState[Any]]:
    """Delete the pod while the cluster suspends compute."""

    @task("SuspendPod")
    def run(call: CallContext, state: InstanceState[Any]) -> TaskResult:
        pod = state.pod
        if pod is None:
            return TaskResult.complete("pod has been deleted")
        if state.pod_is_terminating:
            return TaskResult.complete("pod is terminating")
        try:
            client.delete(call, pod)
        except ObjectNotFoundError:
            state.pod = None
            return TaskResult.complete("pod has been deleted")
        except ClientError as e:
            return TaskResult.fail(f"cannot delete pod {pod.meta.key}: {e}", error=e)
        state.pod_is_terminating = True
        logger.info("Deleted pod %s of suspending cluster", pod.meta.key)
        return TaskResult.complete("pod is deleted")

    return run
