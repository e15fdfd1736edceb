# src/clusterward/controllers/tikv/tasks/context.py
"""Fetch the store signal from the placement coordinator."""

from __future__ import annotations

import structlog

from clusterward.contracts.call import CallContext
from clusterward.contracts.errors import CallCancelledError, ClientError
from clusterward.contracts.results import TaskResult
from clusterward.controllers.tikv.state import StoreSource, TiKVState
from clusterward.engine.task import Task, task

slog = structlog.get_logger(__name__)


def task_context_store(stores: StoreSource) -> Task[TiKVState]:
    @task("ContextInfoFromPD")
    def run(call: CallContext, state: TiKVState) -> TaskResult:
        cluster = state.require_cluster()
        tikv = state.require_instance()
        try:
            store = stores.get_store(call, cluster, tikv.meta.name)
        except CallCancelledError as e:
            return TaskResult.fail("pass cancelled while fetching store", error=e)
        except ClientError as e:
            slog.warning("store_info_unavailable", instance=str(state.key), error=str(e))
            state.pd_available = False
            state.store = None
            return TaskResult.complete("pd is unavailable")
        state.pd_available = True
        state.store = store
        if store is None:
            return TaskResult.complete("store does not exist")
        return TaskResult.complete("store info is set")

    return run
