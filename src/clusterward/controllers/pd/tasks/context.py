# src/clusterward/controllers/pd/tasks/context.py
"""Fetch the membership signal from the coordinator quorum."""

from __future__ import annotations

import structlog

from clusterward.contracts.call import CallContext
from clusterward.contracts.errors import CallCancelledError, ClientError
from clusterward.contracts.results import TaskResult
from clusterward.controllers.pd.state import MemberSource, PDState
from clusterward.engine.task import Task, task

slog = structlog.get_logger(__name__)


def task_context_member(members: MemberSource) -> Task[PDState]:
    """Populate member/initialized; an unreachable quorum leaves them absent.

    The quorum being unreachable is an expected, transient observation: the
    status task reports the instance as unhealthy instead of failing.
    """

    @task("ContextInfoFromPD")
    def run(call: CallContext, state: PDState) -> TaskResult:
        cluster = state.require_cluster()
        pd = state.require_instance()
        try:
            initialized = members.is_initialized(call, cluster)
            member = members.get_member(call, cluster, pd.meta.name)
        except CallCancelledError as e:
            return TaskResult.fail("pass cancelled while fetching members", error=e)
        except ClientError as e:
            slog.warning("member_info_unavailable", instance=str(state.key), error=str(e))
            state.member = None
            state.initialized = False
            return TaskResult.complete("pd is unavailable")
        state.initialized = initialized
        state.member = member
        if member is None:
            return TaskResult.complete("pd member has not joined yet")
        return TaskResult.complete("pd member info is set")

    return run
