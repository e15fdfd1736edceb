# src/clusterward/controllers/pd/state.py
"""Placement-coordinator (PD) pass state and membership signal."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Protocol

from clusterward.contracts.call import CallContext
from clusterward.contracts.objects import PD, Cluster
from clusterward.controllers.common.state import InstanceState


@dataclass(frozen=True)
class MemberInfo:
    """What the coordinator quorum reports about one member."""

    id: str
    is_leader: bool = False
    healthy: bool = False


class MemberSource(Protocol):
    """Opaque external membership signal of the coordinator quorum.

    Both methods may raise ClientError when the quorum cannot be reached.
    """

    def is_initialized(self, call: CallContext, cluster: Cluster) -> bool:
        """True once the coordinator cluster has finished bootstrapping."""
        ...

    def get_member(self, call: CallContext, cluster: Cluster, name: str) -> MemberInfo | None:
        """Return the member named after the instance, None if it has not joined."""
        ...


@dataclass
class PDState(InstanceState[PD]):
    """Per-pass state of one PD instance.

    member is None whenever the membership signal could not be obtained.
    """

    member: MemberInfo | None = None
    initialized: bool = False

    @property
    def member_healthy(self) -> bool:
        return self.member is not None and self.member.healthy
