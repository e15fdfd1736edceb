# src/clusterward/controllers/tikv/state.py
"""Storage-node (TiKV) pass state and store signal."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Protocol

from clusterward.contracts.call import CallContext
from clusterward.contracts.enums import StoreState
from clusterward.contracts.objects import Cluster, TiKV
from clusterward.controllers.common.state import InstanceState


@dataclass(frozen=True)
class StoreInfo:
    """What the placement coordinator reports about one store.

    Fields:
        leader_count: Region leaders still hosted by the store
        leader_evicting: Leader eviction has been requested for the store
    """

    id: str
    state: StoreState
    leader_count: int = 0
    leader_evicting: bool = False

    @property
    def leaders_evicted(self) -> bool:
        """Eviction was requested and no leader is left."""
        return self.leader_evicting and self.leader_count == 0


class StoreSource(Protocol):
    """Opaque external store signal from the placement coordinator."""

    def get_store(self, call: CallContext, cluster: Cluster, name: str) -> StoreInfo | None:
        """Return the store backing the instance, None if it no longer exists.

        Raises:
            ClientError: If the placement coordinator cannot be reached.
        """
        ...


@dataclass
class TiKVState(InstanceState[TiKV]):
    """Per-pass state of one TiKV instance.

    Fields:
        store: Store info (None if removed, or if the coordinator is unavailable)
        pd_available: The coordinator answered this pass
        config_hash: Hash of the effective configuration, set before it is applied
    """

    store: StoreInfo | None = None
    pd_available: bool = False
    config_hash: str | None = None

    @property
    def store_serving(self) -> bool:
        return self.pd_available and self.store is not None and self.store.state is StoreState.SERVING

    @property
    def leader_evicting(self) -> bool:
        return self.store is not None and self.store.leader_evicting
