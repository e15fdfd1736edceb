"""Storage-node (TiKV) controller."""

from clusterward.controllers.tikv.builder import new_runner, new_state
from clusterward.controllers.tikv.state import StoreInfo, StoreSource, TiKVState

__all__ = [
    "StoreInfo",
    "StoreSource",
    "TiKVState",
    "new_runner",
    "new_state",
]
