"""Placement-coordinator (PD) controller."""

from clusterward.controllers.pd.builder import new_runner, new_state
from clusterward.controllers.pd.state import MemberInfo, MemberSource, PDState

__all__ = [
    "MemberInfo",
    "MemberSource",
    "PDState",
    "new_runner",
    "new_state",
]
