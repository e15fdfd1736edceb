# src/clusterward/controllers/common/status.py
"""Status derivation helpers shared by component status tasks.

Condition merge rules:
- Computed conditions are emitted in the component's fixed order,
  whatever order they were computed in.
- A condition whose status did not change keeps its previous
  lastTransitionTime; reason, message and observedGeneration are refreshed.
- A condition whose status changed (or is new) is stamped with "now".
- Condition types this controller does not own are kept, after the owned
  ones, in their previous relative order.

Revision rule: currentRevision only ever moves to the revision of a pod
that exists, is not terminating and reports Ready.
"""

from __future__ import annotations

from collections.abc import Sequence
from copy import deepcopy
from datetime import datetime

from clusterward.contracts.enums import ConditionStatus
from clusterward.contracts.objects import Condition, InstanceStatus, Pod

COND_HEALTH = "Health"
COND_SUSPENDED = "Suspended"

REASON_HEALTHY = "Healthy"
REASON_UNHEALTHY = "Unhealthy"
REASON_SUSPENDED = "Suspended"
REASON_SUSPENDING = "Suspending"
REASON_UNSUSPENDED = "Unsuspended"


def compute_health(pod: Pod | None, pod_is_terminating: bool, external_ok: bool) -> bool:
    """Fail-closed health: every input must be present and positive."""
    if pod is None or pod_is_terminating:
        return False
    return external_ok and pod.is_running and pod.is_ready


def health_condition(healthy: bool, generation: int) -> Condition:
    if healthy:
        return Condition(COND_HEALTH, ConditionStatus.TRUE, generation, REASON_HEALTHY, "instance is healthy")
    return Condition(COND_HEALTH, ConditionStatus.FALSE, generation, REASON_UNHEALTHY, "instance is not healthy")


def suspended_condition(suspending: bool, pod: Pod | None, generation: int) -> Condition:
    """Suspended is True only once the cluster suspends compute and the pod is gone."""
    if not suspending:
        return Condition(
            COND_SUSPENDED, ConditionStatus.FALSE, generation, REASON_UNSUSPENDED, "instance is not suspended"
        )
    if pod is None:
        return Condition(COND_SUSPENDED, ConditionStatus.TRUE, generation, REASON_SUSPENDED, "instance is suspended")
    return Condition(
        COND_SUSPENDED, ConditionStatus.FALSE, generation, REASON_SUSPENDING, "instance is suspending"
    )


def merge_conditions(
    previous: Sequence[Condition],
    computed: Sequence[Condition],
    order: Sequence[str],
    now: datetime,
) -> list[Condition]:
    """Merge freshly computed conditions into the persisted list by type.

    Args:
        previous: Conditions currently persisted on the instance
        computed: Conditions derived in this pass (one per owned type)
        order: Fixed emission order of the owned condition types
        now: Timestamp for conditions whose status changed

    Returns:
        New condition list; inputs are not mutated
    """
    if sorted(c.type for c in computed) != sorted(order):
        raise ValueError(
            f"computed conditions {[c.type for c in computed]} do not match the fixed order {list(order)}"
        )
    by_type = {c.type: c for c in computed}

    old_by_type = {c.type: c for c in previous}
    merged: list[Condition] = []
    for cond_type in order:
        new = deepcopy(by_type[cond_type])
        old = old_by_type.get(cond_type)
        if old is not None and old.status is new.status and old.last_transition_time is not None:
            new.last_transition_time = old.last_transition_time
        else:
            new.last_transition_time = now
        merged.append(new)

    owned = set(order)
    merged.extend(deepcopy(c) for c in previous if c.type not in owned)
    return merged


def next_current_revision(previous: str, pod: Pod | None, pod_is_terminating: bool) -> str:
    """Revision actually running: advanced only from a Ready, non-terminating pod."""
    if pod is None or pod_is_terminating or not pod.is_ready:
        return previous
    return pod.revision


def apply_common_status(
    status: InstanceStatus,
    *,
    generation: int,
    update_revision: str,
    pod: Pod | None,
    pod_is_terminating: bool,
    conditions: Sequence[Condition],
    order: Sequence[str],
    now: datetime,
) -> None:
    """Fill the fields every component status shares, in place."""
    status.observed_generation = generation
    status.update_revision = update_revision
    status.current_revision = next_current_revision(status.current_revision, pod, pod_is_terminating)
    status.conditions = merge_conditions(status.conditions, conditions, order, now)


def find_condition(conditions: Sequence[Condition], cond_type: str) -> Condition | None:
    for c in conditions:
        if c.type == cond_type:
            return c
    return None
