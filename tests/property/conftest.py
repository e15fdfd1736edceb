# tests/property/conftest.py
"""Shared Hypothesis strategies for property-based tests.

Strategy Categories:
- JSON-safe values (RFC 8785 compatible), shaped like parsed TOML
- Task results and pods (engine and status inputs)
- Conditions (persisted status)

Usage:
    from tests.property.conftest import task_results, pods

    @given(pod=pods())
    def test_health_is_fail_closed(pod) -> None:
        ...
"""

# =============================================================================
# Hypothesis Settings
# =============================================================================
#
# For standardized @settings decorators, import from tests.property.settings:
#   from tests.property.settings import STANDARD_SETTINGS, DETERMINISM_SETTINGS
#
# Tiers: DETERMINISM (500), STANDARD (100), QUICK (20)
# =============================================================================

from __future__ import annotations

from datetime import UTC, datetime

from hypothesis import strategies as st

from clusterward.contracts import Condition, ConditionStatus, Pod, TaskResult
from clusterward.testing import make_pod

# RFC 8785 (JCS) uses JavaScript-safe integers: -(2^53-1) to (2^53-1)
MAX_SAFE_INT = 2**53 - 1
MIN_SAFE_INT = -(2**53 - 1)

# =============================================================================
# Core JSON Strategies
# =============================================================================

json_primitives = (
    st.none()
    | st.booleans()
    | st.integers(min_value=MIN_SAFE_INT, max_value=MAX_SAFE_INT)
    | st.floats(min_value=-1e9, max_value=1e9, allow_nan=False, allow_infinity=False)
    | st.text(max_size=20)
)

config_keys = st.text(alphabet="abcdefghijklmnopqrstuvwxyz-_", min_size=1, max_size=12)

json_values = st.recursive(
    json_primitives,
    lambda children: st.lists(children, max_size=4) | st.dictionaries(config_keys, children, max_size=4),
    max_leaves=20,
)

config_docs = st.dictionaries(config_keys, json_values, max_size=6)

# =============================================================================
# Engine Strategies
# =============================================================================

messages = st.text(alphabet="abcdefghij ", min_size=1, max_size=10)

task_results = st.one_of(
    st.builds(TaskResult.complete, messages),
    st.builds(TaskResult.wait, messages),
    st.builds(TaskResult.retry, messages),
    st.builds(TaskResult.retry_after, st.floats(min_value=0.1, max_value=600), messages),
    st.builds(TaskResult.fail, messages),
    st.builds(TaskResult.pause_and_retry, messages),
)

# =============================================================================
# Status Strategies
# =============================================================================

revisions = st.sampled_from(["", "r1", "r2", "r3"])

timestamps = st.datetimes(
    min_value=datetime(2020, 1, 1),
    max_value=datetime(2030, 1, 1),
    timezones=st.just(UTC),
)


@st.composite
def pods(draw: st.DrawFn) -> Pod:
    """Pods in any phase/readiness, possibly terminating."""
    deleting = draw(st.booleans())
    return make_pod(
        revision=draw(revisions),
        running=draw(st.booleans()),
        ready=draw(st.booleans()),
        deletion_timestamp=datetime(2025, 1, 1, tzinfo=UTC) if deleting else None,
    )


def conditions(types: st.SearchStrategy[str]) -> st.SearchStrategy[Condition]:
    return st.builds(
        Condition,
        type=types,
        status=st.sampled_from([ConditionStatus.TRUE, ConditionStatus.FALSE]),
        observed_generation=st.integers(min_value=0, max_value=10),
        reason=st.sampled_from(["A", "B"]),
        message=messages,
        last_transition_time=st.none() | timestamps,
    )
