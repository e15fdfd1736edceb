# tests/property/__init__.py
"""Property-based tests for clusterward.

Property-based testing validates invariants that must hold for ALL inputs,
not just the specific examples we think of. Status derivation is re-run on
every event, so idempotence and monotonicity are non-negotiable.

Test categories:
- core/: Hash determinism, NaN rejection
- engine/: Short-circuit aggregation, requeue mapping
- controllers/: Condition merge, fail-closed health, status idempotence
"""
