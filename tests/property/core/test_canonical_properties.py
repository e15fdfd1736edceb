# tests/property/core/test_canonical_properties.py
"""Property-based tests for configuration hashing.

The config hash is stamped on the generated config map; a hash that drifts
for the same parsed configuration would roll every pod on each pass.
"""

from __future__ import annotations

import json
import math
from typing import Any

import pytest
from hypothesis import given
from hypothesis import strategies as st

from clusterward.core.canonical import canonical_json, stable_hash
from tests.property.conftest import config_docs
from tests.property.settings import DETERMINISM_SETTINGS, QUICK_SETTINGS


class TestStableHashDeterminism:
    @given(doc=config_docs)
    @DETERMINISM_SETTINGS
    def test_same_input_same_hash(self, doc: dict[str, Any]) -> None:
        assert stable_hash(doc) == stable_hash(doc)

    @given(doc=config_docs)
    @DETERMINISM_SETTINGS
    def test_key_order_does_not_matter(self, doc: dict[str, Any]) -> None:
        reversed_doc = dict(reversed(list(doc.items())))

        assert stable_hash(doc) == stable_hash(reversed_doc)

    @given(doc=config_docs)
    @DETERMINISM_SETTINGS
    def test_hash_is_sha256_hex(self, doc: dict[str, Any]) -> None:
        digest = stable_hash(doc)

        assert len(digest) == 64
        assert all(c in "0123456789abcdef" for c in digest)

    @given(doc=config_docs)
    @DETERMINISM_SETTINGS
    def test_canonical_form_is_a_fixed_point(self, doc: dict[str, Any]) -> None:
        text = canonical_json(doc)

        assert canonical_json(json.loads(text)) == text


class TestNonFiniteRejection:
    @given(value=st.sampled_from([math.nan, math.inf, -math.inf]), key=st.text(min_size=1, max_size=5))
    @QUICK_SETTINGS
    def test_non_finite_floats_rejected(self, value: float, key: str) -> None:
        with pytest.raises(ValueError, match="non-finite"):
            stable_hash({"config": {key: value}})
