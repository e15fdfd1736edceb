# tests/unit/controllers/tikv/test_config_map.py
"""Tests for the TiKV config map task."""

from __future__ import annotations

import pytest

from clusterward.contracts import (
    CallContext,
    ClientError,
    ConfigMap,
    InvalidConfigError,
    ObjectKey,
    TaskStatus,
    TiKV,
)
from clusterward.contracts.labels import LABEL_KEY_CONFIG_HASH, LABEL_KEY_INSTANCE
from clusterward.controllers.tikv import TiKVState
from clusterward.controllers.tikv.tasks import config_hash, new_config_map, parse_config, task_config_map
from clusterward.engine import run_task
from clusterward.testing import FakeClient, make_cluster, make_tikv

KEY = ObjectKey("default", "aaa-xxx")
CM_KEY = ObjectKey("default", "aaa-tikv-xxx")


def setup(call: CallContext, config: str = "", *objs: object) -> tuple[FakeClient, TiKVState]:
    client = FakeClient(make_tikv(config=config), *objs)
    state = TiKVState(KEY, instance=client.get(call, TiKV, KEY), cluster=make_cluster())
    return client, state


class TestParseConfig:
    def test_empty_config_is_valid(self) -> None:
        assert parse_config("") == {}

    def test_user_settings_are_kept(self) -> None:
        doc = parse_config("[raftstore]\ncapacity = '10GiB'\n")

        assert doc == {"raftstore": {"capacity": "10GiB"}}

    def test_invalid_toml_is_rejected(self) -> None:
        with pytest.raises(InvalidConfigError, match="not valid TOML"):
            parse_config("invalid")

    @pytest.mark.parametrize(
        "text",
        [
            "server.addr = 'xxx'",
            "[server]\nadvertise-status-addr = 'xxx'",
            "[pd]\nendpoints = ['a:2379']",
            "[storage]\ndata-dir = '/data'",
        ],
    )
    def test_managed_keys_are_rejected(self, text: str) -> None:
        with pytest.raises(InvalidConfigError, match="managed by the operator"):
            parse_config(text)

    def test_unrelated_key_under_managed_table_is_allowed(self) -> None:
        doc = parse_config("[server]\ngrpc-concurrency = 4\n")

        assert doc["server"]["grpc-concurrency"] == 4


class TestConfigHash:
    def test_formatting_does_not_change_hash(self) -> None:
        a = parse_config("[a]\nx = 1\ny = 2\n")
        b = parse_config("[a]\ny = 2\n\n\nx = 1\n")

        assert config_hash(a, "http://pd:2379") == config_hash(b, "http://pd:2379")

    def test_coordinator_address_changes_hash(self) -> None:
        doc = parse_config("[a]\nx = 1\n")

        assert config_hash(doc, "http://pd-a:2379") != config_hash(doc, "http://pd-b:2379")

    def test_non_finite_float_is_invalid(self) -> None:
        doc = parse_config("x = nan\n")

        with pytest.raises(InvalidConfigError, match="cannot be hashed"):
            config_hash(doc, "")


class TestNewConfigMap:
    def test_named_after_pod_and_labelled(self) -> None:
        cm = new_config_map(make_tikv(config="x = 1"), "x = 1", "abc")

        assert cm.meta.key == CM_KEY
        assert cm.meta.labels[LABEL_KEY_INSTANCE] == "aaa-xxx"
        assert cm.meta.labels[LABEL_KEY_CONFIG_HASH] == "abc"
        assert cm.data == {"config.toml": "x = 1"}


class TestConfigMapTask:
    def test_no_config(self, call: CallContext) -> None:
        client, state = setup(call)

        result, stop = run_task(call, state, task_config_map(client))

        assert result.status is TaskStatus.COMPLETE
        assert stop is False
        cm = client.peek(ConfigMap, CM_KEY)
        assert cm is not None
        assert cm.data == {"config.toml": ""}
        assert cm.meta.labels[LABEL_KEY_CONFIG_HASH] == state.config_hash

    def test_invalid_config(self, call: CallContext) -> None:
        client, state = setup(call, "invalid")

        result, _ = run_task(call, state, task_config_map(client))

        assert result.status is TaskStatus.FAIL
        assert isinstance(result.error, InvalidConfigError)
        assert client.peek(ConfigMap, CM_KEY) is None

    def test_config_with_managed_field(self, call: CallContext) -> None:
        client, state = setup(call, "server.addr = 'xxx'")

        result, _ = run_task(call, state, task_config_map(client))

        assert result.status is TaskStatus.FAIL
        assert "server.addr" in result.message

    def test_existing_config_map_is_updated(self, call: CallContext) -> None:
        old = ConfigMap(meta=new_config_map(make_tikv(), "", "stale").meta, data={"config.toml": "old"})
        client, state = setup(call, "[log]\nlevel = 'info'\n", old)

        result, _ = run_task(call, state, task_config_map(client))

        assert result.status is TaskStatus.COMPLETE
        cm = client.peek(ConfigMap, CM_KEY)
        assert cm is not None
        assert cm.data == {"config.toml": "[log]\nlevel = 'info'\n"}
        assert cm.meta.labels[LABEL_KEY_CONFIG_HASH] != "stale"

    def test_apply_failure_keeps_computed_hash(self, call: CallContext) -> None:
        client, state = setup(call, "[log]\nlevel = 'info'\n")
        client.with_error("apply", "*", ClientError("fake internal err"))

        result, _ = run_task(call, state, task_config_map(client))

        assert result.status is TaskStatus.FAIL
        assert state.config_hash is not None
        assert client.peek(ConfigMap, CM_KEY) is None
