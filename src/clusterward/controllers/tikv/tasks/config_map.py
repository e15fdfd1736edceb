# src/clusterward/controllers/tikv/tasks/config_map.py
"""Render the TiKV configuration into a config map.

The user-supplied TOML is stored verbatim. Addresses, coordinator endpoints
and the data directory are owned by the operator and passed to the process
as flags, so setting them in the embedded config is rejected.
"""

from __future__ import annotations

import tomllib
from typing import Any

from clusterward.contracts.call import CallContext
from clusterward.contracts.client import ObjectClient
from clusterward.contracts.errors import ClientError, InvalidConfigError
from clusterward.contracts.labels import LABEL_KEY_CONFIG_HASH, LABEL_KEY_INSTANCE
from clusterward.contracts.objects import ConfigMap, ObjectMeta, TiKV
from clusterward.contracts.results import TaskResult
from clusterward.controllers.tikv.state import TiKVState
from clusterward.core.canonical import stable_hash
from clusterward.engine.task import Task, task

CONFIG_FILE_NAME = "config.toml"

MANAGED_KEYS: tuple[str, ...] = (
    "server.addr",
    "server.advertise-addr",
    "server.status-addr",
    "server.advertise-status-addr",
    "pd.endpoints",
    "storage.data-dir",
)


def _lookup(doc: dict[str, Any], dotted: str) -> bool:
    node: Any = doc
    for part in dotted.split("."):
        if not isinstance(node, dict) or part not in node:
            return False
        node = node[part]
    return True


def parse_config(text: str) -> dict[str, Any]:
    """Parse and validate the embedded TOML config.

    Raises:
        InvalidConfigError: If the text is not TOML or sets an operator-managed key.
    """
    try:
        doc = tomllib.loads(text)
    except tomllib.TOMLDecodeError as e:
        raise InvalidConfigError(f"config is not valid TOML: {e}") from e
    managed = [key for key in MANAGED_KEYS if _lookup(doc, key)]
    if managed:
        raise InvalidConfigError(f"config must not set fields managed by the operator: {', '.join(managed)}")
    return doc


def config_hash(doc: dict[str, Any], pd_address: str) -> str:
    """Hash of the effective configuration: parsed user config plus coordinator address."""
    try:
        return stable_hash({"config": doc, "pd": pd_address})
    except ValueError as e:
        raise InvalidConfigError(f"config cannot be hashed: {e}") from e


def new_config_map(tikv: TiKV, text: str, hash_value: str) -> ConfigMap:
    labels = dict(tikv.meta.labels)
    labels[LABEL_KEY_INSTANCE] = tikv.meta.name
    labels[LABEL_KEY_CONFIG_HASH] = hash_value
    return ConfigMap(
        meta=ObjectMeta(name=tikv.pod_name, namespace=tikv.meta.namespace, labels=labels),
        data={CONFIG_FILE_NAME: text},
    )


def task_config_map(client: ObjectClient) -> Task[TiKVState]:
    @task("ConfigMap")
    def run(call: CallContext, state: TiKVState) -> TaskResult:
        tikv = state.require_instance()
        cluster = state.require_cluster()
        try:
            doc = parse_config(tikv.config)
            state.config_hash = config_hash(doc, cluster.pd_address)
        except InvalidConfigError as e:
            return TaskResult.fail(f"tikv config is invalid: {e}", error=e)

        cm = new_config_map(tikv, tikv.config, state.config_hash)
        try:
            client.apply(call, cm)
        except ClientError as e:
            return TaskResult.fail(f"cannot apply config map {cm.meta.key}: {e}", error=e)
        return TaskResult.complete("config map is synced")

    return run
