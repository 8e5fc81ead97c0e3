"""Shared fixtures for Kubernetes service tests."""

from __future__ import annotations

import json
import time
from collections.abc import Callable
from pathlib import Path
from typing import Any
from unittest.mock import MagicMock

import pytest

from kubectl_lite.integrations.kubernetes.models.discovery import ApiGroupList, ApiResourceList
from kubectl_lite.services.kubernetes.catalog import ResourceCatalog
from kubectl_lite.services.kubernetes.discovery_cache import DiscoveryCache


def _group(name: str, *versions: str, preferred: str | None = None) -> dict[str, Any]:
    entries = [
        {"groupVersion": f"{name}/{v}" if name else v, "version": v} for v in versions
    ]
    group: dict[str, Any] = {"name": name, "versions": entries}
    if preferred is not None:
        group["preferredVersion"] = next(e for e in entries if e["version"] == preferred)
    return group


def _resource(
    name: str,
    kind: str,
    namespaced: bool = True,
    short_names: list[str] | None = None,
    singular: str = "",
    verbs: list[str] | None = None,
) -> dict[str, Any]:
    return {
        "name": name,
        "singularName": singular,
        "kind": kind,
        "namespaced": namespaced,
        "verbs": verbs if verbs is not None else ["get", "list", "watch"],
        "shortNames": short_names,
    }


DISCOVERY_GROUPS: dict[str, Any] = {
    "kind": "APIGroupList",
    "groups": [
        _group("", "v1", preferred="v1"),
        _group("apps", "v1", preferred="v1"),
        _group("batch", "v1", "v1beta1", preferred="v1"),
        _group("events.k8s.io", "v1", preferred="v1"),
        _group("example.io", "v1"),
        _group("other.io", "v1"),
    ],
}

DISCOVERY_RESOURCES: dict[str, dict[str, Any]] = {
    "v1": {
        "groupVersion": "v1",
        "resources": [
            _resource("pods", "Pod", short_names=["po"], singular="pod"),
            _resource("pods/log", "Pod", verbs=["get"]),
            _resource("nodes", "Node", namespaced=False, short_names=["no"]),
            _resource("configmaps", "ConfigMap", short_names=["cm"]),
            _resource("events", "Event", short_names=["ev"], verbs=["create", "get", "list"]),
        ],
    },
    "apps/v1": {
        "groupVersion": "apps/v1",
        "resources": [
            _resource("deployments", "Deployment", short_names=["deploy"], singular="deployment"),
            _resource("deployments/scale", "Scale", verbs=["get", "patch"]),
        ],
    },
    "batch/v1": {
        "groupVersion": "batch/v1",
        "resources": [_resource("jobs", "Job")],
    },
    "batch/v1beta1": {
        "groupVersion": "batch/v1beta1",
        "resources": [
            _resource("jobs", "Job"),
            _resource("cronjobs", "CronJob", short_names=["cj"]),
        ],
    },
    "events.k8s.io/v1": {
        "groupVersion": "events.k8s.io/v1",
        "resources": [_resource("events", "Event", short_names=["ev"])],
    },
    "example.io/v1": {
        "groupVersion": "example.io/v1",
        "resources": [_resource("widgets", "Widget", namespaced=False)],
    },
    "other.io/v1": {
        "groupVersion": "other.io/v1",
        "resources": [_resource("widgets", "Widget")],
    },
}


@pytest.fixture
def mock_k8s_client() -> MagicMock:
    """Create a mock Kubernetes client."""
    mock_client = MagicMock()
    mock_client.default_namespace = "default"
    mock_client.current_context = "dev"
    return mock_client


@pytest.fixture
def discovery_groups() -> ApiGroupList:
    return ApiGroupList.model_validate(DISCOVERY_GROUPS)


@pytest.fixture
def discovery_resources() -> dict[str, ApiResourceList]:
    return {gv: ApiResourceList.model_validate(rl) for gv, rl in DISCOVERY_RESOURCES.items()}


@pytest.fixture
def discovery_cache(
    discovery_groups: ApiGroupList, discovery_resources: dict[str, ApiResourceList]
) -> DiscoveryCache:
    """A complete in-memory discovery snapshot."""
    return DiscoveryCache(groups=discovery_groups, resources=discovery_resources)


@pytest.fixture
def catalog(mock_k8s_client: MagicMock, discovery_cache: DiscoveryCache) -> ResourceCatalog:
    """A catalog answering from the cached snapshot."""
    return ResourceCatalog(mock_k8s_client, discovery_cache)


@pytest.fixture
def live_client(
    mock_k8s_client: MagicMock,
    discovery_groups: ApiGroupList,
    discovery_resources: dict[str, ApiResourceList],
) -> MagicMock:
    """A client whose discovery endpoints answer from the sample snapshot.

    Earlier group-versions answer more slowly, so results arrive out of order.
    """
    server_groups = ApiGroupList(groups=[g for g in discovery_groups.groups if not g.is_core])
    order = [g.preferred_or_first().group_version for g in server_groups.groups]

    def _group_resources(group_version: str) -> ApiResourceList:
        time.sleep((len(order) - order.index(group_version)) * 0.01)
        return discovery_resources[group_version]

    mock_k8s_client.list_core_api_versions.return_value = ["v1"]
    mock_k8s_client.list_api_groups.return_value = server_groups
    mock_k8s_client.list_core_api_resources.side_effect = discovery_resources.__getitem__
    mock_k8s_client.list_api_group_resources.side_effect = _group_resources
    return mock_k8s_client


@pytest.fixture
def write_discovery_cache() -> Callable[..., Path]:
    """Write the sample snapshot in kubectl's cache layout under a directory."""

    def _write(root: Path, skip: set[str] | None = None) -> Path:
        root.mkdir(parents=True, exist_ok=True)
        (root / "servergroups.json").write_text(json.dumps(DISCOVERY_GROUPS))
        for group_version, body in DISCOVERY_RESOURCES.items():
            if skip and group_version in skip:
                continue
            target = root / group_version / "serverresources.json"
            target.parent.mkdir(parents=True, exist_ok=True)
            target.write_text(json.dumps(body))
        return root

    return _write
