"""Read-only access to kubectl's on-disk discovery cache.

Layout under ``<cache-dir>/discovery/<host>/``::

    servergroups.json                        APIGroupList, core group named ""
    <version>/serverresources.json           core APIResourceList
    <group>/<version>/serverresources.json   group APIResourceList

The cache is loaded once and never written back.
"""

from __future__ import annotations

import time
from pathlib import Path

import structlog
from pydantic import ValidationError

from kubectl_lite.integrations.kubernetes.exceptions import DiscoveryLoadError
from kubectl_lite.integrations.kubernetes.models.discovery import (
    ApiGroupList,
    ApiResourceList,
)

logger = structlog.get_logger()

SERVER_GROUPS_FILE = "servergroups.json"
SERVER_RESOURCES_FILE = "serverresources.json"


def _read_groups(path: Path) -> ApiGroupList:
    try:
        return ApiGroupList.model_validate_json(path.read_bytes())
    except (OSError, ValidationError) as e:
        raise DiscoveryLoadError(path, e) from e


def _read_resources(path: Path) -> ApiResourceList:
    try:
        return ApiResourceList.model_validate_json(path.read_bytes())
    except (OSError, ValidationError) as e:
        raise DiscoveryLoadError(path, e) from e


class DiscoveryCache:
    """An immutable snapshot of cached discovery documents.

    An empty cache (nothing on disk) answers None to every query, which
    tells callers to fall back to live discovery.
    """

    def __init__(
        self,
        groups: ApiGroupList | None = None,
        resources: dict[str, ApiResourceList] | None = None,
        path: Path | None = None,
        took: float = 0.0,
    ) -> None:
        self._groups = groups
        self._resources = dict(resources or {})
        self.path = path
        self.took = took

    @classmethod
    def empty(cls) -> DiscoveryCache:
        return cls()

    @classmethod
    def load(cls, path: Path) -> DiscoveryCache:
        """Load the snapshot stored under ``path``.

        Missing directory or missing ``servergroups.json`` yields an empty
        cache. Resource files that are absent are skipped; ``api_resources``
        then reports the cache as incomplete.

        Raises:
            DiscoveryLoadError: If a file exists but cannot be read or parsed.
        """
        started = time.perf_counter()
        groups_file = path / SERVER_GROUPS_FILE
        if not groups_file.is_file():
            logger.debug("discovery_cache_missing", path=str(path))
            return cls(path=path)

        groups = _read_groups(groups_file)
        resources: dict[str, ApiResourceList] = {}
        for group_version in groups.group_versions():
            resources_file = path / group_version / SERVER_RESOURCES_FILE
            if resources_file.is_file():
                resources[group_version] = _read_resources(resources_file)

        took = time.perf_counter() - started
        logger.debug(
            "loaded_discovery_cache",
            path=str(path),
            groups=len(groups.groups),
            resource_lists=len(resources),
            took=round(took, 4),
        )
        return cls(groups=groups, resources=resources, path=path, took=took)

    @property
    def is_empty(self) -> bool:
        return self._groups is None

    def api_groups(self) -> ApiGroupList | None:
        """The cached group list, core group included."""
        return self._groups

    def api_resources(self) -> list[ApiResourceList] | None:
        """Cached resource lists in group order, then version order.

        Returns None when nothing is cached or any listed group-version has
        no resource file.
        """
        if self._groups is None:
            return None
        lists = []
        for group_version in self._groups.group_versions():
            resource_list = self._resources.get(group_version)
            if resource_list is None:
                logger.debug("discovery_cache_incomplete", missing=group_version)
                return None
            lists.append(resource_list)
        return lists
