"""Merged view of every API resource the server offers.

Answers from the discovery cache when it is complete and falls back to live
discovery otherwise. Live results are memoized for the life of the catalog,
so one command never sees two different snapshots.
"""

from __future__ import annotations

from collections.abc import Sequence
from concurrent.futures import ThreadPoolExecutor
from typing import TYPE_CHECKING

from kubectl_lite.integrations.kubernetes.models.discovery import (
    CORE_GROUP,
    ApiGroup,
    ApiGroupList,
    ApiResourceDescriptor,
    ApiResourceList,
    GroupVersionForDiscovery,
)
from kubectl_lite.services.kubernetes.base import K8sBaseManager
from kubectl_lite.services.kubernetes.discovery_cache import DiscoveryCache

if TYPE_CHECKING:
    from kubectl_lite.integrations.kubernetes.client import KubernetesClient

MAX_DISCOVERY_WORKERS = 8


class ResourceCatalog(K8sBaseManager):
    """API groups and resources of one cluster, cached or live."""

    _entity_name = "discovery"

    def __init__(
        self,
        client: KubernetesClient,
        cache: DiscoveryCache | None = None,
        max_workers: int = MAX_DISCOVERY_WORKERS,
    ) -> None:
        super().__init__(client)
        self._cache = cache or DiscoveryCache.empty()
        self._max_workers = max_workers
        self._live_groups: ApiGroupList | None = None
        self._live_resources: list[ApiResourceList] | None = None

    @property
    def cache(self) -> DiscoveryCache:
        return self._cache

    # =========================================================================
    # Live Discovery
    # =========================================================================

    def _fetch_concurrently(self, fetch, keys: Sequence[str]) -> list[ApiResourceList]:
        if not keys:
            return []
        with ThreadPoolExecutor(max_workers=min(self._max_workers, len(keys))) as pool:
            # map yields in submission order whatever order the calls finish in
            return list(pool.map(fetch, keys))

    def fetch_all(self) -> list[ApiResourceList]:
        """Fetch every core version and each group's preferred version live.

        Returns:
            Core lists first, then group lists in server-reported order.
        """
        self._log.debug("fetching_api_resources")
        try:
            core_versions = self._client.list_core_api_versions()
            core_lists = self._fetch_concurrently(
                self._client.list_core_api_resources, core_versions
            )

            group_versions = []
            for group in self._client.list_api_groups().groups:
                if (preferred := group.preferred_or_first()) is not None:
                    group_versions.append(preferred.group_version)
            group_lists = self._fetch_concurrently(
                self._client.list_api_group_resources, group_versions
            )
        except Exception as e:
            self._handle_api_error(e, "APIResourceList")

        lists = core_lists + group_lists
        self._log.debug("fetched_api_resources", count=len(lists))
        return lists

    def _fetch_groups(self) -> ApiGroupList:
        self._log.debug("fetching_api_groups")
        try:
            core_versions = self._client.list_core_api_versions()
            server_groups = self._client.list_api_groups()
        except Exception as e:
            self._handle_api_error(e, "APIGroupList")

        groups = list(server_groups.groups)
        if core_versions:
            versions = [
                GroupVersionForDiscovery(group_version=v, version=v) for v in core_versions
            ]
            core = ApiGroup(name=CORE_GROUP, versions=versions, preferred_version=versions[0])
            groups.insert(0, core)
        self._log.debug("fetched_api_groups", count=len(groups))
        return ApiGroupList(groups=groups)

    # =========================================================================
    # Queries
    # =========================================================================

    @staticmethod
    def preferred_only(
        all_lists: Sequence[ApiResourceList], groups: ApiGroupList
    ) -> list[ApiResourceList]:
        """Keep the lists whose group-version is its group's preferred version."""
        preferred = groups.preferred_group_versions()
        return [rl for rl in all_lists if rl.group_version in preferred]

    def server_api_groups(self) -> ApiGroupList:
        """All API groups, with the core group first."""
        if (cached := self._cache.api_groups()) is not None:
            return cached
        if self._live_groups is None:
            self._live_groups = self._fetch_groups()
        return self._live_groups

    def server_api_resources(self) -> list[ApiResourceList]:
        """All resource lists, from the cache when complete, else live."""
        if (cached := self._cache.api_resources()) is not None:
            self._log.debug("using_cached_api_resources", count=len(cached))
            return cached
        if self._live_resources is None:
            self._live_resources = self.fetch_all()
        return self._live_resources

    def server_preferred_resources(self) -> list[ApiResourceList]:
        """Resource lists restricted to each group's preferred version."""
        return self.preferred_only(self.server_api_resources(), self.server_api_groups())

    def descriptors(self) -> list[ApiResourceDescriptor]:
        """Every descriptor of the preferred lists, in catalog order."""
        return [r for rl in self.server_preferred_resources() for r in rl.resources]

    def lookup_descriptors(self) -> list[ApiResourceDescriptor]:
        """Every descriptor of every served version, preferred versions first."""
        all_lists = self.server_api_resources()
        preferred = self.preferred_only(all_lists, self.server_api_groups())
        seen = {rl.group_version for rl in preferred}
        others = [rl for rl in all_lists if rl.group_version not in seen]
        return [r for rl in [*preferred, *others] for r in rl.resources]
