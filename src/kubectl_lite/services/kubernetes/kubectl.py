"""Per-invocation session tying the client, discovery and resolution together."""

from __future__ import annotations

from collections.abc import Iterator, Sequence
from dataclasses import dataclass
from typing import Any

import structlog

from kubectl_lite.integrations.kubernetes.client import KubernetesClient
from kubectl_lite.integrations.kubernetes.config import KubectlConfig
from kubectl_lite.integrations.kubernetes.models.base import Displayable
from kubectl_lite.integrations.kubernetes.models.discovery import ApiResourceDescriptor
from kubectl_lite.services.kubernetes.accessor import ListParams, ScopedApiAccessor
from kubectl_lite.services.kubernetes.catalog import ResourceCatalog
from kubectl_lite.services.kubernetes.discovery_cache import DiscoveryCache
from kubectl_lite.services.kubernetes.namespace_scope import NamespaceScope
from kubectl_lite.services.kubernetes.resolver import (
    NamedResourceArg,
    ResolvedResource,
    ResourceResolver,
    parse_resource_args,
)

logger = structlog.get_logger()


@dataclass(frozen=True)
class GetResult:
    """One fetched resource argument, ready for rendering."""

    arg: NamedResourceArg
    resource: ResolvedResource
    output: Displayable
    namespace: str | None
    show_kind: bool
    show_namespace: bool


@dataclass(frozen=True)
class ApiResourceFilter:
    """Filters for ``api-resources``."""

    namespaced: bool | None = None
    api_group: str | None = None
    verbs: tuple[str, ...] = ()

    def accepts(self, descriptor: ApiResourceDescriptor) -> bool:
        if descriptor.is_subresource:
            return False
        if self.namespaced is not None and descriptor.namespaced != self.namespaced:
            return False
        if self.api_group is not None and descriptor.group != self.api_group:
            return False
        return all(verb in descriptor.verbs for verb in self.verbs)


class Kubectl:
    """Owns the client and the discovery snapshot for one command.

    The snapshot is loaded once in ``connect`` and every token of the
    command is resolved against it.
    """

    def __init__(self, client: KubernetesClient, cache: DiscoveryCache | None = None) -> None:
        self._client = client
        self.catalog = ResourceCatalog(client, cache)
        self.resolver = ResourceResolver(self.catalog)
        self.accessor = ScopedApiAccessor(client)
        self._log = logger.bind(entity="kubectl", context=client.current_context)

    @classmethod
    def connect(cls, config: KubectlConfig) -> Kubectl:
        """Create a client from ``config`` and load its cluster's discovery cache.

        Raises:
            KubernetesConnectionError: If credentials cannot be loaded.
            DiscoveryLoadError: If the cache exists but is corrupt.
        """
        client = KubernetesClient(config)
        cache_path = config.options.discovery_cache_for(client.server_url)
        try:
            cache = DiscoveryCache.load(cache_path)
        except Exception:
            client.close()
            raise
        return cls(client, cache)

    @property
    def client(self) -> KubernetesClient:
        return self._client

    def get(
        self,
        tokens: Sequence[str],
        scope: NamespaceScope,
        params: ListParams | None = None,
    ) -> Iterator[GetResult]:
        """Parse resource tokens, then fetch them one at a time.

        Parsing happens eagerly so malformed arguments fail before any
        request. Fetching is lazy: each result is yielded before the next
        resource is resolved, so earlier output survives a later failure.

        Raises:
            InvalidResourceSpecError: If the tokens do not parse.
        """
        args = parse_resource_args(tokens)
        return self._fetch(args, scope, params or ListParams())

    def _fetch(
        self,
        args: list[NamedResourceArg],
        scope: NamespaceScope,
        params: ListParams,
    ) -> Iterator[GetResult]:
        show_kind = len(args) > 1
        for arg in args:
            resource = self.resolver.resolve(arg.identity)
            handle = self.accessor.build(resource, scope)
            self._log.debug(
                "fetching_resource",
                resource=resource.qualified_name,
                name=arg.name,
                scope=str(scope),
            )
            output: Any = handle.get(arg.name) if arg.name else handle.list(params)
            yield GetResult(
                arg=arg,
                resource=resource,
                output=output,
                namespace=handle.namespace,
                show_kind=show_kind,
                show_namespace=scope.show_namespace_column and resource.namespaced,
            )

    def api_versions(self) -> list[str]:
        """Every group-version the server offers, core first."""
        return self.catalog.server_api_groups().group_versions()

    def api_resources(
        self, resource_filter: ApiResourceFilter | None = None
    ) -> list[ApiResourceDescriptor]:
        """Preferred resources, excluding subresources, optionally filtered."""
        resource_filter = resource_filter or ApiResourceFilter()
        return [d for d in self.catalog.descriptors() if resource_filter.accepts(d)]

    def raw(self, path: str) -> str:
        """GET an arbitrary API path and return the body as text.

        The leading ``/`` is optional: ``apis`` and ``/apis`` are the same path.
        """
        path = "/" + path.lstrip("/")
        self._log.debug("raw_request", path=path)
        try:
            return self._client.get_text(path)
        except Exception as e:
            raise self._client.translate_api_exception(e) from e

    def close(self) -> None:
        self._client.close()

    def __enter__(self) -> Kubectl:
        return self

    def __exit__(self, *args: Any) -> None:
        self.close()
