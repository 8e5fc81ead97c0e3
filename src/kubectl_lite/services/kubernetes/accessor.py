"""Scoped get/list handles for resolved resources.

Well-known core resources go through typed ``CoreV1Api`` calls and come back
as typed display models. Everything else is fetched over raw REST paths and
wrapped in ``DynamicObjectSummary``.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import TYPE_CHECKING, Any

from kubectl_lite.integrations.kubernetes.exceptions import InvalidResourceSpecError
from kubectl_lite.integrations.kubernetes.models.base import K8sEntityBase, ResourceList
from kubectl_lite.integrations.kubernetes.models.resources import (
    ComponentStatusSummary,
    ConfigMapSummary,
    DynamicObjectSummary,
    NodeSummary,
    PodSummary,
)
from kubectl_lite.services.kubernetes.base import K8sBaseManager
from kubectl_lite.services.kubernetes.resolver import ResolvedResource, WellKnownResource

if TYPE_CHECKING:
    from kubectl_lite.integrations.kubernetes.client import KubernetesClient
    from kubectl_lite.services.kubernetes.namespace_scope import NamespaceScope

CROSS_NAMESPACE_GET_MESSAGE = "a resource cannot be retrieved by name across all namespaces"


@dataclass(frozen=True)
class ListParams:
    """Server-side filters for list requests."""

    label_selector: str | None = None
    field_selector: str | None = None
    limit: int | None = None

    def as_kwargs(self) -> dict[str, Any]:
        """Non-empty filters as CoreV1Api keyword arguments."""
        kwargs: dict[str, Any] = {}
        if self.label_selector:
            kwargs["label_selector"] = self.label_selector
        if self.field_selector:
            kwargs["field_selector"] = self.field_selector
        if self.limit:
            kwargs["limit"] = self.limit
        return kwargs

    def as_query(self) -> dict[str, Any]:
        """Non-empty filters as REST query parameters."""
        return {
            {"label_selector": "labelSelector", "field_selector": "fieldSelector"}.get(k, k): v
            for k, v in self.as_kwargs().items()
        }


@dataclass(frozen=True)
class _TypedCalls:
    """CoreV1Api method names for one well-known resource."""

    model: type[K8sEntityBase]
    read: str
    list_namespaced: str | None
    list_all: str


_TYPED_CALLS: dict[WellKnownResource, _TypedCalls] = {
    WellKnownResource.PODS: _TypedCalls(
        PodSummary, "read_namespaced_pod", "list_namespaced_pod", "list_pod_for_all_namespaces"
    ),
    WellKnownResource.NODES: _TypedCalls(NodeSummary, "read_node", None, "list_node"),
    WellKnownResource.CONFIG_MAPS: _TypedCalls(
        ConfigMapSummary,
        "read_namespaced_config_map",
        "list_namespaced_config_map",
        "list_config_map_for_all_namespaces",
    ),
    WellKnownResource.COMPONENT_STATUSES: _TypedCalls(
        ComponentStatusSummary, "read_component_status", None, "list_component_status"
    ),
}


class ApiHandle(K8sBaseManager, ABC):
    """Get/list access to one resource type bound to a namespace.

    ``namespace`` is None for cluster-scoped resources and for
    cross-namespace lists.
    """

    _entity_name = "api_handle"

    def __init__(
        self,
        client: KubernetesClient,
        resource: ResolvedResource,
        namespace: str | None,
    ) -> None:
        super().__init__(client)
        self.resource = resource
        self.namespace = namespace
        self._log = self._log.bind(resource=resource.qualified_name, namespace=namespace)

    @abstractmethod
    def get(self, name: str) -> K8sEntityBase:
        """Fetch one object by name."""

    @abstractmethod
    def list(self, params: ListParams | None = None) -> ResourceList:
        """List objects, optionally filtered."""

    def _check_get(self, name: str) -> None:
        if self.resource.namespaced and self.namespace is None:
            raise InvalidResourceSpecError(CROSS_NAMESPACE_GET_MESSAGE)


class TypedApiHandle(ApiHandle):
    """Handle over typed CoreV1Api calls for a well-known core resource."""

    _entity_name = "typed_api"

    def __init__(
        self,
        client: KubernetesClient,
        resource: ResolvedResource,
        namespace: str | None,
    ) -> None:
        if resource.well_known is None:
            raise ValueError(f"{resource.qualified_name} is not a well-known resource")
        super().__init__(client, resource, namespace)
        self._calls = _TYPED_CALLS[resource.well_known]

    def _to_model(self, obj: Any) -> K8sEntityBase:
        raw = self._client.api_client.sanitize_for_serialization(obj)
        return self._calls.model.from_k8s_object(obj).attach_raw(raw)

    def get(self, name: str) -> K8sEntityBase:
        self._check_get(name)
        self._log.debug("getting_resource", name=name)
        kwargs: dict[str, Any] = {"name": name}
        if self.resource.namespaced:
            kwargs["namespace"] = self.namespace
        try:
            result = getattr(self._client.core_v1, self._calls.read)(**kwargs)
            return self._to_model(result)
        except Exception as e:
            self._handle_api_error(e, self.resource.kind, name, self.namespace)

    def list(self, params: ListParams | None = None) -> ResourceList:
        params = params or ListParams()
        self._log.debug("listing_resources", **params.as_kwargs())
        kwargs = params.as_kwargs()
        if self.resource.namespaced and self.namespace is not None:
            method = self._calls.list_namespaced
            kwargs["namespace"] = self.namespace
        else:
            method = self._calls.list_all
        try:
            result = getattr(self._client.core_v1, method)(**kwargs)
            items = [self._to_model(obj) for obj in result.items or []]
        except Exception as e:
            self._handle_api_error(e, self.resource.kind, None, self.namespace)
        self._log.debug("listed_resources", count=len(items))
        return ResourceList(items)


class DynamicApiHandle(ApiHandle):
    """Handle over raw REST paths for any discovered resource."""

    _entity_name = "dynamic_api"

    @property
    def base_path(self) -> str:
        """Collection path, e.g. ``/apis/apps/v1/namespaces/ns/deployments``."""
        r = self.resource
        prefix = f"/apis/{r.group}/{r.version}" if r.group else f"/api/{r.version}"
        if r.namespaced and self.namespace is not None:
            prefix += f"/namespaces/{self.namespace}"
        return f"{prefix}/{r.plural}"

    def _to_model(self, data: dict[str, Any]) -> DynamicObjectSummary:
        return DynamicObjectSummary.from_dict(
            data,
            kind=self.resource.kind,
            api_version=self.resource.api_version,
            namespaced=self.resource.namespaced,
        )

    def get(self, name: str) -> K8sEntityBase:
        self._check_get(name)
        self._log.debug("getting_resource", name=name)
        try:
            body = self._client.get_json(f"{self.base_path}/{name}")
            return self._to_model(body)
        except Exception as e:
            self._handle_api_error(e, self.resource.kind, name, self.namespace)

    def list(self, params: ListParams | None = None) -> ResourceList:
        params = params or ListParams()
        self._log.debug("listing_resources", **params.as_kwargs())
        try:
            body = self._client.get_json(self.base_path, params.as_query()) or {}
            items = [self._to_model(item) for item in body.get("items") or []]
        except Exception as e:
            self._handle_api_error(e, self.resource.kind, None, self.namespace)
        self._log.debug("listed_resources", count=len(items))
        return ResourceList(items)


class ScopedApiAccessor:
    """Builds API handles for resolved resources under a namespace scope."""

    def __init__(self, client: KubernetesClient) -> None:
        self._client = client

    def namespace_for(self, resource: ResolvedResource, scope: NamespaceScope) -> str | None:
        """Namespace a handle binds to; None for cluster-scoped or cross-namespace."""
        if not resource.namespaced:
            return None
        return scope.resolve(self._client.default_namespace)

    def build(self, resource: ResolvedResource, scope: NamespaceScope) -> ApiHandle:
        """Build a typed handle for well-known resources, a dynamic one otherwise."""
        namespace = self.namespace_for(resource, scope)
        if resource.well_known is not None:
            return TypedApiHandle(self._client, resource, namespace)
        return DynamicApiHandle(self._client, resource, namespace)
