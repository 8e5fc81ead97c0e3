"""Discovery, resolution and access services built on the Kubernetes client."""

from kubectl_lite.services.kubernetes.accessor import (
    ApiHandle,
    DynamicApiHandle,
    ListParams,
    ScopedApiAccessor,
    TypedApiHandle,
)
from kubectl_lite.services.kubernetes.catalog import ResourceCatalog
from kubectl_lite.services.kubernetes.discovery_cache import DiscoveryCache
from kubectl_lite.services.kubernetes.kubectl import (
    ApiResourceFilter,
    GetResult,
    Kubectl,
)
from kubectl_lite.services.kubernetes.namespace_scope import NamespaceScope, ScopeKind
from kubectl_lite.services.kubernetes.resolver import (
    Dynamic,
    NamedResourceArg,
    ResolvedResource,
    ResourceIdentity,
    ResourceResolver,
    WellKnown,
    WellKnownResource,
    parse_resource_args,
    resource_identity,
)

__all__ = [
    "ApiHandle",
    "ApiResourceFilter",
    "DiscoveryCache",
    "Dynamic",
    "DynamicApiHandle",
    "GetResult",
    "Kubectl",
    "ListParams",
    "NamedResourceArg",
    "NamespaceScope",
    "ResolvedResource",
    "ResourceCatalog",
    "ResourceIdentity",
    "ResourceResolver",
    "ScopeKind",
    "ScopedApiAccessor",
    "TypedApiHandle",
    "WellKnown",
    "WellKnownResource",
    "parse_resource_args",
    "resource_identity",
]
