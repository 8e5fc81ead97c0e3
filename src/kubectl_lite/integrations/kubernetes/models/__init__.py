"""Display and discovery models for Kubernetes resources."""

from kubectl_lite.integrations.kubernetes.models.base import (
    Displayable,
    K8sEntityBase,
    OutputFormat,
    ResourceList,
)
from kubectl_lite.integrations.kubernetes.models.discovery import (
    CORE_GROUP,
    ApiGroup,
    ApiGroupList,
    ApiResourceDescriptor,
    ApiResourceList,
    GroupVersionForDiscovery,
    split_group_version,
)
from kubectl_lite.integrations.kubernetes.models.resources import (
    ComponentStatusSummary,
    ConfigMapSummary,
    ContainerStatus,
    DynamicObjectSummary,
    NodeSummary,
    PodSummary,
)

__all__ = [
    "CORE_GROUP",
    "ApiGroup",
    "ApiGroupList",
    "ApiResourceDescriptor",
    "ApiResourceList",
    "ComponentStatusSummary",
    "ConfigMapSummary",
    "ContainerStatus",
    "Displayable",
    "DynamicObjectSummary",
    "GroupVersionForDiscovery",
    "K8sEntityBase",
    "NodeSummary",
    "OutputFormat",
    "PodSummary",
    "ResourceList",
    "split_group_version",
]
