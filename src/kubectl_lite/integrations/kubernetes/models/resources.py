"""Display models for the resources ``get`` knows how to print.

Pods, nodes, config maps and component statuses are built from typed
``kubernetes`` SDK objects. Everything else is a ``DynamicObjectSummary``
built from the decoded JSON the API server returned.
"""

from __future__ import annotations

from typing import Any, ClassVar

from pydantic import Field

from kubectl_lite.integrations.kubernetes.models.base import (
    K8sEntityBase,
    OutputFormat,
    _dict_get,
    _get_annotations,
    _get_labels,
    _get_timestamp,
    _safe_get,
)

POD_SCHEDULED_CONDITION = "PodScheduled"
POD_INITIALIZING = "PodInitializing"
POD_REASON_SCHEDULING_GATED = "SchedulingGated"
COMPONENT_CONDITION_HEALTHY = "Healthy"

NODE_ROLE_LABEL_PREFIX = "node-role.kubernetes.io/"
NODE_ROLE_LABEL = "kubernetes.io/role"
NONE = "<none>"


def _metadata_fields(obj: Any) -> dict[str, Any]:
    return {
        "name": _safe_get(obj, "metadata", "name", default=""),
        "namespace": _safe_get(obj, "metadata", "namespace"),
        "uid": _safe_get(obj, "metadata", "uid"),
        "creation_timestamp": _get_timestamp(_safe_get(obj, "metadata", "creation_timestamp")),
        "labels": _get_labels(obj),
        "annotations": _get_annotations(obj),
    }


class ContainerStatus(K8sEntityBase):
    """Container status within a pod."""

    _entity_name: ClassVar[str] = "container"

    image: str | None = Field(default=None, description="Container image")
    ready: bool = Field(default=False, description="Whether container is ready")
    restart_count: int = Field(default=0, description="Number of restarts")
    state: str = Field(default="unknown", description="Current state")
    reason: str | None = Field(default=None, description="Waiting or terminated reason")
    exit_code: int | None = Field(default=None, description="Exit code when terminated")
    signal: int | None = Field(default=None, description="Signal when terminated")

    @classmethod
    def from_k8s_object(cls, obj: Any) -> ContainerStatus:
        """Create from a kubernetes V1ContainerStatus object."""
        state = "unknown"
        reason = exit_code = signal = None
        if obj_state := getattr(obj, "state", None):
            if getattr(obj_state, "running", None):
                state = "running"
            elif getattr(obj_state, "waiting", None):
                state = "waiting"
                reason = _safe_get(obj_state, "waiting", "reason")
            elif getattr(obj_state, "terminated", None):
                state = "terminated"
                reason = _safe_get(obj_state, "terminated", "reason")
                exit_code = _safe_get(obj_state, "terminated", "exit_code")
                signal = _safe_get(obj_state, "terminated", "signal")

        return cls(
            name=getattr(obj, "name", ""),
            image=getattr(obj, "image", None),
            ready=getattr(obj, "ready", False) or False,
            restart_count=getattr(obj, "restart_count", 0) or 0,
            state=state,
            reason=reason,
            exit_code=exit_code,
            signal=signal,
        )

    def terminated_reason(self) -> str:
        """Reason for a terminated container, falling back to signal or exit code."""
        if self.reason:
            return self.reason
        if self.signal:
            return f"Signal:{self.signal}"
        return f"ExitCode:{self.exit_code or 0}"


class PodSummary(K8sEntityBase):
    """Pod display model."""

    _entity_name: ClassVar[str] = "pod"
    _kind: ClassVar[str] = "Pod"
    _columns: ClassVar[tuple[str, ...]] = ("READY", "STATUS", "RESTARTS", "AGE")
    _wide_columns: ClassVar[tuple[str, ...]] = ("IP", "NODE")

    phase: str = Field(default="Unknown", description="Pod phase")
    status: str = Field(default="Unknown", description="Derived display status")
    node_name: str | None = Field(default=None, description="Node the pod is running on")
    pod_ip: str | None = Field(default=None, description="Pod IP address")
    restarts: int = Field(default=0, description="Total container restarts")
    ready_count: int = Field(default=0, description="Number of ready containers")
    total_count: int = Field(default=0, description="Total number of containers")
    containers: list[ContainerStatus] = Field(
        default_factory=list, description="Container statuses"
    )

    @classmethod
    def from_k8s_object(cls, obj: Any) -> PodSummary:
        """Create from a kubernetes V1Pod object."""
        container_statuses = _safe_get(obj, "status", "container_statuses") or []
        containers = [ContainerStatus.from_k8s_object(cs) for cs in container_statuses]
        restarts = sum(c.restart_count for c in containers)
        ready_count = sum(1 for c in containers if c.ready)

        spec_containers = _safe_get(obj, "spec", "containers") or []

        return cls(
            **_metadata_fields(obj),
            phase=_safe_get(obj, "status", "phase", default="Unknown"),
            status=pod_status(obj),
            node_name=_safe_get(obj, "spec", "node_name"),
            pod_ip=_safe_get(obj, "status", "pod_ip"),
            restarts=restarts,
            ready_count=ready_count,
            total_count=len(spec_containers),
            containers=containers,
        )

    def _cells(self, output: OutputFormat) -> list[str]:
        cells = [
            f"{self.ready_count}/{self.total_count}",
            self.status,
            str(self.restarts),
            self.age,
        ]
        if output is OutputFormat.WIDE:
            cells.extend([self.pod_ip or NONE, self.node_name or NONE])
        return cells


def _is_scheduling_gated(obj: Any) -> bool:
    for condition in _safe_get(obj, "status", "conditions") or []:
        if (
            getattr(condition, "type", None) == POD_SCHEDULED_CONDITION
            and getattr(condition, "reason", None) == POD_REASON_SCHEDULING_GATED
        ):
            return True
    return False


def _is_pod_ready(obj: Any) -> bool:
    for condition in _safe_get(obj, "status", "conditions") or []:
        if getattr(condition, "type", None) == "Ready":
            return getattr(condition, "status", None) == "True"
    return False


def _init_container_status(obj: Any) -> str | None:
    """Status while init containers are still running, else None."""
    init_statuses = _safe_get(obj, "status", "init_container_statuses") or []
    total = len(_safe_get(obj, "spec", "init_containers") or [])
    for index, raw in enumerate(init_statuses):
        container = ContainerStatus.from_k8s_object(raw)
        if container.state == "terminated" and container.exit_code == 0:
            continue
        if container.state == "terminated":
            return f"Init:{container.terminated_reason()}"
        if (
            container.state == "waiting"
            and container.reason
            and container.reason != POD_INITIALIZING
        ):
            return f"Init:{container.reason}"
        return f"Init:{index}/{total}"
    return None


def pod_status(obj: Any) -> str:
    """Derive the STATUS column the way kubectl does for a V1Pod."""
    reason = _safe_get(obj, "status", "reason") or _safe_get(
        obj, "status", "phase", default="Unknown"
    )
    if _is_scheduling_gated(obj):
        reason = POD_REASON_SCHEDULING_GATED

    init_status = _init_container_status(obj)
    if init_status is not None:
        reason = init_status
    else:
        has_running = False
        statuses = _safe_get(obj, "status", "container_statuses") or []
        for raw in reversed(statuses):
            container = ContainerStatus.from_k8s_object(raw)
            if container.state == "waiting" and container.reason:
                reason = container.reason
            elif container.state == "terminated":
                reason = container.terminated_reason()
            elif container.state == "running" and container.ready:
                has_running = True
        if reason == "Completed" and has_running:
            reason = "Running" if _is_pod_ready(obj) else "NotReady"

    if _safe_get(obj, "metadata", "deletion_timestamp") is not None:
        reason = "Unknown" if _safe_get(obj, "status", "reason") == "NodeLost" else "Terminating"
    return str(reason)


class NodeSummary(K8sEntityBase):
    """Node display model."""

    _entity_name: ClassVar[str] = "node"
    _kind: ClassVar[str] = "Node"
    _namespaced: ClassVar[bool] = False
    _columns: ClassVar[tuple[str, ...]] = ("STATUS", "ROLES", "AGE", "VERSION")
    _wide_columns: ClassVar[tuple[str, ...]] = (
        "INTERNAL-IP",
        "EXTERNAL-IP",
        "OS-IMAGE",
        "KERNEL-VERSION",
        "CONTAINER-RUNTIME",
    )

    status: str = Field(default="Unknown", description="Ready condition summary")
    roles: list[str] = Field(default_factory=list, description="Node roles from labels")
    kubelet_version: str | None = Field(default=None, description="Kubelet version")
    internal_ip: str | None = Field(default=None, description="First InternalIP address")
    external_ip: str | None = Field(default=None, description="First ExternalIP address")
    os_image: str | None = Field(default=None, description="OS image")
    kernel_version: str | None = Field(default=None, description="Kernel version")
    container_runtime: str | None = Field(default=None, description="Container runtime")

    @classmethod
    def from_k8s_object(cls, obj: Any) -> NodeSummary:
        """Create from a kubernetes V1Node object."""
        addresses: dict[str, str] = {}
        for address in _safe_get(obj, "status", "addresses") or []:
            addresses.setdefault(getattr(address, "type", ""), getattr(address, "address", ""))

        return cls(
            **_metadata_fields(obj),
            status=node_status(obj),
            roles=node_roles(_get_labels(obj) or {}),
            kubelet_version=_safe_get(obj, "status", "node_info", "kubelet_version"),
            internal_ip=addresses.get("InternalIP"),
            external_ip=addresses.get("ExternalIP"),
            os_image=_safe_get(obj, "status", "node_info", "os_image"),
            kernel_version=_safe_get(obj, "status", "node_info", "kernel_version"),
            container_runtime=_safe_get(
                obj, "status", "node_info", "container_runtime_version"
            ),
        )

    def _cells(self, output: OutputFormat) -> list[str]:
        cells = [
            self.status,
            ",".join(self.roles) or NONE,
            self.age,
            self.kubelet_version or "",
        ]
        if output is OutputFormat.WIDE:
            cells.extend(
                [
                    self.internal_ip or NONE,
                    self.external_ip or NONE,
                    self.os_image or NONE,
                    self.kernel_version or NONE,
                    self.container_runtime or NONE,
                ]
            )
        return cells


def node_status(obj: Any) -> str:
    status = "Unknown"
    for condition in _safe_get(obj, "status", "conditions") or []:
        if getattr(condition, "type", None) == "Ready":
            status = "Ready" if getattr(condition, "status", None) == "True" else "NotReady"
            break
    if _safe_get(obj, "spec", "unschedulable"):
        status += ",SchedulingDisabled"
    return status


def node_roles(labels: dict[str, str]) -> list[str]:
    roles = set()
    for key, value in labels.items():
        if key.startswith(NODE_ROLE_LABEL_PREFIX):
            if role := key.removeprefix(NODE_ROLE_LABEL_PREFIX):
                roles.add(role)
        elif key == NODE_ROLE_LABEL and value:
            roles.add(value)
    return sorted(roles)


class ConfigMapSummary(K8sEntityBase):
    """ConfigMap display model."""

    _entity_name: ClassVar[str] = "configmap"
    _kind: ClassVar[str] = "ConfigMap"
    _columns: ClassVar[tuple[str, ...]] = ("DATA", "AGE")

    data_count: int = Field(default=0, description="Number of data and binaryData keys")

    @classmethod
    def from_k8s_object(cls, obj: Any) -> ConfigMapSummary:
        """Create from a kubernetes V1ConfigMap object."""
        data = getattr(obj, "data", None) or {}
        binary_data = getattr(obj, "binary_data", None) or {}
        return cls(**_metadata_fields(obj), data_count=len(data) + len(binary_data))

    def _cells(self, output: OutputFormat) -> list[str]:
        return [str(self.data_count), self.age]


class ComponentStatusSummary(K8sEntityBase):
    """ComponentStatus display model."""

    _entity_name: ClassVar[str] = "componentstatus"
    _kind: ClassVar[str] = "ComponentStatus"
    _namespaced: ClassVar[bool] = False
    _columns: ClassVar[tuple[str, ...]] = ("STATUS", "MESSAGE", "ERROR")

    status: str = Field(default="Unknown", description="Healthy condition summary")
    message: str = Field(default="", description="Healthy condition message")
    error: str = Field(default="", description="Healthy condition error")

    @classmethod
    def from_k8s_object(cls, obj: Any) -> ComponentStatusSummary:
        """Create from a kubernetes V1ComponentStatus object."""
        status, message, error = "Unknown", "", ""
        for condition in getattr(obj, "conditions", None) or []:
            if getattr(condition, "type", None) != COMPONENT_CONDITION_HEALTHY:
                continue
            status = "Healthy" if getattr(condition, "status", None) == "True" else "Unhealthy"
            message = getattr(condition, "message", None) or ""
            error = getattr(condition, "error", None) or ""
            break
        return cls(**_metadata_fields(obj), status=status, message=message, error=error)

    def _cells(self, output: OutputFormat) -> list[str]:
        return [self.status, self.message, self.error]


class DynamicObjectSummary(K8sEntityBase):
    """Any resource type discovered at runtime, kept as its decoded JSON."""

    _entity_name: ClassVar[str] = "dynamic"

    kind: str = Field(description="Resource kind")
    object_api_version: str = Field(description="Resource apiVersion")
    namespaced: bool = Field(default=True, description="Whether the resource is namespaced")

    @classmethod
    def from_dict(
        cls,
        data: dict[str, Any],
        kind: str,
        api_version: str,
        namespaced: bool,
    ) -> DynamicObjectSummary:
        """Create from an object decoded from the API server's JSON."""
        labels = _dict_get(data, "metadata", "labels")
        annotations = _dict_get(data, "metadata", "annotations")
        model = cls(
            name=_dict_get(data, "metadata", "name", default=""),
            namespace=_dict_get(data, "metadata", "namespace"),
            uid=_dict_get(data, "metadata", "uid"),
            creation_timestamp=_dict_get(data, "metadata", "creationTimestamp"),
            labels=dict(labels) if labels else None,
            annotations=dict(annotations) if annotations else None,
            kind=data.get("kind") or kind,
            object_api_version=data.get("apiVersion") or api_version,
            namespaced=namespaced,
        )
        return model.attach_raw(data)

    def kind_name(self) -> str:
        return self.kind

    def api_version(self) -> str:
        return self.object_api_version

    def is_namespaced(self) -> bool:
        return self.namespaced
