"""Kubernetes integration custom exceptions."""

from __future__ import annotations

from pathlib import Path

INVALID_RESOURCE_SPEC_MESSAGE = (
    "there is no need to specify a resource type as a separate argument when passing "
    "arguments in resource/name form (e.g. 'kubectl-lite get resource/<resource_name>' "
    "instead of 'kubectl-lite get resource resource/<resource_name>')"
)


class KubernetesError(Exception):
    """Base exception for Kubernetes operations.

    Attributes:
        message: Human-readable error message.
        status_code: HTTP status code from Kubernetes API (if applicable).
        resource_type: Type of resource involved (e.g., "Pod", "deployments").
        resource_name: Name of the resource involved.
        namespace: Namespace of the resource (if applicable).
    """

    def __init__(
        self,
        message: str,
        status_code: int | None = None,
        resource_type: str | None = None,
        resource_name: str | None = None,
        namespace: str | None = None,
    ) -> None:
        super().__init__(message)
        self.message = message
        self.status_code = status_code
        self.resource_type = resource_type
        self.resource_name = resource_name
        self.namespace = namespace

    def __str__(self) -> str:
        parts = [self.message]
        if self.status_code:
            parts.append(f"(status: {self.status_code})")
        if self.resource_type and self.resource_name:
            loc = f"[{self.resource_type}/{self.resource_name}"
            if self.namespace:
                loc += f" in {self.namespace}"
            loc += "]"
            parts.append(loc)
        return " ".join(parts)


class KubernetesConnectionError(KubernetesError):
    """Raised when the cluster cannot be reached or the kubeconfig is unusable."""

    def __init__(
        self,
        message: str = "Failed to connect to Kubernetes cluster",
        original_error: Exception | None = None,
    ) -> None:
        super().__init__(message=message)
        self.original_error = original_error


class KubernetesAuthError(KubernetesError):
    """Raised on 401/403 responses (bad credentials or RBAC denial)."""

    def __init__(
        self,
        message: str = "Kubernetes authentication/authorization failed",
        status_code: int | None = 401,
        reason: str | None = None,
    ) -> None:
        super().__init__(message=message, status_code=status_code)
        self.reason = reason


class KubernetesNotFoundError(KubernetesError):
    """Raised when a requested object does not exist (404)."""

    def __init__(
        self,
        message: str = "Kubernetes resource not found",
        resource_type: str | None = None,
        resource_name: str | None = None,
        namespace: str | None = None,
    ) -> None:
        if resource_type and resource_name:
            message = f"{resource_type} '{resource_name}' not found"
            if namespace:
                message += f" in namespace '{namespace}'"
        super().__init__(
            message=message,
            status_code=404,
            resource_type=resource_type,
            resource_name=resource_name,
            namespace=namespace,
        )


class KubernetesValidationError(KubernetesError):
    """Raised when the API server rejects a request as invalid (400/422).

    For read-only commands this is usually a malformed label or field selector.
    """

    def __init__(
        self,
        message: str = "Invalid request",
        status_code: int | None = 422,
    ) -> None:
        super().__init__(message=message, status_code=status_code)


class InvalidResourceSpecError(KubernetesError):
    """Raised when resource arguments do not follow the token grammar.

    Detected locally, before any discovery or API request is made.
    """

    def __init__(self, message: str = INVALID_RESOURCE_SPEC_MESSAGE) -> None:
        super().__init__(message=message)


class ResourceTypeNotFoundError(KubernetesError):
    """Raised when a resource token matches nothing in API discovery."""

    def __init__(self, resource_type: str) -> None:
        super().__init__(
            message=f'the server doesn\'t have a resource type "{resource_type}"',
            resource_type=resource_type,
        )


class AmbiguousResourceError(KubernetesError):
    """Raised when a resource token matches resources in several API groups.

    Attributes:
        candidates: Fully qualified ``plural.group`` names that matched.
    """

    def __init__(self, resource_type: str, candidates: list[str]) -> None:
        super().__init__(
            message=(
                f'resource type "{resource_type}" is ambiguous, it matches: '
                f"{', '.join(candidates)}"
            ),
            resource_type=resource_type,
        )
        self.candidates = candidates


class DiscoveryLoadError(KubernetesError):
    """Raised when a discovery cache file exists but cannot be read or parsed."""

    def __init__(self, path: Path, original_error: Exception | None = None) -> None:
        super().__init__(message=f"Failed to load discovery cache file {path}")
        self.path = path
        self.original_error = original_error
