"""Kubernetes API client wrapper.

Wraps the official kubernetes Python client with kubeconfig context
selection, impersonation headers, raw discovery/REST access, lazy typed API
initialization and consistent error translation.
"""

from __future__ import annotations

import json
from typing import TYPE_CHECKING, Any

import structlog

from kubectl_lite.integrations.kubernetes.exceptions import (
    KubernetesAuthError,
    KubernetesConnectionError,
    KubernetesError,
    KubernetesNotFoundError,
    KubernetesValidationError,
)
from kubectl_lite.integrations.kubernetes.kubeconfig import Kubeconfig
from kubectl_lite.integrations.kubernetes.models.discovery import (
    ApiGroupList,
    ApiResourceList,
)

if TYPE_CHECKING:
    from pathlib import Path

    from kubernetes.client import ApiClient, Configuration, CoreV1Api

    from kubectl_lite.integrations.kubernetes.config import KubectlConfig

logger = structlog.get_logger()

DEFAULT_NAMESPACE = "default"
IN_CLUSTER_CONTEXT = "in-cluster"


class KubernetesClient:
    """Kubernetes API client for one CLI invocation.

    Wraps the official kubernetes Python client with:
    - kubeconfig context, cluster and user selection
    - Impersonate-* headers on every request
    - Lazy CoreV1Api initialization
    - Raw GET access for discovery, dynamic resources and ``get --raw``
    - Consistent error translation to custom exceptions
    - Context manager support

    Example:
        ```python
        from kubectl_lite.integrations.kubernetes import KubernetesClient
        from kubectl_lite.integrations.kubernetes.config import KubectlConfig

        with KubernetesClient(KubectlConfig.from_env()) as client:
            groups = client.list_api_groups()
            print([g.name for g in groups.groups])
        ```
    """

    def __init__(self, config: KubectlConfig, kubeconfig: Kubeconfig | None = None) -> None:
        """Initialize the client and load cluster credentials.

        Args:
            config: Invocation configuration.
            kubeconfig: Pre-loaded kubeconfig; read from ``config.kubeconfig``
                (or the default location) when omitted.

        Raises:
            KubernetesConnectionError: If neither a kubeconfig nor in-cluster
                credentials can be loaded.
        """
        self._config = config
        self._kubeconfig = kubeconfig
        self._current_context: str | None = None
        self._namespace: str | None = None

        self._configuration: Configuration | None = None
        self._api_client: ApiClient | None = None
        self._core_v1: CoreV1Api | None = None

        self._load_config()
        self._apply_impersonation()

        logger.info(
            "kubernetes_client_initialized",
            context=self._current_context,
            server=self.server_url,
            default_namespace=self.default_namespace,
        )

    def _load_config(self) -> None:
        """Load the selected kubeconfig context.

        In-cluster credentials are used only when no kubeconfig file exists and
        no context, cluster or user was requested.
        """
        from kubernetes import client, config
        from kubernetes.config import ConfigException

        self._configuration = client.Configuration()
        if self._kubeconfig is None:
            path = Kubeconfig.path_for(self._config.kubeconfig)
            explicit = self._config.context or self._config.cluster or self._config.user
            if not path.exists() and not explicit:
                self._load_incluster_config(path)
                return
            self._kubeconfig = Kubeconfig.load(path)

        context, data = self._kubeconfig.resolve(
            context=self._config.context,
            cluster=self._config.cluster,
            user=self._config.user,
        )
        try:
            config.load_kube_config_from_dict(
                data,
                context=context,
                client_configuration=self._configuration,
            )
        except ConfigException as e:
            raise KubernetesConnectionError(
                message=f"Invalid configuration for context {context}", original_error=e
            ) from e
        self._current_context = context
        self._namespace = self._kubeconfig.namespace_for(context)
        logger.debug("loaded_kubeconfig_context", context=context)

    def _load_incluster_config(self, missing: Path) -> None:
        """Use the pod's service account when there is no kubeconfig file."""
        from kubernetes import config
        from kubernetes.config import ConfigException

        try:
            config.load_incluster_config(client_configuration=self._configuration)
        except ConfigException as e:
            raise KubernetesConnectionError(
                message=f"Cannot load Kubernetes configuration. No kubeconfig at {missing} "
                "and not running inside a cluster.",
                original_error=e,
            ) from e
        self._current_context = IN_CLUSTER_CONTEXT
        logger.debug("loaded_incluster_config")

    def _apply_impersonation(self) -> None:
        for header, value in self._config.options.impersonation_headers().items():
            self.api_client.set_default_header(header, value)
            logger.debug("impersonation_header_set", header=header)

    # =========================================================================
    # Lazy API Accessors
    # =========================================================================

    @property
    def api_client(self) -> ApiClient:
        """Get the shared ApiClient carrying credentials and default headers."""
        if self._api_client is None:
            from kubernetes.client import ApiClient

            self._api_client = ApiClient(self._configuration)
        return self._api_client

    @property
    def core_v1(self) -> CoreV1Api:
        """Get CoreV1Api instance (pods, nodes, configmaps, componentstatuses)."""
        if self._core_v1 is None:
            from kubernetes.client import CoreV1Api

            self._core_v1 = CoreV1Api(self.api_client)
        return self._core_v1

    # =========================================================================
    # Raw REST Access
    # =========================================================================

    def get_json(self, path: str, query: dict[str, Any] | None = None) -> Any:
        """GET a path and return the decoded JSON body.

        Args:
            path: Absolute API path, e.g. ``/apis/apps/v1``.
            query: Query parameters; None values are dropped.
        """
        query_params = [(k, v) for k, v in (query or {}).items() if v is not None]
        logger.debug("api_get", path=path, query=dict(query_params))
        return self.api_client.call_api(
            path,
            "GET",
            query_params=query_params,
            header_params={"Accept": "application/json"},
            auth_settings=["BearerToken"],
            response_type="object",
            _return_http_data_only=True,
        )

    def get_text(self, path: str) -> str:
        """GET a path and return the body undecoded (for ``get --raw``)."""
        logger.debug("api_get_raw", path=path)
        response = self.api_client.call_api(
            path,
            "GET",
            auth_settings=["BearerToken"],
            _return_http_data_only=True,
            _preload_content=False,
        )
        data = response.data
        return data.decode("utf-8") if isinstance(data, bytes) else str(data)

    # =========================================================================
    # Discovery
    # =========================================================================

    def list_core_api_versions(self) -> list[str]:
        """Versions of the legacy core group served under ``/api``."""
        body = self.get_json("/api") or {}
        return list(body.get("versions") or [])

    def list_api_groups(self) -> ApiGroupList:
        """Named API groups served under ``/apis``."""
        return ApiGroupList.model_validate(self.get_json("/apis") or {})

    def list_core_api_resources(self, version: str) -> ApiResourceList:
        """Resources of one core version, e.g. ``/api/v1``."""
        return ApiResourceList.model_validate(self.get_json(f"/api/{version}"))

    def list_api_group_resources(self, group_version: str) -> ApiResourceList:
        """Resources of one group-version, e.g. ``/apis/apps/v1``."""
        return ApiResourceList.model_validate(self.get_json(f"/apis/{group_version}"))

    # =========================================================================
    # Error Translation
    # =========================================================================

    @staticmethod
    def _status_message(e: Any) -> str | None:
        """Pull ``message`` out of a Status body, if the server sent one."""
        body = getattr(e, "body", None)
        if not body:
            return None
        try:
            return json.loads(body).get("message")
        except (ValueError, TypeError, AttributeError):
            return None

    @staticmethod
    def translate_api_exception(
        e: Exception,
        resource_type: str | None = None,
        resource_name: str | None = None,
        namespace: str | None = None,
    ) -> KubernetesError:
        """Translate a kubernetes ApiException to a custom exception.

        Args:
            e: The original exception.
            resource_type: Type of resource being operated on.
            resource_name: Name of the resource.
            namespace: Namespace of the resource.

        Returns:
            An appropriate KubernetesError subclass.
        """
        from kubernetes.client import ApiException
        from urllib3.exceptions import HTTPError

        if isinstance(e, KubernetesError):
            return e

        if isinstance(e, (HTTPError, ConnectionError)):
            return KubernetesConnectionError(
                message=f"Unable to connect to the server: {e}",
                original_error=e,
            )

        if not isinstance(e, ApiException):
            return KubernetesError(
                message=str(e),
                resource_type=resource_type,
                resource_name=resource_name,
                namespace=namespace,
            )

        status = e.status
        message = KubernetesClient._status_message(e)

        if status in (401, 403):
            return KubernetesAuthError(
                message=message or e.reason or "Authentication/authorization failed",
                status_code=status,
                reason=e.reason,
            )

        if status == 404:
            return KubernetesNotFoundError(
                message=message or "Kubernetes resource not found",
                resource_type=resource_type,
                resource_name=resource_name,
                namespace=namespace,
            )

        if status in (400, 422):
            return KubernetesValidationError(
                message=message or e.reason or "Validation failed",
                status_code=status,
            )

        return KubernetesError(
            message=message or e.reason or f"Kubernetes API error: {status}",
            status_code=status,
            resource_type=resource_type,
            resource_name=resource_name,
            namespace=namespace,
        )

    # =========================================================================
    # Properties
    # =========================================================================

    @property
    def config(self) -> KubectlConfig:
        return self._config

    @property
    def kubeconfig(self) -> Kubeconfig | None:
        """The kubeconfig in use, or None with in-cluster credentials."""
        return self._kubeconfig

    @property
    def current_context(self) -> str:
        """Active context name, or 'in-cluster' when running inside a pod."""
        return self._current_context or "unknown"

    @property
    def server_url(self) -> str:
        """API server URL of the active cluster."""
        return self._configuration.host if self._configuration else ""

    @property
    def default_namespace(self) -> str:
        """Namespace of the active context, or 'default' when it sets none."""
        return self._namespace or DEFAULT_NAMESPACE

    # =========================================================================
    # Lifecycle
    # =========================================================================

    def close(self) -> None:
        """Close the client and release resources."""
        if self._api_client is not None:
            self._api_client.close()
        self._api_client = None
        self._core_v1 = None
        logger.debug("kubernetes_client_closed")

    def __enter__(self) -> KubernetesClient:
        """Context manager entry."""
        return self

    def __exit__(self, *args: Any) -> None:
        """Context manager exit."""
        self.close()
