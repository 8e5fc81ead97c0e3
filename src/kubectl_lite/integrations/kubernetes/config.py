"""Configuration models for the Kubernetes client and discovery cache."""

from __future__ import annotations

import os
from pathlib import Path
from typing import Any
from urllib.parse import urlparse

from pydantic import BaseModel, ConfigDict, field_validator

from kubectl_lite.integrations.kubernetes.exceptions import KubernetesConnectionError

DEFAULT_CACHE_DIR = Path("~/.kube/cache")


class GlobalOptions(BaseModel):
    """Process-wide options shared by every command.

    Attributes:
        cache_dir: Root of the kubectl-style cache directory.
        as_user: Username to impersonate.
        as_group: Group to impersonate.
        as_uid: UID to impersonate.
    """

    model_config = ConfigDict(extra="forbid", frozen=True)

    cache_dir: Path | None = None
    as_user: str | None = None
    as_group: str | None = None
    as_uid: str | None = None

    @field_validator("cache_dir")
    @classmethod
    def expand_cache_dir(cls, v: Path | None) -> Path | None:
        """Expand ~ in the cache directory."""
        return v.expanduser() if v is not None else None

    def cache_root(self) -> Path:
        """Return the cache directory, defaulting to ~/.kube/cache."""
        return self.cache_dir or DEFAULT_CACHE_DIR.expanduser()

    def discovery_cache_for(self, server_url: str) -> Path:
        """Return the discovery cache directory for a cluster.

        The cluster is keyed by the hostname of its API server URL.

        Raises:
            KubernetesConnectionError: If the server URL has no host.
        """
        host = urlparse(server_url).hostname
        if not host:
            raise KubernetesConnectionError(
                message=f"Cluster URL '{server_url}' has no host; cannot locate discovery cache"
            )
        return self.cache_root() / "discovery" / host

    def impersonation_headers(self) -> dict[str, str]:
        """Build Impersonate-* request headers for the configured identities."""
        headers: dict[str, str] = {}
        if self.as_user:
            headers["Impersonate-User"] = self.as_user
        if self.as_group:
            headers["Impersonate-Group"] = self.as_group
        if self.as_uid:
            headers["Impersonate-Uid"] = self.as_uid
        return headers


class KubectlConfig(BaseModel):
    """Immutable configuration for one CLI invocation."""

    model_config = ConfigDict(extra="forbid", frozen=True)

    context: str | None = None
    cluster: str | None = None
    user: str | None = None
    kubeconfig: str | None = None
    debug: bool = False
    options: GlobalOptions = GlobalOptions()

    @field_validator("kubeconfig")
    @classmethod
    def expand_kubeconfig(cls, v: str | None) -> str | None:
        """Expand ~ in kubeconfig path."""
        return str(Path(v).expanduser()) if v else None

    @classmethod
    def from_env(cls, **overrides: Any) -> KubectlConfig:
        """Create configuration with environment variable defaults.

        Explicit (non-None) overrides win over the environment.

        Supported environment variables:
            KUBECTL_LITE_CONTEXT: kubeconfig context to use
            KUBECTL_LITE_CLUSTER: kubeconfig cluster to use
            KUBECTL_LITE_USER: kubeconfig user to use
            KUBECTL_LITE_CACHE_DIR: cache directory root
            KUBECONFIG: kubeconfig file (first entry of a path list)
        """
        config_dict: dict[str, Any] = {}
        option_dict: dict[str, Any] = {}

        if context := os.environ.get("KUBECTL_LITE_CONTEXT"):
            config_dict["context"] = context
        if cluster := os.environ.get("KUBECTL_LITE_CLUSTER"):
            config_dict["cluster"] = cluster
        if user := os.environ.get("KUBECTL_LITE_USER"):
            config_dict["user"] = user
        if kubeconfig := os.environ.get("KUBECONFIG"):
            config_dict["kubeconfig"] = kubeconfig.split(os.pathsep)[0]
        if cache_dir := os.environ.get("KUBECTL_LITE_CACHE_DIR"):
            option_dict["cache_dir"] = Path(cache_dir)

        option_overrides = overrides.pop("options", None)
        if option_overrides is not None:
            option_dict.update(
                {k: v for k, v in option_overrides.items() if v is not None}
            )
        config_dict.update({k: v for k, v in overrides.items() if v is not None})
        config_dict["options"] = GlobalOptions.model_validate(option_dict)

        return cls.model_validate(config_dict)
