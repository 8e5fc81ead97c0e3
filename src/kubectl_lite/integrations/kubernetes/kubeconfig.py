"""Kubeconfig file access.

Reads the kubeconfig YAML as plain data so the ``config`` commands can
inspect it and the client can hand a context/cluster/user-adjusted copy to
``kubernetes.config.load_kube_config_from_dict``.
"""

from __future__ import annotations

import copy
from pathlib import Path
from typing import Any

import structlog
import yaml

from kubectl_lite.integrations.kubernetes.exceptions import KubernetesConnectionError

logger = structlog.get_logger()

DEFAULT_KUBECONFIG = Path("~/.kube/config")
REDACTED = "REDACTED"
DATA_OMITTED = "DATA+OMITTED"

_SECRET_USER_KEYS = ("token", "password")
_DATA_KEYS = ("client-certificate-data", "client-key-data", "certificate-authority-data")
_CLUSTER_FILE_KEYS = ("certificate-authority",)
_USER_FILE_KEYS = ("client-certificate", "client-key", "tokenFile")


def _named(entries: Any) -> list[dict[str, Any]]:
    return [e for e in entries or [] if isinstance(e, dict) and e.get("name")]


class Kubeconfig:
    """A parsed kubeconfig document.

    ``current-context`` is sanitized on construction: when it names a context
    that does not exist, the first context in the file is used instead.
    """

    def __init__(self, data: dict[str, Any], path: Path | None = None) -> None:
        self._data = data
        self.path = path
        self._current_context = self._sanitize_current_context()

    @staticmethod
    def path_for(path: str | Path | None = None) -> Path:
        """The kubeconfig file to read, defaulting to ~/.kube/config."""
        return Path(path).expanduser() if path else DEFAULT_KUBECONFIG.expanduser()

    @classmethod
    def load(cls, path: str | Path | None = None) -> Kubeconfig:
        """Load a kubeconfig file, defaulting to ~/.kube/config.

        Raises:
            KubernetesConnectionError: If the file is missing or not valid YAML.
        """
        kubeconfig_path = cls.path_for(path)
        try:
            data = yaml.safe_load(kubeconfig_path.read_text()) or {}
        except OSError as e:
            raise KubernetesConnectionError(
                message=f"Cannot read kubeconfig {kubeconfig_path}", original_error=e
            ) from e
        except yaml.YAMLError as e:
            raise KubernetesConnectionError(
                message=f"Invalid kubeconfig {kubeconfig_path}", original_error=e
            ) from e
        if not isinstance(data, dict):
            raise KubernetesConnectionError(message=f"Invalid kubeconfig {kubeconfig_path}")
        logger.debug("loaded_kubeconfig", path=str(kubeconfig_path))
        return cls(data, kubeconfig_path)

    def _sanitize_current_context(self) -> str | None:
        current = self._data.get("current-context") or None
        names = self.context_names()
        if current in names:
            return current
        if names:
            logger.debug("current_context_not_found", requested=current, using=names[0])
            return names[0]
        return current

    @property
    def current_context(self) -> str | None:
        return self._current_context

    def context_names(self) -> list[str]:
        return [c["name"] for c in _named(self._data.get("contexts"))]

    def cluster_names(self) -> list[str]:
        return [c["name"] for c in _named(self._data.get("clusters"))]

    def user_names(self) -> list[str]:
        return [u["name"] for u in _named(self._data.get("users"))]

    def context(self, name: str | None) -> dict[str, Any]:
        """Return the ``context`` body of a named context ({} if unknown)."""
        for entry in _named(self._data.get("contexts")):
            if entry["name"] == name:
                return entry.get("context") or {}
        return {}

    def cluster(self, name: str | None) -> dict[str, Any]:
        """Return the ``cluster`` body of a named cluster ({} if unknown)."""
        for entry in _named(self._data.get("clusters")):
            if entry["name"] == name:
                return entry.get("cluster") or {}
        return {}

    def contexts(self) -> list[dict[str, Any]]:
        """Summaries of every context for ``config get-contexts``."""
        return [
            {
                "name": entry["name"],
                "cluster": (entry.get("context") or {}).get("cluster", ""),
                "user": (entry.get("context") or {}).get("user", ""),
                "namespace": (entry.get("context") or {}).get("namespace", ""),
                "current": entry["name"] == self._current_context,
            }
            for entry in _named(self._data.get("contexts"))
        ]

    def namespace_for(self, context: str | None) -> str | None:
        return self.context(context).get("namespace") or None

    def resolve(
        self,
        context: str | None = None,
        cluster: str | None = None,
        user: str | None = None,
    ) -> tuple[str, dict[str, Any]]:
        """Pick a context and apply cluster/user overrides to it.

        Returns:
            The context name and a kubeconfig dict whose current-context is
            that context, with the overrides written into it.

        Raises:
            KubernetesConnectionError: If no usable context exists.
        """
        name = context or self._current_context
        if not name or name not in self.context_names():
            raise KubernetesConnectionError(
                message=f"context was not found for specified context: {name}"
            )

        data = copy.deepcopy(self._data)
        data["current-context"] = name
        if cluster or user:
            for entry in _named(data.get("contexts")):
                if entry["name"] != name:
                    continue
                body = entry.setdefault("context", {})
                if cluster:
                    body["cluster"] = cluster
                if user:
                    body["user"] = user
        if self.path is not None:
            self._absolute_file_paths(data, self.path.parent)
        return name, data

    @staticmethod
    def _absolute_file_paths(data: dict[str, Any], base: Path) -> None:
        """Make relative certificate, key and token file paths relative to ``base``."""
        sections = (("clusters", "cluster", _CLUSTER_FILE_KEYS), ("users", "user", _USER_FILE_KEYS))
        for section, body_key, file_keys in sections:
            for entry in _named(data.get(section)):
                body = entry.get(body_key) or {}
                for key in file_keys:
                    value = body.get(key)
                    if not isinstance(value, str) or not value:
                        continue
                    if not Path(value).expanduser().is_absolute():
                        body[key] = str(base / value)

    def to_dict(self, raw: bool = False, minify: bool = False) -> dict[str, Any]:
        """Return the document for ``config view``.

        Certificate data and credentials are masked unless ``raw`` is set.
        ``minify`` keeps only what the current context references.
        """
        data = copy.deepcopy(self._data)
        if minify:
            data = self._minified(data)
        if not raw:
            for entry in _named(data.get("users")):
                body = entry.get("user") or {}
                for key in _SECRET_USER_KEYS:
                    if key in body:
                        body[key] = REDACTED
                for key in _DATA_KEYS:
                    if key in body:
                        body[key] = DATA_OMITTED
            for entry in _named(data.get("clusters")):
                body = entry.get("cluster") or {}
                for key in _DATA_KEYS:
                    if key in body:
                        body[key] = DATA_OMITTED
        return data

    def _minified(self, data: dict[str, Any]) -> dict[str, Any]:
        current = self._current_context
        body = self.context(current)
        data["current-context"] = current
        data["contexts"] = [c for c in _named(data.get("contexts")) if c["name"] == current]
        data["clusters"] = [
            c for c in _named(data.get("clusters")) if c["name"] == body.get("cluster")
        ]
        data["users"] = [u for u in _named(data.get("users")) if u["name"] == body.get("user")]
        return data
