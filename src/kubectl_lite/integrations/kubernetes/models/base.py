"""Base models for Kubernetes resource display."""

from __future__ import annotations

import json
from collections.abc import Sequence
from datetime import UTC, datetime
from enum import StrEnum
from typing import Any, ClassVar, Protocol, Self, runtime_checkable

import yaml
from pydantic import BaseModel, ConfigDict, Field, PrivateAttr


class OutputFormat(StrEnum):
    """Supported output formats for CLI commands."""

    TABLE = "table"
    WIDE = "wide"
    JSON = "json"
    YAML = "yaml"
    NAME = "name"

    @property
    def is_tabular(self) -> bool:
        return self in (OutputFormat.TABLE, OutputFormat.WIDE, OutputFormat.NAME)


@runtime_checkable
class Displayable(Protocol):
    """Anything the renderer can print: one object or a list of them."""

    def header(self, output: OutputFormat, show_namespace: bool = False) -> list[str]: ...

    def rows(
        self,
        output: OutputFormat,
        show_namespace: bool = False,
        show_kind: bool = False,
    ) -> list[list[str]]: ...

    def to_dict(self) -> dict[str, Any]: ...

    def to_json(self) -> str: ...

    def to_yaml(self) -> str: ...


def dump_json(data: Any) -> str:
    return json.dumps(data, indent=2, default=str)


def dump_yaml(data: Any) -> str:
    return yaml.safe_dump(data, default_flow_style=False, sort_keys=False)


class K8sEntityBase(BaseModel):
    """Base class for all Kubernetes display models.

    Subclasses declare their table layout through ``_columns`` and
    ``_wide_columns`` (the columns after NAME) and fill them in ``_cells``.
    The API payload the model was built from is kept aside so JSON and YAML
    output show the object as the server returned it.
    """

    model_config = ConfigDict(
        extra="ignore",
        populate_by_name=True,
        str_strip_whitespace=True,
    )

    name: str = Field(description="Resource name")
    namespace: str | None = Field(default=None, description="Resource namespace")
    uid: str | None = Field(default=None, description="Kubernetes UID")
    creation_timestamp: str | None = Field(default=None, description="Creation time")
    labels: dict[str, str] | None = Field(default=None, description="Resource labels")
    annotations: dict[str, str] | None = Field(default=None, description="Resource annotations")

    _entity_name: ClassVar[str] = "entity"
    _kind: ClassVar[str] = ""
    _namespaced: ClassVar[bool] = True
    _columns: ClassVar[tuple[str, ...]] = ("AGE",)
    _wide_columns: ClassVar[tuple[str, ...]] = ()

    _raw: dict[str, Any] = PrivateAttr(default_factory=dict)

    @property
    def age(self) -> str:
        """Human-readable age string."""
        if not self.creation_timestamp:
            return "Unknown"
        try:
            created = datetime.fromisoformat(self.creation_timestamp.replace("Z", "+00:00"))
            delta = datetime.now(UTC) - created
            days = delta.days
            hours, remainder = divmod(delta.seconds, 3600)
            minutes = remainder // 60
            if days > 0:
                return f"{days}d"
            if hours > 0:
                return f"{hours}h"
            return f"{minutes}m"
        except (ValueError, TypeError):
            return "Unknown"

    def kind_name(self) -> str:
        return self._kind

    def api_version(self) -> str:
        return "v1"

    def is_namespaced(self) -> bool:
        return self._namespaced

    def kind_prefix(self) -> str:
        """``kind[.group]`` as printed in front of names, e.g. ``deployment.apps``."""
        group, _, _ = self.api_version().rpartition("/")
        kind = self.kind_name().lower()
        return f"{kind}.{group}" if group else kind

    def attach_raw(self, raw: dict[str, Any]) -> Self:
        """Keep the API payload this model was built from."""
        self._raw = raw
        return self

    def _cells(self, output: OutputFormat) -> list[str]:
        return [self.age]

    def header(self, output: OutputFormat, show_namespace: bool = False) -> list[str]:
        if output is OutputFormat.NAME:
            return []
        columns = ["NAME", *self._columns]
        if output is OutputFormat.WIDE:
            columns.extend(self._wide_columns)
        if show_namespace and self.is_namespaced():
            columns.insert(0, "NAMESPACE")
        return columns

    def rows(
        self,
        output: OutputFormat,
        show_namespace: bool = False,
        show_kind: bool = False,
    ) -> list[list[str]]:
        qualified = f"{self.kind_prefix()}/{self.name}"
        if output is OutputFormat.NAME:
            return [[qualified]]
        row = [qualified if show_kind else self.name, *self._cells(output)]
        if show_namespace and self.is_namespaced():
            row.insert(0, self.namespace or "")
        return [row]

    def to_dict(self) -> dict[str, Any]:
        if not self._raw:
            return self.model_dump(exclude_none=True)
        # list items come back without apiVersion/kind
        return {"apiVersion": self.api_version(), "kind": self.kind_name(), **self._raw}

    def to_json(self) -> str:
        return dump_json(self.to_dict())

    def to_yaml(self) -> str:
        return dump_yaml(self.to_dict())


class ResourceList:
    """A list of display models of one resource type.

    Rendered as a single table; serialized as a kubectl-style ``List``.
    """

    def __init__(self, items: Sequence[K8sEntityBase]) -> None:
        self.items = list(items)

    def __len__(self) -> int:
        return len(self.items)

    def __iter__(self):
        return iter(self.items)

    def header(self, output: OutputFormat, show_namespace: bool = False) -> list[str]:
        if not self.items:
            return []
        return self.items[0].header(output, show_namespace)

    def rows(
        self,
        output: OutputFormat,
        show_namespace: bool = False,
        show_kind: bool = False,
    ) -> list[list[str]]:
        return [row for item in self.items for row in item.rows(output, show_namespace, show_kind)]

    def to_dict(self) -> dict[str, Any]:
        return {
            "apiVersion": "v1",
            "kind": "List",
            "items": [item.to_dict() for item in self.items],
            "metadata": {"resourceVersion": ""},
        }

    def to_json(self) -> str:
        return dump_json(self.to_dict())

    def to_yaml(self) -> str:
        return dump_yaml(self.to_dict())


def _safe_get(obj: Any, *attrs: str, default: Any = None) -> Any:
    """Safely traverse nested attributes on kubernetes SDK objects."""
    current = obj
    for attr in attrs:
        if current is None:
            return default
        current = getattr(current, attr, None)
    return current if current is not None else default


def _dict_get(data: dict[str, Any] | None, *keys: str, default: Any = None) -> Any:
    """Safely traverse nested keys of a decoded JSON object."""
    current: Any = data
    for key in keys:
        if not isinstance(current, dict):
            return default
        current = current.get(key)
    return current if current is not None else default


def _get_timestamp(obj: Any) -> str | None:
    """Extract ISO timestamp string from a datetime or string."""
    if obj is None:
        return None
    if isinstance(obj, str):
        return obj
    if isinstance(obj, datetime):
        return obj.isoformat()
    return str(obj)


def _get_labels(obj: Any) -> dict[str, str] | None:
    """Extract labels dict, returning None if empty."""
    labels = _safe_get(obj, "metadata", "labels")
    return dict(labels) if labels else None


def _get_annotations(obj: Any) -> dict[str, str] | None:
    """Extract annotations dict, returning None if empty."""
    annotations = _safe_get(obj, "metadata", "annotations")
    return dict(annotations) if annotations else None
