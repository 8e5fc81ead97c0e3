"""API discovery models.

These mirror the ``APIGroupList`` / ``APIResourceList`` JSON documents served
by ``/api``, ``/apis`` and ``/apis/<group>/<version>``, which is also the
format kubectl persists under its discovery cache directory.
"""

from __future__ import annotations

from typing import Any

from pydantic import BaseModel, ConfigDict, Field, field_validator, model_validator

CORE_GROUP = ""


def split_group_version(group_version: str) -> tuple[str, str]:
    """Split ``"apps/v1"`` into ``("apps", "v1")`` and ``"v1"`` into ``("", "v1")``."""
    group, sep, version = group_version.rpartition("/")
    if not sep:
        return CORE_GROUP, group_version
    return group, version


class _DiscoveryModel(BaseModel):
    model_config = ConfigDict(extra="ignore", populate_by_name=True)


class GroupVersionForDiscovery(_DiscoveryModel):
    """One version of an API group."""

    group_version: str = Field(alias="groupVersion")
    version: str


class ApiGroup(_DiscoveryModel):
    """An API group and the versions the server offers for it."""

    name: str = CORE_GROUP
    versions: list[GroupVersionForDiscovery] = Field(default_factory=list)
    preferred_version: GroupVersionForDiscovery | None = Field(
        default=None, alias="preferredVersion"
    )

    @field_validator("versions", mode="before")
    @classmethod
    def _none_to_empty(cls, v: Any) -> Any:
        return v or []

    def preferred_or_first(self) -> GroupVersionForDiscovery | None:
        """Return the declared preferred version, falling back to the first listed."""
        if self.preferred_version is not None:
            return self.preferred_version
        return self.versions[0] if self.versions else None

    @property
    def is_core(self) -> bool:
        return self.name == CORE_GROUP


class ApiGroupList(_DiscoveryModel):
    """The server's list of API groups."""

    kind: str = "APIGroupList"
    api_version: str = Field(default="v1", alias="apiVersion")
    groups: list[ApiGroup] = Field(default_factory=list)

    @field_validator("groups", mode="before")
    @classmethod
    def _none_to_empty(cls, v: Any) -> Any:
        return v or []

    def preferred_group_versions(self) -> set[str]:
        """Group-versions that are the preferred (or first) version of their group."""
        preferred = set()
        for group in self.groups:
            if (gv := group.preferred_or_first()) is not None:
                preferred.add(gv.group_version)
        return preferred

    def group_versions(self) -> list[str]:
        """Every group-version in server order."""
        return [v.group_version for group in self.groups for v in group.versions]


class ApiResourceDescriptor(_DiscoveryModel):
    """Discovery metadata for one resource type.

    ``group`` and ``version`` are rarely set on the wire; they are filled in
    from the enclosing ``ApiResourceList`` on validation.
    """

    name: str
    singular_name: str = Field(default="", alias="singularName")
    kind: str
    group: str = CORE_GROUP
    version: str = ""
    namespaced: bool = False
    verbs: list[str] = Field(default_factory=list)
    short_names: list[str] = Field(default_factory=list, alias="shortNames")
    categories: list[str] = Field(default_factory=list)

    @field_validator("verbs", "short_names", "categories", mode="before")
    @classmethod
    def _none_to_empty(cls, v: Any) -> Any:
        return v or []

    @field_validator("group", "singular_name", "version", mode="before")
    @classmethod
    def _none_to_blank(cls, v: Any) -> Any:
        return v or ""

    @property
    def api_version(self) -> str:
        return f"{self.group}/{self.version}" if self.group else self.version

    @property
    def qualified_name(self) -> str:
        """``plural.group``, or just ``plural`` for the core group."""
        return f"{self.name}.{self.group}" if self.group else self.name

    @property
    def is_subresource(self) -> bool:
        return "/" in self.name

    def matches(self, name: str) -> bool:
        """Whether a user-typed resource name refers to this resource.

        Plural, singular and short names match exactly; kinds match
        case-insensitively so ``deployment`` finds ``Deployment``.
        """
        if self.is_subresource:
            return False
        return (
            name == self.name
            or (bool(self.singular_name) and name == self.singular_name)
            or name.lower() == self.kind.lower()
            or name in self.short_names
        )


class ApiResourceList(_DiscoveryModel):
    """Resources served under one group-version."""

    kind: str = "APIResourceList"
    api_version: str = Field(default="v1", alias="apiVersion")
    group_version: str = Field(alias="groupVersion")
    resources: list[ApiResourceDescriptor] = Field(default_factory=list)

    @field_validator("resources", mode="before")
    @classmethod
    def _none_to_empty(cls, v: Any) -> Any:
        return v or []

    @model_validator(mode="after")
    def _fill_group_version(self) -> ApiResourceList:
        group, version = split_group_version(self.group_version)
        for resource in self.resources:
            if not resource.group:
                resource.group = group
            if not resource.version:
                resource.version = version
        return self

    @property
    def group(self) -> str:
        return split_group_version(self.group_version)[0]
