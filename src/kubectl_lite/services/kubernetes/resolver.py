"""Resource token parsing and resolution.

Resolution is two-phase. ``parse_resource_args`` turns command-line tokens
into ``NamedResourceArg`` values without any I/O. ``ResourceResolver`` then
maps each identity to a concrete group/version/kind, consulting the
``ResourceCatalog`` only for identities that are not well-known.
"""

from __future__ import annotations

from collections.abc import Sequence
from dataclasses import dataclass
from enum import StrEnum

import structlog

from kubectl_lite.integrations.kubernetes.exceptions import (
    AmbiguousResourceError,
    InvalidResourceSpecError,
    ResourceTypeNotFoundError,
)
from kubectl_lite.integrations.kubernetes.models.discovery import (
    CORE_GROUP,
    ApiResourceDescriptor,
)
from kubectl_lite.services.kubernetes.catalog import ResourceCatalog

logger = structlog.get_logger()


class WellKnownResource(StrEnum):
    """Core resources served by typed CoreV1Api calls."""

    PODS = "pods"
    NODES = "nodes"
    CONFIG_MAPS = "configmaps"
    COMPONENT_STATUSES = "componentstatuses"


_ALIASES: dict[str, WellKnownResource] = {
    "po": WellKnownResource.PODS,
    "pod": WellKnownResource.PODS,
    "pods": WellKnownResource.PODS,
    "no": WellKnownResource.NODES,
    "node": WellKnownResource.NODES,
    "nodes": WellKnownResource.NODES,
    "cm": WellKnownResource.CONFIG_MAPS,
    "configmap": WellKnownResource.CONFIG_MAPS,
    "configmaps": WellKnownResource.CONFIG_MAPS,
    "cs": WellKnownResource.COMPONENT_STATUSES,
    "componentstatus": WellKnownResource.COMPONENT_STATUSES,
    "componentstatuses": WellKnownResource.COMPONENT_STATUSES,
}

# kind, namespaced
_WELL_KNOWN: dict[WellKnownResource, tuple[str, bool]] = {
    WellKnownResource.PODS: ("Pod", True),
    WellKnownResource.NODES: ("Node", False),
    WellKnownResource.CONFIG_MAPS: ("ConfigMap", True),
    WellKnownResource.COMPONENT_STATUSES: ("ComponentStatus", False),
}


@dataclass(frozen=True)
class WellKnown:
    resource: WellKnownResource

    def __str__(self) -> str:
        return self.resource.value


@dataclass(frozen=True)
class Dynamic:
    name: str

    def __str__(self) -> str:
        return self.name


ResourceIdentity = WellKnown | Dynamic


@dataclass(frozen=True)
class NamedResourceArg:
    """A resource identity plus the object name the user asked for, if any."""

    identity: ResourceIdentity
    name: str | None = None


@dataclass(frozen=True)
class ResolvedResource:
    """A resource identity resolved to a concrete API endpoint."""

    group: str
    version: str
    kind: str
    plural: str
    namespaced: bool
    well_known: WellKnownResource | None = None

    @property
    def api_version(self) -> str:
        return f"{self.group}/{self.version}" if self.group else self.version

    @property
    def qualified_name(self) -> str:
        return f"{self.plural}.{self.group}" if self.group else self.plural

    @classmethod
    def from_descriptor(cls, descriptor: ApiResourceDescriptor) -> ResolvedResource:
        return cls(
            group=descriptor.group,
            version=descriptor.version,
            kind=descriptor.kind,
            plural=descriptor.name,
            namespaced=descriptor.namespaced,
        )


def resource_identity(token: str) -> ResourceIdentity:
    """Map a resource name to a well-known identity, else a dynamic one."""
    if (well_known := _ALIASES.get(token)) is not None:
        return WellKnown(well_known)
    return Dynamic(token)


def _split_resources(token: str) -> list[str]:
    resources = token.split(",")
    if any(not r for r in resources):
        raise InvalidResourceSpecError(f'invalid resource list "{token}": empty resource name')
    return resources


def parse_resource_args(tokens: Sequence[str]) -> list[NamedResourceArg]:
    """Parse ``get`` arguments into resource/name pairs.

    Either every token is ``resource/name``, or the first token is a
    comma-separated resource list and any further tokens are names, which
    are combined resource-major with every resource.

    Raises:
        InvalidResourceSpecError: On an empty argument list, an empty
            resource, or ``resource/name`` tokens mixed with bare ones.
    """
    if not tokens:
        raise InvalidResourceSpecError(
            "You must specify the type of resource to get. "
            "Use \"kubectl-lite api-resources\" for a complete list of supported resources."
        )

    if any("/" in token for token in tokens):
        args = []
        for token in tokens:
            resource, sep, name = token.partition("/")
            if not sep:
                raise InvalidResourceSpecError()
            if not resource or not name:
                raise InvalidResourceSpecError(
                    f'arguments in resource/name form must have a single resource and name: "{token}"'
                )
            args.append(NamedResourceArg(resource_identity(resource), name))
        return args

    resources = [resource_identity(r) for r in _split_resources(tokens[0])]
    names = tokens[1:]
    if not names:
        return [NamedResourceArg(identity) for identity in resources]
    return [NamedResourceArg(identity, name) for identity in resources for name in names]


class ResourceResolver:
    """Resolves resource identities against the API discovery catalog."""

    def __init__(self, catalog: ResourceCatalog) -> None:
        self._catalog = catalog
        self._log = logger.bind(entity="resolver")

    def resolve(self, identity: ResourceIdentity) -> ResolvedResource:
        """Resolve an identity to group, version, kind and plural name.

        Raises:
            ResourceTypeNotFoundError: If nothing in discovery matches.
            AmbiguousResourceError: If several non-core groups match.
        """
        if isinstance(identity, WellKnown):
            kind, namespaced = _WELL_KNOWN[identity.resource]
            return ResolvedResource(
                group=CORE_GROUP,
                version="v1",
                kind=kind,
                plural=identity.resource.value,
                namespaced=namespaced,
                well_known=identity.resource,
            )
        return self._resolve_dynamic(identity.name)

    def _candidates(self, token: str) -> dict[str, ApiResourceDescriptor]:
        """Matching descriptors keyed by group, first match per group."""
        name, _, group = token.partition(".")
        matches: dict[str, ApiResourceDescriptor] = {}
        for descriptor in self._catalog.lookup_descriptors():
            if descriptor.group in matches:
                continue
            if group and descriptor.group != group:
                continue
            if descriptor.matches(name if group else token):
                matches[descriptor.group] = descriptor
        return matches

    def _resolve_dynamic(self, token: str) -> ResolvedResource:
        matches = self._candidates(token)
        if not matches:
            raise ResourceTypeNotFoundError(token)

        if len(matches) == 1:
            descriptor = next(iter(matches.values()))
        elif CORE_GROUP in matches:
            descriptor = matches[CORE_GROUP]
        else:
            raise AmbiguousResourceError(token, [d.qualified_name for d in matches.values()])

        self._log.debug(
            "resolved_resource",
            token=token,
            group=descriptor.group,
            version=descriptor.version,
            kind=descriptor.kind,
        )
        return ResolvedResource.from_descriptor(descriptor)
