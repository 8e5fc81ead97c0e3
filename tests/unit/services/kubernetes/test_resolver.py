"""Unit tests for resource argument parsing and resolution."""

from __future__ import annotations

from unittest.mock import MagicMock

import pytest

from kubectl_lite.integrations.kubernetes.exceptions import (
    AmbiguousResourceError,
    InvalidResourceSpecError,
    ResourceTypeNotFoundError,
)
from kubectl_lite.services.kubernetes.catalog import ResourceCatalog
from kubectl_lite.services.kubernetes.resolver import (
    Dynamic,
    NamedResourceArg,
    ResourceResolver,
    WellKnown,
    WellKnownResource,
    parse_resource_args,
    resource_identity,
)

PODS = WellKnown(WellKnownResource.PODS)
NODES = WellKnown(WellKnownResource.NODES)


@pytest.mark.unit
class TestParseResourceArgs:
    """Tests for parse_resource_args."""

    def test_single_resource(self) -> None:
        assert parse_resource_args(["pod"]) == [NamedResourceArg(PODS)]

    def test_resource_list(self) -> None:
        assert parse_resource_args(["pod,node"]) == [
            NamedResourceArg(PODS),
            NamedResourceArg(NODES),
        ]

    def test_resource_with_name(self) -> None:
        assert parse_resource_args(["pod", "bazooka"]) == [NamedResourceArg(PODS, "bazooka")]

    def test_resource_with_several_names(self) -> None:
        assert parse_resource_args(["pod", "bazooka", "darbooka"]) == [
            NamedResourceArg(PODS, "bazooka"),
            NamedResourceArg(PODS, "darbooka"),
        ]

    def test_names_combine_resource_major(self) -> None:
        """Every resource is paired with every name, resources outermost."""
        assert parse_resource_args(["pod,cm", "a", "b"]) == [
            NamedResourceArg(PODS, "a"),
            NamedResourceArg(PODS, "b"),
            NamedResourceArg(WellKnown(WellKnownResource.CONFIG_MAPS), "a"),
            NamedResourceArg(WellKnown(WellKnownResource.CONFIG_MAPS), "b"),
        ]

    def test_slash_form(self) -> None:
        assert parse_resource_args(["pod/bazooka", "node/elephant"]) == [
            NamedResourceArg(PODS, "bazooka"),
            NamedResourceArg(NODES, "elephant"),
        ]

    def test_slash_form_keeps_rest_of_name(self) -> None:
        """Only the first slash separates resource from name."""
        assert parse_resource_args(["deployments.apps/web"]) == [
            NamedResourceArg(Dynamic("deployments.apps"), "web")
        ]

    def test_mixed_forms_rejected(self) -> None:
        """resource/name tokens cannot be mixed with bare ones."""
        with pytest.raises(InvalidResourceSpecError, match="resource/<resource_name>"):
            parse_resource_args(["pod/bazooka", "node"])

    def test_mixed_forms_rejected_either_order(self) -> None:
        with pytest.raises(InvalidResourceSpecError):
            parse_resource_args(["pod", "node/elephant"])

    def test_empty_arguments_rejected(self) -> None:
        with pytest.raises(InvalidResourceSpecError, match="must specify the type of resource"):
            parse_resource_args([])

    @pytest.mark.parametrize("token", ["pod,,node", ",pod", "pod,"])
    def test_empty_resource_in_list_rejected(self, token: str) -> None:
        with pytest.raises(InvalidResourceSpecError, match="empty resource name"):
            parse_resource_args([token])

    @pytest.mark.parametrize("token", ["/bazooka", "pod/"])
    def test_empty_side_of_slash_rejected(self, token: str) -> None:
        with pytest.raises(InvalidResourceSpecError, match="single resource and name"):
            parse_resource_args([token])


@pytest.mark.unit
class TestResourceIdentity:
    """Tests for alias mapping."""

    @pytest.mark.parametrize(
        ("token", "expected"),
        [
            ("po", WellKnownResource.PODS),
            ("pod", WellKnownResource.PODS),
            ("pods", WellKnownResource.PODS),
            ("no", WellKnownResource.NODES),
            ("node", WellKnownResource.NODES),
            ("nodes", WellKnownResource.NODES),
            ("cm", WellKnownResource.CONFIG_MAPS),
            ("configmap", WellKnownResource.CONFIG_MAPS),
            ("configmaps", WellKnownResource.CONFIG_MAPS),
            ("cs", WellKnownResource.COMPONENT_STATUSES),
            ("componentstatus", WellKnownResource.COMPONENT_STATUSES),
            ("componentstatuses", WellKnownResource.COMPONENT_STATUSES),
        ],
    )
    def test_well_known_aliases(self, token: str, expected: WellKnownResource) -> None:
        assert resource_identity(token) == WellKnown(expected)

    @pytest.mark.parametrize("token", ["deployments", "Pods", "pods.v1", "bazookas"])
    def test_everything_else_is_dynamic(self, token: str) -> None:
        assert resource_identity(token) == Dynamic(token)


@pytest.mark.unit
@pytest.mark.kubernetes
class TestResourceResolver:
    """Tests for ResourceResolver."""

    @pytest.fixture
    def resolver(self, catalog: ResourceCatalog) -> ResourceResolver:
        return ResourceResolver(catalog)

    def test_well_known_needs_no_discovery(self) -> None:
        """Well-known resources resolve without touching the catalog."""
        catalog = MagicMock(spec=ResourceCatalog)
        resolved = ResourceResolver(catalog).resolve(NODES)

        assert (resolved.group, resolved.version, resolved.kind) == ("", "v1", "Node")
        assert resolved.plural == "nodes"
        assert not resolved.namespaced
        assert resolved.well_known is WellKnownResource.NODES
        catalog.lookup_descriptors.assert_not_called()

    @pytest.mark.parametrize("token", ["deployments", "deployment", "Deployment", "deploy"])
    def test_dynamic_match(self, resolver: ResourceResolver, token: str) -> None:
        resolved = resolver.resolve(Dynamic(token))

        assert resolved.api_version == "apps/v1"
        assert resolved.kind == "Deployment"
        assert resolved.plural == "deployments"
        assert resolved.namespaced
        assert resolved.well_known is None

    def test_group_qualified(self, resolver: ResourceResolver) -> None:
        """resource.group restricts matches to that group."""
        resolved = resolver.resolve(Dynamic("events.events.k8s.io"))
        assert resolved.qualified_name == "events.events.k8s.io"

    def test_core_wins_over_other_groups(self, resolver: ResourceResolver) -> None:
        """When core and another group both match, core is chosen."""
        resolved = resolver.resolve(Dynamic("ev"))
        assert resolved.group == ""
        assert resolved.api_version == "v1"

    def test_ambiguous_without_core(self, resolver: ResourceResolver) -> None:
        with pytest.raises(AmbiguousResourceError) as exc_info:
            resolver.resolve(Dynamic("widgets"))

        assert exc_info.value.candidates == ["widgets.example.io", "widgets.other.io"]

    def test_group_qualification_disambiguates(self, resolver: ResourceResolver) -> None:
        resolved = resolver.resolve(Dynamic("widgets.example.io"))
        assert not resolved.namespaced
        assert resolved.api_version == "example.io/v1"

    @pytest.mark.parametrize(
        "token",
        [
            "bazookas",
            "scale",
            "log",
            "deployments.batch",
        ],
    )
    def test_not_found(self, resolver: ResourceResolver, token: str) -> None:
        """Unknown names, subresources and wrong groups do not resolve."""
        with pytest.raises(ResourceTypeNotFoundError) as exc_info:
            resolver.resolve(Dynamic(token))

        assert exc_info.value.resource_type == token

    @pytest.mark.parametrize("token", ["cronjobs", "cj", "CronJob", "cronjobs.batch"])
    def test_non_preferred_version_match(self, resolver: ResourceResolver, token: str) -> None:
        """Kinds served only by a non-preferred version still resolve."""
        resolved = resolver.resolve(Dynamic(token))

        assert resolved.api_version == "batch/v1beta1"
        assert resolved.kind == "CronJob"

    def test_preferred_version_wins(self, resolver: ResourceResolver) -> None:
        """A kind served by several versions resolves to the preferred one."""
        resolved = resolver.resolve(Dynamic("jobs"))
        assert resolved.api_version == "batch/v1"


@pytest.mark.unit
@pytest.mark.kubernetes
class TestResolverWithoutCache:
    """Resolution falls back to live discovery when no cache is loaded."""

    @pytest.fixture
    def resolver(self, live_client: MagicMock) -> ResourceResolver:
        return ResourceResolver(ResourceCatalog(live_client))

    def test_group_resource(self, resolver: ResourceResolver, live_client: MagicMock) -> None:
        resolved = resolver.resolve(Dynamic("deploy"))

        assert resolved.qualified_name == "deployments.apps"
        assert resolved.api_version == "apps/v1"
        live_client.list_api_group_resources.assert_any_call("apps/v1")

    def test_synthesized_core_group(self, resolver: ResourceResolver) -> None:
        """The core group is built from /api and wins over events.k8s.io."""
        resolved = resolver.resolve(Dynamic("ev"))

        assert resolved.group == ""
        assert resolved.api_version == "v1"
        assert resolved.kind == "Event"

    def test_only_preferred_versions_fetched(self, resolver: ResourceResolver) -> None:
        with pytest.raises(ResourceTypeNotFoundError):
            resolver.resolve(Dynamic("cronjobs"))
