"""The ``api-resources`` and ``api-versions`` discovery commands."""

from __future__ import annotations

from collections.abc import Callable, Sequence
from typing import TYPE_CHECKING, Any

import typer

from kubectl_lite.cli.commands.base import (
    OutputOption,
    config_from_context,
    console,
    handle_k8s_error,
)
from kubectl_lite.cli.output import get_formatter
from kubectl_lite.integrations.kubernetes.exceptions import KubernetesError
from kubectl_lite.integrations.kubernetes.models.base import (
    OutputFormat,
    dump_json,
    dump_yaml,
)
from kubectl_lite.services.kubernetes.kubectl import ApiResourceFilter

if TYPE_CHECKING:
    from kubectl_lite.integrations.kubernetes.config import KubectlConfig
    from kubectl_lite.integrations.kubernetes.models.discovery import ApiResourceDescriptor
    from kubectl_lite.services.kubernetes.kubectl import Kubectl

API_RESOURCE_COLUMNS = ["NAME", "SHORTNAMES", "APIVERSION", "NAMESPACED", "KIND"]
API_RESOURCE_WIDE_COLUMNS = ["VERBS", "CATEGORIES"]


class ApiResourcesView:
    """Displayable table of discovered resource types."""

    def __init__(self, descriptors: Sequence[ApiResourceDescriptor]) -> None:
        self.descriptors = list(descriptors)

    def header(self, output: OutputFormat, show_namespace: bool = False) -> list[str]:
        if output is OutputFormat.NAME:
            return []
        if output is OutputFormat.WIDE:
            return API_RESOURCE_COLUMNS + API_RESOURCE_WIDE_COLUMNS
        return list(API_RESOURCE_COLUMNS)

    def rows(
        self,
        output: OutputFormat,
        show_namespace: bool = False,
        show_kind: bool = False,
    ) -> list[list[str]]:
        if output is OutputFormat.NAME:
            return [[d.qualified_name] for d in self.descriptors]
        rows = []
        for d in self.descriptors:
            row = [
                d.name,
                ",".join(d.short_names),
                d.api_version,
                str(d.namespaced).lower(),
                d.kind,
            ]
            if output is OutputFormat.WIDE:
                row.extend([",".join(d.verbs), ",".join(d.categories)])
            rows.append(row)
        return rows

    def to_dict(self) -> dict[str, Any]:
        return {
            "kind": "APIResourceList",
            "resources": [
                d.model_dump(by_alias=True, exclude_defaults=False) for d in self.descriptors
            ],
        }

    def to_json(self) -> str:
        return dump_json(self.to_dict())

    def to_yaml(self) -> str:
        return dump_yaml(self.to_dict())


def _parse_bool(value: str | None) -> bool | None:
    if value is None:
        return None
    lowered = value.lower()
    if lowered in ("true", "yes", "1"):
        return True
    if lowered in ("false", "no", "0"):
        return False
    raise typer.BadParameter(f"expected true or false, got '{value}'", param_hint="--namespaced")


def register_api_resources_commands(
    app: typer.Typer,
    get_session: Callable[[KubectlConfig], Kubectl],
) -> None:
    """Register api-resources and api-versions commands."""

    @app.command("api-resources")
    def api_resources(
        ctx: typer.Context,
        namespaced: str | None = typer.Option(
            None,
            "--namespaced",
            help="true for namespaced resources only, false for cluster-scoped only",
        ),
        api_group: str | None = typer.Option(
            None,
            "--api-group",
            help="Limit to resources in this API group ('' for the core group)",
        ),
        verbs: list[str] | None = typer.Option(
            None,
            "--verbs",
            help="Limit to resources supporting these verbs (repeatable or comma-separated)",
        ),
        output: OutputOption = OutputFormat.TABLE,
    ) -> None:
        """Print the supported API resources on the server.

        Examples:
            kubectl-lite api-resources
            kubectl-lite api-resources --namespaced=false
            kubectl-lite api-resources --api-group apps -o wide
            kubectl-lite api-resources --verbs list,get -o name
        """
        resource_filter = ApiResourceFilter(
            namespaced=_parse_bool(namespaced),
            api_group=api_group,
            verbs=tuple(v for value in verbs or [] for v in value.split(",") if v),
        )
        try:
            session = get_session(config_from_context(ctx))
            with session:
                descriptors = session.api_resources(resource_filter)
            get_formatter(output, console).render(ApiResourcesView(descriptors))
        except KubernetesError as e:
            handle_k8s_error(e)

    @app.command("api-versions")
    def api_versions(ctx: typer.Context) -> None:
        """Print the supported API versions on the server, in the form group/version.

        Examples:
            kubectl-lite api-versions
        """
        try:
            session = get_session(config_from_context(ctx))
            with session:
                versions = session.api_versions()
            for version in versions:
                console.print(version, markup=False, highlight=False)
        except KubernetesError as e:
            handle_k8s_error(e)
