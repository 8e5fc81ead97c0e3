"""The ``get`` command.

Resolves resource arguments against API discovery and prints each one as
soon as it has been fetched.
"""

from __future__ import annotations

from collections.abc import Callable
from typing import TYPE_CHECKING

import typer

from kubectl_lite.cli.commands.base import (
    AllNamespacesOption,
    FieldSelectorOption,
    LabelSelectorOption,
    NamespaceOption,
    OutputOption,
    config_from_context,
    console,
    err_console,
    handle_k8s_error,
)
from kubectl_lite.cli.output import get_formatter
from kubectl_lite.integrations.kubernetes.exceptions import KubernetesError
from kubectl_lite.integrations.kubernetes.models.base import OutputFormat, ResourceList
from kubectl_lite.services.kubernetes.accessor import ListParams
from kubectl_lite.services.kubernetes.namespace_scope import NamespaceScope
from kubectl_lite.services.kubernetes.resolver import parse_resource_args

if TYPE_CHECKING:
    from kubectl_lite.integrations.kubernetes.config import KubectlConfig
    from kubectl_lite.services.kubernetes.kubectl import GetResult, Kubectl


def _no_resources_message(result: GetResult) -> str:
    if result.namespace:
        return f"No resources found in {result.namespace} namespace."
    return "No resources found"


def register_get_command(
    app: typer.Typer,
    get_session: Callable[[KubectlConfig], Kubectl],
) -> None:
    """Register the get command."""

    @app.command("get")
    def get(
        ctx: typer.Context,
        resources: list[str] | None = typer.Argument(
            None,
            help="TYPE[,TYPE...] [NAME...] or TYPE/NAME [TYPE/NAME...]",
            show_default=False,
        ),
        output: OutputOption = OutputFormat.TABLE,
        namespace: NamespaceOption = None,
        all_namespaces: AllNamespacesOption = False,
        label_selector: LabelSelectorOption = None,
        field_selector: FieldSelectorOption = None,
        raw: str | None = typer.Option(
            None,
            "--raw",
            help="Raw URI to request from the server, e.g. /api/v1/namespaces",
        ),
    ) -> None:
        """Display one or many resources.

        Examples:
            kubectl-lite get pods
            kubectl-lite get pod,node -o wide
            kubectl-lite get deployments.apps -A
            kubectl-lite get pod/nginx configmap/settings -o yaml
            kubectl-lite get --raw /apis
        """
        tokens = resources or []
        try:
            if raw is not None and tokens:
                err_console.print(
                    "[red]Error:[/red] arguments may not be passed when --raw is specified"
                )
                raise typer.Exit(1)
            if raw is None:
                # malformed arguments fail before any connection is made
                parse_resource_args(tokens)

            session = get_session(config_from_context(ctx))
            with session:
                if raw is not None:
                    console.print(
                        session.raw(raw), markup=False, highlight=False, soft_wrap=True
                    )
                    return

                scope = NamespaceScope.derive(all_namespaces, namespace)
                params = ListParams(label_selector=label_selector, field_selector=field_selector)
                formatter = get_formatter(output, console)

                printed_table = False
                for result in session.get(tokens, scope, params):
                    if isinstance(result.output, ResourceList) and not result.output:
                        if output.is_tabular:
                            err_console.print(_no_resources_message(result))
                            continue
                    if output is not OutputFormat.NAME and output.is_tabular and printed_table:
                        console.print()
                    formatter.render(
                        result.output,
                        show_namespace=result.show_namespace,
                        show_kind=result.show_kind,
                    )
                    printed_table = True
        except KubernetesError as e:
            handle_k8s_error(e)
