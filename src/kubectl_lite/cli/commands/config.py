"""The ``config`` command group for inspecting the kubeconfig file."""

from __future__ import annotations

from collections.abc import Callable
from typing import TYPE_CHECKING

import typer

from kubectl_lite.cli.commands.base import (
    OutputOption,
    config_from_context,
    console,
    err_console,
    handle_k8s_error,
)
from kubectl_lite.cli.output import Table
from kubectl_lite.integrations.kubernetes.exceptions import KubernetesError
from kubectl_lite.integrations.kubernetes.models.base import OutputFormat, dump_json, dump_yaml

if TYPE_CHECKING:
    from kubectl_lite.integrations.kubernetes.config import KubectlConfig
    from kubectl_lite.integrations.kubernetes.kubeconfig import Kubeconfig

CONTEXT_COLUMNS = ["CURRENT", "NAME", "CLUSTER", "AUTHINFO", "NAMESPACE"]


def register_config_commands(
    app: typer.Typer,
    get_kubeconfig: Callable[[KubectlConfig], Kubeconfig],
) -> None:
    """Register kubeconfig inspection commands."""

    config_app = typer.Typer(
        name="config",
        help="Inspect kubeconfig files",
        no_args_is_help=True,
    )
    app.add_typer(config_app, name="config")

    def _load(ctx: typer.Context) -> Kubeconfig:
        return get_kubeconfig(config_from_context(ctx))

    @config_app.command("current-context")
    def current_context(ctx: typer.Context) -> None:
        """Display the current-context.

        Examples:
            kubectl-lite config current-context
        """
        try:
            name = _load(ctx).current_context
        except KubernetesError as e:
            handle_k8s_error(e)
        if not name:
            err_console.print("[red]Error:[/red] current-context is not set")
            raise typer.Exit(1)
        console.print(name, markup=False, highlight=False)

    @config_app.command("get-contexts")
    def get_contexts(
        ctx: typer.Context,
        output: OutputOption = OutputFormat.TABLE,
    ) -> None:
        """Describe the contexts in the kubeconfig file.

        Examples:
            kubectl-lite config get-contexts
            kubectl-lite config get-contexts -o name
        """
        try:
            contexts = _load(ctx).contexts()
        except KubernetesError as e:
            handle_k8s_error(e)
        if output is OutputFormat.NAME:
            for context in contexts:
                console.print(context["name"], markup=False, highlight=False)
            return
        rows = [
            [
                "*" if c["current"] else "",
                c["name"],
                c["cluster"],
                c["user"],
                c["namespace"],
            ]
            for c in contexts
        ]
        console.print(Table.from_rows(CONTEXT_COLUMNS, rows))

    @config_app.command("get-clusters")
    def get_clusters(ctx: typer.Context) -> None:
        """Display clusters defined in the kubeconfig."""
        try:
            names = _load(ctx).cluster_names()
        except KubernetesError as e:
            handle_k8s_error(e)
        console.print(Table.from_rows(["NAME"], [[n] for n in names]))

    @config_app.command("get-users")
    def get_users(ctx: typer.Context) -> None:
        """Display users defined in the kubeconfig."""
        try:
            names = _load(ctx).user_names()
        except KubernetesError as e:
            handle_k8s_error(e)
        console.print(Table.from_rows(["NAME"], [[n] for n in names]))

    @config_app.command("view")
    def view(
        ctx: typer.Context,
        raw: bool = typer.Option(False, "--raw", help="Show credentials and certificate data"),
        minify: bool = typer.Option(
            False, "--minify", help="Only show what the current context uses"
        ),
        output: OutputOption = OutputFormat.YAML,
    ) -> None:
        """Display merged kubeconfig settings.

        Credentials are masked unless --raw is given.

        Examples:
            kubectl-lite config view
            kubectl-lite config view --minify -o json
        """
        try:
            data = _load(ctx).to_dict(raw=raw, minify=minify)
        except KubernetesError as e:
            handle_k8s_error(e)
        text = dump_json(data) if output is OutputFormat.JSON else dump_yaml(data)
        console.print(text.rstrip("\n"), markup=False, highlight=False, soft_wrap=True)
