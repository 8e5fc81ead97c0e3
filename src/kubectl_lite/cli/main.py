"""Main CLI entry point using Typer."""

from __future__ import annotations

from pathlib import Path

import typer
from rich.console import Console

from kubectl_lite import __version__
from kubectl_lite.cli.commands import (
    register_api_resources_commands,
    register_config_commands,
    register_get_command,
)
from kubectl_lite.integrations.kubernetes.config import KubectlConfig
from kubectl_lite.integrations.kubernetes.kubeconfig import Kubeconfig
from kubectl_lite.logging.config import configure_logging
from kubectl_lite.services.kubernetes.kubectl import Kubectl

app = typer.Typer(
    name="kubectl-lite",
    help="A small kubectl: get resources and inspect API discovery.",
    add_completion=False,
    no_args_is_help=True,
)

console = Console()


def version_callback(value: bool) -> None:
    """Print version and exit."""
    if value:
        console.print(f"kubectl-lite version {__version__}")
        raise typer.Exit()


@app.callback()
def main(
    ctx: typer.Context,
    version: bool | None = typer.Option(
        None,
        "--version",
        "-V",
        callback=version_callback,
        is_eager=True,
        help="Show version and exit.",
    ),
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Enable verbose output."),
    debug: bool = typer.Option(False, "--debug", help="Enable debug logging."),
    context: str | None = typer.Option(
        None, "--context", help="The name of the kubeconfig context to use."
    ),
    cluster: str | None = typer.Option(
        None, "--cluster", help="The name of the kubeconfig cluster to use."
    ),
    user: str | None = typer.Option(None, "--user", help="The name of the kubeconfig user to use."),
    kubeconfig: str | None = typer.Option(
        None, "--kubeconfig", help="Path to the kubeconfig file to use."
    ),
    cache_dir: Path | None = typer.Option(
        None, "--cache-dir", help="Default cache directory (default ~/.kube/cache)."
    ),
    as_user: str | None = typer.Option(
        None, "--as", help="Username to impersonate for the operation."
    ),
    as_group: str | None = typer.Option(
        None, "--as-group", help="Group to impersonate for the operation."
    ),
    as_uid: str | None = typer.Option(None, "--as-uid", help="UID to impersonate."),
) -> None:
    """kubectl-lite - query Kubernetes clusters the kubectl way."""
    configure_logging(verbose=verbose, debug=debug)
    ctx.obj = KubectlConfig.from_env(
        context=context,
        cluster=cluster,
        user=user,
        kubeconfig=kubeconfig,
        debug=debug,
        options={
            "cache_dir": cache_dir,
            "as_user": as_user,
            "as_group": as_group,
            "as_uid": as_uid,
        },
    )


def get_session(config: KubectlConfig) -> Kubectl:
    return Kubectl.connect(config)


def get_kubeconfig(config: KubectlConfig) -> Kubeconfig:
    return Kubeconfig.load(config.kubeconfig)


register_get_command(app, get_session)
register_api_resources_commands(app, get_session)
register_config_commands(app, get_kubeconfig)


if __name__ == "__main__":
    app()
