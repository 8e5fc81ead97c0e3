"""Base utilities for CLI commands.

Provides common Typer options, error handling and access to the invocation
configuration built by the root callback.
"""

from __future__ import annotations

from typing import Annotated

import typer
from rich.console import Console
from rich.markup import escape

from kubectl_lite.integrations.kubernetes.config import KubectlConfig
from kubectl_lite.integrations.kubernetes.exceptions import (
    AmbiguousResourceError,
    DiscoveryLoadError,
    InvalidResourceSpecError,
    KubernetesAuthError,
    KubernetesConnectionError,
    KubernetesError,
    KubernetesNotFoundError,
    KubernetesValidationError,
    ResourceTypeNotFoundError,
)
from kubectl_lite.integrations.kubernetes.models.base import OutputFormat

# Resource output goes to stdout, diagnostics to stderr
console = Console()
err_console = Console(stderr=True, soft_wrap=True)


# =============================================================================
# Common Typer Option Annotations
# =============================================================================

OutputOption = Annotated[
    OutputFormat,
    typer.Option(
        "--output",
        "-o",
        help="Output format: table, wide, json, yaml or name",
        case_sensitive=False,
    ),
]

NamespaceOption = Annotated[
    str | None,
    typer.Option(
        "--namespace",
        "-n",
        help="Kubernetes namespace (defaults to the context's namespace or 'default')",
    ),
]

AllNamespacesOption = Annotated[
    bool,
    typer.Option(
        "--all-namespaces",
        "-A",
        help="List resources across all namespaces",
    ),
]

LabelSelectorOption = Annotated[
    str | None,
    typer.Option(
        "--selector",
        "-l",
        help="Label selector (e.g., 'app=nginx,tier=frontend')",
    ),
]

FieldSelectorOption = Annotated[
    str | None,
    typer.Option(
        "--field-selector",
        help="Field selector (e.g., 'status.phase=Running')",
    ),
]


def config_from_context(ctx: typer.Context) -> KubectlConfig:
    """Return the configuration stored by the root callback.

    Commands mounted on an app without that callback (as in tests) fall back
    to the environment.
    """
    obj = ctx.find_root().obj
    if isinstance(obj, KubectlConfig):
        return obj
    return KubectlConfig.from_env()


# =============================================================================
# Error Handling
# =============================================================================


def handle_k8s_error(error: KubernetesError) -> None:
    """Handle Kubernetes errors with user-friendly output.

    Args:
        error: The Kubernetes error to handle.

    Raises:
        typer.Exit: Always exits with code 1.
    """
    if isinstance(error, KubernetesConnectionError):
        err_console.print("[red]Error:[/red] Cannot connect to Kubernetes cluster")
        err_console.print(f"  {error.message}", markup=False)
        if error.original_error:
            err_console.print(f"  Cause: {error.original_error}", markup=False)
        err_console.print(
            "\n[dim]Hint: Check that your kubeconfig is valid and the cluster is reachable.[/dim]"
        )

    elif isinstance(error, KubernetesAuthError):
        err_console.print("[red]Error:[/red] Authentication/authorization failed")
        err_console.print(f"  {error.message}", markup=False)
        err_console.print(
            "\n[dim]Hint: Check your credentials, token, RBAC permissions "
            "or --as/--as-group impersonation.[/dim]"
        )

    elif isinstance(error, KubernetesNotFoundError):
        err_console.print("[red]Error:[/red] Resource not found")
        err_console.print(f"  {error.message}", markup=False)

    elif isinstance(error, KubernetesValidationError):
        err_console.print("[red]Error:[/red] Request rejected by the server")
        err_console.print(f"  {error.message}", markup=False)
        err_console.print("\n[dim]Hint: Check the --selector and --field-selector syntax.[/dim]")

    elif isinstance(error, InvalidResourceSpecError):
        err_console.print(f"[red]Error:[/red] {escape(error.message)}", highlight=False)

    elif isinstance(error, ResourceTypeNotFoundError):
        err_console.print(f"[red]Error:[/red] {escape(error.message)}", highlight=False)
        err_console.print(
            "\n[dim]Hint: Run 'kubectl-lite api-resources' to list the resource types "
            "this cluster serves.[/dim]"
        )

    elif isinstance(error, AmbiguousResourceError):
        err_console.print(f"[red]Error:[/red] {escape(error.message)}", highlight=False)
        err_console.print(
            "\n[dim]Hint: Qualify the resource with its group, e.g. "
            f"'{error.candidates[0]}'.[/dim]"
        )

    elif isinstance(error, DiscoveryLoadError):
        err_console.print(f"[red]Error:[/red] {escape(error.message)}", highlight=False)
        if error.original_error:
            err_console.print(f"  Cause: {error.original_error}", markup=False)
        err_console.print(
            "\n[dim]Hint: Remove the corrupt file or pass a different --cache-dir.[/dim]"
        )

    else:
        err_console.print(f"[red]Error:[/red] {escape(error.message)}", highlight=False)
        if error.status_code:
            err_console.print(f"  HTTP Status: {error.status_code}")

    raise typer.Exit(1)
