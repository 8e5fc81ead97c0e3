"""Output formatters for CLI commands.

Implements the Strategy pattern for output formatting: every formatter
consumes ``Displayable`` objects and writes them as a table, a list of
``kind/name`` lines, JSON or YAML.
"""

from __future__ import annotations

from abc import ABC, abstractmethod

from rich.console import Console

from kubectl_lite.cli.output.table import Table
from kubectl_lite.integrations.kubernetes.models.base import Displayable, OutputFormat


class ResourceFormatter(ABC):
    """Abstract base class for resource output formatters."""

    def __init__(self, console: Console) -> None:
        self.console = console

    @abstractmethod
    def render(
        self,
        resource: Displayable,
        *,
        show_namespace: bool = False,
        show_kind: bool = False,
    ) -> None:
        """Write one Displayable (a single object or a list) to the console."""

    def _print_text(self, text: str) -> None:
        self.console.print(text.rstrip("\n"), markup=False, highlight=False, soft_wrap=True)


class TableFormatter(ResourceFormatter):
    """Borderless Rich table, optionally with the wide column set."""

    def __init__(self, console: Console, output: OutputFormat = OutputFormat.TABLE) -> None:
        super().__init__(console)
        self.output = output

    def render(
        self,
        resource: Displayable,
        *,
        show_namespace: bool = False,
        show_kind: bool = False,
    ) -> None:
        rows = resource.rows(self.output, show_namespace, show_kind)
        if not rows:
            return
        header = resource.header(self.output, show_namespace)
        self.console.print(Table.from_rows(header, rows))


class NameFormatter(ResourceFormatter):
    """One ``kind[.group]/name`` per line."""

    def render(
        self,
        resource: Displayable,
        *,
        show_namespace: bool = False,
        show_kind: bool = False,
    ) -> None:
        for row in resource.rows(OutputFormat.NAME, show_namespace, show_kind):
            self._print_text(row[0])


class JsonFormatter(ResourceFormatter):
    """JSON output formatter."""

    def render(
        self,
        resource: Displayable,
        *,
        show_namespace: bool = False,
        show_kind: bool = False,
    ) -> None:
        self._print_text(resource.to_json())


class YamlFormatter(ResourceFormatter):
    """YAML output formatter."""

    def render(
        self,
        resource: Displayable,
        *,
        show_namespace: bool = False,
        show_kind: bool = False,
    ) -> None:
        self._print_text(resource.to_yaml())


def get_formatter(format_type: OutputFormat, console: Console) -> ResourceFormatter:
    """Get the appropriate formatter for the output format.

    Args:
        format_type: Desired output format.
        console: Rich console for output.

    Returns:
        Formatter instance for the specified format.
    """
    if format_type in (OutputFormat.TABLE, OutputFormat.WIDE):
        return TableFormatter(console, format_type)
    formatters: dict[OutputFormat, type[ResourceFormatter]] = {
        OutputFormat.NAME: NameFormatter,
        OutputFormat.JSON: JsonFormatter,
        OutputFormat.YAML: YamlFormatter,
    }
    return formatters[format_type](console)
