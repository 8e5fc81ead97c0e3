"""Centralized CLI output utilities.

Usage:
    from kubectl_lite.cli.output import get_formatter

    formatter = get_formatter(OutputFormat.TABLE, console)
    formatter.render(resources)
"""

from kubectl_lite.cli.output.formatters import (
    JsonFormatter,
    NameFormatter,
    ResourceFormatter,
    TableFormatter,
    YamlFormatter,
    get_formatter,
)
from kubectl_lite.cli.output.table import Table

__all__ = [
    "JsonFormatter",
    "NameFormatter",
    "ResourceFormatter",
    "Table",
    "TableFormatter",
    "YamlFormatter",
    "get_formatter",
]
