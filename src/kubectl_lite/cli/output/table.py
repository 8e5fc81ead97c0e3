"""Table output for CLI commands.

Wraps Rich's Table with the borderless, kubectl-like layout used for every
``get`` and ``api-resources`` listing.
"""

from __future__ import annotations

from collections.abc import Sequence
from typing import TYPE_CHECKING, Any, Literal

from rich.table import Table as RichTable

if TYPE_CHECKING:
    from rich.console import ConsoleRenderable, RichCast
    from rich.style import Style

OverflowMethod = Literal["fold", "crop", "ellipsis", "ignore"]

HIGHLIGHT_COLUMNS = ("NAME", "NAMESPACE")


class Table(RichTable):
    """Rich Table with kubectl-like defaults.

    No box, no edge padding, bold headers. Columns use overflow="fold" so
    long names wrap instead of being truncated.

    Usage:
        from kubectl_lite.cli.output import Table

        table = Table.from_rows(["NAME", "AGE"], [["nginx", "3d"]])
        console.print(table)
    """

    def __init__(self, *headers: Any, **kwargs: Any) -> None:
        kwargs.setdefault("box", None)
        kwargs.setdefault("pad_edge", False)
        kwargs.setdefault("header_style", "bold")
        kwargs.setdefault("show_edge", False)
        super().__init__(*headers, **kwargs)

    @classmethod
    def from_rows(cls, header: Sequence[str], rows: Sequence[Sequence[str]], **kwargs: Any) -> Table:
        """Build a table from a header and string rows."""
        table = cls(show_header=bool(header), **kwargs)
        width = len(header) if header else max((len(r) for r in rows), default=0)
        for index in range(width):
            title = header[index] if header else ""
            table.add_column(title, style="cyan" if title in HIGHLIGHT_COLUMNS else None)
        for row in rows:
            table.add_row(*row)
        return table

    def add_column(
        self,
        header: ConsoleRenderable | RichCast | str = "",
        footer: ConsoleRenderable | RichCast | str = "",
        *,
        style: Style | str | None = None,
        overflow: OverflowMethod = "fold",
        no_wrap: bool = False,
        **kwargs: Any,
    ) -> None:
        """Add a column with overflow="fold" by default."""
        super().add_column(
            header,
            footer,
            style=style,
            overflow=overflow,
            no_wrap=no_wrap,
            **kwargs,
        )
