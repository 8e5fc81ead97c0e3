"""Tests for cli/output/table.py."""

from __future__ import annotations

import pytest
from rich.table import Column

from kubectl_lite.cli.output.table import Table


@pytest.mark.unit
class TestTableDefaults:
    """Tests that Table applies kubectl-like defaults."""

    def test_borderless_defaults(self) -> None:
        table = Table()
        assert table.box is None
        assert table.show_edge is False
        assert table.pad_edge is False
        assert table.header_style == "bold"

    def test_explicit_kwargs_win(self) -> None:
        table = Table(header_style="red", show_edge=True)
        assert table.header_style == "red"
        assert table.show_edge is True

    def test_add_column_uses_fold_overflow_by_default(self) -> None:
        """The custom add_column must default overflow to 'fold'."""
        table = Table()
        table.add_column("Name")
        col: Column = table.columns[0]
        assert col.overflow == "fold"

    def test_add_column_respects_explicit_overflow(self) -> None:
        table = Table()
        table.add_column("ID", overflow="ellipsis")
        assert table.columns[0].overflow == "ellipsis"

    def test_add_column_with_no_wrap_true(self) -> None:
        table = Table()
        table.add_column("Fixed", no_wrap=True)
        assert table.columns[0].no_wrap is True


@pytest.mark.unit
class TestTableFromRows:
    """Tests for Table.from_rows."""

    def test_columns_and_rows(self) -> None:
        table = Table.from_rows(["NAME", "AGE"], [["nginx", "3d"], ["redis", "1h"]])

        assert [c.header for c in table.columns] == ["NAME", "AGE"]
        assert table.row_count == 2
        assert table.show_header is True

    def test_name_columns_highlighted(self) -> None:
        table = Table.from_rows(["NAMESPACE", "NAME", "AGE"], [["prod", "nginx", "3d"]])

        assert [c.style for c in table.columns] == ["cyan", "cyan", ""]

    def test_headerless(self) -> None:
        """Without a header the width comes from the widest row."""
        table = Table.from_rows([], [["a"], ["b", "c"]])

        assert table.show_header is False
        assert len(table.columns) == 2
