"""Shared fixtures for CLI command tests."""

from __future__ import annotations

from unittest.mock import MagicMock

import pytest
import typer


@pytest.fixture
def mock_session() -> MagicMock:
    """Create a mock Kubectl session."""
    session = MagicMock()
    session.get.return_value = iter([])
    return session


@pytest.fixture
def get_session(mock_session: MagicMock) -> MagicMock:
    """Session factory returning the mock session for any configuration."""
    return MagicMock(return_value=mock_session)


@pytest.fixture
def make_app() -> typer.Typer:
    """Bare app with a root callback, so registered commands keep their names."""
    app = typer.Typer()

    @app.callback()
    def root() -> None:
        pass

    return app
