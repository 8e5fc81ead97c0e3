"""Shared pytest fixtures for kubectl_lite tests."""

from __future__ import annotations

import logging
import os
from collections.abc import Generator
from pathlib import Path
from typing import Any

import pytest
import typer
from typer.testing import CliRunner

from kubectl_lite.cli.main import app


@pytest.fixture
def cli_runner() -> CliRunner:
    """Create a Typer CLI test runner."""
    return CliRunner()


@pytest.fixture(autouse=True)
def reset_environment(monkeypatch: pytest.MonkeyPatch) -> None:
    """Reset environment variables for each test."""
    for key in list(os.environ.keys()):
        if key.startswith("KUBECTL_LITE_"):
            monkeypatch.delenv(key, raising=False)
    monkeypatch.delenv("KUBECONFIG", raising=False)


@pytest.fixture(autouse=True)
def isolate_log_files(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> Generator[None]:
    """Keep log files out of the real home directory and drop added handlers."""
    log_dir = tmp_path / "logs"
    monkeypatch.setattr("kubectl_lite.logging.config.LOG_DIR", log_dir)
    monkeypatch.setattr("kubectl_lite.logging.config.LOG_FILE", log_dir / "kubectl-lite.log")
    root = logging.getLogger()
    original_handlers = list(root.handlers)
    yield
    for handler in root.handlers:
        if handler not in original_handlers:
            handler.close()
    root.handlers = original_handlers


@pytest.fixture
def kubeconfig_data() -> dict[str, Any]:
    """A kubeconfig document with two contexts."""
    return {
        "apiVersion": "v1",
        "kind": "Config",
        "current-context": "dev",
        "clusters": [
            {
                "name": "dev-cluster",
                "cluster": {
                    "server": "https://dev.example.com:6443",
                    "certificate-authority-data": "Y2VydA==",
                },
            },
            {"name": "prod-cluster", "cluster": {"server": "https://prod.example.com"}},
        ],
        "users": [
            {"name": "dev-user", "user": {"token": "secret-token"}},
            {
                "name": "prod-user",
                "user": {"client-certificate-data": "Y2VydA==", "client-key-data": "a2V5"},
            },
        ],
        "contexts": [
            {
                "name": "dev",
                "context": {"cluster": "dev-cluster", "user": "dev-user", "namespace": "team-a"},
            },
            {"name": "prod", "context": {"cluster": "prod-cluster", "user": "prod-user"}},
        ],
    }


@pytest.fixture
def cli_app() -> typer.Typer:
    """Return the CLI app for testing."""
    return app
