"""Shared fixtures for the reservation helper test suite."""

from __future__ import annotations

import sys
import tempfile
from pathlib import Path

import pytest
from reserve_test_helpers import RecordingRunner, write_template_project

from reserve_common import RegistryPublisher, ReservationRequest, ReserveConfig

TOKEN = "npm_test_token"


@pytest.fixture
def project(tmp_path: Path) -> Path:
    """Create a template project in an isolated directory."""
    return write_template_project(tmp_path / "template")


@pytest.fixture
def temp_root(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> Path:
    """Redirect :mod:`tempfile` allocations so leftovers can be inspected."""
    root = tmp_path / "tmp"
    root.mkdir()
    monkeypatch.setattr(tempfile, "tempdir", str(root))
    return root


@pytest.fixture
def reservation() -> ReservationRequest:
    """Return a valid reservation request."""
    return ReservationRequest(package_name="valid-name", username="octocat")


@pytest.fixture
def config(project: Path) -> ReserveConfig:
    """Return a configuration bound to ``project``."""
    return ReserveConfig(project_root=project, token=TOKEN)


@pytest.fixture
def runner() -> RecordingRunner:
    """Return a runner that reports a successful publish."""
    return RecordingRunner()


@pytest.fixture
def publisher(runner: RecordingRunner) -> RegistryPublisher:
    """Return a publisher whose executable always resolves."""
    return RegistryPublisher(token=TOKEN, npm_binary=sys.executable, runner=runner)
