from __future__ import annotations

import socket
from pathlib import Path

import pytest
from docsctl.core.config import DocsctlConfig
from docsctl.core.context import RunContext
from hypothesis import settings

from helpers import RecordingRunner

_ALLOWED_MARKERS = {"unit", "integration", "slow"}

settings.register_profile("docsctl", deadline=None, max_examples=60)
settings.load_profile("docsctl")


def pytest_collection_modifyitems(items: list[pytest.Item]) -> None:
    for item in items:
        names = {mark.name for mark in item.iter_markers()}
        if not names.intersection(_ALLOWED_MARKERS):
            item.add_marker("unit")


@pytest.fixture(autouse=True)
def no_network_for_unit(request: pytest.FixtureRequest, monkeypatch: pytest.MonkeyPatch) -> None:
    if request.node.get_closest_marker("integration") or request.node.get_closest_marker("slow"):
        return

    def _blocked(*_args: object, **_kwargs: object) -> socket.socket:
        raise RuntimeError("network disabled in unit tests")

    def _blocked_connect(*_args: object, **_kwargs: object) -> None:
        raise RuntimeError("network disabled in unit tests")

    monkeypatch.setattr(socket, "create_connection", _blocked)
    monkeypatch.setattr(socket.socket, "connect", _blocked_connect)


@pytest.fixture
def project_root(tmp_path: Path) -> Path:
    root = tmp_path / "project"
    (root / "docs/screenshots").mkdir(parents=True)
    (root / "docs-site").mkdir()
    return root


@pytest.fixture
def runner() -> RecordingRunner:
    return RecordingRunner()


@pytest.fixture
def ctx(project_root: Path, runner: RecordingRunner) -> RunContext:
    return RunContext(run_id="pytest-run", repo_root=project_root, config=DocsctlConfig(), quiet=True, runner=runner)
