from __future__ import annotations

import socket
from pathlib import Path

import pytest
from hypothesis import HealthCheck, settings

from helpers import FakeInspector, FakeVm, make_ctx

_ALLOWED_MARKERS = {"unit", "integration", "slow"}

settings.register_profile("blt", deadline=None, max_examples=50, suppress_health_check=[HealthCheck.function_scoped_fixture])
settings.load_profile("blt")


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
    repo = tmp_path / "project"
    (repo / "blt").mkdir(parents=True)
    (repo / "box").mkdir()
    return repo


@pytest.fixture
def ctx(project_root: Path):
    return make_ctx(project_root)


@pytest.fixture
def vm_ready_inspector() -> FakeInspector:
    return FakeInspector(vm_cli=False, initialized=True, booted=True)


@pytest.fixture
def fake_vm() -> FakeVm:
    return FakeVm()
