from __future__ import annotations

import sys
from pathlib import Path

import pytest

from fakes import FakeDriver, make_settings, make_runtime_deps

from cart_relay.state import RuntimeDeps


def pytest_configure() -> None:
    # Keep `import cart_relay...` working when running `pytest` from the repo root.
    repo_root = Path(__file__).resolve().parents[2]
    repo_root_str = str(repo_root)
    if repo_root_str not in sys.path:
        sys.path.insert(0, repo_root_str)


@pytest.fixture
def fake_driver() -> FakeDriver:
    return FakeDriver()


@pytest.fixture
def runtime_deps(tmp_path: Path, fake_driver: FakeDriver) -> RuntimeDeps:
    return make_runtime_deps(make_settings(tmp_path), fake_driver)
