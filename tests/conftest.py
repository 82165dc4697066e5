# --- test import path bootstrap (flat layout) ---
import sys as _sys
from pathlib import Path as _Path

_ROOT = _Path(__file__).resolve().parents[1]
if str(_ROOT) not in _sys.path:
    _sys.path.insert(0, str(_ROOT))
# --- end bootstrap ---

import io
from pathlib import Path

import pytest
from rich.console import Console

from fakes import FakeCluster, FakeImages
from kubedeploy.logger import DeployLogger
from kubedeploy.models import DeploymentContext


@pytest.fixture
def console() -> Console:
    return Console(file=io.StringIO(), width=200, color_system=None)


@pytest.fixture
def logger(tmp_path: Path, console: Console):
    log = DeployLogger("bingo", "test", tmp_path / "logs", console=console)
    yield log
    log.close()


@pytest.fixture
def make_context(tmp_path: Path):
    def _make(**overrides) -> DeploymentContext:
        overrides.setdefault("workdir", tmp_path)
        return DeploymentContext(**overrides)

    return _make


@pytest.fixture
def write_manifests(tmp_path: Path):
    """Create k8s/<name>.yaml for each given unit name."""

    def _write(*names: str) -> Path:
        root = tmp_path / "k8s"
        root.mkdir(exist_ok=True)
        for name in names:
            (root / f"{name}.yaml").write_text(f"# {name}\n", encoding="utf-8")
        return root

    return _write


@pytest.fixture
def cluster() -> FakeCluster:
    return FakeCluster()


@pytest.fixture
def images() -> FakeImages:
    return FakeImages()
