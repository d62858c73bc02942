import os
import typing as t
from pathlib import Path

import pytest

from modelpack._internal.containerize import WorkspaceEntry

# Enable vscode debugger to catch exc
if os.getenv("_PYTEST_RAISE", "0") != "0":

    @pytest.hookimpl(tryfirst=True)
    def pytest_exception_interact(call):
        raise call.excinfo.value

    @pytest.hookimpl(tryfirst=True)
    def pytest_internalerror(excinfo):
        raise excinfo.value


@pytest.fixture
def build_dir(tmp_path: Path) -> Path:
    d = tmp_path / "build"
    d.mkdir()
    return d


@pytest.fixture
def make_workspace(build_dir: Path) -> t.Callable[[t.Dict[str, int]], Path]:
    """
    Create files under the build dir.

    Keys are paths relative to the build dir and values are file sizes in bytes.
    """

    def make(files: t.Dict[str, int]) -> Path:
        for rel_path, size in files.items():
            path = build_dir / rel_path
            path.parent.mkdir(parents=True, exist_ok=True)
            path.write_bytes(b"x" * size)
        return build_dir

    return make


@pytest.fixture
def make_entries(build_dir: Path) -> t.Callable[..., t.List[WorkspaceEntry]]:
    def make(*names: str) -> t.List[WorkspaceEntry]:
        return [WorkspaceEntry.from_path(build_dir / name) for name in names]

    return make
