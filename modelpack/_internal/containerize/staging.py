import shutil
import tempfile
import typing as t
from pathlib import Path, PurePosixPath

import attrs

from modelpack import exceptions
from modelpack._internal.constants import STAGED_FILES_DIR_IN_CONTAINER, STAGING_ROOT_REL_PATH
from modelpack._internal.logging import log_debug


def _is_abs_path(instance, attribute, value: Path):
    if not value.is_absolute():
        raise ValueError(f"'{attribute.name}' should be an absolute path, not '{value}'")


@attrs.define
class StagingDir:
    # {build_dir}
    # ├─ .modelpack
    # │   └─ tmp
    # │      └─ build{random}
    # │         ├─ requirements.txt
    # │         └─ {runtime wheel}
    # └─ ...

    abs_path_to_build_dir: Path = attrs.field(
        validator=[attrs.validators.instance_of(Path), _is_abs_path]
    )
    abs_path: Path = attrs.field(init=False)

    @classmethod
    def create(cls, build_dir: Path) -> "StagingDir":
        staging = cls(abs_path_to_build_dir=build_dir.resolve())
        root = staging.abs_path_to_build_dir / STAGING_ROOT_REL_PATH
        try:
            root.mkdir(parents=True, exist_ok=True)
            staging.abs_path = Path(tempfile.mkdtemp(prefix="build", dir=root))
        except OSError as e:
            raise exceptions.BuildError(f"Failed to create a staging dir in {root}: {e}") from e
        log_debug(f"Staging dir: {staging.abs_path}", pretty=False)
        return staging

    @property
    def rel_path(self) -> PurePosixPath:
        return PurePosixPath(self.abs_path.relative_to(self.abs_path_to_build_dir).as_posix())

    def write(self, filename: str, contents: t.Union[str, bytes]) -> t.Tuple[t.List[str], str]:
        """
        Write a file used during the build.

        Returns the Dockerfile lines making the file available in the image
        and the path of the file in the image.
        """
        path = self.abs_path / filename
        try:
            path.parent.mkdir(parents=True, exist_ok=True)
            if isinstance(contents, str):
                path.write_text(contents)
            else:
                path.write_bytes(contents)
        except OSError as e:
            raise exceptions.BuildError(f"Failed to write {filename}: {e}") from e

        path_in_container = (STAGED_FILES_DIR_IN_CONTAINER / filename).as_posix()
        lines = [f"COPY {(self.rel_path / filename).as_posix()} {path_in_container}"]
        return lines, path_in_container

    def cleanup(self) -> None:
        try:
            shutil.rmtree(self.abs_path)
        except FileNotFoundError:
            pass
        except OSError as e:
            raise exceptions.BuildError(f"Failed to clean up {self.abs_path}: {e}") from e
