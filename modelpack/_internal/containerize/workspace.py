import os
import typing as t
from pathlib import Path

import attrs
from pathspec import PathSpec

from modelpack import exceptions
from modelpack._internal.constants import STAGING_ROOT_REL_PATH
from modelpack._internal.logging import log_debug
from modelpack._internal.utils.file import format_file_size, get_tree_size_in_bytes


@attrs.frozen
class WorkspaceEntry:
    """A top-level file or directory of a build directory."""

    name: str
    is_dir: bool
    path: Path

    @classmethod
    def from_path(cls, path: Path) -> "WorkspaceEntry":
        return cls(
            name=path.name,
            is_dir=path.is_dir() and not path.is_symlink(),
            path=path,
        )

    def get_size(self) -> int:
        if self.is_dir:
            return get_tree_size_in_bytes(self.path)
        return self.path.lstat().st_size


@attrs.frozen
class SizeBuckets:
    small_files: t.Tuple[str, ...] = ()
    large_files: t.Tuple[str, ...] = ()
    small_dirs: t.Tuple[str, ...] = ()
    large_dirs: t.Tuple[str, ...] = ()


def list_workspace_entries(
    build_dir: Path, exclude_files: t.Iterable[str] = ()
) -> t.List[WorkspaceEntry]:
    """
    List the top level of ``build_dir`` sorted by name.

    Entries matching a gitwildmatch pattern in ``exclude_files`` are skipped,
    as is the staging directory.
    """
    exclude_spec = PathSpec.from_lines(
        "gitwildmatch", list(exclude_files) + [STAGING_ROOT_REL_PATH.parts[0] + "/"]
    )
    try:
        names = sorted(os.listdir(build_dir))
    except OSError as e:
        raise exceptions.WorkspaceReadError(f"Failed to list '{build_dir}': {e}") from e

    entries = []
    for name in names:
        entry = WorkspaceEntry.from_path(build_dir / name)
        rel_path = name + "/" if entry.is_dir else name
        if exclude_spec.match_file(rel_path):
            log_debug(f"Skip excluded workspace entry: {rel_path}", pretty=False)
            continue
        entries.append(entry)
    return entries


def classify_by_size(threshold: int, entries: t.Iterable[WorkspaceEntry]) -> SizeBuckets:
    """
    Split workspace entries into small files, large files, small dirs and large dirs.

    An entry is small if its size is at most ``threshold`` bytes. The size of a
    directory is the total size of the files under it. Each bucket keeps the
    order of ``entries``.

    Sizes are read from the filesystem without locking. If the directory tree
    changes during the call, the sizes may be inconsistent; callers that
    mutate the tree concurrently are responsible for serializing access.

    Raises:
        InvalidConfiguration: ``threshold`` is negative.
        WorkspaceReadError: the size of an entry could not be read.
    """
    if threshold < 0:
        raise exceptions.InvalidConfiguration(
            f"File size threshold should be non-negative, not {threshold}"
        )

    small_files: t.List[str] = []
    large_files: t.List[str] = []
    small_dirs: t.List[str] = []
    large_dirs: t.List[str] = []
    for entry in entries:
        try:
            size = entry.get_size()
        except OSError as e:
            raise exceptions.WorkspaceReadError(
                f"Failed to read the size of '{entry.path}': {e}"
            ) from e

        log_debug(f"{entry.name}: {format_file_size(size)}", pretty=False)
        if entry.is_dir:
            bucket = small_dirs if size <= threshold else large_dirs
        else:
            bucket = small_files if size <= threshold else large_files
        bucket.append(entry.name)

    return SizeBuckets(
        small_files=tuple(small_files),
        large_files=tuple(large_files),
        small_dirs=tuple(small_dirs),
        large_dirs=tuple(large_dirs),
    )
