import os
from pathlib import Path

import pytest

from modelpack import exceptions
from modelpack._internal.containerize import (
    WorkspaceEntry,
    classify_by_size,
    list_workspace_entries,
)


def test_size_equal_to_threshold_is_small(make_workspace, make_entries):
    make_workspace({"exact.bin": 100, "over.bin": 101})
    buckets = classify_by_size(100, make_entries("exact.bin", "over.bin"))
    assert buckets.small_files == ("exact.bin",)
    assert buckets.large_files == ("over.bin",)


def test_dir_size_is_sum_of_descendants(make_workspace, make_entries):
    make_workspace({"data/a": 50, "data/b": 60})
    buckets = classify_by_size(100, make_entries("data"))
    assert buckets.large_dirs == ("data",)
    assert buckets.small_dirs == ()


def test_dir_size_includes_nested_dirs(make_workspace, make_entries):
    make_workspace({"data/a": 40, "data/nested/deeper/b": 40, "data/nested/c": 40})
    assert classify_by_size(119, make_entries("data")).large_dirs == ("data",)
    assert classify_by_size(120, make_entries("data")).small_dirs == ("data",)


def test_empty_dir_is_small(build_dir: Path, make_entries):
    (build_dir / "empty").mkdir()
    buckets = classify_by_size(0, make_entries("empty"))
    assert buckets.small_dirs == ("empty",)


def test_buckets_partition_entries_in_order(make_workspace, make_entries):
    make_workspace(
        {
            "z_small.py": 1,
            "big.ckpt": 500,
            "a_small.py": 2,
            "weights/w1": 300,
            "src/main.py": 10,
            "huge.onnx": 1000,
            "configs/x.yaml": 5,
        }
    )
    names = ["z_small.py", "big.ckpt", "a_small.py", "weights", "src", "huge.onnx", "configs"]
    buckets = classify_by_size(100, make_entries(*names))

    assert buckets.small_files == ("z_small.py", "a_small.py")
    assert buckets.large_files == ("big.ckpt", "huge.onnx")
    assert buckets.small_dirs == ("src", "configs")
    assert buckets.large_dirs == ("weights",)

    all_names = (
        buckets.small_files + buckets.large_files + buckets.small_dirs + buckets.large_dirs
    )
    assert sorted(all_names) == sorted(names)


def test_no_entries():
    buckets = classify_by_size(100, [])
    assert buckets.small_files == buckets.large_files == ()
    assert buckets.small_dirs == buckets.large_dirs == ()


def test_negative_threshold_is_rejected(make_workspace, make_entries):
    make_workspace({"a.py": 1})
    with pytest.raises(exceptions.InvalidConfiguration):
        classify_by_size(-1, make_entries("a.py"))


def test_missing_file_raises_read_error(build_dir: Path):
    entry = WorkspaceEntry(name="ghost", is_dir=False, path=build_dir / "ghost")
    with pytest.raises(exceptions.WorkspaceReadError) as exc_info:
        classify_by_size(100, [entry])
    assert isinstance(exc_info.value, OSError)
    assert isinstance(exc_info.value.__cause__, FileNotFoundError)


def test_missing_dir_aborts_classification(make_workspace, build_dir: Path):
    make_workspace({"a.py": 1})
    entries = [
        WorkspaceEntry.from_path(build_dir / "a.py"),
        WorkspaceEntry(name="gone", is_dir=True, path=build_dir / "gone"),
    ]
    with pytest.raises(exceptions.WorkspaceReadError):
        classify_by_size(100, entries)


def test_symlinks_are_not_followed(make_workspace, build_dir: Path, make_entries):
    make_workspace({"real/big.bin": 1000})
    os.symlink(build_dir / "real" / "big.bin", build_dir / "link.bin")
    os.symlink(build_dir / "real", build_dir / "linkdir")

    entries = make_entries("link.bin", "linkdir")
    assert [e.is_dir for e in entries] == [False, False]

    buckets = classify_by_size(500, entries)
    assert buckets.small_files == ("link.bin", "linkdir")


def test_list_workspace_entries_sorted_by_name(make_workspace, build_dir: Path):
    make_workspace({"b.py": 1, "a.py": 1, "c/d.py": 1, "B.txt": 1})
    entries = list_workspace_entries(build_dir)
    assert [e.name for e in entries] == ["B.txt", "a.py", "b.py", "c"]
    assert [e.is_dir for e in entries] == [False, False, False, True]
    assert all(e.path == build_dir / e.name for e in entries)


def test_list_workspace_entries_skips_excluded(make_workspace, build_dir: Path):
    make_workspace(
        {
            "main.py": 1,
            "main.pyc": 1,
            "data/x": 1,
            "notes/data": 1,
            ".modelpack/tmp/build123/requirements.txt": 1,
        }
    )
    entries = list_workspace_entries(build_dir, exclude_files=["*.pyc", "data/"])
    assert [e.name for e in entries] == ["main.py", "notes"]


def test_list_workspace_entries_missing_dir(tmp_path: Path):
    with pytest.raises(exceptions.WorkspaceReadError):
        list_workspace_entries(tmp_path / "missing")
