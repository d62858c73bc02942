import os
from pathlib import Path


def format_file_size(size_in_bytes: int, suffix="B"):
    num = float(size_in_bytes)
    for unit in ["", "K", "M", "G", "T", "P", "E", "Z"]:
        if abs(num) < 1024.0:
            return f"{num:3.1f}{unit}{suffix}"
        num /= 1024.0
    return f"{num:.1f}Y{suffix}"


def get_tree_size_in_bytes(root_dir: Path) -> int:
    """
    Sum the sizes of all non-directory descendants of ``root_dir``.

    Symlinks are not followed and count as their own size.
    Any ``OSError`` raised while walking is propagated.
    """
    size = 0
    with os.scandir(root_dir) as it:
        for entry in it:
            if entry.is_dir(follow_symlinks=False):
                size += get_tree_size_in_bytes(Path(entry.path))
            else:
                size += entry.stat(follow_symlinks=False).st_size
    return size

