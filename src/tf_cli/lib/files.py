"""Local filesystem helpers for the project and scratch workspace."""

import shutil
from pathlib import Path


def write(path: Path, data: str) -> None:
    """Write data to file, creating parent dirs if needed."""
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(data)


def remove_tree(path: Path) -> bool:
    """Delete a directory tree if it exists. Returns True if something was removed."""
    if not path.exists():
        return False
    shutil.rmtree(path)
    return True


def recreate_dir(path: Path) -> None:
    """Delete path if present and create it empty."""
    remove_tree(path)
    path.mkdir(parents=True)


def copy_tree(src: Path, dst: Path, ignore: tuple[str, ...] = ()) -> None:
    """Recursively copy src into dst, merging with existing content."""
    shutil.copytree(
        src,
        dst,
        ignore=shutil.ignore_patterns(*ignore) if ignore else None,
        symlinks=True,
        dirs_exist_ok=True,
    )


def copy_if_missing(src: Path, dst: Path) -> bool:
    """Copy src to dst unless dst exists. Returns True if copied."""
    if dst.exists():
        return False
    dst.parent.mkdir(parents=True, exist_ok=True)
    shutil.copy2(src, dst)
    return True


def copy_file(src: Path, dst: Path) -> None:
    """Copy src to dst, overwriting dst."""
    dst.parent.mkdir(parents=True, exist_ok=True)
    shutil.copy2(src, dst)
