"""Prompting and file-tree helpers."""

from __future__ import annotations

import os
import shutil
import stat
import sys
from collections.abc import Iterator


def prompt(text: str, default_value: str) -> str:
    """Print text and return the line the user typed, or the default if empty."""
    print(text, end="", flush=True)
    line = sys.stdin.readline()
    if not line:
        return default_value
    line = line.removesuffix("\n").removesuffix("\r")
    return line or default_value


def _walk(path: str, strict: bool) -> Iterator[tuple[str, os.stat_result]]:
    """Yield (path, lstat) in lexical order, not following symlinks."""
    try:
        info = os.lstat(path)
    except OSError:
        if strict:
            raise
        return
    yield path, info
    if not stat.S_ISDIR(info.st_mode):
        return
    try:
        names = sorted(os.listdir(path))
    except OSError:
        if strict:
            raise
        return
    for name in names:
        yield from _walk(os.path.normpath(os.path.join(path, name)), strict)


def get_files(path: str, extension: str) -> list[str]:
    """All non-hidden files under path, optionally ending with extension."""
    return [
        p
        for p, info in _walk(path, strict=False)
        if not stat.S_ISDIR(info.st_mode)
        and not os.path.basename(p).startswith(".")
        and os.path.basename(p).endswith(extension)
    ]


def copy_files(src: str, dst: str) -> None:
    """Copy a file or directory tree, keeping modes and symlinks."""
    for path, info in _walk(src, strict=True):
        relative = path[len(src):] if path.startswith(src) else path
        outpath = os.path.normpath(os.path.join(dst, relative.lstrip(os.sep + "/")))
        mode = info.st_mode

        if stat.S_ISDIR(mode):
            try:
                os.makedirs(outpath, stat.S_IMODE(mode), exist_ok=True)
            except OSError:
                pass
            continue

        if stat.S_ISLNK(mode):
            os.symlink(os.readlink(path), outpath)
            continue
        if not stat.S_ISREG(mode):
            continue

        with open(path, "rb") as source, open(outpath, "wb") as target:
            try:
                os.chmod(outpath, stat.S_IMODE(mode))
            except OSError:
                pass
            shutil.copyfileobj(source, target)