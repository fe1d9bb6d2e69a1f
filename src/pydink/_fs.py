"""Blocking filesystem primitives and their event-loop wrappers.

Every function with an ``async_`` prefix runs its blocking counterpart
in the loop's default executor.
"""

from __future__ import annotations

import asyncio
import contextlib
import errno
import functools
import os
import tempfile
from collections.abc import Callable
from pathlib import Path
from typing import TypeVar

T = TypeVar("T")


async def run_blocking(fn: Callable[..., T], *args: object) -> T:
    loop = asyncio.get_running_loop()
    return await loop.run_in_executor(None, functools.partial(fn, *args))


def write_text_atomic(path: Path, text: str) -> None:
    """Replace *path* with *text* without exposing a half-written file.

    The content goes to a temporary file in the same directory which is
    then renamed over *path*.  The temporary file is removed if anything
    fails before the rename.
    """
    path.parent.mkdir(parents=True, exist_ok=True)
    fd, tmp_name = tempfile.mkstemp(dir=path.parent, prefix=f".{path.name}.", suffix=".tmp")
    try:
        with os.fdopen(fd, "w", encoding="utf-8", newline="") as fh:
            fh.write(text)
        # mkstemp creates files as 0600
        os.chmod(tmp_name, 0o644)
        os.replace(tmp_name, path)
    except BaseException:
        with contextlib.suppress(FileNotFoundError):
            os.unlink(tmp_name)
        raise


def remove_file(path: Path) -> bool:
    """Delete *path*; return ``False`` if it was already gone."""
    try:
        path.unlink()
    except FileNotFoundError:
        return False
    return True


def remove_empty_parents(path: Path, stop: Path) -> list[Path]:
    """Remove empty ancestors of *path* up to, but not including, *stop*.

    The walk ends at the first directory that still has entries.  A
    directory that has already disappeared is skipped.
    """
    removed: list[Path] = []
    stop = Path(os.path.abspath(stop))
    directory = Path(os.path.abspath(path.parent))
    while directory != stop and stop in directory.parents:
        try:
            directory.rmdir()
        except FileNotFoundError:
            pass
        except OSError as exc:
            if exc.errno in (errno.ENOTEMPTY, errno.EEXIST):
                break
            raise
        else:
            removed.append(directory)
        directory = directory.parent
    return removed


async def async_exists(path: Path) -> bool:
    return await run_blocking(path.exists)


async def async_write_text_atomic(path: Path, text: str) -> None:
    await run_blocking(write_text_atomic, path, text)


async def async_remove_file(path: Path) -> bool:
    return await run_blocking(remove_file, path)


async def async_remove_empty_parents(path: Path, stop: Path) -> list[Path]:
    return await run_blocking(remove_empty_parents, path, stop)
