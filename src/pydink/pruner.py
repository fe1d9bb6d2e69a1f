"""Remove shims that the manifest no longer asks for."""

from __future__ import annotations

import asyncio
import logging
from pathlib import Path

from pydink._concurrency import run_all
from pydink._fs import async_remove_empty_parents, async_remove_file
from pydink.models.manifest import Manifest
from pydink.paths import resolve_module_path

_logger = logging.getLogger(__name__)


def obsolete_paths(manifest: Manifest, lock: Manifest, vendor_dir: Path) -> list[Path]:
    """Return shim paths recorded in *lock* that *manifest* dropped.

    A host missing from *manifest* loses every module; a host still
    present loses only the modules taken out of its list.  A version
    change alone never makes a module obsolete.
    """
    paths: list[Path] = []
    for host, locked in lock.items():
        wanted = manifest.get(host)
        if wanted is None:
            removed = list(dict.fromkeys(locked.modules))
        else:
            keep = set(wanted.modules)
            removed = [m for m in dict.fromkeys(locked.modules) if m not in keep]
        paths.extend(resolve_module_path(vendor_dir, host, m) for m in removed)
    return paths


class Pruner:
    """Delete obsolete shims and the directories they leave empty."""

    def __init__(self, vendor_dir: Path) -> None:
        self._vendor_dir = vendor_dir
        self._cleanup_lock = asyncio.Lock()

    async def _remove(self, path: Path) -> bool:
        if not await async_remove_file(path):
            return False
        # Directory walks are serialized so sibling removals can't both
        # decide a shared parent is theirs to delete.
        async with self._cleanup_lock:
            dirs = await async_remove_empty_parents(path, self._vendor_dir)
        for directory in dirs:
            _logger.debug("Removed empty directory %s", directory)
        _logger.info("Removed: %s", path)
        return True

    async def prune(self, manifest: Manifest, lock: Manifest) -> list[Path]:
        """Delete everything :func:`obsolete_paths` reports.

        Returns the files that were actually removed; paths already gone
        are skipped.
        """
        candidates = list(dict.fromkeys(obsolete_paths(manifest, lock, self._vendor_dir)))
        results = await run_all(self._remove(p) for p in candidates)
        return [path for path, removed in zip(candidates, results) if removed]
