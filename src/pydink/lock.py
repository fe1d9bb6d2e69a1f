"""Persistent lock state.

The lock file records the manifest of the last successful run.  It is
read once before reconciliation and rewritten, whole, after it.
"""

from __future__ import annotations

import json
import logging
from pathlib import Path

from pydink._fs import write_text_atomic
from pydink.exceptions import DinkLockFileError
from pydink.models.manifest import Manifest, manifest_to_json
from pydink.validation import Invalid, parse_manifest_bytes

_logger = logging.getLogger(__name__)


def dump_lock(manifest: Manifest) -> str:
    """Serialize *manifest* the way the lock file stores it."""
    return json.dumps(manifest_to_json(manifest), indent=2, ensure_ascii=False) + "\n"


class LockStore:
    """Load and save the lock file at a fixed path."""

    def __init__(self, path: Path) -> None:
        self._path = path

    @property
    def path(self) -> Path:
        return self._path

    def load(self) -> Manifest:
        """Return the recorded lock state.

        A missing file is an empty lock (first run).  A file that exists
        but fails validation raises :class:`DinkLockFileError`.
        """
        try:
            data = self._path.read_bytes()
        except FileNotFoundError:
            _logger.debug("No lock file at %s", self._path)
            return {}

        result = parse_manifest_bytes(data)
        if isinstance(result, Invalid):
            raise DinkLockFileError(
                f"lock file may be saved as invalid format: {result.reason()}",
                errors=result.errors,
            )
        return result.manifest

    def save(self, manifest: Manifest) -> None:
        """Replace the lock file with *manifest*."""
        write_text_atomic(self._path, dump_lock(manifest))
        _logger.debug("Wrote lock file %s (%d hosts)", self._path, len(manifest))
