"""Manifest and lock-state models.

A manifest and a lock file share one shape: a JSON object mapping a
host identifier (an absolute URL used as a namespace prefix) to a
:class:`ModuleEntry`.  Both are represented in memory as
:data:`Manifest`, a plain ``dict`` whose insertion order follows the
source document.
"""

from __future__ import annotations

from typing import Any

from pydantic import BaseModel, ConfigDict


class ModuleEntry(BaseModel):
    """All sub-modules vendored from one host at one version.

    ``modules`` are relative paths resolved against the host's URL path.
    Duplicates are tolerated; they simply resolve to the same file.
    """

    model_config = ConfigDict(
        frozen=True,
        extra="ignore",
    )

    version: str
    modules: tuple[str, ...] = ()


Manifest = dict[str, ModuleEntry]
"""Host identifier → :class:`ModuleEntry`."""


def manifest_to_json(manifest: Manifest) -> dict[str, Any]:
    """Return the JSON-ready form of *manifest*, preserving key order."""
    return {host: entry.model_dump(mode="json") for host, entry in manifest.items()}
