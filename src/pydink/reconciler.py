"""Bring the vendor directory and lock file in line with a manifest."""

from __future__ import annotations

import logging

from pydink._concurrency import run_all
from pydink._fs import run_blocking
from pydink._transport import Fetcher
from pydink.config import DinkConfig
from pydink.linker import Linker
from pydink.lock import LockStore
from pydink.models.manifest import Manifest
from pydink.models.report import ReconcileReport
from pydink.paths import resolve_module_path
from pydink.pruner import Pruner

_logger = logging.getLogger(__name__)


class Reconciler:
    """Run load-lock → prune → link → save-lock for one manifest.

    Any failure propagates immediately and leaves the lock file as it
    was.  Side effects that already happened (removed or rewritten
    shims) are not rolled back; running again converges because
    unchanged shims are not fetched twice.
    """

    def __init__(
        self,
        config: DinkConfig,
        fetcher: Fetcher,
        *,
        lock_store: LockStore | None = None,
    ) -> None:
        self._config = config
        self._lock_store = lock_store or LockStore(config.lock_path)
        self._pruner = Pruner(config.vendor_path)
        self._linker = Linker(fetcher, config.vendor_path)

    @property
    def lock_store(self) -> LockStore:
        return self._lock_store

    async def reconcile(self, manifest: Manifest) -> ReconcileReport:
        # Manifests built in code skip validation; a bad module path must
        # fail here, before pruning has deleted anything.
        for host, entry in manifest.items():
            for module in entry.modules:
                resolve_module_path(self._config.vendor_path, host, module)

        lock = await run_blocking(self._lock_store.load)

        # Pruning, including its directory cleanup, finishes before any
        # shim is written so the two never touch the same tree at once.
        removed = await self._pruner.prune(manifest, lock)

        links = await run_all(
            self._linker.link(host, entry.version, module, lock)
            for host, entry in manifest.items()
            for module in dict.fromkeys(entry.modules)
        )

        await run_blocking(self._lock_store.save, manifest)
        _logger.debug(
            "Reconciled %d hosts: %d removed, %d fetched",
            len(manifest),
            len(removed),
            sum(1 for link in links if link.fetched),
        )
        return ReconcileReport(removed=removed, links=links)
