"""High-level async entry point for vendoring a manifest."""

from __future__ import annotations

import logging
from typing import Any

import aiohttp

from pydink._transport import HttpFetcher
from pydink.config import DinkConfig
from pydink.exceptions import DinkError, DinkManifestError
from pydink.models.manifest import Manifest
from pydink.models.report import ReconcileReport
from pydink.reconciler import Reconciler
from pydink.validation import Invalid, load_manifest

_logger = logging.getLogger(__name__)


class DinkClient:
    """Async client that vendors remote modules into a project.

    Usage::

        async with DinkClient(DinkConfig(root=project)) as client:
            report = await client.ensure_from_file()
    """

    def __init__(
        self,
        config: DinkConfig,
        *,
        session: aiohttp.ClientSession | None = None,
    ) -> None:
        self._config = config
        self._external_session = session is not None
        self._http_session = session
        self._reconciler: Reconciler | None = None

    # ------------------------------------------------------------------
    # Context manager lifecycle
    # ------------------------------------------------------------------

    async def __aenter__(self) -> DinkClient:
        if self._http_session is None:
            self._http_session = aiohttp.ClientSession()
        self._reconciler = Reconciler(self._config, HttpFetcher(self._config, self._http_session))
        return self

    async def __aexit__(self, *exc: Any) -> None:
        if not self._external_session and self._http_session is not None:
            await self._http_session.close()
            self._http_session = None
        self._reconciler = None

    # ------------------------------------------------------------------
    # Public API
    # ------------------------------------------------------------------

    @property
    def config(self) -> DinkConfig:
        return self._config

    def _require_reconciler(self) -> Reconciler:
        if self._reconciler is None:
            raise DinkError("Client not initialized. Use 'async with DinkClient(...) as client:'")
        return self._reconciler

    async def ensure(self, manifest: Manifest) -> ReconcileReport:
        """Reconcile the vendor directory and lock file with *manifest*."""
        return await self._require_reconciler().reconcile(manifest)

    async def ensure_from_file(self) -> ReconcileReport:
        """Load the configured manifest file and reconcile against it.

        Raises
        ------
        DinkManifestNotFoundError
            If the manifest file does not exist.
        DinkManifestError
            If the manifest fails validation.
        """
        path = self._config.manifest_path
        result = load_manifest(path)
        if isinstance(result, Invalid):
            raise DinkManifestError(f"{path} has syntax error: {result.reason()}", errors=result.errors)
        _logger.debug("Loaded manifest %s (%d hosts)", path, len(result.manifest))
        return await self.ensure(result.manifest)
