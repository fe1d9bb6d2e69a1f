"""Write re-export shims for remote modules."""

from __future__ import annotations

import logging
import re
from pathlib import Path

from pydink._constants import DEFAULT_EXPORT_ALIAS
from pydink._fs import async_exists, async_write_text_atomic
from pydink._transport import Fetcher
from pydink.models.manifest import Manifest
from pydink.models.report import LinkResult
from pydink.paths import resolve_module_path

_logger = logging.getLogger(__name__)

# Rough textual search, not a parse.  Obfuscated declarations are missed.
_DEFAULT_EXPORT_RE = re.compile(r"\bexport\s+default\s")


def has_default_export(code: str) -> bool:
    """Return ``True`` if *code* looks like it declares a default export."""
    return _DEFAULT_EXPORT_RE.search(code) is not None


def render_shim(url: str, *, default_export: bool) -> str:
    """Build the shim that re-exports everything from *url*.

    ``export *`` does not carry a default export along, so one is
    re-bound explicitly when the remote module has it.
    """
    shim = f'export * from "{url}";\n'
    if default_export:
        shim += f'import {{default as {DEFAULT_EXPORT_ALIAS}}} from "{url}";\n'
        shim += f"export default {DEFAULT_EXPORT_ALIAS};\n"
    return shim


def build_specifier(host: str, version: str, module: str) -> str:
    """Remote URL of *module*: host, version and module concatenated."""
    return f"{host}{version}{module}"


class Linker:
    """Link one (host, version, module) triple into the vendor directory."""

    def __init__(self, fetcher: Fetcher, vendor_dir: Path) -> None:
        self._fetcher = fetcher
        self._vendor_dir = vendor_dir

    async def link(self, host: str, version: str, module: str, lock: Manifest) -> LinkResult:
        """Ensure the shim for *module* exists and matches *version*.

        An existing shim is kept as-is when the lock records the same
        version for *host*; otherwise the remote file is fetched and the
        shim rewritten.
        """
        target = resolve_module_path(self._vendor_dir, host, module)
        specifier = build_specifier(host, version, module)

        locked = lock.get(host)
        effective_version = locked.version if locked is not None else version

        if version == effective_version and await async_exists(target):
            _logger.debug("Linked: %s -> %s", specifier, target)
            return LinkResult(specifier=specifier, path=target, fetched=False)

        source = await self._fetcher.fetch(specifier)
        default_export = has_default_export(source.text)
        await async_write_text_atomic(target, render_shim(source.url, default_export=default_export))

        _logger.info("Linked: %s -> %s", specifier, target)
        return LinkResult(
            specifier=specifier,
            path=target,
            fetched=True,
            has_default_export=default_export,
        )
