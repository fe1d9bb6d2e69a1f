"""Map host identifiers and module names onto the vendor directory.

``https://deno.land/std@`` + ``/fs/mod.ts`` lands at
``vendor/https/deno.land/std@/fs/mod.ts``.
"""

from __future__ import annotations

import posixpath
from pathlib import Path, PurePosixPath

from yarl import URL

from pydink.exceptions import DinkPathError


def _host_parts(host: str) -> tuple[str, ...]:
    url = URL(host)
    parts = [url.scheme, url.raw_host or ""]
    parts.extend(p for p in url.raw_path.split("/") if p)
    return tuple(parts)


def host_directory(vendor_dir: Path, host: str) -> Path:
    """Directory under *vendor_dir* that holds every module of *host*."""
    return vendor_dir.joinpath(*_host_parts(host))


def resolve_module_path(vendor_dir: Path, host: str, module: str) -> Path:
    """Return the shim path for *module* of *host* below *vendor_dir*.

    Leading slashes are ignored so absolute-looking module names still
    join under the host directory.
    """
    prefix = _host_parts(host)
    relative = posixpath.normpath(posixpath.join(*prefix, module.lstrip("/")))
    parts = PurePosixPath(relative).parts
    if len(parts) <= len(prefix) or parts[: len(prefix)] != prefix:
        raise DinkPathError(f"module {module!r} of {host} resolves outside its host directory")
    return vendor_dir.joinpath(*parts)


def is_contained_module(host: str, module: str) -> bool:
    """Return ``True`` if *module* stays inside the directory of *host*."""
    try:
        resolve_module_path(Path(), host, module)
    except DinkPathError:
        return False
    return True
