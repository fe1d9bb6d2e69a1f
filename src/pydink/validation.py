"""Structural validation for manifest and lock documents.

Validation never raises for a bad document.  It returns either
:class:`Valid` carrying the typed manifest or :class:`Invalid` carrying
the reasons, and callers branch on which one they got::

    result = validate_manifest(json.loads(text))
    if isinstance(result, Invalid):
        ...
"""

from __future__ import annotations

import json
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any

from yarl import URL

from pydink.exceptions import DinkManifestNotFoundError
from pydink.models.manifest import Manifest, ModuleEntry
from pydink.paths import is_contained_module


@dataclass(frozen=True, slots=True)
class Valid:
    manifest: Manifest


@dataclass(frozen=True, slots=True)
class Invalid:
    errors: list[str] = field(default_factory=list)

    def reason(self) -> str:
        return ",".join(self.errors)


ValidationResult = Valid | Invalid


def is_host_identifier(value: str) -> bool:
    """Return ``True`` when *value* parses as an absolute URL with a host."""
    try:
        url = URL(value)
    except (TypeError, ValueError):
        return False
    return url.is_absolute() and bool(url.scheme) and bool(url.raw_host)


def _check_entry(host: str, entry: Any) -> str | None:
    """Return the first problem with one manifest entry, or ``None``."""
    if not is_host_identifier(host):
        return f"{host}: host must be an absolute URL"
    if not isinstance(entry, dict):
        return f'{host}: entry must be object'
    if not isinstance(entry.get("version"), str):
        return f'{host}: "version" must be string'
    modules = entry.get("modules")
    if not isinstance(modules, list):
        return f'{host}: "modules" must be array'
    for mod in modules:
        if not isinstance(mod, str):
            return f'{host}: content of "modules" must be string'
        if not is_contained_module(host, mod):
            return f"{host}: module {mod!r} resolves outside its host directory"
    return None


def validate_manifest(doc: Any) -> ValidationResult:
    """Validate an arbitrary decoded JSON document as a manifest.

    Stops at the first offending entry.  The same check applies to lock
    files, which share the manifest's shape.
    """
    if not isinstance(doc, dict):
        return Invalid(["is not object"])

    manifest: Manifest = {}
    for host, entry in doc.items():
        problem = _check_entry(host, entry)
        if problem is not None:
            return Invalid([problem])
        manifest[host] = ModuleEntry(version=entry["version"], modules=tuple(entry["modules"]))
    return Valid(manifest)


def parse_manifest_text(text: str) -> ValidationResult:
    """Decode *text* as JSON and validate it."""
    try:
        doc = json.loads(text)
    except json.JSONDecodeError as exc:
        return Invalid([f"invalid JSON: {exc}"])
    return validate_manifest(doc)


def parse_manifest_bytes(data: bytes) -> ValidationResult:
    """Decode *data* as UTF-8 JSON and validate it."""
    try:
        text = data.decode("utf-8")
    except UnicodeDecodeError as exc:
        return Invalid([f"invalid UTF-8: {exc}"])
    return parse_manifest_text(text)


def load_manifest(path: Path) -> ValidationResult:
    """Read and validate the manifest at *path*.

    Raises
    ------
    DinkManifestNotFoundError
        If *path* does not exist.
    """
    try:
        data = path.read_bytes()
    except FileNotFoundError as exc:
        raise DinkManifestNotFoundError(f"{path} does not exist", path=str(path)) from exc
    return parse_manifest_bytes(data)
