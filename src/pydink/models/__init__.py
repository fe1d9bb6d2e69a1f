"""Typed models for manifests, lock state and run reports."""

from pydink.models.manifest import Manifest, ModuleEntry, manifest_to_json
from pydink.models.report import LinkResult, ReconcileReport

__all__ = [
    "LinkResult",
    "Manifest",
    "ModuleEntry",
    "ReconcileReport",
    "manifest_to_json",
]
