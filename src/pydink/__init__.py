"""pydink - vendor remote ES modules as local re-export shims."""

from importlib.metadata import PackageNotFoundError, version

try:
    __version__ = version("pydink")
except PackageNotFoundError:
    __version__ = "0+local"
from pydink.client import DinkClient
from pydink.config import DinkConfig
from pydink.exceptions import (
    DinkConfigError,
    DinkContentTooLargeError,
    DinkError,
    DinkInputError,
    DinkLockFileError,
    DinkManifestError,
    DinkManifestNotFoundError,
    DinkPathError,
    DinkTransportError,
)
from pydink.lock import LockStore
from pydink.models import LinkResult, Manifest, ModuleEntry, ReconcileReport
from pydink.reconciler import Reconciler
from pydink.validation import Invalid, Valid, load_manifest, validate_manifest

__all__ = [
    "__version__",
    "DinkClient",
    "DinkConfig",
    "DinkConfigError",
    "DinkContentTooLargeError",
    "DinkError",
    "DinkInputError",
    "DinkLockFileError",
    "DinkManifestError",
    "DinkManifestNotFoundError",
    "DinkPathError",
    "DinkTransportError",
    "Invalid",
    "LinkResult",
    "LockStore",
    "Manifest",
    "ModuleEntry",
    "ReconcileReport",
    "Reconciler",
    "Valid",
    "load_manifest",
    "validate_manifest",
]
