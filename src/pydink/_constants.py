"""Internal constants shared across the library."""

DEFAULT_MANIFEST_FILE = "modules.json"
LOCK_FILE = "modules-lock.json"
VENDOR_DIR = "vendor"
USER_AGENT = "pydink"

# Upper bound on a fetched source file, in bytes.
MAX_CONTENT_LENGTH = 10_000_000

# Local binding name used when re-exporting a remote default export.
DEFAULT_EXPORT_ALIAS = "dew"
