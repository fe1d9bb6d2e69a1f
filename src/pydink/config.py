"""Tool configuration for pydink."""

from __future__ import annotations

import dataclasses
import os
from pathlib import Path
from typing import Any

from pydink._constants import DEFAULT_MANIFEST_FILE, LOCK_FILE, MAX_CONTENT_LENGTH, VENDOR_DIR
from pydink.exceptions import DinkConfigError


def _env_int(name: str, value: str) -> int:
    try:
        return int(value)
    except ValueError as exc:
        raise DinkConfigError(f"{name} must be an integer, got {value!r}") from exc


def _env_float(name: str, value: str) -> float:
    try:
        return float(value)
    except ValueError as exc:
        raise DinkConfigError(f"{name} must be a number, got {value!r}") from exc


@dataclasses.dataclass(frozen=True)
class DinkConfig:
    """Reconciliation configuration.

    Every path the tool touches is derived from this object; inner
    components never consult the working directory on their own.

    Parameters
    ----------
    root : Path
        Project directory. Manifest, lock file and vendor directory
        are resolved relative to it.
    manifest_file : str
        Manifest path, relative to ``root`` unless absolute.
    lock_file : str
        Lock file path, relative to ``root`` unless absolute.
    vendor_dir : str
        Directory that receives the generated shims.
    max_content_length : int
        Largest remote source file accepted, in bytes.
    request_timeout : float or None
        Total per-request timeout in seconds. ``None`` leaves aiohttp's
        default in place.
    """

    root: Path = Path(".")
    manifest_file: str = DEFAULT_MANIFEST_FILE
    lock_file: str = LOCK_FILE
    vendor_dir: str = VENDOR_DIR
    max_content_length: int = MAX_CONTENT_LENGTH
    request_timeout: float | None = None

    def __post_init__(self) -> None:
        if not isinstance(self.root, Path):
            object.__setattr__(self, "root", Path(self.root))
        if self.max_content_length <= 0:
            raise DinkConfigError(f"max_content_length must be positive, got {self.max_content_length}")
        if self.request_timeout is not None and self.request_timeout <= 0:
            raise DinkConfigError(f"request_timeout must be positive, got {self.request_timeout}")

    @property
    def manifest_path(self) -> Path:
        return self.root / self.manifest_file

    @property
    def lock_path(self) -> Path:
        return self.root / self.lock_file

    @property
    def vendor_path(self) -> Path:
        return self.root / self.vendor_dir

    @classmethod
    def from_env(cls, **overrides: Any) -> DinkConfig:
        """Create configuration from environment variables.

        Reads ``DINK_ROOT``, ``DINK_MANIFEST``, ``DINK_VENDOR_DIR``,
        ``DINK_MAX_CONTENT_LENGTH`` and ``DINK_REQUEST_TIMEOUT``.
        Explicit keyword arguments override environment values.
        """
        env = os.environ

        _ENV_CONFIG_MAP = {
            "DINK_MANIFEST": "manifest_file",
            "DINK_VENDOR_DIR": "vendor_dir",
        }
        config_kwargs: dict[str, Any] = {}
        for env_key, field_name in _ENV_CONFIG_MAP.items():
            val = env.get(env_key)
            if val is not None:
                config_kwargs[field_name] = val

        root_env = env.get("DINK_ROOT")
        if root_env is not None:
            config_kwargs["root"] = Path(root_env)

        length_env = env.get("DINK_MAX_CONTENT_LENGTH")
        if length_env is not None and "max_content_length" not in overrides:
            config_kwargs["max_content_length"] = _env_int("DINK_MAX_CONTENT_LENGTH", length_env)

        timeout_env = env.get("DINK_REQUEST_TIMEOUT")
        if timeout_env is not None and "request_timeout" not in overrides:
            config_kwargs["request_timeout"] = _env_float("DINK_REQUEST_TIMEOUT", timeout_env)

        config_kwargs.update(overrides)

        return cls(**config_kwargs)
