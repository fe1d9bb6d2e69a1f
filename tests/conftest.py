from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path

import pytest

from pydink._transport import FetchedSource
from pydink.config import DinkConfig

HOST = "https://example.com/lib@"


@dataclass
class FakeFetcher:
    """In-memory fetcher; any specifier not listed serves a plain module."""

    sources: dict[str, str] = field(default_factory=dict)
    redirects: dict[str, str] = field(default_factory=dict)
    failures: dict[str, Exception] = field(default_factory=dict)
    calls: list[str] = field(default_factory=list)

    async def fetch(self, specifier: str) -> FetchedSource:
        self.calls.append(specifier)
        if specifier in self.failures:
            raise self.failures[specifier]
        text = self.sources.get(specifier, "export const value = 1;\n")
        return FetchedSource(url=self.redirects.get(specifier, specifier), text=text)


@pytest.fixture
def config(tmp_path: Path) -> DinkConfig:
    return DinkConfig(root=tmp_path)


@pytest.fixture
def fetcher() -> FakeFetcher:
    return FakeFetcher()
