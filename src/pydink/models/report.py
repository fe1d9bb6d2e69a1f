"""Outcome models produced by a reconciliation run."""

from __future__ import annotations

from pathlib import Path

from pydantic import BaseModel, ConfigDict, Field


class LinkResult(BaseModel):
    """Result of linking a single (host, module) pair."""

    model_config = ConfigDict(frozen=True)

    specifier: str
    path: Path
    fetched: bool
    """``False`` when the existing shim was kept without a network call."""
    has_default_export: bool = False


class ReconcileReport(BaseModel):
    """Summary of one successful reconciliation."""

    model_config = ConfigDict(frozen=True)

    removed: list[Path] = Field(default_factory=list)
    links: list[LinkResult] = Field(default_factory=list)

    @property
    def fetched(self) -> list[LinkResult]:
        return [link for link in self.links if link.fetched]

    @property
    def unchanged(self) -> list[LinkResult]:
        return [link for link in self.links if not link.fetched]
