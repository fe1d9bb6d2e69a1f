from __future__ import annotations

from pathlib import Path

import pytest

from pydink.exceptions import DinkManifestNotFoundError
from pydink.models.manifest import ModuleEntry
from pydink.validation import (
    Invalid,
    Valid,
    load_manifest,
    parse_manifest_bytes,
    parse_manifest_text,
    validate_manifest,
)


def test_empty_manifest_is_valid() -> None:
    result = validate_manifest({})
    assert isinstance(result, Valid)
    assert result.manifest == {}


def test_valid_manifest_is_typed_and_keeps_order() -> None:
    doc = {
        "https://deno.land/std@": {"version": "v0.20.0", "modules": ["/fs/mod.ts", "/flags/mod.ts"]},
        "https://example.com/x/": {"version": "1.0.0", "modules": []},
    }
    result = validate_manifest(doc)
    assert isinstance(result, Valid)
    assert list(result.manifest) == list(doc)
    assert result.manifest["https://deno.land/std@"] == ModuleEntry(
        version="v0.20.0", modules=("/fs/mod.ts", "/flags/mod.ts")
    )


@pytest.mark.parametrize("doc", [[], "modules", 3, None])
def test_non_object_top_level_rejected(doc: object) -> None:
    result = validate_manifest(doc)
    assert isinstance(result, Invalid)
    assert result.errors == ["is not object"]


def test_missing_version_rejected() -> None:
    result = validate_manifest({"https://example.com/": {"modules": ["/a.ts"]}})
    assert isinstance(result, Invalid)
    assert result.errors == ['https://example.com/: "version" must be string']


def test_non_string_version_rejected() -> None:
    result = validate_manifest({"https://example.com/": {"version": 1, "modules": []}})
    assert isinstance(result, Invalid)
    assert '"version" must be string' in result.reason()


def test_modules_must_be_array() -> None:
    result = validate_manifest({"https://example.com/": {"version": "1", "modules": "/a.ts"}})
    assert isinstance(result, Invalid)
    assert result.errors == ['https://example.com/: "modules" must be array']


def test_non_string_module_element_rejected() -> None:
    result = validate_manifest({"https://example.com/": {"version": "1", "modules": ["/a.ts", 2]}})
    assert isinstance(result, Invalid)
    assert result.errors == ['https://example.com/: content of "modules" must be string']


def test_stops_at_first_bad_entry() -> None:
    result = validate_manifest(
        {
            "https://a.example/": {"version": 1, "modules": []},
            "https://b.example/": {"version": "1", "modules": [None]},
        }
    )
    assert isinstance(result, Invalid)
    assert len(result.errors) == 1
    assert result.errors[0].startswith("https://a.example/")


def test_entry_must_be_object() -> None:
    result = validate_manifest({"https://example.com/": ["1", []]})
    assert isinstance(result, Invalid)


@pytest.mark.parametrize("host", ["example.com/lib", "/relative/path", "not a url"])
def test_host_must_be_absolute_url(host: str) -> None:
    result = validate_manifest({host: {"version": "1", "modules": []}})
    assert isinstance(result, Invalid)
    assert "absolute URL" in result.reason()


def test_duplicate_modules_tolerated() -> None:
    result = validate_manifest({"https://example.com/": {"version": "1", "modules": ["/a.ts", "/a.ts"]}})
    assert isinstance(result, Valid)


def test_invalid_json_text() -> None:
    result = parse_manifest_text("{not json")
    assert isinstance(result, Invalid)
    assert result.errors[0].startswith("invalid JSON")


def test_load_manifest_missing_file(tmp_path: Path) -> None:
    with pytest.raises(DinkManifestNotFoundError) as exc_info:
        load_manifest(tmp_path / "modules.json")
    assert "does not exist" in str(exc_info.value)


def test_load_manifest_reads_file(tmp_path: Path) -> None:
    path = tmp_path / "modules.json"
    path.write_text('{"https://example.com/": {"version": "1", "modules": ["/a.ts"]}}', encoding="utf-8")
    result = load_manifest(path)
    assert isinstance(result, Valid)
    assert result.manifest["https://example.com/"].modules == ("/a.ts",)


@pytest.mark.parametrize("module", ["../evil.ts", "/../x.ts", "", "/"])
def test_module_escaping_host_directory_rejected(module: str) -> None:
    result = validate_manifest({"https://example.com/lib@": {"version": "1", "modules": ["/a.ts", module]}})
    assert isinstance(result, Invalid)
    assert "resolves outside its host directory" in result.reason()


def test_invalid_utf8_bytes() -> None:
    result = parse_manifest_bytes(b'{"\xff": 1}')
    assert isinstance(result, Invalid)
    assert result.errors[0].startswith("invalid UTF-8")


def test_load_manifest_invalid_utf8(tmp_path: Path) -> None:
    path = tmp_path / "modules.json"
    path.write_bytes(b'{"https://example.com/\xff": {"version": "1", "modules": []}}')
    assert isinstance(load_manifest(path), Invalid)
