"""Tests for infrastructure/adapters/json_manifest_reader.py and the cached decorator."""

from pathlib import Path

import pytest

from ssrexternal.domain.exceptions.manifest import ManifestParseError, ManifestReadError
from ssrexternal.infrastructure.adapters.cached_manifest_reader import CachedManifestReader
from ssrexternal.infrastructure.adapters.json_manifest_reader import JsonManifestReader
from tests.factories import write_manifest


class TestRead:
    """Tests for JsonManifestReader.read."""

    def test_parses_manifest(self, tmp_path: Path) -> None:
        path = write_manifest(tmp_path, {"name": "app", "dependencies": {"vue": "^3"}})

        manifest = JsonManifestReader().read(path)

        assert manifest.name == "app"
        assert manifest.path == path
        assert dict(manifest.dependencies) == {"vue": "^3"}

    def test_malformed_json_is_parse_error(self, tmp_path: Path) -> None:
        path = tmp_path / "package.json"
        path.write_text("{ not json")

        with pytest.raises(ManifestParseError) as exc_info:
            JsonManifestReader().read(path)

        assert exc_info.value.path == path

    def test_undecodable_bytes_are_parse_error(self, tmp_path: Path) -> None:
        path = tmp_path / "package.json"
        path.write_bytes(b'{"name": "bad\xff"}')

        with pytest.raises(ManifestParseError) as exc_info:
            JsonManifestReader().read(path)

        assert exc_info.value.path == path

    def test_non_object_is_parse_error(self, tmp_path: Path) -> None:
        path = tmp_path / "package.json"
        path.write_text("[1, 2]")

        with pytest.raises(ManifestParseError, match="JSON object"):
            JsonManifestReader().read(path)

    def test_missing_file_is_read_error(self, tmp_path: Path) -> None:
        with pytest.raises(ManifestReadError):
            JsonManifestReader().read(tmp_path / "package.json")


class TestLookup:
    """Tests for JsonManifestReader.lookup."""

    def test_finds_in_start_directory(self, tmp_path: Path) -> None:
        path = write_manifest(tmp_path, {"name": "app"})

        assert JsonManifestReader().lookup(tmp_path) == path

    def test_walks_upward(self, tmp_path: Path) -> None:
        path = write_manifest(tmp_path, {"name": "app"})
        nested = tmp_path / "src" / "pages"
        nested.mkdir(parents=True)

        assert JsonManifestReader().lookup(nested) == path

    def test_nearest_wins(self, tmp_path: Path) -> None:
        write_manifest(tmp_path, {"name": "outer"})
        inner = write_manifest(tmp_path / "packages" / "inner", {"name": "inner"})

        assert JsonManifestReader().lookup(tmp_path / "packages" / "inner") == inner


class TestCachedManifestReader:
    """Tests for CachedManifestReader decorator."""

    def test_reads_once(self, tmp_path: Path) -> None:
        path = write_manifest(tmp_path, {"name": "app"})
        reader = CachedManifestReader(JsonManifestReader())

        first = reader.read(path)
        path.write_text('{"name": "changed"}')
        second = reader.read(path)

        assert first is second
        assert second.name == "app"
        assert reader.cache_size == 1

    def test_failures_not_cached(self, tmp_path: Path) -> None:
        path = tmp_path / "package.json"
        path.write_text("{")
        reader = CachedManifestReader(JsonManifestReader())

        with pytest.raises(ManifestParseError):
            reader.read(path)
        path.write_text('{"name": "fixed"}')

        assert reader.read(path).name == "fixed"

    def test_clear(self, tmp_path: Path) -> None:
        path = write_manifest(tmp_path, {"name": "app"})
        reader = CachedManifestReader(JsonManifestReader())
        reader.read(path)

        reader.clear()

        assert reader.cache_size == 0

    def test_lookup_delegates(self, tmp_path: Path) -> None:
        path = write_manifest(tmp_path, {"name": "app"})

        assert CachedManifestReader(JsonManifestReader()).lookup(tmp_path) == path

    def test_rejects_none_inner(self) -> None:
        with pytest.raises(TypeError, match="_inner"):
            CachedManifestReader(None)  # type: ignore[arg-type]
