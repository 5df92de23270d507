"""Tests for infrastructure/adapters/node_resolver.py."""

from __future__ import annotations

from pathlib import Path

import pytest

from ssrexternal.domain.exceptions.manifest import ManifestParseError
from ssrexternal.domain.exceptions.resolution import ResolutionError
from ssrexternal.domain.model.resolution import ResolveOptions
from ssrexternal.infrastructure.adapters.node_resolver import (
    NodeModuleResolver,
    NodeRequireResolver,
    find_package_dir,
    module_conditions,
    resolve_exports,
    split_specifier,
)
from tests.factories import install_package

NODE = module_conditions(target_web=False)
WEB = module_conditions(target_web=True)


class TestSplitSpecifier:
    """Tests for split_specifier function."""

    @pytest.mark.parametrize(
        ("specifier", "expected"),
        [
            ("vue", ("vue", ".")),
            ("lodash/fp/map", ("lodash", "./fp/map")),
            ("@scope/pkg", ("@scope/pkg", ".")),
            ("@scope/pkg/sub", ("@scope/pkg", "./sub")),
            ("pkg/style.css?inline", ("pkg", "./style.css")),
            ("pkg#hash", ("pkg", ".")),
        ],
    )
    def test_splits(self, specifier: str, expected: tuple[str, str]) -> None:
        assert split_specifier(specifier) == expected

    @pytest.mark.parametrize("specifier", ["./local", "/abs", "@solo", "C:/x", "https://cdn/x.js"])
    def test_rejects_non_packages(self, specifier: str) -> None:
        with pytest.raises(ResolutionError):
            split_specifier(specifier)


class TestResolveExports:
    """Tests for resolve_exports function."""

    def test_string_sugar(self) -> None:
        assert resolve_exports("./index.js", ".", NODE) == "./index.js"

    def test_conditions_sugar(self) -> None:
        exports = {"import": "./index.mjs", "require": "./index.cjs"}
        assert resolve_exports(exports, ".", NODE) == "./index.mjs"

    def test_condition_order_follows_object(self) -> None:
        exports = {"require": "./index.cjs", "default": "./index.js"}
        assert resolve_exports(exports, ".", NODE) == "./index.js"

    def test_target_specific_condition(self) -> None:
        exports = {".": {"browser": "./browser.js", "node": "./node.js"}}
        assert resolve_exports(exports, ".", NODE) == "./node.js"
        assert resolve_exports(exports, ".", WEB) == "./browser.js"

    def test_nested_conditions(self) -> None:
        exports = {".": {"node": {"import": "./node.mjs", "require": "./node.cjs"}}}
        assert resolve_exports(exports, ".", NODE) == "./node.mjs"
        assert resolve_exports(exports, ".", frozenset({"require", "node"})) == "./node.cjs"

    def test_require_only_has_no_module_entry(self) -> None:
        assert resolve_exports({"require": "./index.cjs"}, ".", NODE) is None

    def test_subpath(self) -> None:
        exports = {".": "./index.js", "./server": "./server.js"}
        assert resolve_exports(exports, "./server", NODE) == "./server.js"
        assert resolve_exports(exports, "./client", NODE) is None

    def test_pattern_subpath(self) -> None:
        exports = {"./*": "./dist/*.js", "./features/*": "./dist/features/*.mjs"}
        assert resolve_exports(exports, "./utils", NODE) == "./dist/utils.js"
        assert resolve_exports(exports, "./features/x", NODE) == "./dist/features/x.mjs"

    def test_null_target_blocks(self) -> None:
        exports = {"./*": "./dist/*.js", "./internal": None}
        assert resolve_exports(exports, "./internal", NODE) is None

    def test_array_fallback(self) -> None:
        exports = {".": [{"worker": "./worker.js"}, "./index.js"]}
        assert resolve_exports(exports, ".", NODE) == "./index.js"


class TestFindPackageDir:
    """Tests for find_package_dir function."""

    def test_finds_in_root(self, tmp_path: Path) -> None:
        package_dir = install_package(tmp_path, "vue")
        assert find_package_dir("vue", tmp_path) == package_dir

    def test_walks_upward(self, tmp_path: Path) -> None:
        package_dir = install_package(tmp_path, "vue")
        nested = tmp_path / "apps" / "web"
        nested.mkdir(parents=True)
        assert find_package_dir("vue", nested) == package_dir

    def test_scoped(self, tmp_path: Path) -> None:
        package_dir = install_package(tmp_path, "@vue/shared")
        assert find_package_dir("@vue/shared", tmp_path) == package_dir

    def test_missing(self, tmp_path: Path) -> None:
        assert find_package_dir("nope", tmp_path) is None


class TestNodeModuleResolver:
    """Tests for NodeModuleResolver."""

    def _resolve(self, root: Path, specifier: str, **kwargs: bool) -> Path | None:
        resolved = NodeModuleResolver().resolve(
            specifier,
            ResolveOptions(root=root),
            target_web=kwargs.pop("target_web", False),
            **kwargs,
        )
        return None if resolved is None else resolved.path

    def test_module_field_preferred(self, tmp_path: Path) -> None:
        install_package(
            tmp_path,
            "lib",
            {"main": "index.cjs", "module": "index.mjs"},
            {"index.cjs": "", "index.mjs": ""},
        )
        assert self._resolve(tmp_path, "lib") == tmp_path / "node_modules/lib/index.mjs"

    def test_main_without_extension(self, tmp_path: Path) -> None:
        install_package(tmp_path, "lib", {"main": "lib/main"}, {"lib/main.js": ""})
        assert self._resolve(tmp_path, "lib") == tmp_path / "node_modules/lib/lib/main.js"

    def test_default_index(self, tmp_path: Path) -> None:
        install_package(tmp_path, "lib", {}, {"index.js": ""})
        assert self._resolve(tmp_path, "lib") == tmp_path / "node_modules/lib/index.js"

    def test_browser_field_for_web_target(self, tmp_path: Path) -> None:
        install_package(
            tmp_path, "lib", {"main": "node.js", "browser": "browser.js"}, {"node.js": "", "browser.js": ""}
        )
        assert self._resolve(tmp_path, "lib", target_web=True) == tmp_path / "node_modules/lib/browser.js"
        assert self._resolve(tmp_path, "lib") == tmp_path / "node_modules/lib/node.js"

    def test_exports_without_module_condition(self, tmp_path: Path) -> None:
        install_package(tmp_path, "cjs", {"exports": {"require": "./index.cjs"}}, {"index.cjs": ""})
        assert self._resolve(tmp_path, "cjs") is None

    def test_deep_import(self, tmp_path: Path) -> None:
        install_package(tmp_path, "lib", {}, {"index.js": "", "fp/map.js": ""})
        assert self._resolve(tmp_path, "lib/fp/map") == tmp_path / "node_modules/lib/fp/map.js"

    def test_missing_package_raises(self, tmp_path: Path) -> None:
        with pytest.raises(ResolutionError, match="not found"):
            self._resolve(tmp_path, "missing")

    def test_broken_manifest_raises(self, tmp_path: Path) -> None:
        package_dir = tmp_path / "node_modules" / "broken"
        package_dir.mkdir(parents=True)
        (package_dir / "package.json").write_text("{")

        with pytest.raises(ManifestParseError):
            self._resolve(tmp_path, "broken")


class TestExternalizeMode:
    """Probe mode never raises and rejects non-JS entries."""

    def _probe(self, root: Path, specifier: str) -> bool:
        resolved = NodeModuleResolver().resolve(
            specifier, ResolveOptions(root=root), target_web=False, externalize=True
        )
        return resolved is not None

    def test_js_entry(self, tmp_path: Path) -> None:
        install_package(tmp_path, "lib", {}, {"index.js": ""})
        assert self._probe(tmp_path, "lib") is True

    def test_css_deep_import(self, tmp_path: Path) -> None:
        install_package(tmp_path, "lib", {}, {"index.js": "", "style.css": ""})
        assert self._probe(tmp_path, "lib/style.css") is False

    def test_missing_package(self, tmp_path: Path) -> None:
        assert self._probe(tmp_path, "missing") is False

    def test_broken_manifest(self, tmp_path: Path) -> None:
        package_dir = tmp_path / "node_modules" / "broken"
        package_dir.mkdir(parents=True)
        (package_dir / "package.json").write_text("{")
        assert self._probe(tmp_path, "broken") is False

    def test_undecodable_manifest(self, tmp_path: Path) -> None:
        package_dir = tmp_path / "node_modules" / "bad"
        package_dir.mkdir(parents=True)
        (package_dir / "package.json").write_bytes(b'{"name": "bad\xff"}')
        assert self._probe(tmp_path, "bad") is False


class TestNodeRequireResolver:
    """Tests for NodeRequireResolver."""

    def test_main_field(self, tmp_path: Path) -> None:
        install_package(tmp_path, "lib", {"main": "index.cjs", "module": "index.mjs"}, {"index.cjs": "", "index.mjs": ""})
        assert NodeRequireResolver().resolve("lib", tmp_path) == tmp_path / "node_modules/lib/index.cjs"

    def test_exports_require_condition(self, tmp_path: Path) -> None:
        install_package(
            tmp_path,
            "dual",
            {"exports": {"import": "./esm.mjs", "require": "./cjs.js"}},
            {"esm.mjs": "", "cjs.js": ""},
        )
        assert NodeRequireResolver().resolve("dual", tmp_path) == tmp_path / "node_modules/dual/cjs.js"

    def test_import_only_exports_raise(self, tmp_path: Path) -> None:
        install_package(tmp_path, "esm", {"exports": {"import": "./index.mjs"}}, {"index.mjs": ""})
        with pytest.raises(ResolutionError, match="not exported"):
            NodeRequireResolver().resolve("esm", tmp_path)

    def test_no_entry_file_raises(self, tmp_path: Path) -> None:
        install_package(tmp_path, "types", {"types": "index.d.ts"}, {"index.d.ts": ""})
        with pytest.raises(ResolutionError, match="no entry"):
            NodeRequireResolver().resolve("types", tmp_path)

    def test_resolve_manifest_ignores_exports(self, tmp_path: Path) -> None:
        install_package(tmp_path, "locked", {"exports": {".": "./index.js"}}, {"index.js": ""})
        assert (
            NodeRequireResolver().resolve_manifest("locked", tmp_path)
            == tmp_path / "node_modules/locked/package.json"
        )

    def test_resolve_manifest_missing(self, tmp_path: Path) -> None:
        with pytest.raises(ResolutionError):
            NodeRequireResolver().resolve_manifest("missing", tmp_path)


class TestSymlinks:
    """Symlinked packages resolve to real paths unless preserved."""

    def test_linked_package_real_path(self, tmp_path: Path) -> None:
        real = tmp_path / "packages" / "ui"
        real.mkdir(parents=True)
        (real / "package.json").write_text('{"name": "ui"}')
        (real / "index.js").write_text("")
        (tmp_path / "node_modules").mkdir()
        (tmp_path / "node_modules" / "ui").symlink_to(real, target_is_directory=True)

        resolved = NodeRequireResolver().resolve("ui", tmp_path)
        preserved = NodeRequireResolver(preserve_symlinks=True).resolve("ui", tmp_path)

        assert resolved == real / "index.js"
        assert preserved == tmp_path / "node_modules" / "ui" / "index.js"
