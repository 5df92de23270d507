"""Tests for presentation/api/ssr_externals.py."""

from pathlib import Path

import pytest

from ssrexternal.domain.model.manifest import MANIFEST_FILENAME
from ssrexternal.domain.model.report import ExternalsMode
from ssrexternal.presentation.api.ssr_externals import SsrExternals
from tests.factories import (
    FakeManifestReader,
    FakeModuleResolver,
    FakeRequireResolver,
    make_config,
    make_manifest,
)

ROOT = Path("/project")
VUE_ENTRY = ROOT / "node_modules" / "vue" / "index.mjs"


def _legacy_facade(known_imports: tuple[str, ...] = ()) -> tuple[SsrExternals, FakeModuleResolver]:
    path = ROOT / MANIFEST_FILENAME
    reader = FakeManifestReader(
        manifests={path: make_manifest(path, dependencies={"lodash": "4"})},
        roots={ROOT: path},
    )
    esm = FakeModuleResolver(entries={"lodash": None})
    require = FakeRequireResolver(entries={"lodash": ROOT / "node_modules" / "lodash" / "index.js"})
    facade = SsrExternals(
        make_config(ROOT, legacy=True),
        known_imports=known_imports,
        resolver=esm,
        require_resolver=require,
        manifest_reader=reader,
    )
    return facade, esm


class TestDefaultMode:
    """Default mode routes through the memoized decision."""

    def test_mode(self) -> None:
        assert SsrExternals(make_config()).mode is ExternalsMode.DEFAULT

    def test_is_external(self) -> None:
        resolver = FakeModuleResolver(entries={"vue": VUE_ENTRY})
        facade = SsrExternals(make_config(), resolver=resolver)

        assert facade.is_external("vue") is True
        assert facade.is_external("./App.vue") is False
        assert facade.is_external("node:fs") is True

    def test_externals_empty(self) -> None:
        assert SsrExternals(make_config()).externals() == ()

    def test_rejects_none_config(self) -> None:
        with pytest.raises(TypeError, match="config"):
            SsrExternals(None)  # type: ignore[arg-type]


class TestLegacyMode:
    """Legacy mode matches against the aggregate list."""

    def test_mode(self) -> None:
        facade, _ = _legacy_facade()
        assert facade.mode is ExternalsMode.LEGACY

    def test_externals_computed_once(self) -> None:
        facade, esm = _legacy_facade()

        assert facade.externals() == ("lodash",)
        assert facade.externals() == ("lodash",)
        assert esm.calls == ["lodash"]

    def test_prefix_matching(self) -> None:
        facade, _ = _legacy_facade()

        assert facade.is_external("lodash") is True
        assert facade.is_external("lodash/debounce") is True
        assert facade.is_external("lodash/style.css") is False
        assert facade.is_external("vue") is False

    def test_known_imports(self) -> None:
        facade, _ = _legacy_facade(known_imports=("dep > ms",))

        assert facade.externals() == ("lodash", "ms")


class TestReport:
    """Tests for SsrExternals.report."""

    def test_default_report(self) -> None:
        resolver = FakeModuleResolver(entries={"vue": VUE_ENTRY})
        facade = SsrExternals(make_config(), resolver=resolver)

        report = facade.report(["vue", "./main.ts"])

        assert report.mode is ExternalsMode.DEFAULT
        assert report.externals == ()
        assert dict(report.decisions) == {"vue": True, "./main.ts": False}

    def test_legacy_report(self) -> None:
        facade, _ = _legacy_facade()

        report = facade.report(["lodash/fp"])

        assert report.externals == ("lodash",)
        assert dict(report.decisions) == {"lodash/fp": True}


class TestFromMapping:
    """Tests for SsrExternals.from_mapping."""

    def test_builds_config(self) -> None:
        facade = SsrExternals.from_mapping(
            {"root": "/app", "legacy": {"buildSsrCjsExternalHeuristics": True}},
            known_imports=["x"],
        )

        assert facade.config.root == Path("/app")
        assert facade.mode is ExternalsMode.LEGACY
