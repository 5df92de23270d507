"""Package manifest value object."""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass, field
from pathlib import Path
from types import MappingProxyType

MANIFEST_FILENAME = "package.json"


@dataclass(frozen=True, slots=True)
class PackageManifest:
    """Fields of package.json relevant to externalization.

    Attributes:
        path: Location of the package.json file
        name: Declared package name (None if absent)
        type: Declared module type ("module", "commonjs" or None)
        dependencies: Runtime dependencies, declaration order kept
        dev_dependencies: Development dependencies, declaration order kept
        main: CommonJS entry field
        module: ESM entry field
        browser: Browser entry field (string form only)
        exports: Raw "exports" field (str, list or mapping), None if absent
    """

    path: Path
    name: str | None = None
    type: str | None = None
    dependencies: Mapping[str, str] = field(default_factory=lambda: MappingProxyType({}))
    dev_dependencies: Mapping[str, str] = field(default_factory=lambda: MappingProxyType({}))
    main: str | None = None
    module: str | None = None
    browser: str | None = None
    exports: object = None

    def __post_init__(self) -> None:
        """Validate invariants. FAIL-FIRST."""
        if self.path is None:
            raise TypeError("path must not be None")

    @property
    def directory(self) -> Path:
        """Package root directory."""
        return self.path.parent

    @property
    def is_esm(self) -> bool:
        """Whether .js files of this package are ES modules."""
        return self.type == "module"

    def declared_dependencies(self) -> dict[str, str]:
        """devDependencies merged with dependencies.

        dependencies win on duplicate names; first-declared order kept.
        """
        return {**self.dev_dependencies, **self.dependencies}

    @classmethod
    def from_dict(cls, path: Path, data: Mapping[str, object]) -> PackageManifest:
        """Build manifest from parsed package.json content.

        Fields of unexpected type are read as absent.
        """
        browser = data.get("browser")
        return cls(
            path=path,
            name=_str_or_none(data.get("name")),
            type=_str_or_none(data.get("type")),
            dependencies=_dependency_map(data.get("dependencies")),
            dev_dependencies=_dependency_map(data.get("devDependencies")),
            main=_str_or_none(data.get("main")),
            module=_str_or_none(data.get("module")),
            browser=browser if isinstance(browser, str) else None,
            exports=data.get("exports"),
        )


def _str_or_none(value: object) -> str | None:
    return value if isinstance(value, str) and value else None


def _dependency_map(value: object) -> Mapping[str, str]:
    if not isinstance(value, Mapping):
        return MappingProxyType({})
    return MappingProxyType({str(k): str(v) for k, v in value.items()})
