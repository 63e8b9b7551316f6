from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Mapping

from bindpack.errors import ConfigError


@dataclass(frozen=True, slots=True)
class PackagingConfig:
    """Resolved file locations for one binding package.

    All defaults are anchored at `package_dir`, the directory holding the
    binding's manifest and generated loader.
    """

    package_dir: Path
    version_file: Path
    manifest_file: Path
    loader_file: Path
    extra_manifests: list[Path] = field(default_factory=list)

    @classmethod
    def defaults(cls, package_dir: Path) -> PackagingConfig:
        return cls(
            package_dir=package_dir,
            version_file=package_dir / ".." / ".." / "VERSION",
            manifest_file=package_dir / "package.json",
            loader_file=package_dir / "index.js",
        )

    @classmethod
    def from_mapping(cls, raw: Mapping[str, Any], *, package_dir: Path) -> PackagingConfig:
        base = cls.defaults(package_dir)

        def _path(key: str, default: Path) -> Path:
            value = raw.get(key)
            if value is None:
                return default
            if not isinstance(value, str) or not value.strip():
                raise ConfigError("must be a non-empty string", path=key)
            return _anchor(package_dir, value)

        extras_raw = raw.get("extra_manifests") or []
        if not isinstance(extras_raw, list) or not all(isinstance(v, str) for v in extras_raw):
            raise ConfigError("must be a list of strings", path="extra_manifests")

        return cls(
            package_dir=package_dir,
            version_file=_path("version_file", base.version_file),
            manifest_file=_path("manifest_file", base.manifest_file),
            loader_file=_path("loader_file", base.loader_file),
            extra_manifests=[_anchor(package_dir, v) for v in extras_raw],
        )


def _anchor(package_dir: Path, value: str) -> Path:
    p = Path(value).expanduser()
    return p if p.is_absolute() else package_dir / p
