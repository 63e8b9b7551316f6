"""Configuration loading and schema.

- Optional YAML config (`bindpack.yaml` in the package directory)
- Strict ${ENV_VAR} expansion (missing/empty env vars are errors)
"""

from __future__ import annotations

from pathlib import Path
from typing import Sequence

from bindpack.errors import ConfigError

from .loader import load_config, resolve_config_paths
from .model import PackagingConfig

__all__ = [
    "ConfigError",
    "PackagingConfig",
    "load_config",
    "load_packaging_config",
    "resolve_config_paths",
]


def load_packaging_config(
    package_dir: str | Path,
    *,
    config_paths: Sequence[Path] = (),
) -> PackagingConfig:
    pkg = Path(package_dir)
    files = resolve_config_paths(package_dir=pkg, explicit=config_paths)
    if not files:
        return PackagingConfig.defaults(pkg)
    return PackagingConfig.from_mapping(load_config(files), package_dir=pkg)
