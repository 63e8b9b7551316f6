from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path

import pytest


@dataclass(frozen=True)
class BindingLayout:
    """A repo root with VERSION at the top and the package under bindings/node."""

    root: Path
    package_dir: Path

    @property
    def version_file(self) -> Path:
        return self.root / "VERSION"

    @property
    def manifest_file(self) -> Path:
        return self.package_dir / "package.json"

    @property
    def loader_file(self) -> Path:
        return self.package_dir / "index.js"


@pytest.fixture()
def layout(tmp_path: Path) -> BindingLayout:
    package_dir = tmp_path / "bindings" / "node"
    package_dir.mkdir(parents=True)
    return BindingLayout(root=tmp_path, package_dir=package_dir)
