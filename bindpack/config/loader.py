from __future__ import annotations

import os
import re
from pathlib import Path
from typing import Any, Mapping, Sequence

import yaml
from dotenv import load_dotenv

from bindpack.errors import ConfigError

DEFAULT_CONFIG_NAME = "bindpack.yaml"

_PLACEHOLDER = re.compile(r"\$\{([A-Za-z_][A-Za-z0-9_]*)\}")


class _EnvExpander:
    """Substitutes ${VAR} in string values and records every unset one."""

    def __init__(self, source: str) -> None:
        self.source = source
        self.problems: list[str] = []

    def expand(self, value: Any, where: str = "") -> Any:
        if isinstance(value, str):
            return _PLACEHOLDER.sub(lambda m: self._lookup(m, where), value)
        if isinstance(value, Mapping):
            return {str(k): self.expand(v, f"{where}.{k}" if where else str(k)) for k, v in value.items()}
        if isinstance(value, list):
            return [self.expand(v, f"{where}[{i}]") for i, v in enumerate(value)]
        return value

    def _lookup(self, match: re.Match[str], where: str) -> str:
        name = match.group(1)
        value = os.environ.get(name)
        if value:
            return value
        state = "missing" if value is None else "empty"
        self.problems.append(f"- {name} ({state}) at {where or '<root>'} in {self.source}")
        return match.group(0)


def _read_fragment(path: Path) -> dict[str, Any]:
    if not path.exists():
        raise ConfigError("config file does not exist", path=str(path))
    try:
        data = yaml.safe_load(path.read_text(encoding="utf-8"))
    except (OSError, UnicodeDecodeError, yaml.YAMLError) as e:
        raise ConfigError(f"Failed to read YAML config: {e}", path=str(path)) from e

    if data is None:
        return {}
    if not isinstance(data, Mapping):
        raise ConfigError("Top-level YAML must be a mapping/dict", path=str(path))
    return dict(data)


def _overlay(base: Mapping[str, Any], top: Mapping[str, Any]) -> dict[str, Any]:
    # Nested mappings merge; anything else (lists too) is replaced by `top`.
    out = dict(base)
    for key, value in top.items():
        below = out.get(key)
        if isinstance(value, Mapping) and isinstance(below, Mapping):
            out[key] = _overlay(below, value)
        else:
            out[key] = value
    return out


def load_config(paths: Path | Sequence[Path], *, dotenv: bool = True) -> dict[str, Any]:
    """Read and merge bindpack YAML files, later files winning.

    With `dotenv`, a `.env` beside the first file is loaded first, without
    overriding variables already set. ${VAR} placeholders must then resolve to
    non-empty values; all failures are reported in a single ConfigError.
    """

    files = [paths] if isinstance(paths, Path) else list(paths)
    if not files:
        raise ConfigError("No config files provided")

    env_file = files[0].parent / ".env"
    if dotenv and env_file.exists():
        load_dotenv(env_file, override=False)

    merged: dict[str, Any] = {}
    for path in files:
        merged = _overlay(merged, _read_fragment(path))

    expander = _EnvExpander(",".join(str(p) for p in files))
    expanded = expander.expand(merged)
    if expander.problems:
        raise ConfigError("\n".join(["Unresolved environment variables in config:", *expander.problems]))
    return expanded


def resolve_config_paths(*, package_dir: Path, explicit: Sequence[Path] = ()) -> list[Path]:
    """Explicit paths win; else `bindpack.yaml` in the package dir if present."""

    if explicit:
        return list(explicit)
    default = package_dir / DEFAULT_CONFIG_NAME
    return [default] if default.exists() else []
