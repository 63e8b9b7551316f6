"""Sync the canonical VERSION string into the binding's JSON manifests."""

from __future__ import annotations

import json
from pathlib import Path
from typing import Any, Iterable

from bindpack.core.result import Failure, Outcome, Skip, Success
from bindpack.errors import ManifestError
from bindpack.observability.logging import get_logger

_log = get_logger("bindpack.version_patch")


def read_version(path: Path) -> str | None:
    """Return the trimmed version string; None if the file is missing.

    A blank file yields "". A leading byte-order mark is dropped.
    """

    if not path.exists():
        return None
    return path.read_text(encoding="utf-8-sig").strip().strip("\ufeff").strip()


def _reject_constant(token: str) -> Any:
    raise ValueError(f"{token} is not valid JSON")


def _load_manifest(path: Path) -> dict[str, Any]:
    try:
        data = json.loads(path.read_text(encoding="utf-8"), parse_constant=_reject_constant)
    except (ValueError, RecursionError) as e:
        # JSONDecodeError, bad UTF-8, NaN/Infinity, int digit limit, deep nesting
        raise ManifestError(f"invalid JSON: {e}", path=str(path)) from e

    if not isinstance(data, dict):
        raise ManifestError("top-level JSON must be an object", path=str(path))
    return data


def dumps_manifest(data: dict[str, Any]) -> str:
    return json.dumps(data, indent=2, ensure_ascii=False, allow_nan=False) + "\n"


def patch_manifest(path: Path, version: str) -> bool:
    """Set `version` in the manifest at `path`.

    Returns False without touching the filesystem when the manifest does not
    exist. Parse errors raise before anything is written. Output is always
    LF-terminated, whatever the host platform.
    """

    if not path.exists():
        _log.info("manifest_missing", path=str(path))
        return False

    data = _load_manifest(path)
    previous = data.get("version")
    data["version"] = version
    path.write_bytes(dumps_manifest(data).encode("utf-8"))

    _log.info("manifest_patched", path=str(path), previous=previous, version=version)
    return True


def _display_name(manifest: Path, anchor: Path) -> str:
    try:
        return manifest.relative_to(anchor).as_posix()
    except ValueError:
        return str(manifest)


def patch_versions(
    version_file: Path,
    manifest_file: Path,
    extra_manifests: Iterable[Path] = (),
) -> Outcome:
    messages: list[str] = []
    changed: list[str] = []

    try:
        version = read_version(version_file)
        if version is None:
            return Skip("VERSION file not found, skipping version patching")
        if not version:
            return Skip("VERSION file is empty, skipping version patching")

        _log.info("version_read", path=str(version_file), version=version)
        messages.append(f"Patching version to: {version}")

        targets = [(manifest_file, manifest_file.name)]
        targets += [(p, _display_name(p, manifest_file.parent)) for p in extra_manifests]
        for manifest, label in targets:
            if patch_manifest(manifest, version):
                changed.append(str(manifest))
                messages.append(f"✓ Updated {label} version")

        messages.append("Version patching complete")
        return Success(messages=messages, changed=changed)
    except Exception as e:  # noqa: BLE001
        _log.info("patch_failed", error=str(e), error_type=type(e).__name__)
        return Failure(e, messages=messages)
