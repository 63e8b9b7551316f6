from __future__ import annotations

import argparse
import sys
from pathlib import Path
from typing import TextIO

from bindpack.config import PackagingConfig, load_packaging_config
from bindpack.core.result import Failure, Outcome, Skip
from bindpack.errors import ConfigError
from bindpack.observability.logging import configure_logging, get_logger
from bindpack.platform_strip import PlatformProbe, host_platform, strip_platforms
from bindpack.version_patch import patch_versions

_LOG_LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL")

_ERROR_LABELS = {
    "patch-versions": "Error patching versions:",
    "strip-platforms": "Error stripping platforms:",
}


def _add_common_args(p: argparse.ArgumentParser) -> None:
    p.add_argument(
        "--package-dir",
        default=".",
        help="Binding package directory (holds package.json and index.js)",
    )
    p.add_argument(
        "--config",
        action="append",
        default=[],
        type=Path,
        help="YAML config path; repeat to merge several (default: <package-dir>/bindpack.yaml if present)",
    )
    p.add_argument(
        "--log-level",
        default="WARNING",
        type=str.upper,
        choices=_LOG_LEVELS,
        help="Log level for structured logs on stderr",
    )


def _build_parser() -> argparse.ArgumentParser:
    p = argparse.ArgumentParser(prog="bindpack", description="Native binding packaging helpers")
    _add_common_args(p)
    sub = p.add_subparsers(dest="command", required=True)
    sub.add_parser("patch-versions", help="Copy VERSION into the package manifest(s)")
    sub.add_parser("strip-platforms", help="Report the host platform for the generated loader")
    return p


def run_patch_versions(cfg: PackagingConfig) -> Outcome:
    return patch_versions(cfg.version_file, cfg.manifest_file, cfg.extra_manifests)


def run_strip_platforms(cfg: PackagingConfig, probe: PlatformProbe = host_platform) -> Outcome:
    return strip_platforms(cfg.loader_file, probe=probe)


def report(outcome: Outcome, *, error_label: str, out: TextIO | None = None, err: TextIO | None = None) -> int:
    """Print an outcome and return the process exit code."""

    out = out or sys.stdout
    err = err or sys.stderr

    if isinstance(outcome, Skip):
        print(outcome.reason, file=out)
        return 0

    for line in outcome.messages:
        print(line, file=out)

    if isinstance(outcome, Failure):
        print(f"{error_label} {outcome.message}", file=err)
        return 1
    return 0


def _run(command: str, args: argparse.Namespace) -> int:
    configure_logging(level=args.log_level)
    log = get_logger("bindpack.cli")
    label = _ERROR_LABELS[command]

    try:
        cfg = load_packaging_config(args.package_dir, config_paths=args.config)
    except ConfigError as e:
        print(f"{label} {e}", file=sys.stderr)
        return 1

    log.info(
        "config_loaded",
        command=command,
        package_dir=str(cfg.package_dir),
        version_file=str(cfg.version_file),
        manifest_file=str(cfg.manifest_file),
        loader_file=str(cfg.loader_file),
    )

    if command == "patch-versions":
        outcome = run_patch_versions(cfg)
    else:
        outcome = run_strip_platforms(cfg)
    return report(outcome, error_label=label)


def main(argv: list[str] | None = None) -> int:
    args = _build_parser().parse_args(argv)
    return _run(args.command, args)


def _single_command_main(command: str, argv: list[str] | None) -> int:
    p = argparse.ArgumentParser(prog=f"bindpack-{command}", description=_build_parser().description)
    _add_common_args(p)
    return _run(command, p.parse_args(argv))


def patch_versions_main(argv: list[str] | None = None) -> int:
    return _single_command_main("patch-versions", argv)


def strip_platforms_main(argv: list[str] | None = None) -> int:
    return _single_command_main("strip-platforms", argv)
