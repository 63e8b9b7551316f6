from __future__ import annotations

from pathlib import Path

import pytest

import bindpack.platform_strip as platform_strip
from bindpack.core.result import Failure, Skip, Success
from bindpack.platform_strip import PlatformDescriptor, host_platform, strip_platforms

LOADER = """\
const { platform, arch } = process
switch (platform) {
  case 'linux': module.exports = require('./binding.linux-x64-gnu.node'); break
  case 'darwin': module.exports = require('./binding.darwin-arm64.node'); break
  default: throw new Error(`Unsupported OS: ${platform}, architecture: ${arch}`)
}
"""


def test_missing_loader_is_skip(tmp_path: Path) -> None:
    out = strip_platforms(tmp_path / "index.js", probe=lambda: PlatformDescriptor("linux", "x64"))

    assert isinstance(out, Skip)
    assert out.reason == "index.js not found, skipping platform stripping"


def test_loader_bytes_unchanged(tmp_path: Path) -> None:
    loader = tmp_path / "index.js"
    loader.write_bytes(LOADER.encode("utf-8"))
    before = loader.read_bytes()

    first = strip_platforms(loader)
    second = strip_platforms(loader)

    assert isinstance(first, Success)
    assert isinstance(second, Success)
    assert loader.read_bytes() == before
    assert first.changed == []


def test_reports_injected_platform(tmp_path: Path) -> None:
    loader = tmp_path / "index.js"
    loader.write_text(LOADER, encoding="utf-8")

    out = strip_platforms(loader, probe=lambda: PlatformDescriptor("win32", "arm64"))

    assert isinstance(out, Success)
    assert out.messages == [
        "Stripping index.js for current platform: win32/arm64",
        "✓ Platform stripping complete (simplified)",
    ]


def test_platform_query_error_is_failure(tmp_path: Path) -> None:
    loader = tmp_path / "index.js"
    loader.write_text(LOADER, encoding="utf-8")

    def broken() -> PlatformDescriptor:
        raise RuntimeError("no platform info")

    out = strip_platforms(loader, probe=broken)

    assert isinstance(out, Failure)
    assert out.message == "no platform info"


def test_unreadable_loader_is_failure(tmp_path: Path) -> None:
    (tmp_path / "index.js").mkdir()

    out = strip_platforms(tmp_path / "index.js")

    assert isinstance(out, Failure)


@pytest.mark.parametrize(
    ("system", "machine", "expected"),
    [
        ("Linux", "x86_64", ("linux", "x64")),
        ("Linux", "aarch64", ("linux", "arm64")),
        ("Darwin", "arm64", ("darwin", "arm64")),
        ("Windows", "AMD64", ("win32", "x64")),
        ("Windows", "x86", ("win32", "ia32")),
        ("CYGWIN_NT-10.0", "x86_64", ("win32", "x64")),
        ("Linux", "armv7l", ("linux", "arm")),
        ("Haiku", "BePC", ("haiku", "bepc")),
    ],
)
def test_host_platform_names(system: str, machine: str, expected: tuple[str, str]) -> None:
    d = host_platform(system, machine)
    assert (d.platform, d.arch) == expected


def test_host_platform_reads_environment(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setattr(platform_strip._platform, "system", lambda: "Darwin")
    monkeypatch.setattr(platform_strip._platform, "machine", lambda: "x86_64")

    assert str(host_platform()) == "darwin/x64"


def test_non_utf8_loader_is_left_alone(tmp_path: Path) -> None:
    loader = tmp_path / "index.js"
    raw = b"// caf\xe9\n" + LOADER.encode("utf-8")
    loader.write_bytes(raw)

    out = strip_platforms(loader, probe=lambda: PlatformDescriptor("linux", "x64"))

    assert isinstance(out, Success)
    assert loader.read_bytes() == raw
