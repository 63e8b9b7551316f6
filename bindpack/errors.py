from __future__ import annotations


class BindpackError(Exception):
    """Base exception for this project."""


class ConfigError(BindpackError):
    """Raised when configuration is invalid or incomplete."""

    def __init__(self, message: str, *, path: str | None = None):
        super().__init__(f"{path}: {message}" if path else message)
        self.path = path


class ManifestError(BindpackError):
    """Raised when a manifest cannot be parsed as a JSON object."""

    def __init__(self, message: str, *, path: str):
        super().__init__(f"{path}: {message}")
        self.path = path
