"""Build-time helpers for packaging a native binding module."""

from __future__ import annotations

__version__ = "0.1.0"
