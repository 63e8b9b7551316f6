from __future__ import annotations

from .result import Failure, Outcome, Skip, Success

__all__ = ["Failure", "Outcome", "Skip", "Success"]
