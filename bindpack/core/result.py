from __future__ import annotations

from dataclasses import dataclass, field
from typing import Union


@dataclass(frozen=True, slots=True)
class Skip:
    """Preconditions for acting were not met. Not an error."""

    reason: str


@dataclass(frozen=True, slots=True)
class Success:
    messages: list[str] = field(default_factory=list)
    changed: list[str] = field(default_factory=list)


@dataclass(frozen=True, slots=True)
class Failure:
    """A fatal error, plus the progress messages emitted before it."""

    error: BaseException
    messages: list[str] = field(default_factory=list)

    @property
    def message(self) -> str:
        return str(self.error)


Outcome = Union[Skip, Success, Failure]
