from __future__ import annotations

from dataclasses import dataclass
from typing import Generic, TypeVar

T = TypeVar("T")


@dataclass(frozen=True)
class SourceUnavailable:
    """Why a data source produced nothing."""

    source: str
    reason: str

    def __str__(self) -> str:
        return f"{self.source}: {self.reason}"


@dataclass(frozen=True)
class Outcome(Generic[T]):
    """Either a value read from a source or the reason the read failed.

    Pipelines collapse an outcome to a zero value with :meth:`unwrap_or` at
    their outer boundary, after the failure has been logged.
    """

    value: T | None = None
    error: SourceUnavailable | None = None

    @classmethod
    def ok(cls, value: T) -> Outcome[T]:
        return cls(value=value)

    @classmethod
    def unavailable(cls, source: str, reason: str) -> Outcome[T]:
        return cls(error=SourceUnavailable(source, reason))

    @property
    def is_ok(self) -> bool:
        return self.error is None

    def unwrap_or(self, default: T) -> T:
        if self.error is not None or self.value is None:
            return default
        return self.value
