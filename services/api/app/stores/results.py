"""Tagged results returned by the stores.

Stores never raise on storage failures. They return a `StoreResult` so the
caller can tell "not found" apart from "backend unavailable" and pick the
HTTP status accordingly.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Callable, Generic, TypeVar

T = TypeVar("T")
U = TypeVar("U")


class Outcome(str, Enum):
    """Outcome of a store operation."""

    OK = "ok"
    NOT_FOUND = "not_found"
    BACKEND_ERROR = "backend_error"


@dataclass(frozen=True)
class StoreResult(Generic[T]):
    outcome: Outcome
    value: T | None = None
    error: str | None = None

    @classmethod
    def ok(cls, value: T) -> StoreResult[T]:
        return cls(outcome=Outcome.OK, value=value)

    @classmethod
    def not_found(cls) -> StoreResult[T]:
        return cls(outcome=Outcome.NOT_FOUND)

    @classmethod
    def backend_error(cls, error: str) -> StoreResult[T]:
        return cls(outcome=Outcome.BACKEND_ERROR, error=error)

    @property
    def is_ok(self) -> bool:
        return self.outcome is Outcome.OK

    def map(self, fn: Callable[[T], U]) -> StoreResult[U]:
        """Transform the value of a successful result, pass others through."""
        if self.outcome is Outcome.OK:
            return StoreResult(outcome=Outcome.OK, value=fn(self.value))  # type: ignore[arg-type]
        return StoreResult(outcome=self.outcome, error=self.error)
