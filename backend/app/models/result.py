"""Result[T]: the return shape of every fallible core boundary."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Generic, TypeVar

from app.errors import ShotcallerError

T = TypeVar("T")


@dataclass(frozen=True)
class Result(Generic[T]):
    """Exactly one of ``data`` / ``error`` is populated."""

    data: T | None = None
    error: ShotcallerError | None = None

    def __post_init__(self) -> None:
        if (self.data is None) == (self.error is None):
            raise ValueError("Result needs exactly one of data or error")

    @classmethod
    def ok(cls, data: T) -> Result[T]:
        return cls(data=data)

    @classmethod
    def fail(cls, error: ShotcallerError) -> Result[T]:
        return cls(error=error)

    @property
    def is_ok(self) -> bool:
        return self.error is None
