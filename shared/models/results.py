"""Explicit success-or-default result for lookups that are allowed to fail soft."""

from typing import Generic, TypeVar

from pydantic import BaseModel

T = TypeVar("T")


class SoftResult(BaseModel, Generic[T]):
    """Outcome of a soft-fail lookup.

    The value is always usable. When the lookup failed, value holds the
    documented default and error carries the reason.

    Attributes:
        value: The looked-up value, or the default on failure.
        error: Failure description, None on success.
    """

    value: T
    error: str | None = None

    @property
    def ok(self) -> bool:
        return self.error is None

    @classmethod
    def success(cls, value: T) -> "SoftResult[T]":
        return cls(value=value)

    @classmethod
    def fallback(cls, default: T, error: str) -> "SoftResult[T]":
        return cls(value=default, error=error)
