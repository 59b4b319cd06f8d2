"""Result envelope used at the facade and validator boundaries.

A ``Result`` is either ``Result(success=True, data=...)`` or
``Result(success=False, error=CoreError)``. Adapters and the facade return
results for expected failures instead of raising, so callers can branch on
``success`` without try/except.
"""
from __future__ import annotations

from dataclasses import dataclass
from typing import Callable, Generic, Optional, TypeVar

from .errors import CoreError, ErrorKind, to_core_error

T = TypeVar("T")
U = TypeVar("U")


@dataclass(frozen=True)
class Result(Generic[T]):
    """Success-or-failure envelope.

    Attributes:
        success: Whether the operation succeeded.
        data: Payload when ``success`` is True.
        error: Normalized error when ``success`` is False.
    """

    success: bool
    data: Optional[T] = None
    error: Optional[CoreError] = None

    @classmethod
    def ok(cls, data: T) -> "Result[T]":
        return cls(success=True, data=data)

    @classmethod
    def fail(cls, error: CoreError) -> "Result[T]":
        return cls(success=False, error=error)

    def unwrap(self) -> T:
        """Return ``data`` or raise the carried ``CoreError``."""
        if not self.success:
            raise self.error or CoreError(ErrorKind.UNKNOWN, "failed result without error")
        return self.data  # type: ignore[return-value]

    def map(self, fn: Callable[[T], U]) -> "Result[U]":
        """Apply ``fn`` to the payload of a successful result."""
        if not self.success:
            return Result(success=False, error=self.error)
        return Result.ok(fn(self.data))  # type: ignore[arg-type]


def _default_transform(exc: BaseException) -> CoreError:
    return to_core_error(exc)


def try_catch(
    fn: Callable[[], T],
    transform: Callable[[BaseException], CoreError] = _default_transform,
) -> Result[T]:
    """Run ``fn`` and capture any exception as a failed ``Result``.

    ``CoreError`` passes through unchanged; other exceptions go through
    ``transform`` (by default :func:`to_core_error`).
    """
    try:
        return Result.ok(fn())
    except Exception as exc:
        return Result.fail(transform(exc))


__all__ = ["Result", "try_catch"]
