"""Two-variant outcome container.

Scans report their outcome as ``Ok(value)`` or ``Err(message)`` instead of
raising, so a polling loop can log a failed scan and carry on.

Example:
    result = await controller.run(0, 10, 2, 1)
    if result.is_ok:
        print(result.value)
    else:
        print(result.message)
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Generic, NoReturn, TypeVar

from .exceptions import ResultError

T = TypeVar("T")


@dataclass(frozen=True)
class Ok(Generic[T]):
    """Successful outcome carrying a value."""

    value: T

    @property
    def is_ok(self) -> bool:
        """Always True for a successful outcome."""
        return True

    def unwrap(self) -> T:
        """Return the carried value."""
        return self.value


@dataclass(frozen=True)
class Err:
    """Failed outcome carrying a human-readable message."""

    message: str

    @property
    def is_ok(self) -> bool:
        """Always False for a failed outcome."""
        return False

    def unwrap(self) -> NoReturn:
        """Always raises ResultError with the failure message."""
        raise ResultError(self.message)


Result = Ok[T] | Err

__all__ = ["Err", "Ok", "Result"]
