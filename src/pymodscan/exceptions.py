"""Exceptions raised by pymodscan.

Every error the library raises derives from :class:`ModscanError`, so callers
can use a single ``except ModscanError`` for client, decode and transport
failures. Transport-level errors live in :mod:`pymodscan.transports.exceptions`.
"""

from __future__ import annotations


class ModscanError(Exception):
    """Base exception for pymodscan."""

    pass


class InvalidArgumentError(ModscanError, ValueError):
    """Malformed request parameters (address, quantity or unit id)."""

    pass


class DecodeError(ModscanError):
    """Response payload too short or malformed for the requested value type."""

    pass


class OperationCancelledError(ModscanError):
    """A read was abandoned because its cancel signal was set."""

    pass


class ResultError(ModscanError):
    """Raised when unwrapping an ``Err`` outcome."""

    pass


__all__ = [
    "DecodeError",
    "InvalidArgumentError",
    "ModscanError",
    "OperationCancelledError",
    "ResultError",
]
