"""Transport-specific exceptions.

All transport exceptions inherit from :class:`~pymodscan.exceptions.ModscanError`
so callers can catch client and transport failures with one handler.
"""

from __future__ import annotations

from pymodscan.exceptions import ModscanError


class TransportError(ModscanError):
    """Base exception for all transport errors."""

    pass


class TransportConnectionError(TransportError):
    """Failed to connect to the device, or the client is not connected."""

    pass


class TransportTimeoutError(TransportError):
    """Operation timed out."""

    pass


class RequestTimeoutError(TransportTimeoutError):
    """A read request did not complete within its timeout.

    Attributes:
        address: Starting address of the request
        unit_id: Modbus unit/slave ID the request targeted
        elapsed: Seconds spent waiting before giving up
    """

    def __init__(self, address: int, unit_id: int, elapsed: float) -> None:
        self.address = address
        self.unit_id = unit_id
        self.elapsed = elapsed
        super().__init__(
            f"Request at address {address} (unit {unit_id}) timed out after {elapsed:.2f}s"
        )


__all__ = [
    "RequestTimeoutError",
    "TransportConnectionError",
    "TransportError",
    "TransportTimeoutError",
]
