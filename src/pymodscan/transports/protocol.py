"""Transport boundary used by ModbusClient.

A transport owns the wire: framing, transaction ids and the socket. The
client only needs to submit a typed request for a unit id and get back a
pending handle it can await with its own timeout.
"""

from __future__ import annotations

import asyncio
from typing import Protocol, runtime_checkable

from pymodscan.models import ReadRequest, ReadResponse


@runtime_checkable
class ReadTransport(Protocol):
    """Protocol for transports that serve the four Modbus read requests."""

    @property
    def connected(self) -> bool:
        """True while the underlying connection is established."""
        ...

    async def connect(self) -> None:
        """Establish the connection.

        Raises:
            TransportConnectionError: If the endpoint cannot be reached
        """
        ...

    async def disconnect(self) -> None:
        """Close the connection. Idempotent."""
        ...

    def submit(self, request: ReadRequest, unit_id: int) -> asyncio.Future[ReadResponse]:
        """Send a request and return a handle that resolves to its response.

        The handle fails with TransportError if the device answers with an
        exception frame or the connection breaks while the request is in
        flight. Cancelling the handle abandons the request.
        """
        ...


__all__ = ["ReadTransport"]
