"""Transport layer for pymodscan.

The transport owns the connection and the Modbus wire format. ModbusClient
talks to it through the ``ReadTransport`` protocol, so tests and alternative
transports can be swapped in.

Usage:
    from pymodscan.transports import Endpoint, ModbusTcpTransport

    transport = ModbusTcpTransport(Endpoint(host="192.168.1.100"))
    await transport.connect()
"""

from __future__ import annotations

from .config import Endpoint
from .exceptions import (
    RequestTimeoutError,
    TransportConnectionError,
    TransportError,
    TransportTimeoutError,
)
from .modbus import ModbusTcpTransport
from .protocol import ReadTransport

__all__ = [
    # Configuration
    "Endpoint",
    # Protocol
    "ReadTransport",
    # Transport implementations
    "ModbusTcpTransport",
    # Exceptions
    "TransportError",
    "TransportConnectionError",
    "TransportTimeoutError",
    "RequestTimeoutError",
]
