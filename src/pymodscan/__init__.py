"""Async Modbus TCP polling client with address-range scanning.

Usage:
    Single reads:
        from pymodscan import Endpoint, ModbusClient

        async with ModbusClient(Endpoint("192.168.1.100")) as client:
            value = await client.read_holding_register(0, 2, unit_id=1)
            running = await client.read_coils(0, 1, unit_id=1)

    Range scans:
        from pymodscan import ScanController

        async with ModbusClient(Endpoint("192.168.1.100")) as client:
            result = await ScanController(client).run(0, 10, 2, unit_id=1)
            if result.is_ok:
                print(result.value)  # {0: 23.5, 2: 23.5, ...}
"""

from __future__ import annotations

from .client import ModbusClient
from .exceptions import (
    DecodeError,
    InvalidArgumentError,
    ModscanError,
    OperationCancelledError,
    ResultError,
)
from .models import (
    ReadCoilsRequest,
    ReadDiscreteInputsRequest,
    ReadHoldingRegistersRequest,
    ReadInputRegistersRequest,
    ReadResponse,
    RegisterType,
)
from .result import Err, Ok, Result
from .scanner import ScanController, ScanMapping
from .transports import (
    Endpoint,
    ModbusTcpTransport,
    ReadTransport,
    RequestTimeoutError,
    TransportConnectionError,
    TransportError,
    TransportTimeoutError,
)

__version__ = "0.1.0"
__all__ = [
    "ModbusClient",
    "ScanController",
    "ScanMapping",
    "Endpoint",
    # Transports
    "ReadTransport",
    "ModbusTcpTransport",
    # Requests and responses
    "RegisterType",
    "ReadHoldingRegistersRequest",
    "ReadInputRegistersRequest",
    "ReadCoilsRequest",
    "ReadDiscreteInputsRequest",
    "ReadResponse",
    # Outcomes
    "Ok",
    "Err",
    "Result",
    # Exceptions
    "ModscanError",
    "InvalidArgumentError",
    "DecodeError",
    "OperationCancelledError",
    "ResultError",
    "TransportError",
    "TransportConnectionError",
    "TransportTimeoutError",
    "RequestTimeoutError",
]
