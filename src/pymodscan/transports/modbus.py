"""Modbus TCP transport implementation.

This module provides the ModbusTcpTransport class, which serves the four
read requests over a pymodbus ``AsyncModbusTcpClient``. pymodbus handles
MBAP framing and transaction ids; this layer turns typed requests into
pymodbus calls and pymodbus results into raw ``ReadResponse`` payloads.

IMPORTANT: Single-Client Limitation
------------------------------------
Many Modbus TCP gateways accept only ONE concurrent connection. Running
several pollers against the same gateway causes transaction ID
desynchronization and intermittent timeouts. Poll each device from one
client at a time.
"""

from __future__ import annotations

import asyncio
import logging
from typing import TYPE_CHECKING, Any

from pymodbus.exceptions import ConnectionException, ModbusException

from pymodscan.models import ReadRequest, ReadResponse, RegisterType

from .config import Endpoint
from .exceptions import TransportConnectionError, TransportError, TransportTimeoutError

if TYPE_CHECKING:
    from pymodbus.client import AsyncModbusTcpClient

_LOGGER = logging.getLogger(__name__)

_READ_METHODS: dict[RegisterType, str] = {
    RegisterType.COILS: "read_coils",
    RegisterType.DISCRETE_INPUTS: "read_discrete_inputs",
    RegisterType.HOLDING_REGISTERS: "read_holding_registers",
    RegisterType.INPUT_REGISTERS: "read_input_registers",
}


class ModbusTcpTransport:
    """Modbus TCP transport backed by pymodbus.

    Example:
        transport = ModbusTcpTransport(Endpoint("192.168.1.100"))
        await transport.connect()

        response = await transport.submit(ReadHoldingRegistersRequest(0, 2), unit_id=1)
        with response:
            print(response.payload.hex())

    Note:
        pymodbus-level retries default to 0; ModbusClient applies its own
        retry policy on top of this transport.
    """

    transport_type: str = "modbus_tcp"

    def __init__(self, endpoint: Endpoint, *, pymodbus_retries: int = 0) -> None:
        """Initialize Modbus TCP transport.

        Args:
            endpoint: Device host, port and connect timeout
            pymodbus_retries: Number of retries passed to the pymodbus client
                (default 0)
        """
        self._endpoint = endpoint
        self._pymodbus_retries = pymodbus_retries
        self._client: AsyncModbusTcpClient | None = None
        self._connected = False

    @property
    def endpoint(self) -> Endpoint:
        """Get the device endpoint."""
        return self._endpoint

    @property
    def connected(self) -> bool:
        """True while the pymodbus client is connected."""
        return self._connected and self._client is not None

    async def connect(self) -> None:
        """Establish Modbus TCP connection.

        Raises:
            TransportConnectionError: If connection fails or does not complete
                within the endpoint timeout
        """
        if self.connected:
            return

        from pymodbus.client import AsyncModbusTcpClient

        host, port = self._endpoint.host, self._endpoint.port
        self._client = AsyncModbusTcpClient(
            host=host,
            port=port,
            timeout=self._endpoint.timeout,
            retries=self._pymodbus_retries,
        )

        try:
            connected = await asyncio.wait_for(
                self._client.connect(), timeout=self._endpoint.timeout
            )
        except (TimeoutError, OSError) as err:
            self._close_client()
            reason = str(err) or "timed out"
            _LOGGER.error("Failed to connect to Modbus device at %s:%s: %s", host, port, reason)
            raise TransportConnectionError(
                f"Failed to connect to {host}:{port}: {reason}. "
                "Verify the address is correct and port is not blocked."
            ) from err

        if not connected:
            self._close_client()
            raise TransportConnectionError(f"Failed to connect to Modbus device at {host}:{port}")

        self._connected = True
        _LOGGER.info("Modbus transport connected to %s:%s", host, port)

    async def disconnect(self) -> None:
        """Close Modbus TCP connection."""
        self._close_client()
        _LOGGER.debug("Modbus transport disconnected from %s", self._endpoint)

    def _close_client(self) -> None:
        if self._client is not None:
            self._client.close()
            self._client = None
        self._connected = False

    def submit(self, request: ReadRequest, unit_id: int) -> asyncio.Future[ReadResponse]:
        """Schedule a read and return its pending handle.

        Raises:
            TransportConnectionError: If the transport is not connected
        """
        if self._client is None or not self._connected:
            raise TransportConnectionError(f"Not connected to {self._endpoint}")
        return asyncio.ensure_future(self._execute(self._client, request, unit_id))

    async def _execute(
        self,
        client: AsyncModbusTcpClient,
        request: ReadRequest,
        unit_id: int,
    ) -> ReadResponse:
        kind = request.register_type.value
        read_fn = getattr(client, _READ_METHODS[request.register_type])

        try:
            result: Any = await read_fn(
                address=request.address,
                count=request.quantity,
                device_id=unit_id,
            )
        except ConnectionException as err:
            self._connected = False
            _LOGGER.warning("Lost connection to %s: %s", self._endpoint, err)
            raise TransportConnectionError(
                f"Connection to {self._endpoint} lost reading {kind} at {request.address}: {err}"
            ) from err
        except ModbusException as err:
            if "timeout" in str(err).lower():
                raise TransportTimeoutError(
                    f"Timeout reading {kind} at {request.address} (unit {unit_id})"
                ) from err
            raise TransportError(
                f"Failed to read {kind} at {request.address} (unit {unit_id}): {err}"
            ) from err
        except OSError as err:
            raise TransportError(
                f"Failed to read {kind} at {request.address} (unit {unit_id}): {err}"
            ) from err

        if result.isError():
            raise TransportError(f"Modbus read error for {kind} at {request.address}: {result}")

        if request.register_type.is_bit:
            bits = getattr(result, "bits", None)
            if bits is None:
                raise TransportError(
                    f"Invalid Modbus response for {kind} at {request.address}: no bits in response"
                )
            # pymodbus pads bit responses to a whole byte
            return ReadResponse.from_bits(request, list(bits)[: request.quantity])

        registers = getattr(result, "registers", None)
        if registers is None:
            raise TransportError(
                f"Invalid Modbus response for {kind} at {request.address}: "
                "no registers in response"
            )
        return ReadResponse.from_registers(request, list(registers))


__all__ = ["ModbusTcpTransport"]
