"""Modbus read client.

ModbusClient owns one connection to one device and exposes the four read
operations. Each read validates its arguments, submits a typed request to
the transport, waits for the pending handle with a bounded timeout and
decodes the raw payload into a float (registers) or a bool (bits).

Reads through one client are serialized by an ``asyncio.Lock``, so
concurrent coroutines never interleave requests on the same connection.
"""

from __future__ import annotations

import asyncio
import logging
from collections.abc import Callable
from types import TracebackType
from typing import Any, TypeVar

from .constants import DEFAULT_REQUEST_TIMEOUT, DEFAULT_RETRIES, DEFAULT_RETRY_DELAY
from .decoding import decode_bit, decode_float32
from .exceptions import InvalidArgumentError, OperationCancelledError
from .models import (
    ReadCoilsRequest,
    ReadDiscreteInputsRequest,
    ReadHoldingRegistersRequest,
    ReadInputRegistersRequest,
    ReadRequest,
    ReadResponse,
    validate_unit_id,
)
from .transports.config import Endpoint
from .transports.exceptions import (
    RequestTimeoutError,
    TransportConnectionError,
    TransportError,
)
from .transports.modbus import ModbusTcpTransport
from .transports.protocol import ReadTransport

_LOGGER = logging.getLogger(__name__)

V = TypeVar("V", float, bool)


class ModbusClient:
    """Timeout-bounded Modbus read client for a single device.

    Example:
        async with ModbusClient(Endpoint("192.168.1.100")) as client:
            temperature = await client.read_holding_register(0, 2, unit_id=1)
            running = await client.read_coils(16, 1, unit_id=1)
    """

    def __init__(
        self,
        endpoint: Endpoint,
        *,
        request_timeout: float = DEFAULT_REQUEST_TIMEOUT,
        retries: int = DEFAULT_RETRIES,
        retry_delay: float = DEFAULT_RETRY_DELAY,
        transport: ReadTransport | None = None,
        logger: logging.Logger | None = None,
    ) -> None:
        """Initialize the client.

        Args:
            endpoint: Device host, port and connect timeout
            request_timeout: Default wait per read in seconds (default 8.0),
                overridable per call
            retries: Retries per read after a timeout or transport error
                (default 0)
            retry_delay: Initial delay between retries in seconds, doubles each
                attempt (default 0.5)
            transport: Transport to use; defaults to ModbusTcpTransport
            logger: Logger for client events; defaults to the module logger

        Raises:
            ValueError: If any argument is invalid
        """
        endpoint.validate()
        if request_timeout <= 0:
            raise InvalidArgumentError(f"request_timeout must be positive, got {request_timeout}")
        if retries < 0:
            raise InvalidArgumentError(f"retries must not be negative, got {retries}")

        self._endpoint = endpoint
        self._request_timeout = request_timeout
        self._retries = retries
        self._retry_delay = retry_delay
        self._transport: ReadTransport = (
            transport if transport is not None else ModbusTcpTransport(endpoint)
        )
        self._logger = logger or _LOGGER
        self._lock = asyncio.Lock()

    # ------------------------------------------------------------------
    # Properties
    # ------------------------------------------------------------------

    @property
    def endpoint(self) -> Endpoint:
        """Get the device endpoint."""
        return self._endpoint

    @property
    def request_timeout(self) -> float:
        """Get the default per-read timeout in seconds."""
        return self._request_timeout

    @property
    def is_connected(self) -> bool:
        """True while the transport connection is established."""
        return self._transport.connected

    # ------------------------------------------------------------------
    # Connection lifecycle
    # ------------------------------------------------------------------

    async def connect(self) -> None:
        """Establish the connection if it is not already up.

        Raises:
            TransportConnectionError: If the endpoint cannot be reached
        """
        if self._transport.connected:
            return
        await self._transport.connect()
        self._logger.info("Modbus client connected to %s", self._endpoint)

    async def release(self) -> None:
        """Tear down the connection. Safe to call repeatedly."""
        was_connected = self._transport.connected
        await self._transport.disconnect()
        if was_connected:
            self._logger.info("Modbus client released connection to %s", self._endpoint)

    async def __aenter__(self) -> ModbusClient:
        await self.connect()
        return self

    async def __aexit__(
        self,
        exc_type: type[BaseException] | None,
        exc_val: BaseException | None,
        exc_tb: TracebackType | None,
    ) -> None:
        await self.release()

    def _ensure_connected(self) -> None:
        if not self._transport.connected:
            raise TransportConnectionError(f"Modbus client for {self._endpoint} is not connected")

    # ------------------------------------------------------------------
    # Read operations
    # ------------------------------------------------------------------

    async def read_holding_register(
        self,
        address: int,
        quantity: int,
        unit_id: int,
        *,
        timeout: float | None = None,
        cancel: asyncio.Event | None = None,
    ) -> float:
        """Read holding registers (FC3) and decode them as a float32.

        Args:
            address: Starting register address
            quantity: Number of registers to read (2 for one float32)
            unit_id: Modbus unit/slave ID
            timeout: Override the default request timeout for this call
            cancel: Event that abandons the read when set

        Returns:
            Big-endian float32 from the first two registers

        Raises:
            InvalidArgumentError: If address, quantity or unit_id is invalid
            TransportConnectionError: If the client is not connected
            RequestTimeoutError: If no response arrives within the timeout
            TransportError: If the transport reports a failure
            DecodeError: If fewer than two registers come back
            OperationCancelledError: If cancel is set before a response arrives
        """
        request = ReadHoldingRegistersRequest(address, quantity)
        return await self._read(request, unit_id, decode_float32, timeout, cancel)

    async def read_input_register(
        self,
        address: int,
        quantity: int,
        unit_id: int,
        *,
        timeout: float | None = None,
        cancel: asyncio.Event | None = None,
    ) -> float:
        """Read input registers (FC4) and decode them as a float32.

        Same arguments and errors as read_holding_register.
        """
        request = ReadInputRegistersRequest(address, quantity)
        return await self._read(request, unit_id, decode_float32, timeout, cancel)

    async def read_coils(
        self,
        address: int,
        quantity: int,
        unit_id: int,
        *,
        timeout: float | None = None,
        cancel: asyncio.Event | None = None,
    ) -> bool:
        """Read coils (FC1) and return the status of the first coil."""
        request = ReadCoilsRequest(address, quantity)
        return await self._read(request, unit_id, decode_bit, timeout, cancel)

    async def read_discrete_inputs(
        self,
        address: int,
        quantity: int,
        unit_id: int,
        *,
        timeout: float | None = None,
        cancel: asyncio.Event | None = None,
    ) -> bool:
        """Read discrete inputs (FC2) and return the status of the first input."""
        request = ReadDiscreteInputsRequest(address, quantity)
        return await self._read(request, unit_id, decode_bit, timeout, cancel)

    # ------------------------------------------------------------------
    # Request/response pairing (with retry)
    # ------------------------------------------------------------------

    async def _read(
        self,
        request: ReadRequest,
        unit_id: int,
        decode: Callable[[bytearray], V],
        timeout: float | None,
        cancel: asyncio.Event | None,
    ) -> V:
        request.validate()
        validate_unit_id(unit_id)
        wait = self._request_timeout if timeout is None else timeout
        if wait <= 0:
            raise InvalidArgumentError(f"timeout must be positive, got {wait}")

        kind = request.register_type.value
        last_err: TransportError | None = None

        for attempt in range(self._retries + 1):
            self._ensure_connected()
            try:
                response = await self._request(request, unit_id, wait, cancel)
            except TransportConnectionError:
                raise
            except TransportError as err:
                last_err = err
            else:
                with response:
                    return decode(response.payload)

            if attempt < self._retries:
                delay = self._retry_delay * (2**attempt)
                self._logger.debug(
                    "Retry %d/%d reading %s at %d (unit %d) after %.1fs: %s",
                    attempt + 1,
                    self._retries,
                    kind,
                    request.address,
                    unit_id,
                    delay,
                    last_err,
                )
                await asyncio.sleep(delay)

        self._logger.error(
            "Failed to read %s at %d (unit %d) after %d attempts: %s",
            kind,
            request.address,
            unit_id,
            self._retries + 1,
            last_err,
        )
        raise last_err  # type: ignore[misc]

    async def _request(
        self,
        request: ReadRequest,
        unit_id: int,
        timeout: float,
        cancel: asyncio.Event | None,
    ) -> ReadResponse:
        if cancel is not None and cancel.is_set():
            raise OperationCancelledError(
                f"Read of {request.register_type.value} at {request.address} cancelled"
            )

        loop = asyncio.get_running_loop()
        async with self._lock:
            started = loop.time()
            handle = self._transport.submit(request, unit_id)
            waiters: set[asyncio.Future[Any]] = {handle}
            cancel_waiter: asyncio.Future[Any] | None = None
            if cancel is not None:
                cancel_waiter = asyncio.ensure_future(cancel.wait())
                waiters.add(cancel_waiter)
            try:
                done, _ = await asyncio.wait(
                    waiters, timeout=timeout, return_when=asyncio.FIRST_COMPLETED
                )
            finally:
                if cancel_waiter is not None:
                    cancel_waiter.cancel()
                if not handle.done():
                    handle.cancel()

        if handle in done:
            return handle.result()
        if cancel_waiter is not None and cancel_waiter in done:
            raise OperationCancelledError(
                f"Read of {request.register_type.value} at {request.address} cancelled"
            )
        raise RequestTimeoutError(request.address, unit_id, loop.time() - started)


__all__ = ["ModbusClient"]
