"""Pytest configuration and fixtures for pymodscan tests."""

from __future__ import annotations

import asyncio

import pytest

from pymodscan.client import ModbusClient
from pymodscan.decoding import encode_float32
from pymodscan.models import ReadRequest, ReadResponse
from pymodscan.transports.config import Endpoint
from pymodscan.transports.exceptions import TransportConnectionError


class FakeTransport:
    """Simulated Modbus device implementing the ReadTransport protocol.

    Every register read returns ``default`` encoded as a float32 unless the
    address is overridden. Addresses can be set to fail, to return a raw
    register payload, or to never answer.
    """

    def __init__(self, default: float = 23.5, delay: float = 0.0) -> None:
        self.default = default
        self.delay = delay
        self.values: dict[int, float] = {}
        self.raw_registers: dict[int, list[int]] = {}
        self.bits: dict[int, list[bool]] = {}
        self.failures: dict[int, list[BaseException]] = {}
        self.hang: set[int] = set()
        self.connect_error: BaseException | None = None
        self.requests: list[tuple[ReadRequest, int]] = []
        self.responses: list[ReadResponse] = []
        self.connect_calls = 0
        self.disconnect_calls = 0
        self.in_flight = 0
        self.max_in_flight = 0
        self._connected = False

    @property
    def connected(self) -> bool:
        return self._connected

    async def connect(self) -> None:
        self.connect_calls += 1
        if self.connect_error is not None:
            raise self.connect_error
        self._connected = True

    async def disconnect(self) -> None:
        self.disconnect_calls += 1
        self._connected = False

    def fail(self, address: int, error: BaseException, times: int = 1) -> None:
        """Make the next ``times`` reads at ``address`` fail with ``error``."""
        self.failures.setdefault(address, []).extend([error] * times)

    def submit(self, request: ReadRequest, unit_id: int) -> asyncio.Future[ReadResponse]:
        if not self._connected:
            raise TransportConnectionError("fake transport not connected")
        self.requests.append((request, unit_id))

        loop = asyncio.get_running_loop()
        future: asyncio.Future[ReadResponse] = loop.create_future()
        address = request.address
        if address in self.hang:
            return future

        pending = self.failures.get(address)
        if pending:
            future.set_exception(pending.pop(0))
            return future

        response = self._build_response(request)
        self.responses.append(response)
        self.in_flight += 1
        self.max_in_flight = max(self.max_in_flight, self.in_flight)
        future.add_done_callback(self._finish)
        if self.delay:
            loop.call_later(self.delay, _resolve, future, response)
        else:
            future.set_result(response)
        return future

    def _finish(self, _future: asyncio.Future[ReadResponse]) -> None:
        self.in_flight -= 1

    def _build_response(self, request: ReadRequest) -> ReadResponse:
        address = request.address
        if request.register_type.is_bit:
            bits = self.bits.get(address, [False] * request.quantity)
            return ReadResponse.from_bits(request, bits)
        if address in self.raw_registers:
            return ReadResponse.from_registers(request, self.raw_registers[address])
        registers = encode_float32(self.values.get(address, self.default))
        return ReadResponse.from_registers(request, registers)


def _resolve(future: asyncio.Future[ReadResponse], response: ReadResponse) -> None:
    if not future.done():
        future.set_result(response)


@pytest.fixture
def endpoint() -> Endpoint:
    """Endpoint for a simulated device."""
    return Endpoint(host="192.168.1.100", port=502)


@pytest.fixture
def fake_transport() -> FakeTransport:
    """Simulated device returning 23.5 at every register address."""
    return FakeTransport()


@pytest.fixture
def client(endpoint: Endpoint, fake_transport: FakeTransport) -> ModbusClient:
    """Client wired to the simulated device, already connected."""
    fake_transport._connected = True
    return ModbusClient(endpoint, transport=fake_transport, retry_delay=0.0)
