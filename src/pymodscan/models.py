"""Request and response models for the four Modbus read operations.

A read request is one of four frozen dataclasses, tagged by
:class:`RegisterType`. The unit id is not part of the request; it travels
alongside it into the transport, the same way a Modbus PDU is wrapped in an
MBAP header.

:class:`ReadResponse` holds the raw payload handed back by the transport.
It is transport-owned and short-lived: consumers decode it inside a
``with`` block, which releases the buffer on every exit path.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import ClassVar

from .constants import MAX_ADDRESS, MAX_READ_BITS, MAX_READ_REGISTERS, MAX_UNIT_ID
from .exceptions import InvalidArgumentError


class RegisterType(str, Enum):
    """Addressable Modbus data category.

    String enum for easy logging and serialization.
    """

    COILS = "coils"
    DISCRETE_INPUTS = "discrete_inputs"
    HOLDING_REGISTERS = "holding_registers"
    INPUT_REGISTERS = "input_registers"

    @property
    def function_code(self) -> int:
        """Modbus function code used to read this category."""
        return _FUNCTION_CODES[self]

    @property
    def is_bit(self) -> bool:
        """True for single-bit categories (coils, discrete inputs)."""
        return self in (RegisterType.COILS, RegisterType.DISCRETE_INPUTS)

    @property
    def max_quantity(self) -> int:
        """Largest quantity a single request may ask for."""
        return MAX_READ_BITS if self.is_bit else MAX_READ_REGISTERS


_FUNCTION_CODES: dict[RegisterType, int] = {
    RegisterType.COILS: 0x01,
    RegisterType.DISCRETE_INPUTS: 0x02,
    RegisterType.HOLDING_REGISTERS: 0x03,
    RegisterType.INPUT_REGISTERS: 0x04,
}


@dataclass(frozen=True)
class _ReadRequest:
    address: int
    quantity: int

    register_type: ClassVar[RegisterType]

    def validate(self) -> None:
        """Check address and quantity against the protocol limits.

        Raises:
            InvalidArgumentError: If address or quantity is out of range
        """
        kind = self.register_type.value
        if self.address < 0 or self.address > MAX_ADDRESS:
            raise InvalidArgumentError(
                f"{kind} address must be between 0 and {MAX_ADDRESS}, got {self.address}"
            )
        limit = self.register_type.max_quantity
        if self.quantity < 1 or self.quantity > limit:
            raise InvalidArgumentError(
                f"{kind} quantity must be between 1 and {limit}, got {self.quantity}"
            )
        if self.address + self.quantity > MAX_ADDRESS + 1:
            raise InvalidArgumentError(
                f"{kind} read of {self.quantity} at {self.address} runs past address {MAX_ADDRESS}"
            )


@dataclass(frozen=True)
class ReadHoldingRegistersRequest(_ReadRequest):
    """Read holding registers (FC3)."""

    register_type: ClassVar[RegisterType] = RegisterType.HOLDING_REGISTERS


@dataclass(frozen=True)
class ReadInputRegistersRequest(_ReadRequest):
    """Read input registers (FC4)."""

    register_type: ClassVar[RegisterType] = RegisterType.INPUT_REGISTERS


@dataclass(frozen=True)
class ReadCoilsRequest(_ReadRequest):
    """Read coils (FC1)."""

    register_type: ClassVar[RegisterType] = RegisterType.COILS


@dataclass(frozen=True)
class ReadDiscreteInputsRequest(_ReadRequest):
    """Read discrete inputs (FC2)."""

    register_type: ClassVar[RegisterType] = RegisterType.DISCRETE_INPUTS


ReadRequest = (
    ReadHoldingRegistersRequest
    | ReadInputRegistersRequest
    | ReadCoilsRequest
    | ReadDiscreteInputsRequest
)


def validate_unit_id(unit_id: int) -> None:
    """Raise InvalidArgumentError unless unit_id fits in one byte."""
    if unit_id < 0 or unit_id > MAX_UNIT_ID:
        raise InvalidArgumentError(f"unit_id must be between 0 and {MAX_UNIT_ID}, got {unit_id}")


@dataclass
class ReadResponse:
    """Raw payload of a completed read.

    Register payloads are the big-endian byte image of the returned words.
    Bit payloads are packed least-significant-bit first, eight per byte,
    matching the Modbus wire layout.

    Attributes:
        request: The request this response answers
        payload: Raw response bytes (emptied on release)
        released: True once the payload has been released
    """

    request: ReadRequest
    payload: bytearray = field(default_factory=bytearray)
    released: bool = False

    @classmethod
    def from_registers(cls, request: ReadRequest, registers: list[int]) -> ReadResponse:
        """Build a response from 16-bit register words."""
        payload = bytearray()
        for word in registers:
            payload += (word & 0xFFFF).to_bytes(2, "big")
        return cls(request, payload)

    @classmethod
    def from_bits(cls, request: ReadRequest, bits: list[bool]) -> ReadResponse:
        """Build a response from coil/discrete-input status bits."""
        payload = bytearray((len(bits) + 7) // 8)
        for index, bit in enumerate(bits):
            if bit:
                payload[index // 8] |= 1 << (index % 8)
        return cls(request, payload)

    def release(self) -> None:
        """Drop the payload buffer. Safe to call more than once."""
        self.payload.clear()
        self.released = True

    def __enter__(self) -> ReadResponse:
        return self

    def __exit__(self, *exc_info: object) -> None:
        self.release()


__all__ = [
    "ReadCoilsRequest",
    "ReadDiscreteInputsRequest",
    "ReadHoldingRegistersRequest",
    "ReadInputRegistersRequest",
    "ReadRequest",
    "ReadResponse",
    "RegisterType",
    "validate_unit_id",
]
