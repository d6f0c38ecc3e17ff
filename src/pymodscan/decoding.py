"""Payload decoding for register and bit reads."""

from __future__ import annotations

import math
import struct

from .constants import FLOAT32_BYTES
from .exceptions import DecodeError

_FLOAT32_BE = struct.Struct(">f")


def decode_float32(payload: bytes | bytearray) -> float:
    """Decode the first two registers of a payload as a big-endian float32.

    Args:
        payload: Register payload, high word first

    Returns:
        The decoded float (may be inf or nan, see is_finite_value)

    Raises:
        DecodeError: If the payload holds fewer than 4 bytes
    """
    if len(payload) < FLOAT32_BYTES:
        raise DecodeError(
            f"float32 needs {FLOAT32_BYTES} payload bytes, got {len(payload)}"
        )
    value: float = _FLOAT32_BE.unpack_from(payload, 0)[0]
    return value


def decode_bit(payload: bytes | bytearray) -> bool:
    """Return the status of the first (lowest) bit in a packed bit payload."""
    if not payload:
        raise DecodeError("bit payload is empty")
    return bool(payload[0] & 0x01)


def encode_float32(value: float) -> list[int]:
    """Encode a float as two big-endian register words (high word first)."""
    raw = _FLOAT32_BE.pack(value)
    return [int.from_bytes(raw[0:2], "big"), int.from_bytes(raw[2:4], "big")]


def is_finite_value(value: float) -> bool:
    """False for +inf, -inf and nan."""
    return math.isfinite(value)


__all__ = ["decode_bit", "decode_float32", "encode_float32", "is_finite_value"]
