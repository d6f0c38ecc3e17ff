"""Tests for payload decoding helpers."""

from __future__ import annotations

import math
import struct

import pytest

from pymodscan.decoding import decode_bit, decode_float32, encode_float32, is_finite_value
from pymodscan.exceptions import DecodeError


def _payload(value: float) -> bytes:
    return struct.pack(">f", value)


class TestDecodeFloat32:
    """Tests for decode_float32."""

    @pytest.mark.parametrize("value", [0.0, 23.5, -40.25, 1.5e-3, 3.0e38])
    def test_decodes_known_values(self, value: float) -> None:
        decoded = decode_float32(_payload(value))
        assert decoded == pytest.approx(value, rel=1e-6)

    def test_reads_from_start_of_longer_payload(self) -> None:
        """Only the first two registers are interpreted."""
        payload = _payload(23.5) + _payload(99.0)
        assert decode_float32(payload) == 23.5

    def test_short_payload_raises(self) -> None:
        with pytest.raises(DecodeError, match="got 2"):
            decode_float32(b"\x41\xbc")

    def test_empty_payload_raises(self) -> None:
        with pytest.raises(DecodeError):
            decode_float32(b"")

    def test_infinity_decodes_without_error(self) -> None:
        assert decode_float32(b"\x7f\x80\x00\x00") == math.inf
        assert decode_float32(b"\xff\x80\x00\x00") == -math.inf

    def test_nan_decodes_without_error(self) -> None:
        assert math.isnan(decode_float32(b"\x7f\xc0\x00\x00"))


class TestEncodeFloat32:
    """Tests for encode_float32."""

    def test_high_word_first(self) -> None:
        assert encode_float32(23.5) == [0x41BC, 0x0000]

    def test_encodes_infinity(self) -> None:
        assert encode_float32(math.inf) == [0x7F80, 0x0000]


class TestDecodeBit:
    """Tests for decode_bit."""

    def test_first_bit_set(self) -> None:
        assert decode_bit(b"\x01") is True

    def test_first_bit_clear(self) -> None:
        """Only the lowest bit counts; higher coils are ignored."""
        assert decode_bit(b"\xfe") is False

    def test_empty_payload_raises(self) -> None:
        with pytest.raises(DecodeError, match="empty"):
            decode_bit(b"")


class TestIsFiniteValue:
    """Tests for is_finite_value."""

    def test_finite(self) -> None:
        assert is_finite_value(23.5) is True
        assert is_finite_value(0.0) is True

    def test_non_finite(self) -> None:
        assert is_finite_value(math.inf) is False
        assert is_finite_value(-math.inf) is False
        assert is_finite_value(math.nan) is False
