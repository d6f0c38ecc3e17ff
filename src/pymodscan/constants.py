"""Protocol limits and default settings for pymodscan."""

from __future__ import annotations

# Connection defaults
DEFAULT_HOST = "127.0.0.1"
DEFAULT_PORT = 502
DEFAULT_CONNECT_TIMEOUT = 20.0  # seconds, bounds connect() and pymodbus I/O
DEFAULT_REQUEST_TIMEOUT = 8.0  # seconds, bounds each read
DEFAULT_UNIT_ID = 1

# Application-level retry defaults (0 = fail on first error)
DEFAULT_RETRIES = 0
DEFAULT_RETRY_DELAY = 0.5

# Modbus payload limits per request (FC1/FC2: 2000 bits, FC3/FC4: 125 words)
MAX_READ_BITS = 2000
MAX_READ_REGISTERS = 125
MAX_ADDRESS = 0xFFFF
MAX_UNIT_ID = 0xFF

# A float32 spans two 16-bit registers
FLOAT32_BYTES = 4
SCAN_STRIDE = 2

__all__ = [
    "DEFAULT_CONNECT_TIMEOUT",
    "DEFAULT_HOST",
    "DEFAULT_PORT",
    "DEFAULT_REQUEST_TIMEOUT",
    "DEFAULT_RETRIES",
    "DEFAULT_RETRY_DELAY",
    "DEFAULT_UNIT_ID",
    "FLOAT32_BYTES",
    "MAX_ADDRESS",
    "MAX_READ_BITS",
    "MAX_READ_REGISTERS",
    "MAX_UNIT_ID",
    "SCAN_STRIDE",
]
