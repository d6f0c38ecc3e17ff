"""Endpoint configuration for Modbus TCP connections.

Example:
    endpoint = Endpoint(host="192.168.1.100", port=502)
    endpoint.validate()

    # Serialize to dict for storage
    data = endpoint.to_dict()

    # Restore from dict
    restored = Endpoint.from_dict(data)
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any

from pymodscan.constants import DEFAULT_CONNECT_TIMEOUT, DEFAULT_PORT


@dataclass(frozen=True)
class Endpoint:
    """Remote device address.

    Immutable once a client has been built around it.

    Attributes:
        host: IP address or hostname of the device or gateway
        port: TCP port (default 502)
        timeout: Connect-level timeout in seconds (default 20.0)
    """

    host: str
    port: int = DEFAULT_PORT
    timeout: float = DEFAULT_CONNECT_TIMEOUT

    def validate(self) -> None:
        """Validate endpoint values.

        Raises:
            ValueError: If host is empty, port is out of range or timeout
                is not positive
        """
        if not self.host:
            raise ValueError("host is required")
        if not 1 <= self.port <= 65535:
            raise ValueError(f"port must be between 1 and 65535, got {self.port}")
        if self.timeout <= 0:
            raise ValueError(f"timeout must be positive, got {self.timeout}")

    def to_dict(self) -> dict[str, Any]:
        """Convert to a JSON-serializable dictionary."""
        return {
            "host": self.host,
            "port": self.port,
            "timeout": self.timeout,
        }

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> Endpoint:
        """Create an endpoint from a dictionary produced by to_dict()."""
        return cls(
            host=data.get("host", ""),
            port=int(data.get("port", DEFAULT_PORT)),
            timeout=float(data.get("timeout", DEFAULT_CONNECT_TIMEOUT)),
        )

    def __str__(self) -> str:
        return f"{self.host}:{self.port}"


__all__ = ["Endpoint"]
