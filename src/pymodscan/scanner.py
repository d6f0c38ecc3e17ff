"""Address-range scanning over holding registers.

ScanController walks ``start, start + 2, ..., <= end`` and reads one float32
per step. Values that decode as infinity or NaN are recorded as ``None`` and
logged; the scan carries on. Any other error ends the scan with an ``Err``
outcome carrying the error detail and the scan bounds.

With ``isolate_errors=True`` read failures at a single address (timeouts,
transport errors, decode errors) are recorded as ``None`` as well, and only
connection loss, invalid arguments or cancellation end the scan.
"""

from __future__ import annotations

import asyncio
import logging
from typing import TYPE_CHECKING

from .constants import SCAN_STRIDE
from .decoding import is_finite_value
from .exceptions import DecodeError
from .result import Err, Ok, Result
from .transports.exceptions import TransportConnectionError, TransportError

if TYPE_CHECKING:
    from .client import ModbusClient

_LOGGER = logging.getLogger(__name__)

ScanMapping = dict[int, float | None]


class ScanController:
    """Sweep a holding-register range through a ModbusClient.

    Each ``run`` call is independent: the controller keeps no state between
    scans, and every call returns a fresh mapping.

    Example:
        controller = ScanController(client)
        result = await controller.run(0, 10, 2, unit_id=1)
        if result.is_ok:
            for address, value in result.value.items():
                print(address, value)
    """

    def __init__(
        self,
        client: ModbusClient,
        *,
        isolate_errors: bool = False,
        logger: logging.Logger | None = None,
    ) -> None:
        """Initialize the controller.

        Args:
            client: Connected client used for every read
            isolate_errors: Record per-address read failures as None instead
                of failing the whole scan (default False)
            logger: Logger for scan events; defaults to the module logger
        """
        self._client = client
        self._isolate_errors = isolate_errors
        self._logger = logger or _LOGGER

    @property
    def isolate_errors(self) -> bool:
        """True if per-address read failures are isolated."""
        return self._isolate_errors

    async def run(
        self,
        start: int,
        end: int,
        quantity: int,
        unit_id: int,
        *,
        cancel: asyncio.Event | None = None,
    ) -> Result[ScanMapping]:
        """Scan ``start..end`` inclusive with a stride of 2.

        Args:
            start: First address
            end: Last address (included when reachable with the stride)
            quantity: Registers per read (2 for one float32)
            unit_id: Modbus unit/slave ID
            cancel: Event that stops the scan when set

        Returns:
            Ok(mapping) with one entry per visited address, or Err(message)
        """
        if start < 0 or start > end:
            return self._fail(
                "invalid scan range, start must be >= 0 and <= end", start, end
            )

        mapping: ScanMapping = {}
        for address in range(start, end + 1, SCAN_STRIDE):
            try:
                value = await self._client.read_holding_register(
                    address, quantity, unit_id, cancel=cancel
                )
            except (TransportError, DecodeError) as err:
                if not self._isolate_errors or isinstance(err, TransportConnectionError):
                    return self._fail(str(err), start, end)
                self._logger.warning(
                    "Read failed at address %d, recording no value: %s", address, err
                )
                mapping[address] = None
                continue
            except Exception as err:
                return self._fail(str(err) or type(err).__name__, start, end)

            if is_finite_value(value):
                mapping[address] = value
            else:
                self._logger.warning(
                    "Point [%d] decoded to non-finite value %s, recording no value",
                    address,
                    value,
                )
                mapping[address] = None

        return Ok(mapping)

    def _fail(self, detail: str, start: int, end: int) -> Err:
        message = f"Failed to collect monitoring data: {detail}, start = {start}, end = {end}."
        self._logger.error("%s", message)
        return Err(message)


__all__ = ["ScanController", "ScanMapping"]
