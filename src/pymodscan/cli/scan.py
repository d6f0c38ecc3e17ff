#!/usr/bin/env python3
"""Periodic holding-register scanner.

Connects to one Modbus TCP device, scans an address range on a fixed
interval and prints each resulting point map.

Connection defaults can be provided in the environment or a ``.env`` file:
``MODSCAN_HOST``, ``MODSCAN_PORT`` and ``MODSCAN_UNIT_ID``.

Usage:
    pymodscan-scan                                 # 127.0.0.1:502, addresses 0-10
    pymodscan-scan --host 192.168.1.100 --start 0 --end 40
    pymodscan-scan --help
"""

from __future__ import annotations

import argparse
import asyncio
import logging
import os
import sys

from dotenv import load_dotenv

from pymodscan import __version__
from pymodscan.client import ModbusClient
from pymodscan.constants import (
    DEFAULT_CONNECT_TIMEOUT,
    DEFAULT_HOST,
    DEFAULT_PORT,
    DEFAULT_REQUEST_TIMEOUT,
    DEFAULT_RETRIES,
    DEFAULT_UNIT_ID,
)
from pymodscan.result import Ok
from pymodscan.scanner import ScanController
from pymodscan.transports.config import Endpoint
from pymodscan.transports.exceptions import TransportConnectionError

_LOGGER = logging.getLogger(__name__)


def create_parser() -> argparse.ArgumentParser:
    """Create argument parser."""
    parser = argparse.ArgumentParser(
        prog="pymodscan-scan",
        description="Poll a Modbus TCP device's holding registers as float32 points.",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  pymodscan-scan
      Scan addresses 0-10 on 127.0.0.1:502, ten times at 1s intervals

  pymodscan-scan --host 192.168.1.100 --unit-id 3
      Scan unit 3 behind a gateway

  pymodscan-scan --host 192.168.1.100 --iterations 0 --interval 5
      Scan every 5 seconds until interrupted

  pymodscan-scan --host 192.168.1.100 --isolate-errors --retries 2
      Retry failed reads twice and keep scanning past bad points
""",
    )
    parser.add_argument("--version", action="version", version=f"%(prog)s {__version__}")

    conn_group = parser.add_argument_group("Connection Options")
    conn_group.add_argument(
        "--host",
        "-H",
        default=os.getenv("MODSCAN_HOST", DEFAULT_HOST),
        help="Device IP address or hostname (default: %(default)s)",
    )
    conn_group.add_argument(
        "--port",
        "-p",
        type=int,
        default=os.getenv("MODSCAN_PORT", str(DEFAULT_PORT)),
        help="Modbus TCP port (default: %(default)s)",
    )
    conn_group.add_argument(
        "--unit-id",
        "-u",
        type=int,
        default=os.getenv("MODSCAN_UNIT_ID", str(DEFAULT_UNIT_ID)),
        help="Modbus unit/slave ID (default: %(default)s)",
    )
    conn_group.add_argument(
        "--connect-timeout",
        type=float,
        default=DEFAULT_CONNECT_TIMEOUT,
        help="Connection timeout in seconds (default: %(default)s)",
    )
    conn_group.add_argument(
        "--timeout",
        type=float,
        default=DEFAULT_REQUEST_TIMEOUT,
        help="Per-read timeout in seconds (default: %(default)s)",
    )
    conn_group.add_argument(
        "--retries",
        type=int,
        default=DEFAULT_RETRIES,
        help="Retries per failed read (default: %(default)s)",
    )

    range_group = parser.add_argument_group("Scan Options")
    range_group.add_argument("--start", type=int, default=0, help="First address (default: 0)")
    range_group.add_argument("--end", type=int, default=10, help="Last address (default: 10)")
    range_group.add_argument(
        "--quantity",
        type=int,
        default=2,
        help="Registers per read (default: 2, one float32)",
    )
    range_group.add_argument(
        "--interval",
        type=float,
        default=1.0,
        help="Seconds between scans (default: 1.0)",
    )
    range_group.add_argument(
        "--iterations",
        type=int,
        default=10,
        help="Number of scans, 0 to run until interrupted (default: 10)",
    )
    range_group.add_argument(
        "--isolate-errors",
        action="store_true",
        help="Record failed reads as empty points instead of failing the scan",
    )

    parser.add_argument("--verbose", "-v", action="store_true", help="Enable debug logging")
    return parser


def format_mapping(mapping: dict[int, float | None]) -> str:
    """Render a scan mapping as ``{address: value, ...}`` with null gaps."""
    parts = [
        f"{address}: {'null' if value is None else f'{value:g}'}"
        for address, value in sorted(mapping.items())
    ]
    return "{" + ", ".join(parts) + "}"


async def run_scans(args: argparse.Namespace) -> int:
    """Connect, scan ``args.iterations`` times and release the client."""
    endpoint = Endpoint(host=args.host, port=args.port, timeout=args.connect_timeout)
    endpoint.validate()

    client = ModbusClient(endpoint, request_timeout=args.timeout, retries=args.retries)
    controller = ScanController(client, isolate_errors=args.isolate_errors)

    try:
        await client.connect()
        iteration = 0
        while args.iterations == 0 or iteration < args.iterations:
            result = await controller.run(args.start, args.end, args.quantity, args.unit_id)
            if isinstance(result, Ok):
                print(format_mapping(result.value))
            else:
                print(f"Scan failed: {result.message}", file=sys.stderr)
            iteration += 1
            if args.iterations == 0 or iteration < args.iterations:
                await asyncio.sleep(args.interval)
    except TransportConnectionError as err:
        print(f"Connection failed: {err}", file=sys.stderr)
        return 1
    finally:
        await client.release()

    return 0


def main(argv: list[str] | None = None) -> int:
    """CLI entry point."""
    load_dotenv()
    args = create_parser().parse_args(argv)

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.INFO,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )

    try:
        return asyncio.run(run_scans(args))
    except ValueError as err:
        print(f"Invalid configuration: {err}", file=sys.stderr)
        return 2
    except KeyboardInterrupt:
        _LOGGER.info("Interrupted")
        return 130


if __name__ == "__main__":
    sys.exit(main())
