#!/usr/bin/env python3
"""Hotel Booking MCP Server - Module Entry Point.

Allows running the server as: python -m hotel_booking_client
"""

import argparse
import asyncio

from hotel_booking_client import __version__


def main() -> None:
    """Main entry point for the hotel booking MCP server."""
    parser = argparse.ArgumentParser(
        description="Hotel Booking MCP Server",
        prog="hotel-booking-client",
    )

    parser.add_argument(
        "--version",
        action="store_true",
        help="Show version information",
    )

    args = parser.parse_args()

    if args.version:
        print(f"Hotel Booking MCP Server v{__version__}")
        return

    from hotel_booking_client.main import main as server_main

    asyncio.run(server_main())


if __name__ == "__main__":
    main()
