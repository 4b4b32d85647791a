"""
Main entry point for the hotel booking MCP server.

This module sets up the FastMCP server with the search, cart and account
tools backed by a single BookingSession.
"""

import asyncio
import json
import logging
import sys
from typing import Any

from fastmcp import FastMCP

from hotel_booking_client import __version__
from hotel_booking_client.config.settings import Settings, get_settings
from hotel_booking_client.session import BookingSession, create_session
from hotel_booking_client.tools import (
    register_auth_tools,
    register_cart_tools,
    register_search_tools,
)
from hotel_booking_client.utils.exceptions import (
    ConfigurationError,
    HotelBookingError,
)

# Attributes every LogRecord has; anything else arrived through `extra=`.
_RECORD_ATTRIBUTES = set(vars(logging.makeLogRecord({}))) | {"message", "asctime"}


class JSONFormatter(logging.Formatter):
    def format(self, record):
        log_entry = {
            "timestamp": self.formatTime(record),
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
            "module": record.module,
            "function": record.funcName,
            "line": record.lineno,
        }

        for key, value in vars(record).items():
            if key not in _RECORD_ATTRIBUTES:
                log_entry[key] = value

        if record.exc_info:
            log_entry["exception"] = self.formatException(record.exc_info)

        return json.dumps(log_entry, default=str)


def setup_logging(settings: Settings) -> None:
    """Setup logging configuration."""
    if settings.enable_structured_logging:
        handler = logging.StreamHandler()
        handler.setFormatter(JSONFormatter())
        logging.root.handlers = [handler]
    else:
        logging.basicConfig(
            level=getattr(logging, settings.log_level.upper()),
            format=settings.log_format,
        )

    logging.getLogger().setLevel(getattr(logging, settings.log_level.upper()))


logger = logging.getLogger(__name__)

# Initialize FastMCP app
app = FastMCP(
    name="hotel-booking-client",
    version=__version__,
)

# Global session (initialized on startup)
session: BookingSession | None = None


def get_session() -> BookingSession:
    """Get the active booking session."""
    if session is None:
        raise ConfigurationError("Booking session not initialized")
    return session


@app.tool()
async def health_check() -> dict[str, Any]:
    """
    Check the MCP server, its configuration and the booking backend.

    Returns:
        Dictionary containing health status information
    """
    current_settings = get_settings()
    checks: dict[str, Any] = {
        "mcp_server": True,
        "configuration": not current_settings.validate_required_settings(),
        "session": session is not None,
        "version": __version__,
    }

    if session is not None:
        checks["client"] = session.api_client.get_client_status()
        checks["authenticated"] = session.auth.is_authenticated
        pending = session.notifier.history
        try:
            response = await session.api_client.health_check()
            checks["backend"] = {"status": "ok" if response.success else "degraded"}
        except HotelBookingError as e:
            logger.warning(f"Backend health check failed: {e}")
            checks["backend"] = {"status": "error", "error": e.message}
        # Connectivity failures are reported here, not as user notifications.
        session.notifier.discard_since(pending)
    else:
        checks["backend"] = {"status": "not_initialized"}

    has_errors = (
        not checks["configuration"]
        or not checks["session"]
        or checks["backend"]["status"] != "ok"
    )

    return {
        "status": "unhealthy" if has_errors else "healthy",
        "checks": checks,
        "timestamp": asyncio.get_running_loop().time(),
    }


@app.tool()
async def get_server_info() -> dict[str, Any]:
    """
    Get server information and configuration details.

    Returns:
        Dictionary containing server information
    """
    current_settings = get_settings()
    return {
        "name": app.name,
        "version": __version__,
        "description": "MCP server for hotel search, cart and account management",
        "api_base_url": current_settings.api_base_url,
        "environment": current_settings.environment,
        "tax_rate": current_settings.tax_rate,
        "currency": current_settings.default_currency,
    }


@app.tool()
async def get_preferences() -> dict[str, Any]:
    """Return the theme and language preferences."""
    return {"success": True, "preferences": get_session().preferences.to_dict()}


@app.tool()
async def set_preferences(
    theme: str | None = None, language: str | None = None
) -> dict[str, Any]:
    """
    Change the theme and/or display language.

    Args:
        theme: light, dark or system
        language: Two-letter language code (en, ar, fr, ...)

    Returns:
        Dictionary containing the updated preferences

    Raises:
        ValidationError: If the theme or language is not supported
    """
    preferences = get_session().preferences
    if theme is not None:
        preferences.set_theme(theme)
    if language is not None:
        preferences.set_language(language)
    return {"success": True, "preferences": preferences.to_dict()}


async def initialize_server() -> None:
    """Initialize server components."""
    global session

    current_settings = get_settings()
    logger.info("Initializing hotel booking MCP server...")
    logger.info(f"Version: {__version__}")
    logger.info(f"Environment: {current_settings.environment}")

    missing_settings = current_settings.validate_required_settings()
    if missing_settings:
        error_msg = (
            f"Missing required environment variables: {', '.join(missing_settings)}"
        )
        logger.error(error_msg)
        raise ConfigurationError(error_msg)

    logger.info("Configuration validated successfully")

    session = create_session(current_settings)
    await session.start()
    logger.info(
        "Booking session initialized",
        extra={
            "authenticated": session.auth.is_authenticated,
            "storage_path": str(current_settings.get_storage_path()),
        },
    )

    logger.info("Registering MCP tools...")
    register_search_tools(app, get_session)
    logger.info("Search tools registered successfully")

    register_cart_tools(app, get_session)
    logger.info("Cart tools registered successfully")

    register_auth_tools(app, get_session)
    logger.info("Account tools registered successfully")

    logger.info("Server initialization completed successfully")


async def main() -> None:
    """Main entry point for the MCP server."""
    try:
        setup_logging(get_settings())

        await initialize_server()

        logger.info("Starting FastMCP server...")
        await app.run_async()

    except KeyboardInterrupt:
        logger.info("Server shutdown requested")

    except ConfigurationError as e:
        logger.error(f"Server startup failed: {e}")
        sys.exit(1)

    finally:
        if session is not None:
            await session.close()
        logger.info("Server shutdown complete")


if __name__ == "__main__":
    asyncio.run(main())
