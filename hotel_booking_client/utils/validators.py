"""
Input validation utilities for the hotel booking client.

Provides common validation functions for stay dates, search parameters
and form data used throughout the application.
"""

import math
import re
from datetime import UTC, date, datetime, time
from typing import Any

from hotel_booking_client.utils.exceptions import ValidationError

SECONDS_PER_DAY = 24 * 60 * 60


def validate_date_string(date_str: str) -> date:
    """
    Validate and parse date string in YYYY-MM-DD format.

    Args:
        date_str: Date string to validate

    Returns:
        Parsed date object

    Raises:
        ValidationError: If date format is invalid
    """
    try:
        return datetime.strptime(date_str, "%Y-%m-%d").date()
    except ValueError as e:
        raise ValidationError(f"Invalid date format '{date_str}': {e}") from e


def as_datetime(value: date | datetime | str) -> datetime:
    """
    Coerce a date, datetime or YYYY-MM-DD string to a naive datetime.

    Offset-aware values are converted to UTC first so mixed inputs compare.
    """
    if isinstance(value, str):
        try:
            value = datetime.fromisoformat(value)
        except ValueError as e:
            raise ValidationError(f"Invalid date '{value}': {e}") from e
    if isinstance(value, datetime):
        return _to_naive_utc(value)
    if isinstance(value, date):
        return datetime.combine(value, time.min)
    raise ValidationError(f"Unsupported date value: {value!r}")


def _to_naive_utc(value: datetime) -> datetime:
    if value.tzinfo is None:
        return value
    return value.astimezone(UTC).replace(tzinfo=None)


def calculate_nights(check_in: datetime, check_out: datetime) -> int:
    """
    Number of nights between two instants, rounded up to whole days.

    Raises:
        ValidationError: If the stay is shorter than one night
    """
    seconds = (check_out - check_in).total_seconds()
    nights = math.ceil(seconds / SECONDS_PER_DAY)
    if nights < 1:
        raise ValidationError(
            "Check-out must be at least one night after check-in",
            details={
                "check_in": check_in.isoformat(),
                "check_out": check_out.isoformat(),
            },
        )
    return nights


def validate_positive_count(value: int, field_name: str) -> int:
    """Validate guest and room counts."""
    if isinstance(value, bool) or not isinstance(value, int) or value < 1:
        raise ValidationError(f"{field_name} must be a positive integer")
    return value


def validate_email(email: str) -> str:
    """
    Validate email address format.

    Args:
        email: Email address to validate

    Returns:
        Validated email address

    Raises:
        ValidationError: If email format is invalid
    """
    if not email:
        raise ValidationError("Email address cannot be empty")

    email_pattern = r"^[a-zA-Z0-9._%+-]+@[a-zA-Z0-9.-]+\.[a-zA-Z]{2,}$"
    if not re.match(email_pattern, email):
        raise ValidationError(f"Invalid email address format '{email}'")

    return email.lower()


def validate_pagination_params(page: int, page_size: int) -> tuple[int, int]:
    """
    Validate pagination parameters.

    Args:
        page: Page number
        page_size: Items per page

    Returns:
        Tuple of validated (page, page_size)

    Raises:
        ValidationError: If pagination parameters are invalid
    """
    if page < 1:
        raise ValidationError("Page number must be 1 or greater")

    if page_size < 1:
        raise ValidationError("Page size must be 1 or greater")

    if page_size > 100:
        raise ValidationError("Page size cannot exceed 100")

    return page, page_size


def validate_required_fields(data: dict[str, Any], required_fields: list[str]) -> None:
    """
    Validate that required fields are present in data.

    Args:
        data: Data dictionary to validate
        required_fields: List of required field names

    Raises:
        ValidationError: If any required fields are missing
    """
    missing_fields = [field for field in required_fields if field not in data]

    if missing_fields:
        raise ValidationError(f"Missing required fields: {', '.join(missing_fields)}")

    empty_fields = [
        field
        for field in required_fields
        if not data.get(field) and data.get(field) != 0
    ]

    if empty_fields:
        raise ValidationError(f"Empty required fields: {', '.join(empty_fields)}")
