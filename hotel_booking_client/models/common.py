"""
Common data models for the hotel booking client.

Provides base models and common structures used across
the hotel, user, cart and search domains.
"""

from typing import Any

from pydantic import BaseModel, ConfigDict, Field


class BookingBaseModel(BaseModel):
    """Base model for all booking entities."""

    model_config = ConfigDict(
        extra="allow",  # Allow extra fields from API responses
        use_enum_values=True,
        validate_assignment=True,
        populate_by_name=True,
    )

    def to_api(self) -> dict[str, Any]:
        """Serialize with wire (camelCase) names, dropping unset optionals."""
        return self.model_dump(mode="json", by_alias=True, exclude_none=True)


class Money(BookingBaseModel):
    """Money/currency model."""

    amount: float
    currency_code: str = Field("USD", alias="currencyCode")


class ApiEnvelope(BookingBaseModel):
    """Uniform response envelope returned by every backend endpoint."""

    success: bool
    data: Any = None
    message: str | None = None
    error: str | None = None
    status_code: int | None = Field(None, alias="statusCode")


class PaginationInfo(BookingBaseModel):
    """Pagination information model."""

    page: int = 1
    limit: int = 10
    total: int = 0
    total_pages: int = Field(0, alias="totalPages")
    has_next_page: bool = Field(False, alias="hasNextPage")
    has_prev_page: bool = Field(False, alias="hasPrevPage")
