"""
Search filter and result models.

SearchFilters is a plain configuration bag; the only defaults that matter
are guests=2 and rooms=1, which are not counted as active filters.
"""

from datetime import date
from enum import Enum
from typing import Any

from pydantic import Field

from hotel_booking_client.models.common import BookingBaseModel
from hotel_booking_client.models.hotel import Hotel, PropertyType

DEFAULT_GUESTS = 2
DEFAULT_ROOMS = 1


class SearchSortOption(str, Enum):
    """Result ordering."""

    PRICE_LOW_TO_HIGH = "PRICE_LOW_TO_HIGH"
    PRICE_HIGH_TO_LOW = "PRICE_HIGH_TO_LOW"
    RATING_HIGH_TO_LOW = "RATING_HIGH_TO_LOW"
    DISTANCE = "DISTANCE"
    POPULARITY = "POPULARITY"
    NEWEST = "NEWEST"


class Coordinates(BookingBaseModel):
    """Geo-radius constraint."""

    lat: float
    lng: float
    radius: float


class SearchFilters(BookingBaseModel):
    """Filter dimensions for a hotel search."""

    location: str | None = ""
    check_in_date: date | None = Field(None, alias="checkInDate")
    check_out_date: date | None = Field(None, alias="checkOutDate")
    guests: int | None = DEFAULT_GUESTS
    rooms: int | None = DEFAULT_ROOMS
    price_range: tuple[float, float] | None = Field(None, alias="priceRange")
    star_rating: list[int] = Field(default_factory=list, alias="starRating")
    property_type: list[PropertyType] = Field(
        default_factory=list, alias="propertyType"
    )
    amenities: list[str] = Field(default_factory=list)
    review_score: float | None = Field(None, alias="reviewScore")
    distance: float | None = None
    coordinates: Coordinates | None = None
    free_cancellation: bool | None = Field(None, alias="freeCancellation")
    breakfast_included: bool | None = Field(None, alias="breakfastIncluded")
    pet_friendly: bool | None = Field(None, alias="petFriendly")

    def active_count(self) -> int:
        """Count filter dimensions that differ from the defaults."""
        checks = [
            bool(self.location),
            bool(self.check_in_date and self.check_out_date),
            bool(self.guests and self.guests != DEFAULT_GUESTS),
            bool(self.rooms and self.rooms != DEFAULT_ROOMS),
            self.price_range is not None,
            bool(self.star_rating),
            bool(self.property_type),
            bool(self.amenities),
            bool(self.review_score),
            bool(self.distance),
            bool(self.free_cancellation),
            bool(self.breakfast_included),
            bool(self.pet_friendly),
        ]
        return sum(checks)

    def to_api_params(self) -> dict[str, Any]:
        """Flatten the filters into query parameters for the search endpoint."""
        params: dict[str, Any] = {}

        if self.location:
            params["location"] = self.location
        if self.check_in_date:
            params["checkInDate"] = self.check_in_date.isoformat()
        if self.check_out_date:
            params["checkOutDate"] = self.check_out_date.isoformat()
        if self.guests:
            params["guests"] = self.guests
        if self.rooms:
            params["rooms"] = self.rooms
        if self.price_range is not None:
            params["minPrice"], params["maxPrice"] = self.price_range
        if self.star_rating:
            params["starRating"] = ",".join(str(s) for s in self.star_rating)
        if self.property_type:
            params["propertyType"] = ",".join(str(p) for p in self.property_type)
        if self.amenities:
            params["amenities"] = ",".join(self.amenities)
        if self.review_score is not None:
            params["reviewScore"] = self.review_score
        if self.distance is not None:
            params["distance"] = self.distance
        if self.coordinates is not None:
            params["lat"] = self.coordinates.lat
            params["lng"] = self.coordinates.lng
            params["radius"] = self.coordinates.radius
        for key, value in (
            ("freeCancellation", self.free_cancellation),
            ("breakfastIncluded", self.breakfast_included),
            ("petFriendly", self.pet_friendly),
        ):
            if value is not None:
                params[key] = "true" if value else "false"

        return params


class SearchResults(BookingBaseModel):
    """One page of search results."""

    hotels: list[Hotel] = Field(default_factory=list)
    total_results: int = Field(0, alias="totalResults")
    filters: dict[str, Any] | None = None
    sort_by: SearchSortOption | None = Field(None, alias="sortBy")
    page: int = 1
    total_pages: int = Field(1, alias="totalPages")
