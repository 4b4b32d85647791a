"""
Search state <-> URL query string codec.

The URL is the canonical source: parse_search_params turns a query string
into a complete SearchSnapshot that replaces the search state, and
build_search_params renders the state back into the canonical query string.

Query parameters: q, location, checkin, checkout, guests, rooms, minPrice,
maxPrice, starRating, propertyType, sort. Dates are YYYY-MM-DD, lists are
comma-separated, and defaults (guests=2, rooms=1, sort=POPULARITY) are
omitted.
"""

import logging
from dataclasses import dataclass, field
from datetime import date

import httpx

from hotel_booking_client.models.hotel import PropertyType
from hotel_booking_client.models.search import (
    DEFAULT_GUESTS,
    DEFAULT_ROOMS,
    SearchFilters,
    SearchSortOption,
)

logger = logging.getLogger(__name__)

DEFAULT_SORT = SearchSortOption.POPULARITY


@dataclass
class SearchSnapshot:
    """The URL-visible part of the search state."""

    query: str = ""
    filters: SearchFilters = field(default_factory=SearchFilters)
    sort_by: SearchSortOption = DEFAULT_SORT


def _query_params(query: str | httpx.QueryParams) -> httpx.QueryParams:
    if isinstance(query, httpx.QueryParams):
        return query
    if "://" in query:
        return httpx.URL(query).params
    return httpx.QueryParams(query.split("?", 1)[-1])


def _parse_date(value: str | None) -> date | None:
    if not value:
        return None
    try:
        return date.fromisoformat(value)
    except ValueError:
        logger.debug(f"Ignoring invalid date in URL: {value}")
        return None


def _parse_int(value: str | None, default: int) -> int:
    if not value:
        return default
    try:
        return int(value)
    except ValueError:
        logger.debug(f"Ignoring invalid integer in URL: {value}")
        return default


def _parse_float(value: str | None) -> float | None:
    if not value:
        return None
    try:
        return float(value)
    except ValueError:
        return None


def _split(value: str | None) -> list[str]:
    if not value:
        return []
    return [part.strip() for part in value.split(",") if part.strip()]


def _format_number(value: float) -> str:
    if float(value).is_integer():
        return str(int(value))
    return repr(float(value))


def parse_search_params(query: str | httpx.QueryParams) -> SearchSnapshot:
    """
    Parse a query string (or full URL) into a search snapshot.

    Invalid values fall back to the defaults instead of raising.
    """
    params = _query_params(query)

    star_rating = []
    for value in _split(params.get("starRating")):
        try:
            star_rating.append(int(value))
        except ValueError:
            logger.debug(f"Ignoring invalid star rating in URL: {value}")

    valid_types = {p.value for p in PropertyType}
    property_type = [
        value for value in _split(params.get("propertyType")) if value in valid_types
    ]

    min_price = _parse_float(params.get("minPrice"))
    max_price = _parse_float(params.get("maxPrice"))
    price_range = (
        (min_price, max_price)
        if min_price is not None and max_price is not None
        else None
    )

    filters = SearchFilters(
        location=params.get("location") or "",
        check_in_date=_parse_date(params.get("checkin")),
        check_out_date=_parse_date(params.get("checkout")),
        guests=_parse_int(params.get("guests"), DEFAULT_GUESTS),
        rooms=_parse_int(params.get("rooms"), DEFAULT_ROOMS),
        price_range=price_range,
        star_rating=star_rating,
        property_type=property_type,
    )

    sort_value = params.get("sort")
    try:
        sort_by = SearchSortOption(sort_value) if sort_value else DEFAULT_SORT
    except ValueError:
        logger.debug(f"Ignoring unknown sort option in URL: {sort_value}")
        sort_by = DEFAULT_SORT

    return SearchSnapshot(
        query=params.get("q") or "", filters=filters, sort_by=sort_by
    )


def build_search_params(snapshot: SearchSnapshot) -> str:
    """Render a snapshot as a query string ("" when everything is default)."""
    filters = snapshot.filters
    items: list[tuple[str, str]] = []

    if snapshot.query:
        items.append(("q", snapshot.query))
    if filters.location:
        items.append(("location", filters.location))
    if filters.check_in_date:
        items.append(("checkin", filters.check_in_date.isoformat()))
    if filters.check_out_date:
        items.append(("checkout", filters.check_out_date.isoformat()))
    if filters.guests and filters.guests != DEFAULT_GUESTS:
        items.append(("guests", str(filters.guests)))
    if filters.rooms and filters.rooms != DEFAULT_ROOMS:
        items.append(("rooms", str(filters.rooms)))
    if filters.price_range is not None:
        items.append(("minPrice", _format_number(filters.price_range[0])))
        items.append(("maxPrice", _format_number(filters.price_range[1])))
    if filters.star_rating:
        items.append(("starRating", ",".join(str(s) for s in filters.star_rating)))
    if filters.property_type:
        items.append(("propertyType", ",".join(filters.property_type)))

    sort_by = SearchSortOption(snapshot.sort_by)
    if sort_by != DEFAULT_SORT:
        items.append(("sort", sort_by.value))

    if not items:
        return ""
    return f"?{httpx.QueryParams(items)}"
