"""
Search state container.

Holds the query, filter set, sort option and the paginated result cache.
The URL is the canonical source of the query/filters/sort triple:
hydrate_from_url replaces them in one step, and every later change emits
the canonical query string through the optional url_writer.
"""

import logging
from collections.abc import Callable
from typing import Any

from pydantic import ValidationError as PydanticValidationError

from hotel_booking_client.clients.hotel_api import HotelApi
from hotel_booking_client.models.hotel import Hotel
from hotel_booking_client.models.search import (
    SearchFilters,
    SearchResults,
    SearchSortOption,
)
from hotel_booking_client.state.recent_searches import RecentSearches
from hotel_booking_client.state.url_sync import (
    DEFAULT_SORT,
    SearchSnapshot,
    build_search_params,
    parse_search_params,
)
from hotel_booking_client.utils.exceptions import HotelBookingError, ValidationError
from hotel_booking_client.utils.notifications import Notifier
from hotel_booking_client.utils.validators import validate_pagination_params

logger = logging.getLogger(__name__)

DEFAULT_PAGE_SIZE = 20


def _filter_field_name(key: str) -> str:
    """Resolve a filter key given by field name or wire alias."""
    fields = SearchFilters.model_fields
    if key in fields:
        return key
    for name, info in fields.items():
        if info.alias == key:
            return name
    raise ValidationError(f"Unknown search filter: {key}")


class SearchState:
    """Search query, filters, sort and result pagination."""

    def __init__(
        self,
        notifier: Notifier | None = None,
        recent_searches: RecentSearches | None = None,
        url_writer: Callable[[str], None] | None = None,
    ) -> None:
        self.notifier = notifier or Notifier()
        self.recent_searches = recent_searches
        self.url_writer = url_writer

        self.search_query = ""
        self.filters = SearchFilters()
        self.sort_by = DEFAULT_SORT
        self.is_searching = False
        self.search_results: list[Hotel] = []
        self.total_results = 0
        self.current_page = 1
        self.has_more = True
        self.current_url = ""
        self._page_size = DEFAULT_PAGE_SIZE

    # URL synchronization

    def snapshot(self) -> SearchSnapshot:
        return SearchSnapshot(
            query=self.search_query, filters=self.filters, sort_by=self.sort_by
        )

    def hydrate_from_url(self, query: str) -> SearchSnapshot:
        """Replace query, filters and sort with the values parsed from a URL."""
        snapshot = parse_search_params(query)
        self.search_query = snapshot.query
        self.filters = snapshot.filters
        self.sort_by = SearchSortOption(snapshot.sort_by)
        self.reset_pagination()
        self._sync_url()
        return snapshot

    def _sync_url(self) -> None:
        url = build_search_params(self.snapshot())
        if url == self.current_url:
            return
        self.current_url = url
        if self.url_writer:
            self.url_writer(url)

    # Query, filters and sort

    def set_search_query(self, query: str) -> None:
        self.search_query = query
        self._sync_url()

    def set_filters(
        self, filters: SearchFilters | Callable[[SearchFilters], SearchFilters]
    ) -> None:
        self.filters = filters(self.filters) if callable(filters) else filters
        self._sync_url()

    def set_sort_by(self, sort_by: SearchSortOption | str) -> None:
        self.sort_by = SearchSortOption(sort_by)
        self.reset_pagination()
        self._sync_url()

    def apply_filters(self, updates: dict[str, Any] | None = None, **kwargs: Any) -> None:
        """
        Merge partial filter changes and restart pagination.

        Keys may be field names or wire aliases.

        Raises:
            ValidationError: On an unknown key or an invalid value
        """
        merged = self.filters.model_dump()
        for key, value in {**(updates or {}), **kwargs}.items():
            merged[_filter_field_name(key)] = value

        try:
            self.filters = SearchFilters.model_validate(merged)
        except PydanticValidationError as e:
            raise ValidationError(f"Invalid search filters: {e}") from e

        self.reset_pagination()
        self._sync_url()

    def remove_filter(self, key: str) -> None:
        """Unset one filter dimension and restart pagination."""
        name = _filter_field_name(key)
        empty = [] if isinstance(getattr(self.filters, name), list) else None
        setattr(self.filters, name, empty)
        self.reset_pagination()
        self._sync_url()

    def clear_filters(self) -> None:
        self.filters = SearchFilters()
        self.reset_pagination()
        self._sync_url()

    def clear_search(self) -> None:
        self.search_query = ""
        self.filters = SearchFilters()
        self.sort_by = DEFAULT_SORT
        self.search_results = []
        self.total_results = 0
        self.reset_pagination()
        self._sync_url()

    def get_active_filters_count(self) -> int:
        return self.filters.active_count()

    def reset_pagination(self) -> None:
        self.current_page = 1
        self.has_more = True

    # Result fetching

    async def search(
        self, hotel_api: HotelApi, page: int = 1, limit: int | None = None
    ) -> bool:
        """
        Fetch one page of results.

        Page 1 replaces the cached results; later pages are appended.

        Returns:
            True when results were received; failures are reported to the
            user and return False
        """
        limit = limit or self._page_size
        try:
            validate_pagination_params(page, limit)
        except ValidationError as e:
            self.notifier.error(e.message)
            return False

        self.is_searching = True
        try:
            response = await hotel_api.search_hotels(
                query=self.search_query or None,
                filters=self.filters,
                sort_by=self.sort_by,
                page=page,
                limit=limit,
            )
        except HotelBookingError as e:
            logger.warning(f"Hotel search failed: {e}")
            return False
        finally:
            self.is_searching = False

        if not response.success:
            self.notifier.error(response.message or response.error or "Search failed")
            return False

        try:
            results = SearchResults.model_validate(response.data or {})
        except PydanticValidationError as e:
            logger.error(f"Malformed search results: {e}")
            self.notifier.error("Search failed")
            return False

        if page == 1:
            self.search_results = list(results.hotels)
        else:
            self.search_results.extend(results.hotels)

        self._page_size = limit
        self.total_results = results.total_results
        self.current_page = page
        self.has_more = page < results.total_pages

        if page == 1 and self.recent_searches and self.filters.location:
            self.recent_searches.add_search(self.filters.location)

        logger.info(
            "Search completed",
            extra={
                "page": page,
                "received": len(results.hotels),
                "total_results": results.total_results,
            },
        )
        return True

    async def load_more(self, hotel_api: HotelApi) -> bool:
        """Fetch the next page if there is one."""
        if not self.has_more or self.is_searching:
            return False
        return await self.search(hotel_api, page=self.current_page + 1)

    def to_dict(self) -> dict[str, Any]:
        return {
            "search_query": self.search_query,
            "filters": self.filters.to_api(),
            "sort_by": self.sort_by.value,
            "is_searching": self.is_searching,
            "total_results": self.total_results,
            "current_page": self.current_page,
            "has_more": self.has_more,
            "result_count": len(self.search_results),
            "active_filters": self.get_active_filters_count(),
            "url": self.current_url,
        }
