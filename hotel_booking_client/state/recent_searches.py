"""Recently searched locations and the static popular destination list."""

import json
import logging

from hotel_booking_client.storage import RECENT_SEARCHES_KEY, KeyValueStore

logger = logging.getLogger(__name__)

MAX_RECENT_SEARCHES = 5

POPULAR_DESTINATIONS: list[dict[str, str]] = [
    {"city": "New York", "country": "USA"},
    {"city": "Paris", "country": "France"},
    {"city": "Tokyo", "country": "Japan"},
    {"city": "London", "country": "UK"},
    {"city": "Dubai", "country": "UAE"},
    {"city": "Barcelona", "country": "Spain"},
    {"city": "Rome", "country": "Italy"},
    {"city": "Sydney", "country": "Australia"},
]


class RecentSearches:
    """Most-recent-first list of unique searched locations."""

    def __init__(self, storage: KeyValueStore) -> None:
        self.storage = storage
        self._searches: list[str] = self._load()

    @property
    def searches(self) -> list[str]:
        return list(self._searches)

    def add_search(self, location: str) -> None:
        if not location.strip():
            return
        self._searches = [location] + [s for s in self._searches if s != location]
        self._searches = self._searches[:MAX_RECENT_SEARCHES]
        self.storage.set(RECENT_SEARCHES_KEY, json.dumps(self._searches))

    def clear_searches(self) -> None:
        self._searches = []
        self.storage.remove(RECENT_SEARCHES_KEY)

    def _load(self) -> list[str]:
        saved = self.storage.get(RECENT_SEARCHES_KEY)
        if not saved:
            return []
        try:
            searches = json.loads(saved)
        except json.JSONDecodeError as e:
            logger.error(f"Error parsing recent searches: {e}")
            return []
        if not isinstance(searches, list):
            return []
        return [str(s) for s in searches][:MAX_RECENT_SEARCHES]
