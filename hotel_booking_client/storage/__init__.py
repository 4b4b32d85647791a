"""Local key-value persistence."""

from hotel_booking_client.storage.keys import (
    ACCESS_TOKEN_KEY,
    CART_KEY,
    LANGUAGE_KEY,
    RECENT_SEARCHES_KEY,
    REFRESH_TOKEN_KEY,
    THEME_KEY,
)
from hotel_booking_client.storage.store import JsonFileStore, KeyValueStore, MemoryStore

__all__ = [
    "ACCESS_TOKEN_KEY",
    "CART_KEY",
    "LANGUAGE_KEY",
    "RECENT_SEARCHES_KEY",
    "REFRESH_TOKEN_KEY",
    "THEME_KEY",
    "JsonFileStore",
    "KeyValueStore",
    "MemoryStore",
]
