"""Well-known storage keys."""

ACCESS_TOKEN_KEY = "accessToken"
REFRESH_TOKEN_KEY = "refreshToken"
CART_KEY = "cart"
LANGUAGE_KEY = "language"
THEME_KEY = "theme"
RECENT_SEARCHES_KEY = "recentSearches"
