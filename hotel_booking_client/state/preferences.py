"""Theme and language preferences."""

import logging
from collections.abc import Callable
from dataclasses import dataclass

from hotel_booking_client.models.user import User
from hotel_booking_client.storage import LANGUAGE_KEY, THEME_KEY, KeyValueStore
from hotel_booking_client.utils.exceptions import ValidationError

logger = logging.getLogger(__name__)

THEMES = ("light", "dark", "system")
DEFAULT_THEME = "system"
DEFAULT_LANGUAGE = "en"


@dataclass(frozen=True)
class LanguageInfo:
    code: str
    name: str
    native_name: str
    rtl: bool = False


SUPPORTED_LANGUAGES: tuple[LanguageInfo, ...] = (
    LanguageInfo("en", "English", "English"),
    LanguageInfo("ar", "Arabic", "العربية", rtl=True),
    LanguageInfo("fr", "French", "Français"),
    LanguageInfo("es", "Spanish", "Español"),
    LanguageInfo("de", "German", "Deutsch"),
    LanguageInfo("it", "Italian", "Italiano"),
    LanguageInfo("pt", "Portuguese", "Português"),
    LanguageInfo("ru", "Russian", "Русский"),
    LanguageInfo("zh", "Chinese", "中文"),
    LanguageInfo("ja", "Japanese", "日本語"),
    LanguageInfo("ko", "Korean", "한국어"),
)

_LANGUAGES = {info.code: info for info in SUPPORTED_LANGUAGES}


def get_language_info(code: str) -> LanguageInfo:
    return _LANGUAGES.get(code, SUPPORTED_LANGUAGES[0])


class PreferencesState:
    """Persisted theme and language choices."""

    def __init__(
        self,
        storage: KeyValueStore,
        prefers_dark: Callable[[], bool] | None = None,
        fallback_language: str = DEFAULT_LANGUAGE,
    ) -> None:
        self.storage = storage
        self.prefers_dark = prefers_dark or (lambda: False)

        saved_theme = storage.get(THEME_KEY)
        self.theme = saved_theme if saved_theme in THEMES else DEFAULT_THEME

        saved_language = storage.get(LANGUAGE_KEY)
        if saved_language in _LANGUAGES:
            self.language = saved_language
        elif fallback_language in _LANGUAGES:
            self.language = fallback_language
        else:
            self.language = DEFAULT_LANGUAGE
        self._language_from_storage = saved_language in _LANGUAGES

    @property
    def resolved_theme(self) -> str:
        if self.theme == "system":
            return "dark" if self.prefers_dark() else "light"
        return self.theme

    @property
    def is_dark(self) -> bool:
        return self.resolved_theme == "dark"

    @property
    def is_rtl(self) -> bool:
        return get_language_info(self.language).rtl

    def set_theme(self, theme: str) -> None:
        if theme not in THEMES:
            raise ValidationError(f"Unsupported theme: {theme}")
        self.theme = theme
        self.storage.set(THEME_KEY, theme)

    def set_language(self, language: str) -> None:
        if language not in _LANGUAGES:
            raise ValidationError(f"Unsupported language: {language}")
        self.language = language
        self._language_from_storage = True
        self.storage.set(LANGUAGE_KEY, language)

    def apply_user_preferences(self, user: User | None) -> None:
        """Adopt the account language unless one was chosen on this device."""
        if self._language_from_storage or not user or not user.preferences:
            return
        language = user.preferences.language
        if language in _LANGUAGES:
            logger.debug(f"Using account language {language}")
            self.language = language

    def to_dict(self) -> dict[str, object]:
        return {
            "theme": self.theme,
            "resolved_theme": self.resolved_theme,
            "language": self.language,
            "rtl": self.is_rtl,
        }
