# hangman_plus/core/locale_manager.py

import json
from typing import Dict, Any, List, Optional
import importlib.resources as pkg_resources
from hangman_plus.config import DEFAULT_LOCALE
from hangman_plus.core.log_manager import logger

# The reference to the directory where locale files (e.g., en.json) are stored.
I18N_PACKAGE_REF = pkg_resources.files('hangman_plus.i18n')

FALLBACK_LOCALE = 'en'


class LocaleManager:
    """
    Loads every bundled locale catalogue and provides translation with
    fallback to English. The active locale comes from configuration and can
    be overridden per call.
    """

    def __init__(self, active_locale: str = DEFAULT_LOCALE):
        """Initializes the manager, dynamically loading all supported locale files."""
        self._fallback_translations: Dict[str, str] = {}
        self._all_translations: Dict[str, Dict[str, str]] = {}

        # 1. Load fallback first for guaranteed coverage
        self._fallback_translations = self._load_translations(FALLBACK_LOCALE)
        self._all_translations[FALLBACK_LOCALE] = self._fallback_translations

        # 2. Discover the rest of the catalogues
        for path in I18N_PACKAGE_REF.iterdir():
            if path.name.endswith('.json'):
                locale_code = path.name[:-len('.json')]
                if locale_code not in self._all_translations:
                    self._all_translations[locale_code] = self._load_translations(locale_code)

        if active_locale not in self._all_translations:
            logger.warning(f"Configured locale '{active_locale}' is not available; using '{FALLBACK_LOCALE}'.")
            active_locale = FALLBACK_LOCALE
        self.active_locale = active_locale

        logger.info(f"LocaleManager initialized. Supported: {list(self._all_translations.keys())}. Active: {self.active_locale}")

    def _load_translations(self, locale: str) -> Dict[str, str]:
        """
        Loads translations for a specific locale from a JSON file using
        importlib.resources for robust path handling.
        """
        file_name = f'{locale}.json'

        try:
            file_path = I18N_PACKAGE_REF / file_name
            with file_path.open('r', encoding='utf-8') as f:
                data = json.load(f)
                if not isinstance(data, dict):
                    raise TypeError("Translation file root must be a dictionary.")
                return data
        except FileNotFoundError:
            logger.warning(f"Translation resource not found for locale '{locale}' ({file_name}).")
            return {}
        except (json.JSONDecodeError, TypeError) as e:
            logger.error(f"Invalid translation file for locale '{locale}': {e}")
            return {}

    @property
    def supported_locales(self) -> List[str]:
        """Returns a list of all dynamically supported locale codes."""
        return list(self._all_translations.keys())

    def T(self, key: str, locale: Optional[str] = None, **kwargs: Any) -> str:
        """
        The core translation function.

        Args:
            key: The identifier key for the string to translate.
            locale: Overrides the active locale for this call.
            **kwargs: Variables for string interpolation.

        Returns:
            The translated string, or a marked key if it is missing everywhere.
        """
        current_locale = locale or self.active_locale
        translations = self._all_translations.get(current_locale, {})

        translated_string = translations.get(key)

        if translated_string is None:
            translated_string = self._fallback_translations.get(key)
            if translated_string is None:
                logger.warning(f"Missing translation key '{key}' in both '{current_locale}' and fallback locales.")
                return f"!! {key} !!"
            logger.warning(f"Missing translation key '{key}' for locale '{current_locale}'.")

        if kwargs:
            try:
                return translated_string.format(**kwargs)
            except (KeyError, IndexError) as e:
                logger.error(f"Formatting failed for key '{key}' in locale '{current_locale}': {e}")
                return translated_string

        return translated_string


# Create a globally accessible singleton instance
global_locale_manager = LocaleManager()

# Short alias for translation
T = global_locale_manager.T
