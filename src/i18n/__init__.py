"""
Message translation for the Redfish inventory collector.

Catalogs live under locales/<language>/LC_MESSAGES/redfish_inventory.mo. A
language without a catalog falls back to the untranslated English text.
"""

import gettext
import os
from typing import Dict, Optional

DOMAIN = "redfish_inventory"
DEFAULT_LANGUAGE = "en"

CURRENT_LANGUAGE = DEFAULT_LANGUAGE

TRANSLATIONS: Dict[str, gettext.NullTranslations] = {}


def set_language(language: Optional[str]) -> None:
    """Set the language used by _() for subsequent lookups."""
    global CURRENT_LANGUAGE  # pylint: disable=global-statement
    CURRENT_LANGUAGE = language or DEFAULT_LANGUAGE


def get_language() -> str:
    """Get the current language."""
    return CURRENT_LANGUAGE


def get_translation(language: Optional[str] = None) -> gettext.NullTranslations:
    """Get (and cache) the translation catalog for a language."""
    if language is None:
        language = CURRENT_LANGUAGE

    if language not in TRANSLATIONS:
        localedir = os.path.join(os.path.dirname(__file__), "locales")
        TRANSLATIONS[language] = gettext.translation(
            DOMAIN, localedir, [language], fallback=True
        )

    return TRANSLATIONS[language]


def _(message: str, language: Optional[str] = None) -> str:
    """Translate a message."""
    return get_translation(language).gettext(message)
