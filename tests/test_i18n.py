"""
Tests for message translation.
"""

import gettext

import pytest

from src import i18n


@pytest.fixture(autouse=True)
def reset_language():
    """Restore the default language after each test."""
    yield
    i18n.set_language(i18n.DEFAULT_LANGUAGE)


class TestI18n:
    """Tests for the gettext wrapper."""

    def test_untranslated_message_is_returned_unchanged(self):
        assert i18n._("Skipping system %s: %s") == "Skipping system %s: %s"

    def test_set_and_get_language(self):
        i18n.set_language("de")
        assert i18n.get_language() == "de"

    def test_none_resets_to_default(self):
        i18n.set_language(None)
        assert i18n.get_language() == "en"

    def test_missing_catalog_falls_back(self):
        translation = i18n.get_translation("xx")
        assert isinstance(translation, gettext.NullTranslations)
        assert i18n._("Collection Failed: %s", "xx") == "Collection Failed: %s"

    def test_catalog_is_cached(self):
        assert i18n.get_translation("fr") is i18n.get_translation("fr")
