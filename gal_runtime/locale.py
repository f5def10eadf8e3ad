"""Locale catalog: which locales a project can serve, and what they call themselves."""

from __future__ import annotations

import logging
from typing import Iterable, Mapping

from babel import Locale as CLDRLocale
from babel import UnknownLocaleError

from .errors import UnknownLocale
from .models import Locale, LocaleEntry

logger = logging.getLogger(__name__)


def cldr_native_name(tag: str) -> str | None:
    """Self-name of a BCP 47 tag from CLDR data, or None if CLDR has no data for it.

    "fr-CA" → "français (Canada)"
    """
    try:
        parsed = CLDRLocale.parse(tag.replace("_", "-"), sep="-")
    except (UnknownLocaleError, ValueError) as e:
        logger.debug("no CLDR data for locale %r: %s", tag, e)
        return None
    return parsed.get_display_name(parsed)


class LocaleCatalog:
    """The set of locales a loaded project supports, in declaration order."""

    def __init__(self, entries: Mapping[Locale, LocaleEntry]) -> None:
        self._entries = dict(entries)

    @property
    def locales(self) -> list[Locale]:
        return list(self._entries)

    def __contains__(self, loc: object) -> bool:
        return loc in self._entries

    def choose_locale(self, requested: Iterable[Locale]) -> Locale | None:
        """Return the first requested locale the catalog supports, or None."""
        for loc in requested:
            if loc in self._entries:
                return loc
        return None

    def locale_native_name(self, loc: Locale) -> str:
        """Return the human-readable self-name of a catalog locale.

        Lookup order: the name declared in the project, the CLDR display name
        of the tag in its own language, then the tag itself.
        """
        entry = self._entries.get(loc)
        if entry is None:
            raise UnknownLocale(f"Locale {loc!r} is not in the catalog")
        if entry.native_name:
            return entry.native_name
        return cldr_native_name(loc) or loc
