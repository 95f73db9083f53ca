"""
String Catalog - Resolves title/summary references to display text.

Catalogs are keyed by locale. resolve() answers in the current locale and
falls back to the reference locale; resolve_reference() always answers in
the reference locale, so users can search by the reference-language names
shown in documentation.

Catalog files are TOML, one per locale, named <locale>.toml:

    [strings]
    protection = "Ochrana"
    pump = "Pumpa"
"""

from pathlib import Path

import toml
from gi.repository import GObject
from loguru import logger

BUNDLED_STRINGS_DIR = Path(__file__).parent.parent / "data" / "strings"


class StringCatalog(GObject.Object):
    """
    Locale-aware string lookup.

    Signals:
        changed: Emitted when the current locale or catalog contents change

    Raises KeyError for unknown references; callers that must not fail
    catch it themselves.
    """

    __gtype_name__ = "PrefsearchStringCatalog"

    __gsignals__ = {
        "changed": (GObject.SignalFlags.RUN_FIRST, None, ()),
    }

    def __init__(self, catalogs=None, locale: str = "en", reference_locale: str = "en"):
        super().__init__()
        self._catalogs: dict[str, dict[str, str]] = {
            loc: dict(strings) for loc, strings in (catalogs or {}).items()
        }
        self._locale = locale
        self.reference_locale = reference_locale

    @classmethod
    def from_directory(cls, directory, locale: str = "en", reference_locale: str = "en") -> "StringCatalog":
        """Load every <locale>.toml in directory."""
        catalog = cls(locale=locale, reference_locale=reference_locale)
        directory = Path(directory)
        if not directory.is_dir():
            logger.warning(f"String catalog directory {directory} does not exist")
            return catalog

        for path in sorted(directory.glob("*.toml")):
            try:
                data = toml.load(path)
            except Exception:
                logger.exception(f"Failed to load string catalog {path}")
                continue
            strings = data.get("strings", {})
            if not isinstance(strings, dict):
                logger.warning(f"Skipping {path}: [strings] is not a table")
                continue
            catalog._catalogs.setdefault(path.stem, {}).update(
                (ref, str(text)) for ref, text in strings.items()
            )
            logger.debug(f"Loaded {len(strings)} strings for locale '{path.stem}'")
        return catalog

    @classmethod
    def from_settings(cls, settings: dict) -> "StringCatalog":
        """Catalog for the [strings] settings; an empty directory means the bundled one."""
        directory = settings["strings"]["directory"] or BUNDLED_STRINGS_DIR
        locale = settings["strings"]["locale"]
        reference_locale = settings["search"]["reference_locale"]
        return cls.from_directory(directory, locale, reference_locale)

    @property
    def locale(self) -> str:
        return self._locale

    def set_locale(self, locale: str) -> None:
        if locale == self._locale:
            return
        self._locale = locale
        logger.debug(f"Locale changed to '{locale}'")
        self.emit("changed")

    def add_strings(self, locale: str, strings: dict) -> None:
        self._catalogs.setdefault(locale, {}).update(strings)
        self.emit("changed")

    def resolve(self, ref: str) -> str:
        """Text for ref in the current locale, else in the reference locale."""
        text = self._catalogs.get(self._locale, {}).get(ref)
        if text is not None:
            return text
        return self.resolve_reference(ref)

    def resolve_reference(self, ref: str) -> str:
        """Text for ref in the reference locale."""
        try:
            return self._catalogs[self.reference_locale][ref]
        except KeyError:
            raise KeyError(f"No string '{ref}' for locale '{self.reference_locale}'") from None
