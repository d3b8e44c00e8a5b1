"""Language dispatch for stemming and form generation.

Each language module registers a factory here. On first use the registry
loads every enabled language's rule table, builds its entry and freezes.
Callers use dispatch.stem(word, language) without knowing which module
handles which language; unknown languages get the identity entry.
"""

from __future__ import annotations

import logging
import threading
from dataclasses import dataclass
from typing import Callable, Iterable

from flexio.config import Settings, load_settings
from flexio.errors import ConfigurationError
from flexio.morphology.data import MorphologyData, load

logger = logging.getLogger(__name__)

Factory = Callable[[MorphologyData], "LanguageEntry"]
Loader = Callable[[str], MorphologyData]


def no_forms(stem: str) -> list[str]:
    """Form generator for languages that only stem."""
    return []


def _identity(word: str) -> str:
    return word


@dataclass(frozen=True)
class LanguageEntry:
    language: str
    data: MorphologyData | None
    stem: Callable[[str], str]
    generate_forms: Callable[[str], list[str]] = no_forms


IDENTITY = LanguageEntry(language="", data=None, stem=_identity, generate_forms=no_forms)


class Registry:
    """Populate-then-freeze map from language id to LanguageEntry."""

    def __init__(self) -> None:
        self._factories: dict[str, Factory] = {}
        self._entries: dict[str, LanguageEntry] = {}
        self._failures: dict[str, str] = {}
        self._frozen = False
        self._lock = threading.Lock()

    @property
    def frozen(self) -> bool:
        return self._frozen

    def register(self, language: str, factory: Factory) -> None:
        """Register the entry factory for a language code."""
        with self._lock:
            if self._frozen:
                raise RuntimeError(f"Registry is frozen; cannot register {language!r}")
            if language in self._factories:
                raise ValueError(f"Language {language!r} is already registered")
            self._factories[language] = factory

    def initialize(
        self,
        loader: Loader | None = None,
        languages: Iterable[str] | None = None,
    ) -> None:
        """Load tables, build entries and freeze. Later calls do nothing.

        A language whose table or factory raises ConfigurationError is
        logged, recorded in failures() and left on the identity entry.
        Unusable settings are logged and replaced by the defaults.
        """
        if self._frozen:
            return
        with self._lock:
            if self._frozen:
                return
            if loader is None or languages is None:
                try:
                    settings = load_settings()
                except ConfigurationError as e:
                    logger.error("Invalid flexio settings, using packaged tables for all languages: %s", e)
                    settings = Settings()
                if loader is None:
                    loader = lambda language: load(language, settings.data_dir)  # noqa: E731
                if languages is None:
                    languages = settings.languages

            enabled = set(self._factories if languages is None else languages)
            for language, factory in self._factories.items():
                if language not in enabled:
                    continue
                try:
                    self._entries[language] = factory(loader(language))
                except ConfigurationError as e:
                    logger.error("Morphology for %r unavailable, using identity: %s", language, e)
                    self._failures[language] = str(e)

            self._frozen = True
            logger.debug("Morphology registry frozen: %s", ", ".join(sorted(self._entries)) or "(none)")

    def build_entry(self, language: str, data: MorphologyData) -> LanguageEntry:
        """Run a language's factory on a table without registering the result."""
        factory = self._factories.get(language)
        if factory is None:
            raise ConfigurationError("no morphology module registered", language)
        return factory(data)

    def resolve(self, language: str) -> LanguageEntry:
        """Return the entry for a language, or IDENTITY. Never raises for unknown ids."""
        if not self._frozen:
            self.initialize()
        entry = self._entries.get(language)
        if entry is None:
            logger.debug("No morphology for %r, using identity", language)
            return IDENTITY
        return entry

    def languages(self) -> tuple[str, ...]:
        """Registered language codes, loaded or not."""
        return tuple(sorted(self._factories))

    def failures(self) -> dict[str, str]:
        if not self._frozen:
            self.initialize()
        return dict(self._failures)

    def stem(self, word: str, language: str) -> str:
        return self.resolve(language).stem(word)

    def generate_forms(self, stem: str, language: str) -> list[str]:
        if not stem:
            return []
        return self.resolve(language).generate_forms(stem)


_REGISTRY = Registry()


def register(language: str, factory: Factory) -> None:
    _REGISTRY.register(language, factory)


def initialize(loader: Loader | None = None, languages: Iterable[str] | None = None) -> None:
    _REGISTRY.initialize(loader, languages)


def build_entry(language: str, data: MorphologyData) -> LanguageEntry:
    return _REGISTRY.build_entry(language, data)


def resolve(language: str) -> LanguageEntry:
    return _REGISTRY.resolve(language)


def languages() -> tuple[str, ...]:
    return _REGISTRY.languages()


def failures() -> dict[str, str]:
    return _REGISTRY.failures()


def stem(word: str, language: str) -> str:
    """Dispatch to the language's stemming pipeline."""
    return _REGISTRY.stem(word, language)


def generate_forms(stem: str, language: str) -> list[str]:
    """Dispatch to the language's form generator. [] means not applicable."""
    return _REGISTRY.generate_forms(stem, language)
