"""
In-memory translation store backed by one JSON file per language.

Every write goes through to ``<lang_folder>/<language>.json`` and the file is
read back afterwards, so the cache always mirrors what is on disk.
"""

import logging
import threading
from pathlib import Path

from langstore.files import LangFileError, get_folder_file_names, read_json_file, write_json_file

logger = logging.getLogger(__name__)

LANG_FILE_EXTENSION = "json"
DEFAULT_LANG_FOLDER = "./lang"


class UnknownLanguageError(KeyError):
    """Raised when a language is not loaded in the store."""

    def __init__(self, language: str) -> None:
        super().__init__(language)
        self.language = language

    def __str__(self) -> str:
        return f"Language '{self.language}' is not loaded."


class InvalidLanguageNameError(ValueError):
    """Raised for language names that cannot map to a file in the folder."""


def _validate_language_name(language: str) -> str:
    if not language or not language.strip():
        raise InvalidLanguageNameError("Language name must be a non-empty string.")
    if language in {".", ".."} or "/" in language or "\\" in language:
        raise InvalidLanguageNameError(f"Language name '{language}' is not a valid file name.")
    return language


class Translation:
    """Reads, writes and updates language translations."""

    def __init__(self, lang_folder: Path | str = DEFAULT_LANG_FOLDER) -> None:
        self._lang_folder = Path(lang_folder)
        self._translations: dict[str, dict[str, str]] = {}
        self._lock = threading.RLock()
        self.update_languages()

    @property
    def lang_folder(self) -> Path:
        return self._lang_folder

    @property
    def languages(self) -> list[str]:
        """Sorted names of the loaded languages."""
        with self._lock:
            return sorted(self._translations)

    def has_language(self, language: str) -> bool:
        with self._lock:
            return language in self._translations

    def _lang_path(self, language: str) -> Path:
        return self._lang_folder / f"{language}.{LANG_FILE_EXTENSION}"

    def update_languages(self) -> None:
        """Reload every language file found in the language folder."""
        with self._lock:
            names = get_folder_file_names(self._lang_folder, LANG_FILE_EXTENSION)
            loaded = 0
            for language in names:
                try:
                    _validate_language_name(language)
                except InvalidLanguageNameError:
                    logger.warning(
                        "Skipping file with unusable language name",
                        extra={"file": str(self._lang_path(language))},
                    )
                    continue
                self.update_language(language)
                loaded += 1
            logger.info(
                "Loaded languages",
                extra={"lang_folder": str(self._lang_folder), "count": loaded},
            )

    def save_languages(self) -> None:
        """Write every cached language back to its file."""
        with self._lock:
            for language in list(self._translations):
                self.save_language(language)

    def update_language(self, language: str) -> None:
        """Reload a single language from disk, dropping it if the file is gone."""
        _validate_language_name(language)
        path = self._lang_path(language)
        with self._lock:
            data = read_json_file(path)
            if data is None:
                self._translations.pop(language, None)
                logger.debug("Language file missing", extra={"language": language})
                return
            if not isinstance(data, dict):
                raise LangFileError(f"File {path} must contain a JSON object.")
            if not all(isinstance(value, str) for value in data.values()):
                raise LangFileError(f"File {path} must map translation keys to strings.")
            self._translations[language] = dict(data)

    def save_language(self, language: str) -> None:
        """Persist a single cached language."""
        _validate_language_name(language)
        with self._lock:
            lang = self._translations.get(language)
            if lang is None:
                raise UnknownLanguageError(language)
            write_json_file(self._lang_path(language), lang)
            logger.debug("Saved language", extra={"language": language, "keys": len(lang)})

    def set_language(self, language: str, translations: dict[str, str]) -> None:
        """Replace the whole mapping of a language and persist it."""
        _validate_language_name(language)
        with self._lock:
            self._translations[language] = dict(translations)
            self.save_language(language)
            self.update_language(language)

    def get_lang(self, language: str) -> dict[str, str] | None:
        """Return a copy of the language mapping, or None if not loaded."""
        with self._lock:
            lang = self._translations.get(language)
            return dict(lang) if lang is not None else None

    def set_translation(self, language: str, key: str, text: str) -> None:
        """Set one translation, creating the language when it does not exist."""
        _validate_language_name(language)
        with self._lock:
            self._translations.setdefault(language, {})[key] = text
            self.save_language(language)
            self.update_language(language)

    def set_translations(self, key: str, translations: dict[str, str]) -> None:
        """Set ``key`` in several languages at once (language -> text)."""
        with self._lock:
            for language, text in translations.items():
                self.set_translation(language, key, text)
            self.save_languages()
            self.update_languages()

    def get_translation(self, language: str, key: str) -> str | None:
        """Return the translation for ``key``; None if the key is missing."""
        with self._lock:
            lang = self._translations.get(language)
            if lang is None:
                raise UnknownLanguageError(language)
            return lang.get(key)
