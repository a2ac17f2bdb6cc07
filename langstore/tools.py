"""MCP tool registrations for the translation store server."""

import logging
from dataclasses import dataclass
from typing import Annotated, Any, Callable

import anyio.to_thread
from fastmcp import Context, FastMCP
from pydantic import Field

from langstore.files import LangFileError
from langstore.translation import InvalidLanguageNameError, Translation, UnknownLanguageError

logger = logging.getLogger(__name__)

_STORE_ERRORS = (UnknownLanguageError, InvalidLanguageNameError, LangFileError, OSError)

LanguageArg = Annotated[str, Field(description="The language name, i.e. the JSON file name without extension (e.g. 'en', 'fr').")]
KeyArg = Annotated[str, Field(description="The translation key (e.g. 'menu.quit').")]


@dataclass
class TranslationToolDependencies:
    """Runtime dependencies required by the MCP tools."""

    store: Translation | None = None

    def attach_store(self, store: Translation) -> None:
        self.store = store

    def detach_store(self) -> None:
        self.store = None

    def require_store(self) -> Translation:
        if self.store is None:
            raise RuntimeError("Translation store is not initialized.")
        return self.store


def register_translation_tools(
    mcp: FastMCP,
    dependencies: TranslationToolDependencies,
) -> None:
    """Register MCP tools that read and edit the translation store."""

    def _validate_non_empty(value: str, field_name: str) -> str:
        if not value or not value.strip():
            raise ValueError(f"{field_name} must be a non-empty string.")
        return value.strip()

    def _log_tool_event(tool_name: str, event: str, **fields: object) -> None:
        logger.info(
            "translation_tool_event",
            extra={"tool": tool_name, "event": event, **fields},
        )

    async def _with_error_handling(
        tool_name: str,
        action: Callable[[], dict[str, Any]],
    ) -> dict[str, Any]:
        try:
            result = await anyio.to_thread.run_sync(action)
        except _STORE_ERRORS as exc:
            logger.warning("%s failed due to store error", tool_name, exc_info=True)
            _log_tool_event(tool_name, "store_error", error=str(exc))
            return {"error": str(exc)}
        except Exception as exc:  # noqa: BLE001
            logger.exception("%s failed unexpectedly", tool_name)
            _log_tool_event(tool_name, "unexpected_error", error=str(exc))
            return {"error": f"Unexpected error: {exc}"}
        _log_tool_event(tool_name, "success")
        return result

    @mcp.tool(
        name="list_languages",
        description="Lists the languages currently loaded in the translation store.",
    )
    async def list_languages() -> dict[str, Any]:
        store = dependencies.require_store()
        return await _with_error_handling("list_languages", lambda: {"languages": store.languages})

    @mcp.tool(
        name="get_language",
        description="Returns every translation key and text of one language.",
    )
    async def get_language(language: LanguageArg) -> dict[str, Any]:
        """Return the full mapping of a loaded language."""

        language_value = _validate_non_empty(language, "language")
        store = dependencies.require_store()

        def _call() -> dict[str, Any]:
            translations = store.get_lang(language_value)
            if translations is None:
                raise UnknownLanguageError(language_value)
            return {"language": language_value, "translations": translations}

        return await _with_error_handling("get_language", _call)

    @mcp.tool(
        name="get_translation",
        description="Looks up the text of a translation key in one language. The 'translation' field is null when the key is not defined.",
    )
    async def get_translation(language: LanguageArg, key: KeyArg) -> dict[str, Any]:
        language_value = _validate_non_empty(language, "language")
        key_value = _validate_non_empty(key, "key")
        store = dependencies.require_store()

        def _call() -> dict[str, Any]:
            return {
                "language": language_value,
                "key": key_value,
                "translation": store.get_translation(language_value, key_value),
            }

        return await _with_error_handling("get_translation", _call)

    @mcp.tool(
        name="set_translation",
        description="Sets the text of a translation key in one language and saves the language file. The language is created if it does not exist.",
    )
    async def set_translation(
        language: LanguageArg,
        key: KeyArg,
        text: Annotated[str, Field(description="The translated text.")],
        ctx: Context,
    ) -> dict[str, Any]:
        """Write a single translation through to disk."""

        language_value = _validate_non_empty(language, "language")
        key_value = _validate_non_empty(key, "key")
        store = dependencies.require_store()

        def _call() -> dict[str, Any]:
            store.set_translation(language_value, key_value, text)
            return {
                "language": language_value,
                "key": key_value,
                "translation": store.get_translation(language_value, key_value),
            }

        result = await _with_error_handling("set_translation", _call)
        if "error" not in result:
            await ctx.info(f"Saved '{key_value}' for language {language_value}.")
        return result

    @mcp.tool(
        name="set_translations",
        description="Sets the text of one translation key in several languages at once, then saves and reloads all language files.",
    )
    async def set_translations(
        key: KeyArg,
        translations: Annotated[dict[str, str], Field(description="Mapping of language name to translated text.")],
    ) -> dict[str, Any]:
        key_value = _validate_non_empty(key, "key")
        if not translations:
            raise ValueError("translations must contain at least one language.")
        store = dependencies.require_store()

        def _call() -> dict[str, Any]:
            store.set_translations(key_value, translations)
            return {"key": key_value, "languages": sorted(translations)}

        return await _with_error_handling("set_translations", _call)

    @mcp.tool(
        name="set_language",
        description="Replaces every translation of one language with the given mapping and saves the language file.",
    )
    async def set_language(
        language: LanguageArg,
        translations: Annotated[dict[str, str], Field(description="Mapping of translation key to translated text.")],
    ) -> dict[str, Any]:
        language_value = _validate_non_empty(language, "language")
        store = dependencies.require_store()

        def _call() -> dict[str, Any]:
            store.set_language(language_value, translations)
            return {"language": language_value, "count": len(translations)}

        return await _with_error_handling("set_language", _call)

    @mcp.tool(
        name="reload_languages",
        description="Re-reads every language file from the language folder, picking up edits made outside the server.",
    )
    async def reload_languages() -> dict[str, Any]:
        store = dependencies.require_store()

        def _call() -> dict[str, Any]:
            store.update_languages()
            return {"languages": store.languages}

        return await _with_error_handling("reload_languages", _call)

    logger.info("Translation MCP tools registered.")
