import json
import threading
from collections.abc import Iterator
from pathlib import Path
from typing import Any

import pytest
from fastmcp import Client
from fastmcp.exceptions import ToolError

from langstore.server import ServerApp, build_server
from langstore.settings import Settings


@pytest.fixture
def lang_folder(tmp_path: Path) -> Path:
    folder = tmp_path / "lang"
    folder.mkdir()
    (folder / "en.json").write_text(json.dumps({"hello": "Hello"}), encoding="utf-8")
    return folder


@pytest.fixture
def server(lang_folder: Path) -> Iterator[ServerApp]:
    app_server = build_server(Settings(lang_folder=str(lang_folder)))
    app_server.startup()
    yield app_server
    app_server.shutdown()


async def _call(server: ServerApp, tool: str, arguments: dict[str, Any]) -> dict[str, Any]:
    async with Client(server.mcp) as client:
        result = await client.call_tool(tool, arguments)
    return result.data


@pytest.mark.anyio
async def test_list_languages(server: ServerApp) -> None:
    result = await _call(server, "list_languages", {})
    assert result == {"languages": ["en"]}


@pytest.mark.anyio
async def test_get_translation_and_missing_key(server: ServerApp) -> None:
    result = await _call(server, "get_translation", {"language": "en", "key": "hello"})
    assert result == {"language": "en", "key": "hello", "translation": "Hello"}

    missing = await _call(server, "get_translation", {"language": "en", "key": "nope"})
    assert missing["translation"] is None


@pytest.mark.anyio
async def test_unknown_language_returns_error_payload(server: ServerApp) -> None:
    result = await _call(server, "get_language", {"language": "de"})
    assert "error" in result
    assert "de" in result["error"]


@pytest.mark.anyio
async def test_set_translation_persists(server: ServerApp, lang_folder: Path) -> None:
    result = await _call(server, "set_translation", {"language": "fr", "key": "hello", "text": "Bonjour"})

    assert result == {"language": "fr", "key": "hello", "translation": "Bonjour"}
    assert json.loads((lang_folder / "fr.json").read_text(encoding="utf-8")) == {"hello": "Bonjour"}


@pytest.mark.anyio
async def test_set_translations_across_languages(server: ServerApp) -> None:
    result = await _call(
        server,
        "set_translations",
        {"key": "yes", "translations": {"en": "Yes", "fr": "Oui"}},
    )
    assert result == {"key": "yes", "languages": ["en", "fr"]}

    language = await _call(server, "get_language", {"language": "en"})
    assert language["translations"] == {"hello": "Hello", "yes": "Yes"}


@pytest.mark.anyio
async def test_set_language_and_reload(server: ServerApp, lang_folder: Path) -> None:
    result = await _call(server, "set_language", {"language": "es", "translations": {"hello": "Hola", "yes": "Sí"}})
    assert result == {"language": "es", "count": 2}

    (lang_folder / "it.json").write_text(json.dumps({"hello": "Ciao"}), encoding="utf-8")
    reloaded = await _call(server, "reload_languages", {})
    assert reloaded == {"languages": ["en", "es", "it"]}


@pytest.mark.anyio
async def test_invalid_language_name_returns_error_payload(server: ServerApp) -> None:
    result = await _call(server, "set_translation", {"language": "../etc", "key": "k", "text": "v"})
    assert "error" in result


@pytest.mark.anyio
async def test_empty_arguments_rejected(server: ServerApp) -> None:
    with pytest.raises(ToolError):
        await _call(server, "get_translation", {"language": "  ", "key": "hello"})
    with pytest.raises(ToolError):
        await _call(server, "set_translations", {"key": "yes", "translations": {}})


def test_shutdown_keeps_edits_made_outside_the_server(lang_folder: Path) -> None:
    (lang_folder / "fr.json").write_text(json.dumps({"hello": "Bonjour"}), encoding="utf-8")
    app_server = build_server(Settings(lang_folder=str(lang_folder)))
    app_server.startup()
    (lang_folder / "en.json").write_text(json.dumps({"hello": "Hello", "new": "edited"}), encoding="utf-8")
    (lang_folder / "fr.json").unlink()

    app_server.shutdown()

    assert json.loads((lang_folder / "en.json").read_text(encoding="utf-8")) == {"hello": "Hello", "new": "edited"}
    assert not (lang_folder / "fr.json").exists()
    assert app_server.store is None


@pytest.mark.anyio
async def test_store_calls_run_off_the_event_loop_thread(server: ServerApp, monkeypatch: pytest.MonkeyPatch) -> None:
    store = server.store
    assert store is not None
    loop_thread = threading.get_ident()
    seen: list[int] = []
    original = store.get_translation

    def _recording_get_translation(language: str, key: str) -> str | None:
        seen.append(threading.get_ident())
        return original(language, key)

    monkeypatch.setattr(store, "get_translation", _recording_get_translation)

    result = await _call(server, "get_translation", {"language": "en", "key": "hello"})

    assert result["translation"] == "Hello"
    assert seen and all(ident != loop_thread for ident in seen)
