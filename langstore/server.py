"""Server bootstrap wiring the translation store into a FastMCP instance."""

import logging
from typing import Any

from fastmcp import FastMCP  # type: ignore[import-not-found]

from langstore.settings import Settings
from langstore.tools import TranslationToolDependencies, register_translation_tools
from langstore.translation import Translation


class ServerApp:
    """Owns the translation store and the MCP app serving it."""

    def __init__(self, settings: Settings) -> None:
        self._logger = logging.getLogger(__name__)
        self._settings = settings
        self._state: dict[str, Any] = {"settings": settings}
        self._store: Translation | None = None
        self._tool_dependencies = TranslationToolDependencies()
        self._mcp_app = FastMCP(
            name="Translation Store MCP Server",
            instructions=(
                "Read and edit per-language translation files. Every edit is saved to disk immediately."
            ),
        )
        register_translation_tools(self._mcp_app, self._tool_dependencies)
        self._state["mcp_app"] = self._mcp_app

    def startup(self) -> None:
        """Load the language files and attach the store to the tools."""
        self._logger.info("Starting server bootstrap", extra={"lang_folder": self._settings.lang_folder})
        self._store = Translation(self._settings.lang_folder)
        self._tool_dependencies.attach_store(self._store)
        self._state["initialized"] = True

    def shutdown(self) -> None:
        """Release the store; every edit is already on disk."""
        self._logger.info("Shutting down server bootstrap")
        self._store = None
        self._tool_dependencies.detach_store()
        self._state.clear()

    def serve_forever(self) -> None:
        """Run the FastMCP SSE server until interrupted."""
        host = "0.0.0.0"
        port = self._settings.mcp_sse_port
        self._logger.info("Starting SSE transport", extra={"host": host, "port": port})
        self._mcp_app.run(transport="sse", host=host, port=port)

    async def serve_sse_async(self, host: str = "0.0.0.0") -> None:
        """Async helper for running the SSE transport (used by smoke tests)."""
        await self._mcp_app.run_http_async(
            transport="sse",
            host=host,
            port=self._settings.mcp_sse_port,
        )

    @property
    def store(self) -> Translation | None:
        return self._store

    @property
    def mcp(self) -> FastMCP:
        """Expose the configured FastMCP instance."""
        return self._mcp_app


def build_server(settings: Settings) -> ServerApp:
    """Factory used by main.py to create the configured server instance."""
    return ServerApp(settings)
