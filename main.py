"""
Entry point for the Translation Store MCP server.

Reads LOG_LEVEL for logging, then LANG_FOLDER and MCP_SSE_PORT (environment
or a local .env file) through Settings. It loads every language file from the
folder and serves the translation tools over SSE until interrupted.
"""

import logging
import os
from pathlib import Path

from langstore.server import build_server
from langstore.settings import Settings


def _configure_logging() -> None:
    log_level = os.getenv("LOG_LEVEL", "INFO").upper()
    logging.basicConfig(
        level=log_level,
        format="%(asctime)s | %(levelname)s | %(name)s | %(message)s",
    )


def main() -> None:
    """Load the language folder and serve it until Ctrl+C."""
    _configure_logging()
    logger = logging.getLogger("langstore")
    settings = Settings.load()
    if not Path(settings.lang_folder).is_dir():
        logger.warning(
            "Language folder %s does not exist yet; it will be created on the first edit.",
            settings.lang_folder,
        )
    server = build_server(settings)

    try:
        server.startup()
        languages = server.store.languages if server.store is not None else []
        logger.info(
            "Serving %d language(s) %s at http://localhost:%s/sse",
            len(languages),
            languages,
            settings.mcp_sse_port,
        )
        server.serve_forever()
    except KeyboardInterrupt:
        logger.info("Shutdown requested (Ctrl+C).")
    except Exception:
        logger.exception("Server stopped due to an unexpected error.")
        raise
    finally:
        server.shutdown()
        logger.info("Server shutdown complete.")


if __name__ == "__main__":
    main()
