"""Environment-driven configuration utilities for the translation store."""

import os
from dataclasses import dataclass

from dotenv import load_dotenv

from langstore.translation import DEFAULT_LANG_FOLDER


@dataclass(frozen=True, slots=True)
class Settings:
    """Container for runtime configuration."""

    lang_folder: str = DEFAULT_LANG_FOLDER
    mcp_sse_port: int = 8000

    @classmethod
    def load(cls) -> "Settings":
        """
        Load configuration from environment variables.

        Python-dotenv is used so a local .env file can point LANG_FOLDER at a
        project's language files without exporting variables globally.
        """
        load_dotenv()

        lang_folder = os.getenv("LANG_FOLDER", DEFAULT_LANG_FOLDER).strip()
        if not lang_folder:
            raise ValueError("LANG_FOLDER must be a non-empty path.")

        mcp_sse_port_raw = os.getenv("MCP_SSE_PORT", "").strip() or "8000"
        try:
            mcp_sse_port = int(mcp_sse_port_raw)
        except ValueError as exc:
            raise ValueError("MCP_SSE_PORT must be an integer.") from exc
        if mcp_sse_port <= 0:
            raise ValueError("MCP_SSE_PORT must be greater than zero.")

        return cls(lang_folder=lang_folder, mcp_sse_port=mcp_sse_port)
