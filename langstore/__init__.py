"""
Translation store: per-language JSON files loaded into memory, edited at
runtime and written back, with an MCP tool server on top.
"""

from langstore.files import LangFileError
from langstore.translation import InvalidLanguageNameError, Translation, UnknownLanguageError

__all__ = [
    "InvalidLanguageNameError",
    "LangFileError",
    "Translation",
    "UnknownLanguageError",
]
