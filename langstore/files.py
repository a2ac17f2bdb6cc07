"""JSON file helpers used by the translation store."""

import json
import logging
from pathlib import Path
from typing import Any

logger = logging.getLogger(__name__)


class LangFileError(RuntimeError):
    """Raised when a language file cannot be decoded or encoded."""


def read_json_file(path: Path | str) -> Any | None:
    """Read and decode a JSON file, returning None when it does not exist."""
    file_path = Path(path)
    if not file_path.exists():
        return None

    content = file_path.read_text(encoding="utf-8")
    try:
        return json.loads(content)
    except json.JSONDecodeError as exc:
        logger.error("Invalid JSON in file", extra={"path": str(file_path)})
        raise LangFileError(f"File {file_path} does not contain valid JSON: {exc.msg}.") from exc


def write_json_file(path: Path | str, obj: Any) -> None:
    """Serialize ``obj`` to ``path``, creating parent folders as needed."""
    file_path = Path(path)
    try:
        payload = json.dumps(obj, ensure_ascii=False)
    except (TypeError, ValueError) as exc:
        raise LangFileError(f"Cannot serialize data for {file_path}: {exc!s}") from exc

    file_path.parent.mkdir(parents=True, exist_ok=True)
    file_path.write_text(payload, encoding="utf-8")
    logger.debug("Wrote JSON file", extra={"path": str(file_path), "size": len(payload)})


def get_folder_file_names(folder: Path | str, extension: str | None = None) -> list[str]:
    """
    List the files in ``folder`` without their extension.

    When ``extension`` is given only files ending in ``.<extension>`` are kept.
    Missing folders yield an empty list.
    """
    folder_path = Path(folder)
    if not folder_path.is_dir():
        return []

    names: list[str] = []
    for entry in folder_path.iterdir():
        if not entry.is_file():
            continue
        file_name = entry.name
        if extension and not file_name.endswith(f".{extension}"):
            continue
        dot_index = file_name.rfind(".")
        names.append(file_name[:dot_index] if dot_index > 0 else file_name)
    return sorted(names)
