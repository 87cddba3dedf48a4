"""Format detection and table loading for uploaded files."""
from pathlib import Path
from typing import Any

from email_waterfall_core.ingest.loaders import BaseLoader, CSVLoader, TSVLoader

LOADERS: list[BaseLoader] = [CSVLoader(), TSVLoader()]
SNIFF_BYTES = 8192


def detect_format(file_path: str) -> str | None:
    """Name of the loader that accepts the file, or None."""
    path = Path(file_path)
    if not path.is_file():
        return None
    with open(path, "rb") as f:
        head = f.read(SNIFF_BYTES)
    suffix = path.suffix.lower()
    return next((loader.name for loader in LOADERS if loader.detect(head, suffix)), None)


def get_loader(format_name: str) -> BaseLoader:
    """Get a loader by format name."""
    for loader in LOADERS:
        if loader.name == format_name:
            return loader
    raise ValueError(f"Unknown format: {format_name}")


def load_table(
    file_path: str, format_name: str, options: dict | None = None
) -> tuple[list[str], list[dict[str, Any]]]:
    """Headers in file order plus every non-blank record."""
    return get_loader(format_name).load_table(file_path, options or {})
