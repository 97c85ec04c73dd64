"""Input/output helpers."""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Optional

logger = logging.getLogger(__name__)


def read_optional_text(path: Optional[Path]) -> str:
    """
    Reads an optional prompt fragment, trimmed.
    Missing or unreadable files count as empty.
    """
    if path is None:
        return ""
    try:
        return path.read_text(encoding="utf-8").strip()
    except (OSError, UnicodeDecodeError) as exc:
        logger.debug("Ignoring unreadable prompt fragment %s: %s", path, exc)
        return ""


def resolve_relative(base_dir: Path, raw_path: str) -> Path:
    path = Path(raw_path).expanduser()
    if not path.is_absolute():
        path = base_dir / path
    return path


def write_text(path: Path, content: str) -> None:
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(content, encoding="utf-8")
