"""Agent handle normalization and the reserved default namespace."""

from __future__ import annotations

HANDLE_SIGIL = "@"
DEFAULT_NAMESPACE = "ayo"
DEFAULT_AGENT = HANDLE_SIGIL + DEFAULT_NAMESPACE


def normalize_handle(handle: str) -> str:
    cleaned = handle.strip()
    if not cleaned or cleaned == HANDLE_SIGIL:
        raise ValueError("agent handle must not be empty")
    if cleaned.startswith(HANDLE_SIGIL):
        return cleaned
    return HANDLE_SIGIL + cleaned


def is_reserved_namespace(handle: str) -> bool:
    """True for ``@ayo`` itself and anything under ``@ayo.``."""
    name = normalize_handle(handle)[len(HANDLE_SIGIL) :]
    return name == DEFAULT_NAMESPACE or name.startswith(DEFAULT_NAMESPACE + ".")
