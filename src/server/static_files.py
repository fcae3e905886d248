"""Static asset lookup for the overlay web UI, confined to the index directory."""

from __future__ import annotations

import mimetypes
from pathlib import Path
from typing import Optional

_TEXT_MIME_TYPES = frozenset(
    {
        "application/javascript",
        "application/json",
        "application/manifest+json",
        "image/svg+xml",
    }
)


def resolve_static_file(ui_root: Path, request_path: str) -> Optional[Path]:
    """Return the file under `ui_root` named by `request_path`, or None.

    Directory requests, missing files and anything escaping the root resolve to None.
    """
    relative = (request_path or "").lstrip("/")
    if not relative:
        return None

    root = ui_root.resolve()
    candidate = (root / relative).resolve()
    if root not in candidate.parents or not candidate.is_file():
        return None
    return candidate


def guess_content_type(path: Path) -> str:
    mime_type, _ = mimetypes.guess_type(path.name)
    if not mime_type:
        return "application/octet-stream"
    if mime_type.startswith("text/") or mime_type in _TEXT_MIME_TYPES:
        return f"{mime_type}; charset=utf-8"
    return mime_type


def load_static_asset(ui_root: Path, request_path: str) -> Optional[tuple[bytes, str]]:
    """Read an asset and its content type for an HTTP response body."""
    path = resolve_static_file(ui_root, request_path)
    if path is None:
        return None
    return path.read_bytes(), guess_content_type(path)
