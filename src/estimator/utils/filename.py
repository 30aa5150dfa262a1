"""Filename helpers."""

import re

MAX_FILENAME_LENGTH = 80


def sanitize_filename(name: str) -> str:
    """Replace runs of unsafe characters with "_" and cap the length at 80."""
    return re.sub(r"[^a-zA-Z0-9_-]+", "_", name or "")[:MAX_FILENAME_LENGTH]
