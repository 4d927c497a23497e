"""Small text helpers shared by report views and exports."""

from __future__ import annotations

DESCRIPTION_EXCERPT_LENGTH = 50


def truncate_text(text: str | None, max_length: int = DESCRIPTION_EXCERPT_LENGTH) -> str:
    """Cut *text* to *max_length* characters and append '...' when it was longer."""
    if not text:
        return ""
    if len(text) <= max_length:
        return text
    return text[:max_length] + "..."
