from __future__ import annotations


def is_blank(value: object | None) -> bool:
    return not isinstance(value, str) or not value.strip()


def clean_optional(value: str | None) -> str | None:
    """Collapse blank optional text (emoji) to None."""
    if not isinstance(value, str):
        return None
    cleaned = value.strip()
    return cleaned or None
