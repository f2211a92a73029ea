"""Input sanitizer for free-text fields."""

import html
from typing import Any


def sanitize(value: Any) -> Any:
    """
    Trim and HTML-escape a string before it is persisted.

    Non-strings pass through unchanged.
    """
    if not isinstance(value, str):
        return value
    return html.escape(value.strip(), quote=True)


def sanitize_mapping(values: Any) -> Any:
    """Sanitize every key and string value of a JSON-like structure, nested dicts and lists included."""
    if isinstance(values, dict):
        return {sanitize(k): sanitize_mapping(v) for k, v in values.items()}
    if isinstance(values, list):
        return [sanitize_mapping(v) for v in values]
    return sanitize(values)


def parse_number(value: Any) -> Any:
    """Convert a numeric string from a form input to int or float; anything else is returned as-is."""
    if not isinstance(value, str):
        return value
    text = value.strip()
    for cast in (int, float):
        try:
            return cast(text)
        except ValueError:
            continue
    return value
