"""Title cleanup applied to every successful Raindrop.io response.

Raindrop.io sometimes returns titles wrapped in a stray pair of quotes
(``'"Some page"'``) or padded with whitespace. These helpers normalize them
wherever a ``title`` key appears in a payload.
"""

from __future__ import annotations

from typing import Any

_QUOTES = ('"', "'")


def clean_title(title: Any) -> Any:
    """Trim a title and drop one pair of matching outer quotes.

    Non-string values are returned unchanged. Only a single pair is removed,
    so ``'"\\'a\\'"'`` becomes ``"'a'"``, not ``"a"``.
    """
    if not isinstance(title, str):
        return title

    cleaned = title.strip()
    for quote in _QUOTES:
        if cleaned.startswith(quote) and cleaned.endswith(quote):
            return cleaned[1:-1]
    return cleaned


def clean_titles_in_data(data: Any) -> Any:
    """Return a copy of ``data`` with every string ``title`` cleaned."""
    if isinstance(data, list):
        return [clean_titles_in_data(item) for item in data]

    if not isinstance(data, dict):
        return data

    cleaned: dict[str, Any] = {}
    for key, value in data.items():
        if key == "title" and isinstance(value, str):
            cleaned[key] = clean_title(value)
        elif isinstance(value, (dict, list)):
            cleaned[key] = clean_titles_in_data(value)
        else:
            cleaned[key] = value
    return cleaned
