"""Helpers for tools that can answer with just ``"ok"``."""

from __future__ import annotations

from typing import Any, Dict

MINIMAL_RESPONSE = "ok"


def minimal_response(data: Dict[str, Any], minimal: bool) -> Dict[str, Any] | str:
    """Return ``"ok"`` when the caller asked for a minimal response, else the data."""
    return MINIMAL_RESPONSE if minimal else data


def message_response(message: str, minimal: bool) -> str:
    return MINIMAL_RESPONSE if minimal else message
