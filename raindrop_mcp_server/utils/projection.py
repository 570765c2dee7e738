"""Shared field projection helpers for MCP tools."""

from __future__ import annotations

from types import MappingProxyType
from typing import Any, Dict, List, Mapping, Optional, Sequence, Tuple, Union

FIELD_PRESETS: Mapping[str, Tuple[str, ...]] = MappingProxyType({
    "minimal": ("_id", "link", "title"),
    "basic": ("_id", "link", "title", "excerpt", "tags", "created", "domain"),
    "standard": (
        "_id", "link", "title", "excerpt", "note", "tags", "type", "cover",
        "created", "lastUpdate", "domain", "important",
    ),
    "media": ("_id", "link", "title", "cover", "media", "type", "file"),
    "organization": ("_id", "title", "tags", "collection", "collectionId", "sort", "removed"),
    "metadata": ("_id", "created", "lastUpdate", "creatorRef", "user", "broken", "cache"),
})

# Keys that hold record content in a Raindrop.io envelope
ENVELOPE_CONTENT_KEYS = ("item", "items")

FieldFilter = Union[str, Sequence[str]]


def preset_names() -> frozenset[str]:
    """Names accepted wherever a field preset may be given."""
    return frozenset(FIELD_PRESETS)


def resolve_field_list(fields: FieldFilter) -> List[str]:
    """Turn a preset name or explicit field list into a fresh list of names."""
    if isinstance(fields, str) and fields in FIELD_PRESETS:
        return list(FIELD_PRESETS[fields])
    return list(fields)


def project_dict(data: Dict[str, Any], fields: Sequence[str]) -> Dict[str, Any]:
    """Project a single dict to the requested fields.

    - fields=[]: returns an empty dict
    - fields=["x"]: returns {"x": ...} when x is a key of data, else {}

    Presence is decided by key membership, so ``None`` values are kept.
    """
    if not fields:
        return {}
    return {f: data[f] for f in fields if f in data}


def project_items(items: List[Any], fields: Sequence[str]) -> List[Any]:
    """Project every dict in a list; non-dict elements are left as they are."""
    projected: List[Any] = []
    for it in items:
        if isinstance(it, dict):
            projected.append(project_dict(it, fields))
        else:
            projected.append(it)
    return projected


def filter_fields(data: Any, fields: Optional[FieldFilter]) -> Any:
    """Project a record or list of records, ignoring any envelope."""
    if fields is None:
        return data

    field_list = resolve_field_list(fields)
    if isinstance(data, list):
        return project_items(data, field_list)
    if isinstance(data, dict):
        return project_dict(data, field_list)
    return data


def filter_api_response(data: Any, fields: Optional[FieldFilter]) -> Any:
    """Project the record(s) of an API response, keeping envelope metadata.

    Handles ``{"item": {...}}``, ``{"items": [...]}`` and bare lists. An empty
    field list strips ``item``/``items`` and keeps only the metadata (e.g.
    ``result``, ``count``). ``fields=None`` returns ``data`` untouched.
    """
    if fields is None:
        return data

    field_list = resolve_field_list(fields)

    if not field_list:
        if isinstance(data, dict):
            return {k: v for k, v in data.items() if k not in ENVELOPE_CONTENT_KEYS}
        if isinstance(data, list):
            return project_items(data, field_list)
        return data

    if isinstance(data, dict):
        if isinstance(data.get("items"), list):
            return {**data, "items": project_items(data["items"], field_list)}
        if isinstance(data.get("item"), dict):
            return {**data, "item": project_dict(data["item"], field_list)}
        return data

    if isinstance(data, list):
        return project_items(data, field_list)

    return data
