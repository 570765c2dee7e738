"""Tool argument types shared across MCP tools.

MCP hosts frequently send list arguments as JSON-encoded strings
(``'["_id", "title"]'``). The types below decode those before pydantic
validation runs, and treat undecodable strings as "not provided".
"""

from __future__ import annotations

import json
from typing import Annotated, Any, List, Literal, Optional, Union

from pydantic import BeforeValidator, Field

from .projection import FIELD_PRESETS

PresetName = Literal["minimal", "basic", "standard", "media", "organization", "metadata"]

SortOrder = Literal["-created", "created", "score", "-sort", "title", "-title", "domain", "-domain"]

CollectionView = Literal["list", "simple", "grid", "masonry"]


def safe_json_parse(value: Any) -> Any:
    """Decode a JSON-encoded argument, leaving preset names and lists alone.

    Returns ``None`` for strings that are neither a preset name nor valid
    JSON, so a malformed filter behaves like no filter at all.
    """
    if value is None or isinstance(value, list):
        return value

    if isinstance(value, str):
        if value in FIELD_PRESETS:
            return value
        try:
            return json.loads(value)
        except (ValueError, RecursionError):
            return None

    return value


FieldList = Annotated[Optional[List[str]], BeforeValidator(safe_json_parse)]

FieldPresetOrList = Annotated[
    Optional[Union[PresetName, List[str]]],
    BeforeValidator(safe_json_parse),
]

TagList = Annotated[Optional[List[str]], BeforeValidator(safe_json_parse)]

# Required variant; a malformed string here fails validation instead of being dropped
TagNames = Annotated[List[str], BeforeValidator(safe_json_parse)]

Page = Annotated[int, Field(ge=0, description="Page number (starts from 0)")]

PerPage = Annotated[int, Field(ge=1, le=50, description="Items per page (max 50)")]

MinimalFlag = Annotated[
    bool,
    Field(description="Return minimal response (just 'ok') to save space"),
]
