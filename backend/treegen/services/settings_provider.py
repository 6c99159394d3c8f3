"""
Settings provider: lenient parsing of raw settings payloads.

Missing or malformed settings are never an error. Each field that fails to
validate falls back to its DEFAULT_SETTINGS value and a warning is logged;
the rest of the payload is kept. The tree type is the exception: an
unrecognized value is kept as unmatched (None).
"""

import json
import logging
from typing import Any, Dict, Optional, Union

from pydantic import BaseModel, ValidationError, field_validator

from treegen.services.tree_types import DEFAULT_SETTINGS, GenerationSettings, TreeType

logger = logging.getLogger(__name__)


class SettingsPayload(BaseModel):
    treeType: Optional[TreeType] = None
    hasPreliminary: Optional[bool] = None
    preliminaryGroupSize: Optional[int] = None
    advancingPerGroup: Optional[int] = None

    @field_validator("treeType", mode="before")
    @classmethod
    def normalize_tree_type(cls, v):
        if isinstance(v, str):
            return v.strip().upper().replace(" ", "_").replace("-", "_")
        return v

    @field_validator("advancingPerGroup")
    @classmethod
    def validate_advancing(cls, v):
        if v is not None and v < 1:
            raise ValueError("advancingPerGroup must be >= 1")
        return v


_FIELD_MAP = {
    "treeType": "tree_type",
    "hasPreliminary": "has_preliminary",
    "preliminaryGroupSize": "preliminary_group_size",
    "advancingPerGroup": "advancing_per_group",
}


def parse_settings(raw: Union[None, str, Dict[str, Any]]) -> Optional[GenerationSettings]:
    """
    Build GenerationSettings from a dict or JSON string.

    Accepts camelCase keys (treeType, hasPreliminary, ...) or their snake_case
    equivalents. Returns None when there is no payload at all, so the caller
    can tell "no settings record" apart from "settings with defaults".

    An unrecognized treeType yields tree_type=None, which selects the fallback
    strategy; resolve_settings builds it as the default tree type.

    preliminary_group_size is passed through unchecked: a value < 1 is only
    rejected at generation time, and only when a preliminary stage is used.
    """
    if raw is None:
        return None

    if isinstance(raw, str):
        try:
            raw = json.loads(raw)
        except json.JSONDecodeError as e:
            logger.warning(f"Unreadable settings payload, using defaults: {e}")
            return DEFAULT_SETTINGS

    if not isinstance(raw, dict):
        logger.warning(f"Settings payload must be an object, got {type(raw).__name__}; using defaults")
        return DEFAULT_SETTINGS

    snake_to_camel = {v: k for k, v in _FIELD_MAP.items()}
    data = {snake_to_camel.get(k, k): v for k, v in raw.items() if snake_to_camel.get(k, k) in _FIELD_MAP}

    try:
        payload = SettingsPayload.model_validate(data)
    except ValidationError as e:
        bad_fields = {str(err["loc"][0]) for err in e.errors() if err.get("loc")}
        logger.warning(f"Ignoring malformed settings fields {sorted(bad_fields)}: using defaults for them")
        payload = SettingsPayload.model_validate({k: v for k, v in data.items() if k not in bad_fields})

    values = {
        _FIELD_MAP[key]: value for key, value in payload.model_dump().items() if value is not None
    }
    # Present but unrecognized tree type stays unmatched (None)
    if "treeType" in data and payload.treeType is None:
        tree_type = None
    else:
        tree_type = values.get("tree_type", DEFAULT_SETTINGS.tree_type)
    return GenerationSettings(
        tree_type=tree_type,
        has_preliminary=values.get("has_preliminary", DEFAULT_SETTINGS.has_preliminary),
        preliminary_group_size=values.get("preliminary_group_size", DEFAULT_SETTINGS.preliminary_group_size),
        advancing_per_group=values.get("advancing_per_group", DEFAULT_SETTINGS.advancing_per_group),
    )
