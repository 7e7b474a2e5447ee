# uiauto_tree/timings.py
"""
@file timings.py
@brief Configuration presets and defaults for the query engine.
"""

from __future__ import annotations
from copy import deepcopy
from typing import Any, Dict


TIMEOUT_FIELDS: Dict[str, Dict[str, Any]] = {
    "wait_for_element": {"timeout": 4.5, "interval": 0.05},
}

QUERY_FIELDS: Dict[str, Any] = {
    "test_id_prop": "test_id",
    "text_types": ["Text", "TextInput"],
    "handler_prefix": "on_",
}

PRESET_OVERRIDES: Dict[str, Dict[str, Any]] = {
    "fast": {
        "wait_for_element": {"timeout": 1.0, "interval": 0.02},
    },
    "slow": {
        "wait_for_element": {"timeout": 10.0, "interval": 0.1},
    },
    "ci": {
        "wait_for_element": {"timeout": 15.0, "interval": 0.1},
    },
}


def list_presets() -> Dict[str, Dict[str, Any]]:
    return {"default": {}, **PRESET_OVERRIDES}


def build_preset_values(preset: str) -> Dict[str, Any]:
    preset_key = (preset or "default").lower()
    values: Dict[str, Any] = deepcopy(TIMEOUT_FIELDS)
    values["query"] = deepcopy(QUERY_FIELDS)

    if preset_key == "default":
        return values

    overrides = PRESET_OVERRIDES.get(preset_key)
    if overrides is None:
        raise ValueError(f"Unknown timing preset: {preset}")

    for key, value in overrides.items():
        base = deepcopy(values[key])
        base.update(value)
        values[key] = base

    return values
