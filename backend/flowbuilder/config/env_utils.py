"""
Environment helpers for config dataclasses.

``read_env_defaults`` turns an ``{field: ENV_VAR}`` map into keyword
arguments for a dataclass. ``Path`` fields are expanded; every other
field takes the raw string.
"""

from __future__ import annotations

import os
from dataclasses import Field
from pathlib import Path
from typing import Any, Dict, Mapping, Optional


def _coerce(raw: str, field: Field) -> Any:
    # With postponed annotations the field type is the annotation string.
    type_name = field.type if isinstance(field.type, str) else field.type.__name__
    if type_name == "Path":
        return Path(raw).expanduser()
    return raw


def read_env_defaults(
    env_map: Mapping[str, str],
    fields: Mapping[str, Field],
    environ: Optional[Mapping[str, str]] = None,
) -> Dict[str, Any]:
    """Collect dataclass kwargs from environment variables.

    Variables that are unset or empty fall back to the field default.
    """
    env = os.environ if environ is None else environ
    values: Dict[str, Any] = {}
    for field_name, env_name in env_map.items():
        raw = env.get(env_name)
        if raw:
            values[field_name] = _coerce(raw, fields[field_name])
    return values
