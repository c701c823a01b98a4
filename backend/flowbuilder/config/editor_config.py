"""
Editor Configuration.

Controls where the workflow is stored and how node ids are minted.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path
from typing import Mapping, Optional

from flowbuilder.config.env_utils import read_env_defaults


@dataclass
class EditorConfig:
    """Storage location, root node and id scheme for an editing session."""

    storage_dir: Path = field(default_factory=lambda: Path("workflows"))
    storage_key: str = "workflow-builder-state"
    root_id: str = "node-0"
    root_label: str = "Start"
    id_prefix: str = "node"

    _ENV_MAP = {
        "storage_dir": "FLOWBUILDER_STORAGE_DIR",
        "storage_key": "FLOWBUILDER_STORAGE_KEY",
        "root_id": "FLOWBUILDER_ROOT_ID",
        "root_label": "FLOWBUILDER_ROOT_LABEL",
        "id_prefix": "FLOWBUILDER_ID_PREFIX",
    }

    @classmethod
    def get_default_instance(
        cls, environ: Optional[Mapping[str, str]] = None,
    ) -> "EditorConfig":
        defaults = read_env_defaults(cls._ENV_MAP, cls.__dataclass_fields__, environ)
        return cls(**defaults)
