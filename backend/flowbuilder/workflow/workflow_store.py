"""
Workflow Store: JSON-file persistence for workflow node maps.

Each storage key maps to one JSON file under a configurable
directory. Loading never fails: anything unusable falls back to the
default single-node graph and the reason is logged.
"""

from __future__ import annotations

import json
from logging import getLogger
from pathlib import Path
from typing import Optional

from pydantic import ValidationError

from flowbuilder.config import EditorConfig
from flowbuilder.workflow.graph_index import validate_graph
from flowbuilder.workflow.templates import create_default_graph
from flowbuilder.workflow.workflow_model import (
    WorkflowGraph,
    graph_from_dict,
    graph_to_dict,
)

logger = getLogger(__name__)


class WorkflowStore:
    """Persist and load workflow graphs as JSON files."""

    def __init__(
        self,
        storage_dir: Optional[Path] = None,
        config: Optional[EditorConfig] = None,
    ) -> None:
        self._config = config or EditorConfig.get_default_instance()
        self._dir = Path(storage_dir or self._config.storage_dir)
        self._dir.mkdir(parents=True, exist_ok=True)
        logger.info(f"WorkflowStore initialized at {self._dir}")

    @property
    def config(self) -> EditorConfig:
        return self._config

    # ── CRUD ──

    def save(self, graph: WorkflowGraph, key: Optional[str] = None) -> None:
        """Save (create or overwrite) the graph under ``key``."""
        path = self._path_for(key or self._config.storage_key)
        path.write_text(
            json.dumps(graph_to_dict(graph), indent=2),
            encoding="utf-8",
        )
        logger.debug(f"Workflow saved: {path.name} ({len(graph)} nodes)")

    def load(self, key: Optional[str] = None) -> WorkflowGraph:
        """Load the graph stored under ``key``.

        Returns the default graph when nothing is stored, the file is
        corrupt, or the stored map breaks a graph rule (see
        ``validate_graph``).
        """
        key = key or self._config.storage_key
        path = self._path_for(key)
        if not path.exists():
            return self._default_graph()

        try:
            data = json.loads(path.read_text(encoding="utf-8"))
            if not isinstance(data, dict):
                raise ValueError(f"expected an object, got {type(data).__name__}")
            graph = graph_from_dict(data)
        except (OSError, ValueError, ValidationError) as e:
            # json.JSONDecodeError and ValidationError are both ValueErrors
            logger.warning(f"Failed to load saved workflow {key}; using default: {e}")
            return self._default_graph()

        errors = validate_graph(graph, self._config.root_id)
        if errors:
            logger.warning(
                f"Saved workflow {key} breaks graph rules; using default: "
                f"{'; '.join(errors)}"
            )
            return self._default_graph()

        logger.info(f"Workflow loaded: {key} ({len(graph)} nodes)")
        return graph

    def delete(self, key: Optional[str] = None) -> bool:
        """Delete a stored graph."""
        path = self._path_for(key or self._config.storage_key)
        if path.exists():
            path.unlink()
            logger.info(f"Workflow deleted: {path.name}")
            return True
        return False

    def exists(self, key: Optional[str] = None) -> bool:
        return self._path_for(key or self._config.storage_key).exists()

    # ── Internals ──

    def _default_graph(self) -> WorkflowGraph:
        return create_default_graph(self._config.root_id, self._config.root_label)

    def _path_for(self, key: str) -> Path:
        # Sanitize key for filesystem
        safe_key = "".join(c for c in key if c.isalnum() or c in "-_")
        return self._dir / f"{safe_key}.json"


# ── Singleton ──

_store_instance: Optional[WorkflowStore] = None


def get_workflow_store() -> WorkflowStore:
    """Return the global WorkflowStore singleton."""
    global _store_instance
    if _store_instance is None:
        _store_instance = WorkflowStore()
    return _store_instance
