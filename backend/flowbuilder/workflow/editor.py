"""
Workflow Editor: the live editing session.

Holds the current graph and wires the mutation engine to undo/redo
history, id allocation, persistence and change subscribers.

Usage::

    editor = WorkflowEditor(store)
    editor.insert(editor.root_id, None, NodeKind.ACTION)
    editor.undo()
"""

from __future__ import annotations

import json
from logging import getLogger
from typing import Any, Callable, Dict, List, Optional

from flowbuilder.config import EditorConfig
from flowbuilder.workflow import mutations
from flowbuilder.workflow.graph_index import next_node_id, validate_graph
from flowbuilder.workflow.history import WorkflowHistory
from flowbuilder.workflow.templates import create_default_graph
from flowbuilder.workflow.workflow_model import (
    NodeKind,
    WorkflowGraph,
    clone_graph,
    graph_to_dict,
)
from flowbuilder.workflow.workflow_store import WorkflowStore

logger = getLogger(__name__)

GraphListener = Callable[[WorkflowGraph], None]
GraphUpdater = Callable[[WorkflowGraph], WorkflowGraph]


class WorkflowEditor:
    """Single-writer editing session over one workflow graph.

    Structural edits (insert, delete, add path) are recorded in
    history; label edits are not. Every change is saved through the
    store, when one is given, and pushed to subscribers.
    """

    def __init__(
        self,
        store: Optional[WorkflowStore] = None,
        config: Optional[EditorConfig] = None,
        initial: Optional[WorkflowGraph] = None,
    ) -> None:
        self._store = store
        self._config = config or (store.config if store else EditorConfig.get_default_instance())

        if initial is not None and not validate_graph(initial, self._config.root_id):
            loaded = initial
        elif store is not None:
            loaded = store.load(self._config.storage_key)
        else:
            loaded = create_default_graph(self._config.root_id, self._config.root_label)

        self._graph: WorkflowGraph = clone_graph(loaded)
        self._history = WorkflowHistory(loaded)
        self._listeners: List[GraphListener] = []

    # ── State ──

    @property
    def root_id(self) -> str:
        return self._config.root_id

    @property
    def graph(self) -> WorkflowGraph:
        return self._graph

    @property
    def history(self) -> WorkflowHistory:
        return self._history

    @property
    def can_undo(self) -> bool:
        return self._history.can_undo

    @property
    def can_redo(self) -> bool:
        return self._history.can_redo

    def subscribe(self, listener: GraphListener) -> Callable[[], None]:
        """Call ``listener`` with the new graph after every change.

        Returns a function that removes the subscription.
        """
        self._listeners.append(listener)

        def _unsubscribe() -> None:
            if listener in self._listeners:
                self._listeners.remove(listener)

        return _unsubscribe

    # ── Operations ──

    def insert(
        self,
        parent_id: str,
        branch_label: Optional[str],
        kind: NodeKind,
    ) -> WorkflowGraph:
        return self.apply_change(
            lambda prev: mutations.insert_node(
                prev, parent_id, branch_label, kind,
                next_node_id(prev, self._config.id_prefix),
            ),
            track_history=True,
        )

    def delete(self, target_id: str) -> WorkflowGraph:
        return self.apply_change(
            lambda prev: mutations.delete_node(prev, self.root_id, target_id),
            track_history=True,
        )

    def update_label(self, node_id: str, label: str) -> WorkflowGraph:
        return self.apply_change(
            lambda prev: mutations.update_label(prev, node_id, label),
        )

    def add_branch_path(self, node_id: str) -> WorkflowGraph:
        return self.apply_change(
            lambda prev: mutations.add_branch_path(prev, node_id),
            track_history=True,
        )

    def undo(self) -> WorkflowGraph:
        restored = self._history.undo()
        if restored is None:
            return self._graph
        logger.debug(f"Undo to history entry {self._history.index}")
        self._set_graph(restored)
        return self._graph

    def redo(self) -> WorkflowGraph:
        restored = self._history.redo()
        if restored is None:
            return self._graph
        logger.debug(f"Redo to history entry {self._history.index}")
        self._set_graph(restored)
        return self._graph

    def apply_change(
        self,
        updater: GraphUpdater,
        track_history: bool = False,
    ) -> WorkflowGraph:
        """Run ``updater`` on the current graph and commit its result.

        An updater that returns the graph it was given is a no-op:
        nothing is recorded, saved or broadcast.
        """
        prev = self._graph
        nxt = updater(prev)
        if nxt is prev:
            return prev

        if track_history:
            self._history.commit(nxt)
        self._set_graph(nxt)
        return nxt

    def log_snapshot(self) -> Dict[str, Any]:
        """Log the current graph as JSON and return its serialized form."""
        payload = graph_to_dict(self._graph)
        logger.info(f"Workflow snapshot:\n{json.dumps(payload, indent=2)}")
        return payload

    # ── Internals ──

    def _set_graph(self, graph: WorkflowGraph) -> None:
        self._graph = graph
        if self._store is not None:
            self._store.save(graph, self._config.storage_key)
        for listener in list(self._listeners):
            listener(graph)

