"""
Workflow History: linear undo/redo over graph snapshots.

Entries are deep copies taken when a structural edit commits. The
cursor points at the entry that matches the live graph; committing
after an undo drops everything past the cursor.
"""

from __future__ import annotations

from logging import getLogger
from typing import List, Optional

from flowbuilder.workflow.workflow_model import WorkflowGraph, clone_graph

logger = getLogger(__name__)


class WorkflowHistory:
    """Snapshot stack with a cursor.

    Example::

        history = WorkflowHistory(initial)
        history.commit(after_insert)
        previous = history.undo()   # copy of ``initial``
        history.redo()              # copy of ``after_insert``
    """

    def __init__(self, initial: WorkflowGraph) -> None:
        self._entries: List[WorkflowGraph] = [clone_graph(initial)]
        self._index = 0

    def __len__(self) -> int:
        return len(self._entries)

    @property
    def index(self) -> int:
        return self._index

    @property
    def can_undo(self) -> bool:
        return self._index > 0

    @property
    def can_redo(self) -> bool:
        return self._index < len(self._entries) - 1

    def current(self) -> WorkflowGraph:
        """Return a fresh copy of the entry under the cursor."""
        return clone_graph(self._entries[self._index])

    def commit(self, snapshot: WorkflowGraph) -> None:
        """Record ``snapshot`` after the cursor, discarding the redo tail."""
        dropped = len(self._entries) - self._index - 1
        del self._entries[self._index + 1:]
        self._entries.append(clone_graph(snapshot))
        self._index += 1
        if dropped:
            logger.debug(f"History commit discarded {dropped} redo entries")

    def undo(self) -> Optional[WorkflowGraph]:
        """Step back one entry and return a copy of it, or ``None`` at the start."""
        if not self.can_undo:
            return None
        self._index -= 1
        return self.current()

    def redo(self) -> Optional[WorkflowGraph]:
        """Step forward one entry and return a copy of it, or ``None`` at the end."""
        if not self.can_redo:
            return None
        self._index += 1
        return self.current()
