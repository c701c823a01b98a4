"""
Workflow Templates.

Factory for the graph a new editing session starts from when
nothing usable has been saved yet.
"""

from __future__ import annotations

from flowbuilder.workflow.workflow_model import NodeKind, WorkflowGraph, WorkflowNode

DEFAULT_ROOT_ID = "node-0"
DEFAULT_ROOT_LABEL = "Start"


def create_default_graph(
    root_id: str = DEFAULT_ROOT_ID,
    root_label: str = DEFAULT_ROOT_LABEL,
) -> WorkflowGraph:
    """A single Action root with no outgoing edges."""
    return {
        root_id: WorkflowNode(id=root_id, label=root_label, kind=NodeKind.ACTION),
    }
