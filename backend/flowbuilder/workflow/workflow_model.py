"""
Workflow Data Models: nodes, edges, and the node map.

These are the serializable data structures that describe a
branching workflow tree. Each node owns an ordered list of
outgoing edges; an edge without ``target_id`` is an empty slot
the editor offers for insertion.

A graph is a plain ``Dict[str, WorkflowNode]`` keyed by node id.
It is persisted by ``WorkflowStore`` and mutated only through
``flowbuilder.workflow.mutations``.
"""

from __future__ import annotations

from enum import Enum
from typing import Any, Dict, List, Optional

from pydantic import BaseModel, ConfigDict, Field

ACTION_EDGE_LABEL = "Next"
BRANCH_BASE_LABELS = ("True", "False")

_DEFAULT_LABELS = {
    "action": "Action",
    "branch": "Branch",
    "end": "End",
}


class NodeKind(str, Enum):
    ACTION = "action"
    BRANCH = "branch"
    END = "end"


class WorkflowEdge(BaseModel):
    """An outgoing slot of a node.

    ``target_id`` is serialized as ``targetId`` and left out of the
    payload when the slot is unconnected.
    """

    model_config = ConfigDict(populate_by_name=True)

    label: str
    target_id: Optional[str] = Field(default=None, alias="targetId")

    @property
    def connected(self) -> bool:
        return bool(self.target_id)


class WorkflowNode(BaseModel):
    """A single step of the workflow tree."""

    id: str
    label: str = ""
    kind: NodeKind = NodeKind.ACTION
    children: List[WorkflowEdge] = Field(default_factory=list)


WorkflowGraph = Dict[str, WorkflowNode]


def normalize_branch_edges(
    edges: Optional[List[WorkflowEdge]] = None,
) -> List[WorkflowEdge]:
    """Return a copy of ``edges`` that carries both canonical branch labels.

    Existing edges keep their order, labels and targets. A missing
    "True" or "False" edge is appended unconnected. Running this on
    its own output changes nothing.
    """
    result = [edge.model_copy() for edge in edges or []]
    for label in BRANCH_BASE_LABELS:
        if not any(edge.label == label for edge in result):
            result.append(WorkflowEdge(label=label))
    return result


def create_node(node_id: str, kind: NodeKind) -> WorkflowNode:
    """Build a fresh node of ``kind`` with its default label.

    Branch nodes start with the two canonical (unconnected) edges.
    Action and End nodes start with no stored edges.
    """
    kind = NodeKind(kind)
    children = normalize_branch_edges() if kind is NodeKind.BRANCH else []
    return WorkflowNode(
        id=node_id,
        label=_DEFAULT_LABELS[kind.value],
        kind=kind,
        children=children,
    )


def clone_graph(graph: WorkflowGraph) -> WorkflowGraph:
    """Deep-copy a node map so no edge list is shared with the source."""
    return {node_id: node.model_copy(deep=True) for node_id, node in graph.items()}


def graph_to_dict(graph: WorkflowGraph) -> Dict[str, Any]:
    """Serialize a node map into the persisted layout."""
    return {
        node_id: node.model_dump(mode="json", by_alias=True, exclude_none=True)
        for node_id, node in graph.items()
    }


def graph_from_dict(data: Dict[str, Any]) -> WorkflowGraph:
    """Validate a persisted node map.

    Raises ``pydantic.ValidationError`` on malformed records.
    """
    return {
        node_id: WorkflowNode.model_validate(record)
        for node_id, record in data.items()
    }
