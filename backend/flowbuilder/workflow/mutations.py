"""
Mutation Engine: structural edits on a workflow node map.

Every function takes the current graph and returns the next one.
When a request cannot apply (unknown id, wrong node kind, the
protected root) the *same* dict object is returned, so callers can
detect a no-op with ``is``. When something changes, a new dict is
returned and the input is left untouched; changed nodes are
replaced by copies, never edited in place.
"""

from __future__ import annotations

from logging import getLogger
from typing import List, Optional

from flowbuilder.workflow.graph_index import find_parent
from flowbuilder.workflow.workflow_model import (
    ACTION_EDGE_LABEL,
    NodeKind,
    WorkflowEdge,
    WorkflowGraph,
    WorkflowNode,
    create_node,
    normalize_branch_edges,
)

logger = getLogger(__name__)


# ====================================================================
# Insertion
# ====================================================================


def _attach_successor(node: WorkflowNode, child_id: Optional[str]) -> WorkflowNode:
    """Hang ``child_id`` off a freshly created node.

    Branches take it on their first path, actions on "Next". End nodes
    cannot hold children, so the successor is dropped from the path.
    """
    if not child_id:
        return node
    if node.kind is NodeKind.BRANCH:
        edges = normalize_branch_edges(node.children)
        edges[0] = edges[0].model_copy(update={"target_id": child_id})
        return node.model_copy(update={"children": edges})
    if node.kind is NodeKind.ACTION:
        return node.model_copy(
            update={"children": [WorkflowEdge(label=ACTION_EDGE_LABEL, target_id=child_id)]}
        )
    return node


def insert_node(
    graph: WorkflowGraph,
    parent_id: str,
    branch_label: Optional[str],
    kind: NodeKind,
    new_id: str,
) -> WorkflowGraph:
    """Insert a new ``kind`` node right after ``parent_id``.

    The new node takes over whatever the chosen parent edge pointed
    to, so inserting into a populated path splices rather than cuts.
    On a Branch parent ``branch_label`` picks the edge; a missing or
    unknown label falls back to the first edge.
    """
    parent = graph.get(parent_id)
    if parent is None or parent.kind is NodeKind.END:
        logger.debug(f"Insert ignored: parent {parent_id!r} missing or terminal")
        return graph
    if new_id in graph:
        logger.debug(f"Insert ignored: id {new_id!r} is already taken")
        return graph

    new_node = create_node(new_id, kind)
    updated: WorkflowGraph = dict(graph)

    if parent.kind is NodeKind.ACTION:
        prior = parent.children[0].target_id if parent.children else None
        updated[new_id] = _attach_successor(new_node, prior)
        updated[parent_id] = parent.model_copy(
            update={"children": [WorkflowEdge(label=ACTION_EDGE_LABEL, target_id=new_id)]}
        )
    else:
        edges = normalize_branch_edges(parent.children)
        index = 0
        if branch_label:
            for i, edge in enumerate(edges):
                if edge.label == branch_label:
                    index = i
                    break
        prior = edges[index].target_id
        updated[new_id] = _attach_successor(new_node, prior)
        edges[index] = edges[index].model_copy(update={"target_id": new_id})
        updated[parent_id] = parent.model_copy(update={"children": edges})

    logger.debug(f"Inserted {new_node.kind.value} node {new_id} under {parent_id}")
    return updated


# ====================================================================
# Deletion with re-wiring
# ====================================================================


def _replacement_edges(base: WorkflowEdge, adopted: List[WorkflowEdge]) -> List[WorkflowEdge]:
    edges = []
    for position, edge in enumerate(adopted, start=1):
        if edge.label:
            label = f"{base.label} + {edge.label}"
        else:
            label = f"{base.label} path {position}"
        edges.append(WorkflowEdge(label=label, target_id=edge.target_id))
    return edges


def delete_node(graph: WorkflowGraph, root_id: str, target_id: str) -> WorkflowGraph:
    """Remove ``target_id`` and re-wire its parent to its successors.

    The deleted node's connected edges ("adopted" edges) are handed to
    the parent edge that pointed at it:

    * Action parent: keeps its edge label and points at the first
      adopted target, or loses its edge when nothing was adopted.
    * Branch parent: the slot is cleared (none adopted), retargeted
      (one adopted), or replaced in place by one composite-labelled
      edge per adopted edge (several). The canonical paths are
      restored afterwards.

    Only the target node leaves the map; its descendants stay
    reachable through the re-wired edges.
    """
    if target_id == root_id:
        logger.debug("Delete ignored: root node is protected")
        return graph

    match = find_parent(root_id, target_id, graph)
    if match is None:
        logger.debug(f"Delete ignored: {target_id!r} is not reachable from {root_id!r}")
        return graph

    parent = graph.get(match.parent_id)
    target = graph.get(target_id)
    if parent is None or target is None:
        return graph

    updated: WorkflowGraph = dict(graph)
    del updated[target_id]

    adopted = [edge for edge in target.children if edge.connected]

    if parent.kind is NodeKind.ACTION:
        if adopted:
            label = ACTION_EDGE_LABEL
            if match.edge_index < len(parent.children):
                label = parent.children[match.edge_index].label
            children = [WorkflowEdge(label=label, target_id=adopted[0].target_id)]
        else:
            children = []
        updated[match.parent_id] = parent.model_copy(update={"children": children})

    elif parent.kind is NodeKind.BRANCH:
        edges = normalize_branch_edges(parent.children)
        base = edges[match.edge_index]

        if not adopted:
            edges[match.edge_index] = base.model_copy(update={"target_id": None})
        elif len(adopted) == 1:
            edges[match.edge_index] = base.model_copy(
                update={"target_id": adopted[0].target_id}
            )
        else:
            edges[match.edge_index:match.edge_index + 1] = _replacement_edges(base, adopted)

        updated[match.parent_id] = parent.model_copy(
            update={"children": normalize_branch_edges(edges)}
        )

    logger.debug(
        f"Deleted node {target_id}; parent {match.parent_id} adopted "
        f"{len(adopted)} edge(s)"
    )
    return updated


# ====================================================================
# Label and path edits
# ====================================================================


def update_label(graph: WorkflowGraph, node_id: str, label: str) -> WorkflowGraph:
    """Replace the display label of ``node_id``. Structure is untouched."""
    node = graph.get(node_id)
    if node is None or node.label == label:
        return graph
    updated: WorkflowGraph = dict(graph)
    updated[node_id] = node.model_copy(update={"label": label})
    return updated


def add_branch_path(graph: WorkflowGraph, node_id: str) -> WorkflowGraph:
    """Append an unconnected ``Path N`` edge to a Branch node."""
    node = graph.get(node_id)
    if node is None or node.kind is not NodeKind.BRANCH:
        logger.debug(f"Add path ignored: {node_id!r} is not a branch")
        return graph
    label = f"Path {len(node.children) + 1}"
    children = [edge.model_copy() for edge in node.children]
    children.append(WorkflowEdge(label=label))
    updated: WorkflowGraph = dict(graph)
    updated[node_id] = node.model_copy(update={"children": children})
    return updated
