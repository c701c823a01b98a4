"""
Graph Index: read-only lookups over a workflow node map.
"""

from __future__ import annotations

from typing import List, NamedTuple, Optional

from flowbuilder.workflow.workflow_model import (
    ACTION_EDGE_LABEL,
    NodeKind,
    WorkflowEdge,
    WorkflowGraph,
    WorkflowNode,
    normalize_branch_edges,
)


class ParentMatch(NamedTuple):
    parent_id: str
    edge_index: int


def find_parent(
    root_id: str,
    target_id: str,
    graph: WorkflowGraph,
) -> Optional[ParentMatch]:
    """Locate the edge that points at ``target_id``.

    Depth-first from ``root_id``, visiting each node's edges in stored
    order and descending into a connected edge before moving on to the
    next sibling. Returns the first match, or ``None``.

    Uses an explicit stack so deep chains do not hit the recursion limit.
    A node is expanded at most once, so a cyclic map cannot loop forever.
    """
    if root_id not in graph:
        return None

    seen = {root_id}
    # Each frame is (node_id, index of the next edge to visit).
    stack = [(root_id, 0)]
    while stack:
        node_id, index = stack.pop()
        node = graph.get(node_id)
        if node is None or index >= len(node.children):
            continue

        stack.append((node_id, index + 1))
        child_id = node.children[index].target_id
        if child_id == target_id:
            return ParentMatch(node_id, index)
        if child_id and child_id not in seen:
            seen.add(child_id)
            stack.append((child_id, 0))
    return None


def validate_graph(graph: WorkflowGraph, root_id: str) -> List[str]:
    """Check the structural rules of a node map.

    Returns a list of error messages (empty = valid).
    """
    errors: List[str] = []

    root = graph.get(root_id)
    if root is None:
        errors.append(f"Root node {root_id!r} is missing.")
    elif root.kind is not NodeKind.ACTION:
        errors.append(f"Root node {root_id!r} must be an action, not {root.kind.value}.")

    for key, node in graph.items():
        if node.id != key:
            errors.append(f"Node stored under {key!r} has id {node.id!r}.")
        if node.kind is NodeKind.END and node.children:
            errors.append(f"End node {key!r} has outgoing edges.")
        elif node.kind is NodeKind.ACTION and len(node.children) > 1:
            errors.append(f"Action node {key!r} has {len(node.children)} outgoing edges.")

    # Every node may be reached from the root along one path only.
    if root is not None:
        seen = {root_id}
        stack = [root_id]
        while stack:
            current = graph.get(stack.pop())
            if current is None:
                continue
            for edge in current.children:
                if not edge.target_id:
                    continue
                if edge.target_id in seen:
                    errors.append(
                        f"Node {edge.target_id!r} is reached twice "
                        f"(edge {edge.label!r} of {current.id!r})."
                    )
                    continue
                seen.add(edge.target_id)
                stack.append(edge.target_id)

    return errors


def display_edges(node: WorkflowNode) -> List[WorkflowEdge]:
    """Edges as the editor shows them.

    Branches always expose the canonical paths, and an Action with
    nothing stored gets an empty "Next" slot. Never written back.
    """
    if node.kind is NodeKind.BRANCH:
        return normalize_branch_edges(node.children)
    if node.kind is NodeKind.ACTION:
        if node.children:
            return [edge.model_copy() for edge in node.children]
        return [WorkflowEdge(label=ACTION_EDGE_LABEL)]
    return []


def max_id_suffix(graph: WorkflowGraph, prefix: str = "node") -> int:
    """Highest numeric suffix among ``{prefix}-N`` ids (0 if none)."""
    highest = 0
    marker = f"{prefix}-"
    for node_id in graph:
        if not node_id.startswith(marker):
            continue
        suffix = node_id[len(marker):]
        if suffix.isascii() and suffix.isdigit():
            highest = max(highest, int(suffix))
    return highest


def next_node_id(graph: WorkflowGraph, prefix: str = "node") -> str:
    return f"{prefix}-{max_id_suffix(graph, prefix) + 1}"
