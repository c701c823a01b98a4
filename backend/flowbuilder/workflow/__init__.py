"""
Workflow Engine: branching workflow graph editor.

Provides the model, structural edit operations, undo/redo history
and persistence behind the visual workflow builder.

Architecture:
    workflow_model   - Node/edge records and branch-edge normalization
    graph_index      - Parent lookup and render-time edge projection
    mutations        - Insert, delete-with-rewiring, label and path edits
    history          - Linear undo/redo over graph snapshots
    templates        - Default starting graph
    workflow_store   - JSON persistence for graphs
    editor           - Live editing session tying the pieces together
"""

from flowbuilder.workflow.workflow_model import (
    NodeKind,
    WorkflowEdge,
    WorkflowGraph,
    WorkflowNode,
    clone_graph,
    create_node,
    graph_from_dict,
    graph_to_dict,
    normalize_branch_edges,
)
from flowbuilder.workflow.graph_index import (
    ParentMatch,
    display_edges,
    find_parent,
    max_id_suffix,
    next_node_id,
    validate_graph,
)
from flowbuilder.workflow.mutations import (
    add_branch_path,
    delete_node,
    insert_node,
    update_label,
)
from flowbuilder.workflow.history import WorkflowHistory
from flowbuilder.workflow.templates import create_default_graph
from flowbuilder.workflow.workflow_store import WorkflowStore, get_workflow_store
from flowbuilder.workflow.editor import WorkflowEditor

__all__ = [
    "NodeKind",
    "WorkflowEdge",
    "WorkflowGraph",
    "WorkflowNode",
    "clone_graph",
    "create_node",
    "graph_from_dict",
    "graph_to_dict",
    "normalize_branch_edges",
    "ParentMatch",
    "display_edges",
    "find_parent",
    "max_id_suffix",
    "next_node_id",
    "validate_graph",
    "add_branch_path",
    "delete_node",
    "insert_node",
    "update_label",
    "WorkflowHistory",
    "create_default_graph",
    "WorkflowStore",
    "get_workflow_store",
    "WorkflowEditor",
]
