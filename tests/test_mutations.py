"""Tests for insertion, deletion with re-wiring, and label/path edits."""

from flowbuilder.workflow.mutations import (
    add_branch_path,
    delete_node,
    insert_node,
    update_label,
)
from flowbuilder.workflow.workflow_model import NodeKind, clone_graph

from graph_helpers import ROOT, edge, graph_of, node


def _targets(graph, node_id):
    return [(e.label, e.target_id) for e in graph[node_id].children]


class TestInsert:
    def test_first_action_under_root(self, default_graph):
        graph = insert_node(default_graph, ROOT, None, NodeKind.ACTION, "node-1")
        assert _targets(graph, ROOT) == [("Next", "node-1")]
        assert graph["node-1"].kind is NodeKind.ACTION
        assert graph["node-1"].children == []

    def test_branch_spliced_in_front_of_successor(self, default_graph):
        graph = insert_node(default_graph, ROOT, None, NodeKind.ACTION, "node-1")
        graph = insert_node(graph, ROOT, None, NodeKind.BRANCH, "node-2")
        assert _targets(graph, ROOT) == [("Next", "node-2")]
        assert _targets(graph, "node-2") == [("True", "node-1"), ("False", None)]

    def test_action_spliced_in_front_of_successor(self, default_graph):
        graph = insert_node(default_graph, ROOT, None, NodeKind.END, "node-1")
        graph = insert_node(graph, ROOT, None, NodeKind.ACTION, "node-2")
        assert _targets(graph, "node-2") == [("Next", "node-1")]

    def test_end_detaches_successor(self, default_graph):
        graph = insert_node(default_graph, ROOT, None, NodeKind.ACTION, "node-1")
        graph = insert_node(graph, ROOT, None, NodeKind.END, "node-2")
        assert _targets(graph, ROOT) == [("Next", "node-2")]
        assert graph["node-2"].children == []
        assert "node-1" in graph

    def test_branch_parent_by_label(self):
        graph = graph_of(
            node(ROOT, NodeKind.ACTION, edge("Next", "B")),
            node("B", NodeKind.BRANCH, edge("True", "A"), edge("False")),
            node("A", NodeKind.END),
        )
        result = insert_node(graph, "B", "False", NodeKind.END, "node-1")
        assert _targets(result, "B") == [("True", "A"), ("False", "node-1")]

        result = insert_node(graph, "B", "True", NodeKind.ACTION, "node-1")
        assert _targets(result, "B") == [("True", "node-1"), ("False", None)]
        assert _targets(result, "node-1") == [("Next", "A")]

    def test_branch_parent_unknown_label_uses_first_edge(self):
        graph = graph_of(
            node(ROOT, NodeKind.ACTION, edge("Next", "B")),
            node("B", NodeKind.BRANCH, edge("True"), edge("False")),
        )
        for label in (None, "", "Missing"):
            result = insert_node(graph, "B", label, NodeKind.END, "node-1")
            assert _targets(result, "B") == [("True", "node-1"), ("False", None)]

    def test_branch_parent_is_normalized(self):
        graph = graph_of(
            node(ROOT, NodeKind.ACTION, edge("Next", "B")),
            node("B", NodeKind.BRANCH, edge("Path 1")),
        )
        result = insert_node(graph, "B", "False", NodeKind.END, "node-1")
        assert _targets(result, "B") == [("Path 1", None), ("True", None), ("False", "node-1")]

    def test_invalid_parent_is_noop(self, default_graph):
        graph = insert_node(default_graph, ROOT, None, NodeKind.END, "node-1")
        assert insert_node(graph, "node-1", None, NodeKind.ACTION, "node-2") is graph
        assert insert_node(graph, "missing", None, NodeKind.ACTION, "node-2") is graph

    def test_taken_id_is_noop(self, default_graph):
        graph = insert_node(default_graph, ROOT, None, NodeKind.ACTION, "node-1")
        assert insert_node(graph, ROOT, None, NodeKind.ACTION, ROOT) is graph
        assert insert_node(graph, ROOT, None, NodeKind.BRANCH, "node-1") is graph

    def test_input_is_not_mutated(self, default_graph):
        graph = insert_node(default_graph, ROOT, None, NodeKind.ACTION, "node-1")
        before = clone_graph(graph)
        result = insert_node(graph, ROOT, None, NodeKind.BRANCH, "node-2")
        assert result is not graph
        assert graph == before


class TestDelete:
    def test_root_is_protected(self, default_graph):
        assert delete_node(default_graph, ROOT, ROOT) is default_graph

    def test_unreachable_is_noop(self, default_graph):
        graph = dict(default_graph)
        graph["orphan"] = node("orphan")
        assert delete_node(graph, ROOT, "orphan") is graph
        assert delete_node(graph, ROOT, "missing") is graph

    def test_leaf_under_action_clears_edge(self, default_graph):
        graph = insert_node(default_graph, ROOT, None, NodeKind.ACTION, "node-1")
        result = delete_node(graph, ROOT, "node-1")
        assert "node-1" not in result
        assert result[ROOT].children == []

    def test_insert_then_delete_restores_successor(self, default_graph):
        graph = insert_node(default_graph, ROOT, None, NodeKind.ACTION, "node-1")
        spliced = insert_node(graph, ROOT, None, NodeKind.BRANCH, "node-2")
        result = delete_node(spliced, ROOT, "node-2")
        assert _targets(result, ROOT) == [("Next", "node-1")]
        assert result == graph

    def test_action_parent_keeps_its_label(self):
        graph = graph_of(
            node(ROOT, NodeKind.ACTION, edge("Continue", "A")),
            node("A", NodeKind.ACTION, edge("Next", "E")),
            node("E", NodeKind.END),
        )
        result = delete_node(graph, ROOT, "A")
        assert _targets(result, ROOT) == [("Continue", "E")]

    def test_action_parent_takes_first_adopted_edge(self):
        graph = graph_of(
            node(ROOT, NodeKind.ACTION, edge("Next", "B")),
            node("B", NodeKind.BRANCH, edge("True"), edge("False", "F"), edge("Path 3", "P")),
            node("F", NodeKind.END),
            node("P", NodeKind.END),
        )
        result = delete_node(graph, ROOT, "B")
        assert _targets(result, ROOT) == [("Next", "F")]

    def test_branch_parent_zero_adopted(self):
        graph = graph_of(
            node(ROOT, NodeKind.ACTION, edge("Next", "B")),
            node("B", NodeKind.BRANCH, edge("True", "E"), edge("False")),
            node("E", NodeKind.END),
        )
        result = delete_node(graph, ROOT, "E")
        assert _targets(result, "B") == [("True", None), ("False", None)]

    def test_branch_parent_one_adopted(self):
        graph = graph_of(
            node(ROOT, NodeKind.ACTION, edge("Next", "B")),
            node("B", NodeKind.BRANCH, edge("True"), edge("False", "A")),
            node("A", NodeKind.ACTION, edge("Next", "E")),
            node("E", NodeKind.END),
        )
        result = delete_node(graph, ROOT, "A")
        assert _targets(result, "B") == [("True", None), ("False", "E")]

    def test_branch_parent_many_adopted(self):
        graph = graph_of(
            node(ROOT, NodeKind.ACTION, edge("Next", "B")),
            node("B", NodeKind.BRANCH, edge("True", "X"), edge("False")),
            node("X", NodeKind.BRANCH, edge("True", "a"), edge("False", "b")),
            node("a", NodeKind.END),
            node("b", NodeKind.END),
        )
        result = delete_node(graph, ROOT, "X")
        assert "X" not in result
        assert _targets(result, "B") == [
            ("True + True", "a"),
            ("True + False", "b"),
            ("False", None),
            ("True", None),
        ]
        labels = [e.label for e in result["B"].children]
        assert "True" in labels and "False" in labels

    def test_many_adopted_replace_slot_in_place(self):
        graph = graph_of(
            node(ROOT, NodeKind.ACTION, edge("Next", "B")),
            node("B", NodeKind.BRANCH, edge("True"), edge("Path 3", "X"), edge("False")),
            node("X", NodeKind.BRANCH, edge("", "a"), edge("False"), edge("", "b")),
            node("a", NodeKind.END),
            node("b", NodeKind.END),
        )
        result = delete_node(graph, ROOT, "X")
        assert _targets(result, "B") == [
            ("True", None),
            ("Path 3 path 1", "a"),
            ("Path 3 path 2", "b"),
            ("False", None),
        ]

    def test_descendants_stay_reachable(self):
        graph = graph_of(
            node(ROOT, NodeKind.ACTION, edge("Next", "B")),
            node("B", NodeKind.BRANCH, edge("True", "X"), edge("False", "Y")),
            node("X", NodeKind.BRANCH, edge("True", "a"), edge("False", "b")),
            node("Y", NodeKind.END),
            node("a", NodeKind.ACTION, edge("Next", "c")),
            node("b", NodeKind.END),
            node("c", NodeKind.END),
        )
        result = delete_node(graph, ROOT, "X")
        assert set(result) == {ROOT, "B", "Y", "a", "b", "c"}
        reachable = set()
        stack = [ROOT]
        while stack:
            current = stack.pop()
            reachable.add(current)
            stack.extend(e.target_id for e in result[current].children if e.target_id)
        assert reachable == set(result)

    def test_input_is_not_mutated(self):
        graph = graph_of(
            node(ROOT, NodeKind.ACTION, edge("Next", "B")),
            node("B", NodeKind.BRANCH, edge("True", "X"), edge("False")),
            node("X", NodeKind.BRANCH, edge("True", "a"), edge("False", "b")),
            node("a", NodeKind.END),
            node("b", NodeKind.END),
        )
        before = clone_graph(graph)
        delete_node(graph, ROOT, "X")
        assert graph == before


class TestUpdateLabel:
    def test_replaces_label_only(self, default_graph):
        result = update_label(default_graph, ROOT, "Begin")
        assert result is not default_graph
        assert result[ROOT].label == "Begin"
        assert default_graph[ROOT].label == "Start"
        assert result[ROOT].children == default_graph[ROOT].children

    def test_duplicate_labels_allowed(self, default_graph):
        graph = insert_node(default_graph, ROOT, None, NodeKind.ACTION, "node-1")
        result = update_label(graph, "node-1", "Start")
        assert result["node-1"].label == result[ROOT].label == "Start"

    def test_noop_cases(self, default_graph):
        assert update_label(default_graph, "missing", "x") is default_graph
        assert update_label(default_graph, ROOT, "Start") is default_graph


class TestAddBranchPath:
    def test_appends_numbered_path(self, default_graph):
        graph = insert_node(default_graph, ROOT, None, NodeKind.BRANCH, "node-1")
        graph = add_branch_path(graph, "node-1")
        assert _targets(graph, "node-1") == [("True", None), ("False", None), ("Path 3", None)]
        graph = add_branch_path(graph, "node-1")
        assert graph["node-1"].children[-1].label == "Path 4"

    def test_non_branch_is_noop(self, default_graph):
        assert add_branch_path(default_graph, ROOT) is default_graph
        assert add_branch_path(default_graph, "missing") is default_graph
