"""Shared fixtures for workflow tests."""

from __future__ import annotations

import pytest

from flowbuilder.config import EditorConfig
from flowbuilder.workflow.templates import create_default_graph
from flowbuilder.workflow.workflow_model import WorkflowGraph
from flowbuilder.workflow.workflow_store import WorkflowStore


@pytest.fixture
def default_graph() -> WorkflowGraph:
    return create_default_graph()


@pytest.fixture
def config(tmp_path) -> EditorConfig:
    return EditorConfig(storage_dir=tmp_path)


@pytest.fixture
def store(tmp_path, config) -> WorkflowStore:
    return WorkflowStore(tmp_path, config)
