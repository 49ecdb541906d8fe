"""Test configuration and fixtures."""

from typing import Any
from unittest.mock import Mock

import pytest

from cylc_tree.tree.store import WorkflowTree


@pytest.fixture
def simple_workflow() -> dict[str, Any]:
    """The smallest workflow with one of everything."""
    return {
        "id": "w1",
        "cyclePoints": [{"cyclePoint": "2024"}],
        "familyProxies": [{"id": "f1"}],
        "taskProxies": [{"id": "t1", "jobs": [{"id": "j1"}]}],
    }


@pytest.fixture
def cylc_workflow() -> dict[str, Any]:
    """A workflow with Cylc-style ids and parent references."""
    return {
        "id": "cylc|one",
        "cyclePoints": [{"cyclePoint": "1"}, {"cyclePoint": "2"}],
        "familyProxies": [
            {
                "id": "cylc|one|1|FAM",
                "name": "FAM",
                "cyclePoint": "1",
                "firstParent": {"id": "cylc|one|1|root", "name": "root"},
            },
            {
                "id": "cylc|one|1|SUB",
                "name": "SUB",
                "cyclePoint": "1",
                "firstParent": {"id": "cylc|one|1|FAM", "name": "FAM"},
            },
        ],
        "taskProxies": [
            {
                "id": "cylc|one|1|foo",
                "name": "foo",
                "cyclePoint": "1",
                "state": "running",
                "latestMessage": "started",
                "firstParent": {"id": "cylc|one|1|SUB", "name": "SUB"},
                "jobs": [
                    {"id": "cylc|one|1|foo|2", "host": "localhost"},
                    {"id": "cylc|one|1|foo|1", "host": "localhost"},
                ],
            },
            {
                "id": "cylc|one|2|bar",
                "name": "bar",
                "cyclePoint": "2",
                "firstParent": {"id": "cylc|one|2|root", "name": "root"},
            },
        ],
    }


@pytest.fixture
def recording_tree() -> Mock:
    """A tree store that only records the insertions made into it."""
    return Mock(spec=WorkflowTree)
