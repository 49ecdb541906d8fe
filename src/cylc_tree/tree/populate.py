"""Populate a tree store from a GraphQL workflow record.

Insertion order is a hard contract. Stores place each node by looking up the
parent its record references (a family's cycle point, a task's family, a job's
task), so parents must be inserted before their children:

1. the workflow root
2. every cycle point
3. every family proxy
4. every task proxy, each followed by its jobs
"""

from __future__ import annotations

import logging
from collections.abc import Mapping
from typing import Protocol

from .factories import (
    create_cycle_point_node,
    create_family_proxy_node,
    create_job_node,
    create_task_proxy_node,
    create_workflow_node,
)
from .nodes import (
    CyclePointNode,
    DomainRecord,
    FamilyProxyNode,
    JobNode,
    TaskProxyNode,
    WorkflowNode,
)

logger = logging.getLogger(__name__)

TREE_DATA_FIELDS = ("cyclePoints", "familyProxies", "taskProxies")


class InvalidTreeDataError(ValueError):
    """Raised when the tree or workflow given to the populator is unusable."""

    def __init__(self) -> None:
        super().__init__("You must provide valid data to populate the tree!")


class TreeStore(Protocol):
    """The insertion operations a tree must offer to be populated."""

    def set_workflow(self, node: WorkflowNode) -> None: ...

    def add_cycle_point(self, node: CyclePointNode) -> None: ...

    def add_family_proxy(self, node: FamilyProxyNode) -> None: ...

    def add_task_proxy(self, node: TaskProxyNode) -> None: ...

    def add_job(self, node: JobNode) -> None: ...


def contains_tree_data(workflow: object) -> bool:
    """Return True if ``workflow`` has the three collections a tree is built from.

    Only the collections themselves are checked (present and list-like, empty
    is fine); their elements are not inspected.
    """

    if not isinstance(workflow, Mapping):
        return False
    return all(isinstance(workflow.get(key), (list, tuple)) for key in TREE_DATA_FIELDS)


def populate_tree_from_graphql_data(
    tree: TreeStore | None, workflow: DomainRecord | None
) -> None:
    """Populate ``tree`` with nodes built from ``workflow``.

    Nodes wrap the workflow's own records by reference. Task proxy records
    without a state are given an empty one in place.

    Raises:
        InvalidTreeDataError: If either argument is missing or the workflow
            lacks tree data. Nothing is inserted in that case.
    """

    if tree is None or not workflow or not contains_tree_data(workflow):
        raise InvalidTreeDataError()

    tree.set_workflow(create_workflow_node(workflow))

    for cycle_point in workflow["cyclePoints"]:
        tree.add_cycle_point(create_cycle_point_node(cycle_point))

    for family_proxy in workflow["familyProxies"]:
        tree.add_family_proxy(create_family_proxy_node(family_proxy))

    job_count = 0
    for task_proxy in workflow["taskProxies"]:
        tree.add_task_proxy(create_task_proxy_node(task_proxy))
        # A task proxy may have no jobs yet.
        for job in task_proxy.get("jobs") or ():
            tree.add_job(create_job_node(job, task_proxy.get("latestMessage")))
            job_count += 1

    logger.debug(
        "Tree populated",
        extra={
            "workflow_id": workflow.get("id"),
            "cycle_points": len(workflow["cyclePoints"]),
            "family_proxies": len(workflow["familyProxies"]),
            "task_proxies": len(workflow["taskProxies"]),
            "jobs": job_count,
        },
    )
