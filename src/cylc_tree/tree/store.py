"""In-memory tree store.

:class:`WorkflowTree` implements :class:`cylc_tree.tree.populate.TreeStore`.
It keeps every node in an id index and places each one under the parent its
record references:

- cycle points go directly under the workflow
- family and task proxies go under ``firstParent`` unless that is the
  ``root`` family, in which case they go under their cycle point
- jobs go under their task proxy

Records that do not say where they belong are still placed: a family or task
with no known cycle point goes under the workflow, and a job whose task proxy
cannot be found goes under the most recently added task proxy.
"""

from __future__ import annotations

import logging
from collections.abc import Iterator

from .nodes import (
    CyclePointNode,
    DomainRecord,
    FamilyProxyNode,
    JobNode,
    TaskProxyNode,
    TreeNode,
    WorkflowNode,
)
from .populate import populate_tree_from_graphql_data

logger = logging.getLogger(__name__)

ROOT_FAMILY = "root"
ID_DELIMITER = "|"


class TreeError(Exception):
    pass


class DuplicateNodeError(TreeError, ValueError):
    def __init__(self, node_id: str) -> None:
        super().__init__(f"Node {node_id!r} is already in the tree")
        self.node_id = node_id


def task_proxy_id_for_job(job: DomainRecord) -> str:
    """Return the id of the task proxy that owns ``job``.

    An explicit ``taskProxy`` reference wins; otherwise the submit number is
    dropped from the job id (``owner|workflow|point|task|submit``).
    """

    task_proxy = job.get("taskProxy")
    if isinstance(task_proxy, dict) and task_proxy.get("id"):
        return str(task_proxy["id"])
    return str(job.get("id", "")).rpartition(ID_DELIMITER)[0]


class WorkflowTree:
    """Hierarchy of one workflow's nodes.

    Calling :meth:`set_workflow` discards whatever the tree held before, so
    populating the same tree twice leaves it as if populated once. The reset
    happens up front: if a later insert raises, the tree holds the part of the
    new workflow added so far and the previous one is gone. Use
    :func:`build_tree` when the result must be all or nothing.
    """

    def __init__(self) -> None:
        self.root: WorkflowNode | None = None
        self._lookup: dict[str, TreeNode] = {}
        self._last_task_proxy: TaskProxyNode | None = None

    def __len__(self) -> int:
        return len(self._lookup)

    def __contains__(self, node_id: object) -> bool:
        return node_id in self._lookup

    def find(self, node_id: str) -> TreeNode | None:
        return self._lookup.get(node_id)

    def set_workflow(self, node: WorkflowNode) -> None:
        if self.root is not None:
            logger.debug("Resetting tree", extra={"previous_workflow": self.root.id})
        self.root = node
        self._lookup = {}
        self._last_task_proxy = None
        self._index(node)

    def add_cycle_point(self, node: CyclePointNode) -> None:
        root = self._require_root()
        self._index(node)
        root.children.append(node)

    def add_family_proxy(self, node: FamilyProxyNode) -> None:
        parent = self._namespace_parent(node)
        self._index(node)
        parent.children.append(node)

    def add_task_proxy(self, node: TaskProxyNode) -> None:
        parent = self._namespace_parent(node)
        self._index(node)
        parent.children.append(node)
        self._last_task_proxy = node

    def add_job(self, node: JobNode) -> None:
        root = self._require_root()
        parent_id = task_proxy_id_for_job(node.node)
        parent: TaskProxyNode | WorkflowNode
        found = self._lookup.get(parent_id)
        if isinstance(found, TaskProxyNode):
            parent = found
        else:
            parent = self._last_task_proxy or root
            logger.warning(
                "Task proxy of job not in tree, using %s",
                parent.type,
                extra={"node_id": node.id, "parent_id": parent_id, "fallback_id": parent.id},
            )
        # Both ids are checked before either is indexed.
        self._check_new(node)
        self._check_new(node.details)
        self._index(node)
        self._index(node.details)
        parent.children.append(node)

    def walk(self) -> Iterator[TreeNode]:
        """Yield every node depth-first, in insertion order, root first."""

        if self.root is None:
            return
        stack: list[TreeNode] = [self.root]
        while stack:
            current = stack.pop()
            yield current
            stack.extend(reversed(current.children))

    def to_json(self) -> list[dict[str, object]]:
        """Serialize the displayed part of the tree (the workflow's children)."""

        if self.root is None:
            return []
        return [child.to_json() for child in self.root.children]

    def _require_root(self) -> WorkflowNode:
        if self.root is None:
            raise TreeError("set_workflow must be called before adding nodes")
        return self.root

    def _check_new(self, node: TreeNode) -> None:
        if node.id in self._lookup:
            raise DuplicateNodeError(node.id)

    def _index(self, node: TreeNode) -> None:
        self._check_new(node)
        self._lookup[node.id] = node

    def _namespace_parent(
        self, node: FamilyProxyNode | TaskProxyNode
    ) -> FamilyProxyNode | CyclePointNode | WorkflowNode:
        root = self._require_root()
        record = node.node
        cycle_point_id = record.get("cyclePoint")

        first_parent = record.get("firstParent")
        if isinstance(first_parent, dict) and first_parent.get("name") != ROOT_FAMILY:
            parent_id = first_parent.get("id")
            parent = self._lookup.get(parent_id) if parent_id else None
            if isinstance(parent, FamilyProxyNode):
                return parent
            logger.warning(
                "Parent family not in tree, using cycle point",
                extra={"node_id": node.id, "parent_id": parent_id, "cycle_point": cycle_point_id},
            )

        cycle_point = self._lookup.get(cycle_point_id) if cycle_point_id else None
        if isinstance(cycle_point, CyclePointNode):
            return cycle_point
        logger.warning(
            "Cycle point not in tree, using workflow",
            extra={"node_id": node.id, "cycle_point": cycle_point_id},
        )
        return root


def build_tree(workflow: DomainRecord | None) -> WorkflowTree:
    """Populate a new :class:`WorkflowTree` from ``workflow``.

    Nothing is returned if population fails, so callers never see a partial
    tree.
    """

    tree = WorkflowTree()
    populate_tree_from_graphql_data(tree, workflow)
    return tree
