"""Tree node types.

Every node kind is its own dataclass, discriminated by a fixed ``type`` string.
The union of all kinds is :data:`TreeNode`.

Nodes do not own their domain data. ``node`` holds the very record the caller
passed in (see :data:`DomainRecord`), so the tree is a live view over
application state rather than a snapshot.
"""

from __future__ import annotations

from collections.abc import Sequence
from dataclasses import dataclass, field
from typing import Any, Literal

DomainRecord = dict[str, Any]
"""A decoded GraphQL record, shared by reference and mutable.

Trees never copy these. Changes made by the application are visible through
the tree, and the one change the tree makes (see
:func:`cylc_tree.tree.factories.default_ghost_state`) is visible to the
application.
"""

TREE_ITEM_SIZE = 32
"""Height of one tree item, used as the ``size`` of every rendered node."""


@dataclass(frozen=True, slots=True)
class JobDetailProperty:
    title: str
    property: str


# Shown on each job-details leaf, in display order.
JOB_DETAIL_NODE_PROPERTIES: tuple[JobDetailProperty, ...] = (
    JobDetailProperty(title="host id", property="host"),
    JobDetailProperty(title="job id", property="batchSysJobId"),
    JobDetailProperty(title="batch sys", property="batchSysName"),
    JobDetailProperty(title="submit time", property="submittedTime"),
    JobDetailProperty(title="start time", property="startedTime"),
    JobDetailProperty(title="finish time", property="finishedTime"),
    JobDetailProperty(title="latest message", property="latestMessage"),
)

JOB_DETAILS_SUFFIX = "-details"

NodeType = Literal["workflow", "cyclepoint", "family-proxy", "task-proxy", "job", "job-details"]


@dataclass(slots=True)
class NodeState:
    """Widget state; only ``open`` (expanded) is tracked."""

    open: bool

    def to_json(self) -> dict[str, object]:
        return {"open": self.open}


def _children_json(children: Sequence[TreeNode]) -> list[dict[str, object]]:
    return [child.to_json() for child in children]


@dataclass(slots=True)
class WorkflowNode:
    """Root of the hierarchy.

    Carries no size or state: the workflow is never displayed itself, only its
    descendants are.
    """

    id: str
    node: DomainRecord
    children: list[TreeNode] = field(default_factory=list)
    type: Literal["workflow"] = field(default="workflow", init=False)

    def to_json(self) -> dict[str, object]:
        return {
            "id": self.id,
            "type": self.type,
            "node": self.node,
            "children": _children_json(self.children),
        }


@dataclass(slots=True)
class CyclePointNode:
    id: str
    node: DomainRecord
    children: list[TreeNode] = field(default_factory=list)
    size: int = TREE_ITEM_SIZE
    state: NodeState = field(default_factory=lambda: NodeState(open=True))
    type: Literal["cyclepoint"] = field(default="cyclepoint", init=False)

    def to_json(self) -> dict[str, object]:
        return {
            "id": self.id,
            "type": self.type,
            "node": self.node,
            "children": _children_json(self.children),
            "size": self.size,
            "state": self.state.to_json(),
        }


@dataclass(slots=True)
class FamilyProxyNode:
    id: str
    node: DomainRecord
    children: list[TreeNode] = field(default_factory=list)
    size: int = TREE_ITEM_SIZE
    state: NodeState = field(default_factory=lambda: NodeState(open=True))
    type: Literal["family-proxy"] = field(default="family-proxy", init=False)

    def to_json(self) -> dict[str, object]:
        return {
            "id": self.id,
            "type": self.type,
            "node": self.node,
            "children": _children_json(self.children),
            "size": self.size,
            "state": self.state.to_json(),
        }


@dataclass(slots=True)
class TaskProxyNode:
    id: str
    node: DomainRecord
    children: list[TreeNode] = field(default_factory=list)
    size: int = TREE_ITEM_SIZE
    state: NodeState = field(default_factory=lambda: NodeState(open=False))
    type: Literal["task-proxy"] = field(default="task-proxy", init=False)

    def to_json(self) -> dict[str, object]:
        return {
            "id": self.id,
            "type": self.type,
            "node": self.node,
            "children": _children_json(self.children),
            "size": self.size,
            "state": self.state.to_json(),
        }


@dataclass(slots=True)
class JobDetailsNode:
    """Leaf listing the :data:`JOB_DETAIL_NODE_PROPERTIES` of a job."""

    id: str
    node: DomainRecord
    children: list[TreeNode] = field(default_factory=list)
    size: int = TREE_ITEM_SIZE * len(JOB_DETAIL_NODE_PROPERTIES)
    state: NodeState = field(default_factory=lambda: NodeState(open=False))
    type: Literal["job-details"] = field(default="job-details", init=False)

    def to_json(self) -> dict[str, object]:
        return {
            "id": self.id,
            "type": self.type,
            "node": self.node,
            "children": _children_json(self.children),
            "size": self.size,
            "state": self.state.to_json(),
        }


@dataclass(slots=True)
class JobNode:
    """A job run.

    ``latest_message`` belongs to the owning task proxy; job records carry no
    message of their own.
    """

    id: str
    node: DomainRecord
    details: JobDetailsNode
    latest_message: str = ""
    size: int = TREE_ITEM_SIZE
    state: NodeState = field(default_factory=lambda: NodeState(open=False))
    type: Literal["job"] = field(default="job", init=False)

    @property
    def children(self) -> tuple[JobDetailsNode]:
        # Always exactly the details leaf; read-only.
        return (self.details,)

    def to_json(self) -> dict[str, object]:
        return {
            "id": self.id,
            "type": self.type,
            "node": self.node,
            "latestMessage": self.latest_message,
            "children": _children_json(self.children),
            "size": self.size,
            "state": self.state.to_json(),
        }


TreeNode = (
    WorkflowNode | CyclePointNode | FamilyProxyNode | TaskProxyNode | JobNode | JobDetailsNode
)
