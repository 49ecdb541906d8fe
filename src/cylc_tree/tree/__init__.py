"""Build the Cylc tree view hierarchy from GraphQL workflow data.

The flat workflow payload (cycle points, family proxies, task proxies and
their jobs) is turned into typed nodes and inserted, parents first, into a
tree store.
"""

from cylc_tree.tree.factories import (
    create_cycle_point_node,
    create_family_proxy_node,
    create_job_node,
    create_task_proxy_node,
    create_workflow_node,
    default_ghost_state,
)
from cylc_tree.tree.nodes import (
    JOB_DETAIL_NODE_PROPERTIES,
    TREE_ITEM_SIZE,
    CyclePointNode,
    FamilyProxyNode,
    JobDetailsNode,
    JobNode,
    TaskProxyNode,
    TreeNode,
    WorkflowNode,
)
from cylc_tree.tree.populate import (
    InvalidTreeDataError,
    TreeStore,
    contains_tree_data,
    populate_tree_from_graphql_data,
)
from cylc_tree.tree.store import WorkflowTree, build_tree

__all__ = [
    "JOB_DETAIL_NODE_PROPERTIES",
    "TREE_ITEM_SIZE",
    "CyclePointNode",
    "FamilyProxyNode",
    "InvalidTreeDataError",
    "JobDetailsNode",
    "JobNode",
    "TaskProxyNode",
    "TreeNode",
    "TreeStore",
    "WorkflowNode",
    "WorkflowTree",
    "contains_tree_data",
    "create_cycle_point_node",
    "create_family_proxy_node",
    "create_job_node",
    "create_task_proxy_node",
    "create_workflow_node",
    "default_ghost_state",
    "build_tree",
    "populate_tree_from_graphql_data",
]
