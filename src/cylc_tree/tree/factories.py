"""Node factories.

One function per node kind. Each takes a domain record (by reference) and
returns a freshly built node; ids always come from the record itself, so the
same input yields the same node ids.

The factories do no validation beyond the field access they need. Malformed
records are expected to be filtered out upstream.
"""

from __future__ import annotations

from .nodes import (
    JOB_DETAILS_SUFFIX,
    CyclePointNode,
    DomainRecord,
    FamilyProxyNode,
    JobDetailsNode,
    JobNode,
    TaskProxyNode,
    WorkflowNode,
)


def create_workflow_node(workflow: DomainRecord) -> WorkflowNode:
    """Wrap the workflow record as the (undisplayed) root node."""

    return WorkflowNode(id=workflow.get("id"), node=workflow)


def create_cycle_point_node(cycle_point: DomainRecord) -> CyclePointNode:
    """Create a cycle point node from any record carrying ``cyclePoint``.

    Cycle points have no record of their own in the payload, so the node gets
    a small synthesized one holding the point as both id and name.
    """

    point = cycle_point.get("cyclePoint")
    return CyclePointNode(id=point, node={"id": point, "name": point})


def create_family_proxy_node(family_proxy: DomainRecord) -> FamilyProxyNode:
    return FamilyProxyNode(id=family_proxy.get("id"), node=family_proxy)


def default_ghost_state(task_proxy: DomainRecord) -> None:
    """Give a ghost task proxy an empty ``state``.

    Ghost task proxies arrive before the scheduler knows their status. This
    writes onto the shared record, so the application sees the default too.
    """

    if not task_proxy.get("state"):
        task_proxy["state"] = ""


def create_task_proxy_node(task_proxy: DomainRecord) -> TaskProxyNode:
    """Create a collapsed task proxy node, defaulting a ghost's state first."""

    default_ghost_state(task_proxy)
    return TaskProxyNode(id=task_proxy.get("id"), node=task_proxy)


def create_job_node(job: DomainRecord, latest_message: str | None = "") -> JobNode:
    """Create a job node with its job-details leaf attached.

    Args:
        job: The job record.
        latest_message: Latest message of the job's task proxy. ``None`` is
            treated as no message.
    """

    job_id = job.get("id")
    details = JobDetailsNode(id=f"{job_id}{JOB_DETAILS_SUFFIX}", node=job)
    return JobNode(id=job_id, node=job, details=details, latest_message=latest_message or "")
