"""Stand-in workflow service for offline work.

Serves a checkpoint instead of talking to a Cylc UI server. Where the real
service would push workflows into application state, this one hands them to
the ``dispatch`` callback it is given.
"""

from __future__ import annotations

import logging
from collections.abc import Callable
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any

from .checkpoint import load_checkpoint

logger = logging.getLogger(__name__)

Dispatch = Callable[[list[dict[str, Any]]], None]
OnNext = Callable[[dict[str, Any]], None]


@dataclass(frozen=True, slots=True)
class MutationArg:
    name: str
    type_name: str
    kind: str | None = None


@dataclass(frozen=True, slots=True)
class Mutation:
    name: str
    title: str
    description: str
    args: tuple[MutationArg, ...]


_WORKFLOW_ARG = MutationArg(name="workflow", type_name="workflowID")

MUTATIONS: tuple[Mutation, ...] = (
    Mutation(
        name="workflowMutation",
        title="Workflow Mutation",
        description="Act on a whole workflow.",
        args=(_WORKFLOW_ARG,),
    ),
    Mutation(
        name="cycleMutation",
        title="Cycle Mutation",
        description="Act on every task in a cycle point.",
        args=(_WORKFLOW_ARG, MutationArg(name="cycle", type_name="CyclePoint")),
    ),
    Mutation(
        name="namespaceMutation",
        title="Namespace Mutation",
        description="Act on a task or family namespace.",
        args=(_WORKFLOW_ARG, MutationArg(name="namespace", type_name="NamespaceName")),
    ),
    Mutation(
        name="jobMutation",
        title="Job Mutation",
        description="Act on a single job.",
        args=(_WORKFLOW_ARG, MutationArg(name="job", type_name="JobID")),
    ),
)


@dataclass(eq=False, slots=True)
class Subscription:
    view: object | None
    query: str
    active: bool = False
    variables: dict[str, Any] = field(default_factory=dict)


class MockWorkflowService:
    """Offline workflow service backed by a checkpoint.

    Workflows are dispatched once on construction and again each time a
    deltas subscription starts, mirroring the initial burst a live server
    sends.
    """

    def __init__(self, dispatch: Dispatch, checkpoint: dict[str, Any] | None = None) -> None:
        self._dispatch = dispatch
        self.checkpoint = checkpoint if checkpoint is not None else load_checkpoint()
        self.query: str | None = None
        self.subscriptions: list[Subscription] = []
        self.mutations: tuple[Mutation, ...] = MUTATIONS
        self._dispatch(self.workflows)
        logger.info(
            "Mock workflow service ready",
            extra={"workflows": len(self.workflows), "mutations": len(self.mutations)},
        )

    @classmethod
    def from_path(cls, dispatch: Dispatch, path: Path | None) -> MockWorkflowService:
        return cls(dispatch, load_checkpoint(path))

    @property
    def workflows(self) -> list[dict[str, Any]]:
        return self.checkpoint["workflows"]

    def subscribe(self, view: object, query: str) -> int:
        """Register ``view`` and mark every subscription active.

        Returns the subscription's position in :attr:`subscriptions` at the
        time of subscribing. Use :meth:`unregister` with the same view to remove
        it.
        """

        self.query = query
        self.subscriptions.append(Subscription(view=view, query=query))
        for subscription in self.subscriptions:
            subscription.active = True
        return len(self.subscriptions) - 1

    def unregister(self, view: object) -> None:
        """Drop the subscriptions registered for ``view``.

        Deltas subscriptions have no view and are only removed by
        :meth:`stop_deltas_subscription`.
        """

        if view is None:
            return
        self.subscriptions = [s for s in self.subscriptions if s.view is not view]

    def start_deltas_subscription(
        self, query: str, variables: dict[str, Any] | None, on_next: OnNext
    ) -> Subscription:
        if "deltas" not in query:
            self.query = query
        self._dispatch(self.workflows)

        subscription = Subscription(
            view=None, query=query, active=True, variables=dict(variables or {})
        )
        self.subscriptions.append(subscription)

        added = {"workflow": self.workflows[0]} if self.workflows else {}
        on_next({"data": {"deltas": {"added": added}, "workflows": self.workflows}})
        return subscription

    def stop_deltas_subscription(self, subscription: Subscription) -> None:
        if subscription in self.subscriptions:
            self.subscriptions.remove(subscription)
        subscription.active = False

    def mutate(self, mutation_name: str, node_id: str) -> None:
        # Nothing to mutate offline.
        logger.info("Mock mutation ignored", extra={"mutation": mutation_name, "node_id": node_id})

    def recompute(self) -> None:
        pass
