"""Workflow data services.

Only the offline mock lives here; live GraphQL transport is outside this
package.
"""

from cylc_tree.services.checkpoint import load_checkpoint
from cylc_tree.services.mock import MockWorkflowService, Mutation, MutationArg, Subscription

__all__ = ["MockWorkflowService", "Mutation", "MutationArg", "Subscription", "load_checkpoint"]
