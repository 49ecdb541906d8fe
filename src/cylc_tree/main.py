"""CLI entrypoint for the tree builder."""

from __future__ import annotations

import argparse
import json
import logging
import sys
from pathlib import Path
from typing import Any

from pydantic import ValidationError

from cylc_tree import __version__
from cylc_tree.config import TreeSettings
from cylc_tree.logging import configure_logging
from cylc_tree.services.mock import MockWorkflowService
from cylc_tree.tree.populate import InvalidTreeDataError
from cylc_tree.tree.store import TreeError, WorkflowTree, build_tree

logger = logging.getLogger(__name__)


def select_workflow(payload: object, workflow_id: str | None = None) -> dict[str, Any] | None:
    """Pick one workflow out of a decoded JSON document.

    Accepts a bare workflow object, ``{"workflows": [...]}``, or a GraphQL
    response envelope ``{"data": {"workflows": [...]}}``. Without
    ``workflow_id`` the first workflow is returned.
    """

    if not isinstance(payload, dict):
        return None
    if isinstance(payload.get("data"), dict):
        payload = payload["data"]

    workflows = payload.get("workflows")
    if workflows is None:
        candidates = [payload]
    elif isinstance(workflows, list):
        candidates = [w for w in workflows if isinstance(w, dict)]
    else:
        return None

    if workflow_id is None:
        return candidates[0] if candidates else None
    for candidate in candidates:
        if candidate.get("id") == workflow_id:
            return candidate
    return None


def _print_tree(tree: WorkflowTree, indent: int | None) -> None:
    print(json.dumps(tree.to_json(), indent=indent, ensure_ascii=False))


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="cylc-tree",
        description="Build the Cylc tree view hierarchy from GraphQL workflow data",
    )
    parser.add_argument("--version", action="version", version=f"cylc-tree {__version__}")

    subparsers = parser.add_subparsers(dest="command", required=True)

    build = subparsers.add_parser("build", help="Build a tree from a workflow JSON file")
    build.add_argument(
        "--input",
        type=Path,
        required=True,
        help="JSON file holding a workflow, {'workflows': [...]} or a GraphQL response",
    )
    build.add_argument(
        "--workflow-id",
        default=None,
        help="Workflow to build when the file holds several (defaults to the first)",
    )
    build.add_argument(
        "--indent",
        type=int,
        default=2,
        help="JSON indentation of the printed tree (0 for compact output)",
    )

    mock = subparsers.add_parser("mock", help="Build a tree from the mock workflow checkpoint")
    mock.add_argument(
        "--indent",
        type=int,
        default=2,
        help="JSON indentation of the printed tree (0 for compact output)",
    )

    return parser


def main(argv: list[str] | None = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)

    try:
        settings = TreeSettings()
    except ValidationError as e:
        # Logging isn't configured yet; keep it simple and actionable.
        print("Configuration error (check your .env):", file=sys.stderr)
        print(e, file=sys.stderr)
        return 2

    configure_logging(settings.log_level)
    indent = args.indent or None

    try:
        if args.command == "build":
            payload = json.loads(args.input.read_text(encoding="utf-8"))
            workflow = select_workflow(payload, args.workflow_id)
            tree = build_tree(workflow)
            logger.info(
                "Tree built",
                extra={"path": str(args.input), "workflow_id": tree.root.id if tree.root else None},
            )
            _print_tree(tree, indent)
            return 0

        if args.command == "mock":
            received: list[dict[str, Any]] = []
            MockWorkflowService.from_path(received.extend, settings.checkpoint_path)
            tree = build_tree(select_workflow({"workflows": received}))
            _print_tree(tree, indent)
            return 0

        logger.error("Unknown command", extra={"command": args.command})
        return 2

    except (InvalidTreeDataError, json.JSONDecodeError) as e:
        logger.error(str(e))
        print(str(e), file=sys.stderr)
        return 2

    except TreeError as e:
        logger.error("Tree could not be built", extra={"error": str(e)})
        print(str(e), file=sys.stderr)
        return 3

    except Exception:
        logger.exception("Command failed")
        return 1


if __name__ == "__main__":
    raise SystemExit(main())
