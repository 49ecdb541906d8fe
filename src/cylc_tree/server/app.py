"""FastAPI app factory.

Endpoints are intentionally thin wrappers over the tree builder.
"""

from __future__ import annotations

import logging
from typing import Any

from fastapi import FastAPI, HTTPException
from fastapi.middleware.cors import CORSMiddleware

from cylc_tree import __version__
from cylc_tree.config import TreeSettings
from cylc_tree.server.models import TreeRequest, TreeResponse
from cylc_tree.services.mock import MockWorkflowService
from cylc_tree.tree.populate import InvalidTreeDataError
from cylc_tree.tree.store import TreeError, WorkflowTree, build_tree

logger = logging.getLogger(__name__)


def _to_response(tree: WorkflowTree) -> TreeResponse:
    return TreeResponse(
        workflow_id=tree.root.id if tree.root else None,
        node_count=len(tree),
        children=tree.to_json(),
    )


def _build_or_fail(workflow: dict[str, Any] | None) -> WorkflowTree:
    try:
        return build_tree(workflow)
    except InvalidTreeDataError as e:
        raise HTTPException(status_code=422, detail=str(e)) from e
    except TreeError as e:
        raise HTTPException(status_code=409, detail=str(e)) from e


def create_app() -> FastAPI:
    settings = TreeSettings()

    app = FastAPI(
        title="Cylc Tree",
        version=__version__,
        description="Builds the Cylc tree view hierarchy from GraphQL workflow data.",
        openapi_url="/api/openapi.json",
        docs_url="/api/docs",
        redoc_url="/api/redoc",
    )

    # Expose settings for request handlers that want to read it.
    app.state.settings = settings

    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.parsed_cors_origins(),
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    @app.get("/api/v1/health")
    def health() -> dict[str, str]:
        return {"status": "ok", "version": __version__}

    @app.post("/api/v1/tree", response_model=TreeResponse, response_model_by_alias=True)
    def tree_from_workflow(req: TreeRequest) -> TreeResponse:
        tree = _build_or_fail(req.workflow)
        logger.info("Tree built", extra={"workflow_id": tree.root.id if tree.root else None})
        return _to_response(tree)

    @app.get("/api/v1/mock/tree", response_model=TreeResponse, response_model_by_alias=True)
    def mock_tree() -> TreeResponse:
        received: list[dict[str, Any]] = []
        MockWorkflowService.from_path(received.extend, settings.checkpoint_path)
        if not received:
            raise HTTPException(status_code=404, detail="Checkpoint holds no workflows")
        return _to_response(_build_or_fail(received[0]))

    return app
