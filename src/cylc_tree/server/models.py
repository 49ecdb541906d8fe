"""Pydantic models for the REST server."""

from __future__ import annotations

from typing import Any

from pydantic import BaseModel, ConfigDict, Field


class TreeRequest(BaseModel):
    workflow: dict[str, Any]


class TreeResponse(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    workflow_id: str | None = Field(default=None, alias="workflowId")
    node_count: int = Field(alias="nodeCount")
    children: list[dict[str, Any]] = Field(default_factory=list)
