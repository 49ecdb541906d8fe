from __future__ import annotations

import json
from pathlib import Path
from typing import Any

import pytest
from fastapi.testclient import TestClient

from cylc_tree.server.app import create_app


@pytest.fixture
def client(monkeypatch: pytest.MonkeyPatch, tmp_path: Path) -> TestClient:
    monkeypatch.chdir(tmp_path)
    monkeypatch.delenv("CYLC_TREE_CHECKPOINT", raising=False)
    return TestClient(create_app())


def test_health(client: TestClient) -> None:
    health = client.get("/api/v1/health").json()
    assert health["status"] == "ok"
    assert "version" in health


def test_tree_from_posted_workflow(client: TestClient, simple_workflow: dict[str, Any]) -> None:
    simple_workflow["familyProxies"][0]["cyclePoint"] = "2024"
    simple_workflow["taskProxies"][0].update({"cyclePoint": "2024", "firstParent": {"id": "f1"}})
    simple_workflow["taskProxies"][0]["jobs"][0]["taskProxy"] = {"id": "t1"}

    res = client.post("/api/v1/tree", json={"workflow": simple_workflow})

    assert res.status_code == 200
    body = res.json()
    assert body["workflowId"] == "w1"
    assert body["nodeCount"] == 6
    cycle_point = body["children"][0]
    assert cycle_point["id"] == "2024"
    task = cycle_point["children"][0]["children"][0]
    assert task["id"] == "t1"
    assert task["node"]["state"] == ""
    assert task["children"][0]["children"][0]["id"] == "j1-details"


def test_invalid_workflow_is_rejected(client: TestClient) -> None:
    res = client.post("/api/v1/tree", json={"workflow": {"id": "w1", "cyclePoints": []}})

    assert res.status_code == 422
    assert res.json()["detail"] == "You must provide valid data to populate the tree!"


def test_records_without_cycle_points_go_under_the_workflow(
    client: TestClient, simple_workflow: dict[str, Any]
) -> None:
    res = client.post("/api/v1/tree", json={"workflow": simple_workflow})

    assert res.status_code == 200
    body = res.json()
    assert body["nodeCount"] == 6
    assert [c["id"] for c in body["children"]] == ["2024", "f1", "t1"]
    assert body["children"][2]["children"][0]["id"] == "j1"


def test_duplicate_node_is_a_conflict(client: TestClient, simple_workflow: dict[str, Any]) -> None:
    simple_workflow["familyProxies"].append({"id": "f1"})

    res = client.post("/api/v1/tree", json={"workflow": simple_workflow})

    assert res.status_code == 409
    assert "f1" in res.json()["detail"]


def test_mock_tree_uses_the_bundled_checkpoint(client: TestClient) -> None:
    body = client.get("/api/v1/mock/tree").json()

    assert body["workflowId"] == "cylc|one"
    assert [c["id"] for c in body["children"]] == ["20000101T0000Z", "20000102T0000Z"]


def test_mock_tree_reads_a_configured_checkpoint(
    monkeypatch: pytest.MonkeyPatch, tmp_path: Path, simple_workflow: dict[str, Any]
) -> None:
    simple_workflow["familyProxies"] = []
    simple_workflow["taskProxies"] = []
    path = tmp_path / "checkpoint.json"
    path.write_text(json.dumps({"workflows": [simple_workflow]}), encoding="utf-8")
    monkeypatch.setenv("CYLC_TREE_CHECKPOINT", str(path))

    body = TestClient(create_app()).get("/api/v1/mock/tree").json()

    assert body["workflowId"] == "w1"
    assert body["nodeCount"] == 2
