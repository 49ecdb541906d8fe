"""Bundled checkpoint of a small two-cycle workflow, used for offline work."""

from __future__ import annotations

import copy
import json
from pathlib import Path
from typing import Any

_WORKFLOW_ID = "cylc|one"


def _id(*parts: str) -> str:
    return "|".join((_WORKFLOW_ID, *parts))


def _family(point: str, name: str) -> dict[str, Any]:
    return {
        "id": _id(point, name),
        "name": name,
        "cyclePoint": point,
        "state": "",
        "firstParent": {"id": _id(point, "root"), "name": "root"},
    }


def _job(point: str, task: str, submit: int, state: str, **times: str) -> dict[str, Any]:
    return {
        "id": _id(point, task, str(submit)),
        "submitNum": submit,
        "state": state,
        "host": "localhost",
        "batchSysName": "background",
        "batchSysJobId": str(20000 + submit),
        "submittedTime": times.get("submitted", ""),
        "startedTime": times.get("started", ""),
        "finishedTime": times.get("finished", ""),
    }


def _cycle(point: str, day: str) -> tuple[list[dict[str, Any]], list[dict[str, Any]]]:
    families = [_family(point, "GOOD"), _family(point, "BAD")]
    t0 = f"2019-{day}T09:00:00Z"
    t1 = f"2019-{day}T09:00:05Z"
    t2 = f"2019-{day}T09:00:30Z"
    tasks = [
        {
            "id": _id(point, "succeeded"),
            "name": "succeeded",
            "cyclePoint": point,
            "state": "succeeded",
            "latestMessage": "succeeded",
            "firstParent": {"id": _id(point, "GOOD"), "name": "GOOD"},
            "jobs": [
                _job(point, "succeeded", 1, "succeeded", submitted=t0, started=t1, finished=t2)
            ],
        },
        {
            "id": _id(point, "failed"),
            "name": "failed",
            "cyclePoint": point,
            "state": "failed",
            "latestMessage": "failed/EXIT",
            "firstParent": {"id": _id(point, "BAD"), "name": "BAD"},
            "jobs": [
                _job(point, "failed", 1, "failed", submitted=t0, started=t1, finished=t2)
            ],
        },
        {
            "id": _id(point, "retrying"),
            "name": "retrying",
            "cyclePoint": point,
            "state": "running",
            "latestMessage": "started",
            "firstParent": {"id": _id(point, "root"), "name": "root"},
            "jobs": [
                _job(point, "retrying", 2, "running", submitted=t1, started=t2),
                _job(point, "retrying", 1, "failed", submitted=t0, started=t1, finished=t1),
            ],
        },
        {
            # Ghost: known from the graph, no state yet.
            "id": _id(point, "waiting"),
            "name": "waiting",
            "cyclePoint": point,
            "firstParent": {"id": _id(point, "root"), "name": "root"},
        },
    ]
    return families, tasks


def _build() -> dict[str, Any]:
    family_proxies: list[dict[str, Any]] = []
    task_proxies: list[dict[str, Any]] = []
    cycle_points = []
    for point, day in (("20000101T0000Z", "01-01"), ("20000102T0000Z", "01-02")):
        families, tasks = _cycle(point, day)
        cycle_points.append({"cyclePoint": point})
        family_proxies.extend(families)
        task_proxies.extend(tasks)
    return {
        "workflows": [
            {
                "id": _WORKFLOW_ID,
                "name": "one",
                "owner": "cylc",
                "host": "localhost",
                "port": 43001,
                "status": "running",
                "cyclePoints": cycle_points,
                "familyProxies": family_proxies,
                "taskProxies": task_proxies,
            }
        ]
    }


_CHECKPOINT = _build()


def load_checkpoint(path: Path | None = None) -> dict[str, Any]:
    """Return a fresh copy of a checkpoint.

    Populating a tree writes onto the records it is given, so every caller
    gets its own copy.
    """

    if path is None:
        return copy.deepcopy(_CHECKPOINT)
    raw = json.loads(path.read_text(encoding="utf-8"))
    if not isinstance(raw, dict) or not isinstance(raw.get("workflows"), list):
        raise ValueError(f"Checkpoint must be an object with a 'workflows' list: {path}")
    return raw
