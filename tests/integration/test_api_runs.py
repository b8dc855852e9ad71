from __future__ import annotations

import time

import pytest
from fastapi.testclient import TestClient

from sortviz.app.main import create_app
from sortviz.core.config.settings import EngineSettings


@pytest.fixture()
def client():
    app = create_app(settings=EngineSettings(delay_scale=0.0, pause_poll_interval=0.005))
    with TestClient(app) as c:
        yield c


def wait_for_phase(client: TestClient, *phases: str, timeout: float = 5.0) -> dict:
    deadline = time.monotonic() + timeout
    while True:
        body = client.get("/api/runs/current").json()
        if body["phase"] in phases or time.monotonic() > deadline:
            return body
        time.sleep(0.01)


def test_health(client: TestClient) -> None:
    r = client.get("/api/health")

    assert r.status_code == 200
    assert r.json() == {"status": "ok", "environment": "local", "engine_phase": "idle"}


def test_algorithm_catalog(client: TestClient) -> None:
    r = client.get("/api/algorithms")
    ids = [a["id"] for a in r.json()["algorithms"]]

    assert r.status_code == 200
    assert "quick-sort" in ids and len(ids) == 9

    info = client.get("/api/algorithms/radix-sort").json()
    assert info["integers_only"] is True
    assert client.get("/api/algorithms/bogo-sort").status_code == 404


def test_run_to_completion(client: TestClient) -> None:
    r = client.post("/api/runs", json={"algorithm": "bubble-sort", "input_array": [5, 2, 8, 1, 9], "speed": 10})
    assert r.status_code == 202
    run_id = r.json()["run_id"]

    body = wait_for_phase(client, "completed")

    assert body["run_id"] == run_id
    assert body["array"] == [1, 2, 5, 8, 9]
    assert body["comparisons"] == 10
    assert body["last_result"]["success"] is True
    assert body["metrics"]["comparisons"] == "10"


def test_rejects_bad_input(client: TestClient) -> None:
    assert client.post("/api/runs", json={"algorithm": "bogo-sort"}).status_code == 404
    assert client.post("/api/runs", json={"algorithm": "bubble-sort", "input_array": []}).status_code == 422
    assert client.post("/api/runs", json={"algorithm": "bubble-sort", "input_array": [1, "x"]}).status_code == 422
    assert client.post("/api/runs", json={"algorithm": "radix-sort", "input_array": [1.5, 2]}).status_code == 422

    assert client.get("/api/runs/current").json()["phase"] == "idle"


def test_step_mode_over_http(client: TestClient) -> None:
    client.post("/api/runs", json={"algorithm": "insertion-sort", "input_array": [2, 1], "mode": "step"})

    deadline = time.monotonic() + 5.0
    while not client.get("/api/runs/current").json()["awaiting_step"]:
        assert time.monotonic() < deadline
        time.sleep(0.01)

    r = client.post("/api/runs/current/step")
    assert r.status_code == 200

    body = wait_for_phase(client, "completed")
    assert body["array"] == [1, 2]


def test_pause_resume_stop_and_speed(client: TestClient) -> None:
    client.post("/api/runs", json={"algorithm": "heap-sort", "input_size": 40, "mode": "step"})
    wait_for_phase(client, "running")

    assert client.post("/api/runs/current/pause").json()["phase"] == "paused"
    assert client.post("/api/runs/current/resume").json()["phase"] == "running"
    assert client.put("/api/runs/current/speed", json={"speed": 99}).json() == {"speed": 10}

    assert client.post("/api/runs/current/stop").json()["phase"] == "stopped"

    body = wait_for_phase(client, "stopped")
    assert body["last_result"] is None or body["last_result"]["success"] is False


def test_frames_stream(client: TestClient) -> None:
    client.post("/api/runs", json={"algorithm": "selection-sort", "input_array": [3, 1, 2]})
    wait_for_phase(client, "completed")

    body = client.get("/api/runs/current/frames").json()
    assert body["frames"][0]["op"] == "initialize"
    assert body["frames"][0]["values"] == [3, 1, 2]
    assert body["last_seq"] == body["frames"][-1]["seq"]

    later = client.get("/api/runs/current/frames", params={"since": body["last_seq"]}).json()
    assert later["frames"] == []


def test_run_accepts_text_input(client: TestClient) -> None:
    r = client.post("/api/runs", json={"algorithm": "shell-sort", "input_array": "[4, 1.5, 3]"})
    assert r.status_code == 202
    assert r.json()["size"] == 3

    body = wait_for_phase(client, "completed")
    assert body["array"] == [1.5, 3, 4]

    bad = client.post("/api/runs", json={"algorithm": "shell-sort", "input_array": "4, x"})
    assert bad.status_code == 422
