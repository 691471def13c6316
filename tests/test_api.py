# File: tests/test_api.py
"""
Test the REST API with FastAPI's TestClient.
"""

import pytest
from fastapi.testclient import TestClient

from api.main import app
from climbframe.exports import bom_csv, model_dict
from climbframe.generative import MAX_PIPE_COUNT, build_structure_by_counts
from services import ExportService


@pytest.fixture
def client():
    return TestClient(app)


def test_root(client):
    assert client.get("/").json()["status"] == "ok"


def test_generate_frames(client):
    """
    24 long pipes build two boxes.
    """
    data = client.post("/api/generate/frames", json={"count_20cm": 0, "count_40cm": 24}).json()

    assert data["boxes"] == 2
    assert len(data["pipes"]) == 24
    assert data["parts"]["connectors_3"] == 16

    print("✓ Frames endpoint works")


def test_generate_frames_clamps_input(client):
    """
    Negative and non-numeric counts are treated as zero, not rejected.
    """
    response = client.post("/api/generate/frames", json={"count_20cm": "abc", "count_40cm": -5})

    assert response.status_code == 200
    assert response.json()["boxes"] == 0
    assert response.json()["pipes"] == []


def test_generate_frames_caps_huge_counts(client):
    """
    Counts above MAX_PIPE_COUNT are cut down to it, so one request cannot
    ask for an unbounded structure.
    """
    data = client.post("/api/generate/frames", json={"count_40cm": 240000}).json()

    assert data["parts"]["pipe_40cm"] == MAX_PIPE_COUNT // 12 * 12
    assert data["boxes"] == MAX_PIPE_COUNT // 12

    data = client.post("/api/generate/frames", json={"count_20cm": 10**12}).json()
    assert len(data["pipes"]) <= MAX_PIPE_COUNT


def test_generate_scaffold(client):
    data = client.post("/api/generate/scaffold").json()
    assert len(data["pipes"]) == 96
    assert data["parts"]["pipe_40cm"] == 96


def test_placement_round_trip(client):
    """
    Anchor at the origin, then press Enter: one 20 cm pipe along +X.
    """
    first = client.post("/api/placement/event", json={
        "event": {"type": "SelectAnchor", "point": [0, 0, 0]},
    }).json()

    assert first["phase"] == "anchor_selected"
    assert first["available_directions"] == ["X+", "X-", "Y+", "Y-", "Z+", "Z-"]
    assert first["ghost"] == [[0, 0, 0], [2, 0, 0]]

    second = client.post("/api/placement/event", json={
        "state": first["state"],
        "key": "Enter",
    }).json()

    assert second["phase"] == "idle"
    assert second["ghost"] is None
    pipes = second["state"]["pipes"]
    assert len(pipes) == 1
    assert pipes[0]["start"] == [0, 0, 0]
    assert pipes[0]["axis"] == "x"
    assert second["parts"]["pipe_20cm"] == 1


def test_placement_set_direction(client):
    data = client.post("/api/placement/event", json={
        "state": {"session": {"length_units": 4, "anchor": [0, 0, 0]}},
        "event": {"type": "SetDirection", "direction": "Z-"},
    }).json()

    assert data["state"]["session"]["direction"] == "Z-"
    assert data["ghost"] == [[0, 0, 0], [0, 0, -4]]


def test_placement_rejects_taken_direction(client):
    """
    A session direction that is not free at its anchor is malformed state.
    """
    state = {
        "pipes": [{"id": "a", "start": [0, 0, 0], "axis": "x", "length_units": 4}],
        "session": {"length_units": 2, "anchor": [0, 0, 0], "direction": "X+"},
    }
    response = client.post("/api/placement/event", json={"state": state, "key": "Enter"})

    assert response.status_code == 400


def test_placement_unbound_key_is_noop(client):
    state = {"pipes": [{"id": "a", "start": [0, 0, 0], "axis": "x", "length_units": 4}]}
    data = client.post("/api/placement/event", json={"state": state, "key": "q"}).json()

    assert data["state"]["pipes"][0]["id"] == "a"
    assert data["phase"] == "idle"


def test_placement_errors(client):
    """
    Missing events, unknown events and malformed pipes are 400s.
    """
    assert client.post("/api/placement/event", json={}).status_code == 400
    assert client.post("/api/placement/event", json={"event": {"type": "Jump"}}).status_code == 400

    bad_pipe = {"pipes": [{"id": "a", "start": [0, 0, 0], "axis": "x", "length_units": 3}]}
    response = client.post("/api/placement/event", json={"state": bad_pipe, "key": "Enter"})
    assert response.status_code == 400


def test_pick_endpoint(client):
    pipes = [{"id": "a", "start": [0, 0, 0], "axis": "x", "length_units": 4}]
    data = client.post("/api/pick", json={
        "pipes": pipes,
        "ndc_x": 0.0,
        "ndc_y": 0.0,
        "eye": [0.2, -1.0, 0.0],
        "target": [0.2, 0.0, 0.0],
    }).json()

    assert data["kind"] == "pipe"
    assert data["event"] == {"type": "PickPipe", "pipe_id": "a"}


def test_pick_endpoint_plane_fallback(client):
    data = client.post("/api/pick", json={
        "ndc_x": 0.0,
        "ndc_y": 0.0,
        "eye": [0.3, 0.2, 1.0],
        "target": [0.3, 0.2, 0.0],
        "up": [0.0, 1.0, 0.0],
        "plane": "XY",
    }).json()

    assert data["kind"] == "plane"
    assert data["event"] == {"type": "SelectAnchor", "point": [3, 2, 0]}


def test_export_csv(client):
    pipes = client.post("/api/generate/frames", json={"count_40cm": 12}).json()["pipes"]
    response = client.post("/api/export/csv", json={"pipes": pipes})

    assert response.status_code == 200
    assert "pipe_40cm,12" in response.text
    assert "connector_3way,8" in response.text


def test_export_json(client):
    response = client.post("/api/export/json", json={"pipes": []})

    assert response.status_code == 200
    assert response.json()["geometry"]["nodes"] == [{"point": [0, 0, 0], "degree": 0, "connector": "free"}]


def test_exports_match_app_service(client):
    """
    The API and the Streamlit export page produce identical files.
    """
    pipes = build_structure_by_counts(10, 8)
    payload = {"pipes": [
        {"id": p.id, "start": list(p.start), "axis": p.axis, "length_units": p.length_units}
        for p in pipes
    ]}

    csv_text = client.post("/api/export/csv", json=payload).text
    model = client.post("/api/export/json", json=payload).json()

    assert csv_text == bom_csv(pipes) == ExportService.generate_bom_csv(pipes)
    assert model == model_dict(pipes)
    assert ExportService.generate_model_json(pipes) == client.post("/api/export/json", json=payload).text
