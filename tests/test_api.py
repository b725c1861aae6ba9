import pytest
from fastapi.testclient import TestClient

from config import Settings
from fakes import LOVE_REPLIES, ScriptedLLM
from main import app, build_view


@pytest.fixture
def llm() -> ScriptedLLM:
    return ScriptedLLM(LOVE_REPLIES)


@pytest.fixture
def client(llm, monkeypatch):
    monkeypatch.delenv("WANDB_API_KEY", raising=False)
    with TestClient(app) as client:
        app.state.view = build_view(Settings(openai_api_key=None), llm=llm)
        yield client


def test_index_serves_grid_page(client):
    response = client.get("/")

    assert response.status_code == 200
    assert "Add Row" in response.text
    assert "Clear All" in response.text
    assert "result.degraded" in response.text
    assert "liveRow(id)" in response.text


def test_health(client):
    body = client.get("/health").json()

    assert body == {"status": "ok", "model": "scripted", "variant": "staged", "rows": 4}


def test_columns(client):
    columns = client.get("/columns").json()

    assert columns[0] == {"headerName": "Message", "field": "message", "editable": True, "flex": 2}


def test_edit_message_classifies_row(client):
    rows = client.get("/rows").json()["rows"]

    response = client.patch(
        f"/rows/{rows[0]['id']}",
        json={"field": "message", "value": "I love your protein bars!"},
    )

    assert response.status_code == 200
    body = response.json()
    assert body["stale"] is False
    assert body["degraded"] is False
    assert body["row"]["category"] == "Love"
    assert body["row"]["confidence"] == "92%"
    assert body["row"]["action"] == "DM/Comment"
    assert body["row"]["status"] == "Automated"
    assert client.get("/rows").json()["rows"][0] == body["row"]


def test_edit_unknown_row_returns_404(client):
    response = client.patch("/rows/missing", json={"field": "message", "value": "hello"})

    assert response.status_code == 404


def test_add_and_clear_rows(client):
    added = client.post("/rows")
    assert added.status_code == 201
    assert added.json()["message"] == ""

    rows = client.get("/rows").json()["rows"]
    client.patch(f"/rows/{rows[0]['id']}", json={"field": "message", "value": "hello"})

    snapshot = client.post("/rows/clear").json()

    assert snapshot["mount_key"] == 1
    assert len(snapshot["rows"]) == 5
    assert all(row["message"] == "" and row["category"] == "" for row in snapshot["rows"])


def test_classify_endpoint(client, llm):
    body = client.post("/classify", json={"message": "I love your protein bars!"}).json()

    assert body == {
        "category": "Love",
        "confidence": 92.0,
        "response": LOVE_REPLIES["response"]["response"],
        "action": "DM/Comment",
    }


def test_classify_empty_message_skips_llm(client, llm):
    body = client.post("/classify", json={"message": ""}).json()

    assert body == {"category": "", "confidence": 0.0, "response": "", "action": ""}
    assert llm.calls == []


def test_outage_defaults_through_api(client):
    app.state.view = build_view(Settings(openai_api_key=None), llm=ScriptedLLM({}))

    body = client.post("/classify", json={"message": "Where is my order?"}).json()

    assert body == {
        "category": "Others",
        "confidence": 60.0,
        "response": "Error generating response",
        "action": "CRM Ticket",
    }

    rows = client.get("/rows").json()["rows"]
    edit = client.patch(
        f"/rows/{rows[0]['id']}",
        json={"field": "message", "value": "Where is my order?"},
    ).json()

    assert edit["stale"] is False
    assert edit["degraded"] is True
    assert edit["row"]["status"] == "Needs Review"
