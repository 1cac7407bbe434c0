"""Tests for the HTTP surface."""

import pytest
from fastapi.testclient import TestClient

from inkwise.main import app
from inkwise.persistence import MemoryStore, get_store


@pytest.fixture
def client():
    store = MemoryStore()
    app.dependency_overrides[get_store] = lambda: store
    yield TestClient(app)
    app.dependency_overrides.clear()


def first_claim_id(client):
    return client.get("/api/session").json()["claims"][0]["id"]


class TestMeta:
    def test_health(self, client):
        assert client.get("/health").json()["status"] == "healthy"

    def test_profiles(self, client):
        profiles = client.get("/api/profiles").json()
        assert [p["key"] for p in profiles] == ["linkedin", "xthread", "email", "memo", "blog", "custom"]
        assert profiles[1]["chunk_size"] == 280


class TestSession:
    def test_default_session_is_stable(self, client):
        first = client.get("/api/session").json()
        second = client.get("/api/session").json()
        assert first["claims"][0]["id"] == second["claims"][0]["id"]
        assert first["phase"] == "intent"

    def test_patch_and_draft(self, client):
        client.patch("/api/session", json={"intent": "Q3 update", "outputProfile": "email"})
        client.patch("/api/session", json={"linkedin": {"includeCTA": False}})
        draft = client.get("/api/session/draft").json()
        assert draft["profile"] == "email"
        assert draft["text"] == "Subject: Q3 update\n\nQ3 update"
        assert draft["base"] == "Q3 update"
        assert draft["max_chars"] == 20000
        assert draft["over_limit"] is False

    def test_put_repairs_garbage(self, client):
        state = client.put("/api/session", json={"phase": 3, "claims": "x"}).json()
        assert state["phase"] == "intent"
        assert len(state["claims"]) == 1

    def test_delete_resets(self, client):
        client.patch("/api/session", json={"intent": "something"})
        assert client.delete("/api/session").json()["intent"] == ""
        assert client.get("/api/session").json()["intent"] == ""

    def test_phase(self, client):
        assert client.post("/api/session/phase", json={"phase": "expression"}).json()["phase"] == "expression"


class TestClaims:
    def test_claim_lifecycle(self, client):
        first_id = first_claim_id(client)
        state = client.post("/api/session/claims", json={"text": "Second"}).json()
        second_id = state["claims"][1]["id"]

        state = client.patch(f"/api/session/claims/{first_id}", json={"text": "First"}).json()
        assert [c["text"] for c in state["claims"]] == ["First", "Second"]

        state = client.post(f"/api/session/claims/{second_id}/move", json={"direction": "up"}).json()
        assert [c["id"] for c in state["claims"]] == [second_id, first_id]

        state = client.put(f"/api/session/expressions/{first_id}", json={"text": "Why"}).json()
        assert state["expressions"][first_id] == "Why"

        state = client.delete(f"/api/session/claims/{first_id}").json()
        assert [c["id"] for c in state["claims"]] == [second_id]
        assert first_id not in state["expressions"]

    def test_unknown_claim(self, client):
        assert client.patch("/api/session/claims/missing", json={"text": "x"}).status_code == 404
        assert client.delete("/api/session/claims/missing").status_code == 404

    def test_bad_direction(self, client):
        claim_id = first_claim_id(client)
        response = client.post(f"/api/session/claims/{claim_id}/move", json={"direction": "left"})
        assert response.status_code == 422


class TestPresetsAndDemo:
    def test_preset(self, client):
        state = client.post("/api/session/presets/ai_energy_wall").json()
        assert state["phase"] == "draft"
        assert state["ui"]["presetId"] == "ai_energy_wall"
        assert client.get("/api/session/progress").json()["completed_expressions"] == 3

    def test_unknown_preset(self, client):
        assert client.post("/api/session/presets/nope").status_code == 404

    def test_demo(self, client):
        state = client.post("/api/session/demo").json()
        assert state["intent"] == "Clear writing starts before the first sentence."


class TestImportExport:
    def test_export_import_round_trip(self, client):
        client.post("/api/session/presets/travel_trust")
        before = client.get("/api/session").json()

        response = client.get("/api/session/export")
        assert "inkwise_session_" in response.headers["content-disposition"]
        envelope = response.json()
        assert envelope["version"] == "inkwise:session:v1"

        client.delete("/api/session")
        imported = client.post("/api/session/import", json=envelope).json()
        assert imported == before

    def test_import_moves_to_draft(self, client):
        payload = {"phase": "structure", "claims": [{"id": "a", "text": "A"}]}
        assert client.post("/api/session/import", json=payload).json()["phase"] == "draft"

    def test_import_rejects_empty_claims(self, client):
        client.patch("/api/session", json={"intent": "keep me"})
        response = client.post("/api/session/import", json={"state": {"claims": []}})
        assert response.status_code == 422
        assert response.json()["detail"]["message"].startswith("Could not parse import data")
        assert client.get("/api/session").json()["intent"] == "keep me"

    def test_import_reports_envelope_errors(self, client):
        payload = {
            "version": "inkwise:session:v1",
            "exportedAt": "2025-01-18T00:00:00.000Z",
            "state": {"claims": [{"id": "", "text": 1}]},
        }
        detail = client.post("/api/session/import", json=payload).json()["detail"]
        assert detail["message"].startswith("Invalid session format: ")
        assert any(line.startswith("state.claims.0.id: ") for line in detail["errors"])
        assert any(line.startswith("state.claims.0.text: ") for line in detail["errors"])

    def test_markdown(self, client):
        client.patch("/api/session", json={"intent": "Title", "outputProfile": "blog"})
        response = client.get("/api/session/markdown")
        assert response.headers["content-type"].startswith("text/markdown")
        assert "inkwise_blog_" in response.headers["content-disposition"]
        assert response.text == "# Title"


class TestCompose:
    def test_stateless_compose(self, client):
        payload = {"intent": "Q3 update", "outputProfile": "email", "linkedin": {"includeCTA": False}}
        draft = client.post("/api/drafts/compose", json=payload).json()
        assert draft["text"] == "Subject: Q3 update\n\nQ3 update"
        assert client.get("/api/session").json()["intent"] == ""

    def test_thread_compose(self, client):
        payload = {"intent": "a" * 500, "outputProfile": "xthread", "linkedin": {"includeCTA": False}}
        draft = client.post("/api/drafts/compose", json=payload).json()
        assert draft["text"].startswith("1/2\n")
        assert "\n\n---\n\n2/2\n" in draft["text"]

    def test_compose_flags_over_limit(self, client):
        payload = {"intent": "a" * 3001, "outputProfile": "linkedin"}
        draft = client.post("/api/drafts/compose", json=payload).json()
        assert draft["max_chars"] == 3000
        assert draft["char_count"] > 3000
        assert draft["over_limit"] is True

    def test_compose_with_oversized_max_bullets(self, client):
        payload = {"linkedin": {"maxBullets": "9" * 5000}}
        response = client.post("/api/drafts/compose", json=payload)
        assert response.status_code == 200
        assert response.json()["profile"] == "linkedin"
