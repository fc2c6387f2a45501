"""
Quality insights: chart data, canned AI answers without a key, and the
Gemini client against a faked HTTP layer.
"""

import json

import pytest
import requests

from beantrace.services.insights import ai_client
from beantrace.services.insights.insights_service import MOCK_REPORT, MOCK_TRENDS, SYNTHESIS_ERROR


class FakeResponse:
    def __init__(self, status_code, body):
        self.status_code = status_code
        self._body = body
        self.text = json.dumps(body) if body is not None else "<html>bad gateway</html>"

    def json(self):
        if self._body is None:
            raise ValueError("not json")
        return self._body


def _candidate(text):
    return {"candidates": [{"content": {"parts": [{"text": text}]}}]}


@pytest.fixture
def gemini(app, monkeypatch):
    """Configure an API key and capture outgoing requests; set `.reply` per test."""
    app.config["GEMINI_API_KEY"] = "test-key"
    calls = []

    class Fake:
        reply = FakeResponse(200, _candidate("ok"))

    def fake_post(url, params=None, json=None, timeout=None):
        calls.append({"url": url, "params": params, "json": json, "timeout": timeout})
        if isinstance(Fake.reply, Exception):
            raise Fake.reply
        return Fake.reply

    monkeypatch.setattr(ai_client.requests, "post", fake_post)
    Fake.calls = calls
    return Fake


class TestCharts:

    def test_defaults(self, client, login):
        body = client.get("/insights/charts", headers=login("roaster")).get_json()
        assert body["processComparison"] == [{"name": "Honey", "averageScore": 89.25}]
        assert body["farmers"] == ["Maria Rodriguez", "John Doe"]
        assert body["farmPerformance"] == [{"name": "2025-08-15", "score": 89.25}]
        assert [l["id"] for l in body["dryingLots"]] == ["PL001", "PL002"]
        assert len(body["dryingCurve"]) == 9

    def test_selected_farmer_and_lot(self, client, login):
        body = client.get("/insights/charts?farmer=John%20Doe&parchmentLotId=PL002",
                          headers=login("processor")).get_json()
        assert body["farmPerformance"] == []
        assert [p["moistureContent"] for p in body["dryingCurve"]] == [55.0, 48.5, 41.2, 35.8]

    def test_farmers_cannot_see_insights(self, client, login):
        assert client.get("/insights/charts", headers=login("farmer")).status_code == 403


class TestMockAnswers:

    def test_quality_insight(self, client, login):
        resp = client.post("/insights/quality", json={"sessionId": "CS001", "attribute": "Acidity"},
                           headers=login("roaster"))
        assert resp.status_code == 200
        insight = resp.get_json()["insight"]
        assert "Acidity" in insight["performanceSummary"]
        assert len(insight["roasterRecommendations"]) == 3

    def test_quality_insight_unknown_attribute(self, client, login):
        resp = client.post("/insights/quality", json={"sessionId": "CS001", "attribute": "Crunch"},
                           headers=login("roaster"))
        assert resp.status_code == 400
        assert resp.get_json()["err"] == "Unknown SCA attribute: Crunch"

    def test_quality_insight_unknown_session(self, client, login):
        resp = client.post("/insights/quality", json={"sessionId": "CS404", "attribute": "Body"},
                           headers=login("roaster"))
        assert resp.status_code == 404

    def test_report(self, client, login):
        resp = client.post("/insights/report", headers=login("admin"))
        assert resp.get_json()["report"] == MOCK_REPORT

    def test_trends(self, client, login):
        resp = client.post("/insights/trends", headers=login("processor"))
        assert resp.get_json()["trends"] == MOCK_TRENDS

    def test_report_needs_scored_lots(self, client, login, app):
        with app.app_context():
            from beantrace.store import store
            for gbl in store["greenBeanLots"]:
                gbl.cuppingScores = []
        resp = client.post("/insights/report", headers=login("admin"))
        assert resp.status_code == 400
        assert resp.get_json()["err"] == "Not enough data to generate a report."


class TestGeminiClient:

    def test_synthesis(self, client, login, gemini):
        gemini.reply = FakeResponse(200, _candidate("A harmonious cup of citrus and jasmine."))
        resp = client.post("/competition/CS001/samples/S01/synthesize", headers=login("headjudge"))
        assert resp.get_json()["summary"] == "A harmonious cup of citrus and jasmine."

        call = gemini.calls[0]
        assert call["url"].endswith(":generateContent")
        assert call["params"] == {"key": "test-key"}
        assert call["json"]["generationConfig"] == {"temperature": 0.7, "topP": 1, "topK": 32}
        assert "Bright citrus, floral notes of jasmine." in call["json"]["contents"][0]["parts"][0]["text"]

    def test_synthesis_http_error(self, client, login, gemini):
        gemini.reply = FakeResponse(500, {"error": {"message": "internal"}})
        resp = client.post("/competition/CS001/samples/S01/synthesize", headers=login("headjudge"))
        assert resp.status_code == 200
        assert resp.get_json()["summary"] == SYNTHESIS_ERROR

    def test_synthesis_network_error(self, client, login, gemini):
        gemini.reply = requests.ConnectionError("refused")
        resp = client.post("/competition/CS001/samples/S01/synthesize", headers=login("headjudge"))
        assert resp.get_json()["summary"] == SYNTHESIS_ERROR

    def test_structured_trends(self, client, login, gemini):
        answer = {
            "topPerformingVariety": {"variety": "Gesha", "avgScore": 89.25},
            "topPerformingProcess": {"process": "Honey", "avgScore": 89.25},
            "notableCorrelations": ["Honey lots score higher."],
            "overallSummary": "Gesha leads.",
        }
        gemini.reply = FakeResponse(200, _candidate(json.dumps(answer)))
        resp = client.post("/insights/trends", headers=login("processor"))
        assert resp.get_json()["trends"] == answer

        config = gemini.calls[0]["json"]["generationConfig"]
        assert config["responseMimeType"] == "application/json"

    def test_malformed_json_is_bad_gateway(self, client, login, gemini):
        gemini.reply = FakeResponse(200, _candidate("not json at all"))
        resp = client.post("/insights/report", headers=login("admin"))
        assert resp.status_code == 502
        assert resp.get_json()["err"] == "Failed to generate AI-powered comprehensive report. Please try again."

    def test_blocked_prompt(self, client, login, gemini):
        gemini.reply = FakeResponse(200, {"promptFeedback": {"blockReason": "SAFETY"}})
        resp = client.post("/insights/quality", json={"sessionId": "CS001", "attribute": "Body"},
                           headers=login("roaster"))
        assert resp.status_code == 502

    def test_non_json_body(self, app, gemini):
        gemini.reply = FakeResponse(200, None)
        with app.app_context():
            with pytest.raises(ai_client.AIServiceError, match="non-JSON"):
                ai_client.generate_content("hello")
