"""
Cupping hub, scoring sheet and competition lifecycle over HTTP.
"""

import pytest

from beantrace.models.cupping.score_models import SCA_SENSORY_ATTRIBUTES
from beantrace.services.cupping.competition_service import NO_FINAL_NOTES
from beantrace.services.insights.insights_service import MOCK_SYNTHESIS


def _sheet(value=8.0, notes="Clean and sweet."):
    return {"sensory": {attr: value for attr in SCA_SENSORY_ATTRIBUTES}, "notes": notes}


def _session_payload(**overrides):
    payload = {
        "name": "Spring Cup",
        "date": "2025-11-01",
        "type": "Competition",
        "judgeIds": ["user-headjudge", "user-cupper2"],
        "samples": [
            {"blindCode": "R1", "submitterName": "Maria Rodriguez", "originFarm": "Finca La Esmeralda",
             "process": "Honey", "greenBeanLotId": "GBL001"},
            {"blindCode": "R2", "submitterName": "John Doe", "originFarm": "Hacienda Elida", "process": "Washed"},
        ],
    }
    payload.update(overrides)
    return payload


# =============================================================================
# HUB
# =============================================================================


class TestHub:

    def test_sessions_newest_first(self, client, login):
        resp = client.get("/cupping/sessions", headers=login("processor"))
        ids = [s["id"] for s in resp.get_json()["sessions"]]
        assert ids == ["CS003", "CS001", "CS002", "CS004"]

    def test_create_session(self, client, login):
        resp = client.post("/cupping/sessions", json=_session_payload(), headers=login("headjudge"))
        assert resp.status_code == 201
        session = resp.get_json()["session"]
        assert session["id"] == "CS005"
        assert session["status"] == "Setup"
        assert [s["id"] for s in session["samples"]] == ["S01", "S02"]
        assert [j["name"] for j in session["judges"]] == ["Artanis", "Zeratul"]

    def test_create_requires_a_judge(self, client, login):
        resp = client.post("/cupping/sessions", json=_session_payload(judgeIds=[]), headers=login("headjudge"))
        assert resp.status_code == 400
        assert resp.get_json()["err"] == "Select at least one judge."

    def test_create_requires_a_sample(self, client, login):
        resp = client.post("/cupping/sessions", json=_session_payload(samples=[]), headers=login("headjudge"))
        assert resp.status_code == 400
        assert resp.get_json()["err"] == "Add at least one sample."

    def test_judge_must_be_cupper_or_head_judge(self, client, login):
        resp = client.post(
            "/cupping/sessions", json=_session_payload(judgeIds=["user-roaster1"]), headers=login("headjudge")
        )
        assert resp.status_code == 400
        assert resp.get_json()["err"] == "Jim Raynor is not a cupper or head judge."

    def test_edit_keeps_sample_ids(self, client, login):
        headers = login("headjudge")
        client.post("/cupping/sessions", json=_session_payload(), headers=headers)

        samples = [
            {"id": "S02", "blindCode": "R2", "submitterName": "John Doe", "originFarm": "Hacienda Elida",
             "process": "Washed"},
            {"blindCode": "R3", "submitterName": "New Farm", "originFarm": "Finca Nueva", "process": "Natural"},
        ]
        resp = client.put("/cupping/sessions/CS005", json=_session_payload(samples=samples), headers=headers)
        assert resp.status_code == 200
        assert [s["id"] for s in resp.get_json()["session"]["samples"]] == ["S02", "S03"]

    def test_edit_only_in_setup(self, client, login):
        resp = client.put("/cupping/sessions/CS001", json=_session_payload(), headers=login("headjudge"))
        assert resp.status_code == 409
        assert resp.get_json()["err"] == "Sessions can only be edited while in Setup."

    def test_detail_marks_own_scores(self, client, login):
        resp = client.get("/cupping/sessions/CS001", headers=login("headjudge"))
        samples = {s["id"]: s for s in resp.get_json()["session"]["samples"]}
        assert samples["S01"]["hasScored"] is True
        assert samples["S02"]["hasScored"] is False


# =============================================================================
# SCORING SHEET
# =============================================================================


class TestScoringSheet:

    def test_open_sessions_exclude_finalized(self, client, login):
        resp = client.get("/scoring/sessions", headers=login("cupper"))
        ids = {s["id"] for s in resp.get_json()["sessions"]}
        assert "CS004" not in ids
        assert {"CS001", "CS002", "CS003"} <= ids

    def test_submit_score(self, client, login):
        resp = client.post("/scoring/sessions/CS002/samples/S01", json=_sheet(8.0), headers=login("admin"))
        assert resp.status_code == 201
        score = resp.get_json()["score"]
        assert score["totalScore"] == 86
        assert score["judgeName"] == "Admin User"

    def test_second_submission_conflicts(self, client, login):
        resp = client.post("/scoring/sessions/CS002/samples/S01", json=_sheet(), headers=login("cupper"))
        assert resp.status_code == 409
        assert resp.get_json()["err"] == "You have already submitted a score for this sample."

    @pytest.mark.parametrize("session_id", ["CS001", "CS003"])
    def test_competition_only_scores_in_scoring(self, client, login, session_id):
        resp = client.post(f"/scoring/sessions/{session_id}/samples/S01", json=_sheet(), headers=login("admin"))
        assert resp.status_code == 409

    def test_finalized_rejects_scores(self, client, login):
        resp = client.post("/scoring/sessions/CS004/samples/S01", json=_sheet(), headers=login("admin"))
        assert resp.status_code == 409
        assert resp.get_json()["err"] == "This session has been finalized."

    def test_non_judge_forbidden(self, client, login):
        hj = login("headjudge")
        client.post("/cupping/sessions", json=_session_payload(judgeIds=["user-headjudge"]), headers=hj)
        client.post("/competition/CS005/advance", json={"status": "Scoring"}, headers=hj)

        resp = client.post("/scoring/sessions/CS005/samples/S01", json=_sheet(), headers=login("cupper"))
        assert resp.status_code == 403
        assert resp.get_json()["err"] == "You are not a judge in this session."

    def test_out_of_range_attribute(self, client, login):
        resp = client.post("/scoring/sessions/CS002/samples/S01", json=_sheet(5.5), headers=login("admin"))
        assert resp.status_code == 400
        assert resp.get_json()["err"] == "Fragrance/Aroma: Must be 6-10."

    def test_nan_attribute_rejected(self, client, login):
        sheet = _sheet()
        sheet["sensory"]["Flavor"] = "nan"
        resp = client.post("/scoring/sessions/CS002/samples/S01", json=sheet, headers=login("admin"))
        assert resp.status_code == 400
        assert resp.get_json()["err"] == "Flavor: Invalid number."


# =============================================================================
# COMPETITION DASHBOARD
# =============================================================================


class TestCompetitionViews:

    def test_adjudication_view(self, client, login):
        resp = client.get("/competition/CS001", headers=login("headjudge"))
        body = resp.get_json()
        assert body["readOnly"] is False
        comp = body["competition"]
        assert comp["status"] == "Adjudication"
        rows = {r["sampleId"]: r for r in comp["samples"]}
        assert rows["S01"]["totalScore"] == pytest.approx(89.25)
        assert rows["S02"]["totalScore"] == pytest.approx(86.625)
        assert rows["S01"]["finalNotes"].startswith("A consensus of bright citrus")
        assert rows["S02"]["finalNotes"] is None
        assert len(rows["S01"]["judgeNotes"]) == 3

    def test_scoring_progress(self, client, login):
        comp = client.get("/competition/CS002", headers=login("headjudge")).get_json()["competition"]
        progress = {p["sampleId"]: p["scoredBy"] for p in comp["progress"]}
        assert progress["S01"] == {"user-headjudge": False, "user-cupper1": True, "user-cupper3": False}
        assert progress["S02"]["user-cupper3"] is True

    def test_finalized_results_by_rank(self, client, login):
        comp = client.get("/competition/CS004", headers=login("headjudge")).get_json()["competition"]
        assert [(r["sampleId"], r["rank"]) for r in comp["results"]] == [("S01", 1), ("S02", 2)]

    def test_admin_view_is_read_only(self, client, login):
        body = client.get("/competition/CS001", headers=login("admin")).get_json()
        assert body["readOnly"] is True
        assert "samples" in body["competition"]

    def test_cupper_sees_phase_only(self, client, login):
        body = client.get("/competition/CS001", headers=login("cupper")).get_json()
        assert body["competition"] == {
            "id": "CS001", "name": "National Coffee Championship 2025", "status": "Adjudication",
        }

    def test_mutations_are_head_judge_only(self, client, login):
        resp = client.post("/competition/CS003/advance", json={"status": "Scoring"}, headers=login("admin"))
        assert resp.status_code == 403


class TestCompetitionLifecycle:

    def test_advance_one_step(self, client, login):
        hj = login("headjudge")
        resp = client.post("/competition/CS003/advance", json={"status": "Scoring"}, headers=hj)
        assert resp.status_code == 200
        assert resp.get_json()["status"] == "Scoring"

    def test_cannot_skip_a_step(self, client, login):
        resp = client.post("/competition/CS003/advance", json={"status": "Adjudication"}, headers=login("headjudge"))
        assert resp.status_code == 409

    def test_cannot_advance_into_finalized(self, client, login):
        resp = client.post("/competition/CS001/advance", json={"status": "Finalized"}, headers=login("headjudge"))
        assert resp.status_code == 400

    def test_unknown_status(self, client, login):
        resp = client.post("/competition/CS003/advance", json={"status": "Done"}, headers=login("headjudge"))
        assert resp.status_code == 400

    def test_save_notes_creates_provisional_result(self, client, login):
        resp = client.put(
            "/competition/CS001/samples/S02/notes", json={"finalNotes": "Jammy and winey."}, headers=login("headjudge")
        )
        assert resp.status_code == 200
        result = resp.get_json()["result"]
        assert result["finalNotes"] == "Jammy and winey."
        assert result["totalScore"] == pytest.approx(86.625)
        assert result["rank"] is None

    def test_notes_only_in_adjudication(self, client, login):
        resp = client.put("/competition/CS002/samples/S01/notes", json={"finalNotes": "x"}, headers=login("headjudge"))
        assert resp.status_code == 409

    def test_finalize(self, client, login):
        hj = login("headjudge")
        resp = client.post("/competition/CS001/finalize", json={"finalNotes": {}}, headers=hj)
        assert resp.status_code == 200
        comp = resp.get_json()["competition"]
        assert comp["status"] == "Finalized"
        results = comp["results"]
        assert [(r["sampleId"], r["rank"]) for r in results] == [("S01", 1), ("S02", 2)]
        assert results[0]["finalNotes"].startswith("A consensus of bright citrus")
        assert results[1]["finalNotes"] == NO_FINAL_NOTES
        assert results[1]["totalScore"] == pytest.approx(86.625)

    def test_finalize_uses_draft_notes(self, client, login):
        resp = client.post(
            "/competition/CS001/finalize", json={"finalNotes": {"S02": "Berry jam."}}, headers=login("headjudge")
        )
        results = {r["sampleId"]: r for r in resp.get_json()["competition"]["results"]}
        assert results["S02"]["finalNotes"] == "Berry jam."

    def test_finalize_is_one_way(self, client, login):
        hj = login("headjudge")
        client.post("/competition/CS001/finalize", json={}, headers=hj)
        again = client.post("/competition/CS001/finalize", json={}, headers=hj)
        assert again.status_code == 409

        score = client.post("/scoring/sessions/CS001/samples/S02", json=_sheet(), headers=login("admin"))
        assert score.status_code == 409

    def test_finalize_requires_adjudication(self, client, login):
        resp = client.post("/competition/CS002/finalize", json={}, headers=login("headjudge"))
        assert resp.status_code == 409

    def test_tied_totals_share_rank(self, client, login):
        hj = login("headjudge")
        payload = _session_payload(judgeIds=["user-headjudge"])
        payload["samples"].append(
            {"blindCode": "R3", "submitterName": "X", "originFarm": "Y", "process": "Natural"}
        )
        client.post("/cupping/sessions", json=payload, headers=hj)
        client.post("/competition/CS005/advance", json={"status": "Scoring"}, headers=hj)

        admin = login("admin")
        client.post("/scoring/sessions/CS005/samples/S01", json=_sheet(8.0), headers=admin)
        client.post("/scoring/sessions/CS005/samples/S02", json=_sheet(8.0), headers=admin)
        client.post("/scoring/sessions/CS005/samples/S03", json=_sheet(7.0), headers=admin)

        client.post("/competition/CS005/advance", json={"status": "Adjudication"}, headers=hj)
        comp = client.post("/competition/CS005/finalize", json={}, headers=hj).get_json()["competition"]
        ranks = {r["sampleId"]: r["rank"] for r in comp["results"]}
        assert ranks == {"S01": 1, "S02": 1, "S03": 3}

    def test_synthesize_notes_mock(self, client, login):
        resp = client.post("/competition/CS001/samples/S01/synthesize", headers=login("headjudge"))
        assert resp.status_code == 200
        assert resp.get_json()["summary"] == MOCK_SYNTHESIS
