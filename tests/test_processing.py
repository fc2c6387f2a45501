"""
Processor workbench: wet mill kanban, dry mill, green-bean stock and internal QC.
"""

import pytest

from beantrace.models.cupping.score_models import SCA_SENSORY_ATTRIBUTES


def _complete_payload(**overrides):
    payload = {
        "parchmentWeightKg": 40,
        "moistureContent": 11.0,
        "dryingStartDate": "2025-08-16",
        "dryingEndDate": "2025-08-28",
    }
    payload.update(overrides)
    return payload


# =============================================================================
# WET MILL
# =============================================================================


class TestKanban:

    def test_columns(self, client, login):
        body = client.get("/processor/kanban", headers=login("processor")).get_json()
        columns = body["columns"]
        assert [b["id"] for b in columns["To Process"]] == ["PB002"]
        assert [b["id"] for b in columns["Drying"]] == ["PB001"]
        assert [b["id"] for b in columns["Completed"]] == ["PB003"]
        assert columns["Drying"][0]["cherryVariety"] == "Gesha"
        assert [l["id"] for l in body["readyLots"]] == ["HL002"]

    def test_start_processing(self, client, login):
        headers = login("processor")
        resp = client.post("/processor/batches", json={"harvestLotId": "HL002", "processType": "Anaerobic"},
                           headers=headers)
        assert resp.status_code == 201
        batch = resp.get_json()["batch"]
        assert batch["id"] == "PB004"
        assert batch["status"] == "To Process"

        ready = client.get("/processor/kanban", headers=headers).get_json()["readyLots"]
        assert ready == []

    def test_start_twice_conflicts(self, client, login):
        headers = login("processor")
        client.post("/processor/batches", json={"harvestLotId": "HL002", "processType": "Washed"}, headers=headers)
        again = client.post("/processor/batches", json={"harvestLotId": "HL002", "processType": "Washed"},
                            headers=headers)
        assert again.status_code == 409

    def test_unknown_harvest_lot(self, client, login):
        resp = client.post("/processor/batches", json={"harvestLotId": "HL999", "processType": "Washed"},
                           headers=login("processor"))
        assert resp.status_code == 404

    def test_move_to_drying(self, client, login):
        resp = client.post("/processor/batches/PB002/move", json={"status": "Drying"}, headers=login("processor"))
        assert resp.status_code == 200
        assert resp.get_json()["batch"]["status"] == "Drying"

    def test_move_cannot_complete(self, client, login):
        resp = client.post("/processor/batches/PB001/move", json={"status": "Completed"}, headers=login("processor"))
        assert resp.status_code == 400

    def test_completed_batch_does_not_move(self, client, login):
        resp = client.post("/processor/batches/PB003/move", json={"status": "Drying"}, headers=login("processor"))
        assert resp.status_code == 409


class TestDrying:

    def test_add_reading_keeps_log_in_date_order(self, client, login):
        reading = {"date": "2025-08-15", "moistureContent": 60, "ambientTemp": 27, "relativeHumidity": 80}
        resp = client.post("/processor/batches/PB001/drying-log", json=reading, headers=login("processor"))
        assert resp.status_code == 201
        batch = resp.get_json()["batch"]
        assert len(batch["dryingLog"]) == 5
        assert batch["dryingLog"][0]["date"] == "2025-08-15"

    def test_first_reading_sets_start_date(self, client, login):
        reading = {"date": "2025-08-20", "moistureContent": 55, "ambientTemp": 28, "relativeHumidity": 70}
        batch = client.post("/processor/batches/PB002/drying-log", json=reading,
                            headers=login("processor")).get_json()["batch"]
        assert batch["dryingStartDate"] == "2025-08-20"

    def test_humidity_out_of_range(self, client, login):
        reading = {"moistureContent": 40, "ambientTemp": 28, "relativeHumidity": 120}
        resp = client.post("/processor/batches/PB001/drying-log", json=reading, headers=login("processor"))
        assert resp.status_code == 400
        assert resp.get_json()["err"] == "Moisture and humidity must be between 0 and 100."


class TestCompleteBatch:

    def test_complete_creates_parchment_lot(self, client, login):
        resp = client.post("/processor/batches/PB001/complete", json=_complete_payload(), headers=login("processor"))
        assert resp.status_code == 201
        lot = resp.get_json()["parchmentLot"]
        assert lot["id"] == "PL003"
        assert lot["status"] == "Awaiting Hulling"
        assert lot["processType"] == "Washed"
        assert lot["harvestLotId"] == "HL001"
        assert lot["currentWeightKg"] == 40

    def test_end_before_start(self, client, login):
        payload = _complete_payload(dryingEndDate="2025-08-01")
        resp = client.post("/processor/batches/PB001/complete", json=payload, headers=login("processor"))
        assert resp.status_code == 400
        assert resp.get_json()["err"] == "Drying End Date cannot be before Drying Start Date."

    def test_missing_fields(self, client, login):
        resp = client.post("/processor/batches/PB001/complete", json={"parchmentWeightKg": 40},
                           headers=login("processor"))
        assert resp.status_code == 400
        assert resp.get_json()["err"] == "Please fill in all fields to complete the batch."

    def test_already_completed(self, client, login):
        resp = client.post("/processor/batches/PB003/complete", json=_complete_payload(), headers=login("processor"))
        assert resp.status_code == 409


# =============================================================================
# DRY MILL
# =============================================================================


class TestParchment:

    def test_table(self, client, login):
        body = client.get("/processor/parchment-lots", headers=login("processor")).get_json()
        rows = {r["id"]: r for r in body["items"]}
        assert body["total"] == 2
        assert rows["PL002"]["canHull"] is True
        assert rows["PL002"]["canTest"] is False
        assert rows["PL001"]["canHull"] is False

    def test_physical_test_deducts_sample(self, client, login):
        headers = login("processor")
        client.post("/processor/batches/PB001/complete", json=_complete_payload(), headers=headers)
        test = {"sampleWeightGrams": 300, "greenBeanWeightGrams": 250, "greenBeanMoisture": 10.5,
                "waterActivity": 0.55, "density": 0.7, "defectCount": 1}
        resp = client.post("/processor/parchment-lots/PL003/physical-test", json=test, headers=headers)
        assert resp.status_code == 200
        lot = resp.get_json()["parchmentLot"]
        assert lot["currentWeightKg"] == pytest.approx(39.7)
        assert lot["physicalTestResults"]["defectCount"] == 1

    @pytest.mark.parametrize("lot_id", ["PL001", "PL002"])
    def test_physical_test_only_once(self, client, login, lot_id):
        test = {"sampleWeightGrams": 300, "greenBeanWeightGrams": 250, "greenBeanMoisture": 10.5,
                "waterActivity": 0.55, "density": 0.7, "defectCount": 1}
        resp = client.post(f"/processor/parchment-lots/{lot_id}/physical-test", json=test, headers=login("processor"))
        assert resp.status_code == 409

    def test_hull_sum_mismatch(self, client, login):
        payload = {"totalGreenWeightKg": 48, "grades": [{"grade": "AA", "weightKg": 30}, {"grade": "AB", "weightKg": 15}]}
        resp = client.post("/processor/parchment-lots/PL002/hull", json=payload, headers=login("processor"))
        assert resp.status_code == 400
        assert resp.get_json()["err"] == (
            "The sum of the weights for the graded lots must exactly match the total green bean weight."
        )

    def test_hull_and_grade(self, client, login):
        headers = login("processor")
        payload = {"totalGreenWeightKg": 48, "grades": [{"grade": "AA", "weightKg": 30}, {"grade": "AB", "weightKg": 18}]}
        resp = client.post("/processor/parchment-lots/PL002/hull", json=payload, headers=headers)
        assert resp.status_code == 201
        lots = resp.get_json()["greenBeanLots"]
        assert [(l["id"], l["grade"], l["currentWeightKg"]) for l in lots] == [("GBL003", "AA", 30), ("GBL004", "AB", 18)]
        assert all(l["parchmentLotId"] == "PL002" for l in lots)

        parchment = client.get("/processor/parchment-lots?search=PL002", headers=headers).get_json()["items"][0]
        assert parchment["status"] == "Hulled"
        assert parchment["currentWeightKg"] == 0

        again = client.post("/processor/parchment-lots/PL002/hull", json=payload, headers=headers)
        assert again.status_code == 409

    def test_hull_rejects_infinite_weights(self, client, login):
        payload = {"totalGreenWeightKg": "inf", "grades": [{"grade": "AA", "weightKg": "inf"}]}
        resp = client.post("/processor/parchment-lots/PL002/hull", json=payload, headers=login("processor"))
        assert resp.status_code == 400
        assert resp.get_json()["err"] == "totalGreenWeightKg: Input should be a finite number"


# =============================================================================
# GREEN BEANS
# =============================================================================


class TestGreenBeans:

    def test_withdraw(self, client, login):
        resp = client.post("/processor/green-bean-lots/GBL002/withdraw", json={"amountKg": 5, "purpose": "Export sample"},
                           headers=login("processor"))
        assert resp.status_code == 200
        lot = resp.get_json()["lot"]
        assert lot["currentWeightKg"] == 45
        assert lot["withdrawalHistory"][-1]["purpose"] == "Export sample"

    def test_withdraw_more_than_stock(self, client, login):
        resp = client.post("/processor/green-bean-lots/GBL001/withdraw", json={"amountKg": 40, "purpose": "x"},
                           headers=login("processor"))
        assert resp.status_code == 400
        assert resp.get_json()["err"] == "Invalid withdrawal amount."

    def test_withdraw_requires_positive_amount(self, client, login):
        resp = client.post("/processor/green-bean-lots/GBL001/withdraw", json={"amountKg": 0, "purpose": "x"},
                           headers=login("processor"))
        assert resp.status_code == 400

    def test_withdraw_rejects_nan(self, client, login):
        headers = login("processor")
        resp = client.post("/processor/green-bean-lots/GBL002/withdraw", json={"amountKg": "nan", "purpose": "x"},
                           headers=headers)
        assert resp.status_code == 400
        assert resp.get_json()["err"] == "amountKg: Input should be a finite number"

        table = client.get("/processor/green-bean-lots?search=GBL002", headers=headers).get_json()["items"]
        assert table[0]["currentWeightKg"] == 50

    def test_toggle_availability(self, client, login):
        headers = login("processor")
        first = client.post("/processor/green-bean-lots/GBL001/availability", headers=headers).get_json()["lot"]
        assert first["availabilityStatus"] == "Withdrawn"
        second = client.post("/processor/green-bean-lots/GBL001/availability", headers=headers).get_json()["lot"]
        assert second["availabilityStatus"] == "Available"

    def test_table_sort_and_paging(self, client, login):
        headers = login("processor")
        payload = {
            "totalGreenWeightKg": 40,
            "grades": [{"grade": g, "weightKg": 10} for g in ("AA", "AB", "C", "PB")],
        }
        client.post("/processor/parchment-lots/PL002/hull", json=payload, headers=headers)

        first = client.get("/processor/green-bean-lots?sort=currentWeightKg&direction=desc", headers=headers).get_json()
        assert first["total"] == 6
        assert first["pageCount"] == 2
        assert [r["id"] for r in first["items"]][:2] == ["GBL002", "GBL001"]

        second = client.get("/processor/green-bean-lots?page=2", headers=headers).get_json()
        assert len(second["items"]) == 1

    @pytest.mark.parametrize("path, column", [
        ("/processor/green-bean-lots", "cuppingScores"),
        ("/processor/green-bean-lots", "withdrawalHistory"),
        ("/processor/parchment-lots", "physicalTestResults"),
    ])
    def test_table_rejects_unsortable_column(self, client, login, path, column):
        resp = client.get(f"{path}?sort={column}", headers=login("processor"))
        assert resp.status_code == 400
        assert resp.get_json()["err"] == f"Cannot sort by {column}"


# =============================================================================
# INTERNAL QC
# =============================================================================


class TestQC:

    def test_no_saved_score(self, client, login):
        resp = client.get("/processor/green-bean-lots/GBL002/qc", headers=login("processor"))
        assert resp.get_json()["score"] is None

    def test_simple_score(self, client, login):
        headers = login("processor")
        resp = client.post("/processor/green-bean-lots/GBL002/qc", json={"mode": "simple", "score": 87.5, "notes": "Juicy"},
                           headers=headers)
        assert resp.status_code == 200
        assert resp.get_json()["score"]["totalScore"] == 87.5

        saved = client.get("/processor/green-bean-lots/GBL002/qc", headers=headers).get_json()["score"]
        assert saved == {"mode": "simple", "notes": "Juicy", "score": 87.5, "totalScore": 87.5}

        table = client.get("/processor/green-bean-lots", headers=headers).get_json()["items"]
        qc = {r["id"]: r["qcScore"] for r in table}
        assert qc == {"GBL001": None, "GBL002": 87.5}

    def test_rescoring_replaces(self, client, login):
        headers = login("processor")
        client.post("/processor/green-bean-lots/GBL002/qc", json={"score": 80}, headers=headers)
        client.post("/processor/green-bean-lots/GBL002/qc", json={"score": 84}, headers=headers)
        table = client.get("/processor/green-bean-lots?search=GBL002", headers=headers).get_json()["items"]
        assert table[0]["qcScore"] == 84
        assert len([s for s in table[0]["cuppingScores"] if s["sessionId"].startswith("CS-QC-")]) == 1

    def test_detailed_score(self, client, login):
        headers = login("processor")
        sheet = {"sensory": {a: 8.0 for a in SCA_SENSORY_ATTRIBUTES}, "cups": {"Uniformity": 4}}
        resp = client.post("/processor/green-bean-lots/GBL001/qc", json={"mode": "detailed", "sheet": sheet},
                           headers=headers)
        assert resp.get_json()["score"]["totalScore"] == 84

        saved = client.get("/processor/green-bean-lots/GBL001/qc", headers=headers).get_json()["score"]
        assert saved["mode"] == "detailed"
        assert saved["cups"] == {"Uniformity": 4, "Clean Cup": 5, "Sweetness": 5}
        assert saved["sensory"]["Flavor"] == 8.0

    def test_simple_score_range(self, client, login):
        resp = client.post("/processor/green-bean-lots/GBL001/qc", json={"score": 101}, headers=login("processor"))
        assert resp.status_code == 400
        assert resp.get_json()["err"] == "Please enter a valid score between 0 and 100."

    def test_qc_sample_ids_are_two_digit(self, client, login, app):
        headers = login("processor")
        client.post("/processor/green-bean-lots/GBL001/qc", json={"score": 82}, headers=headers)
        client.post("/processor/green-bean-lots/GBL002/qc", json={"score": 85}, headers=headers)
        with app.app_context():
            from beantrace.store import store
            session = store.require("cuppingSessions", "CS-QC-user-processor1")
            assert [s.id for s in session.samples] == ["S01", "S02"]
