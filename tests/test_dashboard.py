"""
Landing dashboard and role-based navigation.
"""


def _nav(client, headers):
    return {i["name"]: i["href"] for i in client.get("/nav", headers=headers).get_json()["items"]}


def test_health(client):
    assert client.get("/health").get_json() == {"ok": True}


def test_index_anonymous(client):
    assert client.get("/").get_json()["user"] is None


def test_stats(client, login):
    stats = client.get("/dashboard", headers=login("farmer")).get_json()["stats"]
    assert stats == {"activeHarvestLots": 2, "batchesInProcessing": 2, "cuppingSessions": 4}


def test_stats_follow_the_board(client, login):
    headers = login("processor")
    client.post("/processor/batches/PB001/complete", headers=headers, json={
        "parchmentWeightKg": 40, "moistureContent": 11, "dryingStartDate": "2025-08-16", "dryingEndDate": "2025-08-28",
    })
    stats = client.get("/dashboard", headers=headers).get_json()["stats"]
    assert stats["batchesInProcessing"] == 1


def test_farmer_nav(client, login):
    assert _nav(client, login("farmer")) == {
        "Dashboard": "/dashboard",
        "Farmer Dashboard": "/farmer-dashboard",
        "Data Hub": "/farmer-data-hub",
        "GAP Helper": "/gap-compliance",
    }


def test_cupper_nav(client, login):
    nav = _nav(client, login("cupper"))
    assert list(nav) == ["Scoring Sheet", "Competition Admin"]
    assert nav["Competition Admin"] == "/competition/CS001"


def test_head_judge_goes_to_active_competition(client, login):
    nav = _nav(client, login("headjudge"))
    assert nav["Competition Admin"] == "/competition/CS001"
    assert "Cupping Lab" in nav
    assert "User Management" not in nav


def test_judge_without_active_competition(client, login):
    headers = login("headjudge")
    client.post("/competition/CS001/finalize", json={}, headers=headers)
    client.post("/competition/CS002/advance", json={"status": "Adjudication"}, headers=headers)
    client.post("/competition/CS002/finalize", json={}, headers=headers)
    nav = _nav(client, headers)
    # latest competition by date
    assert nav["Competition Admin"] == "/competition/CS003"


def test_admin_sees_everything(client, login):
    nav = _nav(client, login("admin"))
    assert len(nav) == 12
    assert nav["Competition Admin"] == "/cupping"


def test_nav_requires_login(client):
    assert client.get("/nav").status_code == 401
