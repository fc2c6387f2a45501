"""
Authentication and role gate tests.
"""

import pytest


class TestLogin:

    def test_login_returns_tokens_and_user(self, client):
        resp = client.post("/auth/login", json={"email": "Farmer@Coffee.com ", "password": "farmer123"})
        assert resp.status_code == 200
        body = resp.get_json()
        assert body["ok"] is True
        assert body["user"] == {
            "userId": "user-farmer1",
            "name": "Maria Rodriguez",
            "email": "farmer@coffee.com",
            "role": "Farmer",
        }
        assert body["access_token"] and body["refresh_token"]

    def test_wrong_password(self, client):
        resp = client.post("/auth/login", json={"email": "farmer@coffee.com", "password": "nope"})
        assert resp.status_code == 400
        assert resp.get_json() == {"ok": False, "err": "Invalid email or password"}

    def test_unknown_email(self, client):
        resp = client.post("/auth/login", json={"email": "ghost@coffee.com", "password": "farmer123"})
        assert resp.status_code == 400
        assert resp.get_json()["err"] == "Invalid email or password"

    def test_missing_fields(self, client):
        resp = client.post("/auth/login", json={"email": "", "password": "x"})
        assert resp.status_code == 400
        assert resp.get_json()["err"] == "Email is required."

    def test_session_login_then_logout(self, client):
        client.post("/auth/login", json={"email": "admin@coffee.com", "password": "admin123"})
        me = client.get("/auth/me")
        assert me.status_code == 200
        assert me.get_json()["user"]["role"] == "Admin"

        client.post("/auth/logout")
        assert client.get("/auth/me").status_code == 401


class TestTokens:

    def test_me_with_bearer(self, client, login):
        resp = client.get("/auth/me", headers=login("cupper"))
        assert resp.status_code == 200
        assert resp.get_json()["user"]["userId"] == "user-cupper1"

    def test_garbage_token_is_unauthorized(self, client):
        resp = client.get("/auth/me", headers={"Authorization": "Bearer not-a-token"})
        assert resp.status_code == 401

    def test_refresh(self, client):
        tokens = client.post(
            "/auth/login", json={"email": "roaster@coffee.com", "password": "roaster123"}
        ).get_json()
        client.post("/auth/logout")

        resp = client.post("/auth/refresh", headers={"Authorization": f"Bearer {tokens['refresh_token']}"})
        assert resp.status_code == 200
        access = resp.get_json()["access_token"]

        me = client.get("/auth/me", headers={"Authorization": f"Bearer {access}"})
        assert me.get_json()["user"]["role"] == "Roaster"

    def test_refresh_after_account_deleted(self, client, login):
        tokens = client.post(
            "/auth/login", json={"email": "roaster@coffee.com", "password": "roaster123"}
        ).get_json()
        client.post("/auth/logout")
        client.delete("/admin/users/user-roaster1", headers=login("admin"))

        resp = client.post("/auth/refresh", headers={"Authorization": f"Bearer {tokens['refresh_token']}"})
        assert resp.status_code == 403
        assert resp.get_json()["err"] == "Account no longer exists."


class TestRoleGates:

    @pytest.mark.parametrize(
        "method,path",
        [
            ("GET", "/dashboard"),
            ("GET", "/farmer/farms"),
            ("GET", "/processor/kanban"),
            ("GET", "/cupping/sessions"),
            ("GET", "/scoring/sessions"),
            ("GET", "/competition/CS001"),
            ("GET", "/roaster/workbench"),
            ("GET", "/traceability/hub"),
            ("GET", "/insights/charts"),
            ("GET", "/admin/users"),
        ],
    )
    def test_requires_auth(self, client, method, path):
        resp = getattr(client, method.lower())(path)
        assert resp.status_code == 401
        assert resp.get_json() == {"ok": False, "err": "unauthorized"}

    @pytest.mark.parametrize(
        "who,path",
        [
            ("farmer", "/processor/kanban"),
            ("processor", "/farmer/farms"),
            ("cupper", "/cupping/sessions"),
            ("roaster", "/scoring/sessions"),
            ("processor", "/competition/CS001"),
            ("farmer", "/roaster/workbench"),
            ("roaster", "/traceability/hub"),
            ("farmer", "/insights/charts"),
            ("headjudge", "/admin/users"),
        ],
    )
    def test_wrong_role_forbidden(self, client, login, who, path):
        resp = client.get(path, headers=login(who))
        assert resp.status_code == 403

    def test_public_traceability_needs_no_login(self, client):
        assert client.get("/traceability/api/GBL001").status_code == 200
