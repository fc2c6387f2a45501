"""
Pytest fixtures for beantrace tests.

Every test gets a freshly seeded store, a test client and a `login`
helper that returns Bearer headers for one of the demo accounts.
"""

import pytest

from app import create_app

ACCOUNTS = {
    "farmer": ("farmer@coffee.com", "farmer123"),
    "processor": ("processor@coffee.com", "processor123"),
    "roaster": ("roaster@coffee.com", "roaster123"),
    "headjudge": ("headjudge@coffee.com", "headjudge123"),
    "cupper": ("cupper@coffee.com", "cupper123"),
    "admin": ("admin@coffee.com", "admin123"),
}


@pytest.fixture(scope="function")
def app():
    """Application with the demo data set and cheap bcrypt rounds."""
    app = create_app({
        "TESTING": True,
        "SECRET_KEY": "test-secret-key",
        "JWT_SECRET_KEY": "test-jwt-secret-key-that-is-long-enough-for-hs256",
        "BCRYPT_LOG_ROUNDS": 4,
        "GEMINI_API_KEY": None,
        "AI_MOCK_DELAY": 0,
        "SEED_DEMO_DATA": True,
    })
    yield app


@pytest.fixture(scope="function")
def client(app):
    return app.test_client()


@pytest.fixture(scope="function")
def login(app):
    """
    login("processor") -> {"Authorization": "Bearer ..."}

    Logs in on a throwaway client so the session cookie does not leak
    into `client`; requests made with the headers are identified by JWT.
    """
    def _login(who):
        email, password = ACCOUNTS[who]
        resp = app.test_client().post("/auth/login", json={"email": email, "password": password})
        assert resp.status_code == 200, resp.get_json()
        return {"Authorization": f"Bearer {resp.get_json()['access_token']}"}
    return _login


@pytest.fixture(scope="function")
def ctx(app):
    """App context for calling services directly."""
    with app.app_context():
        yield
