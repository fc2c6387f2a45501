# beantrace/app_config.py

import os
from datetime import timedelta


def _flag(name: str, default: str = "1") -> bool:
    return os.getenv(name, default).strip().lower() in ("1", "true", "yes", "on")


def load_config(app):
    """
    Load all Flask configuration in a clean centralized way.
    """
    # ------------------------------
    # Security Keys
    # ------------------------------
    app.config["SECRET_KEY"] = os.getenv("SECRET_KEY", os.urandom(24))
    app.config["JWT_SECRET_KEY"] = os.getenv("JWT_SECRET_KEY", "change-me")
    app.config["JWT_ACCESS_TOKEN_EXPIRES"] = timedelta(
        hours=int(os.getenv("JWT_ACCESS_TOKEN_EXPIRES_H", "6"))
    )
    app.config["JWT_REFRESH_TOKEN_EXPIRES"] = timedelta(
        days=int(os.getenv("JWT_REFRESH_TOKEN_EXPIRES_D", "14"))
    )
    app.config["BCRYPT_LOG_ROUNDS"] = int(os.getenv("BCRYPT_LOG_ROUNDS", "12"))

    # ------------------------------
    # Generative AI (Gemini)
    # ------------------------------
    # No key means every AI call answers with canned mock data.
    app.config["GEMINI_API_KEY"] = os.getenv("GEMINI_API_KEY") or os.getenv("API_KEY")
    app.config["GEMINI_MODEL"] = os.getenv("GEMINI_MODEL", "gemini-2.5-flash")
    app.config["GEMINI_API_BASE"] = os.getenv(
        "GEMINI_API_BASE",
        "https://generativelanguage.googleapis.com/v1beta",
    ).rstrip("/")
    app.config["GEMINI_TIMEOUT"] = float(os.getenv("GEMINI_TIMEOUT", "30"))
    app.config["AI_MOCK_DELAY"] = float(os.getenv("AI_MOCK_DELAY", "0"))

    # ------------------------------
    # Data / HTTP
    # ------------------------------
    app.config["SEED_DEMO_DATA"] = _flag("SEED_DEMO_DATA")
    app.config["CORS_ORIGINS"] = os.getenv("CORS_ORIGINS", "*")
    app.config["LOG_LEVEL"] = os.getenv("LOG_LEVEL", "INFO").upper()
