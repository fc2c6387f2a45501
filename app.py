# app.py (gunicorn app:app, or python app.py locally)

import logging
from datetime import timedelta

from flask import Flask
from flask_cors import CORS

from beantrace.app_config import load_config
from beantrace.errors import register_error_handlers
from beantrace.register_blueprints import register_all_blueprints
from beantrace.security import init_security
from beantrace.store import init_store


def create_app(test_config=None):
    app = Flask(__name__, template_folder="beantrace/templates")

    # -------------------------
    # Config & security
    # -------------------------
    load_config(app)
    if test_config:
        app.config.update(test_config)
    app.permanent_session_lifetime = timedelta(days=7)
    app.logger.setLevel(getattr(logging, app.config.get("LOG_LEVEL", "INFO"), logging.INFO))

    CORS(app, resources={r"/*": {"origins": app.config["CORS_ORIGINS"]}})

    # -------------------------
    # JWT / bcrypt
    # -------------------------
    app.config["JWT_TOKEN_LOCATION"] = ["headers"]
    app.config["JWT_HEADER_TYPE"] = "Bearer"
    init_security(app)

    # -------------------------
    # Data store
    # -------------------------
    init_store(app)

    # -------------------------
    # Errors & blueprints
    # -------------------------
    register_error_handlers(app)
    register_all_blueprints(app)

    return app


# THIS is what gunicorn needs:
app = create_app()


# Local run only
if __name__ == "__main__":
    app.run(host="0.0.0.0", port=5000, debug=True)
