# beantrace/errors.py
from __future__ import annotations

from flask import jsonify
from pydantic import ValidationError


class TraceError(Exception):
    """Base class for user-facing business errors."""

    status_code = 400

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message


class ValidationFailed(TraceError):
    status_code = 400


class NotFound(TraceError):
    status_code = 404


class Conflict(TraceError):
    status_code = 409


class Forbidden(TraceError):
    status_code = 403


def _pydantic_message(err: ValidationError) -> str:
    first = err.errors(include_url=False)[0]
    msg = first.get("msg", "Invalid input")
    # "Value error, Must be 6-10." -> "Must be 6-10."
    if msg.startswith("Value error, "):
        msg = msg[len("Value error, "):]
    loc = ".".join(str(p) for p in first.get("loc", ()) if p != "__root__")
    if loc and first.get("type") != "value_error":
        return f"{loc}: {msg}"
    return msg


def register_error_handlers(app):
    @app.errorhandler(TraceError)
    def _trace_error(e: TraceError):
        return jsonify({"ok": False, "err": e.message}), e.status_code

    @app.errorhandler(ValidationError)
    def _pydantic_error(e: ValidationError):
        return jsonify({
            "ok": False,
            "err": _pydantic_message(e),
            "details": e.errors(include_url=False, include_context=False, include_input=False),
        }), 400

    # imported late so the AI client can be used without the app
    from beantrace.services.insights.ai_client import AIServiceError

    @app.errorhandler(AIServiceError)
    def _ai_error(e: AIServiceError):
        app.logger.error("AI service error: %s", e)
        return jsonify({"ok": False, "err": str(e)}), 502
