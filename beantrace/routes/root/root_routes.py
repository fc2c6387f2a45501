# beantrace/routes/root/root_routes.py

from flask import Blueprint, jsonify

from beantrace.auth_guard import current_identity

root_bp = Blueprint("root", __name__)


@root_bp.get("/health")
def health():
    return jsonify(ok=True), 200


@root_bp.get("/")
def index():
    """Service banner plus who is signed in, if anyone."""
    return jsonify(ok=True, service="beantrace", user=current_identity()), 200
