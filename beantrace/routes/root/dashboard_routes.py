# beantrace/routes/root/dashboard_routes.py

from flask import Blueprint, jsonify

from beantrace.auth_guard import identity, roles_required
from beantrace.services.dashboard_service import DashboardService

dashboard_bp = Blueprint("dashboard", __name__)


@dashboard_bp.get("/dashboard")
@roles_required()
def dashboard():
    return jsonify(ok=True, stats=DashboardService.stats()), 200


@dashboard_bp.get("/nav")
@roles_required()
def navigation():
    ident = identity()
    return jsonify(ok=True, items=DashboardService.nav_items(ident["role"], ident["userId"])), 200
