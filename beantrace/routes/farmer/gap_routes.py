# beantrace/routes/farmer/gap_routes.py

from flask import Blueprint, jsonify, render_template, request

from beantrace.auth_guard import roles_required
from beantrace.models.auth.user_models import UserRole
from beantrace.models.farmer.gap_models import GAPActivityType, GAPLogCreateModel
from beantrace.services.farmer.farm_service import FarmService
from beantrace.services.farmer.gap_service import GAPService

gap_bp = Blueprint("farmer_gap", __name__, url_prefix="/farmer/gap")


@gap_bp.get("/logs")
@roles_required(UserRole.FARMER, UserRole.ADMIN)
def list_logs():
    plot = request.args.get("plot", "All")
    activity = request.args.get("activity", "All")
    logs = GAPService.list_logs(plot=plot, activity=activity)
    return jsonify(
        ok=True,
        plots=FarmService.plot_locations(),
        activityTypes=[a.value for a in GAPActivityType],
        logs=[e.model_dump(mode="json") for e in logs],
    ), 200


@gap_bp.post("/logs")
@roles_required(UserRole.FARMER, UserRole.ADMIN)
def log_activity():
    payload = GAPLogCreateModel.model_validate(request.get_json(silent=True) or {})
    entry = GAPService.log_activity(payload)
    return jsonify(ok=True, entry=entry.model_dump(mode="json")), 201


# ------------------  COMPLIANCE REPORT ------------------
@gap_bp.get("/report")
@roles_required(UserRole.FARMER, UserRole.ADMIN)
def compliance_report():
    plot = request.args.get("plot")
    return jsonify(ok=True, report=GAPService.compliance_report(plot)), 200


@gap_bp.get("/report/print")
@roles_required(UserRole.FARMER, UserRole.ADMIN)
def compliance_report_page():
    plot = request.args.get("plot")
    return render_template(
        "gap_report.html",
        report=GAPService.compliance_report(plot),
        plot=plot or "All",
    )
