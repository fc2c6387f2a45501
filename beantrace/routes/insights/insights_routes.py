# beantrace/routes/insights/insights_routes.py

from flask import Blueprint, jsonify, request

from beantrace.auth_guard import roles_required
from beantrace.models.auth.user_models import UserRole
from beantrace.models.insights.report_models import InsightRequestModel
from beantrace.services.insights.insights_service import InsightsService
from beantrace.store import store

INSIGHT_ROLES = (UserRole.ROASTER, UserRole.PROCESSOR, UserRole.ADMIN)

insights_bp = Blueprint("insights", __name__, url_prefix="/insights")


# ------------------  CHARTS ------------------
@insights_bp.get("/charts")
@roles_required(*INSIGHT_ROLES)
def charts():
    """
    GET /insights/charts?farmer=<name>&parchmentLotId=<id>
    """
    farmers = InsightsService.farmer_names()
    farmer = request.args.get("farmer") or (farmers[0] if farmers else "")
    drying_lots = InsightsService.drying_lots()
    pl_id = request.args.get("parchmentLotId") or (drying_lots[0]["id"] if drying_lots else None)

    return jsonify(
        ok=True,
        processComparison=InsightsService.process_comparison(),
        farmers=farmers,
        farmPerformance=InsightsService.farm_performance(farmer) if farmer else [],
        dryingLots=drying_lots,
        dryingCurve=InsightsService.drying_chart(pl_id) if pl_id else None,
    ), 200


# ------------------  AI ------------------
@insights_bp.post("/quality")
@roles_required(*INSIGHT_ROLES)
def quality_insights():
    payload = InsightRequestModel.model_validate(request.get_json(silent=True) or {})
    session = store.require("cuppingSessions", payload.sessionId)
    insight = InsightsService.get_quality_insights(session, payload.attribute)
    return jsonify(ok=True, insight=insight), 200


@insights_bp.post("/report")
@roles_required(*INSIGHT_ROLES)
def comprehensive_report():
    return jsonify(ok=True, report=InsightsService.generate_comprehensive_report()), 200


@insights_bp.post("/trends")
@roles_required(*INSIGHT_ROLES)
def platform_trends():
    return jsonify(ok=True, trends=InsightsService.get_platform_trends()), 200
