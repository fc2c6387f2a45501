# beantrace/routes/traceability/trace_routes.py

from flask import Blueprint, jsonify, render_template, request, send_file, url_for

from beantrace.auth_guard import roles_required
from beantrace.errors import NotFound
from beantrace.models.auth.user_models import UserRole
from beantrace.qr_utils import labelled_qr_png
from beantrace.services.traceability.traceability_service import TraceabilityService

traceability_bp = Blueprint("traceability", __name__, url_prefix="/traceability")


# ------------------------------
# CURATION HUB (JSON)
# ------------------------------
@traceability_bp.get("/hub")
@roles_required(UserRole.PROCESSOR, UserRole.ADMIN)
def hub():
    """
    GET /traceability/hub?q=...
    Search matches lot id, grade, process and variety.
    """
    rows = TraceabilityService.hub_rows(request.args.get("q", ""))
    return jsonify(ok=True, lots=[r.to_dict() for r in rows]), 200


# ------------------------------
# PUBLIC PAGE (no login)
# ------------------------------
@traceability_bp.get("/<lot_id>")
def traceability_page(lot_id):
    try:
        vm = TraceabilityService.build_traceability(lot_id)
    except NotFound:
        return render_template("traceability.html", vm=None, lot_id=lot_id), 404
    page_url = url_for("traceability.traceability_page", lot_id=lot_id, _external=True)
    return render_template("traceability.html", vm=vm, lot_id=lot_id, page_url=page_url)


@traceability_bp.get("/api/<lot_id>")
def traceability_api(lot_id):
    vm = TraceabilityService.build_traceability(lot_id)
    page_url = url_for("traceability.traceability_page", lot_id=lot_id, _external=True)
    return jsonify(ok=True, data=vm.to_dict(), pageUrl=page_url), 200


@traceability_bp.get("/<lot_id>/qr.png")
def traceability_qr(lot_id):
    """QR code PNG encoding the public page URL, labelled with the lot id."""
    TraceabilityService.build_traceability(lot_id)
    page_url = url_for("traceability.traceability_page", lot_id=lot_id, _external=True)
    buf = labelled_qr_png(page_url, lot_id)
    return send_file(buf, mimetype="image/png", download_name=f"{lot_id}_qr.png")
