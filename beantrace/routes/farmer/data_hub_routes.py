# beantrace/routes/farmer/data_hub_routes.py

from flask import Blueprint, Response, jsonify, request

from beantrace.auth_guard import roles_required
from beantrace.models.auth.user_models import UserRole
from beantrace.services.farmer.data_hub_service import EXPORT_FILENAME, DataHubService

data_hub_bp = Blueprint("farmer_data_hub", __name__, url_prefix="/farmer/data-hub")


def _filters():
    return request.args.get("year", "All"), request.args.get("plot", "All")


@data_hub_bp.get("")
@roles_required(UserRole.FARMER, UserRole.ADMIN)
def data_hub():
    year, plot = _filters()
    lots = DataHubService.filter_lots(year, plot)
    return jsonify(
        ok=True,
        filters=DataHubService.filter_options(),
        lots=[l.model_dump(mode="json") for l in lots],
    ), 200


@data_hub_bp.get("/export")
@roles_required(UserRole.FARMER, UserRole.ADMIN)
def export_csv():
    year, plot = _filters()
    body = DataHubService.export_csv(year, plot)
    return Response(
        body,
        mimetype="text/csv",
        headers={"Content-Disposition": f"attachment; filename={EXPORT_FILENAME}"},
    )
