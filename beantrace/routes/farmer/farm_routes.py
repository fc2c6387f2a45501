# beantrace/routes/farmer/farm_routes.py

from flask import Blueprint, jsonify, request

from beantrace.auth_guard import identity, roles_required
from beantrace.models.auth.user_models import UserRole
from beantrace.models.farmer.farm_models import FarmCreateModel
from beantrace.models.farmer.harvest_models import HarvestLotCreateModel
from beantrace.services.farmer.farm_service import FarmService
from beantrace.services.farmer.harvest_service import HarvestService

FARMER_ROLES = (UserRole.FARMER, UserRole.ADMIN)

# ======================================================
# FARMER BLUEPRINT  →  /farmer/*
# ======================================================
farmer_bp = Blueprint("farmer", __name__, url_prefix="/farmer")


# ------------------  FARMS ------------------
@farmer_bp.get("/farms")
@roles_required(*FARMER_ROLES)
def list_farms():
    farms = [f.model_dump(mode="json") for f in FarmService.list_farms()]
    return jsonify(ok=True, farms=farms), 200


@farmer_bp.post("/farms")
@roles_required(*FARMER_ROLES)
def create_farm():
    payload = FarmCreateModel.model_validate(request.get_json(silent=True) or {})
    farm = FarmService.create_farm(payload)
    return jsonify(ok=True, farm=farm.model_dump(mode="json")), 201


# ------------------  HARVEST LOTS ------------------
@farmer_bp.post("/harvest-lots")
@roles_required(*FARMER_ROLES)
def register_harvest_lot():
    payload = HarvestLotCreateModel.model_validate(request.get_json(silent=True) or {})
    lot = HarvestService.register_lot(payload)
    return jsonify(ok=True, lot=lot.model_dump(mode="json")), 201


@farmer_bp.get("/harvest-lots/<lot_id>")
@roles_required(*FARMER_ROLES)
def harvest_lot_detail(lot_id):
    return jsonify(ok=True, **HarvestService.lot_detail(lot_id)), 200


# ------------------  DASHBOARD ------------------
@farmer_bp.get("/dashboard")
@roles_required(*FARMER_ROLES)
def farmer_dashboard():
    """
    GET /farmer/dashboard?status=All&sort=id&direction=desc&farmer=<name>
    Quality feedback defaults to the signed-in farmer.
    """
    status = request.args.get("status", "All")
    sort = request.args.get("sort", "id")
    direction = request.args.get("direction", "desc")
    farmer = (request.args.get("farmer") or identity()["name"]).strip()

    lots = HarvestService.list_lots(status=status, sort=sort, direction=direction)
    return jsonify(
        ok=True,
        stats=HarvestService.stats(),
        lots=[l.model_dump(mode="json") for l in lots],
        qualityFeedback=HarvestService.quality_feedback(farmer),
    ), 200
