# beantrace/routes/roaster/roaster_routes.py

from flask import Blueprint, jsonify, request

from beantrace.auth_guard import identity, roles_required
from beantrace.models.auth.user_models import UserRole
from beantrace.models.roaster.roaster_models import ClaimModel, RoastLogModel
from beantrace.services.roaster.roaster_service import RoasterService

ROASTER_ROLES = (UserRole.ROASTER, UserRole.ADMIN)

roaster_bp = Blueprint("roaster", __name__, url_prefix="/roaster")


@roaster_bp.get("/workbench")
@roles_required(*ROASTER_ROLES)
def workbench():
    roaster_id = identity()["userId"]
    return jsonify(
        ok=True,
        availableLots=RoasterService.available_lots(),
        inventory=RoasterService.my_inventory(roaster_id),
        roasts=[r.model_dump(mode="json") for r in RoasterService.my_roasts(roaster_id)],
        flavorWheel=RoasterService.flavor_wheel(),
    ), 200


@roaster_bp.post("/claims")
@roles_required(*ROASTER_ROLES)
def claim():
    payload = ClaimModel.model_validate(request.get_json(silent=True) or {})
    item = RoasterService.claim(payload, identity()["userId"])
    return jsonify(ok=True, item=item.model_dump(mode="json")), 201


@roaster_bp.get("/inventory/<inventory_id>/flavor-tags")
@roles_required(*ROASTER_ROLES)
def last_flavor_tags(inventory_id):
    tags = RoasterService.last_flavor_tags(inventory_id, identity()["userId"])
    return jsonify(ok=True, flavorNotes=tags), 200


@roaster_bp.post("/roasts")
@roles_required(*ROASTER_ROLES)
def log_roast():
    payload = RoastLogModel.model_validate(request.get_json(silent=True) or {})
    roast = RoasterService.log_roast(payload, identity()["userId"])
    return jsonify(ok=True, roast=roast.model_dump(mode="json")), 201
