# beantrace/routes/admin/admin_routes.py

from flask import Blueprint, jsonify, request

from beantrace.auth_guard import identity, roles_required
from beantrace.errors import Conflict
from beantrace.models.auth.user_models import UserCreateModel, UserRole, UserUpdateModel
from beantrace.services.admin.user_service import UserAdminService

admin_bp = Blueprint("admin", __name__, url_prefix="/admin")


# ------------------  USERS ------------------
@admin_bp.get("/users")
@roles_required(UserRole.ADMIN)
def list_users():
    return jsonify(ok=True, users=UserAdminService.list_users()), 200


@admin_bp.post("/users")
@roles_required(UserRole.ADMIN)
def create_user():
    payload = UserCreateModel.model_validate(request.get_json(silent=True) or {})
    user = UserAdminService.create_user(payload)
    return jsonify(ok=True, user=user.model_dump(mode="json")), 201


@admin_bp.patch("/users/<user_id>")
@roles_required(UserRole.ADMIN)
def update_user(user_id):
    payload = UserUpdateModel.model_validate(request.get_json(silent=True) or {})
    user = UserAdminService.update_user(user_id, payload)
    return jsonify(ok=True, user=user.model_dump(mode="json")), 200


@admin_bp.delete("/users/<user_id>")
@roles_required(UserRole.ADMIN)
def delete_user(user_id):
    if user_id == identity()["userId"]:
        raise Conflict("You cannot delete your own account.")
    UserAdminService.delete_user(user_id)
    return jsonify(ok=True), 200


# ------------------  CASCADING DELETES ------------------
@admin_bp.delete("/harvest-lots/<lot_id>")
@roles_required(UserRole.ADMIN)
def delete_harvest_lot(lot_id):
    removed = UserAdminService.delete_harvest_lot(lot_id)
    return jsonify(ok=True, removed=removed), 200
