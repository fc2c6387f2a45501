# beantrace/routes/processor/workbench_routes.py

from flask import Blueprint, jsonify, request

from beantrace.auth_guard import identity, roles_required
from beantrace.models.auth.user_models import UserRole
from beantrace.models.processor.green_bean_models import QCScoreModel, WithdrawalCreateModel
from beantrace.models.processor.parchment_models import HullGradeModel, PhysicalTestResults
from beantrace.models.processor.processing_models import (
    BatchCompleteModel,
    BatchMoveModel,
    DryingReadingModel,
    StartProcessingModel,
)
from beantrace.services.farmer.harvest_service import HarvestService
from beantrace.services.processor.inventory_service import InventoryService
from beantrace.services.processor.processing_service import ProcessingService
from beantrace.services.processor.qc_service import QCService, qc_session_id

PROCESSOR_ROLES = (UserRole.PROCESSOR, UserRole.ADMIN)

# ======================================================
# PROCESSOR WORKBENCH  →  /processor/*
# ======================================================
processor_bp = Blueprint("processor", __name__, url_prefix="/processor")


def _body() -> dict:
    return request.get_json(silent=True) or {}


def _table_args() -> dict:
    return {
        "search": request.args.get("search", ""),
        "sort": request.args.get("sort") or None,
        "direction": request.args.get("direction", "asc"),
        "page": request.args.get("page", 1, type=int),
    }


# ------------------  WET MILL ------------------
@processor_bp.get("/kanban")
@roles_required(*PROCESSOR_ROLES)
def kanban():
    ready = [l.model_dump(mode="json") for l in HarvestService.ready_for_processing()]
    return jsonify(ok=True, columns=ProcessingService.kanban(), readyLots=ready), 200


@processor_bp.post("/batches")
@roles_required(*PROCESSOR_ROLES)
def start_processing():
    batch = ProcessingService.start_processing(StartProcessingModel.model_validate(_body()))
    return jsonify(ok=True, batch=batch.model_dump(mode="json")), 201


@processor_bp.post("/batches/<batch_id>/move")
@roles_required(*PROCESSOR_ROLES)
def move_batch(batch_id):
    payload = BatchMoveModel.model_validate(_body())
    batch = ProcessingService.move_batch(batch_id, payload.status)
    return jsonify(ok=True, batch=batch.model_dump(mode="json")), 200


@processor_bp.post("/batches/<batch_id>/drying-log")
@roles_required(*PROCESSOR_ROLES)
def add_drying_reading(batch_id):
    batch = ProcessingService.add_drying_reading(batch_id, DryingReadingModel.model_validate(_body()))
    return jsonify(ok=True, batch=batch.model_dump(mode="json")), 201


@processor_bp.post("/batches/<batch_id>/complete")
@roles_required(*PROCESSOR_ROLES)
def complete_batch(batch_id):
    parchment = ProcessingService.complete_batch(batch_id, BatchCompleteModel.model_validate(_body()))
    return jsonify(ok=True, parchmentLot=parchment.model_dump(mode="json")), 201


# ------------------  DRY MILL ------------------
@processor_bp.get("/parchment-lots")
@roles_required(*PROCESSOR_ROLES)
def parchment_table():
    return jsonify(ok=True, **InventoryService.parchment_table(**_table_args())), 200


@processor_bp.post("/parchment-lots/<lot_id>/physical-test")
@roles_required(*PROCESSOR_ROLES)
def physical_test(lot_id):
    lot = InventoryService.record_physical_test(lot_id, PhysicalTestResults.model_validate(_body()))
    return jsonify(ok=True, parchmentLot=lot.model_dump(mode="json")), 200


@processor_bp.post("/parchment-lots/<lot_id>/hull")
@roles_required(*PROCESSOR_ROLES)
def hull_and_grade(lot_id):
    lots = InventoryService.hull_and_grade(lot_id, HullGradeModel.model_validate(_body()))
    return jsonify(ok=True, greenBeanLots=[l.model_dump(mode="json") for l in lots]), 201


# ------------------  GREEN BEANS ------------------
@processor_bp.get("/green-bean-lots")
@roles_required(*PROCESSOR_ROLES)
def green_bean_table():
    table = InventoryService.green_bean_table(qc_session_id(identity()["userId"]), **_table_args())
    return jsonify(ok=True, **table), 200


@processor_bp.post("/green-bean-lots/<lot_id>/withdraw")
@roles_required(*PROCESSOR_ROLES)
def withdraw(lot_id):
    lot = InventoryService.withdraw(lot_id, WithdrawalCreateModel.model_validate(_body()))
    return jsonify(ok=True, lot=lot.model_dump(mode="json")), 200


@processor_bp.post("/green-bean-lots/<lot_id>/availability")
@roles_required(*PROCESSOR_ROLES)
def toggle_availability(lot_id):
    lot = InventoryService.toggle_availability(lot_id)
    return jsonify(ok=True, lot=lot.model_dump(mode="json")), 200


# ------------------  INTERNAL QC ------------------
@processor_bp.get("/green-bean-lots/<lot_id>/qc")
@roles_required(*PROCESSOR_ROLES)
def saved_qc_score(lot_id):
    return jsonify(ok=True, score=QCService.saved_score(lot_id, identity()["userId"])), 200


@processor_bp.post("/green-bean-lots/<lot_id>/qc")
@roles_required(*PROCESSOR_ROLES)
def record_qc_score(lot_id):
    entry = QCService.record_score(lot_id, QCScoreModel.model_validate(_body()), identity())
    return jsonify(ok=True, score=entry.model_dump(mode="json")), 200
