# beantrace/services/processor/inventory_service.py

from __future__ import annotations

import datetime as dt
from typing import Any, Dict, List, Optional

from flask import current_app

from beantrace.errors import Conflict, ValidationFailed
from beantrace.models.processor.green_bean_models import (
    AvailabilityStatus,
    GreenBeanLot,
    Withdrawal,
    WithdrawalCreateModel,
)
from beantrace.models.processor.parchment_models import (
    HullGradeModel,
    ParchmentLotStatus,
    PhysicalTestResults,
)
from beantrace.services.processor.tables import table_page
from beantrace.store import store

PARCHMENT_SORTABLE = {
    "id", "processingBatchId", "harvestLotId", "initialWeightKg",
    "currentWeightKg", "moistureContent", "processType", "status",
}
GREEN_BEAN_SORTABLE = {
    "id", "parchmentLotId", "grade", "initialWeightKg",
    "currentWeightKg", "availabilityStatus", "qcScore",
}

# grade weights may drift from the declared total by at most this much
WEIGHT_TOLERANCE_KG = 0.01


class InventoryService:
    """Dry-mill side: parchment lots, hulling into graded green-bean lots, stock moves."""

    # -------------------------------------------------
    # TABLES
    # -------------------------------------------------
    @staticmethod
    def parchment_table(search: str = "", sort: Optional[str] = None, direction: str = "asc", page: int = 1) -> Dict[str, Any]:
        rows = []
        for p in store["parchmentLots"]:
            row = p.model_dump(mode="json")
            row["canTest"] = p.physicalTestResults is None and p.status != ParchmentLotStatus.HULLED
            row["canHull"] = p.status == ParchmentLotStatus.AWAITING_HULLING
            rows.append(row)
        return table_page(
            rows, search=search, search_fields=("id", "status"),
            sort=sort, sortable=PARCHMENT_SORTABLE, direction=direction, page=page,
        )

    @staticmethod
    def green_bean_table(
        qc_session_id: str, search: str = "", sort: Optional[str] = None, direction: str = "asc", page: int = 1
    ) -> Dict[str, Any]:
        rows = []
        for g in store["greenBeanLots"]:
            row = g.model_dump(mode="json")
            qc = next((cs for cs in g.cuppingScores if cs.sessionId == qc_session_id), None)
            row["qcScore"] = qc.score if qc else None
            rows.append(row)
        return table_page(
            rows, search=search, search_fields=("id", "grade"),
            sort=sort, sortable=GREEN_BEAN_SORTABLE, direction=direction, page=page,
        )

    # -------------------------------------------------
    # PARCHMENT
    # -------------------------------------------------
    @staticmethod
    def record_physical_test(parchment_id: str, results: PhysicalTestResults):
        with store.lock:
            parchment = store.require("parchmentLots", parchment_id)
            if parchment.status == ParchmentLotStatus.HULLED:
                raise Conflict(f"Parchment lot {parchment.id} has already been hulled.")
            if parchment.physicalTestResults is not None:
                raise Conflict(f"Parchment lot {parchment.id} has already been tested.")
            sample_kg = results.sampleWeightGrams / 1000
            if sample_kg > parchment.currentWeightKg:
                raise ValidationFailed("Sample weight exceeds the lot's current weight.")

            parchment.physicalTestResults = results
            parchment.currentWeightKg = parchment.currentWeightKg - sample_kg
        return parchment

    @staticmethod
    def hull_and_grade(parchment_id: str, payload: HullGradeModel) -> List[GreenBeanLot]:
        """
        Split a parchment lot into graded green-bean lots. The grade weights
        must add up to the declared total green weight.
        """
        with store.lock:
            parchment = store.require("parchmentLots", parchment_id)
            if parchment.status != ParchmentLotStatus.AWAITING_HULLING:
                raise Conflict(f"Parchment lot {parchment.id} has already been hulled.")

            graded = sum(g.weightKg for g in payload.grades)
            if abs(graded - payload.totalGreenWeightKg) > WEIGHT_TOLERANCE_KG:
                raise ValidationFailed(
                    "The sum of the weights for the graded lots must exactly match the total green bean weight."
                )

            first_no = int(store.next_id("greenBeanLots", "GBL")[3:])
            new_lots = [
                GreenBeanLot(
                    id=f"GBL{first_no + i:03d}",
                    parchmentLotId=parchment.id,
                    grade=g.grade,
                    initialWeightKg=g.weightKg,
                    currentWeightKg=g.weightKg,
                    availabilityStatus=AvailabilityStatus.AVAILABLE,
                    cuppingScores=[],
                )
                for i, g in enumerate(payload.grades)
            ]
            store["greenBeanLots"][:0] = new_lots
            parchment.status = ParchmentLotStatus.HULLED
            parchment.currentWeightKg = 0

        current_app.logger.info(
            "Parchment %s hulled into %s", parchment.id, ", ".join(l.id for l in new_lots)
        )
        return new_lots

    # -------------------------------------------------
    # GREEN BEANS
    # -------------------------------------------------
    @staticmethod
    def withdraw(lot_id: str, payload: WithdrawalCreateModel) -> GreenBeanLot:
        with store.lock:
            lot = store.require("greenBeanLots", lot_id)
            if lot.availabilityStatus == AvailabilityStatus.WITHDRAWN:
                raise Conflict(f"Lot {lot.id} is withdrawn.")
            if payload.amountKg > lot.currentWeightKg:
                raise ValidationFailed("Invalid withdrawal amount.")

            if lot.withdrawalHistory is None:
                lot.withdrawalHistory = []
            lot.withdrawalHistory.append(
                Withdrawal(amountKg=payload.amountKg, purpose=payload.purpose, date=dt.date.today())
            )
            lot.currentWeightKg = lot.currentWeightKg - payload.amountKg
        return lot

    @staticmethod
    def toggle_availability(lot_id: str) -> GreenBeanLot:
        with store.lock:
            lot = store.require("greenBeanLots", lot_id)
            lot.availabilityStatus = (
                AvailabilityStatus.WITHDRAWN
                if lot.availabilityStatus == AvailabilityStatus.AVAILABLE
                else AvailabilityStatus.AVAILABLE
            )
        return lot
