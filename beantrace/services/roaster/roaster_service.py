# beantrace/services/roaster/roaster_service.py

from __future__ import annotations

import datetime as dt
from typing import Any, Dict, List

from flask import current_app

from beantrace.errors import Conflict, ValidationFailed
from beantrace.models.processor.green_bean_models import AvailabilityStatus
from beantrace.models.roaster.roaster_models import (
    FLAVOR_GROUPS,
    ClaimModel,
    RoastBatch,
    RoasterInventoryItem,
    RoastLogModel,
)
from beantrace.services.traceability import lineage
from beantrace.store import store

# inventory below this is treated as used up
EMPTY_KG = 0.01


def _to2(n: float) -> float:
    return round(float(n), 2)


def _lot_info(lot_id: str) -> Dict[str, str]:
    gbl = store.find("greenBeanLots", lot_id)
    if gbl is None:
        return {"variety": "N/A", "process": "N/A"}
    parchment, _, harvest = lineage.origin_of(gbl)
    return {
        "variety": harvest.cherryVariety if harvest else "N/A",
        "process": parchment.processType if parchment else "N/A",
    }


class RoasterService:
    """Claiming green stock and logging roasts against it."""

    # -------------------------------------------------
    # GREEN MARKET
    # -------------------------------------------------
    @staticmethod
    def available_lots() -> List[Dict[str, Any]]:
        rows = []
        for gbl in store["greenBeanLots"]:
            if gbl.availabilityStatus != AvailabilityStatus.AVAILABLE or gbl.currentWeightKg <= 0:
                continue
            row = gbl.model_dump(mode="json")
            row.update(_lot_info(gbl.id))
            row["finalScore"] = lineage.display_score(gbl)
            rows.append(row)
        return rows

    @staticmethod
    def claim(payload: ClaimModel, roaster_id: str) -> RoasterInventoryItem:
        with store.lock:
            lot = store.require("greenBeanLots", payload.greenBeanLotId)
            if lot.availabilityStatus != AvailabilityStatus.AVAILABLE:
                raise Conflict(f"Lot {lot.id} is not available.")
            if payload.amountKg > lot.currentWeightKg:
                raise ValidationFailed("Invalid claim amount.")

            lot.currentWeightKg = lot.currentWeightKg - payload.amountKg

            item = next(
                (i for i in store["roasterInventory"] if i.roasterId == roaster_id and i.greenBeanLotId == lot.id),
                None,
            )
            if item is None:
                item = RoasterInventoryItem(
                    id=store.next_id("roasterInventory", "RI"),
                    roasterId=roaster_id,
                    greenBeanLotId=lot.id,
                    claimedWeightKg=payload.amountKg,
                    remainingWeightKg=payload.amountKg,
                )
                store["roasterInventory"].append(item)
            else:
                item.claimedWeightKg += payload.amountKg
                item.remainingWeightKg += payload.amountKg

        current_app.logger.info("%s claimed %.2f kg of %s", roaster_id, payload.amountKg, lot.id)
        return item

    # -------------------------------------------------
    # INVENTORY
    # -------------------------------------------------
    @staticmethod
    def my_inventory(roaster_id: str) -> List[Dict[str, Any]]:
        rows = []
        for item in store["roasterInventory"]:
            if item.roasterId != roaster_id or item.remainingWeightKg <= EMPTY_KG:
                continue
            row = item.model_dump(mode="json")
            row.update(_lot_info(item.greenBeanLotId))
            rows.append(row)
        return rows

    @staticmethod
    def flavor_wheel() -> Dict[str, List[str]]:
        return {group: list(notes) for group, notes in FLAVOR_GROUPS.items()}

    @staticmethod
    def last_flavor_tags(inventory_id: str, roaster_id: str) -> List[str]:
        """Tags of the roaster's latest roast from this inventory item, used to prefill the next one."""
        store.require("roasterInventory", inventory_id)
        roasts = [
            r for r in store["roastBatches"]
            if r.roasterId == roaster_id and r.roasterInventoryId == inventory_id
        ]
        if not roasts or not roasts[-1].flavorNotes:
            return []
        return [t.strip() for t in roasts[-1].flavorNotes.split(",") if t.strip()]

    # -------------------------------------------------
    # ROASTS
    # -------------------------------------------------
    @staticmethod
    def log_roast(payload: RoastLogModel, roaster_id: str) -> RoastBatch:
        with store.lock:
            item = store.require("roasterInventory", payload.roasterInventoryId)
            if item.roasterId != roaster_id:
                raise ValidationFailed(f"Inventory item {item.id} belongs to another roaster.")
            if payload.batchSizeKg > item.remainingWeightKg:
                raise ValidationFailed("Batch exceeds inventory.")
            if payload.roastedWeightKg > payload.batchSizeKg:
                raise ValidationFailed("Roasted weight cannot be greater than batch size.")

            batch = _to2(payload.batchSizeKg)
            roasted = _to2(payload.roastedWeightKg)
            if batch <= 0:
                raise ValidationFailed("Batch size must be at least 0.01 kg.")
            yield_pct = _to2(payload.roastedWeightKg / payload.batchSizeKg * 100)

            item.remainingWeightKg = _to2(item.remainingWeightKg - batch)
            roast = RoastBatch(
                id=store.next_id("roastBatches", "RB"),
                roasterId=roaster_id,
                roasterInventoryId=item.id,
                greenBeanLotId=item.greenBeanLotId,
                roastDate=dt.date.today(),
                batchSizeKg=batch,
                roastedWeightKg=roasted,
                yieldPercentage=yield_pct,
                weightLossPct=_to2(100 - yield_pct),
                roastProfileNotes=payload.roastProfileNotes.strip(),
                flavorNotes=", ".join(payload.flavorNotes),
            )
            store["roastBatches"].append(roast)

        current_app.logger.info("Roast %s logged from %s (yield %.2f%%)", roast.id, item.id, yield_pct)
        return roast

    @staticmethod
    def my_roasts(roaster_id: str) -> List[RoastBatch]:
        roasts = [r for r in store["roastBatches"] if r.roasterId == roaster_id]
        return sorted(roasts, key=lambda r: r.roastDate, reverse=True)
