# beantrace/services/farmer/harvest_service.py
import datetime as dt
from typing import Any, Dict, List, Optional

from flask import current_app

from beantrace.errors import ValidationFailed
from beantrace.models.farmer.harvest_models import HarvestLot, HarvestLotCreateModel, HarvestLotStatus
from beantrace.models.processor.processing_models import ProcessingBatchStatus
from beantrace.services.traceability import lineage
from beantrace.store import store

SORTABLE = {"id", "farmerName", "cherryVariety", "weightKg", "farmPlotLocation", "harvestDate", "status"}
STATUS_FILTERS = ["All", HarvestLotStatus.READY.value, HarvestLotStatus.PROCESSING.value]
FEEDBACK_LIMIT = 3


class HarvestService:

    @staticmethod
    def register_lot(payload: HarvestLotCreateModel) -> HarvestLot:
        with store.lock:
            farm = store.find("farms", payload.farmId)
            if farm is None:
                raise ValidationFailed("Please select a valid farm.")
            lot = HarvestLot(
                id=store.next_id("harvestLots", "HL"),
                farmerName=farm.farmerName,
                cherryVariety=payload.cherryVariety,
                weightKg=payload.weightKg,
                farmPlotLocation=farm.location,
                harvestDate=payload.harvestDate or dt.date.today(),
                status=HarvestLotStatus.READY,
            )
            store["harvestLots"].insert(0, lot)

        current_app.logger.info("Harvest lot %s registered for %s", lot.id, lot.farmerName)
        return lot

    @staticmethod
    def list_lots(status: str = "All", sort: str = "id", direction: str = "desc") -> List[HarvestLot]:
        if status not in STATUS_FILTERS:
            raise ValidationFailed(f"Unknown status filter: {status}")
        if sort not in SORTABLE:
            raise ValidationFailed(f"Cannot sort by {sort}")
        lots = [l for l in store["harvestLots"] if status == "All" or l.status.value == status]
        return sorted(lots, key=lambda l: getattr(l, sort), reverse=(direction != "asc"))

    @staticmethod
    def stats() -> Dict[str, Any]:
        lots = store["harvestLots"]
        return {
            "totalLots": len(lots),
            "totalWeight": sum(l.weightKg for l in lots),
            "inProcessing": sum(1 for l in lots if l.status == HarvestLotStatus.PROCESSING),
            "readyForProcessing": sum(1 for l in lots if l.status == HarvestLotStatus.READY),
        }

    @staticmethod
    def quality_feedback(farmer_name: str) -> List[dict]:
        """The farmer's best finalized cupping results, top FEEDBACK_LIMIT."""
        scored = []
        for hl in store.where("harvestLots", lambda h: h.farmerName == farmer_name):
            green = lineage.green_lots_for_harvest(hl.id)
            if not green:
                continue
            result = lineage.final_result(green[0])
            if result is not None:
                scored.append({"lotId": hl.id, "variety": hl.cherryVariety, "score": result.totalScore})
        scored.sort(key=lambda r: r["score"], reverse=True)
        return scored[:FEEDBACK_LIMIT]

    @staticmethod
    def lot_detail(lot_id: str) -> Dict[str, Any]:
        lot = store.require("harvestLots", lot_id)
        batches = store.where("processingBatches", lambda b: b.harvestLotId == lot_id)
        completed = next((b for b in batches if b.status == ProcessingBatchStatus.COMPLETED), None)
        green = lineage.green_lots_for_harvest(lot_id)
        main_green = green[0] if green else None
        result = lineage.final_result(main_green) if main_green else None

        timeline = [
            {"step": "Harvested", "complete": True, "detail": lot.harvestDate.isoformat()},
            {
                "step": "Processing",
                "complete": bool(batches),
                "detail": f"{batches[0].processType} Process" if batches else "Pending",
            },
            {
                "step": "Dried & Bagged",
                "complete": completed is not None,
                "detail": completed.baggingDate.isoformat() if completed and completed.baggingDate else "Pending",
            },
            {
                "step": "Milled to Green Bean",
                "complete": main_green is not None,
                "detail": main_green.id if main_green else "Pending",
            },
            {
                "step": "Cupping Result",
                "complete": result is not None,
                "detail": f"{result.totalScore:.2f}" if result else "Pending",
                "notes": result.finalNotes if result else None,
            },
        ]
        return {
            "lot": lot.model_dump(mode="json"),
            "timeline": timeline,
            "greenBeanLotId": main_green.id if main_green else None,
        }

    @staticmethod
    def ready_for_processing() -> List[HarvestLot]:
        return store.where("harvestLots", lambda h: h.status == HarvestLotStatus.READY)

    @staticmethod
    def find(lot_id: str) -> Optional[HarvestLot]:
        return store.find("harvestLots", lot_id)
