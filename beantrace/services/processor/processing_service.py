# beantrace/services/processor/processing_service.py

from __future__ import annotations

from typing import Any, Dict, List

from flask import current_app

from beantrace.errors import Conflict, ValidationFailed
from beantrace.models.farmer.harvest_models import HarvestLotStatus
from beantrace.models.processor.parchment_models import ParchmentLot, ParchmentLotStatus
from beantrace.models.processor.processing_models import (
    BatchCompleteModel,
    DryingLogEntry,
    DryingReadingModel,
    ProcessingBatch,
    ProcessingBatchStatus,
    StartProcessingModel,
)
from beantrace.store import store


class ProcessingService:
    """
    Wet-mill side of the workbench: harvest lot -> processing batch -> parchment lot.

    Kanban columns are the three batch statuses. Completed is only reached
    through complete_batch() because it needs the drying/bagging figures.
    """

    # -------------------------------------------------
    # BOARD
    # -------------------------------------------------
    @staticmethod
    def kanban() -> Dict[str, List[Dict[str, Any]]]:
        columns: Dict[str, List[Dict[str, Any]]] = {s.value: [] for s in ProcessingBatchStatus}
        for batch in store["processingBatches"]:
            harvest = store.find("harvestLots", batch.harvestLotId)
            row = batch.model_dump(mode="json")
            row["cherryVariety"] = harvest.cherryVariety if harvest else "N/A"
            row["farmerName"] = harvest.farmerName if harvest else "N/A"
            columns[batch.status.value].append(row)
        return columns

    # -------------------------------------------------
    # LIFECYCLE
    # -------------------------------------------------
    @staticmethod
    def start_processing(payload: StartProcessingModel) -> ProcessingBatch:
        with store.lock:
            lot = store.require("harvestLots", payload.harvestLotId)
            if lot.status != HarvestLotStatus.READY:
                raise Conflict(f"Harvest lot {lot.id} is already being processed.")

            batch = ProcessingBatch(
                id=store.next_id("processingBatches", "PB"),
                harvestLotId=lot.id,
                status=ProcessingBatchStatus.TO_PROCESS,
                processType=payload.processType,
            )
            store["processingBatches"].insert(0, batch)
            lot.status = HarvestLotStatus.PROCESSING

        current_app.logger.info("Batch %s started from %s (%s)", batch.id, lot.id, batch.processType)
        return batch

    @staticmethod
    def move_batch(batch_id: str, status: ProcessingBatchStatus) -> ProcessingBatch:
        with store.lock:
            batch = store.require("processingBatches", batch_id)
            if status == ProcessingBatchStatus.COMPLETED:
                raise ValidationFailed("Completing a batch requires the drying and bagging details.")
            if batch.status == ProcessingBatchStatus.COMPLETED:
                raise Conflict(f"Batch {batch.id} is already completed.")
            if batch.status == status:
                return batch
            batch.status = status
        return batch

    @staticmethod
    def add_drying_reading(batch_id: str, reading: DryingReadingModel) -> ProcessingBatch:
        with store.lock:
            batch = store.require("processingBatches", batch_id)
            if batch.status == ProcessingBatchStatus.COMPLETED:
                raise Conflict(f"Batch {batch.id} is already completed.")
            if batch.dryingLog is None:
                batch.dryingLog = []
            batch.dryingLog.append(DryingLogEntry(**reading.model_dump()))
            batch.dryingLog.sort(key=lambda e: e.date)
            if batch.dryingStartDate is None:
                batch.dryingStartDate = batch.dryingLog[0].date
        return batch

    @staticmethod
    def complete_batch(batch_id: str, payload: BatchCompleteModel) -> ParchmentLot:
        """Close the batch and bag its output as a parchment lot awaiting hulling."""
        with store.lock:
            batch = store.require("processingBatches", batch_id)
            if batch.status == ProcessingBatchStatus.COMPLETED:
                raise Conflict(f"Batch {batch.id} is already completed.")

            batch.status = ProcessingBatchStatus.COMPLETED
            batch.parchmentWeightKg = payload.parchmentWeightKg
            batch.moistureContent = payload.moistureContent
            batch.dryingStartDate = payload.dryingStartDate
            batch.dryingEndDate = payload.dryingEndDate
            batch.baggingDate = payload.dryingEndDate

            parchment = ParchmentLot(
                id=store.next_id("parchmentLots", "PL"),
                processingBatchId=batch.id,
                harvestLotId=batch.harvestLotId,
                initialWeightKg=payload.parchmentWeightKg,
                currentWeightKg=payload.parchmentWeightKg,
                moistureContent=payload.moistureContent,
                processType=batch.processType,
                status=ParchmentLotStatus.AWAITING_HULLING,
            )
            store["parchmentLots"].insert(0, parchment)

        current_app.logger.info("Batch %s completed -> parchment %s (%.2f kg)", batch.id, parchment.id, parchment.initialWeightKg)
        return parchment
