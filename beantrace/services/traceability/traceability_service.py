# beantrace/services/traceability/traceability_service.py
from typing import List

from beantrace.models.cupping.score_models import SCA_ATTRIBUTES
from beantrace.models.processor.green_bean_models import GreenBeanLot
from beantrace.models.processor.processing_models import ProcessingBatch
from beantrace.models.traceability.traceability_models import (
    CuppingBlock,
    HubRow,
    OriginBlock,
    ProcessingBlock,
    RoastRow,
    TraceabilityViewModel,
)
from beantrace.services.traceability import lineage
from beantrace.store import store


def _fmt_number(value: float) -> str:
    return f"{value:g}"


class TraceabilityService:
    """
    Compose the farm-to-cup story of a green-bean lot:
      - origin (harvest lot)
      - wet mill (processing batch + drying log)
      - dry mill (parchment physical test)
      - cupping (finalized result, else first judge score, else lot score)
      - roasts drawn from the lot
    """

    # -------------------------
    # Curation hub
    # -------------------------
    @staticmethod
    def hub_rows(search: str = "") -> List[HubRow]:
        needle = (search or "").strip().lower()
        rows = []
        for gbl in store["greenBeanLots"]:
            _, batch, harvest = lineage.origin_of(gbl)
            row = HubRow(
                id=gbl.id,
                grade=gbl.grade,
                variety=harvest.cherryVariety if harvest else "N/A",
                processType=batch.processType if batch else "N/A",
                currentWeightKg=gbl.currentWeightKg,
                availabilityStatus=gbl.availabilityStatus.value,
                finalScore=lineage.display_score(gbl),
            )
            if needle and not any(
                needle in v.lower() for v in (row.id, row.grade, row.processType, row.variety)
            ):
                continue
            rows.append(row)
        return sorted(rows, key=lambda r: r.id)

    # -------------------------
    # Public page
    # -------------------------
    @staticmethod
    def build_traceability(lot_id: str) -> TraceabilityViewModel:
        gbl = store.require("greenBeanLots", lot_id)
        parchment, batch, harvest = lineage.origin_of(gbl)

        vm = TraceabilityViewModel(lotId=gbl.id, grade=gbl.grade)

        if harvest:
            vm.origin = OriginBlock(
                farmerName=harvest.farmerName,
                cherryVariety=harvest.cherryVariety,
                farmPlotLocation=harvest.farmPlotLocation,
                harvestDate=harvest.harvestDate.isoformat(),
            )

        vm.processing = TraceabilityService._compose_processing(batch)
        if parchment:
            if vm.processing.processType == "N/A":
                vm.processing.processType = parchment.processType
            vm.processing.moistureContent = f"{_fmt_number(parchment.moistureContent)}%"
            if parchment.physicalTestResults:
                vm.physicalTest = parchment.physicalTestResults.model_dump()

        vm.cupping = TraceabilityService._compose_cupping(gbl)

        roasts = [rb for rb in store["roastBatches"] if rb.greenBeanLotId == gbl.id]
        vm.roasts = [
            RoastRow(
                id=rb.id,
                roastDate=rb.roastDate.isoformat(),
                batchSizeKg=rb.batchSizeKg,
                yieldPercentage=rb.yieldPercentage,
                roastProfileNotes=rb.roastProfileNotes,
                flavorNotes=rb.flavorNotes or "",
            )
            for rb in roasts
        ]
        if roasts:
            roaster = store.find("users", roasts[0].roasterId)
            vm.roasterName = roaster.name if roaster else None

        seen = []
        for rb in roasts:
            for note in (rb.flavorNotes or "").split(","):
                note = note.strip().lower()
                if note and note not in seen:
                    seen.append(note)
        vm.flavorNotes = [n[0].upper() + n[1:] for n in seen]
        return vm

    # -------------------------
    # Blocks
    # -------------------------
    @staticmethod
    def _compose_processing(batch: ProcessingBatch) -> ProcessingBlock:
        block = ProcessingBlock()
        if batch is None:
            return block
        block.processType = batch.processType
        if batch.dryingStartDate and batch.dryingEndDate:
            block.dryingDuration = f"{(batch.dryingEndDate - batch.dryingStartDate).days} Days"
        if batch.dryingLog:
            n = len(batch.dryingLog)
            block.avgTemp = f"{sum(e.ambientTemp for e in batch.dryingLog) / n:.0f}°C"
            block.avgHumidity = f"{sum(e.relativeHumidity for e in batch.dryingLog) / n:.0f}%"
        return block

    @staticmethod
    def _compose_cupping(gbl: GreenBeanLot):
        if not gbl.cuppingScores:
            return None
        session, sample = lineage.scored_sample(gbl)
        block = CuppingBlock(sessionName=session.name if session else "")

        result = lineage.final_result(gbl)
        if result is not None:
            block.score = result.totalScore
            block.notes = result.finalNotes
            block.chartData = [
                {"attribute": attr.split("/")[0], "score": result.avgScores.get(attr, 0), "fullMark": 10}
                for attr in SCA_ATTRIBUTES
            ]
        elif session and sample and session.scores.get(sample.id):
            first = session.scores[sample.id][0]
            block.score = first.totalScore
            block.notes = first.notes

        if not block.score and gbl.cuppingScores[0].score:
            block.score = gbl.cuppingScores[0].score
        return block
