# beantrace/services/traceability/lineage.py
"""
Walks the provenance chain

    HarvestLot -> ProcessingBatch -> ParchmentLot -> GreenBeanLot

Every reference is a plain id; a dangling one resolves to None.
"""
from typing import List, Optional, Tuple

from beantrace.models.cupping.session_models import CuppingSample, CuppingSession, FinalResult
from beantrace.models.farmer.harvest_models import HarvestLot
from beantrace.models.processor.green_bean_models import GreenBeanLot
from beantrace.models.processor.parchment_models import ParchmentLot
from beantrace.models.processor.processing_models import ProcessingBatch
from beantrace.store import store


def parchment_of(gbl: GreenBeanLot) -> Optional[ParchmentLot]:
    return store.find("parchmentLots", gbl.parchmentLotId)


def batch_of(parchment: Optional[ParchmentLot]) -> Optional[ProcessingBatch]:
    return store.find("processingBatches", parchment.processingBatchId) if parchment else None


def harvest_of(parchment: Optional[ParchmentLot]) -> Optional[HarvestLot]:
    return store.find("harvestLots", parchment.harvestLotId) if parchment else None


def origin_of(gbl: GreenBeanLot) -> Tuple[Optional[ParchmentLot], Optional[ProcessingBatch], Optional[HarvestLot]]:
    parchment = parchment_of(gbl)
    return parchment, batch_of(parchment), harvest_of(parchment)


def green_lots_for_harvest(harvest_lot_id: str) -> List[GreenBeanLot]:
    """Green-bean lots milled from any batch of the harvest lot, in store order."""
    batch_ids = {b.id for b in store.where("processingBatches", lambda b: b.harvestLotId == harvest_lot_id)}
    parchment_ids = {p.id for p in store.where("parchmentLots", lambda p: p.processingBatchId in batch_ids)}
    return store.where("greenBeanLots", lambda g: g.parchmentLotId in parchment_ids)


# ---------- cupping scores ----------

def scored_sample(gbl: GreenBeanLot) -> Tuple[Optional[CuppingSession], Optional[CuppingSample]]:
    """Session/sample behind the lot's first recorded score."""
    if not gbl.cuppingScores:
        return None, None
    session = store.find("cuppingSessions", gbl.cuppingScores[0].sessionId)
    sample = session.sample_for_lot(gbl.id) if session else None
    return session, sample


def final_result(gbl: GreenBeanLot) -> Optional[FinalResult]:
    session, sample = scored_sample(gbl)
    if session and sample and session.finalResults:
        return session.finalResults.get(sample.id)
    return None


def lot_score(gbl: GreenBeanLot) -> Tuple[Optional[float], Optional[str]]:
    """(score, notes): the finalized result, else the score stored on the lot."""
    result = final_result(gbl)
    if result is not None:
        return result.totalScore, result.finalNotes
    if gbl.cuppingScores and gbl.cuppingScores[0].score:
        return gbl.cuppingScores[0].score, None
    return None, None


def display_score(gbl: GreenBeanLot):
    score, _ = lot_score(gbl)
    return round(score, 2) if score else "N/A"
