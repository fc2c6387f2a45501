# beantrace/services/cupping/scoring.py
"""
SCA score arithmetic: one judge's sheet, the panel aggregate for a sample,
and competition ranking.
"""
from dataclasses import asdict, dataclass
from typing import Dict, Iterable, List, Tuple

from beantrace.models.cupping.score_models import (
    POINTS_PER_CUP,
    SCA_ATTRIBUTES,
    SCA_CUP_ATTRIBUTES,
    SCA_SENSORY_ATTRIBUTES,
    ScoreSheetModel,
)
from beantrace.models.cupping.session_models import JudgeScore


@dataclass
class SheetResult:
    scores: Dict[str, float]
    sensoryTotal: float
    cupsTotal: float
    subtotal: float
    defectsTotal: float
    finalScore: float

    def to_dict(self):
        return asdict(self)


def score_sheet(sheet: ScoreSheetModel) -> SheetResult:
    """
    Sensory attributes count at face value, each good cup is worth
    POINTS_PER_CUP, defects = defective cups x intensity.
    """
    scores: Dict[str, float] = {}
    for attr in SCA_SENSORY_ATTRIBUTES:
        scores[attr] = sheet.sensory[attr]
    for attr in SCA_CUP_ATTRIBUTES:
        scores[attr] = sheet.cups[attr] * POINTS_PER_CUP

    sensory_total = sum(scores[a] for a in SCA_SENSORY_ATTRIBUTES)
    cups_total = sum(scores[a] for a in SCA_CUP_ATTRIBUTES)
    subtotal = sensory_total + cups_total
    defects_total = sheet.defects.numCups * sheet.defects.intensity

    return SheetResult(
        scores=scores,
        sensoryTotal=sensory_total,
        cupsTotal=cups_total,
        subtotal=subtotal,
        defectsTotal=defects_total,
        finalScore=subtotal - defects_total,
    )


def aggregate_sample(judge_scores: List[JudgeScore]) -> Tuple[Dict[str, float], float]:
    """
    Mean of every SCA attribute across judges (missing attribute = 0) and
    the mean of the judges' own totals. No scores -> ({}, 0).
    """
    if not judge_scores:
        return {}, 0
    n = len(judge_scores)
    avg = {
        attr: sum(js.scores.get(attr, 0) for js in judge_scores) / n
        for attr in SCA_ATTRIBUTES
    }
    total = sum(js.totalScore for js in judge_scores) / n
    return avg, total


def competition_ranks(totals: Iterable[Tuple[str, float]]) -> Dict[str, int]:
    """
    Standard competition ranking ("1224"): equal totals share a rank and the
    next distinct total skips past the tie block.
    """
    ordered = sorted(totals, key=lambda item: item[1], reverse=True)
    ranks: Dict[str, int] = {}
    prev_total = None
    prev_rank = 0
    for position, (sample_id, total) in enumerate(ordered, start=1):
        if prev_total is not None and total == prev_total:
            ranks[sample_id] = prev_rank
        else:
            ranks[sample_id] = position
            prev_rank = position
            prev_total = total
    return ranks
