# beantrace/services/insights/insights_service.py
import copy
import json
from collections import defaultdict
from typing import Dict, List, Optional

from flask import current_app

from beantrace.errors import ValidationFailed
from beantrace.models.cupping.score_models import SCA_ATTRIBUTES
from beantrace.models.cupping.session_models import CuppingSession, JudgeScore
from beantrace.models.insights.report_models import (
    ComprehensiveQualityReport,
    PlatformInsight,
    QualityInsight,
)
from beantrace.services.insights import ai_client
from beantrace.services.insights.ai_client import AIServiceError
from beantrace.services.traceability import lineage
from beantrace.store import store

SYNTHESIS_ERROR = "Error generating AI summary. Please review notes manually."
REPORT_LOT_LIMIT = 10

# ---------- response schemas (Gemini OpenAPI subset) ----------

_STR = {"type": "STRING"}
_NUM = {"type": "NUMBER"}
_STR_LIST = {"type": "ARRAY", "items": _STR}

QUALITY_INSIGHT_SCHEMA = {
    "type": "OBJECT",
    "properties": {
        "keyDescriptors": {**_STR_LIST, "description": "A list of 3-5 key descriptive words or phrases from the judge's notes."},
        "performanceSummary": {**_STR, "description": "A 2-3 sentence summary of the overall performance on the specified attribute."},
        "roasterRecommendations": {**_STR_LIST, "description": "A list of 2-3 actionable recommendations for a coffee roaster."},
    },
}

REPORT_SCHEMA = {
    "type": "OBJECT",
    "properties": {
        "title": _STR,
        "executiveSummary": _STR,
        "topPerformingCoffees": {
            "type": "ARRAY",
            "items": {
                "type": "OBJECT",
                "properties": {"lotId": _STR, "variety": _STR, "process": _STR, "score": _NUM, "tastingNotes": _STR},
                "required": ["lotId", "variety", "process", "score", "tastingNotes"],
            },
        },
        "varietyAnalysis": {
            "type": "OBJECT",
            "properties": {"topVariety": _STR, "averageScore": _NUM, "analysis": _STR},
            "required": ["topVariety", "averageScore", "analysis"],
        },
        "processingAnalysis": {
            "type": "OBJECT",
            "properties": {"topProcess": _STR, "averageScore": _NUM, "analysis": _STR},
            "required": ["topProcess", "averageScore", "analysis"],
        },
        "keyTrends": _STR_LIST,
        "recommendations": {
            "type": "OBJECT",
            "properties": {"forFarmers": _STR, "forProcessors": _STR, "forRoasters": _STR},
            "required": ["forFarmers", "forProcessors", "forRoasters"],
        },
    },
    "required": [
        "title", "executiveSummary", "topPerformingCoffees", "varietyAnalysis",
        "processingAnalysis", "keyTrends", "recommendations",
    ],
}

TRENDS_SCHEMA = {
    "type": "OBJECT",
    "properties": {
        "topPerformingVariety": {"type": "OBJECT", "properties": {"variety": _STR, "avgScore": _NUM}},
        "topPerformingProcess": {"type": "OBJECT", "properties": {"process": _STR, "avgScore": _NUM}},
        "notableCorrelations": _STR_LIST,
        "overallSummary": _STR,
    },
}

# ---------- canned answers (no API key) ----------

MOCK_SYNTHESIS = (
    "A mock synthesis of judge notes. The consensus points towards a complex cup with notes of "
    "bright citrus, tropical fruits, and a floral character. It has a silky body and elegant acidity, "
    "making it a well-balanced and satisfying coffee."
)


def _mock_quality_insight(attribute: str) -> dict:
    return {
        "keyDescriptors": ["Citrus", "Floral", "Bright", "Silky Body", "Honey"],
        "performanceSummary": (
            f"Mock Data: Samples generally performed well on {attribute}, with judges consistently "
            "highlighting positive characteristics. There is a clear distinction between higher-scoring "
            "lots, which showed more complexity, and lower-scoring ones."
        ),
        "roasterRecommendations": [
            "Consider sourcing more lots that exhibit 'floral' and 'citrus' notes, as these correlated with higher scores.",
            "For marketing, emphasize the 'silky body' and 'honey' sweetness, as these were common positive descriptors.",
            "Experiment with blending high-acidity lots with those noted for 'body' to create a more balanced final product.",
        ],
    }


MOCK_REPORT = {
    "title": "Mock Annual Coffee Quality Report 2025",
    "executiveSummary": (
        "This year was marked by the exceptional performance of the Gesha variety, particularly when processed "
        "using the Honey method. These coffees consistently achieved the highest scores due to their complexity, "
        "sweetness, and clean cup profiles. A key trend was the direct correlation between meticulous processing "
        "and high cupping scores, highlighting the importance of post-harvest techniques."
    ),
    "topPerformingCoffees": [
        {"lotId": "GBL001", "variety": "Gesha", "process": "Honey", "score": 90.50,
         "tastingNotes": "Remarkable complexity with layers of tropical fruit, jasmine, and a honey-sweet finish."},
        {"lotId": "GBL002", "variety": "Caturra", "process": "Washed", "score": 88.25,
         "tastingNotes": "A very clean and elegant coffee with notes of citrus, green apple, and a delicate floral quality."},
    ],
    "varietyAnalysis": {
        "topVariety": "Gesha",
        "averageScore": 90.50,
        "analysis": (
            "The Gesha variety continues to dominate the high end of the quality spectrum. Its inherent genetic "
            "potential for complex floral and fruit notes, when combined with skilled farming, results in scores "
            "that are consistently higher than other varieties in the dataset."
        ),
    },
    "processingAnalysis": {
        "topProcess": "Honey",
        "averageScore": 90.50,
        "analysis": (
            "The Honey process demonstrated its ability to produce exceptionally sweet and full-bodied coffees this "
            "year, leading to the highest average scores. This method appears to enhance the natural sweetness of "
            "the Gesha cherry, creating a highly desirable cup profile."
        ),
    },
    "keyTrends": [
        "Strong positive correlation between Gesha variety and scores above 90.",
        "Honey processed coffees are outperforming Washed and Natural methods in terms of overall score.",
        "High sweetness scores are a common denominator across all top-performing lots, indicating excellent cherry ripeness.",
    ],
    "recommendations": {
        "forFarmers": (
            "Consider planting more Gesha if the climate is suitable. Focus on achieving optimal cherry ripeness "
            "at harvest to maximize sweetness."
        ),
        "forProcessors": (
            "Refine and expand Honey processing techniques, as this method is currently yielding the highest "
            "quality and value. Maintain detailed drying logs to ensure consistency."
        ),
        "forRoasters": (
            "Prioritize sourcing Gesha and Honey processed lots for premium, high-margin offerings. Use the "
            "detailed tasting notes in marketing to attract discerning customers."
        ),
    },
}

MOCK_TRENDS = {
    "topPerformingVariety": {"variety": "Gesha", "avgScore": 89.25},
    "topPerformingProcess": {"process": "Honey", "avgScore": 89.25},
    "notableCorrelations": [
        "Gesha variety is strongly associated with high scores and complex floral notes.",
        "The Honey process appears to be yielding the highest quality results in this dataset.",
        "There is a consistent trend of high sweetness scores across top-performing lots.",
    ],
    "overallSummary": (
        "Mock Data: This year's data highlights the exceptional performance of the Gesha variety, particularly "
        "when combined with the Honey process. Roasters should prioritize these lots for premium offerings. The "
        "consistent high sweetness scores suggest excellent cherry ripeness and meticulous processing across the board."
    ),
}


def _first_green_lot_of(harvest_lot_id: str):
    for gbl in store["greenBeanLots"]:
        parchment = lineage.parchment_of(gbl)
        if parchment and parchment.harvestLotId == harvest_lot_id:
            return gbl
    return None


def _scored_lot_rows() -> List[dict]:
    """One row per green-bean lot that has any score (finalized or stored)."""
    rows = []
    for gbl in store["greenBeanLots"]:
        score, notes = lineage.lot_score(gbl)
        if not score:
            continue
        _, batch, harvest = lineage.origin_of(gbl)
        rows.append({
            "lotId": gbl.id,
            "score": score,
            "variety": harvest.cherryVariety if harvest else "Unknown",
            "process": batch.processType if batch else "Unknown",
            "notes": notes or "No final notes available.",
        })
    return rows


class InsightsService:

    # ---------- AI ----------

    @staticmethod
    def synthesize_cupping_notes(scores: List[JudgeScore]) -> str:
        notes_text = "\n".join(f"- {s.notes}" for s in scores)
        prompt = (
            "You are a professional coffee quality expert (Head Judge). Your task is to synthesize tasting notes "
            "from multiple judges into a single, cohesive, and elegant paragraph for a final cupping report. The "
            "tone should be professional and descriptive. Do not list the notes; weave them into a narrative.\n\n"
            f"Here are the notes from the judges:\n{notes_text}\n\n"
            "Synthesize these notes into a final summary:"
        )

        if not ai_client.is_configured():
            current_app.logger.warning("GEMINI_API_KEY not set; returning mock note synthesis")
            ai_client.mock_pause()
            return MOCK_SYNTHESIS

        try:
            return ai_client.generate_content(prompt, temperature=0.7, top_p=1, top_k=32)
        except AIServiceError as e:
            current_app.logger.error("Note synthesis failed: %s", e)
            return SYNTHESIS_ERROR

    @staticmethod
    def get_quality_insights(session: CuppingSession, attribute: str) -> dict:
        if attribute not in SCA_ATTRIBUTES:
            raise ValidationFailed(f"Unknown SCA attribute: {attribute}")

        lines = []
        for sample in session.samples:
            scores = session.scores.get(sample.id, [])
            notes = "; ".join(s.notes for s in scores)
            avg = sum(s.scores.get(attribute, 0) for s in scores) / (len(scores) or 1)
            lines.append(f'Sample {sample.blindCode} (Avg {attribute} Score: {avg:.2f}): Notes - "{notes}"')

        prompt = (
            f'As a coffee quality consultant, analyze the following cupping data for the attribute "{attribute}". '
            "Provide insights for a coffee roaster.\n\n"
            "Data:\n" + "\n".join(lines) + "\n\n"
            "Based on this data, provide:\n"
            "1.  A list of key descriptive words or phrases used by the judges.\n"
            "2.  A brief summary of the overall performance of the samples for this attribute.\n"
            "3.  A list of actionable recommendations for a roaster based on these findings "
            "(e.g., for sourcing, blending, or marketing).\n"
        )

        if not ai_client.is_configured():
            current_app.logger.warning("GEMINI_API_KEY not set; returning mock quality insights")
            ai_client.mock_pause()
            return _mock_quality_insight(attribute)

        try:
            data = ai_client.generate_json(prompt, QUALITY_INSIGHT_SCHEMA)
            return QualityInsight.model_validate(data).model_dump()
        except (AIServiceError, ValueError) as e:
            current_app.logger.error("Quality insights failed: %s", e)
            raise AIServiceError("Failed to generate AI-powered insights. Please try again.") from e

    @staticmethod
    def generate_comprehensive_report() -> dict:
        rows = _scored_lot_rows()
        if not rows:
            raise ValidationFailed("Not enough data to generate a report.")
        top = sorted(rows, key=lambda r: r["score"], reverse=True)[:REPORT_LOT_LIMIT]

        prompt = (
            "You are a world-class coffee industry analyst. Your task is to create a comprehensive annual quality "
            "report based on the provided dataset of cupped coffee lots. The report should be engaging, insightful, "
            "and professional, written in a clear and accessible tone for stakeholders like farmers, roasters, and "
            "processors.\n\n"
            f"Dataset:\n{json.dumps(top, indent=2)}\n\n"
            "Based on this data, generate a structured report in JSON format. Your analysis should be thorough and include:\n"
            '1. title: A compelling title for the report, like "Annual Coffee Quality Report 2025".\n'
            "2. executiveSummary: A concise, high-level overview of the year's key findings.\n"
            "3. topPerformingCoffees: A list of the top 3 performing lots. For each, include lotId, variety, "
            "process, score, and a one-sentence summary of its tasting notes based on the provided notes.\n"
            "4. varietyAnalysis: An analysis of the performance of different coffee varieties. Identify the "
            "top-performing variety, its average score, and a brief analysis of why it might be performing well.\n"
            "5. processingAnalysis: An analysis of processing methods. Identify the top-performing process, its "
            "average score, and a brief analysis of its impact on quality.\n"
            "6. keyTrends: A list of 2-3 bullet points highlighting significant trends or notable correlations "
            "observed in the data.\n"
            "7. recommendations: Actionable recommendations for key stakeholders:\n"
            "    - forFarmers: Advice on variety selection, agricultural practices, etc.\n"
            "    - forProcessors: Advice on processing methods to focus on.\n"
            "    - forRoasters: Advice on sourcing priorities and marketing angles."
        )

        if not ai_client.is_configured():
            current_app.logger.warning("GEMINI_API_KEY not set; returning mock quality report")
            ai_client.mock_pause()
            return copy.deepcopy(MOCK_REPORT)

        try:
            data = ai_client.generate_json(prompt, REPORT_SCHEMA)
            return ComprehensiveQualityReport.model_validate(data).model_dump()
        except (AIServiceError, ValueError) as e:
            current_app.logger.error("Comprehensive report failed: %s", e)
            raise AIServiceError("Failed to generate AI-powered comprehensive report. Please try again.") from e

    @staticmethod
    def get_platform_trends() -> dict:
        rows = [
            {"score": f"{r['score']:.2f}", "variety": r["variety"], "process": r["process"], "notes": r["notes"]}
            for r in _scored_lot_rows()
        ]
        if not rows:
            raise ValidationFailed("Not enough data to perform trend analysis.")

        prompt = (
            "You are a world-class coffee quality data scientist. Analyze the following dataset from a specialty "
            "coffee platform. Each entry represents a distinct coffee lot with its cupping score and characteristics.\n\n"
            f"Dataset:\n{json.dumps(rows, indent=2)}\n\n"
            "Based on this data, provide a structured analysis in JSON format. Your analysis should include:\n"
            "1.  topPerformingVariety: Identify the cherry variety with the highest average score. Include the "
            "variety name and its average score.\n"
            "2.  topPerformingProcess: Identify the processing method with the highest average score. Include the "
            "process name and its average score.\n"
            "3.  notableCorrelations: List 2-3 interesting correlations or observations.\n"
            "4.  overallSummary: Provide a brief, insightful summary for platform stakeholders (like roasters or "
            "processors) about the key quality trends this year."
        )

        if not ai_client.is_configured():
            current_app.logger.warning("GEMINI_API_KEY not set; returning mock platform trends")
            ai_client.mock_pause()
            return copy.deepcopy(MOCK_TRENDS)

        try:
            data = ai_client.generate_json(prompt, TRENDS_SCHEMA)
            return PlatformInsight.model_validate(data).model_dump()
        except (AIServiceError, ValueError) as e:
            current_app.logger.error("Platform trends failed: %s", e)
            raise AIServiceError("Failed to generate AI-powered platform trends. Please try again.") from e

    # ---------- charts ----------

    @staticmethod
    def process_comparison() -> List[dict]:
        """Average finalized score per process type."""
        buckets: Dict[str, List[float]] = defaultdict(list)
        for gbl in store["greenBeanLots"]:
            parchment = lineage.parchment_of(gbl)
            result = lineage.final_result(gbl)
            if parchment and parchment.processType and result and result.totalScore:
                buckets[parchment.processType].append(result.totalScore)
        return [
            {"name": process, "averageScore": round(sum(scores) / len(scores), 2)}
            for process, scores in buckets.items()
        ]

    @staticmethod
    def farmer_names() -> List[str]:
        return list(dict.fromkeys(f.farmerName for f in store["farms"]))

    @staticmethod
    def farm_performance(farmer_name: str) -> List[dict]:
        """Finalized score of each harvest lot of a farmer, by harvest date."""
        points = []
        for hl in store.where("harvestLots", lambda h: h.farmerName == farmer_name):
            gbl = _first_green_lot_of(hl.id)
            result = lineage.final_result(gbl) if gbl else None
            if result is not None:
                points.append({"name": hl.harvestDate.isoformat(), "score": result.totalScore})
        return sorted(points, key=lambda p: p["name"])

    @staticmethod
    def drying_lots() -> List[dict]:
        lots = []
        for pl in store["parchmentLots"]:
            batch = lineage.batch_of(pl)
            if batch and batch.dryingLog:
                lots.append({"id": pl.id, "processType": pl.processType, "processingBatchId": batch.id})
        return lots

    @staticmethod
    def drying_chart(parchment_lot_id: str) -> Optional[List[dict]]:
        parchment = store.require("parchmentLots", parchment_lot_id)
        batch = lineage.batch_of(parchment)
        if not batch or not batch.dryingLog:
            return None
        return [entry.model_dump(mode="json") for entry in batch.dryingLog]
