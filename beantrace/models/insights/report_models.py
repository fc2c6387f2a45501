# beantrace/models/insights/report_models.py
"""
Shapes of the structured AI responses. Responses are validated against
these before they reach a client.
"""
from typing import List

from pydantic import BaseModel, Field


class QualityInsight(BaseModel):
    keyDescriptors: List[str] = Field(default_factory=list)
    performanceSummary: str = ""
    roasterRecommendations: List[str] = Field(default_factory=list)


class TopCoffee(BaseModel):
    lotId: str
    variety: str
    process: str
    score: float
    tastingNotes: str


class VarietyAnalysis(BaseModel):
    topVariety: str
    averageScore: float
    analysis: str


class ProcessingAnalysis(BaseModel):
    topProcess: str
    averageScore: float
    analysis: str


class Recommendations(BaseModel):
    forFarmers: str
    forProcessors: str
    forRoasters: str


class ComprehensiveQualityReport(BaseModel):
    title: str
    executiveSummary: str
    topPerformingCoffees: List[TopCoffee]
    varietyAnalysis: VarietyAnalysis
    processingAnalysis: ProcessingAnalysis
    keyTrends: List[str]
    recommendations: Recommendations


class TopVariety(BaseModel):
    variety: str = ""
    avgScore: float = 0


class TopProcess(BaseModel):
    process: str = ""
    avgScore: float = 0


class PlatformInsight(BaseModel):
    topPerformingVariety: TopVariety = Field(default_factory=TopVariety)
    topPerformingProcess: TopProcess = Field(default_factory=TopProcess)
    notableCorrelations: List[str] = Field(default_factory=list)
    overallSummary: str = ""


class InsightRequestModel(BaseModel):
    sessionId: str
    attribute: str
