# beantrace/models/traceability/traceability_models.py
from dataclasses import dataclass, asdict, field
from typing import Any, Dict, List, Optional, Union


@dataclass
class HubRow:
    id: str = ""
    grade: str = ""
    variety: str = "N/A"
    processType: str = "N/A"
    currentWeightKg: float = 0.0
    availabilityStatus: str = ""
    finalScore: Union[float, str] = "N/A"   # 2 dp, or "N/A"

    def to_dict(self) -> Dict[str, Any]:
        return asdict(self)


@dataclass
class OriginBlock:
    farmerName: str = "N/A"
    cherryVariety: str = "N/A"
    farmPlotLocation: str = "N/A"
    harvestDate: str = "N/A"


@dataclass
class ProcessingBlock:
    processType: str = "N/A"
    dryingDuration: str = "N/A"     # "12 Days"
    avgTemp: str = "N/A"            # "24°C"
    avgHumidity: str = "N/A"        # "65%"
    moistureContent: str = "N/A"    # "11.5%"


@dataclass
class CuppingBlock:
    score: Optional[float] = None
    notes: str = ""
    sessionName: str = ""
    chartData: List[Dict[str, Any]] = field(default_factory=list)


@dataclass
class RoastRow:
    id: str = ""
    roastDate: str = ""
    batchSizeKg: float = 0.0
    yieldPercentage: float = 0.0
    roastProfileNotes: str = ""
    flavorNotes: str = ""


@dataclass
class TraceabilityViewModel:
    lotId: str = ""
    grade: str = ""
    origin: OriginBlock = field(default_factory=OriginBlock)
    processing: ProcessingBlock = field(default_factory=ProcessingBlock)
    physicalTest: Optional[Dict[str, Any]] = None
    cupping: Optional[CuppingBlock] = None
    roasts: List[RoastRow] = field(default_factory=list)
    roasterName: Optional[str] = None
    flavorNotes: List[str] = field(default_factory=list)

    def to_dict(self) -> Dict[str, Any]:
        return asdict(self)
