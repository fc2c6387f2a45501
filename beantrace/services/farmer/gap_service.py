# beantrace/services/farmer/gap_service.py
from typing import Dict, List, Optional

from beantrace.errors import ValidationFailed
from beantrace.models.farmer.gap_models import GAPActivityType, GAPLogCreateModel, GAPLogEntry
from beantrace.store import store


class GAPService:

    @staticmethod
    def log_activity(payload: GAPLogCreateModel) -> GAPLogEntry:
        with store.lock:
            if not any(f.location == payload.farmPlotLocation for f in store["farms"]):
                raise ValidationFailed(f"Unknown farm plot: {payload.farmPlotLocation}")
            entry = GAPLogEntry(
                id=store.next_id("gapLogs", "GAP"),
                **payload.model_dump(),
            )
            store["gapLogs"].insert(0, entry)
        return entry

    @staticmethod
    def list_logs(plot: str = "All", activity: str = "All") -> List[GAPLogEntry]:
        if activity != "All" and activity not in {a.value for a in GAPActivityType}:
            raise ValidationFailed(f"Unknown activity type: {activity}")
        return [
            e for e in store["gapLogs"]
            if (plot == "All" or e.farmPlotLocation == plot)
            and (activity == "All" or e.activityType.value == activity)
        ]

    @staticmethod
    def compliance_report(plot: Optional[str] = None) -> Dict[str, Dict[str, List[dict]]]:
        """plot -> activity type -> entries (oldest first)."""
        report: Dict[str, Dict[str, List[dict]]] = {}
        entries = sorted(store["gapLogs"], key=lambda e: e.date)
        for e in entries:
            if plot and plot != "All" and e.farmPlotLocation != plot:
                continue
            by_activity = report.setdefault(e.farmPlotLocation, {})
            by_activity.setdefault(e.activityType.value, []).append(e.model_dump(mode="json"))
        return dict(sorted(report.items()))
