# beantrace/services/dashboard_service.py
from typing import Dict, List, Optional

from beantrace.models.auth.user_models import UserRole
from beantrace.models.cupping.session_models import SessionStatus, SessionType
from beantrace.models.processor.processing_models import ProcessingBatchStatus
from beantrace.store import store

R = UserRole

# (name, href, roles); None href = resolved per user
NAV_ITEMS = [
    ("Dashboard", "/dashboard", (R.FARMER, R.PROCESSOR, R.ROASTER, R.ADMIN, R.HEAD_JUDGE)),
    ("Farmer Dashboard", "/farmer-dashboard", (R.FARMER, R.ADMIN)),
    ("Data Hub", "/farmer-data-hub", (R.FARMER, R.ADMIN)),
    ("GAP Helper", "/gap-compliance", (R.FARMER, R.ADMIN)),
    ("Processor Workbench", "/processor", (R.PROCESSOR, R.ADMIN)),
    ("Cupping Lab", "/cupping", (R.PROCESSOR, R.ROASTER, R.HEAD_JUDGE, R.ADMIN)),
    ("Scoring Sheet", "/scoring", (R.CUPPER, R.ADMIN)),
    ("Competition Admin", None, (R.HEAD_JUDGE, R.CUPPER, R.ADMIN)),
    ("Quality Insights", "/insights", (R.ROASTER, R.PROCESSOR, R.ADMIN)),
    ("Roaster Workbench", "/roaster", (R.ROASTER, R.ADMIN)),
    ("Traceability Hub", "/traceability", (R.ADMIN, R.PROCESSOR)),
    ("User Management", "/users", (R.ADMIN,)),
]

ACTIVE_STATUSES = (SessionStatus.SCORING, SessionStatus.ADJUDICATION)


class DashboardService:

    @staticmethod
    def stats() -> Dict[str, int]:
        return {
            "activeHarvestLots": len(store["harvestLots"]),
            "batchesInProcessing": sum(
                1 for b in store["processingBatches"] if b.status != ProcessingBatchStatus.COMPLETED
            ),
            "cuppingSessions": len(store["cuppingSessions"]),
        }

    @staticmethod
    def competition_href(user_id: Optional[str]) -> str:
        """
        The judge's active competition, else the most recent one they judge,
        else the cupping hub. Without a user: the first competition.
        """
        competitions = [s for s in store["cuppingSessions"] if s.type == SessionType.COMPETITION]
        if not user_id:
            return f"/competition/{competitions[0].id}" if competitions else "/cupping"

        mine = [s for s in competitions if s.has_judge(user_id)]
        active = next((s for s in mine if s.status in ACTIVE_STATUSES), None)
        if active:
            return f"/competition/{active.id}"
        if mine:
            latest = sorted(mine, key=lambda s: s.date, reverse=True)[0]
            return f"/competition/{latest.id}"
        return "/cupping"

    @staticmethod
    def nav_items(role: str, user_id: Optional[str]) -> List[Dict[str, str]]:
        items = []
        for name, href, roles in NAV_ITEMS:
            if role not in {r.value for r in roles}:
                continue
            items.append({"name": name, "href": href or DashboardService.competition_href(user_id)})
        return items
