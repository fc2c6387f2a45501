# beantrace/store.py
from __future__ import annotations

import re
import threading
from typing import Callable, Dict, List, Optional

from beantrace.errors import NotFound
from beantrace.models.auth.user_models import LoginAccount, User
from beantrace.models.cupping.session_models import CuppingSession
from beantrace.models.farmer.farm_models import Farm
from beantrace.models.farmer.gap_models import GAPLogEntry
from beantrace.models.farmer.harvest_models import HarvestLot
from beantrace.models.processor.green_bean_models import GreenBeanLot
from beantrace.models.processor.parchment_models import ParchmentLot
from beantrace.models.processor.processing_models import ProcessingBatch
from beantrace.models.roaster.roaster_models import RoastBatch, RoasterInventoryItem

# collection name -> entity model
COLLECTIONS = {
    "users": User,
    "farms": Farm,
    "harvestLots": HarvestLot,
    "processingBatches": ProcessingBatch,
    "parchmentLots": ParchmentLot,
    "greenBeanLots": GreenBeanLot,
    "cuppingSessions": CuppingSession,
    "gapLogs": GAPLogEntry,
    "roasterInventory": RoasterInventoryItem,
    "roastBatches": RoastBatch,
}

LABELS = {
    "users": "User",
    "farms": "Farm",
    "harvestLots": "Harvest lot",
    "processingBatches": "Processing batch",
    "parchmentLots": "Parchment lot",
    "greenBeanLots": "Green bean lot",
    "cuppingSessions": "Cupping session",
    "gapLogs": "GAP log entry",
    "roasterInventory": "Inventory item",
    "roastBatches": "Roast batch",
}


class DataStore:
    """
    Process-local application data. Every mutation happens while holding
    `lock`; readers that need a consistent view across collections take it too.
    """

    def __init__(self):
        self.lock = threading.RLock()
        self.collections: Dict[str, list] = {name: [] for name in COLLECTIONS}
        self.accounts: List[LoginAccount] = []

    def __getitem__(self, name: str) -> list:
        return self.collections[name]

    def reset(self):
        with self.lock:
            self.collections = {name: [] for name in COLLECTIONS}
            self.accounts = []

    def load(self, data: dict):
        with self.lock:
            for name, model in COLLECTIONS.items():
                self.collections[name] = [model.model_validate(row) for row in data.get(name, [])]

    # ---------- lookups ----------

    def find(self, name: str, item_id: Optional[str]):
        if not item_id:
            return None
        return next((item for item in self.collections[name] if item.id == item_id), None)

    def require(self, name: str, item_id: Optional[str]):
        item = self.find(name, item_id)
        if item is None:
            raise NotFound(f"{LABELS[name]} {item_id} not found")
        return item

    def where(self, name: str, predicate: Callable) -> list:
        return [item for item in self.collections[name] if predicate(item)]

    def remove_where(self, name: str, predicate: Callable) -> list:
        with self.lock:
            removed = [item for item in self.collections[name] if predicate(item)]
            self.collections[name] = [item for item in self.collections[name] if not predicate(item)]
            return removed

    def next_id(self, name: str, prefix: str, width: int = 3) -> str:
        """`prefix` + (highest numeric suffix in use + 1), zero padded."""
        pattern = re.compile(rf"^{re.escape(prefix)}(\d+)$")
        highest = 0
        for item in self.collections[name]:
            m = pattern.match(item.id)
            if m:
                highest = max(highest, int(m.group(1)))
        return f"{prefix}{highest + 1:0{width}d}"

    # ---------- accounts ----------

    def account_by_email(self, email: str) -> Optional[LoginAccount]:
        email = (email or "").strip().lower()
        return next((a for a in self.accounts if a.email == email), None)

    def account_by_id(self, user_id: str) -> Optional[LoginAccount]:
        return next((a for a in self.accounts if a.id == user_id), None)

    def snapshot(self) -> dict:
        with self.lock:
            return {
                name: [item.model_dump(mode="json") for item in items]
                for name, items in self.collections.items()
            }


store = DataStore()


def init_store(app):
    """
    Reset the store, load the demo data set when SEED_DEMO_DATA is on, and
    register the built-in sign-in accounts. Call during create_app, after
    init_security.
    """
    from beantrace.seed_data import DEMO_DATA, LOGIN_ACCOUNTS
    from beantrace.security import bcrypt

    store.reset()
    if app.config.get("SEED_DEMO_DATA", True):
        store.load(DEMO_DATA)

    with store.lock:
        for acct in LOGIN_ACCOUNTS:
            store.accounts.append(LoginAccount(
                id=acct["id"],
                name=acct["name"],
                email=acct["email"],
                role=acct["role"],
                passwordHash=bcrypt.generate_password_hash(acct["password"]).decode("utf-8"),
            ))

    app.logger.info(
        "Store initialised: %s",
        ", ".join(f"{name}={len(items)}" for name, items in store.collections.items()),
    )
    return store
