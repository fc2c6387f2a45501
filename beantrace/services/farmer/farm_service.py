# beantrace/services/farmer/farm_service.py
from typing import List

from beantrace.models.farmer.farm_models import Farm, FarmCreateModel
from beantrace.store import store


class FarmService:

    @staticmethod
    def list_farms() -> List[Farm]:
        return list(store["farms"])

    @staticmethod
    def create_farm(payload: FarmCreateModel) -> Farm:
        with store.lock:
            farm = Farm(
                id=store.next_id("farms", "F"),
                farmerName=payload.farmerName,
                location=payload.location,
            )
            store["farms"].insert(0, farm)
        return farm

    @staticmethod
    def plot_locations() -> List[str]:
        return sorted({f.location for f in store["farms"]})
