# beantrace/services/farmer/data_hub_service.py
import csv
import io
from typing import List

from beantrace.errors import ValidationFailed
from beantrace.models.farmer.harvest_models import HarvestLot
from beantrace.store import store

CSV_HEADERS = ["Lot ID", "Farmer", "Variety", "Weight (kg)", "Harvest Date", "Location", "Status"]
EXPORT_FILENAME = "harvest_data_export.csv"


def _weight(value: float) -> str:
    return str(int(value)) if float(value).is_integer() else str(value)


class DataHubService:

    @staticmethod
    def filter_options() -> dict:
        lots = store["harvestLots"]
        years = sorted({l.harvestDate.year for l in lots}, reverse=True)
        plots = sorted({l.farmPlotLocation for l in lots})
        return {
            "years": ["All"] + [str(y) for y in years],
            "plots": ["All"] + plots,
        }

    @staticmethod
    def filter_lots(year: str = "All", plot: str = "All") -> List[HarvestLot]:
        rows = []
        for lot in store["harvestLots"]:
            if year != "All" and str(lot.harvestDate.year) != str(year):
                continue
            if plot != "All" and lot.farmPlotLocation != plot:
                continue
            rows.append(lot)
        return rows

    @staticmethod
    def export_csv(year: str = "All", plot: str = "All") -> str:
        lots = DataHubService.filter_lots(year, plot)
        if not lots:
            raise ValidationFailed("No data to export.")

        buf = io.StringIO()
        writer = csv.writer(buf, lineterminator="\n")
        writer.writerow(CSV_HEADERS)
        for lot in lots:
            writer.writerow([
                lot.id,
                lot.farmerName,
                lot.cherryVariety,
                _weight(lot.weightKg),
                lot.harvestDate.isoformat(),
                lot.farmPlotLocation,
                lot.status.value,
            ])
        return buf.getvalue()
