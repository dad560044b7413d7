"""Static data-plan catalog."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Optional


@dataclass(slots=True, frozen=True)
class DataPlan:
    id: str
    name: str
    data: str
    price: int
    validity: str
    badge: Optional[str] = None
    bonus_eligible: bool = False

    @property
    def description(self) -> str:
        return f"{self.name} ({self.data}) - {self.validity}"


DATA_PLANS: tuple[DataPlan, ...] = (
    DataPlan("sme-starter", "SME Starter", "50GB", 7500, "30 Days", badge="Try Me", bonus_eligible=True),
    DataPlan("streamer", "Streamer", "100GB", 14900, "30 Days", bonus_eligible=True),
    DataPlan("professional", "Professional", "200GB", 24900, "6 Months"),
    DataPlan("office-hub", "Office Hub", "400GB", 34500, "6 Months", badge="🔥 Most Popular"),
    DataPlan("mega-tera", "Mega Tera", "1TB", 64500, "6 Months", badge="Best Value"),
)

_PLANS_BY_ID = {plan.id: plan for plan in DATA_PLANS}


def list_plans() -> list[DataPlan]:
    return list(DATA_PLANS)


def get_plan(plan_id: str) -> DataPlan | None:
    return _PLANS_BY_ID.get(plan_id)
