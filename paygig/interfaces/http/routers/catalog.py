"""Public catalog and bank-destination endpoints."""
from typing import Optional

from fastapi import APIRouter, Depends

from paygig.interfaces.http.deps import get_settlement_service
from paygig.modules.catalog import list_plans
from paygig.modules.settlement.service import SettlementService
from paygig.schemas import BankDestinationResponse, PlanListResponse, PlanResponse

router = APIRouter()


@router.get("/plans", response_model=PlanListResponse, summary="Data plans on sale")
async def get_plans() -> PlanListResponse:
    return PlanListResponse(plans=[PlanResponse.model_validate(plan) for plan in list_plans()])


@router.get(
    "/bank-destination",
    response_model=Optional[BankDestinationResponse],
    summary="Account that deposits should be transferred to",
)
async def get_bank_destination(
    service: SettlementService = Depends(get_settlement_service),
) -> Optional[BankDestinationResponse]:
    destination = await service.get_bank_destination()
    if destination is None:
        return None
    return BankDestinationResponse.model_validate(destination)
