"""Customer wallet endpoints: balance, history, deposits and purchases."""
from fastapi import APIRouter, Depends, HTTPException, Query, status

from paygig.core.config import get_settings
from paygig.core.security import get_current_identity
from paygig.interfaces.http.deps import get_settlement_service
from paygig.interfaces.http.errors import to_http_error
from paygig.modules.catalog import get_plan
from paygig.modules.settlement import SettlementDomainError
from paygig.modules.settlement.service import SettlementService
from paygig.schemas import (
    DepositRequest,
    Identity,
    PurchaseRequest,
    PurchaseResponse,
    TransactionListResponse,
    TransactionResponse,
    WalletResponse,
)

router = APIRouter()


@router.get("", response_model=WalletResponse, summary="Current balances")
async def get_wallet(
    identity: Identity = Depends(get_current_identity),
    service: SettlementService = Depends(get_settlement_service),
) -> WalletResponse:
    try:
        balance = await service.get_balance(identity.subject)
    except SettlementDomainError as exc:
        raise to_http_error(exc) from exc
    return WalletResponse(
        balance=balance.balance,
        bonus_balance=balance.bonus_balance,
        currency=get_settings().wallet.currency,
    )


@router.get("/transactions", response_model=TransactionListResponse, summary="Transaction history")
async def list_wallet_transactions(
    limit: int = Query(20, ge=1, le=100),
    offset: int = Query(0, ge=0),
    identity: Identity = Depends(get_current_identity),
    service: SettlementService = Depends(get_settlement_service),
) -> TransactionListResponse:
    records = await service.list_account_transactions(identity.subject, limit, offset)
    return TransactionListResponse(
        transactions=[TransactionResponse.model_validate(record) for record in records]
    )


@router.post(
    "/deposits",
    response_model=TransactionResponse,
    status_code=status.HTTP_201_CREATED,
    summary="Report a bank transfer for approval",
)
async def request_deposit(
    payload: DepositRequest,
    identity: Identity = Depends(get_current_identity),
    service: SettlementService = Depends(get_settlement_service),
) -> TransactionResponse:
    try:
        record = await service.request_deposit(identity.subject, payload.amount, email=identity.email)
    except SettlementDomainError as exc:
        raise to_http_error(exc) from exc
    return TransactionResponse.model_validate(record)


@router.post(
    "/purchases",
    response_model=PurchaseResponse,
    status_code=status.HTTP_201_CREATED,
    summary="Buy a data plan and receive a voucher",
)
async def purchase_plan(
    payload: PurchaseRequest,
    identity: Identity = Depends(get_current_identity),
    service: SettlementService = Depends(get_settlement_service),
) -> PurchaseResponse:
    plan = get_plan(payload.plan_id)
    if plan is None:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=f"Unknown plan {payload.plan_id}")
    try:
        current = await service.get_balance(identity.subject)
        result = await service.execute_purchase(identity.subject, plan, current.balance, current.bonus_balance)
    except SettlementDomainError as exc:
        raise to_http_error(exc) from exc
    return PurchaseResponse(
        transaction=TransactionResponse.model_validate(result.transaction),
        voucher_code=result.voucher_code,
        balance=result.balance.balance,
        bonus_balance=result.balance.bonus_balance,
    )
