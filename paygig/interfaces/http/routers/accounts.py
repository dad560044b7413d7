"""Profile registration and login tracking."""
from fastapi import APIRouter, Depends, status

from paygig.core.security import get_current_identity
from paygig.interfaces.http.deps import get_account_service
from paygig.interfaces.http.errors import to_http_error
from paygig.modules.accounts import AccountError, RegistrationInput
from paygig.modules.accounts.service import AccountService
from paygig.schemas import AccountResponse, Identity, RegisterRequest

router = APIRouter()


@router.post(
    "/register",
    response_model=AccountResponse,
    status_code=status.HTTP_201_CREATED,
    summary="Create the wallet profile for the signed-in identity",
)
async def register_account(
    payload: RegisterRequest,
    identity: Identity = Depends(get_current_identity),
    service: AccountService = Depends(get_account_service),
) -> AccountResponse:
    try:
        account = await service.register(
            RegistrationInput(
                account_id=identity.subject,
                email=payload.email,
                phone=payload.phone,
                referral_code=payload.referral_code,
            )
        )
    except AccountError as exc:
        raise to_http_error(exc) from exc
    return AccountResponse.model_validate(account)


@router.post("/logins", response_model=AccountResponse, summary="Record a login")
async def record_login(
    identity: Identity = Depends(get_current_identity),
    service: AccountService = Depends(get_account_service),
) -> AccountResponse:
    try:
        account = await service.record_login(identity.subject)
    except AccountError as exc:
        raise to_http_error(exc) from exc
    return AccountResponse.model_validate(account)
