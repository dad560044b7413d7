"""Translation of domain errors into HTTP errors."""

from fastapi import HTTPException, status

from paygig.modules.accounts.exceptions import AccountAlreadyExistsError, AccountError, AccountNotFoundError
from paygig.modules.settlement.exceptions import (
    InsufficientFundsError,
    NotFoundError,
    SettlementDomainError,
    SettlementError,
    ValidationError,
)


def to_http_error(exc: SettlementDomainError | AccountError) -> HTTPException:
    if isinstance(exc, InsufficientFundsError):
        return HTTPException(
            status_code=status.HTTP_402_PAYMENT_REQUIRED,
            detail={"message": str(exc), "shortfall": exc.shortfall},
        )
    if isinstance(exc, ValidationError):
        return HTTPException(status_code=status.HTTP_422_UNPROCESSABLE_ENTITY, detail=str(exc))
    if isinstance(exc, (NotFoundError, AccountNotFoundError)):
        return HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=str(exc) or "Not found")
    if isinstance(exc, SettlementError):
        return HTTPException(status_code=status.HTTP_409_CONFLICT, detail=str(exc))
    if isinstance(exc, AccountAlreadyExistsError):
        return HTTPException(status_code=status.HTTP_409_CONFLICT, detail=str(exc))
    return HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(exc))


__all__ = ["to_http_error"]
