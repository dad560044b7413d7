"""Pydantic schemas used across the project."""
from datetime import datetime
from typing import Any, Literal, Optional

from pydantic import BaseModel, ConfigDict, Field

from paygig.modules.settlement.models import TransactionKind, TransactionStatus


class Identity(BaseModel):
    """Claims taken from an identity-provider access token."""

    subject: str
    email: Optional[str] = None


class RegisterRequest(BaseModel):
    email: str = Field(..., min_length=3, max_length=255)
    phone: Optional[str] = Field(default=None, max_length=32)
    referral_code: Optional[str] = Field(default=None, max_length=16)


class AccountResponse(BaseModel):
    id: str
    email: Optional[str] = None
    phone: Optional[str] = None
    referral_code: str
    referred_by: Optional[str] = None
    balance: int
    bonus_balance: int
    created_at: Optional[datetime] = None

    model_config = ConfigDict(from_attributes=True)


class WalletResponse(BaseModel):
    balance: int
    bonus_balance: int
    currency: str


class TransactionResponse(BaseModel):
    id: str
    account_id: str
    kind: TransactionKind
    amount: int
    status: TransactionStatus
    voucher_code: Optional[str] = None
    description: Optional[str] = None
    plan_id: Optional[str] = None
    created_at: datetime
    resolved_at: Optional[datetime] = None

    model_config = ConfigDict(from_attributes=True)


class TransactionListResponse(BaseModel):
    transactions: list[TransactionResponse]


class DepositRequest(BaseModel):
    amount: int = Field(..., gt=0, description="Whole naira")


class PurchaseRequest(BaseModel):
    plan_id: str = Field(..., min_length=1, max_length=50)


class PurchaseResponse(BaseModel):
    transaction: TransactionResponse
    voucher_code: str
    balance: int
    bonus_balance: int


class PlanResponse(BaseModel):
    id: str
    name: str
    data: str
    price: int
    validity: str
    badge: Optional[str] = None
    bonus_eligible: bool

    model_config = ConfigDict(from_attributes=True)


class PlanListResponse(BaseModel):
    plans: list[PlanResponse]


class BankDestinationResponse(BaseModel):
    bank_name: str
    account_number: str
    account_name: str

    model_config = ConfigDict(from_attributes=True)


class WalletFeedMessage(BaseModel):
    """Envelope pushed over the wallet feed."""

    type: Literal["balance", "transaction", "bank_destination"]
    data: Optional[dict[str, Any]] = None
