"""Domain models for the settlement engine."""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from enum import Enum
from typing import Optional


class TransactionKind(str, Enum):
    DEPOSIT = "deposit"
    PURCHASE = "purchase"


class TransactionStatus(str, Enum):
    PENDING = "pending"
    SUCCESS = "success"
    FAILED = "failed"

    @property
    def is_terminal(self) -> bool:
        return self is not TransactionStatus.PENDING


@dataclass(slots=True, frozen=True)
class AccountBalance:
    """Both spendable pools of an account, compared as one value."""

    balance: int
    bonus_balance: int


@dataclass(slots=True)
class AccountSnapshot:
    id: str
    email: Optional[str]
    balance: int
    bonus_balance: int
    updated_at: Optional[datetime] = None

    @property
    def balances(self) -> AccountBalance:
        return AccountBalance(balance=self.balance, bonus_balance=self.bonus_balance)


@dataclass(slots=True)
class TransactionRecord:
    id: str
    account_id: str
    kind: TransactionKind
    amount: int
    status: TransactionStatus
    voucher_code: Optional[str]
    description: Optional[str]
    created_at: datetime
    plan_id: Optional[str] = None
    resolved_at: Optional[datetime] = None


@dataclass(slots=True, frozen=True)
class TransactionFilter:
    status: Optional[TransactionStatus] = None
    kind: Optional[TransactionKind] = None
    account_id: Optional[str] = None


@dataclass(slots=True, frozen=True)
class TransactionRef:
    """Callback address naming a transaction directly by id."""

    transaction_id: str


@dataclass(slots=True, frozen=True)
class LegacyDepositRef:
    """Callback address from older notifications: the newest pending deposit
    of ``account_id`` for exactly ``amount``."""

    account_id: str
    amount: int


DepositAddress = TransactionRef | LegacyDepositRef


@dataclass(slots=True)
class SettlementOutcome:
    transaction: TransactionRecord
    applied: bool
    balance: Optional[AccountBalance] = None

    @property
    def already_resolved(self) -> bool:
        return not self.applied


@dataclass(slots=True)
class PurchaseResult:
    transaction: TransactionRecord
    voucher_code: str
    balance: AccountBalance
    bonus_used: int
    balance_used: int


@dataclass(slots=True, frozen=True)
class BankDestination:
    bank_name: str
    account_number: str
    account_name: str
