"""Deposit approval and balance settlement."""

from .events import SettlementEvents
from .exceptions import (
    AlreadyResolvedError,
    InsufficientFundsError,
    LedgerWriteError,
    NotFoundError,
    SettlementDomainError,
    SettlementError,
    ValidationError,
)
from .models import (
    AccountBalance,
    AccountSnapshot,
    BankDestination,
    DepositAddress,
    LegacyDepositRef,
    PurchaseResult,
    SettlementOutcome,
    TransactionFilter,
    TransactionKind,
    TransactionRecord,
    TransactionRef,
    TransactionStatus,
)
from .repository import LedgerStore

__all__ = [
    "AccountBalance",
    "AccountSnapshot",
    "AlreadyResolvedError",
    "BankDestination",
    "DepositAddress",
    "InsufficientFundsError",
    "LedgerStore",
    "LedgerWriteError",
    "LegacyDepositRef",
    "NotFoundError",
    "PurchaseResult",
    "SettlementDomainError",
    "SettlementError",
    "SettlementEvents",
    "SettlementOutcome",
    "TransactionFilter",
    "TransactionKind",
    "TransactionRecord",
    "TransactionRef",
    "TransactionStatus",
    "ValidationError",
]
