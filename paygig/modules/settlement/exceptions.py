"""Settlement domain specific exceptions."""

from __future__ import annotations

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from .models import TransactionRecord


class SettlementDomainError(Exception):
    """Base class for settlement related domain errors."""


class ValidationError(SettlementDomainError):
    """Raised for malformed input; nothing has been written."""


class InsufficientFundsError(SettlementDomainError):
    """Raised when the spendable balance does not cover a purchase."""

    def __init__(self, shortfall: int, message: str | None = None) -> None:
        self.shortfall = shortfall
        super().__init__(message or f"Insufficient balance, {shortfall} more needed")


class AlreadyResolvedError(SettlementDomainError):
    """Raised when a deposit has already left the pending state."""

    def __init__(self, transaction: "TransactionRecord") -> None:
        self.transaction = transaction
        super().__init__(f"Transaction {transaction.id} already {transaction.status.value}")


class NotFoundError(SettlementDomainError):
    """Raised when the requested transaction or account cannot be found."""


class SettlementError(SettlementDomainError):
    """Raised when a conditional write lost its race or the store failed.

    Callers retry the whole operation from a fresh read.
    """


class LedgerWriteError(SettlementDomainError):
    """Raised by the ledger store when a write violates a store constraint."""
