"""Post-commit hooks published by the settlement engine."""

from __future__ import annotations

from typing import Protocol

from .models import AccountBalance, BankDestination, TransactionRecord


class SettlementEvents(Protocol):
    async def balance_changed(self, account_id: str, balance: AccountBalance) -> None:
        ...

    async def transaction_changed(self, transaction: TransactionRecord) -> None:
        ...

    async def bank_destination_changed(self, destination: BankDestination) -> None:
        ...
