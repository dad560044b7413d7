"""Repository protocol for the ledger store."""

from __future__ import annotations

from typing import Protocol, Sequence

from .models import (
    AccountBalance,
    AccountSnapshot,
    BankDestination,
    TransactionFilter,
    TransactionKind,
    TransactionRecord,
    TransactionStatus,
)


class LedgerStore(Protocol):
    async def get_account(self, account_id: str) -> AccountSnapshot | None:
        ...

    async def conditional_update_account(
        self,
        account_id: str,
        expected: AccountBalance,
        new: AccountBalance,
    ) -> bool:
        """Write ``new`` only if the stored balances still equal ``expected``."""
        ...

    async def create_transaction(
        self,
        *,
        account_id: str,
        kind: TransactionKind,
        amount: int,
        status: TransactionStatus,
        description: str | None,
        voucher_code: str | None = None,
        plan_id: str | None = None,
    ) -> TransactionRecord:
        ...

    async def conditional_update_transaction_status(
        self,
        transaction_id: str,
        expected: TransactionStatus,
        new: TransactionStatus,
    ) -> bool:
        """Flip the status only if it is still ``expected``; False means already resolved."""
        ...

    async def get_transaction(self, transaction_id: str) -> TransactionRecord | None:
        ...

    async def find_latest_pending_deposit(self, account_id: str, amount: int) -> TransactionRecord | None:
        ...

    async def query_transactions(
        self,
        filter: TransactionFilter,
        limit: int,
        offset: int = 0,
    ) -> Sequence[TransactionRecord]:
        """Newest first."""
        ...

    async def get_bank_destination(self) -> BankDestination | None:
        ...

    async def set_bank_destination(self, destination: BankDestination) -> None:
        ...

    async def commit(self) -> None:
        ...

    async def rollback(self) -> None:
        ...
