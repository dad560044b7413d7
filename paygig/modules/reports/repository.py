"""Repository protocol for report queries."""

from __future__ import annotations

from typing import Protocol, Sequence

from paygig.modules.accounts.models import ActivityEntry, ActivityType
from paygig.modules.settlement.models import TransactionFilter, TransactionRecord


class ReportRepository(Protocol):
    async def query_transactions(self, filter: TransactionFilter, limit: int) -> Sequence[TransactionRecord]:
        ...

    async def list_activity(self, type: ActivityType, limit: int) -> Sequence[ActivityEntry]:
        ...

    async def count_accounts(self) -> int:
        ...

    async def count_transactions(self, filter: TransactionFilter) -> int:
        ...

    async def sum_amounts(self, filter: TransactionFilter) -> int:
        ...
