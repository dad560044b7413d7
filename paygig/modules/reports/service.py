"""Read-only reporting for the admin channel."""

from __future__ import annotations

from typing import Optional, Sequence

from sqlalchemy.ext.asyncio import AsyncSession

from paygig.core.config import get_settings
from paygig.infrastructure.database.repositories.report_repository import SqlReportRepository
from paygig.modules.accounts.models import ActivityEntry, ActivityType
from paygig.modules.settlement.models import (
    TransactionFilter,
    TransactionKind,
    TransactionRecord,
    TransactionStatus,
)

from .models import LedgerStats
from .repository import ReportRepository

MAX_PAGE_SIZE = 50


class ReportService:
    def __init__(self, repository: ReportRepository, page_size: int = 10) -> None:
        self._repository = repository
        self.page_size = page_size

    @classmethod
    def with_session(cls, session: AsyncSession) -> "ReportService":
        return cls(SqlReportRepository(session), get_settings().wallet.report_page_size)

    async def list_transactions(
        self,
        filter: Optional[TransactionFilter] = None,
        limit: Optional[int] = None,
    ) -> Sequence[TransactionRecord]:
        return await self._repository.query_transactions(filter or TransactionFilter(), self._bounded(limit))

    async def list_logins(self, limit: Optional[int] = None) -> Sequence[ActivityEntry]:
        return await self._repository.list_activity(ActivityType.LOGIN, self._bounded(limit))

    async def list_registrations(self, limit: Optional[int] = None) -> Sequence[ActivityEntry]:
        return await self._repository.list_activity(ActivityType.SIGNUP, self._bounded(limit))

    async def stats(self) -> LedgerStats:
        repo = self._repository
        return LedgerStats(
            total_users=await repo.count_accounts(),
            total_transactions=await repo.count_transactions(TransactionFilter()),
            pending_deposits=await repo.count_transactions(
                TransactionFilter(status=TransactionStatus.PENDING, kind=TransactionKind.DEPOSIT)
            ),
            deposit_volume=await repo.sum_amounts(
                TransactionFilter(status=TransactionStatus.SUCCESS, kind=TransactionKind.DEPOSIT)
            ),
            purchase_volume=await repo.sum_amounts(
                TransactionFilter(status=TransactionStatus.SUCCESS, kind=TransactionKind.PURCHASE)
            ),
        )

    def _bounded(self, limit: Optional[int]) -> int:
        if limit is None:
            return self.page_size
        return max(1, min(limit, MAX_PAGE_SIZE))
