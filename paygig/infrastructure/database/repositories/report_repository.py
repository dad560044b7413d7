"""SQLAlchemy implementation of the report queries."""

from __future__ import annotations

from typing import Sequence

from sqlalchemy import desc, func, select
from sqlalchemy.ext.asyncio import AsyncSession

from paygig.db.models import Account, ActivityLog, Transaction
from paygig.modules.accounts.models import ActivityEntry, ActivityType
from paygig.modules.settlement.models import TransactionFilter, TransactionRecord

from .ledger_repository import SqlLedgerStore


class SqlReportRepository:
    def __init__(self, session: AsyncSession) -> None:
        self._session = session
        self._ledger = SqlLedgerStore(session)

    async def query_transactions(self, filter: TransactionFilter, limit: int) -> Sequence[TransactionRecord]:
        return await self._ledger.query_transactions(filter, limit)

    async def list_activity(self, type: ActivityType, limit: int) -> Sequence[ActivityEntry]:
        stmt = (
            select(ActivityLog)
            .where(ActivityLog.type == type.value)
            .order_by(desc(ActivityLog.created_at), desc(ActivityLog.id))
            .limit(limit)
        )
        result = await self._session.execute(stmt)
        return [
            ActivityEntry(
                id=row.id,
                type=ActivityType(row.type),
                account_id=row.account_id,
                user_email=row.user_email,
                details=row.details,
                created_at=row.created_at,
            )
            for row in result.scalars().all()
        ]

    async def count_accounts(self) -> int:
        result = await self._session.execute(select(func.count()).select_from(Account))
        return int(result.scalar_one())

    async def count_transactions(self, filter: TransactionFilter) -> int:
        stmt = self._apply(select(func.count()).select_from(Transaction), filter)
        result = await self._session.execute(stmt)
        return int(result.scalar_one())

    async def sum_amounts(self, filter: TransactionFilter) -> int:
        stmt = self._apply(select(func.coalesce(func.sum(Transaction.amount), 0)), filter)
        result = await self._session.execute(stmt)
        return int(result.scalar_one())

    @staticmethod
    def _apply(stmt, filter: TransactionFilter):  # noqa: ANN001, ANN205
        if filter.status is not None:
            stmt = stmt.where(Transaction.status == filter.status.value)
        if filter.kind is not None:
            stmt = stmt.where(Transaction.kind == filter.kind.value)
        if filter.account_id is not None:
            stmt = stmt.where(Transaction.account_id == filter.account_id)
        return stmt
