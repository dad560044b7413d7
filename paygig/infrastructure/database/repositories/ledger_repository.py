"""SQLAlchemy implementation of the ledger store."""

from __future__ import annotations

import json
import logging
from datetime import datetime, timezone
from typing import Sequence

from sqlalchemy import desc, select, update
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from paygig.db.models import Account, AppSetting, Transaction
from paygig.modules.settlement.exceptions import LedgerWriteError
from paygig.modules.settlement.models import (
    AccountBalance,
    AccountSnapshot,
    BankDestination,
    TransactionFilter,
    TransactionKind,
    TransactionRecord,
    TransactionStatus,
)

BANK_DETAILS_KEY = "bank_details"

logger = logging.getLogger(__name__)


class SqlLedgerStore:
    def __init__(self, session: AsyncSession) -> None:
        self.session = session

    async def get_account(self, account_id: str) -> AccountSnapshot | None:
        # Core select so a re-read inside the same session sees the row as
        # committed rather than the identity map's cached attributes.
        stmt = select(
            Account.id,
            Account.email,
            Account.balance,
            Account.bonus_balance,
            Account.updated_at,
        ).where(Account.id == account_id)
        result = await self.session.execute(stmt)
        row = result.first()
        if row is None:
            return None
        return AccountSnapshot(
            id=row.id,
            email=row.email,
            balance=row.balance,
            bonus_balance=row.bonus_balance,
            updated_at=row.updated_at,
        )

    async def conditional_update_account(
        self,
        account_id: str,
        expected: AccountBalance,
        new: AccountBalance,
    ) -> bool:
        if new.balance < 0 or new.bonus_balance < 0:
            return False
        stmt = (
            update(Account)
            .where(
                Account.id == account_id,
                Account.balance == expected.balance,
                Account.bonus_balance == expected.bonus_balance,
            )
            .values(balance=new.balance, bonus_balance=new.bonus_balance)
            .execution_options(synchronize_session=False)
        )
        result = await self.session.execute(stmt)
        return result.rowcount == 1

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
        tx = Transaction(
            account_id=account_id,
            kind=kind.value,
            amount=amount,
            status=status.value,
            description=description,
            voucher_code=voucher_code,
            plan_id=plan_id,
            resolved_at=datetime.now(timezone.utc) if status.is_terminal else None,
        )
        self.session.add(tx)
        try:
            await self.session.flush()
        except IntegrityError as exc:
            raise LedgerWriteError(f"Transaction rejected by store: {exc.orig}") from exc
        return self._to_record(tx)

    async def conditional_update_transaction_status(
        self,
        transaction_id: str,
        expected: TransactionStatus,
        new: TransactionStatus,
    ) -> bool:
        stmt = (
            update(Transaction)
            .where(Transaction.id == transaction_id, Transaction.status == expected.value)
            .values(status=new.value, resolved_at=datetime.now(timezone.utc))
            .execution_options(synchronize_session=False)
        )
        result = await self.session.execute(stmt)
        return result.rowcount == 1

    async def get_transaction(self, transaction_id: str) -> TransactionRecord | None:
        stmt = (
            select(Transaction)
            .where(Transaction.id == transaction_id)
            .execution_options(populate_existing=True)
        )
        result = await self.session.execute(stmt)
        tx = result.scalars().first()
        return self._to_record(tx) if tx else None

    async def find_latest_pending_deposit(self, account_id: str, amount: int) -> TransactionRecord | None:
        stmt = (
            select(Transaction)
            .where(
                Transaction.account_id == account_id,
                Transaction.kind == TransactionKind.DEPOSIT.value,
                Transaction.status == TransactionStatus.PENDING.value,
                Transaction.amount == amount,
            )
            .order_by(desc(Transaction.created_at))
            .limit(1)
            .execution_options(populate_existing=True)
        )
        result = await self.session.execute(stmt)
        tx = result.scalars().first()
        return self._to_record(tx) if tx else None

    async def query_transactions(
        self,
        filter: TransactionFilter,
        limit: int,
        offset: int = 0,
    ) -> Sequence[TransactionRecord]:
        stmt = select(Transaction)
        if filter.status is not None:
            stmt = stmt.where(Transaction.status == filter.status.value)
        if filter.kind is not None:
            stmt = stmt.where(Transaction.kind == filter.kind.value)
        if filter.account_id is not None:
            stmt = stmt.where(Transaction.account_id == filter.account_id)
        stmt = (
            stmt.order_by(desc(Transaction.created_at))
            .offset(offset)
            .limit(limit)
            .execution_options(populate_existing=True)
        )
        result = await self.session.execute(stmt)
        return [self._to_record(tx) for tx in result.scalars().all()]

    async def get_bank_destination(self) -> BankDestination | None:
        setting = await self.session.get(AppSetting, BANK_DETAILS_KEY, populate_existing=True)
        if setting is None:
            return None
        try:
            payload = json.loads(setting.value)
            return BankDestination(
                bank_name=payload["bank"],
                account_number=payload["acc"],
                account_name=payload["name"],
            )
        except (ValueError, KeyError, TypeError) as exc:
            logger.warning("Ignoring malformed %s setting: %s", BANK_DETAILS_KEY, exc)
            return None

    async def set_bank_destination(self, destination: BankDestination) -> None:
        value = json.dumps(
            {
                "bank": destination.bank_name,
                "acc": destination.account_number,
                "name": destination.account_name,
            }
        )
        setting = await self.session.get(AppSetting, BANK_DETAILS_KEY)
        if setting is None:
            self.session.add(AppSetting(key=BANK_DETAILS_KEY, value=value))
        else:
            setting.value = value
        await self.session.flush()

    async def commit(self) -> None:
        await self.session.commit()

    async def rollback(self) -> None:
        await self.session.rollback()

    @staticmethod
    def _to_record(model: Transaction) -> TransactionRecord:
        return TransactionRecord(
            id=model.id,
            account_id=model.account_id,
            kind=TransactionKind(model.kind),
            amount=model.amount,
            status=TransactionStatus(model.status),
            voucher_code=model.voucher_code,
            description=model.description,
            created_at=model.created_at,
            plan_id=model.plan_id,
            resolved_at=model.resolved_at,
        )
