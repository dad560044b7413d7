"""SQLAlchemy implementation of the account repository."""

from __future__ import annotations

from sqlalchemy import select
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from paygig.db.models import Account as AccountModel
from paygig.db.models import ActivityLog
from paygig.modules.accounts.exceptions import AccountAlreadyExistsError
from paygig.modules.accounts.models import Account, ActivityEntry, ActivityType
from paygig.modules.accounts.repository import AccountRepository


class SqlAccountRepository(AccountRepository):
    """Account repository backed by SQLAlchemy models."""

    def __init__(self, session: AsyncSession) -> None:
        self._session = session

    async def get_by_id(self, account_id: str) -> Account | None:
        stmt = (
            select(AccountModel)
            .where(AccountModel.id == account_id)
            .execution_options(populate_existing=True)
        )
        result = await self._session.execute(stmt)
        return self._to_domain(result.scalar_one_or_none())

    async def get_by_referral_code(self, referral_code: str) -> Account | None:
        stmt = select(AccountModel).where(AccountModel.referral_code == referral_code)
        result = await self._session.execute(stmt)
        return self._to_domain(result.scalar_one_or_none())

    async def create_account(
        self,
        *,
        account_id: str,
        email: str | None,
        phone: str | None,
        referral_code: str,
        referred_by: str | None,
        bonus_balance: int,
    ) -> Account:
        model = AccountModel(
            id=account_id,
            email=email,
            phone=phone,
            referral_code=referral_code,
            referred_by=referred_by,
            balance=0,
            bonus_balance=bonus_balance,
        )
        self._session.add(model)
        try:
            await self._session.flush()
        except IntegrityError as exc:
            raise AccountAlreadyExistsError(f"Profile already exists: {account_id}") from exc
        return self._to_domain(model)

    async def add_activity(
        self,
        *,
        type: ActivityType,
        account_id: str | None,
        user_email: str | None,
        details: str | None = None,
    ) -> ActivityEntry:
        model = ActivityLog(type=type.value, account_id=account_id, user_email=user_email, details=details)
        self._session.add(model)
        await self._session.flush()
        return ActivityEntry(
            id=model.id,
            type=ActivityType(model.type),
            account_id=model.account_id,
            user_email=model.user_email,
            details=model.details,
            created_at=model.created_at,
        )

    async def commit(self) -> None:
        await self._session.commit()

    async def rollback(self) -> None:
        await self._session.rollback()

    @staticmethod
    def _to_domain(model: AccountModel | None) -> Account | None:
        if model is None:
            return None
        return Account(
            id=str(model.id),
            email=model.email,
            referral_code=model.referral_code,
            balance=model.balance or 0,
            bonus_balance=model.bonus_balance or 0,
            phone=model.phone,
            referred_by=model.referred_by,
            created_at=model.created_at,
            updated_at=model.updated_at,
        )
