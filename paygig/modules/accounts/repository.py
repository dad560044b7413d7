"""Repository protocol for accounts."""

from __future__ import annotations

from typing import Protocol

from .models import Account, ActivityEntry, ActivityType


class AccountRepository(Protocol):
    """Abstract repository interface for account persistence."""

    async def get_by_id(self, account_id: str) -> Account | None:
        ...

    async def get_by_referral_code(self, referral_code: str) -> Account | None:
        ...

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
        ...

    async def add_activity(
        self,
        *,
        type: ActivityType,
        account_id: str | None,
        user_email: str | None,
        details: str | None = None,
    ) -> ActivityEntry:
        ...

    async def commit(self) -> None:
        ...

    async def rollback(self) -> None:
        ...
