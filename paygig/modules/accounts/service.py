"""Domain services for account profiles."""

from __future__ import annotations

import logging
import secrets
import string
from typing import Callable, Optional

from sqlalchemy.ext.asyncio import AsyncSession

from paygig.core.config import Settings, get_settings
from paygig.infrastructure.database.repositories.account_repository import SqlAccountRepository
from paygig.modules.notifications import NotificationKind, Notifier
from paygig.modules.settlement.models import AccountBalance

from .exceptions import AccountAlreadyExistsError, AccountNotFoundError
from .models import Account, ActivityType, RegistrationInput
from .repository import AccountRepository

logger = logging.getLogger(__name__)

REFERRAL_ALPHABET = string.ascii_uppercase + string.digits
REFERRAL_CODE_LENGTH = 8
_REFERRAL_ATTEMPTS = 5


def generate_referral_code(length: int = REFERRAL_CODE_LENGTH) -> str:
    return "".join(secrets.choice(REFERRAL_ALPHABET) for _ in range(length))


class AccountService:
    """Encapsulates profile creation and activity tracking."""

    def __init__(
        self,
        repository: AccountRepository,
        notifier: Optional[Notifier] = None,
        *,
        signup_bonus: int = 0,
        referral_bonus: int = 0,
        code_factory: Callable[[], str] = generate_referral_code,
    ) -> None:
        self._repository = repository
        self._notifier = notifier
        self._signup_bonus = signup_bonus
        self._referral_bonus = referral_bonus
        self._code_factory = code_factory

    @classmethod
    def with_session(
        cls,
        session: AsyncSession,
        *,
        notifier: Optional[Notifier] = None,
        settings: Optional[Settings] = None,
    ) -> "AccountService":
        settings = settings or get_settings()
        return cls(
            SqlAccountRepository(session),
            notifier,
            signup_bonus=settings.wallet.signup_bonus,
            referral_bonus=settings.wallet.referral_bonus,
        )

    async def get_by_id(self, account_id: str) -> Account | None:
        return await self._repository.get_by_id(account_id)

    async def get_balance(self, account_id: str) -> AccountBalance:
        account = await self._repository.get_by_id(account_id)
        if account is None:
            raise AccountNotFoundError(account_id)
        return AccountBalance(balance=account.balance, bonus_balance=account.bonus_balance)

    async def register(self, payload: RegistrationInput) -> Account:
        if await self._repository.get_by_id(payload.account_id) is not None:
            raise AccountAlreadyExistsError(f"Profile already exists: {payload.account_id}")

        bonus = self._signup_bonus
        referred_by = None
        if payload.referral_code:
            code = payload.referral_code.strip().upper()
            if await self._repository.get_by_referral_code(code) is not None:
                referred_by = code
                bonus += self._referral_bonus
            else:
                logger.info("Ignoring unknown referral code %s for %s", code, payload.account_id)

        try:
            account = await self._repository.create_account(
                account_id=payload.account_id,
                email=payload.email,
                phone=payload.phone,
                referral_code=await self._unique_referral_code(),
                referred_by=referred_by,
                bonus_balance=bonus,
            )
            await self._repository.add_activity(
                type=ActivityType.SIGNUP,
                account_id=account.id,
                user_email=account.email,
                details=f"phone={payload.phone}" if payload.phone else None,
            )
            await self._repository.commit()
        except Exception:
            await self._repository.rollback()
            raise

        logger.info("Registered account %s (bonus %s)", account.id, bonus)
        if self._notifier is not None:
            self._notifier.notify(NotificationKind.SIGNUP, {"email": account.email, "phone": account.phone})
        return account

    async def record_login(self, account_id: str) -> Account:
        account = await self._repository.get_by_id(account_id)
        if account is None:
            raise AccountNotFoundError(account_id)

        try:
            await self._repository.add_activity(
                type=ActivityType.LOGIN,
                account_id=account.id,
                user_email=account.email,
            )
            await self._repository.commit()
        except Exception:
            await self._repository.rollback()
            raise

        if self._notifier is not None:
            self._notifier.notify(NotificationKind.LOGIN, {"email": account.email})
        return account

    async def _unique_referral_code(self) -> str:
        for _ in range(_REFERRAL_ATTEMPTS):
            code = self._code_factory()
            if await self._repository.get_by_referral_code(code) is None:
                return code
        raise RuntimeError("Could not allocate a unique referral code")
