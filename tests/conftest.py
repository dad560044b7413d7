from __future__ import annotations

from typing import Any

import pytest
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker

from paygig.db.models import Account
from paygig.infrastructure.database.repositories.ledger_repository import SqlLedgerStore
from paygig.infrastructure.database.session import build_engine, init_db
from paygig.modules.accounts.service import generate_referral_code
from paygig.modules.notifications import NotificationKind
from paygig.modules.settlement.models import AccountBalance, BankDestination, TransactionRecord


class RecordingNotifier:
    def __init__(self) -> None:
        self.sent: list[tuple[NotificationKind, dict[str, Any]]] = []

    def notify(self, kind, payload) -> None:  # noqa: ANN001
        self.sent.append((NotificationKind(kind), dict(payload)))


class RecordingEvents:
    def __init__(self) -> None:
        self.balances: list[tuple[str, AccountBalance]] = []
        self.transactions: list[TransactionRecord] = []
        self.destinations: list[BankDestination] = []

    async def balance_changed(self, account_id: str, balance: AccountBalance) -> None:
        self.balances.append((account_id, balance))

    async def transaction_changed(self, transaction: TransactionRecord) -> None:
        self.transactions.append(transaction)

    async def bank_destination_changed(self, destination: BankDestination) -> None:
        self.destinations.append(destination)


@pytest.fixture
async def engine(tmp_path):
    engine = build_engine(f"sqlite+aiosqlite:///{tmp_path / 'paygig-test.db'}")
    await init_db(engine)
    yield engine
    await engine.dispose()


@pytest.fixture
def session_factory(engine) -> async_sessionmaker[AsyncSession]:
    return async_sessionmaker(bind=engine, class_=AsyncSession, expire_on_commit=False)


@pytest.fixture
async def session(session_factory):
    async with session_factory() as session:
        yield session


@pytest.fixture
def seed_account(session_factory):
    async def _seed(
        account_id: str = "acct-1",
        *,
        balance: int = 0,
        bonus_balance: int = 0,
        email: str | None = "user@example.com",
    ) -> str:
        async with session_factory() as session:
            session.add(
                Account(
                    id=account_id,
                    email=email,
                    referral_code=generate_referral_code(),
                    balance=balance,
                    bonus_balance=bonus_balance,
                )
            )
            await session.commit()
        return account_id

    return _seed


@pytest.fixture
def read_balance(session_factory):
    async def _read(account_id: str) -> AccountBalance:
        async with session_factory() as session:
            account = await SqlLedgerStore(session).get_account(account_id)
            await session.rollback()
        assert account is not None
        return account.balances

    return _read


@pytest.fixture
def notifier() -> RecordingNotifier:
    return RecordingNotifier()


@pytest.fixture
def events() -> RecordingEvents:
    return RecordingEvents()
