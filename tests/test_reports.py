from __future__ import annotations

from paygig.infrastructure.database.repositories.account_repository import SqlAccountRepository
from paygig.infrastructure.database.repositories.ledger_repository import SqlLedgerStore
from paygig.infrastructure.database.repositories.report_repository import SqlReportRepository
from paygig.modules.accounts import RegistrationInput
from paygig.modules.accounts.service import AccountService
from paygig.modules.catalog import get_plan
from paygig.modules.reports.service import MAX_PAGE_SIZE, ReportService
from paygig.modules.settlement.models import TransactionFilter, TransactionKind, TransactionStatus
from paygig.modules.settlement.service import SettlementService


async def _populate(session_factory, seed_account) -> None:
    await seed_account("acct-1", balance=20000)
    await seed_account("acct-2")
    async with session_factory() as session:
        service = SettlementService(SqlLedgerStore(session))
        approved = await service.request_deposit("acct-1", 5000)
        declined = await service.request_deposit("acct-1", 3000)
        await service.request_deposit("acct-2", 1000)
        await service.approve_deposit(approved.id)
        await service.decline_deposit(declined.id)
        await service.execute_purchase("acct-1", get_plan("sme-starter"), 25000, 0)


async def test_stats(session_factory, seed_account):
    await _populate(session_factory, seed_account)

    async with session_factory() as session:
        stats = await ReportService(SqlReportRepository(session)).stats()

    assert stats.total_users == 2
    assert stats.total_transactions == 4
    assert stats.pending_deposits == 1
    assert stats.deposit_volume == 5000
    assert stats.purchase_volume == 7500


async def test_transaction_filters(session_factory, seed_account):
    await _populate(session_factory, seed_account)

    async with session_factory() as session:
        reports = ReportService(SqlReportRepository(session))
        pending = await reports.list_transactions(TransactionFilter(status=TransactionStatus.PENDING))
        purchases = await reports.list_transactions(TransactionFilter(kind=TransactionKind.PURCHASE))
        everything = await reports.list_transactions()

    assert [record.account_id for record in pending] == ["acct-2"]
    assert [record.kind for record in purchases] == [TransactionKind.PURCHASE]
    assert everything[0].kind is TransactionKind.PURCHASE
    assert len(everything) == 4


async def test_page_size_bounds(session_factory, seed_account):
    await seed_account("acct-1")
    async with session_factory() as session:
        service = SettlementService(SqlLedgerStore(session))
        for amount in range(1, 14):
            await service.request_deposit("acct-1", amount * 100)

    async with session_factory() as session:
        reports = ReportService(SqlReportRepository(session), page_size=10)
        default_page = await reports.list_transactions()
        tiny = await reports.list_transactions(limit=0)
        huge = await reports.list_transactions(limit=10_000)

    assert len(default_page) == 10
    assert default_page[0].amount == 1300
    assert len(tiny) == 1
    assert len(huge) == 13
    assert MAX_PAGE_SIZE >= 13


async def test_activity_reports(session_factory):
    async with session_factory() as session:
        accounts = AccountService(SqlAccountRepository(session))
        await accounts.register(RegistrationInput(account_id="acct-1", email="ada@example.com", phone="0801"))
        await accounts.register(RegistrationInput(account_id="acct-2", email="bo@example.com"))
        await accounts.record_login("acct-1")

    async with session_factory() as session:
        reports = ReportService(SqlReportRepository(session))
        logins = await reports.list_logins()
        registrations = await reports.list_registrations()

    assert [entry.user_email for entry in logins] == ["ada@example.com"]
    assert [entry.user_email for entry in registrations] == ["bo@example.com", "ada@example.com"]
    assert registrations[1].details == "phone=0801"
