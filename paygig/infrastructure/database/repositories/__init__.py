"""SQLAlchemy-backed repository implementations."""

from .account_repository import SqlAccountRepository
from .ledger_repository import SqlLedgerStore
from .report_repository import SqlReportRepository

__all__ = [
    "SqlAccountRepository",
    "SqlLedgerStore",
    "SqlReportRepository",
]
