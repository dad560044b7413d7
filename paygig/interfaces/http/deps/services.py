"""Service providers bound to the request's database session."""

from fastapi import Depends
from sqlalchemy.ext.asyncio import AsyncSession

from paygig.core.container import ApplicationContainer, get_container
from paygig.modules.accounts.service import AccountService
from paygig.modules.reports.service import ReportService
from paygig.modules.settlement.service import SettlementService

from .database import get_db_session


def get_app_container() -> ApplicationContainer:
    return get_container()


def get_settlement_service(
    db: AsyncSession = Depends(get_db_session),
    container: ApplicationContainer = Depends(get_app_container),
) -> SettlementService:
    return SettlementService.with_session(
        db,
        notifier=container.dispatcher,
        events=container.feeds,
        settings=container.settings,
    )


def get_account_service(
    db: AsyncSession = Depends(get_db_session),
    container: ApplicationContainer = Depends(get_app_container),
) -> AccountService:
    return AccountService.with_session(db, notifier=container.dispatcher, settings=container.settings)


def get_report_service(db: AsyncSession = Depends(get_db_session)) -> ReportService:
    return ReportService.with_session(db)


__all__ = [
    "get_account_service",
    "get_app_container",
    "get_report_service",
    "get_settlement_service",
]
