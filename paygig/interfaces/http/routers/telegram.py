"""Telegram webhook for the admin bot."""
import logging
import secrets
from typing import Optional

from fastapi import APIRouter, Depends, Header, Request
from sqlalchemy.ext.asyncio import AsyncSession

from paygig.core.container import ApplicationContainer
from paygig.interfaces.http.deps import get_app_container, get_db_session, get_report_service, get_settlement_service
from paygig.modules.admin_bot.interpreter import AdminCommandInterpreter
from paygig.modules.reports.service import ReportService
from paygig.modules.settlement.service import SettlementService

logger = logging.getLogger(__name__)

router = APIRouter()

ACK = {"ok": True}


@router.post("/webhook", summary="Telegram bot updates")
async def telegram_webhook(
    request: Request,
    secret_token: Optional[str] = Header(default=None, alias="X-Telegram-Bot-Api-Secret-Token"),
    db: AsyncSession = Depends(get_db_session),
    settlement: SettlementService = Depends(get_settlement_service),
    reports: ReportService = Depends(get_report_service),
    container: ApplicationContainer = Depends(get_app_container),
) -> dict:
    # Telegram redelivers any update that is not acknowledged with 2xx, so
    # every path below answers ACK.
    expected = container.settings.telegram.webhook_secret
    if expected and not secrets.compare_digest(secret_token or "", expected):
        logger.warning("Rejected webhook call with a bad secret token")
        return ACK

    try:
        update = await request.json()
    except ValueError:
        logger.warning("Ignoring webhook call with a non-JSON body")
        return ACK
    if not isinstance(update, dict):
        return ACK

    interpreter = AdminCommandInterpreter(
        settlement=settlement,
        reports=reports,
        channel=container.dispatcher,
        admin_chat_id=container.settings.telegram.admin_chat_id,
    )
    try:
        await interpreter.handle_update(update)
    except Exception:  # pylint: disable=broad-except
        logger.exception("Webhook update %s failed", update.get("update_id"))
        await db.rollback()
    return ACK
