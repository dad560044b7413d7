"""Executes admin-channel updates against the settlement engine and reports."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Any, Mapping, Optional, Protocol

from paygig.modules.reports.service import ReportService
from paygig.modules.settlement.exceptions import NotFoundError, SettlementError, ValidationError
from paygig.modules.settlement.models import TransactionFilter
from paygig.modules.settlement.service import SettlementService

from . import messages
from .intents import (
    ApproveDeposit,
    CommandIntent,
    Help,
    ListLogins,
    ListRegistrations,
    ListTransactions,
    SetBankDestination,
    Stats,
    UnknownCommand,
)
from .parser import parse_callback_data, parse_command

logger = logging.getLogger(__name__)


class AdminChannel(Protocol):
    def reply(self, chat_id: str | int, text: str) -> None:
        ...

    def edit(self, chat_id: str | int, message_id: int, text: str) -> None:
        ...

    def answer_callback(self, callback_id: str, text: str) -> None:
        ...


@dataclass(slots=True)
class CallbackReply:
    answer: str
    edited_text: Optional[str] = None


class AdminCommandInterpreter:
    def __init__(
        self,
        settlement: SettlementService,
        reports: ReportService,
        channel: AdminChannel,
        admin_chat_id: str | int | None,
    ) -> None:
        self._settlement = settlement
        self._reports = reports
        self._channel = channel
        self._admin_chat_id = str(admin_chat_id) if admin_chat_id else None

    def is_admin_chat(self, chat_id: Any) -> bool:
        return self._admin_chat_id is not None and str(chat_id) == self._admin_chat_id

    async def handle_update(self, update: Mapping[str, Any]) -> None:
        """Route one Telegram ``Update``; anything unrecognised is ignored."""
        callback = update.get("callback_query")
        if callback:
            message = callback.get("message") or {}
            chat_id = (message.get("chat") or {}).get("id")
            if not self.is_admin_chat(chat_id):
                logger.warning("Ignoring callback from unauthorised chat %s", chat_id)
                return
            await self.handle_callback(
                callback_id=str(callback.get("id")),
                chat_id=chat_id,
                message_id=message.get("message_id"),
                data=callback.get("data") or "",
            )
            return

        message = update.get("message") or {}
        text = message.get("text")
        if text:
            chat_id = (message.get("chat") or {}).get("id")
            if not self.is_admin_chat(chat_id):
                logger.warning("Ignoring message from unauthorised chat %s", chat_id)
                return
            await self.handle_text(chat_id, text)

    async def handle_callback(
        self,
        callback_id: str,
        chat_id: str | int,
        message_id: Optional[int],
        data: str,
    ) -> CallbackReply:
        reply = await self._resolve_callback(data)
        if reply.edited_text is not None and message_id is not None:
            self._channel.edit(chat_id, message_id, reply.edited_text)
        self._channel.answer_callback(callback_id, reply.answer)
        return reply

    async def handle_text(self, chat_id: str | int, text: str) -> Optional[str]:
        try:
            intent = parse_command(text)
        except ValidationError as exc:
            reply: Optional[str] = str(exc)
        else:
            if intent is None:
                return None
            reply = await self._execute(intent)

        self._channel.reply(chat_id, reply)
        return reply

    async def _resolve_callback(self, data: str) -> CallbackReply:
        try:
            intent = parse_callback_data(data)
        except ValidationError:
            logger.warning("Unsupported callback data %r", data)
            return CallbackReply(messages.UNSUPPORTED_ACTION)

        try:
            transaction = await self._settlement.resolve_deposit(intent.addresses)
            if isinstance(intent, ApproveDeposit):
                outcome = await self._settlement.approve_deposit(transaction.id)
            else:
                outcome = await self._settlement.decline_deposit(transaction.id)
        except NotFoundError:
            return CallbackReply(messages.NOT_FOUND)
        except SettlementError as exc:
            logger.warning("Settlement of callback %r failed: %s", data, exc)
            return CallbackReply(messages.SETTLEMENT_RETRY)

        if outcome.already_resolved:
            return CallbackReply(messages.already_resolved_answer(outcome.transaction))
        return CallbackReply(
            answer=messages.resolved_answer(outcome.transaction),
            edited_text=messages.resolved_text(outcome.transaction),
        )

    async def _execute(self, intent: CommandIntent) -> str:
        if isinstance(intent, Help):
            return messages.HELP_TEXT
        if isinstance(intent, ListTransactions):
            records = await self._reports.list_transactions(
                TransactionFilter(status=intent.status, kind=intent.kind)
            )
            return messages.transactions_text(records, intent.label)
        if isinstance(intent, ListLogins):
            return messages.logins_text(await self._reports.list_logins())
        if isinstance(intent, ListRegistrations):
            return messages.registrations_text(await self._reports.list_registrations())
        if isinstance(intent, Stats):
            return messages.stats_text(await self._reports.stats())
        if isinstance(intent, SetBankDestination):
            try:
                destination = await self._settlement.set_bank_destination(
                    intent.bank_name, intent.account_number, intent.account_name
                )
            except ValidationError:
                return messages.SETBANK_USAGE
            except SettlementError as exc:
                logger.warning("Saving bank details failed: %s", exc)
                return messages.SETTLEMENT_RETRY
            return messages.bank_updated_text(destination)
        if isinstance(intent, UnknownCommand):
            logger.info("Unknown admin command %s", intent.command)
            return messages.UNKNOWN_COMMAND
        raise TypeError(f"Unhandled intent: {intent!r}")
