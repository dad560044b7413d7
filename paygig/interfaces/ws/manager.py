"""Connection manager for wallet feed websocket clients."""
import asyncio
import json
import logging
from typing import Dict, Optional, Set

from fastapi import WebSocket

from paygig.modules.settlement.models import AccountBalance, BankDestination, TransactionRecord
from paygig.schemas import BankDestinationResponse, TransactionResponse, WalletFeedMessage

logger = logging.getLogger(__name__)

MESSAGE_BALANCE = "balance"
MESSAGE_TRANSACTION = "transaction"
MESSAGE_BANK_DESTINATION = "bank_destination"


def feed_message(message_type: str, data: Optional[dict]) -> dict:
    return WalletFeedMessage(type=message_type, data=data).model_dump(mode="json")


def balance_message(balance: AccountBalance) -> dict:
    return feed_message(
        MESSAGE_BALANCE,
        {"balance": balance.balance, "bonus_balance": balance.bonus_balance},
    )


def bank_destination_message(destination: BankDestination | None) -> dict:
    data = None
    if destination is not None:
        data = BankDestinationResponse.model_validate(destination).model_dump(mode="json")
    return feed_message(MESSAGE_BANK_DESTINATION, data)


class WalletFeedManager:
    """Tracks open wallet feeds per account and pushes settlement events.

    One account may have several open feeds (phone and browser); each gets
    every message for that account.
    """

    def __init__(self) -> None:
        self.connections: Dict[str, Set[WebSocket]] = {}
        self._tasks: Set[asyncio.Task] = set()

    async def connect(self, account_id: str, websocket: WebSocket) -> None:
        await websocket.accept()
        self.register(account_id, websocket)

    def register(self, account_id: str, websocket: WebSocket) -> None:
        self.connections.setdefault(account_id, set()).add(websocket)
        logger.info("Wallet feed opened for %s", account_id)

    async def disconnect(self, account_id: str, websocket: WebSocket) -> None:
        sockets = self.connections.get(account_id)
        if sockets is None:
            return
        sockets.discard(websocket)
        if not sockets:
            self.connections.pop(account_id, None)
        logger.info("Wallet feed closed for %s", account_id)

    async def send_json(self, websocket: WebSocket, message: dict) -> None:
        await websocket.send_text(json.dumps(message))

    async def send_to_account(self, account_id: str, message: dict) -> int:
        delivered = 0
        for websocket in list(self.connections.get(account_id, ())):
            try:
                await self.send_json(websocket, message)
                delivered += 1
            except Exception as exc:  # pylint: disable=broad-except
                logger.error("Sending to wallet feed of %s failed: %s", account_id, exc)
                await self.disconnect(account_id, websocket)
        return delivered

    def is_online(self, account_id: str) -> bool:
        return bool(self.connections.get(account_id))

    def get_online_count(self) -> int:
        return sum(len(sockets) for sockets in self.connections.values())

    async def drain(self) -> None:
        """Wait for scheduled feed sends (shutdown and tests)."""
        while self._tasks:
            await asyncio.gather(*list(self._tasks), return_exceptions=True)

    def _schedule(self, account_id: str, message: dict) -> None:
        if not self.connections.get(account_id):
            return
        task = asyncio.create_task(self.send_to_account(account_id, message))
        self._tasks.add(task)
        task.add_done_callback(self._tasks.discard)

    # Settlement events, sent from detached tasks

    async def balance_changed(self, account_id: str, balance: AccountBalance) -> None:
        self._schedule(account_id, balance_message(balance))

    async def transaction_changed(self, transaction: TransactionRecord) -> None:
        data = TransactionResponse.model_validate(transaction).model_dump(mode="json")
        self._schedule(transaction.account_id, feed_message(MESSAGE_TRANSACTION, data))

    async def bank_destination_changed(self, destination: BankDestination) -> None:
        message = bank_destination_message(destination)
        for account_id in list(self.connections.keys()):
            self._schedule(account_id, message)


manager = WalletFeedManager()
