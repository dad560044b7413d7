from __future__ import annotations

import asyncio
import json
from datetime import datetime, timezone

import pytest
from pydantic import ValidationError

from paygig.interfaces.ws.manager import WalletFeedManager, feed_message
from paygig.modules.settlement.models import (
    AccountBalance,
    BankDestination,
    TransactionKind,
    TransactionRecord,
    TransactionStatus,
)


class FakeSocket:
    def __init__(self, fail: bool = False) -> None:
        self.fail = fail
        self.sent: list[dict] = []

    async def send_text(self, text: str) -> None:
        if self.fail:
            raise RuntimeError("socket closed")
        self.sent.append(json.loads(text))


async def test_balance_events_reach_every_feed_of_the_account():
    feeds = WalletFeedManager()
    phone, browser, other = FakeSocket(), FakeSocket(), FakeSocket()
    feeds.register("acct-1", phone)
    feeds.register("acct-1", browser)
    feeds.register("acct-2", other)

    await feeds.balance_changed("acct-1", AccountBalance(balance=6000, bonus_balance=500))
    await feeds.drain()

    expected = {"type": "balance", "data": {"balance": 6000, "bonus_balance": 500}}
    assert phone.sent == [expected]
    assert browser.sent == [expected]
    assert other.sent == []


async def test_transaction_event_is_serialised():
    feeds = WalletFeedManager()
    socket = FakeSocket()
    feeds.register("acct-1", socket)
    record = TransactionRecord(
        id="tx-1",
        account_id="acct-1",
        kind=TransactionKind.DEPOSIT,
        amount=5000,
        status=TransactionStatus.SUCCESS,
        voucher_code=None,
        description="Wallet funding - ₦5,000",
        created_at=datetime(2026, 10, 19, 9, 0, tzinfo=timezone.utc),
    )

    await feeds.transaction_changed(record)
    await feeds.drain()

    message = socket.sent[0]
    assert message["type"] == "transaction"
    assert message["data"]["id"] == "tx-1"
    assert message["data"]["status"] == "success"


async def test_bank_destination_is_broadcast_and_dead_sockets_dropped():
    feeds = WalletFeedManager()
    alive, dead = FakeSocket(), FakeSocket(fail=True)
    feeds.register("acct-1", alive)
    feeds.register("acct-2", dead)

    await feeds.bank_destination_changed(BankDestination("GTBank", "0123456789", "John Doe"))
    await feeds.drain()

    assert alive.sent[0]["data"] == {
        "bank_name": "GTBank",
        "account_number": "0123456789",
        "account_name": "John Doe",
    }
    assert not feeds.is_online("acct-2")
    assert feeds.get_online_count() == 1


class SlowSocket(FakeSocket):
    def __init__(self) -> None:
        super().__init__()
        self.release = asyncio.Event()

    async def send_text(self, text: str) -> None:
        await self.release.wait()
        await super().send_text(text)


async def test_slow_feed_does_not_hold_up_the_event():
    feeds = WalletFeedManager()
    slow = SlowSocket()
    feeds.register("acct-1", slow)

    await asyncio.wait_for(
        feeds.bank_destination_changed(BankDestination("GTBank", "0123456789", "John Doe")),
        timeout=1,
    )
    assert slow.sent == []

    slow.release.set()
    await feeds.drain()

    assert slow.sent[0]["type"] == "bank_destination"


async def test_events_for_offline_accounts_schedule_nothing():
    feeds = WalletFeedManager()

    await feeds.balance_changed("acct-1", AccountBalance(balance=100, bonus_balance=0))

    assert feeds._tasks == set()


def test_feed_message_rejects_unknown_type():
    with pytest.raises(ValidationError):
        feed_message("heartbeat", None)
