from __future__ import annotations

import asyncio

import pytest
from fastapi.testclient import TestClient
from jose import jwt
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker, create_async_engine
from sqlalchemy.pool import NullPool

from paygig.core.config import Settings, TelegramSettings, get_settings
from paygig.core.container import ApplicationContainer
from paygig.infrastructure.database.session import init_db
from paygig.interfaces.http.deps import get_app_container, get_db_session, get_settlement_service
from paygig.interfaces.ws.manager import WalletFeedManager
from paygig.main import create_app
from paygig.modules.admin_bot import messages

ADMIN_CHAT = "42"
SECRET = "s3cret-token"


class FakeDispatcher:
    def __init__(self) -> None:
        self.notifications: list[tuple[str, dict]] = []
        self.replies: list[tuple[object, str]] = []
        self.edits: list[tuple[object, int, str]] = []
        self.answers: list[tuple[str, str]] = []

    def notify(self, kind, payload) -> None:  # noqa: ANN001
        self.notifications.append((str(getattr(kind, "value", kind)), dict(payload)))

    def reply(self, chat_id, text) -> None:  # noqa: ANN001
        self.replies.append((chat_id, text))

    def edit(self, chat_id, message_id, text) -> None:  # noqa: ANN001
        self.edits.append((chat_id, message_id, text))

    def answer_callback(self, callback_id, text) -> None:  # noqa: ANN001
        self.answers.append((callback_id, text))

    async def drain(self) -> None:
        return None


@pytest.fixture
def dispatcher() -> FakeDispatcher:
    return FakeDispatcher()


@pytest.fixture
def app(tmp_path, dispatcher):
    # NullPool: TestClient runs every request on its own event loop.
    engine = create_async_engine(f"sqlite+aiosqlite:///{tmp_path / 'api.db'}", poolclass=NullPool)
    asyncio.run(init_db(engine))
    factory = async_sessionmaker(bind=engine, class_=AsyncSession, expire_on_commit=False)

    async def override_session():
        async with factory() as session:
            try:
                yield session
                await session.commit()
            except Exception:
                await session.rollback()
                raise

    settings = Settings(telegram=TelegramSettings(admin_chat_id=ADMIN_CHAT, webhook_secret=SECRET))
    container = ApplicationContainer(settings=settings, dispatcher=dispatcher, feeds=WalletFeedManager())

    application = create_app()
    application.dependency_overrides[get_db_session] = override_session
    application.dependency_overrides[get_app_container] = lambda: container
    yield application
    asyncio.run(engine.dispose())


@pytest.fixture
def client(app) -> TestClient:
    return TestClient(app)


def _auth(subject: str = "acct-1", email: str = "ada@example.com") -> dict:
    token = jwt.encode({"sub": subject, "email": email}, get_settings().jwt_secret, algorithm="HS256")
    return {"Authorization": f"Bearer {token}"}


def _webhook(client: TestClient, update: dict, secret: str | None = SECRET):
    headers = {"X-Telegram-Bot-Api-Secret-Token": secret} if secret else {}
    return client.post("/telegram/webhook", json=update, headers=headers)


def _callback(data: str) -> dict:
    return {
        "update_id": 10,
        "callback_query": {"id": "cb-1", "data": data, "message": {"message_id": 3, "chat": {"id": int(ADMIN_CHAT)}}},
    }


def _command(text: str) -> dict:
    return {"update_id": 11, "message": {"message_id": 4, "chat": {"id": int(ADMIN_CHAT)}, "text": text}}


def test_health(client):
    response = client.get("/health")

    assert response.status_code == 200
    assert response.json()["status"] == "ok"


def test_plans_catalog(client):
    plans = client.get("/api/plans").json()["plans"]

    assert [plan["id"] for plan in plans] == ["sme-starter", "streamer", "professional", "office-hub", "mega-tera"]
    assert [plan["bonus_eligible"] for plan in plans] == [True, True, False, False, False]


def test_wallet_requires_token(client):
    assert client.get("/api/wallet").status_code in (401, 403)
    assert client.get("/api/wallet", headers={"Authorization": "Bearer not-a-jwt"}).status_code == 401


def test_wallet_of_unregistered_identity(client):
    assert client.get("/api/wallet", headers=_auth()).status_code == 404


def test_deposit_approval_and_purchase_flow(client, dispatcher):
    headers = _auth()
    registered = client.post("/api/accounts/register", json={"email": "ada@example.com"}, headers=headers)
    assert registered.status_code == 201
    assert dispatcher.notifications[0][0] == "signup"

    deposit = client.post("/api/wallet/deposits", json={"amount": 10000}, headers=headers)
    assert deposit.status_code == 201
    assert deposit.json()["status"] == "pending"
    assert deposit.json()["description"] == "Wallet funding - ₦10,000"
    kind, payload = dispatcher.notifications[-1]
    assert kind == "deposit"
    assert payload["transaction_id"] == deposit.json()["id"]

    too_early = client.post("/api/wallet/purchases", json={"plan_id": "sme-starter"}, headers=headers)
    assert too_early.status_code == 402
    assert too_early.json()["detail"]["shortfall"] == 7500

    approved = _webhook(client, _callback(f"approve_{deposit.json()['id']}"))
    assert approved.status_code == 200
    assert approved.json() == {"ok": True}
    assert dispatcher.answers[-1] == ("cb-1", "✅ Transaction approved!")

    wallet = client.get("/api/wallet", headers=headers).json()
    assert wallet == {"balance": 10000, "bonus_balance": 0, "currency": "NGN"}

    purchase = client.post("/api/wallet/purchases", json={"plan_id": "sme-starter"}, headers=headers)
    assert purchase.status_code == 201
    body = purchase.json()
    assert body["balance"] == 2500
    assert body["transaction"]["voucher_code"] == body["voucher_code"]
    assert body["voucher_code"].endswith("S")

    history = client.get("/api/wallet/transactions", headers=headers).json()["transactions"]
    assert [tx["kind"] for tx in history] == ["purchase", "deposit"]


def test_invalid_deposit_amount(client):
    headers = _auth()
    client.post("/api/accounts/register", json={"email": "ada@example.com"}, headers=headers)

    assert client.post("/api/wallet/deposits", json={"amount": 0}, headers=headers).status_code == 422


def test_duplicate_registration_conflicts(client):
    headers = _auth()
    client.post("/api/accounts/register", json={"email": "ada@example.com"}, headers=headers)

    assert client.post("/api/accounts/register", json={"email": "ada@example.com"}, headers=headers).status_code == 409


def test_unknown_plan(client):
    headers = _auth()
    client.post("/api/accounts/register", json={"email": "ada@example.com"}, headers=headers)

    assert client.post("/api/wallet/purchases", json={"plan_id": "nope"}, headers=headers).status_code == 404


def test_setbank_through_webhook_updates_public_destination(client, dispatcher):
    assert client.get("/api/bank-destination").json() is None

    response = _webhook(client, _command("/setbank GTBank | 0123456789 | John Doe"))

    assert response.status_code == 200
    assert "Bank Details Updated" in dispatcher.replies[-1][1]
    assert client.get("/api/bank-destination").json() == {
        "bank_name": "GTBank",
        "account_number": "0123456789",
        "account_name": "John Doe",
    }


def test_webhook_unknown_command(client, dispatcher):
    response = _webhook(client, _command("/foo"))

    assert response.status_code == 200
    assert dispatcher.replies == [(int(ADMIN_CHAT), messages.UNKNOWN_COMMAND)]


def test_webhook_with_bad_secret_is_acknowledged_and_ignored(client, dispatcher):
    response = _webhook(client, _command("/stats"), secret="wrong")

    assert response.status_code == 200
    assert response.json() == {"ok": True}
    assert dispatcher.replies == []


def test_webhook_with_garbage_body(client):
    response = client.post(
        "/telegram/webhook",
        content=b"{not json",
        headers={"X-Telegram-Bot-Api-Secret-Token": SECRET, "Content-Type": "application/json"},
    )

    assert response.status_code == 200
    assert response.json() == {"ok": True}


def test_webhook_acknowledges_even_when_handling_fails(app, client, dispatcher):
    class ExplodingSettlement:
        async def resolve_deposit(self, addresses):  # noqa: ANN001
            raise RuntimeError("database on fire")

    app.dependency_overrides[get_settlement_service] = lambda: ExplodingSettlement()

    response = _webhook(client, _callback("approve_tx-1"))

    assert response.status_code == 200
    assert response.json() == {"ok": True}
    assert dispatcher.answers == []
