"""Wallet feed websocket endpoint."""
import logging

from fastapi import APIRouter, HTTPException, Query, WebSocket, WebSocketDisconnect

from paygig.core.security import decode_identity_token
from paygig.infrastructure.database.session import get_session_factory
from paygig.modules.settlement.exceptions import NotFoundError
from paygig.modules.settlement.service import SettlementService

from .manager import balance_message, bank_destination_message, manager

logger = logging.getLogger(__name__)

router = APIRouter()


@router.websocket("/ws/wallet")
async def wallet_feed(websocket: WebSocket, token: str = Query(...)):
    account_id = None
    try:
        try:
            account_id = decode_identity_token(token).subject
        except HTTPException as exc:
            logger.error("Wallet feed token invalid: %s", exc.detail)
            await websocket.close(code=1008, reason="Invalid token")
            return

        await manager.connect(account_id, websocket)
        await _send_initial_state(account_id, websocket)
        while True:
            # Clients only listen; anything they send is a keep-alive.
            await websocket.receive_text()
    except WebSocketDisconnect:
        logger.info("Wallet feed client %s disconnected", account_id)
    finally:
        if account_id:
            await manager.disconnect(account_id, websocket)


async def _send_initial_state(account_id: str, websocket: WebSocket) -> None:
    async with get_session_factory()() as session:
        service = SettlementService.with_session(session)
        try:
            balance = await service.get_balance(account_id)
        except NotFoundError:
            balance = None
        destination = await service.get_bank_destination()
        await session.rollback()

    if balance is not None:
        await manager.send_json(websocket, balance_message(balance))
    await manager.send_json(websocket, bank_destination_message(destination))
