"""Thin async client for the Telegram Bot API."""

from __future__ import annotations

import json
import logging
from typing import Any

import httpx

from .exceptions import DispatchError

logger = logging.getLogger(__name__)


class TelegramClient:
    def __init__(
        self,
        bot_token: str,
        *,
        api_base: str = "https://api.telegram.org",
        timeout: float = 10.0,
        client: httpx.AsyncClient | None = None,
    ) -> None:
        self._base_url = f"{api_base.rstrip('/')}/bot{bot_token}"
        self._client = client or httpx.AsyncClient(timeout=timeout)
        self._owns_client = client is None

    async def send_message(
        self,
        chat_id: str | int,
        text: str,
        reply_markup: dict[str, Any] | None = None,
    ) -> dict[str, Any]:
        body: dict[str, Any] = {"chat_id": chat_id, "text": text, "parse_mode": "HTML"}
        if reply_markup:
            body["reply_markup"] = json.dumps(reply_markup)
        return await self._call("sendMessage", body)

    async def edit_message(self, chat_id: str | int, message_id: int, text: str) -> dict[str, Any]:
        return await self._call(
            "editMessageText",
            {"chat_id": chat_id, "message_id": message_id, "text": text, "parse_mode": "HTML"},
        )

    async def answer_callback(self, callback_id: str, text: str) -> dict[str, Any]:
        return await self._call("answerCallbackQuery", {"callback_query_id": callback_id, "text": text})

    async def aclose(self) -> None:
        if self._owns_client:
            await self._client.aclose()

    async def _call(self, method: str, body: dict[str, Any]) -> dict[str, Any]:
        try:
            response = await self._client.post(f"{self._base_url}/{method}", json=body)
            payload = response.json()
        except (httpx.HTTPError, ValueError) as exc:
            raise DispatchError(f"Telegram {method} failed: {exc}") from exc

        if response.status_code >= 400 or not payload.get("ok", False):
            raise DispatchError(
                f"Telegram {method} rejected ({response.status_code}): {payload.get('description')}"
            )
        logger.debug("Telegram %s ok", method)
        return payload
