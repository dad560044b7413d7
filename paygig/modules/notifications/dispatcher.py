"""Best-effort delivery of admin-channel messages.

Everything here runs after the write that triggered it has committed. A
delivery is a detached task with its own failure domain: it is logged, never
retried and never awaited by the request that scheduled it.
"""

from __future__ import annotations

import asyncio
import logging
from typing import Any, Awaitable, Callable, Mapping, Protocol

from .exceptions import DispatchError
from .messages import render_notification
from .models import Notification, NotificationKind

logger = logging.getLogger(__name__)


class ChatChannel(Protocol):
    async def send_message(
        self,
        chat_id: str | int,
        text: str,
        reply_markup: dict[str, Any] | None = None,
    ) -> Any:
        ...

    async def edit_message(self, chat_id: str | int, message_id: int, text: str) -> Any:
        ...

    async def answer_callback(self, callback_id: str, text: str) -> Any:
        ...


class Notifier(Protocol):
    def notify(self, kind: NotificationKind | str, payload: Mapping[str, Any]) -> None:
        ...


class NotificationDispatcher:
    def __init__(self, channel: ChatChannel | None, admin_chat_id: str | int | None) -> None:
        self._channel = channel
        self._admin_chat_id = admin_chat_id
        self._tasks: set[asyncio.Task] = set()

    @property
    def enabled(self) -> bool:
        return self._channel is not None and bool(self._admin_chat_id)

    def notify(self, kind: NotificationKind | str, payload: Mapping[str, Any]) -> None:
        notification = Notification(kind=NotificationKind(kind), payload=dict(payload))
        if not self.enabled:
            logger.info("Admin channel disabled, dropping %s notification", notification.kind.value)
            return
        self._schedule(lambda: self._deliver(notification), f"{notification.kind.value} notification")

    def reply(self, chat_id: str | int, text: str) -> None:
        if self._channel is None:
            logger.info("Admin channel disabled, dropping reply to chat %s", chat_id)
            return
        channel = self._channel
        self._schedule(lambda: channel.send_message(chat_id, text), f"reply to chat {chat_id}")

    def edit(self, chat_id: str | int, message_id: int, text: str) -> None:
        if self._channel is None:
            return
        channel = self._channel
        self._schedule(lambda: channel.edit_message(chat_id, message_id, text), f"edit of message {message_id}")

    def answer_callback(self, callback_id: str, text: str) -> None:
        if self._channel is None:
            return
        channel = self._channel
        self._schedule(lambda: channel.answer_callback(callback_id, text), f"answer to callback {callback_id}")

    async def drain(self) -> None:
        """Wait for in-flight deliveries (shutdown and tests)."""
        while self._tasks:
            await asyncio.gather(*list(self._tasks), return_exceptions=True)

    async def _deliver(self, notification: Notification) -> None:
        assert self._channel is not None
        message = render_notification(notification)
        await self._channel.send_message(self._admin_chat_id, message.text, message.reply_markup)

    def _schedule(self, factory: Callable[[], Awaitable[Any]], label: str) -> None:
        task = asyncio.create_task(self._guard(factory, label))
        self._tasks.add(task)
        task.add_done_callback(self._tasks.discard)

    @staticmethod
    async def _guard(factory: Callable[[], Awaitable[Any]], label: str) -> None:
        try:
            await factory()
        except DispatchError as exc:
            logger.warning("Failed to deliver %s: %s", label, exc)
        except Exception:  # pylint: disable=broad-except
            logger.exception("Unexpected error while delivering %s", label)
