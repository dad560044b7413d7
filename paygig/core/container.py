"""Simple dependency container for wiring process-wide services."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from functools import lru_cache
from typing import Optional

from paygig.core.config import Settings, get_settings
from paygig.infrastructure.database.session import get_engine
from paygig.interfaces.ws.manager import WalletFeedManager, manager
from paygig.modules.notifications import NotificationDispatcher, TelegramClient

logger = logging.getLogger(__name__)


@dataclass(slots=True)
class ApplicationContainer:
    settings: Settings
    dispatcher: NotificationDispatcher
    feeds: WalletFeedManager
    telegram: Optional[TelegramClient] = None

    def init_infrastructure(self) -> None:
        """Ensure infrastructure singletons (database engine, etc.) are initialised."""
        get_engine()

    async def shutdown(self) -> None:
        await self.dispatcher.drain()
        await self.feeds.drain()
        if self.telegram is not None:
            await self.telegram.aclose()


def build_container(settings: Settings) -> ApplicationContainer:
    telegram = None
    if settings.telegram_enabled:
        telegram = TelegramClient(
            settings.telegram.bot_token,
            api_base=settings.telegram.api_base,
            timeout=settings.telegram.timeout,
        )
    else:
        logger.warning("TELEGRAM__BOT_TOKEN or TELEGRAM__ADMIN_CHAT_ID not set, admin notifications are disabled")
    dispatcher = NotificationDispatcher(telegram, settings.telegram.admin_chat_id)
    return ApplicationContainer(settings=settings, dispatcher=dispatcher, feeds=manager, telegram=telegram)


@lru_cache()
def get_container() -> ApplicationContainer:
    container = build_container(get_settings())
    container.init_infrastructure()
    return container


__all__ = ["ApplicationContainer", "build_container", "get_container"]
