"""Notification domain exports"""

from .dispatcher import ChatChannel, NotificationDispatcher, Notifier
from .exceptions import DispatchError, NotificationError
from .models import Notification, NotificationKind
from .telegram import TelegramClient

__all__ = [
    "ChatChannel",
    "DispatchError",
    "Notification",
    "NotificationDispatcher",
    "NotificationError",
    "NotificationKind",
    "Notifier",
    "TelegramClient",
]
