"""Domain models for admin-channel notifications."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Any


class NotificationKind(str, Enum):
    DEPOSIT = "deposit"
    SIGNUP = "signup"
    LOGIN = "login"


@dataclass(slots=True)
class Notification:
    kind: NotificationKind
    payload: dict[str, Any] = field(default_factory=dict)


@dataclass(slots=True)
class OutboundMessage:
    text: str
    reply_markup: dict[str, Any] | None = None
