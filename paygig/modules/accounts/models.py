"""Domain models for accounts."""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from enum import Enum
from typing import Optional


class ActivityType(str, Enum):
    LOGIN = "login"
    SIGNUP = "signup"


@dataclass(slots=True)
class Account:
    id: str
    email: Optional[str]
    referral_code: str
    balance: int = 0
    bonus_balance: int = 0
    phone: Optional[str] = None
    referred_by: Optional[str] = None
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None


@dataclass(slots=True)
class RegistrationInput:
    account_id: str
    email: str
    phone: Optional[str] = None
    referral_code: Optional[str] = None


@dataclass(slots=True)
class ActivityEntry:
    id: int
    type: ActivityType
    account_id: Optional[str]
    user_email: Optional[str]
    details: Optional[str]
    created_at: datetime
