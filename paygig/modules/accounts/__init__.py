"""Account profiles and activity log."""

from .exceptions import AccountAlreadyExistsError, AccountError, AccountNotFoundError
from .models import Account, ActivityEntry, ActivityType, RegistrationInput

__all__ = [
    "Account",
    "AccountAlreadyExistsError",
    "AccountError",
    "AccountNotFoundError",
    "ActivityEntry",
    "ActivityType",
    "RegistrationInput",
]
