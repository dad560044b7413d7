"""Admin chat-bot command surface."""

from .intents import (
    AdminIntent,
    ApproveDeposit,
    DeclineDeposit,
    Help,
    ListLogins,
    ListRegistrations,
    ListTransactions,
    SetBankDestination,
    Stats,
    UnknownCommand,
)
from .parser import parse_callback_data, parse_command

__all__ = [
    "AdminIntent",
    "ApproveDeposit",
    "DeclineDeposit",
    "Help",
    "ListLogins",
    "ListRegistrations",
    "ListTransactions",
    "SetBankDestination",
    "Stats",
    "UnknownCommand",
    "parse_callback_data",
    "parse_command",
]
