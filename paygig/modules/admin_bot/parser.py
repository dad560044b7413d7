"""Parsing of inbound admin-channel callbacks and commands."""

from __future__ import annotations

from typing import Callable, Dict, List, Optional

from paygig.modules.settlement.exceptions import ValidationError
from paygig.modules.settlement.models import (
    DepositAddress,
    LegacyDepositRef,
    TransactionKind,
    TransactionRef,
    TransactionStatus,
)

from .intents import (
    ApproveDeposit,
    CallbackIntent,
    CommandIntent,
    DeclineDeposit,
    Help,
    ListLogins,
    ListRegistrations,
    ListTransactions,
    SetBankDestination,
    Stats,
    UnknownCommand,
)
from .messages import SETBANK_USAGE, TRANSACTIONS_USAGE

_CALLBACK_ACTIONS = {"approve": ApproveDeposit, "decline": DeclineDeposit}


def _parse_amount(raw: str) -> Optional[int]:
    try:
        value = float(raw)
    except ValueError:
        return None
    if not value.is_integer() or value <= 0:
        return None
    return int(value)


def parse_callback_data(data: str) -> CallbackIntent:
    """Parse ``approve_<id>`` / ``decline_<id>`` and the legacy
    ``<action>_<accountId>_<amount>`` form.

    Addresses come back in lookup order: the direct transaction id first,
    then the legacy ``(account, amount)`` pair when one is present.
    """
    parts = (data or "").split("_")
    intent_type = _CALLBACK_ACTIONS.get(parts[0])
    if intent_type is None or len(parts) < 2 or not parts[1]:
        raise ValidationError(f"Unsupported action: {data!r}")

    addresses: List[DepositAddress] = [TransactionRef(parts[1])]
    if len(parts) >= 3:
        amount = _parse_amount(parts[2])
        if amount is not None:
            addresses.append(LegacyDepositRef(account_id=parts[1], amount=amount))
    return intent_type(addresses=tuple(addresses))


def _transactions(args: str) -> ListTransactions:
    if not args:
        return ListTransactions()
    value = args.split()[0].lower()
    try:
        return ListTransactions(status=TransactionStatus(value))
    except ValueError:
        pass
    try:
        return ListTransactions(kind=TransactionKind(value))
    except ValueError:
        raise ValidationError(TRANSACTIONS_USAGE) from None


def _setbank(args: str) -> SetBankDestination:
    fields = [part.strip() for part in args.split("|")]
    if len(fields) != 3 or not all(fields):
        raise ValidationError(SETBANK_USAGE)
    return SetBankDestination(bank_name=fields[0], account_number=fields[1], account_name=fields[2])


_COMMANDS: Dict[str, Callable[[str], CommandIntent]] = {
    "/start": lambda args: Help(),
    "/help": lambda args: Help(),
    "/transactions": _transactions,
    "/logins": lambda args: ListLogins(),
    "/registers": lambda args: ListRegistrations(),
    "/stats": lambda args: Stats(),
    "/setbank": _setbank,
}


def parse_command(text: str) -> Optional[CommandIntent]:
    """Parse a text message. Returns ``None`` for anything that is not a
    slash-command; raises ``ValidationError`` carrying the usage hint when a
    known command has malformed arguments."""
    text = (text or "").strip()
    if not text.startswith("/"):
        return None

    head, _, args = text.partition(" ")
    # Group chats address commands as /stats@SomeBot.
    command = head.split("@", 1)[0]
    handler = _COMMANDS.get(command)
    if handler is None:
        return UnknownCommand(command=command)
    return handler(args.strip())
