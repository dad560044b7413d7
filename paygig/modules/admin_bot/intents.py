"""Tagged admin intents produced by the parser."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Optional, Tuple, Union

from paygig.modules.settlement.models import DepositAddress, TransactionKind, TransactionStatus


@dataclass(slots=True, frozen=True)
class ApproveDeposit:
    addresses: Tuple[DepositAddress, ...]


@dataclass(slots=True, frozen=True)
class DeclineDeposit:
    addresses: Tuple[DepositAddress, ...]


@dataclass(slots=True, frozen=True)
class SetBankDestination:
    bank_name: str
    account_number: str
    account_name: str


@dataclass(slots=True, frozen=True)
class ListTransactions:
    status: Optional[TransactionStatus] = None
    kind: Optional[TransactionKind] = None

    @property
    def label(self) -> Optional[str]:
        if self.status is not None:
            return self.status.value
        if self.kind is not None:
            return self.kind.value
        return None


@dataclass(slots=True, frozen=True)
class ListLogins:
    pass


@dataclass(slots=True, frozen=True)
class ListRegistrations:
    pass


@dataclass(slots=True, frozen=True)
class Stats:
    pass


@dataclass(slots=True, frozen=True)
class Help:
    pass


@dataclass(slots=True, frozen=True)
class UnknownCommand:
    command: str


CallbackIntent = Union[ApproveDeposit, DeclineDeposit]
CommandIntent = Union[
    SetBankDestination,
    ListTransactions,
    ListLogins,
    ListRegistrations,
    Stats,
    Help,
    UnknownCommand,
]
AdminIntent = Union[CallbackIntent, CommandIntent]
