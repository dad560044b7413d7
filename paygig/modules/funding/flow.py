"""Client-side wallet funding state machine.

``amount -> awaiting_transfer -> pending_approval -> resolved``. The flow
only leaves ``pending_approval`` on the final state of its own deposit,
either pushed by the feed or re-read after a balance change. A balance rise
alone is never taken as success.
"""

from __future__ import annotations

import logging
from enum import Enum
from typing import Awaitable, Callable, Optional

from paygig.modules.settlement.exceptions import ValidationError
from paygig.modules.settlement.models import TransactionRecord, TransactionStatus

from .exceptions import InvalidTransitionError

logger = logging.getLogger(__name__)

RequestDeposit = Callable[[int], Awaitable[TransactionRecord]]
FetchTransaction = Callable[[str], Awaitable[Optional[TransactionRecord]]]


class FundingStep(str, Enum):
    AMOUNT = "amount"
    AWAITING_TRANSFER = "awaiting_transfer"
    PENDING_APPROVAL = "pending_approval"
    RESOLVED = "resolved"


class FundingFlow:
    def __init__(
        self,
        request_deposit: RequestDeposit,
        fetch_transaction: Optional[FetchTransaction] = None,
    ) -> None:
        self._request_deposit = request_deposit
        self._fetch_transaction = fetch_transaction
        self.reset()

    def reset(self) -> None:
        self.step = FundingStep.AMOUNT
        self.amount: Optional[int] = None
        self.transaction: Optional[TransactionRecord] = None
        self.outcome: Optional[TransactionStatus] = None
        self.expected_balance: Optional[int] = None

    def enter_amount(self, raw: str | int) -> int:
        self._require(FundingStep.AMOUNT, FundingStep.AWAITING_TRANSFER)
        try:
            amount = int(str(raw).strip())
        except ValueError:
            raise ValidationError("Please enter a valid amount") from None
        if amount <= 0:
            raise ValidationError("Please enter a valid amount")
        self.amount = amount
        self.step = FundingStep.AWAITING_TRANSFER
        return amount

    async def confirm_transfer(self, current_balance: Optional[int] = None) -> TransactionRecord:
        """Record the pending deposit once the user says the transfer was made.

        On failure the flow stays in ``awaiting_transfer`` so the user can retry.
        """
        self._require(FundingStep.AWAITING_TRANSFER)
        assert self.amount is not None
        transaction = await self._request_deposit(self.amount)
        self.transaction = transaction
        if current_balance is not None:
            self.expected_balance = current_balance + self.amount
        self.step = FundingStep.PENDING_APPROVAL
        logger.debug("Deposit %s awaiting approval", transaction.id)
        return transaction

    def on_transaction_event(self, record: TransactionRecord) -> bool:
        if self.step is not FundingStep.PENDING_APPROVAL or self.transaction is None:
            return False
        if record.id != self.transaction.id or not record.status.is_terminal:
            return False
        self.transaction = record
        self._resolve(record.status)
        return True

    async def on_balance_change(self, balance: int) -> bool:
        """Re-read our deposit once the balance reaches the expected total.

        Another credit can raise the balance just as well, so the flow only
        resolves if the re-read record itself is final.
        """
        if self.step is not FundingStep.PENDING_APPROVAL or self.expected_balance is None:
            return False
        if balance < self.expected_balance or self._fetch_transaction is None:
            return False
        assert self.transaction is not None
        record = await self._fetch_transaction(self.transaction.id)
        if record is None:
            logger.warning("Deposit %s not found on refresh", self.transaction.id)
            return False
        return self.on_transaction_event(record)

    @property
    def succeeded(self) -> bool:
        return self.outcome is TransactionStatus.SUCCESS

    def _resolve(self, status: TransactionStatus) -> None:
        self.outcome = status
        self.step = FundingStep.RESOLVED

    def _require(self, *steps: FundingStep) -> None:
        if self.step not in steps:
            raise InvalidTransitionError(f"Not allowed in step {self.step.value}")
