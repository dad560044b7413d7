"""Balance settlement engine.

Every balance mutation goes through ``LedgerStore.conditional_update_account``
and every deposit resolution goes through the ``pending -> terminal`` status
gate, so concurrent approvals, declines and purchases on the same account
cannot lose updates or credit twice. Each public operation ends its unit of
work with an explicit commit or rollback; notifications and feed events are
only emitted after the commit.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field, replace
from datetime import datetime, timezone
from functools import partial
from typing import Awaitable, Callable, Iterable, Optional, Sequence

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from paygig.core.config import Settings, get_settings
from paygig.infrastructure.database.repositories.ledger_repository import SqlLedgerStore
from paygig.modules.catalog import DataPlan
from paygig.modules.notifications import NotificationKind, Notifier
from paygig.modules.notifications.messages import format_amount
from paygig.modules.vouchers import generate_voucher_code

from .events import SettlementEvents
from .exceptions import (
    AlreadyResolvedError,
    InsufficientFundsError,
    LedgerWriteError,
    NotFoundError,
    SettlementError,
    ValidationError,
)
from .models import (
    AccountBalance,
    BankDestination,
    DepositAddress,
    LegacyDepositRef,
    PurchaseResult,
    SettlementOutcome,
    TransactionFilter,
    TransactionKind,
    TransactionRecord,
    TransactionRef,
    TransactionStatus,
)
from .repository import LedgerStore

logger = logging.getLogger(__name__)


class _BalanceRaceLost(Exception):
    """The account's balances changed between our read and our conditional write."""


@dataclass(slots=True, frozen=True)
class PaymentSplit:
    bonus_used: int
    balance_used: int


def split_payment(plan: DataPlan, observed: AccountBalance) -> PaymentSplit:
    """Work out how much of ``plan.price`` comes from each pool.

    Raises ``InsufficientFundsError`` with the shortfall when the spendable
    total (the bonus pool only counts for bonus-eligible plans) is below the
    price.
    """
    bonus_pool = observed.bonus_balance if plan.bonus_eligible else 0
    effective = observed.balance + bonus_pool
    if effective < plan.price:
        raise InsufficientFundsError(plan.price - effective)
    bonus_used = min(observed.bonus_balance, plan.price) if plan.bonus_eligible else 0
    return PaymentSplit(bonus_used=bonus_used, balance_used=plan.price - bonus_used)


@dataclass(slots=True)
class SettlementService:
    ledger: LedgerStore
    notifier: Optional[Notifier] = None
    events: Optional[SettlementEvents] = None
    retries: int = 1
    voucher_factory: Callable[[], str] = field(default=generate_voucher_code)

    @classmethod
    def with_session(
        cls,
        session: AsyncSession,
        *,
        notifier: Optional[Notifier] = None,
        events: Optional[SettlementEvents] = None,
        settings: Optional[Settings] = None,
    ) -> "SettlementService":
        settings = settings or get_settings()
        return cls(
            SqlLedgerStore(session),
            notifier=notifier,
            events=events,
            retries=settings.wallet.settlement_retries,
            voucher_factory=partial(
                generate_voucher_code,
                settings.wallet.voucher_digits,
                settings.wallet.voucher_suffix,
            ),
        )

    # -- deposits -----------------------------------------------------------

    async def request_deposit(self, account_id: str, amount: int, *, email: Optional[str] = None) -> TransactionRecord:
        if isinstance(amount, bool) or not isinstance(amount, int) or amount <= 0:
            raise ValidationError("Deposit amount must be a positive whole number")

        try:
            account = await self.ledger.get_account(account_id)
            if account is None:
                raise NotFoundError(f"Account {account_id} not found")
            transaction = await self.ledger.create_transaction(
                account_id=account_id,
                kind=TransactionKind.DEPOSIT,
                amount=amount,
                status=TransactionStatus.PENDING,
                description=f"Wallet funding - {format_amount(amount)}",
            )
            await self.ledger.commit()
        except NotFoundError:
            await self.ledger.rollback()
            raise
        except (LedgerWriteError, SQLAlchemyError) as exc:
            await self.ledger.rollback()
            raise SettlementError("Could not record deposit request") from exc

        logger.info("Deposit %s of %s requested by %s", transaction.id, amount, account_id)
        if self.notifier is not None:
            self.notifier.notify(
                NotificationKind.DEPOSIT,
                {
                    "email": email or account.email,
                    "account_id": account_id,
                    "amount": amount,
                    "transaction_id": transaction.id,
                },
            )
        await self._publish(lambda events: events.transaction_changed(transaction))
        return transaction

    async def approve_deposit(self, transaction_id: str) -> SettlementOutcome:
        return await self._resolve_deposit(transaction_id, TransactionStatus.SUCCESS)

    async def decline_deposit(self, transaction_id: str) -> SettlementOutcome:
        return await self._resolve_deposit(transaction_id, TransactionStatus.FAILED)

    async def resolve_deposit(self, addresses: Iterable[DepositAddress]) -> TransactionRecord:
        """Find the deposit a callback refers to, trying each address in order."""
        for address in addresses:
            if isinstance(address, TransactionRef):
                transaction = await self.ledger.get_transaction(address.transaction_id)
            elif isinstance(address, LegacyDepositRef):
                transaction = await self.ledger.find_latest_pending_deposit(address.account_id, address.amount)
            else:
                raise TypeError(f"Unsupported deposit address: {address!r}")
            if transaction is not None and transaction.kind is TransactionKind.DEPOSIT:
                return transaction
        raise NotFoundError("Transaction not found or already processed")

    async def _resolve_deposit(self, transaction_id: str, target: TransactionStatus) -> SettlementOutcome:
        attempts = self.retries + 1
        for attempt in range(1, attempts + 1):
            try:
                outcome = await self._claim_and_settle(transaction_id, target)
            except AlreadyResolvedError as exc:
                await self.ledger.rollback()
                logger.debug(
                    "Transaction %s already %s, ignoring %s",
                    transaction_id,
                    exc.transaction.status.value,
                    target.value,
                )
                return SettlementOutcome(transaction=exc.transaction, applied=False)
            except _BalanceRaceLost:
                await self.ledger.rollback()
                logger.warning(
                    "Balance changed while settling %s (attempt %d/%d)", transaction_id, attempt, attempts
                )
                continue
            except NotFoundError:
                await self.ledger.rollback()
                raise
            except (LedgerWriteError, SQLAlchemyError) as exc:
                await self.ledger.rollback()
                raise SettlementError(f"Could not settle transaction {transaction_id}") from exc

            logger.info(
                "Transaction %s %s for %s (amount %s)",
                transaction_id,
                target.value,
                outcome.transaction.account_id,
                outcome.transaction.amount,
            )
            if outcome.balance is not None:
                balance = outcome.balance
                await self._publish(lambda events: events.balance_changed(outcome.transaction.account_id, balance))
            await self._publish(lambda events: events.transaction_changed(outcome.transaction))
            return outcome

        raise SettlementError(f"Balance kept changing while settling {transaction_id}, retry later")

    async def _claim_and_settle(self, transaction_id: str, target: TransactionStatus) -> SettlementOutcome:
        transaction = await self.ledger.get_transaction(transaction_id)
        if transaction is None:
            raise NotFoundError(f"Transaction {transaction_id} not found")
        if transaction.status is not TransactionStatus.PENDING:
            raise AlreadyResolvedError(transaction)

        # The gate: only one caller can move this row out of pending.
        claimed = await self.ledger.conditional_update_transaction_status(
            transaction_id, TransactionStatus.PENDING, target
        )
        if not claimed:
            current = await self.ledger.get_transaction(transaction_id)
            raise AlreadyResolvedError(current or transaction)

        balance: Optional[AccountBalance] = None
        if target is TransactionStatus.SUCCESS:
            account = await self.ledger.get_account(transaction.account_id)
            if account is None:
                raise NotFoundError(f"Account {transaction.account_id} not found")
            balance = AccountBalance(
                balance=account.balance + transaction.amount,
                bonus_balance=account.bonus_balance,
            )
            if not await self.ledger.conditional_update_account(transaction.account_id, account.balances, balance):
                raise _BalanceRaceLost()

        await self.ledger.commit()
        resolved = replace(transaction, status=target, resolved_at=datetime.now(timezone.utc))
        return SettlementOutcome(transaction=resolved, applied=True, balance=balance)

    # -- purchases ----------------------------------------------------------

    async def execute_purchase(
        self,
        account_id: str,
        plan: DataPlan,
        current_balance: int,
        current_bonus_balance: int,
    ) -> PurchaseResult:
        if plan.price <= 0:
            raise ValidationError(f"Plan {plan.id} has no valid price")

        observed = AccountBalance(balance=current_balance, bonus_balance=current_bonus_balance)
        attempts = self.retries + 1
        for attempt in range(1, attempts + 1):
            split = split_payment(plan, observed)
            try:
                result = await self._debit_and_record(account_id, plan, observed, split)
            except (_BalanceRaceLost, LedgerWriteError) as exc:
                await self.ledger.rollback()
                logger.warning(
                    "Purchase of %s by %s lost a race (attempt %d/%d): %s",
                    plan.id,
                    account_id,
                    attempt,
                    attempts,
                    str(exc) or "balance changed",
                )
                observed = await self._reread_balance(account_id)
                continue
            except SQLAlchemyError as exc:
                await self.ledger.rollback()
                raise SettlementError(f"Could not complete purchase of {plan.id}") from exc

            logger.info(
                "Purchase %s of %s by %s (balance -%s, bonus -%s)",
                result.transaction.id,
                plan.id,
                account_id,
                split.balance_used,
                split.bonus_used,
            )
            await self._publish(lambda events: events.balance_changed(account_id, result.balance))
            await self._publish(lambda events: events.transaction_changed(result.transaction))
            return result

        raise SettlementError("Your balance changed during the purchase, please try again")

    async def _debit_and_record(
        self,
        account_id: str,
        plan: DataPlan,
        observed: AccountBalance,
        split: PaymentSplit,
    ) -> PurchaseResult:
        new_balance = AccountBalance(
            balance=observed.balance - split.balance_used,
            bonus_balance=observed.bonus_balance - split.bonus_used,
        )
        if not await self.ledger.conditional_update_account(account_id, observed, new_balance):
            raise _BalanceRaceLost()

        # Generated per attempt; a code from a failed attempt is never shown.
        voucher_code = self.voucher_factory()
        transaction = await self.ledger.create_transaction(
            account_id=account_id,
            kind=TransactionKind.PURCHASE,
            amount=plan.price,
            status=TransactionStatus.SUCCESS,
            description=plan.description,
            voucher_code=voucher_code,
            plan_id=plan.id,
        )
        await self.ledger.commit()
        return PurchaseResult(
            transaction=transaction,
            voucher_code=voucher_code,
            balance=new_balance,
            bonus_used=split.bonus_used,
            balance_used=split.balance_used,
        )

    async def _reread_balance(self, account_id: str) -> AccountBalance:
        try:
            account = await self.ledger.get_account(account_id)
        except SQLAlchemyError as exc:
            raise SettlementError("Could not re-read account balance") from exc
        finally:
            await self.ledger.rollback()
        if account is None:
            raise NotFoundError(f"Account {account_id} not found")
        return account.balances

    # -- balances and history -------------------------------------------------

    async def get_balance(self, account_id: str) -> AccountBalance:
        account = await self.ledger.get_account(account_id)
        if account is None:
            raise NotFoundError(f"Account {account_id} not found")
        return account.balances

    async def list_account_transactions(
        self, account_id: str, limit: int = 20, offset: int = 0
    ) -> Sequence[TransactionRecord]:
        return await self.ledger.query_transactions(TransactionFilter(account_id=account_id), limit, offset)

    # -- bank destination -----------------------------------------------------

    async def set_bank_destination(self, bank_name: str, account_number: str, account_name: str) -> BankDestination:
        fields = [(value or "").strip() for value in (bank_name, account_number, account_name)]
        if not all(fields):
            raise ValidationError("Bank name, account number and account name are all required")

        destination = BankDestination(bank_name=fields[0], account_number=fields[1], account_name=fields[2])
        try:
            await self.ledger.set_bank_destination(destination)
            await self.ledger.commit()
        except SQLAlchemyError as exc:
            await self.ledger.rollback()
            raise SettlementError("Could not save bank details") from exc

        logger.info("Bank destination updated to %s / %s", destination.bank_name, destination.account_number)
        await self._publish(lambda events: events.bank_destination_changed(destination))
        return destination

    async def get_bank_destination(self) -> Optional[BankDestination]:
        return await self.ledger.get_bank_destination()

    async def _publish(self, emit: Callable[[SettlementEvents], Awaitable[None]]) -> None:
        if self.events is None:
            return
        try:
            await emit(self.events)
        except Exception:  # pylint: disable=broad-except
            logger.exception("Failed to publish settlement event")
