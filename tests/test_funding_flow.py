from __future__ import annotations

from dataclasses import replace
from datetime import datetime, timezone

import pytest

from paygig.modules.funding import FundingFlow, FundingStep, InvalidTransitionError
from paygig.modules.settlement.exceptions import SettlementError, ValidationError
from paygig.modules.settlement.models import TransactionKind, TransactionRecord, TransactionStatus


def _deposit(amount: int) -> TransactionRecord:
    return TransactionRecord(
        id="tx-1",
        account_id="acct-1",
        kind=TransactionKind.DEPOSIT,
        amount=amount,
        status=TransactionStatus.PENDING,
        voucher_code=None,
        description=None,
        created_at=datetime.now(timezone.utc),
    )


class FakeRpc:
    def __init__(self, error: Exception | None = None) -> None:
        self.error = error
        self.amounts: list[int] = []

    async def __call__(self, amount: int) -> TransactionRecord:
        self.amounts.append(amount)
        if self.error is not None:
            raise self.error
        return _deposit(amount)


async def _pending_flow(balance: int | None = None) -> FundingFlow:
    flow = FundingFlow(FakeRpc())
    flow.enter_amount("5000")
    await flow.confirm_transfer(current_balance=balance)
    return flow


@pytest.mark.parametrize("raw", ["", "abc", "0", "-10", "12.5"])
def test_enter_amount_rejects_invalid_input(raw):
    flow = FundingFlow(FakeRpc())

    with pytest.raises(ValidationError):
        flow.enter_amount(raw)

    assert flow.step is FundingStep.AMOUNT


async def test_confirm_transfer_waits_for_approval():
    rpc = FakeRpc()
    flow = FundingFlow(rpc)

    flow.enter_amount(5000)
    record = await flow.confirm_transfer()

    assert rpc.amounts == [5000]
    assert record.status is TransactionStatus.PENDING
    assert flow.step is FundingStep.PENDING_APPROVAL
    assert flow.outcome is None


async def test_failed_request_stays_on_transfer_step():
    flow = FundingFlow(FakeRpc(SettlementError("busy")))
    flow.enter_amount(5000)

    with pytest.raises(SettlementError):
        await flow.confirm_transfer()

    assert flow.step is FundingStep.AWAITING_TRANSFER


async def test_confirm_before_amount_is_rejected():
    flow = FundingFlow(FakeRpc())

    with pytest.raises(InvalidTransitionError):
        await flow.confirm_transfer()


async def test_resolves_from_matching_transaction_event():
    flow = await _pending_flow()

    assert not flow.on_transaction_event(replace(flow.transaction, id="other", status=TransactionStatus.SUCCESS))
    assert flow.step is FundingStep.PENDING_APPROVAL

    assert flow.on_transaction_event(replace(flow.transaction, status=TransactionStatus.FAILED))
    assert flow.step is FundingStep.RESOLVED
    assert flow.outcome is TransactionStatus.FAILED
    assert not flow.succeeded


class FakeLedger:
    def __init__(self) -> None:
        self.records: dict[str, TransactionRecord] = {}
        self.reads: list[str] = []

    async def __call__(self, transaction_id: str) -> TransactionRecord | None:
        self.reads.append(transaction_id)
        return self.records.get(transaction_id)


async def test_balance_rise_resolves_only_after_deposit_is_confirmed():
    ledger = FakeLedger()
    flow = FundingFlow(FakeRpc(), ledger)
    flow.enter_amount("5000")
    deposit = await flow.confirm_transfer(current_balance=1000)
    ledger.records[deposit.id] = deposit

    assert not await flow.on_balance_change(3000)
    assert ledger.reads == []

    assert not await flow.on_balance_change(6000)
    assert flow.step is FundingStep.PENDING_APPROVAL

    ledger.records[deposit.id] = replace(deposit, status=TransactionStatus.SUCCESS)
    assert await flow.on_balance_change(6000)
    assert flow.succeeded


async def test_other_credit_does_not_hide_a_declined_deposit():
    ledger = FakeLedger()
    flow = FundingFlow(FakeRpc(), ledger)
    flow.enter_amount("5000")
    deposit = await flow.confirm_transfer(current_balance=1000)
    ledger.records[deposit.id] = deposit

    assert not await flow.on_balance_change(9000)
    assert not flow.succeeded

    assert flow.on_transaction_event(replace(deposit, status=TransactionStatus.FAILED))
    assert flow.outcome is TransactionStatus.FAILED
    assert not flow.succeeded


async def test_balance_change_without_refresh_keeps_waiting():
    flow = await _pending_flow(balance=1000)

    assert not await flow.on_balance_change(6000)
    assert flow.step is FundingStep.PENDING_APPROVAL


async def test_reset_returns_to_amount():
    flow = await _pending_flow()

    flow.reset()

    assert flow.step is FundingStep.AMOUNT
    assert flow.transaction is None
    assert flow.amount is None
