"""Reply texts for the admin channel (HTML parse mode)."""

from __future__ import annotations

from datetime import datetime
from html import escape
from typing import Optional, Sequence

from paygig.modules.accounts.models import ActivityEntry
from paygig.modules.notifications.messages import format_amount
from paygig.modules.reports.models import LedgerStats
from paygig.modules.settlement.models import (
    BankDestination,
    TransactionKind,
    TransactionRecord,
    TransactionStatus,
)

HELP_TEXT = (
    "🤖 <b>PayGig Admin Bot</b>\n\n"
    "📋 <b>Commands:</b>\n\n"
    "/transactions - All recent transactions\n"
    "/transactions pending - Pending only\n"
    "/transactions success - Successful only\n"
    "/transactions failed - Failed only\n"
    "/transactions deposit - Deposits only\n"
    "/transactions purchase - Purchases only\n\n"
    "/logins - Recent user logins\n"
    "/registers - Recent registrations\n\n"
    "/setbank Bank|AccNo|AccName - Update bank details\n"
    "/stats - Overview statistics"
)

UNKNOWN_COMMAND = "❓ Unknown command. Type /help to see available commands."
NOT_FOUND = "❌ Transaction not found or already processed"
UNSUPPORTED_ACTION = "⚠️ Unsupported action"
SETTLEMENT_RETRY = "⚠️ The ledger was busy, please try again"

SETBANK_USAGE = (
    "⚠️ <b>Invalid format</b>\n\n"
    "Use: <code>/setbank Bank Name|Account Number|Account Name</code>\n\n"
    "Example:\n<code>/setbank GTBank|0123456789|John Doe</code>"
)

TRANSACTIONS_USAGE = (
    "⚠️ <b>Invalid filter</b>\n\n"
    "Use: <code>/transactions [pending|success|failed|deposit|purchase]</code>"
)

_STATUS_ICONS = {
    TransactionStatus.SUCCESS: "✅",
    TransactionStatus.PENDING: "⏳",
    TransactionStatus.FAILED: "❌",
}


def format_timestamp(value: Optional[datetime]) -> str:
    if value is None:
        return "-"
    return value.strftime("%b %d, %I:%M %p")


def transactions_text(records: Sequence[TransactionRecord], label: Optional[str] = None) -> str:
    if not records:
        return f"📭 No {label + ' ' if label else ''}transactions found."

    lines = [f"📊 <b>Recent Transactions{f' ({label})' if label else ''}</b>\n"]
    for record in records:
        icon = "💰" if record.kind is TransactionKind.DEPOSIT else "🛒"
        description = escape(record.description or record.kind.value)
        lines.append(
            f"{icon} {_STATUS_ICONS[record.status]} {format_amount(record.amount)} - {description}\n"
            f"📅 {format_timestamp(record.created_at)}\n"
        )
    return "\n".join(lines)


def logins_text(entries: Sequence[ActivityEntry]) -> str:
    if not entries:
        return "📭 No recent logins found."
    lines = ["🔐 <b>Recent Logins</b>\n"]
    for entry in entries:
        lines.append(f"📧 {escape(entry.user_email or 'N/A')}\n📅 {format_timestamp(entry.created_at)}\n")
    return "\n".join(lines)


def registrations_text(entries: Sequence[ActivityEntry]) -> str:
    if not entries:
        return "📭 No recent registrations found."
    lines = ["📝 <b>Recent Registrations</b>\n"]
    for entry in entries:
        details = f"{escape(entry.details)}\n" if entry.details else ""
        lines.append(
            f"📧 {escape(entry.user_email or 'N/A')}\n{details}📅 {format_timestamp(entry.created_at)}\n"
        )
    return "\n".join(lines)


def stats_text(stats: LedgerStats) -> str:
    return (
        "📊 <b>PayGig Statistics</b>\n\n"
        f"👥 Total Users: {stats.total_users}\n"
        f"📦 Total Transactions: {stats.total_transactions}\n"
        f"⏳ Pending Deposits: {stats.pending_deposits}\n"
        f"💰 Total Deposits: {format_amount(stats.deposit_volume)}\n"
        f"🛒 Total Purchases: {format_amount(stats.purchase_volume)}"
    )


def bank_updated_text(destination: BankDestination) -> str:
    return (
        "✅ <b>Bank Details Updated!</b>\n\n"
        f"🏦 Bank: {escape(destination.bank_name)}\n"
        f"🔢 Account: {escape(destination.account_number)}\n"
        f"👤 Name: {escape(destination.account_name)}\n\n"
        "💡 Changes are live immediately on the app."
    )


def resolved_text(transaction: TransactionRecord) -> str:
    if transaction.status is TransactionStatus.SUCCESS:
        title = "✅ <b>Transaction Approved</b>"
    else:
        title = "❌ <b>Transaction Declined</b>"
    return (
        f"{title}\n\n"
        f"💵 Amount: {format_amount(transaction.amount)}\n"
        f"🆔 User: {escape(transaction.account_id)}"
    )


def resolved_answer(transaction: TransactionRecord) -> str:
    if transaction.status is TransactionStatus.SUCCESS:
        return "✅ Transaction approved!"
    return "❌ Transaction declined"


def already_resolved_answer(transaction: TransactionRecord) -> str:
    state = "approved" if transaction.status is TransactionStatus.SUCCESS else "declined"
    return f"ℹ️ Transaction was already {state}"
