"""Admin-channel message rendering."""

from __future__ import annotations

from html import escape
from typing import Any

from .models import Notification, NotificationKind, OutboundMessage


def format_amount(amount: int | float) -> str:
    return f"₦{amount:,.0f}"


def deposit_keyboard(transaction_id: str) -> dict[str, Any]:
    return {
        "inline_keyboard": [
            [
                {"text": "✅ Approve Transaction", "callback_data": f"approve_{transaction_id}"},
                {"text": "❌ Decline", "callback_data": f"decline_{transaction_id}"},
            ]
        ]
    }


def render_notification(notification: Notification) -> OutboundMessage:
    payload = notification.payload
    email = escape(str(payload.get("email") or "N/A"))

    if notification.kind is NotificationKind.SIGNUP:
        phone = escape(str(payload.get("phone") or "N/A"))
        return OutboundMessage(f"🔔 <b>New Registration</b>\n\n📧 Email: {email}\n📱 Phone: {phone}")

    if notification.kind is NotificationKind.LOGIN:
        return OutboundMessage(f"🔔 <b>User Login</b>\n\n📧 Email: {email}")

    transaction_id = str(payload["transaction_id"])
    return OutboundMessage(
        text=(
            "💰 <b>New Deposit Request</b>\n\n"
            f"📧 From: {email}\n"
            f"💵 Amount: {format_amount(payload['amount'])}\n"
            f"🆔 User ID: {escape(str(payload['account_id']))}\n"
            f"🧾 Transaction: <code>{escape(transaction_id)}</code>"
        ),
        reply_markup=deposit_keyboard(transaction_id),
    )
