"""Read models for admin reports."""

from __future__ import annotations

from dataclasses import dataclass


@dataclass(slots=True, frozen=True)
class LedgerStats:
    total_users: int
    total_transactions: int
    pending_deposits: int
    deposit_volume: int
    purchase_volume: int
