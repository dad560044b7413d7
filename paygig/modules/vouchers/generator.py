"""Voucher code generation."""

from __future__ import annotations

import secrets

DEFAULT_DIGITS = 9
DEFAULT_SUFFIX = "S"


def generate_voucher_code(digits: int = DEFAULT_DIGITS, suffix: str = DEFAULT_SUFFIX) -> str:
    """Return ``digits`` zero-padded random decimal digits followed by ``suffix``.

    Uniqueness is not checked here; the ledger store's unique index on
    ``voucher_code`` rejects the rare collision and the purchase is retried.
    """
    if digits <= 0:
        raise ValueError("digits must be positive")
    value = secrets.randbelow(10**digits)
    return f"{value:0{digits}d}{suffix}"


def is_voucher_code(code: str, digits: int = DEFAULT_DIGITS, suffix: str = DEFAULT_SUFFIX) -> bool:
    return len(code) == digits + len(suffix) and code.endswith(suffix) and code[:digits].isdigit()
