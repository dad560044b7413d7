"""Voucher code exports"""

from .generator import generate_voucher_code, is_voucher_code

__all__ = ["generate_voucher_code", "is_voucher_code"]
