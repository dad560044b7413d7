"""Admin reports."""

from .models import LedgerStats

__all__ = ["LedgerStats"]
