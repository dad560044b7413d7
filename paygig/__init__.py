"""PayGig wallet and voucher server."""

__version__ = "0.1.0"
