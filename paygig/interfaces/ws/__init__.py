"""Websocket wallet feeds."""

from .manager import WalletFeedManager, manager

__all__ = ["WalletFeedManager", "manager"]
