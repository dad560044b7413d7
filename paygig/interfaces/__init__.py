"""Inbound adapters: HTTP routers and websocket feeds."""
