"""Notification specific exceptions."""


class NotificationError(Exception):
    """Base class for outbound notification errors."""


class DispatchError(NotificationError):
    """Raised when the chat platform rejects or cannot receive a message.

    Never propagated past the dispatcher; the operation that triggered the
    notification has already committed.
    """
