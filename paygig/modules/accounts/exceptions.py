"""Account domain specific exceptions."""


class AccountError(Exception):
    """Base class for account domain errors."""


class AccountAlreadyExistsError(AccountError):
    """Raised when a profile already exists for the identity subject."""


class AccountNotFoundError(AccountError):
    """Raised when the requested account cannot be found."""
