"""Funding flow exceptions."""


class FundingFlowError(Exception):
    """Base class for funding flow errors."""


class InvalidTransitionError(FundingFlowError):
    """Raised when an action is not allowed in the current step."""
