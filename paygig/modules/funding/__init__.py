"""Client wallet funding flow."""

from .exceptions import FundingFlowError, InvalidTransitionError
from .flow import FundingFlow, FundingStep

__all__ = ["FundingFlow", "FundingFlowError", "FundingStep", "InvalidTransitionError"]
