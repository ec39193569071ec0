"""
Error taxonomy for RaaS operations.

One exception class per failing account operation. Each carries the
server's (formatted) error message and the Response it came from.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Any, List, Optional

if TYPE_CHECKING:
    from .response import Response


class RaasConfigError(RuntimeError):
    """Raised when required environment configuration is missing or invalid."""


class RaasError(RuntimeError):
    """
    Base error for failed RaaS operations.

    Args:
        message: Server error message, already formatted by Response.
        response: The Response that reported the failure (if any).
    """

    def __init__(self, message: str, response: Optional["Response"] = None) -> None:
        super().__init__(message)
        self.message = message
        self.response = response

    @property
    def invalid_inputs(self) -> Optional[List[Any]]:
        if self.response is None:
            return None
        return self.response.invalid_inputs


class AccountNotFound(RaasError):
    """Raised when show-account fails."""


class AccountCreateFailed(RaasError):
    """Raised when create-account fails."""


class AccountRegisterCreditCardFailed(RaasError):
    """Raised when credit card registration fails."""


class AccountFundFailed(RaasError):
    """Raised when funding from a registered card fails."""
