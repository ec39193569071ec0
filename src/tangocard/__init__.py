"""
Tango Card RaaS - Python client

Thin client for the Rewards-as-a-Service account and funding endpoints.
Every operation is one HTTP call; failures reported by the server are
raised as typed exceptions carrying the server's error message.

Usage:
------
    from tangocard import Account

    account = Account.find_or_create("bonusly", "test", "dev@bonus.ly")
    response = account.cc_register("128.128.128.128", credit_card)
    account.cc_fund("128.128.128.128", 10000, "123", response.cc_token)

Configuration:
--------------
Set these environment variables:

    RAAS_PLATFORM_NAME   - Platform name (basic auth user)
    RAAS_PLATFORM_KEY    - Platform key (basic auth password)
    RAAS_BASE_URL        - Override the API root (default: sandbox v1.1)
    RAAS_TIMEOUT_SEC     - Request timeout (default: 15)
    RAAS_ERROR_DETAIL    - invalid_inputs | raw | none
"""

# -----------------------------------------------------------------------------
# Transport
# -----------------------------------------------------------------------------
from .client_base import (
    BaseAPIClient,
    APIClientError,
    APIClientTimeout,
)
from .config import RaasConfig
from .raas import RaasClient
from .response import Response

# -----------------------------------------------------------------------------
# Domain
# -----------------------------------------------------------------------------
from .account import Account
from .schema import BillingAddress, CreditCard

# -----------------------------------------------------------------------------
# Errors
# -----------------------------------------------------------------------------
from .exceptions import (
    RaasError,
    RaasConfigError,
    AccountNotFound,
    AccountCreateFailed,
    AccountRegisterCreditCardFailed,
    AccountFundFailed,
)


__all__ = [
    # Transport
    "BaseAPIClient",
    "APIClientError",
    "APIClientTimeout",
    "RaasConfig",
    "RaasClient",
    "Response",
    # Domain
    "Account",
    "BillingAddress",
    "CreditCard",
    # Errors
    "RaasError",
    "RaasConfigError",
    "AccountNotFound",
    "AccountCreateFailed",
    "AccountRegisterCreditCardFailed",
    "AccountFundFailed",
]
