from __future__ import annotations

import logging
import re
from typing import Any, Dict, Optional, Type

from pydantic import BaseModel, ConfigDict, Field, PrivateAttr, field_validator

from .exceptions import (
    AccountCreateFailed,
    AccountFundFailed,
    AccountNotFound,
    AccountRegisterCreditCardFailed,
    RaasError,
)
from .raas import RaasClient
from .response import Response
from .schema import CreditCardInput


logger = logging.getLogger(__name__)


_default_client: Optional[RaasClient] = None

_LEADING_INT = re.compile(r"\s*([-+]?\d+)")


def default_client() -> RaasClient:
    """
    Shared RaasClient built from the environment on first use.

    Used whenever no ``client=`` is passed, so its session is reused for the
    life of the process. Pass your own client (ideally as a context manager)
    to control when the session is closed.
    """
    global _default_client
    if _default_client is None:
        _default_client = RaasClient()
    return _default_client


def _resolve_client(client: Optional[RaasClient]) -> RaasClient:
    return client if client is not None else default_client()


class Account(BaseModel):
    """
    A RaaS account, as last reported by the server.

    Build one with ``Account.find``, ``Account.create`` or
    ``Account.find_or_create``; those only return an Account when the
    server reported success. The balance is a snapshot and is not refreshed
    by the funding methods.

    Example:
        >>> account = Account.find("bonusly", "test")
        >>> account.balance
        1200
    """

    model_config = ConfigDict(frozen=True)

    customer: str = Field(..., description="Customer (platform sub-account) name")
    identifier: str = Field(..., description="Account identifier within the customer")
    email: Optional[str] = Field(None, description="Account contact email")
    available_balance: int = Field(0, description="Spendable balance in cents")

    _client: Optional[RaasClient] = PrivateAttr(default=None)

    @field_validator("customer", "identifier", "email", mode="before")
    @classmethod
    def validate_text_fields(cls, v):
        if v is None or isinstance(v, str):
            return v
        return str(v)

    @field_validator("available_balance", mode="before")
    @classmethod
    def validate_available_balance(cls, v):
        # Leading integer prefix, 0 when there is none ("12.5" -> 12, "n/a" -> 0).
        if v is None or isinstance(v, bool):
            return 0
        if isinstance(v, (int, float)):
            return int(v)
        match = _LEADING_INT.match(str(v))
        return int(match.group(1)) if match else 0

    @property
    def balance(self) -> int:
        return self.available_balance

    def __eq__(self, other: object) -> bool:
        # The transport is not part of the value.
        if not isinstance(other, Account):
            return NotImplemented
        return type(self) is type(other) and self.model_dump() == other.model_dump()

    def __hash__(self) -> int:
        return hash((type(self), self.customer, self.identifier, self.email, self.available_balance))

    # -------------------------------------------------
    # Constructors
    # -------------------------------------------------
    @classmethod
    def _from_response(
        cls,
        response: Response,
        client: RaasClient,
        error_cls: Type[RaasError],
    ) -> "Account":
        data = response.account
        if not isinstance(data, dict) or data.get("customer") is None or data.get("identifier") is None:
            logger.warning(f"Successful response without account data: {response.parsed_response}")
            raise error_cls("Response did not include account data", response)
        account = cls.model_validate(data)
        account._client = client
        logger.info(
            f"Loaded account {account.customer}/{account.identifier} "
            f"(balance={account.available_balance})"
        )
        return account

    @classmethod
    def find(
        cls,
        customer: str,
        identifier: str,
        client: Optional[RaasClient] = None,
    ) -> "Account":
        """
        Find an account by customer and identifier.

        Raises:
            AccountNotFound: the server reported failure.
        """
        client = _resolve_client(client)
        response = client.show_account(customer, identifier)
        if not response.success:
            logger.warning(f"show_account failed for {customer}/{identifier}: {response.error_message}")
            raise AccountNotFound(response.error_message, response)
        return cls._from_response(response, client, AccountNotFound)

    @classmethod
    def create(
        cls,
        customer: str,
        identifier: str,
        email: str,
        client: Optional[RaasClient] = None,
    ) -> "Account":
        """
        Create an account.

        Raises:
            AccountCreateFailed: the server reported failure.
        """
        client = _resolve_client(client)
        response = client.create_account(customer, identifier, email)
        if not response.success:
            logger.warning(f"create_account failed for {customer}/{identifier}: {response.error_message}")
            raise AccountCreateFailed(response.error_message, response)
        return cls._from_response(response, client, AccountCreateFailed)

    @classmethod
    def find_or_create(
        cls,
        customer: str,
        identifier: str,
        email: str,
        client: Optional[RaasClient] = None,
    ) -> "Account":
        """
        Find an account, creating it when the lookup reports it missing.

        Only AccountNotFound triggers the create; transport errors from the
        lookup propagate unchanged.
        """
        client = _resolve_client(client)
        try:
            return cls.find(customer, identifier, client=client)
        except AccountNotFound:
            logger.info(f"Account {customer}/{identifier} not found, creating it.")
            return cls.create(customer, identifier, email, client=client)

    # -------------------------------------------------
    # Funding
    # -------------------------------------------------
    def _transport(self) -> RaasClient:
        if self._client is None:
            self._client = default_client()
        return self._client

    def cc_register(self, client_ip: str, credit_card: CreditCardInput) -> Response:
        """
        Register a credit card to this account.

        Store ``response.cc_token`` and ``response.active_date`` from the
        returned Response; the token is needed for ``cc_fund``.

        Raises:
            AccountRegisterCreditCardFailed: the server reported failure.
        """
        response = self._transport().cc_register(
            client_ip=client_ip,
            credit_card=credit_card,
            customer=self.customer,
            account_identifier=self.identifier,
        )
        if not response.success:
            logger.warning(f"cc_register failed for {self.customer}/{self.identifier}: {response.error_message}")
            raise AccountRegisterCreditCardFailed(response.error_message, response)
        return response

    def cc_fund(
        self,
        client_ip: str,
        amount: int,
        security_code: str,
        cc_token: str,
    ) -> Response:
        """
        Add funds from a previously registered credit card.

        Raises:
            AccountFundFailed: the server reported failure.
        """
        response = self._transport().cc_fund(
            client_ip=client_ip,
            amount=amount,
            security_code=security_code,
            cc_token=cc_token,
            customer=self.customer,
            account_identifier=self.identifier,
        )
        if not response.success:
            logger.warning(f"cc_fund failed for {self.customer}/{self.identifier}: {response.error_message}")
            raise AccountFundFailed(response.error_message, response)
        return response

    def fund(self, amount: int, client_ip: str, credit_card: CreditCardInput) -> Response:
        """
        Add funds to the account with a one-off credit card.

        Unlike the other operations this does NOT check ``success``: the
        transport's Response is returned as-is and the caller must inspect it.
        """
        return self._transport().fund_account(
            amount=amount,
            client_ip=client_ip,
            credit_card=credit_card,
            customer=self.customer,
            account_identifier=self.identifier,
        )

    def to_dict(self) -> Dict[str, Any]:
        return self.model_dump()
