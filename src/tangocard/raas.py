from __future__ import annotations

import logging
from typing import Optional
from urllib.parse import quote

from .client_base import BaseAPIClient
from .config import RaasConfig
from .response import Response
from .schema import (
    CcFundRequest,
    CcRegisterRequest,
    CreateAccountRequest,
    CreditCardInput,
    FundAccountRequest,
)


logger = logging.getLogger(__name__)


class RaasClient(BaseAPIClient):
    """
    Transport for the RaaS v1.1 account endpoints.

    Every method performs exactly one HTTP call and returns a Response,
    whatever the server said. Deciding what a failed reply means is left
    to the caller (see Account).
    """

    def __init__(self, config: Optional[RaasConfig] = None, **kwargs) -> None:
        self.config = config or RaasConfig.from_env()
        super().__init__(
            base_url=self.config.base_url,
            auth=(self.config.platform_name, self.config.platform_key),
            timeout=self.config.timeout,
            **kwargs,
        )
        logger.info(f"RaasClient initialized for {self.base_url} as {self.config.platform_name}.")

    def _wrap(self, status_code: int, body) -> Response:
        return Response(status_code, body, error_detail=self.config.error_detail)

    # -------------------------------------------------
    # Accounts
    # -------------------------------------------------
    def show_account(self, customer: str, identifier: str) -> Response:
        endpoint = f"/accounts/{quote(customer, safe='')}/{quote(identifier, safe='')}"
        return self._wrap(*self.get_json(endpoint))

    def create_account(self, customer: str, identifier: str, email: str) -> Response:
        request = CreateAccountRequest(customer=customer, identifier=identifier, email=email)
        return self._wrap(*self.post_json("/accounts", request.to_payload()))

    # -------------------------------------------------
    # Funding
    # -------------------------------------------------
    def cc_register(
        self,
        client_ip: str,
        credit_card: CreditCardInput,
        customer: str,
        account_identifier: str,
    ) -> Response:
        request = CcRegisterRequest(
            client_ip=client_ip,
            credit_card=credit_card,
            customer=customer,
            account_identifier=account_identifier,
        )
        return self._wrap(*self.post_json("/cc_register", request.to_payload()))

    def cc_fund(
        self,
        client_ip: str,
        amount: int,
        security_code: str,
        cc_token: str,
        customer: str,
        account_identifier: str,
    ) -> Response:
        request = CcFundRequest(
            client_ip=client_ip,
            amount=amount,
            security_code=security_code,
            cc_token=cc_token,
            customer=customer,
            account_identifier=account_identifier,
        )
        return self._wrap(*self.post_json("/cc_fund", request.to_payload()))

    def fund_account(
        self,
        amount: int,
        client_ip: str,
        credit_card: CreditCardInput,
        customer: str,
        account_identifier: str,
    ) -> Response:
        request = FundAccountRequest(
            amount=amount,
            client_ip=client_ip,
            credit_card=credit_card,
            customer=customer,
            account_identifier=account_identifier,
        )
        return self._wrap(*self.post_json("/funds", request.to_payload()))
