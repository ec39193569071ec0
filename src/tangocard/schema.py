from __future__ import annotations

from typing import Annotated, Any, Dict, Union

from pydantic import BaseModel, ConfigDict, Field


class BillingAddress(BaseModel):
    """Billing address sent along with a credit card."""

    f_name: str = Field(..., description="First name")
    l_name: str = Field(..., description="Last name")
    address: str = Field(..., description="Street address")
    city: str = Field(..., description="City")
    state: str = Field(..., description="State / region code")
    zip: str = Field(..., description="Postal code")
    country: str = Field(..., description="Country code, e.g. USA")
    email: str = Field(..., description="Billing contact email")


class CreditCard(BaseModel):
    """
    Credit card payload as the RaaS fund/register endpoints expect it.

    Values are forwarded as-is; the card is never checked locally
    (expiration format differs between endpoints, e.g. 2020-01 vs 01/17).
    """

    number: str = Field(..., description="Card number")
    expiration: str = Field(..., description="Expiration as the endpoint expects it")
    security_code: str = Field(..., description="CVV")
    billing_address: BillingAddress

    def __repr__(self) -> str:
        return f"CreditCard(number='****{self.number[-4:]}', expiration={self.expiration!r})"

    __str__ = __repr__


# A plain dict is forwarded unchanged; CreditCard is dumped to the same shape.
CreditCardInput = Annotated[
    Union[Dict[str, Any], CreditCard], Field(union_mode="left_to_right")
]


class _Request(BaseModel):
    model_config = ConfigDict(frozen=True)

    def to_payload(self) -> Dict[str, Any]:
        return self.model_dump()


class CreateAccountRequest(_Request):
    customer: str
    identifier: str
    email: str


class CcRegisterRequest(_Request):
    client_ip: str
    credit_card: CreditCardInput
    customer: str
    account_identifier: str


class CcFundRequest(_Request):
    client_ip: str
    amount: int = Field(..., description="Amount in cents")
    security_code: str
    cc_token: str
    customer: str
    account_identifier: str


class FundAccountRequest(_Request):
    amount: int = Field(..., description="Amount in cents")
    client_ip: str
    credit_card: CreditCardInput
    customer: str
    account_identifier: str
