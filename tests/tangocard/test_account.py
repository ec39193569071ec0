"""
Unit tests for Account.

The RaaS transport is replaced by a MagicMock returning canned Responses,
so every test checks exactly which remote call was made and how the reply
was translated.

Run with: pytest tests/tangocard/test_account.py -v
"""

import pytest
from unittest.mock import MagicMock

from pydantic import ValidationError

from tangocard.account import Account
from tangocard.client_base import APIClientError
from tangocard.exceptions import (
    AccountCreateFailed,
    AccountFundFailed,
    AccountNotFound,
    AccountRegisterCreditCardFailed,
    RaasError,
)
from tangocard.raas import RaasClient
from tangocard.response import Response


ACCOUNT_BODY = {
    "success": True,
    "account": {
        "customer": "acme",
        "identifier": "u1",
        "email": "a@b.com",
        "available_balance": "500",
    },
}

NOT_FOUND_BODY = {"success": False, "error_message": "Account not found"}

CREDIT_CARD = {
    "number": "4111111111111111",
    "expiration": "01/17",
    "security_code": "123",
    "billing_address": {
        "f_name": "Jane",
        "l_name": "User",
        "address": "123 Main Street",
        "city": "Anytown",
        "state": "NY",
        "zip": "11222",
        "country": "USA",
        "email": "jane@company.com",
    },
}


@pytest.fixture
def raas():
    return MagicMock(spec=RaasClient)


@pytest.fixture
def account(raas):
    raas.show_account.return_value = Response(200, ACCOUNT_BODY)
    return Account.find("acme", "u1", client=raas)


class TestFind:
    """Tests for Account.find."""

    @pytest.mark.unit
    def test_find_returns_account_matching_body(self, raas):
        raas.show_account.return_value = Response(200, ACCOUNT_BODY)

        account = Account.find("acme", "u1", client=raas)

        raas.show_account.assert_called_once_with("acme", "u1")
        assert account.customer == "acme"
        assert account.identifier == "u1"
        assert account.email == "a@b.com"
        assert account.balance == 500
        assert account.available_balance == 500

    @pytest.mark.unit
    def test_find_failure_raises_account_not_found(self, raas):
        raas.show_account.return_value = Response(404, NOT_FOUND_BODY)

        with pytest.raises(AccountNotFound) as e:
            Account.find("acme", "missing", client=raas)

        assert str(e.value) == "Account not found"
        assert e.value.response.code == 404
        assert isinstance(e.value, RaasError)

    @pytest.mark.unit
    def test_find_uses_env_client_when_none_given(self, monkeypatch):
        fake = MagicMock(spec=RaasClient)
        fake.show_account.return_value = Response(200, ACCOUNT_BODY)
        factory = MagicMock(return_value=fake)
        monkeypatch.setattr("tangocard.account.RaasClient", factory)
        monkeypatch.setattr("tangocard.account._default_client", None)

        account = Account.find("acme", "u1")
        again = Account.find("acme", "u1")

        assert account.identifier == "u1"
        assert again == account
        factory.assert_called_once_with()
        assert fake.show_account.call_count == 2

    @pytest.mark.unit
    def test_find_success_without_account_raises_typed_error(self, raas):
        raas.show_account.return_value = Response(200, {"success": True})

        with pytest.raises(AccountNotFound) as e:
            Account.find("acme", "u1", client=raas)

        assert "did not include account data" in str(e.value)

    @pytest.mark.unit
    def test_create_success_without_account_raises_typed_error(self, raas):
        raas.create_account.return_value = Response(200, {"success": True, "account": None})

        with pytest.raises(AccountCreateFailed):
            Account.create("acme", "u1", "a@b.com", client=raas)


class TestAccountModel:
    """Tests for the Account value object itself."""

    @pytest.mark.unit
    def test_account_is_immutable(self, account):
        with pytest.raises(ValidationError):
            account.available_balance = 1

    @pytest.mark.unit
    @pytest.mark.parametrize(
        "raw,expected",
        [
            ("1200", 1200),
            (1200, 1200),
            ("12.0", 12),
            (None, 0),
            ("", 0),
            ("n/a", 0),
            (" 250 cents", 250),
            ("-40", -40),
        ],
    )
    def test_available_balance_coerced_to_int(self, raw, expected):
        account = Account(customer="acme", identifier="u1", available_balance=raw)
        assert account.balance == expected

    @pytest.mark.unit
    def test_to_dict(self, account):
        assert account.to_dict() == {
            "customer": "acme",
            "identifier": "u1",
            "email": "a@b.com",
            "available_balance": 500,
        }


class TestCreate:
    """Tests for Account.create and Account.find_or_create."""

    @pytest.mark.unit
    def test_create_returns_account(self, raas):
        body = {
            "success": True,
            "account": {"customer": "acme", "identifier": "u2", "email": "c@d.com", "available_balance": 0},
        }
        raas.create_account.return_value = Response(200, body)

        account = Account.create("acme", "u2", "c@d.com", client=raas)

        raas.create_account.assert_called_once_with("acme", "u2", "c@d.com")
        assert account.identifier == "u2"
        assert account.balance == 0

    @pytest.mark.unit
    def test_create_failure_carries_invalid_inputs(self, raas):
        body = {
            "success": False,
            "error_message": "The input failed validation.",
            "invalid_inputs": [{"field": "email", "error": "is not a valid email"}],
        }
        raas.create_account.return_value = Response(400, body)

        with pytest.raises(AccountCreateFailed) as e:
            Account.create("acme", "u2", "bad", client=raas)

        assert "The input failed validation." in str(e.value)
        assert "email: is not a valid email" in str(e.value)
        assert e.value.invalid_inputs == body["invalid_inputs"]

    @pytest.mark.unit
    def test_find_or_create_returns_existing_without_create(self, raas):
        raas.show_account.return_value = Response(200, ACCOUNT_BODY)

        account = Account.find_or_create("acme", "u1", "a@b.com", client=raas)

        assert account.identifier == "u1"
        raas.create_account.assert_not_called()

    @pytest.mark.unit
    def test_find_or_create_creates_once_when_not_found(self, raas):
        raas.show_account.return_value = Response(404, NOT_FOUND_BODY)
        raas.create_account.return_value = Response(200, ACCOUNT_BODY)

        account = Account.find_or_create("acme", "u1", "a@b.com", client=raas)

        raas.create_account.assert_called_once_with("acme", "u1", "a@b.com")
        assert account.balance == 500

    @pytest.mark.unit
    def test_find_or_create_propagates_create_failure(self, raas):
        raas.show_account.return_value = Response(404, NOT_FOUND_BODY)
        raas.create_account.return_value = Response(400, {"success": False, "error_message": "dup"})

        with pytest.raises(AccountCreateFailed):
            Account.find_or_create("acme", "u1", "a@b.com", client=raas)

    @pytest.mark.unit
    def test_find_or_create_does_not_swallow_transport_errors(self, raas):
        raas.show_account.side_effect = APIClientError("Request failed")

        with pytest.raises(APIClientError):
            Account.find_or_create("acme", "u1", "a@b.com", client=raas)

        raas.create_account.assert_not_called()


class TestFunding:
    """Tests for cc_register, cc_fund and fund."""

    @pytest.mark.unit
    def test_cc_register_returns_response_with_token(self, raas, account):
        raas.cc_register.return_value = Response(
            200, {"success": True, "cc_token": "25992625", "active_date": 1409949084}
        )

        response = account.cc_register("128.128.128.128", CREDIT_CARD)

        raas.cc_register.assert_called_once_with(
            client_ip="128.128.128.128",
            credit_card=CREDIT_CARD,
            customer="acme",
            account_identifier="u1",
        )
        assert response.cc_token == "25992625"
        assert response.active_date == 1409949084

    @pytest.mark.unit
    def test_cc_register_failure_raises(self, raas, account):
        raas.cc_register.return_value = Response(
            400, {"success": False, "error_message": "Card declined"}
        )

        with pytest.raises(AccountRegisterCreditCardFailed) as e:
            account.cc_register("128.128.128.128", CREDIT_CARD)

        assert str(e.value) == "Card declined"

    @pytest.mark.unit
    def test_cc_fund_success(self, raas, account):
        raas.cc_fund.return_value = Response(200, {"success": True, "fund_id": "RF-1"})

        response = account.cc_fund("128.128.128.128", 10000, "123", "25992625")

        raas.cc_fund.assert_called_once_with(
            client_ip="128.128.128.128",
            amount=10000,
            security_code="123",
            cc_token="25992625",
            customer="acme",
            account_identifier="u1",
        )
        assert response.success is True

    @pytest.mark.unit
    def test_cc_fund_failure_raises(self, raas, account):
        raas.cc_fund.return_value = Response(400, {"success": False, "error_message": "Insufficient"})

        with pytest.raises(AccountFundFailed) as e:
            account.cc_fund("128.128.128.128", 10000, "123", "bad-token")

        assert str(e.value) == "Insufficient"

    @pytest.mark.unit
    def test_fund_returns_response_without_checking_success(self, raas, account):
        failed = Response(400, {"success": False, "error_message": "Card declined"})
        raas.fund_account.return_value = failed

        response = account.fund(10000, "128.128.128.128", CREDIT_CARD)

        assert response is failed
        raas.fund_account.assert_called_once_with(
            amount=10000,
            client_ip="128.128.128.128",
            credit_card=CREDIT_CARD,
            customer="acme",
            account_identifier="u1",
        )

    @pytest.mark.unit
    def test_funding_does_not_change_balance_snapshot(self, raas, account):
        raas.cc_fund.return_value = Response(200, {"success": True})

        account.cc_fund("128.128.128.128", 10000, "123", "25992625")

        assert account.balance == 500


class TestAccountValue:
    """Accounts built from server data compare by their fields only."""

    @pytest.mark.unit
    def test_numeric_identifiers_coerced_to_str(self, raas):
        body = {
            "success": True,
            "account": {"customer": 7, "identifier": 42, "email": "a@b.com", "available_balance": "n/a"},
        }
        raas.show_account.return_value = Response(200, body)

        account = Account.find("7", "42", client=raas)

        assert account.customer == "7"
        assert account.identifier == "42"
        assert account.balance == 0

    @pytest.mark.unit
    def test_accounts_loaded_through_different_clients_are_equal(self):
        first = MagicMock(spec=RaasClient)
        second = MagicMock(spec=RaasClient)
        first.show_account.return_value = Response(200, ACCOUNT_BODY)
        second.show_account.return_value = Response(200, ACCOUNT_BODY)

        a = Account.find("acme", "u1", client=first)
        b = Account.find("acme", "u1", client=second)

        assert a == b
        assert hash(a) == hash(b)
        assert len({a, b}) == 1

    @pytest.mark.unit
    def test_accounts_with_different_balances_differ(self, account):
        other = Account(customer="acme", identifier="u1", email="a@b.com", available_balance=501)
        assert account != other

    @pytest.mark.unit
    def test_instance_methods_fall_back_to_shared_client(self, monkeypatch):
        fake = MagicMock(spec=RaasClient)
        fake.cc_fund.return_value = Response(200, {"success": True})
        monkeypatch.setattr("tangocard.account._default_client", fake)

        account = Account(customer="acme", identifier="u1")
        account.cc_fund("128.128.128.128", 100, "123", "25992625")

        fake.cc_fund.assert_called_once()
