"""Pytest configuration and shared fixtures for all tests.

This module provides shared test fixtures including:
- Sample wallet credentials (EC_v1 and RSA_v1)
- A payout attempt builder
"""

import json

import pytest

from payout_authorization.models.credential import PaymentCredential
from payout_authorization.models.recipient import (
    PaymentMethod,
    PaymentMethodType,
    PayoutAttempt,
    RecipientContact,
)
from tests.helpers import ec_credential_dict, rsa_credential_dict


@pytest.fixture
def ec_credential() -> PaymentCredential:
    return PaymentCredential(payment_data=json.dumps(ec_credential_dict()).encode("utf-8"))


@pytest.fixture
def rsa_credential() -> PaymentCredential:
    return PaymentCredential(payment_data=json.dumps(rsa_credential_dict()).encode("utf-8"))


@pytest.fixture
def make_attempt(ec_credential):
    """Build a payout attempt for a recipient name."""

    def _make(given_name: str | None = "Jane", family_name: str | None = "Doe") -> PayoutAttempt:
        return PayoutAttempt(
            credential=ec_credential,
            recipient=RecipientContact(
                given_name=given_name,
                family_name=family_name,
                phone_number="+447700900123",
                email_address="jane.doe@example.com",
            ),
            payment_method=PaymentMethod(
                type=PaymentMethodType.DEBIT,
                display_name="Visa 1234",
                network="Visa",
            ),
        )

    return _make
