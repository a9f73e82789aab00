"""Builders for sample credentials and service responses."""

import json
from typing import Any

import httpx

TOKEN_URL = "https://api.sandbox.checkout.com/tokens"
METADATA_URL = "https://merchant.example.com/card-metadata"
BALANCES_URL = "https://merchant.example.com/balances"
CURRENCY_ACCOUNT_ID = "ca_funding_gbp"


def ec_credential_dict() -> dict[str, Any]:
    return {
        "version": "EC_v1",
        "data": "dGhpcyBpcyBlbmNyeXB0ZWQgY2FyZCBkYXRh",
        "signature": "c2lnbmF0dXJlLWJ5dGVz",
        "header": {
            "ephemeralPublicKey": "MFkwEwYHKoZIzj0CAQYIKoZIzj0DAQcDQgAE",
            "publicKeyHash": "tF0z3zbiX8RHrGxg0HDmG5gvk7w=",
            "transactionId": "2686f5297f123ec7fd9d31074d43d201953ca75f098890375f13aed2737d92f2",
        },
    }


def rsa_credential_dict() -> dict[str, Any]:
    return {
        "version": "RSA_v1",
        "data": "cnNhIGVuY3J5cHRlZCBjYXJkIGRhdGE=",
        "signature": "cnNhLXNpZ25hdHVyZQ==",
        "header": {
            "wrappedKey": "d3JhcHBlZC1zeW1tZXRyaWMta2V5",
            "publicKeyHash": "LbsUwAT6w1JV9tFXocU813TCHks=",
            "transactionId": "aa11bb22cc33",
        },
    }


def double_encoded(payload: dict[str, Any], status_code: int = 200) -> dict[str, Any]:
    """Wrap a payload the way the merchant server relays provider responses."""
    return {"statusCode": status_code, "body": json.dumps(payload)}


def json_response(status_code: int, payload: Any) -> httpx.Response:
    return httpx.Response(status_code, json=payload)


def eligibility_payload(value: str, scenario: str = "domestic_money_transfer") -> dict[str, Any]:
    return double_encoded(
        {
            "bin": "453958",
            "scheme": "visa",
            "card_type": "debit",
            "card_payouts": {scenario: value, "gaming": "not_supported"},
        }
    )


def balance_record(account_id: str, available: Any) -> dict[str, Any]:
    return {
        "descriptor": "GBP funding",
        "holding_currency": "GBP",
        "currency_account_id": account_id,
        "balances": {"pending": 0, "available": available, "payable": 0, "collateral": 0},
    }


def balances_payload(records: list[Any]) -> dict[str, Any]:
    return double_encoded({"data": records})
