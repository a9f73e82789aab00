"""End-to-end payout attempts through real clients and a mocked transport.

Each test routes the token, card metadata and balances endpoints to an
in-process handler with `httpx.MockTransport`, so the full chain of
encoding, double decoding and decision rules runs without a network.
"""

import dataclasses
import json
from decimal import Decimal

import httpx
import pytest

from payout_authorization.config import Settings
from payout_authorization.handlers.orchestrator import PayoutOrchestrator, create_orchestrator
from payout_authorization.models import DecisionStatus, ErrorCode
from tests.helpers import (
    BALANCES_URL,
    CURRENCY_ACCOUNT_ID,
    METADATA_URL,
    TOKEN_URL,
    balance_record,
    balances_payload,
    eligibility_payload,
)


class FakeServices:
    """Records requests and answers them like the provider and merchant server."""

    def __init__(self, eligibility: str = "standard", available=15.00):
        self.eligibility = eligibility
        self.available = available
        self.requests: list[httpx.Request] = []

    def handler(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        url = str(request.url)

        if url == TOKEN_URL:
            body = json.loads(request.content)
            assert body["type"] == "applepay"
            return httpx.Response(201, json={"type": "applepay", "token": "tok_e2e_token"})

        if url == METADATA_URL:
            assert json.loads(request.content) == {"token": "tok_e2e_token"}
            return httpx.Response(200, json=eligibility_payload(self.eligibility))

        if url == BALANCES_URL:
            return httpx.Response(
                200,
                json=balances_payload(
                    [
                        {"currency_account_id": None},
                        balance_record(CURRENCY_ACCOUNT_ID, self.available),
                        balance_record("ca_other", 1_000_000),
                    ]
                ),
            )

        return httpx.Response(404)

    @property
    def paths(self) -> list[str]:
        return [str(request.url) for request in self.requests]


def _settings() -> Settings:
    settings = Settings()
    settings.checkout.token_url = TOKEN_URL
    settings.checkout.public_key = "pk_sbox_e2e"
    settings.checkout.currency_account_id = CURRENCY_ACCOUNT_ID
    settings.server.metadata_api_url = METADATA_URL
    settings.server.balances_api_url = BALANCES_URL
    settings.payout.amount = Decimal("9.99")
    return settings


async def _orchestrator(services: FakeServices) -> PayoutOrchestrator:
    orchestrator = create_orchestrator(_settings())
    transport = httpx.MockTransport(services.handler)
    for client in (
        orchestrator.token_client,
        orchestrator.metadata_client,
        orchestrator.balances_client,
    ):
        await client.http_client.aclose()
        client.http_client = httpx.AsyncClient(transport=transport)
    return orchestrator


@pytest.mark.e2e
@pytest.mark.asyncio
class TestPayoutFlow:
    """Full payout attempts."""

    async def test_scenario_a_accepts(self, make_attempt):
        services = FakeServices(eligibility="standard", available=15.00)

        async with await _orchestrator(services) as orchestrator:
            decision = await orchestrator.authorize(make_attempt("Jane", "Doe"))

        assert decision.status == DecisionStatus.SUCCESS
        assert decision.errors == ()
        assert services.paths == [TOKEN_URL, METADATA_URL, BALANCES_URL]

        token_request = services.requests[0]
        assert token_request.method == "POST"
        assert token_request.headers["Authorization"] == "pk_sbox_e2e"
        assert token_request.headers["Content-Type"] == "application/json"
        assert services.requests[2].method == "GET"

    async def test_scenario_b_rejects_unsupported_card(self, make_attempt):
        services = FakeServices(eligibility="ineligible")

        async with await _orchestrator(services) as orchestrator:
            decision = await orchestrator.authorize(make_attempt("Jane", "Doe"))

        assert decision.status == DecisionStatus.FAILURE
        assert decision.error_codes == [ErrorCode.CARD_UNSUPPORTED]
        assert BALANCES_URL not in services.paths

    async def test_scenario_c_reports_both_errors(self, make_attempt):
        services = FakeServices(eligibility="fast_funds", available=5.00)

        async with await _orchestrator(services) as orchestrator:
            decision = await orchestrator.authorize(make_attempt("J4ne", None))

        assert decision.status == DecisionStatus.FAILURE
        assert decision.error_codes == [
            ErrorCode.RECIPIENT_NAME_INVALID,
            ErrorCode.INSUFFICIENT_FUNDS,
        ]
        assert services.paths == [TOKEN_URL, METADATA_URL, BALANCES_URL]

    @pytest.mark.parametrize("available", [float("nan"), float("inf")])
    async def test_non_finite_balance_rejected(self, make_attempt, available):
        """A NaN or Infinity balance still resolves a FAILURE decision."""
        services = FakeServices(eligibility="standard", available=available)

        async with await _orchestrator(services) as orchestrator:
            decision = await orchestrator.authorize(make_attempt("Jane", "Doe"))

        assert decision.status == DecisionStatus.FAILURE
        assert decision.error_codes == [ErrorCode.BALANCE_UNAVAILABLE]
        assert orchestrator.decision.result() is decision

    async def test_rsa_credential_accepted(self, rsa_credential, make_attempt):
        services = FakeServices()
        attempt = dataclasses.replace(make_attempt(), credential=rsa_credential)

        async with await _orchestrator(services) as orchestrator:
            decision = await orchestrator.authorize(attempt)

        assert decision.status == DecisionStatus.SUCCESS
        header = json.loads(services.requests[0].content)["token_data"]["header"]
        assert "wrappedKey" in header
        assert "ephemeralPublicKey" not in header

    async def test_repeated_attempts_are_independent(self, make_attempt):
        decisions = []
        for _ in range(2):
            services = FakeServices(eligibility="fast_funds", available=5.00)
            async with await _orchestrator(services) as orchestrator:
                decisions.append(await orchestrator.authorize(make_attempt("J4ne", None)))
            assert len(services.requests) == 3

        assert decisions[0] == decisions[1]
