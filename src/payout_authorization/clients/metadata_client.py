"""Card metadata client for payout eligibility checks."""

import uuid

import httpx
import structlog

from payout_authorization.clients.envelope import decode_double_encoded
from payout_authorization.models.eligibility import EligibilityResult
from payout_authorization.models.exceptions import EligibilityError, ResponseBodyError

logger = structlog.get_logger(__name__)


class CardMetadataClient:
    """
    Client for the merchant server's card metadata endpoint.

    The merchant server looks up card metadata with the provider token and
    relays the provider response double-encoded in a `body` string. The
    `card_payouts` object maps payout scenarios (e.g.
    "domestic_money_transfer") to an eligibility value.
    """

    def __init__(self, metadata_api_url: str, timeout_seconds: float = 10.0):
        self.metadata_api_url = metadata_api_url
        self.timeout_seconds = timeout_seconds
        self.http_client = httpx.AsyncClient(timeout=timeout_seconds)

    async def close(self) -> None:
        """Close the HTTP client connection pool."""
        await self.http_client.aclose()

    async def check_eligibility(
        self,
        token: str,
        scenario: str,
        correlation_id: str | None = None,
    ) -> EligibilityResult:
        """
        Get the card's payout eligibility for a scenario.

        Args:
            token: Provider token from the token exchange
            scenario: Payout scenario key under `card_payouts`
            correlation_id: Request ID for log correlation (generated if omitted)

        Returns:
            EligibilityResult classifying the provider value

        Raises:
            EligibilityError: Transport failure, non-2xx status, or the
                `body.card_payouts.<scenario>` path is missing at any level
        """
        correlation_id = correlation_id or str(uuid.uuid4())

        logger.info(
            "payout_eligibility_request",
            url=self.metadata_api_url,
            scenario=scenario,
            correlation_id=correlation_id,
        )

        try:
            response = await self.http_client.post(
                self.metadata_api_url,
                headers={
                    "Content-Type": "application/json",
                    "X-Request-ID": correlation_id,
                },
                json={"token": token},
            )
        except httpx.TimeoutException as e:
            logger.error(
                "payout_eligibility_timeout",
                correlation_id=correlation_id,
                error=str(e),
            )
            raise EligibilityError("Card metadata request timeout") from e
        except httpx.RequestError as e:
            logger.error(
                "payout_eligibility_request_error",
                correlation_id=correlation_id,
                error=str(e),
            )
            raise EligibilityError(f"Card metadata request error: {e}") from e

        if not response.is_success:
            logger.warning(
                "payout_eligibility_rejected",
                status_code=response.status_code,
                correlation_id=correlation_id,
            )
            raise EligibilityError(
                f"Card metadata request failed (status: {response.status_code})"
            )

        try:
            body = decode_double_encoded(response.content)
        except ResponseBodyError as e:
            raise EligibilityError(f"Error processing card metadata response: {e}") from e

        card_payouts = body.get("card_payouts")
        if not isinstance(card_payouts, dict):
            raise EligibilityError("Card metadata response has no 'card_payouts'")

        value = card_payouts.get(scenario)
        if not isinstance(value, str):
            raise EligibilityError(f"No payout eligibility for scenario '{scenario}'")

        result = EligibilityResult.from_provider(value)
        logger.info(
            "payout_eligibility_received",
            scenario=scenario,
            eligibility=value,
            kind=result.kind.value,
            correlation_id=correlation_id,
        )
        return result

    async def __aenter__(self):
        return self

    async def __aexit__(self, exc_type, exc_val, exc_tb):
        await self.close()
