"""Provider token client for exchanging wallet credentials."""

import json
import uuid

import httpx
import structlog

from payout_authorization.models.credential import DecryptedCredentialEnvelope
from payout_authorization.models.exceptions import TokenError

logger = structlog.get_logger(__name__)

WALLET_TOKEN_TYPE = "applepay"


class CheckoutTokenClient:
    """
    Client for the provider's token exchange endpoint.

    Exchanges a wallet payment credential for a short-lived provider token
    (format: tok_...). The endpoint is authenticated with the merchant's
    public key, so this call can be made without going through the
    merchant server.
    """

    def __init__(
        self,
        token_url: str,
        public_key: str,
        timeout_seconds: float = 10.0,
    ):
        """
        Initialize the token client.

        Args:
            token_url: Token exchange endpoint (e.g., "https://api.sandbox.checkout.com/tokens")
            public_key: Provider public API key for the Authorization header
            timeout_seconds: Request timeout in seconds (default: 10.0)
        """
        self.token_url = token_url
        self.public_key = public_key
        self.timeout_seconds = timeout_seconds
        self.http_client = httpx.AsyncClient(timeout=timeout_seconds)

        logger.info(
            "token_client_initialized",
            token_url=token_url,
            timeout_seconds=timeout_seconds,
        )

    async def close(self) -> None:
        """Close the HTTP client connection pool."""
        await self.http_client.aclose()

    async def exchange(
        self,
        envelope: DecryptedCredentialEnvelope,
        correlation_id: str | None = None,
    ) -> str:
        """
        Exchange a decoded wallet credential for a provider token.

        Args:
            envelope: Decoded wallet credential
            correlation_id: Request ID for log correlation (generated if omitted)

        Returns:
            Provider token string

        Raises:
            TokenError: Transport failure, non-2xx status, unparseable body,
                or no `token` in the response
        """
        correlation_id = correlation_id or str(uuid.uuid4())
        body = {
            "type": WALLET_TOKEN_TYPE,
            "token_data": envelope.to_token_data(),
        }

        logger.info(
            "token_exchange_request",
            url=self.token_url,
            credential_version=envelope.version,
            transaction_id=envelope.header.transaction_id,
            correlation_id=correlation_id,
        )

        try:
            response = await self.http_client.post(
                self.token_url,
                headers={
                    "Content-Type": "application/json",
                    "Authorization": self.public_key,
                    "X-Request-ID": correlation_id,
                },
                content=json.dumps(body).encode("utf-8"),
            )
        except httpx.TimeoutException as e:
            logger.error(
                "token_exchange_timeout",
                correlation_id=correlation_id,
                error=str(e),
            )
            raise TokenError("Token exchange timeout") from e
        except httpx.RequestError as e:
            logger.error(
                "token_exchange_request_error",
                correlation_id=correlation_id,
                error=str(e),
            )
            raise TokenError(f"Token exchange request error: {e}") from e

        if not response.is_success:
            logger.warning(
                "token_exchange_rejected",
                status_code=response.status_code,
                correlation_id=correlation_id,
            )
            raise TokenError(f"Token exchange failed (status: {response.status_code})")

        try:
            payload = json.loads(response.content)
        except (UnicodeDecodeError, json.JSONDecodeError) as e:
            raise TokenError(f"Token exchange response is not valid JSON: {e}") from e

        token = payload.get("token") if isinstance(payload, dict) else None
        if not isinstance(token, str):
            logger.warning(
                "token_missing_from_response",
                correlation_id=correlation_id,
            )
            raise TokenError("Token not found in response")

        logger.info(
            "token_exchange_success",
            token=token,
            correlation_id=correlation_id,
        )
        return token

    async def __aenter__(self):
        """Async context manager entry."""
        return self

    async def __aexit__(self, exc_type, exc_val, exc_tb):
        """Async context manager exit."""
        await self.close()
