"""Currency account balances client."""

import uuid
from decimal import Decimal
from typing import Any

import httpx
import structlog

from payout_authorization.clients.envelope import decode_double_encoded
from payout_authorization.models.authorization import BalanceRecord
from payout_authorization.models.exceptions import BalanceError, ResponseBodyError

logger = structlog.get_logger(__name__)


def _parse_available(record: dict[str, Any]) -> Decimal | None:
    """Return `balances.available` as a Decimal, or None if absent or not a finite number."""
    balances = record.get("balances")
    if not isinstance(balances, dict):
        return None
    available = balances.get("available")
    # bool is an int subclass but never a balance
    if isinstance(available, bool) or not isinstance(available, (int, float)):
        return None
    value = Decimal(str(available))
    # json.loads accepts NaN and Infinity
    if not value.is_finite():
        return None
    return value


def find_balance(records: list[Any], currency_account_id: str) -> BalanceRecord:
    """
    Scan account records for the requested currency account.

    The first matching record with a numeric available balance wins.
    Malformed records, including a malformed match, do not stop the scan.

    Raises:
        BalanceError: No usable record matches the account id
    """
    malformed_match = False

    for index, record in enumerate(records):
        account_id = record.get("currency_account_id") if isinstance(record, dict) else None
        if not isinstance(account_id, str):
            logger.warning("balance_record_missing_account_id", index=index)
            continue

        if account_id != currency_account_id:
            continue

        available = _parse_available(record)
        if available is None:
            logger.warning(
                "balance_record_invalid_available",
                currency_account_id=currency_account_id,
                index=index,
            )
            malformed_match = True
            continue

        return BalanceRecord(currency_account_id=account_id, available=available)

    if malformed_match:
        raise BalanceError(
            f"Missing or invalid 'available' balance for currency account: {currency_account_id}"
        )
    raise BalanceError(f"No account found with currency_account_id: {currency_account_id}")


class BalancesClient:
    """
    Client for the merchant server's currency account balances endpoint.

    The response is double-encoded like the card metadata response; its
    payload's `data` list holds one record per currency account.
    """

    def __init__(self, balances_api_url: str, timeout_seconds: float = 10.0):
        self.balances_api_url = balances_api_url
        self.timeout_seconds = timeout_seconds
        self.http_client = httpx.AsyncClient(timeout=timeout_seconds)

    async def close(self) -> None:
        """Close the HTTP client connection pool."""
        await self.http_client.aclose()

    async def get_balance(
        self,
        currency_account_id: str,
        correlation_id: str | None = None,
    ) -> Decimal:
        """
        Get the available balance of a funding currency account.

        Args:
            currency_account_id: Funding currency account (ca_...)
            correlation_id: Request ID for log correlation (generated if omitted)

        Returns:
            Available balance

        Raises:
            BalanceError: Transport failure, non-2xx status, undecodable
                response, or no usable record for the account
        """
        correlation_id = correlation_id or str(uuid.uuid4())

        logger.info(
            "balance_request",
            url=self.balances_api_url,
            currency_account_id=currency_account_id,
            correlation_id=correlation_id,
        )

        try:
            response = await self.http_client.get(
                self.balances_api_url,
                headers={
                    "Content-Type": "application/json",
                    "X-Request-ID": correlation_id,
                },
            )
        except httpx.TimeoutException as e:
            logger.error(
                "balance_request_timeout",
                correlation_id=correlation_id,
                error=str(e),
            )
            raise BalanceError("Balances request timeout") from e
        except httpx.RequestError as e:
            logger.error(
                "balance_request_error",
                correlation_id=correlation_id,
                error=str(e),
            )
            raise BalanceError(f"Balances request error: {e}") from e

        if not response.is_success:
            logger.warning(
                "balance_request_rejected",
                status_code=response.status_code,
                correlation_id=correlation_id,
            )
            raise BalanceError(f"Balances request failed (status: {response.status_code})")

        try:
            body = decode_double_encoded(response.content)
        except ResponseBodyError as e:
            raise BalanceError(f"Error processing balances response: {e}") from e

        records = body.get("data")
        if not isinstance(records, list):
            raise BalanceError("Balances response has no 'data' list")

        record = find_balance(records, currency_account_id)

        logger.info(
            "balance_received",
            currency_account_id=currency_account_id,
            available=str(record.available),
            correlation_id=correlation_id,
        )
        return record.available

    async def __aenter__(self):
        return self

    async def __aexit__(self, exc_type, exc_val, exc_tb):
        await self.close()
