"""Authorization decision domain models."""

from dataclasses import dataclass
from decimal import Decimal
from enum import Enum


class DecisionStatus(str, Enum):
    """Final status of a payout authorization attempt."""

    SUCCESS = "SUCCESS"
    FAILURE = "FAILURE"


class ErrorCode(str, Enum):
    """User-facing reasons a payout attempt was rejected."""

    RECIPIENT_NAME_INVALID = "RECIPIENT_NAME_INVALID"
    CREDENTIAL_INVALID = "CREDENTIAL_INVALID"
    TOKEN_EXCHANGE_FAILED = "TOKEN_EXCHANGE_FAILED"
    ELIGIBILITY_UNAVAILABLE = "ELIGIBILITY_UNAVAILABLE"
    CARD_UNSUPPORTED = "CARD_UNSUPPORTED"
    BALANCE_UNAVAILABLE = "BALANCE_UNAVAILABLE"
    INSUFFICIENT_FUNDS = "INSUFFICIENT_FUNDS"


@dataclass(frozen=True)
class DecisionError:
    """
    Structured error attached to a FAILURE decision.

    Messages are safe to show to the recipient. Diagnostic detail
    (raw payloads, tokens) only goes to the logs.
    """

    code: ErrorCode
    message: str
    contact_field: str | None = None


@dataclass(frozen=True)
class BalanceRecord:
    """Available balance of one funding currency account."""

    currency_account_id: str
    available: Decimal


@dataclass(frozen=True)
class AuthorizationDecision:
    """
    Terminal result of one payout authorization attempt.

    A SUCCESS decision means the payout may be requested from the provider.
    A FAILURE decision carries the errors that caused it, in the order
    they were encountered.
    """

    status: DecisionStatus
    errors: tuple[DecisionError, ...] = ()

    def __post_init__(self) -> None:
        """Validate that errors are consistent with the status."""
        if self.status == DecisionStatus.SUCCESS and self.errors:
            raise ValueError("SUCCESS decision cannot carry errors")
        if self.status == DecisionStatus.FAILURE and not self.errors:
            raise ValueError("FAILURE decision requires at least one error")

    @property
    def succeeded(self) -> bool:
        return self.status == DecisionStatus.SUCCESS

    @property
    def error_codes(self) -> list[ErrorCode]:
        return [error.code for error in self.errors]
