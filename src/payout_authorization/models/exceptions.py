"""Custom exceptions for the Payout Authorization service."""


class PayoutError(Exception):
    """Base exception for payout authorization errors."""

    pass


class ValidationError(PayoutError):
    """
    Raised when recipient details fail local format validation.

    Never raised by the orchestrator itself; it records the failure as a
    decision error instead. Available to callers that validate eagerly.
    """

    pass


class DecodeError(PayoutError):
    """
    Raised when the wallet payment credential cannot be decoded into a
    DecryptedCredentialEnvelope.

    This is a TERMINAL error. No fallback decoding is attempted.
    """

    pass


class ResponseBodyError(PayoutError):
    """
    Raised when a service response fails either stage of the
    double-encoded body decode (outer JSON, then the JSON string in `body`).

    The checkers wrap this in their own error type.
    """

    pass


class TokenError(PayoutError):
    """
    Raised when the credential cannot be exchanged for a provider token.

    Examples:
    - Network timeout or connection error
    - Non-2xx response from the token endpoint
    - Response body is not JSON or has no `token` string
    """

    pass


class EligibilityError(PayoutError):
    """Raised when the card payout eligibility cannot be determined."""

    pass


class BalanceError(PayoutError):
    """
    Raised when the funding account balance cannot be determined.

    Examples:
    - No record matches the requested currency account
    - The matching record has no numeric `available` balance
    """

    pass


class InvalidStateTransition(PayoutError):
    """Raised when an attempt moves between states out of order."""

    pass


class DecisionAlreadyMade(PayoutError):
    """Raised when an attempt's decision is resolved a second time."""

    pass
