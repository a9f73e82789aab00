"""Local business rules that run without I/O."""

from payout_authorization.domain.recipient_validator import (
    ValidationOutcome,
    validate_recipient_name,
)

__all__ = ["ValidationOutcome", "validate_recipient_name"]
