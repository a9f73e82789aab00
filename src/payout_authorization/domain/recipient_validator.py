"""Local format validation of recipient details."""

import re
from dataclasses import dataclass

from payout_authorization.models.exceptions import ValidationError

# Letters, spaces, apostrophes and hyphens only, over the whole name.
RECIPIENT_NAME_PATTERN = re.compile(r"[a-zA-Z '-]+")


@dataclass(frozen=True)
class ValidationOutcome:
    """Result of validating one recipient field."""

    valid: bool
    contact_field: str = "name"

    def raise_for_invalid(self) -> None:
        """Raise ValidationError if the field was invalid."""
        if not self.valid:
            raise ValidationError(f"Recipient {self.contact_field} not valid")


def validate_recipient_name(name: str | None) -> ValidationOutcome:
    """
    Validate a recipient's full name before any network call.

    A partial match is not enough: the pattern must cover the entire name.
    An absent or empty name is invalid.
    """
    if name is None:
        return ValidationOutcome(valid=False)
    return ValidationOutcome(valid=RECIPIENT_NAME_PATTERN.fullmatch(name) is not None)
