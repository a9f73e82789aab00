"""Recipient and payout attempt models."""

from dataclasses import dataclass, field
from enum import Enum

from payout_authorization.models.credential import PaymentCredential


class PaymentMethodType(str, Enum):
    """Card type reported by the wallet for the recipient's card."""

    UNKNOWN = "unknown"
    DEBIT = "debit"
    CREDIT = "credit"
    PREPAID = "prepaid"
    STORE = "store"
    EMONEY = "eMoney"

    @classmethod
    def from_wallet(cls, value: str | None) -> "PaymentMethodType":
        """Map a wallet card type, falling back to UNKNOWN for new values."""
        try:
            return cls(value)
        except ValueError:
            return cls.UNKNOWN


@dataclass(frozen=True)
class PaymentMethod:
    """Non-sensitive description of the card the recipient selected."""

    type: PaymentMethodType = PaymentMethodType.UNKNOWN
    display_name: str | None = None
    network: str | None = None

    def to_log_dict(self) -> dict[str, str | None]:
        return {
            "display_name": self.display_name,
            "network": self.network,
            "type": self.type.value,
        }


@dataclass(frozen=True)
class RecipientContact:
    """Contact details the wallet collected from the recipient."""

    given_name: str | None = None
    family_name: str | None = None
    phone_number: str | None = None
    email_address: str | None = None

    @property
    def full_name(self) -> str | None:
        """
        Name as validated before a payout.

        Given and family names joined by a space. A missing given name
        still yields a leading space when a family name exists.
        """
        if self.family_name is not None:
            return f"{self.given_name or ''} {self.family_name}"
        return self.given_name


@dataclass(frozen=True)
class PayoutAttempt:
    """
    Everything the wallet hands over for one payout authorization attempt.

    Created fresh per attempt and discarded once the decision is made.
    """

    credential: PaymentCredential
    recipient: RecipientContact = field(default_factory=RecipientContact)
    payment_method: PaymentMethod = field(default_factory=PaymentMethod)
